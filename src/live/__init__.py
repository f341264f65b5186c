"""Live preview and debounced commit of value edits."""

from live.orchestrator import UpdateOrchestrator, UpdateState
from live.ranges import (
    EditorPosition,
    EvalRange,
    block_range,
    document_range,
    end_position,
    line_range,
)

__all__ = [
    "EditorPosition",
    "EvalRange",
    "UpdateOrchestrator",
    "UpdateState",
    "block_range",
    "document_range",
    "end_position",
    "line_range",
]
