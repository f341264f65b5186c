"""Boundaries to the host editor, the language runtime and the event loop."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from live.ranges import EditorPosition
from locate.params import ParameterRegistry


class Evaluator(Protocol):
    """Runs snippet text in the host runtime; may raise."""

    def evaluate(self, source_text: str) -> None: ...


class EditorBuffer(Protocol):
    """Host text buffer.

    Edits made between `begin()` and `end()` form one undo step and one
    coalesced change notification.
    """

    def get_range(self, start: EditorPosition, end: EditorPosition) -> str: ...

    def replace_range(
        self, text: str, start: EditorPosition, end: EditorPosition
    ) -> None: ...

    def begin(self) -> None: ...

    def end(self) -> None: ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Cooperative scheduling; an `asyncio` event loop satisfies this."""

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle: ...

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> Any: ...


__all__ = [
    "EditorBuffer",
    "Evaluator",
    "ParameterRegistry",
    "Scheduler",
    "TimerHandle",
]
