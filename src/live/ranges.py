"""Editor positions and the ranges a snippet is evaluated from."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class EditorPosition:
    """0-based line and character position in the editor buffer."""

    line: int
    ch: int


@dataclass(frozen=True)
class EvalRange:
    start: EditorPosition
    end: EditorPosition

    def contains_lines(self, from_line: int, to_line: int) -> bool:
        return from_line >= self.start.line and to_line <= self.end.line


def line_range(line: int) -> EvalRange:
    """Range of a single line, ending at the start of the next one."""
    return EvalRange(EditorPosition(line, 0), EditorPosition(line + 1, 0))


def document_range(line_count: int) -> EvalRange:
    return EvalRange(EditorPosition(0, 0), EditorPosition(line_count, 0))


def block_range(lines: Sequence[str], cursor_line: int) -> EvalRange:
    """Contiguous non-blank lines around `cursor_line`.

    The block stops at blank lines or the document edges; the end is
    column 0 of the line after the block.
    """
    start = cursor_line
    while start > 0 and lines[start - 1].strip():
        start -= 1

    end = cursor_line
    while end < len(lines) - 1 and lines[end + 1].strip():
        end += 1

    return EvalRange(EditorPosition(start, 0), EditorPosition(end + 1, 0))


def end_position(start: EditorPosition, text: str) -> EditorPosition:
    """Position just past `text` when it is inserted at `start`."""
    lines = text.split("\n")
    if len(lines) == 1:
        return EditorPosition(start.line, start.ch + len(text))
    return EditorPosition(start.line + len(lines) - 1, len(lines[-1]))


__all__ = [
    "EditorPosition",
    "EvalRange",
    "block_range",
    "document_range",
    "end_position",
    "line_range",
]
