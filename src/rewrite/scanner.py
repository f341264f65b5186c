"""Lexical scan for the text spans of editable values.

The scan runs over the raw snippet text, independent of the syntax tree, and
numbers spans in document order so the indices line up with the ordinals
produced by discovery:

- numeric literals, including a leading unary minus when the `-` sits where
  an operand is expected (`osc(-10)`, but not `a - 10`);
- identifiers naming a source/output slot, unless used as a property
  (`x.o0`).

Comments, string and regular-expression literals, template text outside
`${...}` and loader-directive lines never produce spans.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass

from models.references import ReferenceNames
from models.values import ValueKind

_NUMBER_RE = re.compile(
    r"0[xX][0-9a-fA-F_]+n?"
    r"|0[oO][0-7_]+n?"
    r"|0[bB][01_]+n?"
    r"|(?:\d[\d_]*(?:\.[\d_]*)?|\.\d[\d_]*)(?:[eE][+-]?\d[\d_]*)?n?"
)
_IDENTIFIER_RE = re.compile(r"(?:[^\W\d]|\$)[\w$]*")

# After these words an expression starts, so `-1` and `/re/` are operands.
_EXPRESSION_KEYWORDS = frozenset(
    {
        "await",
        "case",
        "delete",
        "do",
        "else",
        "in",
        "instanceof",
        "new",
        "of",
        "return",
        "throw",
        "typeof",
        "void",
        "yield",
    }
)

_OPERAND = "operand"
_OPERATOR = "operator"


@dataclass(frozen=True)
class ValueSpan:
    """Character span `[start, end)` of one editable value in the text."""

    index: int
    start: int
    end: int
    text: str
    kind: ValueKind


class _ValueLexer:
    def __init__(
        self,
        text: str,
        names: ReferenceNames,
        directive_keywords: Sequence[str],
    ) -> None:
        self.text = text
        self.names = names
        self.pos = 0
        self.prev: str | None = None
        self.after_dot = False
        self.brace_depth = 0
        self.template_depths: list[int] = []
        self.spans: list[ValueSpan] = []

        self._line_starts: list[int] = []
        self._skipped_lines: set[int] = set()
        offset = 0
        for line_no, line in enumerate(text.split("\n")):
            self._line_starts.append(offset)
            if any(keyword in line for keyword in directive_keywords):
                self._skipped_lines.add(line_no)
            offset += len(line) + 1

    def _on_directive_line(self, offset: int) -> bool:
        return bisect_right(self._line_starts, offset) - 1 in self._skipped_lines

    def _emit(self, start: int, end: int, kind: ValueKind) -> None:
        if self._on_directive_line(start):
            return
        self.spans.append(
            ValueSpan(
                index=len(self.spans),
                start=start,
                end=end,
                text=self.text[start:end],
                kind=kind,
            )
        )

    def _number_at(self, offset: int) -> re.Match[str] | None:
        ch = self.text[offset : offset + 1]
        if ch.isdigit() or (ch == "." and self.text[offset + 1 : offset + 2].isdigit()):
            return _NUMBER_RE.match(self.text, offset)
        return None

    def _number_after(self, offset: int) -> re.Match[str] | None:
        """Number following a `-`, past any whitespace and comments."""
        text = self.text
        while offset < len(text):
            if text[offset].isspace():
                offset += 1
            elif text.startswith("/*", offset):
                close = text.find("*/", offset + 2)
                if close == -1:
                    return None
                offset = close + 2
            elif text.startswith("//", offset):
                newline = text.find("\n", offset)
                if newline == -1:
                    return None
                offset = newline
            else:
                break
        return self._number_at(offset)

    def _skip_line_comment(self) -> None:
        newline = self.text.find("\n", self.pos)
        self.pos = len(self.text) if newline == -1 else newline

    def _skip_block_comment(self) -> None:
        close = self.text.find("*/", self.pos + 2)
        self.pos = len(self.text) if close == -1 else close + 2

    def _skip_string(self, quote: str) -> None:
        self.pos += 1
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == "\\":
                self.pos += 2
                continue
            self.pos += 1
            if ch == quote or ch == "\n":
                break
        self.prev = _OPERAND

    def _scan_template(self) -> None:
        """Consume template text up to the closing backtick or a `${`."""
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == "\\":
                self.pos += 2
                continue
            if ch == "`":
                self.pos += 1
                self.prev = _OPERAND
                return
            if self.text.startswith("${", self.pos):
                self.pos += 2
                self.template_depths.append(self.brace_depth)
                self.prev = _OPERATOR
                return
            self.pos += 1

    def _skip_regex(self) -> bool:
        start = self.pos
        self.pos += 1
        in_class = False
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == "\n":
                break
            if ch == "\\":
                self.pos += 2
                continue
            if ch == "[":
                in_class = True
            elif ch == "]":
                in_class = False
            elif ch == "/" and not in_class:
                self.pos += 1
                flags = _IDENTIFIER_RE.match(self.text, self.pos)
                if flags is not None:
                    self.pos = flags.end()
                self.prev = _OPERAND
                return True
            self.pos += 1

        self.pos = start
        return False

    def _step(self) -> None:
        text = self.text
        ch = text[self.pos]

        if ch.isspace():
            self.pos += 1
            return

        if text.startswith("//", self.pos):
            self._skip_line_comment()
            return
        if text.startswith("/*", self.pos):
            self._skip_block_comment()
            return

        after_dot = self.after_dot
        self.after_dot = False

        if ch in "'\"":
            self._skip_string(ch)
            return
        if ch == "`":
            self.pos += 1
            self._scan_template()
            return
        if ch == "/" and self.prev != _OPERAND and self._skip_regex():
            return

        number = self._number_at(self.pos)
        if number is not None:
            self._emit(number.start(), number.end(), ValueKind.NUMBER)
            self.pos = number.end()
            self.prev = _OPERAND
            return

        if text.startswith(("++", "--"), self.pos):
            # Postfix after an operand leaves an operand; prefix expects one.
            self.pos += 2
            if self.prev != _OPERAND:
                self.prev = _OPERATOR
            return

        if ch == "-" and self.prev != _OPERAND:
            number = self._number_after(self.pos + 1)
            if number is not None:
                self._emit(self.pos, number.end(), ValueKind.NUMBER)
                self.pos = number.end()
                self.prev = _OPERAND
                return

        identifier = _IDENTIFIER_RE.match(text, self.pos)
        if identifier is not None:
            name = identifier.group()
            kind = None if after_dot else self.names.kind_of(name)
            if kind is not None:
                self._emit(identifier.start(), identifier.end(), kind)
            self.pos = identifier.end()
            self.prev = _OPERATOR if name in _EXPRESSION_KEYWORDS else _OPERAND
            return

        if text.startswith("...", self.pos):
            self.pos += 3
            self.prev = _OPERATOR
            return

        self.pos += 1
        if ch == ".":
            self.after_dot = True
            self.prev = _OPERATOR
        elif ch == "{":
            self.brace_depth += 1
            self.prev = _OPERATOR
        elif ch == "}":
            if self.template_depths and self.template_depths[-1] == self.brace_depth:
                self.template_depths.pop()
                self._scan_template()
                return
            self.brace_depth -= 1
            self.prev = _OPERAND
        elif ch in ")]":
            self.prev = _OPERAND
        else:
            self.prev = _OPERATOR

    def run(self) -> list[ValueSpan]:
        while self.pos < len(self.text):
            self._step()
        return self.spans


def scan_value_spans(
    text: str,
    names: ReferenceNames,
    directive_keywords: Sequence[str] = (),
) -> list[ValueSpan]:
    """Return the spans of all editable values in `text`, in document order."""
    return _ValueLexer(text, names, directive_keywords).run()


__all__ = ["ValueSpan", "scan_value_spans"]
