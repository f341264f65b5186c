"""Resolve which call and which argument position owns a value."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from parse.nodes import (
    CallExpression,
    Identifier,
    MemberExpression,
    SyntaxNode,
    UnaryExpression,
)

FALLBACK_CALL_NAME = "unknown"

_CALL_PATTERN = re.compile(r"\.?([a-zA-Z]+)\s*\(")


@dataclass(frozen=True)
class CallContext:
    """Owning call of a value and the value's argument position."""

    call_name: str
    anchor_column: int
    parameter_index: int
    strategy: str


def _callee_name(call: CallExpression) -> tuple[str, int] | None:
    match call.callee:
        case Identifier(name=name, span=span):
            return name, span.start_col
        case MemberExpression(property=name, property_span=span):
            return name, span.start_col
        case _:
            return None


def _argument_index(call: CallExpression, node: SyntaxNode) -> int | None:
    for index, argument in enumerate(call.arguments):
        if argument is node:
            return index
        if isinstance(argument, UnaryExpression) and argument.argument is node:
            return index
    return None


def resolve_structural(
    node: SyntaxNode, parents: Sequence[SyntaxNode]
) -> CallContext | None:
    """Find the innermost call whose argument list contains `node`.

    `outer(inner(10))` resolves `10` to `inner`; in `a(10).b(1)` each literal
    resolves to its own call even though `a(...)` is nested inside `b`'s
    callee. Returns None when no call owns the node or the owning call has
    no plain name (e.g. `f()(1)`).
    """
    for parent in reversed(parents):
        if not isinstance(parent, CallExpression):
            continue
        index = _argument_index(parent, node)
        if index is None:
            continue
        named = _callee_name(parent)
        if named is None:
            return None
        name, anchor = named
        return CallContext(
            call_name=name,
            anchor_column=anchor,
            parameter_index=index,
            strategy="structural",
        )
    return None


def resolve_textual(line_text: str, column: int) -> CallContext:
    """Approximate the owning call from the text before `column`.

    Takes the last `name(` or `.name(` on the line and counts the commas
    after its opening parenthesis.
    """
    before = line_text[:column]
    matches = list(_CALL_PATTERN.finditer(before))
    if not matches:
        return CallContext(
            call_name=FALLBACK_CALL_NAME,
            anchor_column=column,
            parameter_index=0,
            strategy="textual",
        )

    last = matches[-1]
    return CallContext(
        call_name=last.group(1),
        anchor_column=last.start(1),
        parameter_index=before[last.end() :].count(","),
        strategy="textual",
    )


__all__ = [
    "FALLBACK_CALL_NAME",
    "CallContext",
    "resolve_structural",
    "resolve_textual",
]
