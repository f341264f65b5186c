"""Closed set of syntax node variants consumed by discovery."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """Source span of a node.

    Lines and columns are 0-based; columns and offsets count characters,
    not bytes.
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    start_offset: int
    end_offset: int

    @property
    def length(self) -> int:
        return self.end_offset - self.start_offset


@dataclass(frozen=True, eq=False)
class Literal:
    span: Span
    value: int | float | str | bool | None
    raw: str

    @property
    def is_number(self) -> bool:
        return isinstance(self.value, (int, float)) and not isinstance(
            self.value, bool
        )

    def children(self) -> tuple[SyntaxNode, ...]:
        return ()


@dataclass(frozen=True, eq=False)
class Identifier:
    span: Span
    name: str

    def children(self) -> tuple[SyntaxNode, ...]:
        return ()


@dataclass(frozen=True, eq=False)
class MemberExpression:
    """`object.property`; the property is a name, not an identifier node."""

    span: Span
    object: SyntaxNode
    property: str
    property_span: Span

    def children(self) -> tuple[SyntaxNode, ...]:
        return (self.object,)


@dataclass(frozen=True, eq=False)
class CallExpression:
    span: Span
    callee: SyntaxNode
    arguments: tuple[SyntaxNode, ...]

    def children(self) -> tuple[SyntaxNode, ...]:
        return (self.callee, *self.arguments)


@dataclass(frozen=True, eq=False)
class UnaryExpression:
    span: Span
    operator: str
    argument: SyntaxNode

    def children(self) -> tuple[SyntaxNode, ...]:
        return (self.argument,)


@dataclass(frozen=True, eq=False)
class Opaque:
    """Any node kind discovery does not inspect; only its children matter."""

    span: Span
    kind: str
    nodes: tuple[SyntaxNode, ...]

    def children(self) -> tuple[SyntaxNode, ...]:
        return self.nodes


@dataclass(frozen=True, eq=False)
class Program:
    span: Span
    body: tuple[SyntaxNode, ...]

    def children(self) -> tuple[SyntaxNode, ...]:
        return self.body


SyntaxNode = (
    Literal
    | Identifier
    | MemberExpression
    | CallExpression
    | UnaryExpression
    | Opaque
    | Program
)


__all__ = [
    "CallExpression",
    "Identifier",
    "Literal",
    "MemberExpression",
    "Opaque",
    "Program",
    "Span",
    "SyntaxNode",
    "UnaryExpression",
]
