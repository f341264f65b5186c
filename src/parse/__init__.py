"""Parsing utilities for chain-of-calls snippets."""

from parse.nodes import (
    CallExpression,
    Identifier,
    Literal,
    MemberExpression,
    Opaque,
    Program,
    Span,
    SyntaxNode,
    UnaryExpression,
)
from parse.treesitter_js import parse_number_literal, parse_program

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
    "parse_number_literal",
    "parse_program",
]
