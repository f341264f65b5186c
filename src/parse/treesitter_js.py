"""Tree-sitter based parsing of JavaScript expression snippets."""

from __future__ import annotations

from tree_sitter import Language, Node, Parser
from tree_sitter_javascript import language as get_javascript_language

from errors import ParseFailure
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

_PARSER: Parser | None = None

_SKIPPED_TYPES = frozenset({"comment", "html_comment"})

_KEYWORD_LITERALS: dict[str, bool | None] = {
    "true": True,
    "false": False,
    "null": None,
}


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with the JavaScript grammar."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_javascript_language())
        _PARSER = Parser(lang)

    return _PARSER


def parse_number_literal(raw: str) -> int | float:
    """Convert JavaScript numeric literal text to a Python number.

    Examples:
        >>> parse_number_literal("0x1F")
        31
        >>> parse_number_literal("1_000")
        1000
        >>> parse_number_literal(".5")
        0.5
    """
    text = raw.replace("_", "")
    if text.endswith("n"):
        text = text[:-1]

    prefix = text[:2].lower()
    if prefix in ("0x", "0o", "0b"):
        return int(text, 0)
    if len(text) > 1 and text[0] == "0" and text.isdigit():
        # Legacy octal form (017) unless a digit rules it out.
        if all(ch in "01234567" for ch in text):
            return int(text, 8)
        return int(text, 10)
    if any(ch in text for ch in ".eE"):
        return float(text)
    return int(text)


class _SourceIndex:
    """Maps tree-sitter byte positions to character positions."""

    def __init__(self, source_bytes: bytes) -> None:
        self._source_bytes = source_bytes
        self._ascii = len(source_bytes) == len(
            source_bytes.decode("utf8", errors="ignore")
        )

    def char_offset(self, byte_offset: int) -> int:
        if self._ascii:
            return byte_offset
        return len(self._source_bytes[:byte_offset].decode("utf8", errors="ignore"))

    def char_column(self, byte_offset: int, byte_column: int) -> int:
        if self._ascii:
            return byte_column
        line_start = byte_offset - byte_column
        return len(
            self._source_bytes[line_start:byte_offset].decode("utf8", errors="ignore")
        )

    def span(self, node: Node) -> Span:
        return Span(
            start_line=node.start_point[0],
            start_col=self.char_column(node.start_byte, node.start_point[1]),
            end_line=node.end_point[0],
            end_col=self.char_column(node.end_byte, node.end_point[1]),
            start_offset=self.char_offset(node.start_byte),
            end_offset=self.char_offset(node.end_byte),
        )

    def text(self, node: Node) -> str:
        return self._source_bytes[node.start_byte : node.end_byte].decode(
            "utf8", errors="ignore"
        )


def _convert_children(node: Node, index: _SourceIndex) -> tuple[SyntaxNode, ...]:
    return tuple(
        _convert(child, index)
        for child in node.named_children
        if child.type not in _SKIPPED_TYPES
    )


def _convert_call(node: Node, index: _SourceIndex) -> SyntaxNode:
    callee_node = node.child_by_field_name("function")
    arguments_node = node.child_by_field_name("arguments")
    if callee_node is None or arguments_node is None:
        return Opaque(index.span(node), node.type, _convert_children(node, index))

    if arguments_node.type != "arguments":
        # Tagged template call: fn`...`
        return Opaque(index.span(node), node.type, _convert_children(node, index))

    return CallExpression(
        span=index.span(node),
        callee=_convert(callee_node, index),
        arguments=_convert_children(arguments_node, index),
    )


def _convert_member(node: Node, index: _SourceIndex) -> SyntaxNode:
    object_node = node.child_by_field_name("object")
    property_node = node.child_by_field_name("property")
    if object_node is None or property_node is None:
        return Opaque(index.span(node), node.type, _convert_children(node, index))

    return MemberExpression(
        span=index.span(node),
        object=_convert(object_node, index),
        property=index.text(property_node),
        property_span=index.span(property_node),
    )


def _convert_unary(node: Node, index: _SourceIndex) -> SyntaxNode:
    operator_node = node.child_by_field_name("operator")
    argument_node = node.child_by_field_name("argument")
    if operator_node is None or argument_node is None:
        return Opaque(index.span(node), node.type, _convert_children(node, index))

    return UnaryExpression(
        span=index.span(node),
        operator=operator_node.type,
        argument=_convert(argument_node, index),
    )


def _convert(node: Node, index: _SourceIndex) -> SyntaxNode:
    node_type = node.type

    if node_type == "call_expression":
        return _convert_call(node, index)
    if node_type == "member_expression":
        return _convert_member(node, index)
    if node_type == "unary_expression":
        return _convert_unary(node, index)
    if node_type == "identifier":
        return Identifier(span=index.span(node), name=index.text(node))
    if node_type == "number":
        raw = index.text(node)
        return Literal(
            span=index.span(node), value=parse_number_literal(raw), raw=raw
        )
    if node_type == "string":
        raw = index.text(node)
        return Literal(span=index.span(node), value=raw[1:-1], raw=raw)
    if node_type in _KEYWORD_LITERALS:
        return Literal(
            span=index.span(node),
            value=_KEYWORD_LITERALS[node_type],
            raw=node_type,
        )

    return Opaque(index.span(node), node_type, _convert_children(node, index))


def parse_program(text: str) -> Program:
    """Parse a snippet into the closed node variants used by discovery.

    Raises:
        ParseFailure: when the snippet contains syntax errors.
    """
    parser = _get_parser()
    source_bytes = text.encode("utf8")
    tree = parser.parse(source_bytes)
    root_node = tree.root_node

    if root_node.has_error:
        msg = "snippet contains syntax errors"
        raise ParseFailure(msg)

    index = _SourceIndex(source_bytes)
    return Program(
        span=index.span(root_node), body=_convert_children(root_node, index)
    )


__all__ = ["parse_number_literal", "parse_program"]
