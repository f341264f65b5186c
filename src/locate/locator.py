"""Discovery of editable values in a parsed snippet."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from errors import ChainEditError, ContextResolutionError
from locate.context import resolve_structural, resolve_textual
from locate.identity import generate_call_site_id, generate_key
from locate.params import ParameterRegistry, resolve_parameter
from models.references import ReferenceNames
from models.values import EditableValue, ValueKind, ValuePosition
from parse.nodes import Identifier, Literal, Program, Span, SyntaxNode, UnaryExpression
from parse.treesitter_js import parse_program

logger = logging.getLogger(__name__)

DEFAULT_DIRECTIVE_KEYWORDS: tuple[str, ...] = ("loadScript",)


@dataclass(frozen=True)
class _Candidate:
    node: SyntaxNode
    parents: tuple[SyntaxNode, ...]
    kind: ValueKind
    value: int | float | str
    span: Span


def is_directive_line(line: str, directive_keywords: Sequence[str]) -> bool:
    """Loader-directive lines hold infrastructure, never user values."""
    return any(keyword in line for keyword in directive_keywords)


def _as_candidate(
    node: SyntaxNode,
    parents: Sequence[SyntaxNode],
    names: ReferenceNames,
) -> _Candidate | None:
    match node:
        case Literal() if node.is_number:
            parent = parents[-1] if parents else None
            if isinstance(parent, UnaryExpression) and parent.operator == "-":
                return _Candidate(
                    node=parent,
                    parents=tuple(parents[:-1]),
                    kind=ValueKind.NUMBER,
                    value=-node.value,
                    span=parent.span,
                )
            return _Candidate(
                node=node,
                parents=tuple(parents),
                kind=ValueKind.NUMBER,
                value=node.value,
                span=node.span,
            )
        case Identifier(name=name):
            kind = names.kind_of(name)
            if kind is None:
                return None
            return _Candidate(
                node=node,
                parents=tuple(parents),
                kind=kind,
                value=name,
                span=node.span,
            )
        case _:
            return None


def _walk(
    node: SyntaxNode,
    parents: list[SyntaxNode],
    visit: Callable[[SyntaxNode, list[SyntaxNode]], None],
) -> None:
    visit(node, parents)
    parents.append(node)
    for child in node.children():
        _walk(child, parents, visit)
    parents.pop()


def _build_value(
    candidate: _Candidate,
    ordinal: int,
    lines: Sequence[str],
    names: ReferenceNames,
    registry: ParameterRegistry | None,
) -> EditableValue:
    span = candidate.span
    if span.start_line >= len(lines):
        msg = f"line {span.start_line} is outside the source text"
        raise ContextResolutionError(msg)

    context = resolve_structural(candidate.node, candidate.parents)
    if context is None:
        context = resolve_textual(lines[span.start_line], span.start_col)

    info = resolve_parameter(registry, context.call_name, context.parameter_index)

    return EditableValue(
        value=candidate.value,
        kind=candidate.kind,
        position=ValuePosition(
            line=span.start_line,
            column=span.start_col,
            length=span.length,
        ),
        ordinal=ordinal,
        call_name=context.call_name,
        call_anchor_column=context.anchor_column,
        parameter_index=context.parameter_index,
        parameter_name=info.name,
        parameter_type=info.type,
        parameter_default=info.default,
        key=generate_key(
            context.call_name,
            info.name,
            context.parameter_index,
            span.start_line,
            span.start_col,
        ),
        call_site_id=generate_call_site_id(
            context.call_name, span.start_line, context.anchor_column
        ),
        options=names.options_for(candidate.kind),
    )


def _collect_candidates(
    program: Program,
    lines: Sequence[str],
    names: ReferenceNames,
    directive_keywords: Sequence[str],
) -> list[_Candidate]:
    candidates: list[_Candidate] = []

    def visit(node: SyntaxNode, parents: list[SyntaxNode]) -> None:
        candidate = _as_candidate(node, parents, names)
        if candidate is None:
            return
        line_no = candidate.span.start_line
        if line_no < len(lines) and is_directive_line(
            lines[line_no], directive_keywords
        ):
            return
        candidates.append(candidate)

    try:
        _walk(program, [], visit)
    except Exception:
        logger.exception("Error traversing syntax tree; keeping values found so far")

    candidates.sort(key=lambda candidate: candidate.span.start_offset)
    return candidates


def locate(
    program: Program | None,
    source_text: str | None,
    names: ReferenceNames | None = None,
    registry: ParameterRegistry | None = None,
    *,
    directive_keywords: Sequence[str] = DEFAULT_DIRECTIVE_KEYWORDS,
) -> list[EditableValue]:
    """Find every numeric literal and source/output reference in `program`.

    Values are returned in document order. Ordinals are assigned to every
    candidate before its context is resolved, so a candidate that fails is
    skipped without renumbering the ones after it. Never raises.
    """
    if program is None or not source_text:
        return []

    names = names or ReferenceNames()
    lines = source_text.split("\n")
    candidates = _collect_candidates(program, lines, names, directive_keywords)

    values: list[EditableValue] = []
    for ordinal, candidate in enumerate(candidates):
        try:
            values.append(_build_value(candidate, ordinal, lines, names, registry))
        except Exception:
            logger.warning(
                "Skipping %s value %r at line %d col %d",
                candidate.kind.value,
                candidate.value,
                candidate.span.start_line,
                candidate.span.start_col,
                exc_info=True,
            )

    logger.debug("Located %d editable values", len(values))
    return values


def value_offsets(
    program: Program | None,
    source_text: str | None,
    names: ReferenceNames | None = None,
    *,
    directive_keywords: Sequence[str] = DEFAULT_DIRECTIVE_KEYWORDS,
) -> list[tuple[int, int]]:
    """Character `[start, end)` offsets of each editable value, by ordinal."""
    if program is None or not source_text:
        return []

    candidates = _collect_candidates(
        program,
        source_text.split("\n"),
        names or ReferenceNames(),
        directive_keywords,
    )
    return [
        (candidate.span.start_offset, candidate.span.end_offset)
        for candidate in candidates
    ]


def discover(
    text: str | None,
    names: ReferenceNames | None = None,
    registry: ParameterRegistry | None = None,
    *,
    directive_keywords: Sequence[str] = DEFAULT_DIRECTIVE_KEYWORDS,
) -> list[EditableValue]:
    """Parse `text` and locate its editable values; `[]` if it cannot be parsed."""
    if not text:
        return []

    try:
        program = parse_program(text)
    except (ChainEditError, ValueError) as exc:
        logger.debug("Discovery skipped, snippet did not parse: %s", exc)
        return []

    return locate(
        program,
        text,
        names,
        registry,
        directive_keywords=directive_keywords,
    )


__all__ = [
    "DEFAULT_DIRECTIVE_KEYWORDS",
    "discover",
    "is_directive_line",
    "locate",
    "value_offsets",
]
