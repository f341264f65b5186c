"""Format-preserving substitution of editable values."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence

from errors import RewriteError
from locate.locator import DEFAULT_DIRECTIVE_KEYWORDS, value_offsets
from models.references import ReferenceNames
from parse.nodes import Program
from rewrite.formatting import format_number
from rewrite.scanner import ValueSpan, scan_value_spans

logger = logging.getLogger(__name__)

Substitution = int | float | str
SubstitutionMap = Mapping[int, Substitution]

_BARE_NUMBER = re.compile(r"-?\d+\.?\d*")


def format_replacement(value: Substitution) -> str:
    """Numbers get precision formatting; strings are placeholder expressions."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"unsupported substitution value {value!r}"
        raise RewriteError(msg)
    try:
        float(value)
    except OverflowError as exc:
        msg = f"number too large to write back: {value!r}"
        raise RewriteError(msg) from exc
    return format_number(value)


def apply_substitutions(
    text: str,
    spans: Sequence[ValueSpan],
    substitutions: SubstitutionMap,
) -> str:
    """Splice replacements into `text` at the spans selected by `substitutions`.

    Spans are applied in ascending start order and a running offset shifts
    every later span by the length change of the earlier replacements.
    """
    output = text
    offset = 0
    for span in sorted(spans, key=lambda item: item.start):
        if span.index not in substitutions:
            continue
        replacement = format_replacement(substitutions[span.index])
        start = span.start + offset
        end = span.end + offset
        output = output[:start] + replacement + output[end:]
        offset += len(replacement) - (end - start)

    unmatched = set(substitutions) - {span.index for span in spans}
    if unmatched:
        logger.debug("No value spans for ordinals %s", sorted(unmatched))
    return output


def _check_alignment(
    spans: Sequence[ValueSpan],
    located: Sequence[tuple[int, int]],
    substitutions: SubstitutionMap,
) -> None:
    """Each substituted span must sit where the syntax tree puts that value."""
    for ordinal in substitutions:
        scanned = spans[ordinal] if 0 <= ordinal < len(spans) else None
        expected = located[ordinal] if 0 <= ordinal < len(located) else None
        if scanned is None and expected is None:
            continue
        actual = None if scanned is None else (scanned.start, scanned.end)
        if actual != expected:
            msg = (
                f"value {ordinal} spans {actual} in the text "
                f"but {expected} in the syntax tree"
            )
            raise RewriteError(msg)


def _check_plausible(result: str) -> None:
    if not result or _BARE_NUMBER.fullmatch(result.strip()):
        msg = f"Invalid generated code: {result!r}"
        raise RewriteError(msg)


def rewrite(
    program: Program | None,
    original_text: str | None,
    substitutions: SubstitutionMap | None,
    names: ReferenceNames | None = None,
    *,
    directive_keywords: Sequence[str] = DEFAULT_DIRECTIVE_KEYWORDS,
) -> str:
    """Return `original_text` with the selected values replaced.

    Only the substituted spans change; whitespace, line breaks, comments and
    the precision of untouched values are kept byte for byte. Falls back to
    `original_text` when there is no parsed program, when a substituted span
    disagrees with the syntax tree, when splicing fails, or when the result
    is a bare number.
    """
    if program is None or not original_text:
        return original_text or ""
    if not substitutions:
        return original_text

    try:
        names = names or ReferenceNames()
        spans = scan_value_spans(original_text, names, directive_keywords)
        _check_alignment(
            spans,
            value_offsets(
                program,
                original_text,
                names,
                directive_keywords=directive_keywords,
            ),
            substitutions,
        )
        result = apply_substitutions(original_text, spans, substitutions)
        _check_plausible(result)
    except RewriteError as exc:
        logger.error("%s; keeping original code", exc)
        return original_text
    except Exception:
        logger.exception("Error generating code; keeping original code")
        return original_text

    return result


__all__ = [
    "Substitution",
    "SubstitutionMap",
    "apply_substitutions",
    "format_replacement",
    "rewrite",
]
