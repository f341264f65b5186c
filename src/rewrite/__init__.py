"""Format-preserving code rewriting."""

from rewrite.formatting import format_number
from rewrite.rewriter import (
    Substitution,
    SubstitutionMap,
    format_replacement,
    rewrite,
)
from rewrite.scanner import ValueSpan, scan_value_spans

__all__ = [
    "Substitution",
    "SubstitutionMap",
    "ValueSpan",
    "format_number",
    "format_replacement",
    "rewrite",
    "scan_value_spans",
]
