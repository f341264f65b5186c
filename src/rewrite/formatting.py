"""Precision rules for numbers written back into source text."""

from __future__ import annotations

import math


def _trim(text: str) -> str:
    return text.rstrip("0").rstrip(".")


def format_number(num: int | float) -> str:
    """Format a number with precision based on its magnitude.

    - below 1: 3 decimal places
    - below 10: 2 decimal places
    - 10 and above: rounded to an integer

    Trailing zeros are dropped; negatives are `-` plus the formatted
    magnitude.

    Examples:
        >>> format_number(0.1234)
        '0.123'
        >>> format_number(3.456)
        '3.46'
        >>> format_number(-42.9)
        '-43'
    """
    if math.isnan(num):
        return "NaN"
    if math.isinf(num):
        return "Infinity" if num > 0 else "-Infinity"

    magnitude = abs(num)
    if magnitude < 1:
        text = _trim(f"{magnitude:.3f}")
    elif magnitude < 10:
        text = _trim(f"{magnitude:.2f}")
    else:
        text = str(math.floor(magnitude + 0.5))

    if num < 0 and text != "0":
        return f"-{text}"
    return text


__all__ = ["format_number"]
