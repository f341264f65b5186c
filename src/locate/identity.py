"""Stable identifiers for discovered values and their call sites."""

from __future__ import annotations

from errors import IdentityError


def generate_key(
    call_name: str | None,
    parameter_name: str | None,
    parameter_index: int | None,
    line: int | None,
    column: int | None,
) -> str:
    """Build the per-value key.

    Examples:
        >>> generate_key("osc", "frequency", 0, 0, 4)
        'osc_frequency_line0_pos4_value'
        >>> generate_key("rotate", None, 1, 2, 12)
        'rotate_param1_line2_pos12_value'
    """
    if not call_name:
        raise IdentityError("Missing function name", line=line, column=column)

    if line is None or column is None:
        raise IdentityError(
            "Missing position information",
            call_name=call_name,
            parameter_name=parameter_name,
        )

    param_part = parameter_name or f"param{parameter_index}"
    return f"{call_name}_{param_part}_line{line}_pos{column}_value"


def generate_call_site_id(
    call_name: str | None,
    line: int | None,
    anchor_column: int | None,
) -> str:
    """Build the id shared by all values of one call invocation."""
    if not call_name:
        raise IdentityError("Missing function name", line=line, column=anchor_column)

    if line is None:
        raise IdentityError(
            "Missing line number", call_name=call_name, column=anchor_column
        )

    if anchor_column is None:
        raise IdentityError(
            "Missing position information", call_name=call_name, line=line
        )

    return f"{call_name}_line{line}_pos{anchor_column}"


__all__ = ["generate_call_site_id", "generate_key"]
