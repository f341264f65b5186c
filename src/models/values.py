"""Models for discovered editable values."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ValueKind(str, Enum):
    """What an editable value refers to."""

    NUMBER = "number"
    SOURCE_REF = "source"
    OUTPUT_REF = "output"


class ValuePosition(BaseModel):
    """0-based location of a value's original text."""

    model_config = ConfigDict(frozen=True)

    line: int
    column: int
    length: int


class EditableValue(BaseModel):
    """One numeric literal or source/output reference found in a snippet."""

    model_config = ConfigDict(frozen=True)

    value: int | float | str
    kind: ValueKind
    position: ValuePosition
    ordinal: int = Field(description="Document-order index within one pass")
    call_name: str
    call_anchor_column: int
    parameter_index: int
    parameter_name: str
    parameter_type: str
    parameter_default: Any = None
    key: str
    call_site_id: str
    options: tuple[str, ...] = Field(
        default=(),
        description="Valid reference names (references only)",
    )

    @property
    def is_number(self) -> bool:
        return self.kind is ValueKind.NUMBER


__all__ = ["EditableValue", "ValueKind", "ValuePosition"]
