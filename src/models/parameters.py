"""Declared parameter metadata."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class ParameterInfo(BaseModel):
    """Name, type and default of one declared call parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = "number"
    default: Any = None


__all__ = ["ParameterInfo"]
