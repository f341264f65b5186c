"""Model namespace for chainedit data types."""

from models.parameters import ParameterInfo
from models.references import SLOT_COUNT, ReferenceNames
from models.values import EditableValue, ValueKind, ValuePosition

__all__ = [
    "SLOT_COUNT",
    "EditableValue",
    "ParameterInfo",
    "ReferenceNames",
    "ValueKind",
    "ValuePosition",
]
