"""Parameter metadata resolution for call arguments."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from models.parameters import ParameterInfo

logger = logging.getLogger(__name__)

DEFAULT_PARAMETER_TYPE = "number"


class ParameterRegistry(Protocol):
    """Read-only source of declared parameters per call name."""

    def lookup(self, call_name: str) -> Mapping[int, ParameterInfo] | None: ...


class StaticRegistry:
    """Mapping-backed registry of declared call parameters."""

    def __init__(self, calls: Mapping[str, Iterable[ParameterInfo]] | None = None):
        self._calls: dict[str, dict[int, ParameterInfo]] = {
            name: dict(enumerate(inputs)) for name, inputs in (calls or {}).items()
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> StaticRegistry:
        """Build a registry from `{call: {"inputs": [{name, type, default}]}}`.

        A bare list of input dicts is accepted in place of the `inputs` table.
        """
        calls: dict[str, list[ParameterInfo]] = {}
        for call_name, entry in data.items():
            inputs = entry.get("inputs", []) if isinstance(entry, Mapping) else entry
            calls[call_name] = [
                item
                if isinstance(item, ParameterInfo)
                else ParameterInfo.model_validate(item)
                for item in inputs
            ]
        return cls(calls)

    def lookup(self, call_name: str) -> Mapping[int, ParameterInfo] | None:
        return self._calls.get(call_name)

    def __contains__(self, call_name: object) -> bool:
        return call_name in self._calls


def synthetic_parameter(parameter_index: int) -> ParameterInfo:
    return ParameterInfo(name=f"val{parameter_index + 1}", type=DEFAULT_PARAMETER_TYPE)


def resolve_parameter(
    registry: ParameterRegistry | None,
    call_name: str,
    parameter_index: int,
) -> ParameterInfo:
    """Look up declared metadata, falling back to a synthetic `valN` name.

    Never raises: registry errors are logged and treated as "not declared".
    """
    if registry is None:
        return synthetic_parameter(parameter_index)

    try:
        declared = registry.lookup(call_name)
    except Exception:
        logger.warning(
            "Parameter registry lookup failed for %s", call_name, exc_info=True
        )
        return synthetic_parameter(parameter_index)

    if not declared:
        return synthetic_parameter(parameter_index)

    info = declared.get(parameter_index)
    if info is None:
        return synthetic_parameter(parameter_index)

    if not info.name:
        return info.model_copy(update={"name": f"val{parameter_index + 1}"})
    return info


__all__ = [
    "DEFAULT_PARAMETER_TYPE",
    "ParameterRegistry",
    "StaticRegistry",
    "resolve_parameter",
    "synthetic_parameter",
]
