"""Source/output reference name table."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from models.values import ValueKind

SLOT_COUNT = 4


def _resolve_labels(prefix: str, labels: Sequence[str | None]) -> tuple[str, ...]:
    names = []
    for slot in range(SLOT_COUNT):
        label = labels[slot] if slot < len(labels) else None
        names.append(label or f"{prefix}{slot}")
    return tuple(names)


class ReferenceNames(BaseModel):
    """Display names of the 4 source and 4 output slots.

    Outputs win when a custom label collides with a source name.
    """

    model_config = ConfigDict(frozen=True)

    sources: tuple[str, ...] = _resolve_labels("s", ())
    outputs: tuple[str, ...] = _resolve_labels("o", ())

    @classmethod
    def from_labels(
        cls,
        source_labels: Sequence[str | None] = (),
        output_labels: Sequence[str | None] = (),
    ) -> ReferenceNames:
        return cls(
            sources=_resolve_labels("s", source_labels),
            outputs=_resolve_labels("o", output_labels),
        )

    @property
    def all_names(self) -> tuple[str, ...]:
        return (*self.outputs, *self.sources)

    def kind_of(self, name: str) -> ValueKind | None:
        if name in self.outputs:
            return ValueKind.OUTPUT_REF
        if name in self.sources:
            return ValueKind.SOURCE_REF
        return None

    def options_for(self, kind: ValueKind) -> tuple[str, ...]:
        if kind is ValueKind.OUTPUT_REF:
            return self.outputs
        if kind is ValueKind.SOURCE_REF:
            return self.sources
        return ()


__all__ = ["SLOT_COUNT", "ReferenceNames"]
