from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from locate.locator import DEFAULT_DIRECTIVE_KEYWORDS
from locate.params import StaticRegistry
from models.parameters import ParameterInfo
from models.references import SLOT_COUNT, ReferenceNames

CONFIG_FILENAME = "chainedit.toml"

PLACEHOLDER_FIELD = "{name}"


class CallParameters(BaseModel):
    """Declared inputs of one call, in argument order."""

    model_config = ConfigDict(extra="forbid")

    inputs: list[ParameterInfo] = Field(
        default_factory=list,
        description="Parameter name/type/default per argument position",
    )


class ChainEditConfig(BaseModel):
    """Configuration for value discovery, rewriting and live updates."""

    model_config = ConfigDict(extra="forbid")

    debounce_seconds: float = Field(
        default=2.0,
        gt=0,
        description="Quiet period before edits are committed to the editor",
    )
    directive_keywords: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DIRECTIVE_KEYWORDS),
        description="Lines containing any of these words are never edited",
    )
    placeholder_template: str = Field(
        default="() => {name}",
        description="Expression substituted for a live-bound value",
    )
    source_labels: list[str | None] = Field(
        default_factory=list,
        description="Custom display names for source slots s0..s3",
    )
    output_labels: list[str | None] = Field(
        default_factory=list,
        description="Custom display names for output slots o0..o3",
    )
    parameters: dict[str, CallParameters] = Field(
        default_factory=dict,
        description="Declared parameters per call name",
    )

    @field_validator("placeholder_template")
    @classmethod
    def validate_placeholder_template(cls, v: str) -> str:
        if PLACEHOLDER_FIELD not in v:
            msg = f"placeholder_template must contain '{PLACEHOLDER_FIELD}'"
            raise ValueError(msg)
        return v

    @field_validator("source_labels", "output_labels")
    @classmethod
    def validate_labels(cls, v: list[str | None]) -> list[str | None]:
        if len(v) > SLOT_COUNT:
            msg = f"at most {SLOT_COUNT} labels are allowed, got {len(v)}"
            raise ValueError(msg)
        return v

    def reference_names(self) -> ReferenceNames:
        return ReferenceNames.from_labels(self.source_labels, self.output_labels)

    def registry(self) -> StaticRegistry:
        return StaticRegistry(
            {name: call.inputs for name, call in self.parameters.items()}
        )

    def placeholder(self, name: str) -> str:
        return self.placeholder_template.replace(PLACEHOLDER_FIELD, name)


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> ChainEditConfig:
    """Load configuration from chainedit.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ChainEditConfig()

    try:
        with config_path.open("rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ChainEditConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
