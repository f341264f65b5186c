"""Configuration for chainedit."""

from rules.config import (
    CallParameters,
    ChainEditConfig,
    ConfigError,
    load_config,
)

__all__ = [
    "CallParameters",
    "ChainEditConfig",
    "ConfigError",
    "load_config",
]
