from __future__ import annotations

from pathlib import Path

import pytest

from models import ParameterInfo
from rules.config import ChainEditConfig, ConfigError, load_config


def _write_config(root: Path, toml_content: str) -> None:
    (root / "chainedit.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == ChainEditConfig()
    assert config.debounce_seconds == 2.0
    assert config.directive_keywords == ["loadScript"]
    assert config.placeholder("speed") == "() => speed"
    assert config.reference_names().outputs == ("o0", "o1", "o2", "o3")


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
debounce_seconds = 0.5
directive_keywords = ["loadScript", "setup"]
source_labels = ["cam"]
output_labels = ["main", "", "fx"]

[parameters.osc]
inputs = [
  { name = "frequency", default = 60 },
  { name = "sync", default = 0.1 },
]
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.debounce_seconds == 0.5
    assert config.directive_keywords == ["loadScript", "setup"]
    names = config.reference_names()
    assert names.sources == ("cam", "s1", "s2", "s3")
    assert names.outputs == ("main", "o1", "fx", "o3")

    declared = config.registry().lookup("osc")
    assert declared is not None
    assert declared[1] == ParameterInfo(name="sync", type="number", default=0.1)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "debounce_seconds = ")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "toml_content",
    [
        "bogus_key = true",
        "debounce_seconds = 0",
        'placeholder_template = "() => value"',
        'output_labels = ["a", "b", "c", "d", "e"]',
        "[parameters.osc]\nextra = 1",
    ],
)
def test_invalid_config_rejected(tmp_path: Path, toml_content: str) -> None:
    _write_config(tmp_path, toml_content)

    with pytest.raises(ConfigError, match="Invalid config"):
        load_config(tmp_path)
