from __future__ import annotations

from pathlib import Path

import orjson
import pytest

from cli import main


def _write_snippet(root: Path, text: str) -> Path:
    path = root / "sketch.js"
    path.write_text(text, encoding="utf-8")
    return path


def test_cli_discover_prints_json_lines(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    snippet = _write_snippet(tmp_path, "osc(10).out(o0)\n")

    exit_code = main(["discover", str(snippet), "--root", str(tmp_path)])

    assert exit_code == 0
    records = [orjson.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [record["value"] for record in records] == [10, "o0"]
    assert records[0]["key"] == "osc_val1_line0_pos4_value"
    assert records[0]["kind"] == "number"
    assert records[1]["kind"] == "output"
    assert records[1]["options"] == ["o0", "o1", "o2", "o3"]


def test_cli_discover_uses_config_parameters(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (tmp_path / "chainedit.toml").write_text(
        '[parameters.osc]\ninputs = [{ name = "frequency", default = 60 }]\n',
        encoding="utf-8",
    )
    snippet = _write_snippet(tmp_path, "osc(10)")

    exit_code = main(["discover", str(snippet), "--root", str(tmp_path)])

    assert exit_code == 0
    (line,) = capsys.readouterr().out.splitlines()
    record = orjson.loads(line)
    assert record["parameter_name"] == "frequency"
    assert record["parameter_default"] == 60


def test_cli_rewrite_applies_assignments(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    snippet = _write_snippet(tmp_path, "osc(10, 0.1)\n  .out(o0) // main\n")

    exit_code = main(
        [
            "rewrite",
            str(snippet),
            "--root",
            str(tmp_path),
            "--set",
            "1=-0.25",
            "--set",
            "2=o3",
        ]
    )

    assert exit_code == 0
    assert capsys.readouterr().out == "osc(10, -0.25)\n  .out(o3) // main\n"


def test_cli_rewrite_rejects_malformed_assignment(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    snippet = _write_snippet(tmp_path, "osc(10)")

    exit_code = main(["rewrite", str(snippet), "--root", str(tmp_path), "--set", "5"])

    assert exit_code == 2
    assert "ORDINAL=VALUE" in capsys.readouterr().err


def test_cli_rewrite_rejects_unparseable_snippet(tmp_path: Path) -> None:
    snippet = _write_snippet(tmp_path, "osc(10")

    exit_code = main(
        ["rewrite", str(snippet), "--root", str(tmp_path), "--set", "0=1"]
    )

    assert exit_code == 2


def test_cli_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "missing.js"

    assert main(["discover", str(missing), "--root", str(tmp_path)]) == 2


def test_cli_invalid_config(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (tmp_path / "chainedit.toml").write_text("bogus = 1\n", encoding="utf-8")
    snippet = _write_snippet(tmp_path, "osc(10)")

    assert main(["discover", str(snippet), "--root", str(tmp_path)]) == 1
    assert "Invalid config" in capsys.readouterr().err
