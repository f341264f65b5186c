from __future__ import annotations

import logging

import pytest

from errors import IdentityError
from locate import StaticRegistry, discover, locate, value_offsets
from locate import locator as locator_module
from models import ParameterInfo, ReferenceNames, ValueKind
from parse import parse_program


def _registry() -> StaticRegistry:
    return StaticRegistry(
        {
            "osc": [
                ParameterInfo(name="frequency", default=60),
                ParameterInfo(name="sync", default=0.1),
                ParameterInfo(name="offset", default=0),
            ],
            "color": [
                ParameterInfo(name="r", default=1),
                ParameterInfo(name="g", default=1),
                ParameterInfo(name="b", default=1),
            ],
        }
    )


def test_discover_numbers_in_document_order() -> None:
    values = discover("osc(60, 0.1, 1.5).color(1, 0.5, 0.25).out()")

    assert [value.value for value in values] == [60, 0.1, 1.5, 1, 0.5, 0.25]
    assert [value.ordinal for value in values] == list(range(6))
    assert all(value.kind is ValueKind.NUMBER for value in values)


def test_discover_nested_call_owns_its_arguments() -> None:
    values = discover("solid(1).add(osc(10), 0.5)")

    by_value = {value.value: value for value in values}
    assert by_value[10].call_name == "osc"
    assert by_value[10].parameter_index == 0
    assert by_value[0.5].call_name == "add"
    assert by_value[0.5].parameter_index == 1
    assert by_value[1].call_name == "solid"


def test_discover_groups_chain_arguments_by_call_site() -> None:
    values = discover("osc(10).color(1,0.5,0)")

    assert [value.call_name for value in values] == ["osc", "color", "color", "color"]
    assert [value.parameter_index for value in values[1:]] == [0, 1, 2]
    assert {value.call_site_id for value in values[1:]} == {"color_line0_pos8"}
    assert values[0].call_site_id == "osc_line0_pos0"


def test_discover_skips_loader_directive_lines() -> None:
    assert discover("loadScript('lib.js', 100)") == []

    values = discover("loadScript('lib.js', 5)\nosc(10).out()")

    assert [(value.value, value.position.line) for value in values] == [(10, 1)]
    assert values[0].ordinal == 0


def test_discover_custom_directive_keywords() -> None:
    values = discover("setup(3)\nosc(10)", directive_keywords=("setup",))

    assert [value.value for value in values] == [10]


def test_discover_source_and_output_references() -> None:
    values = discover("s0.mult(o1,0.5).out(o2)")

    assert [value.value for value in values] == ["s0", "o1", 0.5, "o2"]
    references = [value for value in values if not value.is_number]
    assert [value.kind for value in references] == [
        ValueKind.SOURCE_REF,
        ValueKind.OUTPUT_REF,
        ValueKind.OUTPUT_REF,
    ]
    assert references[0].call_name == "unknown"
    assert references[1].options == ("o0", "o1", "o2", "o3")
    assert references[0].options == ("s0", "s1", "s2", "s3")


def test_discover_ignores_reference_names_used_as_properties() -> None:
    values = discover("x.o0.out(y)")

    assert values == []


def test_discover_custom_reference_labels() -> None:
    names = ReferenceNames.from_labels(["cam"], ["main"])

    values = discover("src(cam).out(main)", names)

    assert [(value.value, value.kind) for value in values] == [
        ("cam", ValueKind.SOURCE_REF),
        ("main", ValueKind.OUTPUT_REF),
    ]


def test_discover_negative_literal_spans_minus_sign() -> None:
    (value,) = discover("osc(-10)")

    assert value.value == -10
    assert value.position.column == 4
    assert value.position.length == 3


def test_discover_binary_minus_is_not_negation() -> None:
    values = discover("osc(10 - 5)")

    assert [value.value for value in values] == [10, 5]


def test_discover_uses_registry_metadata() -> None:
    values = discover("osc(10, 0.2).color(0.5).out()", registry=_registry())

    assert [value.parameter_name for value in values] == ["frequency", "sync", "r"]
    assert values[0].parameter_default == 60
    assert values[0].parameter_type == "number"
    assert values[0].key == "osc_frequency_line0_pos4_value"


def test_discover_synthesizes_parameter_names() -> None:
    values = discover("noise(3, 0.1)")

    assert [value.parameter_name for value in values] == ["val1", "val2"]
    assert values[0].key == "noise_val1_line0_pos6_value"


def test_discover_keys_are_unique() -> None:
    values = discover("osc(1, 1, 1)\n  .color(1, 1)\n  .rotate(1)")

    keys = [value.key for value in values]
    assert len(keys) == 6
    assert len(set(keys)) == len(keys)


def test_discover_multiline_positions() -> None:
    values = discover("osc(10)\n  .rotate(0.5)")

    assert values[1].position.line == 1
    assert values[1].position.column == 10
    assert values[1].call_anchor_column == 3


@pytest.mark.parametrize("text", ["", "osc(10", "const x = ;"])
def test_discover_returns_empty_for_unusable_text(text: str) -> None:
    assert discover(text) == []


def test_locate_without_program_returns_empty() -> None:
    assert locate(None, "osc(10)") == []


def test_locate_skips_failing_value_and_keeps_ordinals(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    real_generate_key = locator_module.generate_key

    def flaky_generate_key(call_name, *args):  # type: ignore[no-untyped-def]
        if call_name == "noise":
            raise IdentityError("boom", call_name=call_name)
        return real_generate_key(call_name, *args)

    monkeypatch.setattr(locator_module, "generate_key", flaky_generate_key)
    text = "osc(1).noise(2).out(o0)"

    with caplog.at_level(logging.WARNING, logger="locate.locator"):
        values = locate(parse_program(text), text)

    assert [(value.value, value.ordinal) for value in values] == [(1, 0), ("o0", 2)]
    assert any("Skipping" in record.getMessage() for record in caplog.records)


def test_locate_tolerates_failing_registry() -> None:
    class BrokenRegistry:
        def lookup(self, call_name: str):  # type: ignore[no-untyped-def]
            raise RuntimeError("registry offline")

    values = discover("osc(10)", registry=BrokenRegistry())

    assert values[0].parameter_name == "val1"


def test_value_offsets_follow_ordinals() -> None:
    text = "loadScript('a.js', 1)\nosc(-/*c*/5).out(o0)"

    offsets = value_offsets(parse_program(text), text)

    line_start = text.index("osc")
    assert offsets == [
        (line_start + 4, line_start + 11),
        (line_start + 17, line_start + 19),
    ]
