from __future__ import annotations

import pytest

from locate import DEFAULT_DIRECTIVE_KEYWORDS, discover
from models import ReferenceNames, ValueKind
from rewrite import scan_value_spans


def _texts(text: str) -> list[str]:
    spans = scan_value_spans(text, ReferenceNames(), DEFAULT_DIRECTIVE_KEYWORDS)
    return [span.text for span in spans]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("osc(10).color(1, 0.5)", ["10", "1", "0.5"]),
        ("osc(-10)", ["-10"]),
        ("osc(- 10)", ["- 10"]),
        ("osc(10 - 5)", ["10", "5"]),
        ("osc(10-5)", ["10", "5"]),
        ("osc(a * -2)", ["-2"]),
        ("osc(0x1F, 1e3, .5)", ["0x1F", "1e3", ".5"]),
        ("s0.mult(o1)", ["s0", "o1"]),
        ("x.o0.out(y)", []),
        ("foo1 + 2", ["2"]),
        ("osc('10', \"20\")", []),
        ("// osc(10)\nosc(20) /* 30 */", ["20"]),
        ("const t = `speed ${2} 10`", ["2"]),
        ("/10/.test(s)", []),
        ("loadScript('a.js', 5)\nosc(7)", ["7"]),
        ("return -1", ["-1"]),
        ("osc(-/*c*/5)", ["-/*c*/5"]),
        ("osc(- // note\n 5)", ["- // note\n 5"]),
        ("a++ -1", ["1"]),
        ("a-- - 2", ["2"]),
        ("--a - 3", ["3"]),
    ],
)
def test_scan_value_spans(text: str, expected: list[str]) -> None:
    assert _texts(text) == expected


def test_scan_value_spans_kinds_and_indices() -> None:
    spans = scan_value_spans("src(s0).out(o1, 2)", ReferenceNames())

    assert [span.kind for span in spans] == [
        ValueKind.SOURCE_REF,
        ValueKind.OUTPUT_REF,
        ValueKind.NUMBER,
    ]
    assert [span.index for span in spans] == [0, 1, 2]
    assert spans[2].start == 16
    assert spans[2].end == 17


def _offset(text: str, line: int, column: int) -> int:
    return sum(len(item) + 1 for item in text.split("\n")[:line]) + column


@pytest.mark.parametrize(
    "text",
    [
        "osc(60, 0.1, 1.5).color(1, 0.5, 0.25).rotate(-2).out(o1)",
        "// osc(5)\nsolid(1).add(osc(10), 0.5)\n  .out() /* 7 */",
        "src(s0).modulate(o1, -0.1)\n.out(o2)",
        "shape(3).scale(() => 1.5 + Math.sin(time) * 0.2).out()",
        "loadScript('lib.js')\nosc(10).out()",
        "osc(10 - 5, -3).out()",
        "osc('10', 20).out()",
        "x => x * -1",
        "osc(1e3, 0x10, .5).out()",
        "'é'; osc(10).out(o0)",
        "osc(-/*c*/5).out()",
        "osc(- // note\n  5).out()",
        "a++ -1",
        "a-- - 2",
    ],
)
def test_scan_spans_line_up_with_discovered_values(text: str) -> None:
    values = discover(text)
    spans = scan_value_spans(text, ReferenceNames(), DEFAULT_DIRECTIVE_KEYWORDS)

    assert len(spans) == len(values)
    for value, span in zip(values, spans, strict=True):
        assert span.index == value.ordinal
        start = _offset(text, value.position.line, value.position.column)
        assert span.start == start
        assert span.end == start + value.position.length
