"""Command-line interface for chainedit."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import orjson

from errors import ParseFailure
from locate.locator import discover
from logging_config import setup_logging
from parse.treesitter_js import parse_number_literal, parse_program
from rewrite.rewriter import Substitution, rewrite
from rules.config import ChainEditConfig, ConfigError, load_config


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="Snippet file to read")
    parser.add_argument(
        "--root",
        default=".",
        help="Directory holding chainedit.toml (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chainedit")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    discover_parser = subparsers.add_parser(
        "discover", help="List editable values as JSON lines"
    )
    _add_common_args(discover_parser)

    rewrite_parser = subparsers.add_parser(
        "rewrite", help="Replace values by ordinal and print the result"
    )
    _add_common_args(rewrite_parser)
    rewrite_parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="ORDINAL=VALUE",
        help="New value for one ordinal; numbers are formatted, text is verbatim",
    )

    return parser


def _parse_assignment(raw: str) -> tuple[int, Substitution]:
    ordinal_text, sep, value_text = raw.partition("=")
    if not sep:
        msg = f"expected ORDINAL=VALUE, got {raw!r}"
        raise ValueError(msg)

    ordinal = int(ordinal_text.strip())
    value_text = value_text.strip()
    negative = value_text.startswith("-")
    try:
        number = parse_number_literal(value_text[1:] if negative else value_text)
    except ValueError:
        return ordinal, value_text
    return ordinal, -number if negative else number


def _read_snippet(path: str) -> str:
    return Path(path).expanduser().read_text(encoding="utf-8")


def _handle_discover(text: str, config: ChainEditConfig) -> int:
    values = discover(
        text,
        config.reference_names(),
        config.registry(),
        directive_keywords=config.directive_keywords,
    )
    for value in values:
        sys.stdout.write(orjson.dumps(value.model_dump(mode="json")).decode())
        sys.stdout.write("\n")
    return 0


def _handle_rewrite(text: str, config: ChainEditConfig, assignments: list[str]) -> int:
    try:
        substitutions = dict(_parse_assignment(raw) for raw in assignments)
    except ValueError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    try:
        program = parse_program(text)
    except ParseFailure as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    sys.stdout.write(
        rewrite(
            program,
            text,
            substitutions,
            config.reference_names(),
            directive_keywords=config.directive_keywords,
        )
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    root = Path(args.root).expanduser().resolve()
    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1

    try:
        text = _read_snippet(args.file)
    except (OSError, UnicodeDecodeError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if args.command == "discover":
        return _handle_discover(text, config)

    if args.command == "rewrite":
        return _handle_rewrite(text, config, args.assignments)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
