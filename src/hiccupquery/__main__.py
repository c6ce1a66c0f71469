#!/usr/bin/env python3
"""Command-line interface for hiccupquery."""

from __future__ import annotations

import argparse
import json
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, NoReturn

from .node import InvalidNodeShape
from .selector import find, query


def _get_version() -> str:
    try:
        return version("hiccupquery")
    except PackageNotFoundError:  # pragma: no cover
        return "dev"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hiccupquery",
        description="Query a JSON-encoded hiccup tree with a path of selectors.",
        epilog=(
            "Examples:\n"
            "  hiccupquery tree.json ul li p\n"
            "  cat tree.json | hiccupquery - ul li:key --format lines\n"
            "  hiccupquery tree.json --find .cart-item p\n"
            "  hiccupquery tree.json ul '[\"li\", {\"foo\": 1}]'\n"
            "\n"
            "Steps starting with '{' or '[' are decoded as JSON (structured\n"
            "selectors and (token, attr_vals) pairs).\n"
            "\n"
            "If you don't have the 'hiccupquery' command available, use:\n"
            "  python -m hiccupquery ...\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "path",
        nargs="?",
        help="JSON file holding the tree, or '-' to read from stdin",
    )
    parser.add_argument(
        "steps",
        nargs="*",
        help="Selector path (defaults to the tree itself)",
    )
    parser.add_argument(
        "--find",
        action="store_true",
        help="Let the first step match elements anywhere in the tree",
    )
    parser.add_argument(
        "--format",
        choices=["json", "lines"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--first",
        action="store_true",
        help="Only output the first result",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"hiccupquery {_get_version()}",
    )

    args = parser.parse_intermixed_args(argv)

    if not args.path:
        parser.print_help(sys.stderr)
        raise SystemExit(1)

    return args


def _read_json(path: str) -> str:
    if path == "-":
        return sys.stdin.read()

    return Path(path).read_text()


def _decode_step(step: str) -> Any:
    if step[:1] in ("{", "["):
        return json.loads(step)
    return step


def _format_line(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def main(argv: list[str] | None = None) -> NoReturn | None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    try:
        tree = json.loads(_read_json(args.path))
        steps = [_decode_step(step) for step in args.steps]
    except json.JSONDecodeError as e:
        print(f"Invalid JSON: {e}", file=sys.stderr)
        raise SystemExit(2) from e

    try:
        results = find(tree, *steps) if args.find else query(tree, *steps)
    except InvalidNodeShape as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2) from e

    if not results:
        raise SystemExit(1)

    if args.first:
        results = [results[0]]

    if args.format == "json":
        sys.stdout.write(json.dumps(results))
        sys.stdout.write("\n")
        return None

    outputs = [_format_line(value) for value in results]
    sys.stdout.write("\n".join(outputs))
    sys.stdout.write("\n")
    return None


if __name__ == "__main__":
    main()
