from __future__ import annotations

import argparse
import logging
import re
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError
from rich.console import Console

from binstats.histogram import DEFAULT_REPORT_QUANTILES, Histogram
from binstats.models import HistogramConfig
from binstats.reporters import RichReporter

_SEPARATORS = re.compile(r"[\s,]+")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="binstats", description="binstats CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)
    summarize = subparsers.add_parser(
        "summarize", help="Bin numeric observations and report quantiles"
    )
    summarize.add_argument(
        "input",
        type=str,
        nargs="?",
        default="-",
        help="File with whitespace or comma separated numbers (default: stdin)",
    )
    summarize.add_argument("--min", dest="min_value", type=float, required=True)
    summarize.add_argument("--max", dest="max_value", type=float, required=True)
    summarize.add_argument(
        "--bins",
        dest="capacity",
        type=int,
        default=10,
        help="Number of bins (default: 10)",
    )
    summarize.add_argument(
        "--quantile",
        dest="quantiles",
        type=float,
        action="append",
        help="Quantile to estimate; repeatable (default: 0.25 0.5 0.75 0.95 0.99)",
    )
    summarize.add_argument(
        "--strict",
        action="store_true",
        help="Reject quantiles outside (0, 1)",
    )
    return parser


def _parse_values(text: str) -> list[float]:
    return [float(token) for token in _SEPARATORS.split(text.strip()) if token]


def _read_input(source: str, stdin: TextIO | None) -> tuple[str, str]:
    if source == "-":
        stream = stdin or sys.stdin
        return stream.read(), "stdin"
    path = Path(source)
    return path.read_text(encoding="utf-8"), path.name


def _run_summarize(
    args: argparse.Namespace, *, console: Console, stdin: TextIO | None
) -> int:
    try:
        config = HistogramConfig(
            min_value=args.min_value,
            max_value=args.max_value,
            capacity=args.capacity,
        )
    except ValidationError as exc:
        console.print(f"Invalid histogram configuration: {exc.errors()[0]['msg']}")
        return 2

    quantiles = args.quantiles or DEFAULT_REPORT_QUANTILES
    if args.strict:
        rejected = [q for q in quantiles if not 0.0 < q < 1.0]
        if rejected:
            console.print(
                f"Invalid quantile {rejected[0]:g}: q must be in (0, 1) with --strict."
            )
            return 2

    try:
        text, title = _read_input(args.input, stdin)
    except FileNotFoundError:
        console.print(f"Input not found: {args.input}")
        return 2
    except UnicodeDecodeError:
        console.print(f"Could not summarize input: {args.input} is not valid UTF-8.")
        return 1
    except OSError as exc:
        console.print(f"Could not read input {args.input}: {exc.strerror}")
        return 2

    try:
        values = _parse_values(text)
        histogram = Histogram.from_config(config).update_all(values)
        report = histogram.report(quantiles, strict=args.strict)
    except ValueError as exc:
        console.print(f"Could not summarize input: {exc}")
        return 1

    RichReporter(console).render(report, title)
    return 0


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    console: Console | None = None,
    stdin: TextIO | None = None,
) -> int:
    logging.getLogger().setLevel(logging.ERROR)
    parser = _build_parser()
    args = parser.parse_args(argv)
    out_console = console or Console()
    if args.command == "summarize":
        return _run_summarize(args, console=out_console, stdin=stdin)
    parser.error("Unknown command.")
    return 2


def main() -> None:
    raise SystemExit(run_cli())
