from __future__ import annotations

import math

from rich import box
from rich.console import Console
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from binstats.contracts import Reporter
from binstats.models import HistogramReport, SummaryStats

_BAR_WIDTH = 40


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "nan"
    return f"{value:.6f}"


class RichReporter(Reporter):
    """Render histogram reports using Rich tables."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def render(self, report: HistogramReport, title: str) -> None:
        self._console.print()
        self._console.print(f"Histogram for {title}", style="bold underline")
        self._console.print(Rule(style="dim"))

        self._console.print(self._build_overview_section(report))
        self._console.print()

        self._console.print("Summary Stats", style="bold")
        self._console.print(Rule(style="dim"))
        self._console.print(self._build_summary_section(report.summary))
        self._console.print()

        self._console.print("Quantiles", style="bold")
        self._console.print(Rule(style="dim"))
        self._console.print(self._build_quantile_section(report.quantiles))
        self._console.print()

        self._console.print(f"Bins ({report.capacity})", style="bold")
        self._console.print(Rule(style="dim"))
        self._console.print(self._build_bins_section(report))

    @staticmethod
    def _build_overview_section(report: HistogramReport) -> Table:
        table = Table.grid(padding=(0, 3))
        table.add_column("Field", style="bold cyan")
        table.add_column("Value")

        table.add_row(
            "range:", Text(f"[{report.min_value:g}, {report.max_value:g}]")
        )
        table.add_row("capacity:", f"{report.capacity:,}")
        table.add_row("observations:", f"{report.observations:,}")
        return table

    @staticmethod
    def _build_summary_section(summary: SummaryStats) -> Table:
        table = Table.grid(padding=(0, 3))
        table.add_column("Metric", style="bold cyan")
        table.add_column("Value")

        table.add_row("count:", f"{summary.count:,}")
        table.add_row("min:", _format_float(summary.min))
        table.add_row("mean:", _format_float(summary.mean))
        table.add_row("max:", _format_float(summary.max))
        table.add_row("variance:", _format_float(summary.variance))
        table.add_row("std:", _format_float(summary.std))
        return table

    @staticmethod
    def _build_quantile_section(quantiles: dict[str, float]) -> Table:
        table = Table.grid(padding=(0, 3))
        table.add_column("Quantile", style="bold cyan")
        table.add_column("Value")

        for label, value in quantiles.items():
            table.add_row(f"{label}:", _format_float(value))
        return table

    @staticmethod
    def _build_bins_section(report: HistogramReport) -> Table:
        table = Table(
            box=box.SIMPLE_HEAD,
            show_header=True,
            header_style="bold",
            padding=(0, 2),
        )
        table.add_column("Bin", justify="right")
        table.add_column("Range")
        table.add_column("Count", justify="right")
        table.add_column("")

        peak = max(report.counts, default=0)
        for index, count in enumerate(report.counts):
            lower = report.edges[index]
            upper = report.edges[index + 1]
            opening = "[" if index == 0 else "("
            width = round(_BAR_WIDTH * count / peak) if peak else 0
            table.add_row(
                str(index),
                Text(f"{opening}{lower:g}, {upper:g}]"),
                f"{count:,}",
                Text("#" * width, style="green"),
            )
        return table
