from __future__ import annotations

from rich.console import Console

from binstats.histogram import Histogram
from binstats.reporters import RichReporter


def _console() -> Console:
    return Console(
        record=True,
        force_terminal=False,
        color_system=None,
        width=120,
    )


def test_rich_reporter_renders_all_sections() -> None:
    histogram = Histogram.new(10, 18, 2).update_all([10, 10, 10, 10, 10, 10, 14])
    console = _console()

    RichReporter(console).render(histogram.report(), "sample")

    output = console.export_text()
    assert "Histogram for sample" in output
    assert "[10, 18]" in output
    assert "observations:" in output
    assert "Summary Stats" in output
    assert "mean:" in output
    assert "Bins (2)" in output
    assert "[10, 14]" in output
    assert "(14, 18]" in output
    assert "#" * 40 in output


def test_rich_reporter_renders_empty_histogram() -> None:
    console = _console()

    RichReporter(console).render(Histogram.new(0.0, 1.0, 3).report(), "empty")

    output = console.export_text()
    assert "Bins (3)" in output
    assert "nan" in output
    assert "#" not in output
