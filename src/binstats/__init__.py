import logging
import sys

from .accumulators import WelfordAccumulator
from .contracts import Reporter, SampleAccumulator
from .histogram import Histogram
from .models import HistogramConfig, HistogramReport, SummaryStats

__all__ = [
    "Histogram",
    "HistogramConfig",
    "HistogramReport",
    "Reporter",
    "SampleAccumulator",
    "SummaryStats",
    "WelfordAccumulator",
]

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,
)
