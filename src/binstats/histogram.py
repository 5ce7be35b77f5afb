from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, replace

import numpy as np
from numpy.typing import NDArray

from binstats.accumulators import WelfordAccumulator
from binstats.contracts import SampleAccumulator
from binstats.models import HistogramConfig, HistogramReport, SummaryStats

logger = logging.getLogger(__name__)

DEFAULT_REPORT_QUANTILES: tuple[float, ...] = (0.25, 0.5, 0.75, 0.95, 0.99)


def _readonly(counts: NDArray[np.int64]) -> NDArray[np.int64]:
    counts.flags.writeable = False
    return counts


def _quantile_label(q: float) -> str:
    return f"p{q * 100:g}"


@dataclass(frozen=True, eq=False)
class Histogram:
    """Fixed-range histogram with ``capacity`` uniform-width bins.

    Histograms are values: ``update`` and ``update_all`` return a new
    histogram and never touch the receiver. Bins are right-closed, so a value
    sitting exactly on an interior edge is counted in the lower bin, and the
    first bin also holds ``min_value``. Observations outside
    ``[min_value, max_value]`` are counted in the nearest edge bin.
    """

    min_value: float
    max_value: float
    capacity: int
    bin_scale: float
    bin_step: float
    n: int
    stats: SampleAccumulator
    _counts: NDArray[np.int64] = field(repr=False)

    @classmethod
    def new(
        cls,
        min_value: float,
        max_value: float,
        capacity: int,
        accumulator_factory: Callable[[], SampleAccumulator] = WelfordAccumulator,
    ) -> Histogram:
        if capacity <= 0:
            logger.error("Invalid histogram capacity %s.", capacity)
            raise ValueError("capacity must be positive.")
        if max_value <= min_value:
            logger.error(
                "Invalid histogram range min_value=%s max_value=%s.",
                min_value,
                max_value,
            )
            raise ValueError("max_value must be greater than min_value.")

        span = float(max_value) - float(min_value)
        histogram = cls(
            min_value=float(min_value),
            max_value=float(max_value),
            capacity=capacity,
            bin_scale=capacity / span,
            bin_step=span / capacity,
            n=0,
            stats=accumulator_factory(),
            _counts=_readonly(np.zeros(capacity, dtype=np.int64)),
        )
        logger.debug(
            "Created histogram range=[%s, %s] capacity=%d step=%.6g.",
            histogram.min_value,
            histogram.max_value,
            capacity,
            histogram.bin_step,
        )
        return histogram

    @classmethod
    def from_config(
        cls,
        config: HistogramConfig,
        accumulator_factory: Callable[[], SampleAccumulator] = WelfordAccumulator,
    ) -> Histogram:
        return cls.new(
            config.min_value,
            config.max_value,
            config.capacity,
            accumulator_factory=accumulator_factory,
        )

    def bin_index(self, value: float) -> int:
        """Return the bin that *value* is counted in.

        Values at or beyond either bound, infinities included, go straight to
        the edge bin. Otherwise the nominal bin is recomputed from
        ``bin_step`` and corrected by one when floating point drift puts the
        value across one of its edges.
        """
        if math.isnan(value):
            logger.error("NaN observation cannot be binned.")
            raise ValueError("NaN value cannot be binned.")

        if value <= self.min_value or value >= self.max_value:
            if value < self.min_value or value > self.max_value:
                logger.debug(
                    "Value %s outside [%s, %s]; counted in an edge bin.",
                    value,
                    self.min_value,
                    self.max_value,
                )
            return 0 if value <= self.min_value else self.capacity - 1

        raw = math.floor((value - self.min_value) * self.bin_scale)
        lower = self.min_value + raw * self.bin_step
        upper = self.min_value + (raw + 1) * self.bin_step

        if value > upper:
            index = min(raw + 1, self.capacity - 1)
        elif value <= lower:
            index = max(raw - 1, 0)
        else:
            index = raw
        return min(max(index, 0), self.capacity - 1)

    def update(self, value: float) -> Histogram:
        counts = self._counts.copy()
        counts[self.bin_index(value)] += 1
        return replace(
            self,
            n=self.n + 1,
            stats=self.stats.update(value),
            _counts=_readonly(counts),
        )

    def update_all(self, values: Iterable[float]) -> Histogram:
        """Apply ``update`` for each value, left to right.

        Counts do not depend on the order of *values*; accumulator statistics
        may differ in the last bits when the order changes.
        """
        counts = self._counts.copy()
        stats = self.stats
        added = 0
        for value in values:
            counts[self.bin_index(value)] += 1
            stats = stats.update(value)
            added += 1

        logger.debug("Applied %d observations, n=%d.", added, self.n + added)
        return replace(
            self,
            n=self.n + added,
            stats=stats,
            _counts=_readonly(counts),
        )

    def quantile(self, q: float, *, strict: bool = False) -> float:
        """Estimate the *q* quantile from the bin counts.

        Returns NaN on an empty histogram. The bin holding the ``q * n``-th
        observation is located through the cumulative counts of non-empty
        bins, and observations are assumed uniform within it. When no bin
        covers the target, ``max_value`` is returned. A NaN *q* yields NaN.

        *q* is not range checked unless ``strict`` is set, in which case it
        must lie in ``(0, 1)``.
        """
        if strict and not 0.0 < q < 1.0:
            logger.error("Quantile %s outside (0, 1) in strict mode.", q)
            raise ValueError("q must be in (0, 1).")
        if self.n == 0:
            return math.nan

        target = q * self.n
        if math.isnan(target):
            return math.nan
        occupied = np.flatnonzero(self._counts)
        occupied_counts = self._counts[occupied]
        cumulative = np.cumsum(occupied_counts)
        position = int(np.searchsorted(cumulative, target, side="left"))
        if position == occupied.size:
            logger.debug(
                "Quantile %s target %.6g exceeds n=%d; returning max_value.",
                q,
                target,
                self.n,
            )
            return self.max_value

        index = int(occupied[position])
        bin_count = int(occupied_counts[position])
        covered = int(cumulative[position]) - bin_count
        estimated_bin = index + (target - covered) / bin_count
        estimate = self.min_value + estimated_bin / self.bin_scale
        logger.debug(
            "Quantile %s falls in bin %d (covered=%d count=%d): %.6g.",
            q,
            index,
            covered,
            bin_count,
            estimate,
        )
        return estimate

    def quantiles(self, qs: Iterable[float], *, strict: bool = False) -> list[float]:
        return [self.quantile(q, strict=strict) for q in qs]

    def counts(self) -> list[int]:
        return self._counts.tolist()

    def observations(self) -> int:
        return self.n

    def summary_stats(self) -> SummaryStats:
        return self.stats.summary()

    def bin_edges(self) -> list[float]:
        edges = self.min_value + np.arange(self.capacity + 1) * self.bin_step
        edges[-1] = self.max_value
        return edges.tolist()

    def report(
        self,
        quantiles: Sequence[float] = DEFAULT_REPORT_QUANTILES,
        *,
        strict: bool = False,
    ) -> HistogramReport:
        return HistogramReport(
            min_value=self.min_value,
            max_value=self.max_value,
            capacity=self.capacity,
            observations=self.n,
            edges=self.bin_edges(),
            counts=self.counts(),
            quantiles={
                _quantile_label(q): self.quantile(q, strict=strict) for q in quantiles
            },
            summary=self.summary_stats(),
        )
