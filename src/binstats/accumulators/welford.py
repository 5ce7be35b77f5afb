from __future__ import annotations

import math
from dataclasses import dataclass, replace

from binstats.contracts import SampleAccumulator
from binstats.models import SummaryStats


@dataclass(frozen=True)
class WelfordAccumulator(SampleAccumulator):
    """Running count, mean and variance via Welford's update."""

    count: int = 0
    mean: float = 0.0
    m2: float = 0.0
    min: float = math.inf
    max: float = -math.inf

    def update(self, value: float) -> WelfordAccumulator:
        value = float(value)
        count = self.count + 1
        delta = value - self.mean
        mean = self.mean + delta / count
        m2 = self.m2 + delta * (value - mean)
        return replace(
            self,
            count=count,
            mean=mean,
            m2=m2,
            min=min(self.min, value),
            max=max(self.max, value),
        )

    def summary(self) -> SummaryStats:
        if self.count == 0:
            return SummaryStats(
                count=0,
                min=math.nan,
                mean=math.nan,
                max=math.nan,
                variance=math.nan,
                std=math.nan,
            )

        # Sample variance; a single observation has no spread estimate.
        variance = self.m2 / (self.count - 1) if self.count > 1 else math.nan
        std = math.sqrt(max(variance, 0.0)) if self.count > 1 else math.nan
        return SummaryStats(
            count=self.count,
            min=self.min,
            mean=self.mean,
            max=self.max,
            variance=variance,
            std=std,
        )
