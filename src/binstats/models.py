from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class SummaryStats(BaseModel):
    """Running summary of the observations fed to a histogram.

    Undefined moments are reported as NaN: ``min``, ``mean`` and ``max``
    with no samples, ``variance`` and ``std`` with fewer than two.
    """

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    count: int
    min: float
    mean: float
    max: float
    variance: float
    std: float


class HistogramConfig(BaseModel):
    """Validated construction parameters for a histogram."""

    model_config = ConfigDict(extra="forbid", strict=True)

    min_value: float
    max_value: float
    capacity: int

    @field_validator("capacity")
    @classmethod
    def _check_capacity(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("capacity must be positive.")
        return value

    @model_validator(mode="after")
    def _check_range(self) -> HistogramConfig:
        if not math.isfinite(self.min_value) or not math.isfinite(self.max_value):
            raise ValueError("min_value and max_value must be finite.")
        if self.max_value <= self.min_value:
            raise ValueError("max_value must be greater than min_value.")
        return self


class HistogramReport(BaseModel):
    """Immutable snapshot of a histogram for presentation."""

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    min_value: float
    max_value: float
    capacity: int
    observations: int
    edges: list[float]
    counts: list[int]
    quantiles: dict[str, float]
    summary: SummaryStats
