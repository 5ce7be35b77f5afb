from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from binstats.models import SummaryStats


class SampleAccumulator(ABC):
    """Running statistics over a stream of observations.

    Accumulators are values: ``update`` returns a new accumulator and leaves
    the receiver untouched. A fresh accumulator is obtained by calling its
    zero-argument factory (usually the class itself).
    """

    @abstractmethod
    def update(self, value: float) -> SampleAccumulator:
        """Return a new accumulator that includes *value*."""
        raise NotImplementedError

    @abstractmethod
    def summary(self) -> SummaryStats:
        """Return the statistical summary of all values seen so far."""
        raise NotImplementedError
