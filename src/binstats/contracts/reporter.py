from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from binstats.models import HistogramReport


class Reporter(ABC):
    """Render histogram reports for presentation."""

    @abstractmethod
    def render(self, report: HistogramReport, title: str) -> None:
        """Render the report to the configured output."""
        raise NotImplementedError
