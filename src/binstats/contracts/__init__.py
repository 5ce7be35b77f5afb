from .reporter import Reporter
from .sample_accumulator import SampleAccumulator

__all__ = [
    "Reporter",
    "SampleAccumulator",
]
