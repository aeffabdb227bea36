"""Statistics engine for lunar phase vs. daily incident counts."""

from .core.dataset import CityDataset, DailyRecord, build_dataset
from .engine import AnalysisEngine
from .errors import (
    DegenerateBaselineError,
    EmptyPartitionError,
    InvalidDateRange,
    InvalidPhaseValue,
    LunarStatsError,
)

__all__ = [
    "AnalysisEngine",
    "CityDataset",
    "DailyRecord",
    "build_dataset",
    "LunarStatsError",
    "EmptyPartitionError",
    "DegenerateBaselineError",
    "InvalidPhaseValue",
    "InvalidDateRange",
]
