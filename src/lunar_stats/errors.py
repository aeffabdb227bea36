"""Typed failures raised by the statistics engine.

Every degenerate case surfaces as one of these exceptions instead of a NaN or
an infinite value, so callers can decide to render "insufficient data".
"""
from __future__ import annotations


class LunarStatsError(ValueError):
    """Base class for recoverable engine errors."""


class EmptyPartitionError(LunarStatsError):
    """A required subset of daily records has no members."""

    def __init__(self, subset: str) -> None:
        super().__init__(f"partition '{subset}' is empty")
        self.subset = subset


class DegenerateBaselineError(LunarStatsError):
    """A ratio was requested against a zero baseline."""

    def __init__(self, what: str = "baseline average") -> None:
        super().__init__(f"{what} is zero; ratio is undefined")
        self.what = what


class InvalidPhaseValue(LunarStatsError):
    """A moon phase fraction fell outside [0, 1)."""

    def __init__(self, value: object) -> None:
        super().__init__(f"moon phase must be in [0, 1), got {value!r}")
        self.value = value


class InvalidDateRange(LunarStatsError):
    """A date in a city series was unparseable or duplicated."""


__all__ = [
    "LunarStatsError",
    "EmptyPartitionError",
    "DegenerateBaselineError",
    "InvalidPhaseValue",
    "InvalidDateRange",
]
