"""Threshold classifiers for p-values, correlations and changes.

The 0.05 threshold is applied per city with no multiple-comparison
correction across cities.
"""
from __future__ import annotations

from enum import Enum

SIGNIFICANCE_ALPHA = 0.05
WEAK_CORRELATION = 0.1
MODERATE_CORRELATION = 0.3
TREND_THRESHOLD = 5.0
NOTABLE_CHANGE = 10.0


class Significance(str, Enum):
    SIGNIFICANT = "statistically significant"
    NOT_SIGNIFICANT = "not significant"


class CorrelationBand(str, Enum):
    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"


def is_significant(p_value: float) -> bool:
    return p_value < SIGNIFICANCE_ALPHA


def classify_significance(p_value: float) -> Significance:
    """Label ``p_value`` against the fixed 0.05 threshold."""

    if is_significant(p_value):
        return Significance.SIGNIFICANT
    return Significance.NOT_SIGNIFICANT


def correlation_band(correlation: float) -> CorrelationBand:
    """Band ``|r|``: below 0.1 weak, below 0.3 moderate, otherwise strong."""

    magnitude = abs(correlation)
    if magnitude < WEAK_CORRELATION:
        return CorrelationBand.WEAK
    if magnitude < MODERATE_CORRELATION:
        return CorrelationBand.MODERATE
    return CorrelationBand.STRONG


def trend_direction(percent_difference: float | None) -> Trend | None:
    if percent_difference is None:
        return None
    if percent_difference > TREND_THRESHOLD:
        return Trend.UP
    if percent_difference < -TREND_THRESHOLD:
        return Trend.DOWN
    return Trend.FLAT


def is_notable_change(percent: float | None) -> bool:
    """True when a bucket's full-moon change exceeds 10% either way."""

    return percent is not None and abs(percent) > NOTABLE_CHANGE


__all__ = [
    "SIGNIFICANCE_ALPHA",
    "Significance",
    "CorrelationBand",
    "Trend",
    "is_significant",
    "classify_significance",
    "correlation_band",
    "trend_direction",
    "is_notable_change",
]
