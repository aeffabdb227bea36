"""Per-city statistics object shared by every display surface."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict

from ..core.dataset import CityDataset, DailyRecord, analysis_period
from ..errors import LunarStatsError
from .estimators import EffectSize, GroupStats, effect_size, is_full_moon, mean_count, partition
from .significance import (
    CorrelationBand,
    Significance,
    Trend,
    classify_significance,
    correlation_band,
    is_significant,
    trend_direction,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CityStatistics:
    city: str
    day_count: int
    total_incidents: int
    full_moon_days: int
    non_full_moon_days: int
    correlation: float
    p_value: float
    significance: Significance
    is_significant: bool
    correlation_band: CorrelationBand
    analysis_period: str | None
    treatment: GroupStats | None
    baseline: GroupStats | None
    effect: EffectSize | None
    trend: Trend | None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def percent_difference(self) -> float | None:
        return self.effect.percent_difference if self.effect is not None else None


def _group_stats(
    city: str, subset: list[DailyRecord], label: str, key: str, errors: Dict[str, str]
) -> GroupStats | None:
    try:
        return GroupStats(mean_count(subset, label), len(subset))
    except LunarStatsError as exc:
        errors[key] = str(exc)
        logger.warning("%s: %s average unavailable: %s", city, label, exc)
        return None


def run_city_statistics(dataset: CityDataset) -> CityStatistics:
    """Compute the full-moon split, effect size and significance for one city.

    A failing statistic leaves its field ``None`` and records the reason in
    ``errors`` while the remaining fields are still computed.
    """

    errors: Dict[str, str] = {}
    effect: EffectSize | None = None

    full_moon, other = partition(dataset.daily_data, is_full_moon)
    treatment = _group_stats(dataset.city, full_moon, "full moon", "treatment", errors)
    baseline = _group_stats(dataset.city, other, "non-full moon", "baseline", errors)
    if treatment is not None and baseline is not None:
        try:
            effect = effect_size(treatment, baseline)
        except LunarStatsError as exc:
            errors["effect"] = str(exc)
            logger.warning("%s: effect size unavailable: %s", dataset.city, exc)

    return CityStatistics(
        city=dataset.city,
        day_count=dataset.day_count,
        total_incidents=dataset.total_incidents,
        full_moon_days=len(full_moon),
        non_full_moon_days=len(other),
        correlation=dataset.correlation,
        p_value=dataset.p_value,
        significance=classify_significance(dataset.p_value),
        is_significant=is_significant(dataset.p_value),
        correlation_band=correlation_band(dataset.correlation),
        analysis_period=analysis_period(dataset),
        treatment=treatment,
        baseline=baseline,
        effect=effect,
        trend=trend_direction(effect.percent_difference if effect else None),
        errors=errors,
    )


__all__ = ["CityStatistics", "run_city_statistics"]
