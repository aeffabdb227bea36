"""Cross-city comparison of per-city statistics."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import combinations
from typing import Dict, Mapping, Sequence

from ..errors import DegenerateBaselineError, EmptyPartitionError, LunarStatsError
from ..stats.estimators import safe_ratio
from ..stats.runner import CityStatistics

logger = logging.getLogger(__name__)

# Partial credit per significant city.  Two of three cities give 66.66, not
# 66.67; the rounding error is kept as published.
SIGNIFICANCE_CREDIT = 33.33


@dataclass(frozen=True)
class CityShare:
    city: str
    total_incidents: int
    percent_difference: float | None
    is_significant: bool
    incident_share: float | None
    effect_share: float | None


@dataclass(frozen=True)
class CrossCityComparison:
    cities: tuple[str, ...]
    population_factor: float | None
    effect_consistency: float | None
    combined_significance: float
    significant_count: int
    most_pronounced_city: str | None
    most_pronounced_effect: float | None
    max_effect_magnitude: float | None
    shares: tuple[CityShare, ...]
    errors: Dict[str, str] = field(default_factory=dict)


def population_factor(stats: Sequence[CityStatistics]) -> float:
    """Ratio of the largest to the smallest city incident total."""

    if not stats:
        raise EmptyPartitionError("cities")
    totals = [s.total_incidents for s in stats]
    smallest = min(totals)
    if smallest == 0:
        raise DegenerateBaselineError("smallest city incident total")
    return max(totals) / smallest


def _effects(stats: Sequence[CityStatistics]) -> Dict[str, float]:
    effects: Dict[str, float] = {}
    for s in stats:
        if s.percent_difference is None:
            raise LunarStatsError(f"{s.city}: effect size unavailable")
        effects[s.city] = s.percent_difference
    return effects


def effect_consistency(stats: Sequence[CityStatistics]) -> float:
    """Largest pairwise gap between city percent differences."""

    effects = _effects(stats)
    pairs = list(combinations(effects.values(), 2))
    if not pairs:
        raise EmptyPartitionError("city pairs")
    return max(abs(a - b) for a, b in pairs)


def combined_significance(flags: Sequence[bool]) -> float:
    """100 when every city is significant, else 33.33 per significant city."""

    if flags and all(flags):
        return 100.0
    return float(sum(SIGNIFICANCE_CREDIT for flag in flags if flag))


def most_pronounced(stats: Sequence[CityStatistics]) -> tuple[str, float] | None:
    """City with the largest absolute percent difference (first wins ties)."""

    candidates = [(s.city, s.percent_difference) for s in stats if s.percent_difference is not None]
    if not candidates:
        return None
    return max(candidates, key=lambda item: abs(item[1]))


def compare_cities(stats: Mapping[str, CityStatistics] | Sequence[CityStatistics]) -> CrossCityComparison:
    """Combine per-city results; each metric fails independently."""

    items = list(stats.values()) if isinstance(stats, Mapping) else list(stats)
    errors: Dict[str, str] = {}

    factor: float | None = None
    try:
        factor = population_factor(items)
    except LunarStatsError as exc:
        errors["population_factor"] = str(exc)
    consistency: float | None = None
    try:
        consistency = effect_consistency(items)
    except LunarStatsError as exc:
        errors["effect_consistency"] = str(exc)
    for key, message in errors.items():
        logger.warning("comparison %s unavailable: %s", key, message)

    flags = [s.is_significant for s in items]
    pronounced = most_pronounced(items)
    magnitudes = [abs(s.percent_difference) for s in items if s.percent_difference is not None]
    max_effect = max(magnitudes) if magnitudes else None
    max_total = max((s.total_incidents for s in items), default=None)

    shares = tuple(
        CityShare(
            city=s.city,
            total_incidents=s.total_incidents,
            percent_difference=s.percent_difference,
            is_significant=s.is_significant,
            incident_share=_share(s.total_incidents, max_total),
            effect_share=_share(
                abs(s.percent_difference) if s.percent_difference is not None else None,
                max_effect,
            ),
        )
        for s in items
    )
    return CrossCityComparison(
        cities=tuple(s.city for s in items),
        population_factor=factor,
        effect_consistency=consistency,
        combined_significance=combined_significance(flags),
        significant_count=sum(flags),
        most_pronounced_city=pronounced[0] if pronounced else None,
        most_pronounced_effect=pronounced[1] if pronounced else None,
        max_effect_magnitude=max_effect,
        shares=shares,
        errors=errors,
    )


def _share(value: float | None, maximum: float | None) -> float | None:
    ratio = safe_ratio(value, maximum)
    return ratio * 100 if ratio is not None else None


__all__ = [
    "SIGNIFICANCE_CREDIT",
    "CityShare",
    "CrossCityComparison",
    "population_factor",
    "effect_consistency",
    "combined_significance",
    "most_pronounced",
    "compare_cities",
]
