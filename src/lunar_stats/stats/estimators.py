"""Group-average and effect-size estimators.

All display surfaces go through these helpers so the full-moon statistics
are computed by one formula.  Degenerate inputs raise instead of producing
NaN or infinity.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence, Tuple

from ..core.dataset import DailyRecord
from ..errors import DegenerateBaselineError, EmptyPartitionError

Predicate = Callable[[DailyRecord], bool]


@dataclass(frozen=True)
class GroupStats:
    average: float
    sample_size: int


@dataclass(frozen=True)
class EffectSize:
    """Relative difference of a treatment group against its baseline.

    Positive ``percent_difference`` means the treatment (full-moon) rate is
    elevated.
    """

    percent_difference: float
    normalized_ratio: float


def is_full_moon(rec: DailyRecord) -> bool:
    return rec.is_full_moon


def mean_count(records: Sequence[DailyRecord], subset: str = "records") -> float:
    """Arithmetic mean of ``count``; raises when ``records`` is empty."""

    if not records:
        raise EmptyPartitionError(subset)
    return sum(rec.count for rec in records) / len(records)


def partition(
    records: Iterable[DailyRecord], predicate: Predicate
) -> Tuple[list[DailyRecord], list[DailyRecord]]:
    """Split records into (matched, unmatched) without loss or duplication."""

    matched: list[DailyRecord] = []
    unmatched: list[DailyRecord] = []
    for rec in records:
        (matched if predicate(rec) else unmatched).append(rec)
    return matched, unmatched


def group_average(
    records: Iterable[DailyRecord],
    predicate: Predicate = is_full_moon,
    *,
    labels: Tuple[str, str] = ("full moon", "non-full moon"),
) -> Tuple[GroupStats, GroupStats]:
    """Return ``(treatment, baseline)`` group statistics for ``predicate``."""

    matched, unmatched = partition(records, predicate)
    treatment = GroupStats(mean_count(matched, labels[0]), len(matched))
    baseline = GroupStats(mean_count(unmatched, labels[1]), len(unmatched))
    return treatment, baseline


def effect_size(treatment: GroupStats, baseline: GroupStats) -> EffectSize:
    """Percent difference and normalized ratio of ``treatment`` over ``baseline``."""

    if baseline.average == 0:
        raise DegenerateBaselineError()
    return EffectSize(
        percent_difference=(treatment.average - baseline.average) / baseline.average * 100,
        normalized_ratio=treatment.average / baseline.average,
    )


def percent_change(value: float | None, reference: float | None) -> float | None:
    """Return ``(value / reference - 1) * 100`` or ``None`` when undefined."""

    if value is None or reference is None or reference == 0:
        return None
    return (value / reference - 1) * 100


def safe_ratio(value: float | None, maximum: float | None) -> float | None:
    """Scale ``value`` against ``maximum``; ``None`` when the scale is zero."""

    if value is None or not maximum:
        return None
    return value / maximum


__all__ = [
    "GroupStats",
    "EffectSize",
    "Predicate",
    "is_full_moon",
    "mean_count",
    "partition",
    "group_average",
    "effect_size",
    "percent_change",
    "safe_ratio",
]
