from datetime import date, timedelta

import pytest

from lunar_stats.core.dataset import DailyRecord
from lunar_stats.errors import DegenerateBaselineError, EmptyPartitionError
from lunar_stats.stats import estimators
from lunar_stats.stats.estimators import GroupStats


def make_records(layout):
    """Build consecutive daily records from ``[(count, is_full_moon, repeat), ...]``."""

    day = date(2023, 1, 1)
    out = []
    for count, full, repeat in layout:
        for _ in range(repeat):
            out.append(DailyRecord(day, count, 0.7 if full else 0.2, full))
            day += timedelta(days=1)
    return out


def test_full_moon_example():
    records = make_records([(5, False, 10), (8, True, 3)])
    treatment, baseline = estimators.group_average(records)
    assert baseline == GroupStats(average=5.0, sample_size=10)
    assert treatment == GroupStats(average=8.0, sample_size=3)
    effect = estimators.effect_size(treatment, baseline)
    assert effect.percent_difference == pytest.approx(60.0)
    assert effect.normalized_ratio == pytest.approx(1.6)


def test_partition_is_disjoint_and_complete():
    records = make_records([(1, False, 4), (3, True, 2), (2, False, 5), (7, True, 1)])
    matched, unmatched = estimators.partition(records, estimators.is_full_moon)
    assert not set(matched) & set(unmatched)
    assert sorted(matched + unmatched, key=lambda r: r.date) == records
    assert all(r.is_full_moon for r in matched)
    assert not any(r.is_full_moon for r in unmatched)


def test_group_average_with_custom_predicate():
    records = make_records([(1, False, 2), (10, False, 2)])
    high, low = estimators.group_average(records, lambda r: r.count > 5, labels=("high", "low"))
    assert high.average == 10.0
    assert low.average == 1.0


def test_empty_partition_raises():
    with pytest.raises(EmptyPartitionError) as exc:
        estimators.group_average(make_records([(4, False, 5)]))
    assert exc.value.subset == "full moon"
    with pytest.raises(EmptyPartitionError):
        estimators.group_average(make_records([(4, True, 5)]))
    with pytest.raises(EmptyPartitionError):
        estimators.group_average([])


def test_degenerate_baseline_raises():
    with pytest.raises(DegenerateBaselineError):
        estimators.effect_size(GroupStats(2.0, 3), GroupStats(0.0, 10))


@pytest.mark.parametrize(
    "treatment, baseline",
    [(5.0, 5.0), (0.0, 3.0), (4.5, 3.0), (1.0, 7.0), (2.5, 2.5)],
)
def test_ratio_one_iff_no_difference(treatment, baseline):
    effect = estimators.effect_size(GroupStats(treatment, 1), GroupStats(baseline, 1))
    assert (effect.normalized_ratio == 1) == (effect.percent_difference == 0)


def test_negative_effect_keeps_sign():
    effect = estimators.effect_size(GroupStats(2.0, 2), GroupStats(3.0, 12))
    assert effect.percent_difference < 0
    assert effect.normalized_ratio == pytest.approx(2 / 3)


def test_percent_change_and_safe_ratio():
    assert estimators.percent_change(6.0, 4.0) == pytest.approx(50.0)
    assert estimators.percent_change(6.0, 0.0) is None
    assert estimators.percent_change(None, 4.0) is None
    assert estimators.safe_ratio(2.0, 4.0) == 0.5
    assert estimators.safe_ratio(2.0, 0.0) is None
    assert estimators.safe_ratio(None, 4.0) is None
