from __future__ import annotations

import random
from datetime import date, timedelta

import pytest

from lunar_stats.core.dataset import build_dataset
from lunar_stats.stats.estimators import mean_count
from lunar_stats.temporal import compute
from lunar_stats.temporal.profiles import Season, hour_label, season_for_month, time_of_day


def _rows(start: date, days: int, *, count=lambda d: 3, full=lambda d: False):
    out = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        out.append(
            {
                "date": day.isoformat(),
                "count": count(day),
                "moon_phase": 0.7 if full(day) else 0.3,
                "is_full_moon": full(day),
            }
        )
    return out


def _dataset(rows):
    return build_dataset("TEST", correlation=0.1, p_value=0.5, rows=rows)


def test_full_month_is_complete():
    ds = _dataset(_rows(date(2023, 1, 1), 31))
    (bucket,) = compute.monthly_profile(ds)
    assert bucket.month_key == "2023-01"
    assert bucket.days_in_month == 31
    assert bucket.completeness == 1.0
    assert bucket.season is Season.WINTER


def test_leap_february():
    leap = compute.monthly_profile(_dataset(_rows(date(2024, 2, 1), 29)))
    assert [b.days_in_month for b in leap] == [29]
    assert leap[0].completeness == 1.0
    common = compute.monthly_profile(_dataset(_rows(date(2023, 2, 1), 28)))
    assert common[0].days_in_month == 28
    assert common[0].completeness == 1.0


def test_missing_days_lower_completeness_not_average():
    ds = _dataset(_rows(date(2023, 1, 1), 10, count=lambda d: d.day))
    (bucket,) = compute.monthly_profile(ds)
    assert bucket.total_days == 10
    assert bucket.days_with_data == 10
    assert bucket.completeness == pytest.approx(10 / 31)
    assert bucket.average == 5.5


def test_month_average_matches_estimator():
    rows = _rows(date(2023, 3, 1), 31, count=lambda d: (d.day * 7) % 11)
    ds = _dataset(rows)
    (bucket,) = compute.monthly_profile(ds)
    assert bucket.average == mean_count(ds.daily_data)
    assert bucket.season is Season.SPRING


def test_month_without_full_moon_has_no_change():
    rows = _rows(date(2023, 1, 1), 31) + _rows(
        date(2023, 2, 1), 28, count=lambda d: 6 if d.day in (5, 6) else 4, full=lambda d: d.day in (5, 6)
    )
    jan, feb = compute.monthly_profile(_dataset(rows))
    assert jan.has_full_moon_data is False
    assert jan.full_moon_average == 0.0
    assert jan.percent_change is None
    assert jan.full_moon_intensity is None
    assert feb.has_full_moon_data is True
    assert feb.full_moon_day_count == 2
    assert feb.full_moon_average == 6.0
    assert feb.percent_change == pytest.approx((6.0 - feb.average) / feb.average * 100)
    assert feb.notable_change is True
    assert feb.full_moon_intensity == 1.0


def test_monthly_is_order_insensitive_and_sorted():
    rows = _rows(date(2022, 11, 15), 90, count=lambda d: d.day % 5)
    shuffled = list(rows)
    random.Random(7).shuffle(shuffled)
    ordered = compute.monthly_profile(_dataset(rows))
    assert compute.monthly_profile(_dataset(shuffled)) == ordered
    assert [b.month_key for b in ordered] == ["2022-11", "2022-12", "2023-01", "2023-02"]
    assert max(b.intensity for b in ordered) == 1.0


def test_weekday_full_year():
    rows = _rows(date(2023, 1, 1), 365, count=lambda d: d.weekday() + 1, full=lambda d: d.day == 15)
    buckets = compute.weekday_profile(_dataset(rows))
    assert len(buckets) == 7
    assert [b.name for b in buckets] == list(compute.WEEKDAY_NAMES)
    assert buckets[0].name == "Sunday"
    assert sum(b.total_days for b in buckets) == 365
    # 2023 starts and ends on a Sunday
    assert buckets[0].total_days == 53
    assert all(b.total_days == 52 for b in buckets[1:])
    # date.weekday() counts Monday as 0, so Sunday carries 7
    assert buckets[0].average == 7.0
    assert buckets[1].average == 1.0


def test_weekday_empty_buckets_are_flagged():
    # 2023-01-02 is a Monday
    rows = _rows(date(2023, 1, 2), 3, count=lambda d: 4, full=lambda d: d.day == 3)
    buckets = compute.weekday_profile(_dataset(rows))
    assert len(buckets) == 7
    empty = [b for b in buckets if not b.has_data]
    assert [b.name for b in empty] == ["Sunday", "Thursday", "Friday", "Saturday"]
    for bucket in empty:
        assert bucket.sample_size == 0
        assert bucket.average == 0.0
        assert bucket.percent_change is None
        assert bucket.intensity is None
    tuesday = buckets[2]
    assert tuesday.has_full_moon_data
    assert tuesday.percent_change == 0.0
    assert buckets[1].has_full_moon_data is False
    assert buckets[1].percent_change is None


def test_empty_dataset():
    ds = _dataset([])
    assert compute.monthly_profile(ds) == ()
    buckets = compute.weekday_profile(ds)
    assert len(buckets) == 7
    assert not any(b.has_data for b in buckets)


def test_profile_helpers():
    assert [season_for_month(m) for m in (12, 1, 2)] == [Season.WINTER] * 3
    assert season_for_month(6) is Season.SUMMER
    assert season_for_month(11) is Season.FALL
    assert hour_label(0) == "12 AM"
    assert hour_label(12) == "12 PM"
    assert hour_label(15) == "3 PM"
    assert hour_label(9) == "9 AM"
    assert time_of_day(6) == "day"
    assert time_of_day(17) == "day"
    assert time_of_day(18) == "night"
    assert time_of_day(2) == "night"
