import math
from datetime import date

import pytest

from lunar_stats.core.dataset import DailyRecord
from lunar_stats.errors import EmptyPartitionError
from lunar_stats.temporal import synthetic


def test_hourly_rates_are_deterministic():
    first = synthetic.hourly_rates(3.2)
    second = synthetic.hourly_rates(3.2)
    assert first == second
    assert first.synthetic is True
    assert "not measured" in first.method
    assert [h.hour for h in first.hours] == list(range(24))
    assert all(h.synthetic for h in first.hours)


def test_sinusoidal_factor_range():
    assert synthetic.sinusoidal_factor(12) == pytest.approx(2.5)
    assert synthetic.sinusoidal_factor(0) == pytest.approx(0.5)
    assert synthetic.sinusoidal_factor(6) == pytest.approx(1.5)
    factors = [synthetic.sinusoidal_factor(h) for h in range(24)]
    assert max(factors) == factors[12]


def test_jitter_bounds():
    for hour in range(24):
        for salt in (1, 2):
            value = synthetic.jitter(hour, salt)
            assert 0.0 <= value < 1.0
    assert synthetic.seeded_random(0) == 0.0
    x = math.sin(1000) * 10000
    assert synthetic.jitter(1, 1) == pytest.approx(x - math.floor(x))


def test_rates_stay_inside_jitter_bands():
    profile = synthetic.hourly_rates(2.0)
    for slot in profile.hours:
        scale = 2.0 * synthetic.sinusoidal_factor(slot.hour)
        assert scale * 0.8 <= slot.baseline_rate <= scale * 1.2
        assert scale * 1.0 <= slot.full_moon_rate <= scale * 1.6
        assert slot.percent_change == pytest.approx(
            (slot.full_moon_rate - slot.baseline_rate) / slot.baseline_rate * 100
        )
    assert profile.hours[0].baseline_rate == pytest.approx(2.0 * 0.5 * 0.8)
    assert max(h.intensity for h in profile.hours) == 1.0


def test_rates_scale_with_city_mean():
    one = synthetic.hourly_rates(1.0)
    three = synthetic.hourly_rates(3.0)
    for a, b in zip(one.hours, three.hours):
        assert b.baseline_rate == pytest.approx(3 * a.baseline_rate)
        assert b.full_moon_rate == pytest.approx(3 * a.full_moon_rate)


def test_hour_labels_and_day_night():
    profile = synthetic.hourly_rates(1.0)
    assert profile.hours[0].label == "12 AM"
    assert profile.hours[13].label == "1 PM"
    assert profile.hours[5].time_of_day == "night"
    assert profile.hours[12].time_of_day == "day"


def test_hourly_profile_from_records():
    records = [
        DailyRecord(date(2023, 1, 1), 2, 0.1, False),
        DailyRecord(date(2023, 1, 2), 4, 0.7, True),
    ]
    profile = synthetic.hourly_profile(records)
    assert profile.city_mean == 3.0
    assert profile == synthetic.hourly_rates(3.0)


def test_hourly_profile_requires_data():
    with pytest.raises(EmptyPartitionError):
        synthetic.hourly_profile([])
