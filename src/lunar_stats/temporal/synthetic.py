"""Modelled hour-of-day profile.

No per-hour incident data exists, so this curve is illustrative only: a
sinusoidal shape scaled by the city-wide daily mean and perturbed by a fixed
pseudo-random jitter.  It is reproducible, not statistically meaningful, and
every result carries ``synthetic=True``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

from ..core.dataset import CityDataset, DailyRecord
from ..stats.estimators import mean_count, percent_change
from ..stats.significance import is_notable_change
from .profiles import hour_label, time_of_day, with_intensity

HOURS = 24
BASELINE_SALT = 1
FULL_MOON_SALT = 2
# jitter maps [0, 1) onto these (offset, span) ranges
BASELINE_JITTER = (0.8, 0.4)
FULL_MOON_JITTER = (1.0, 0.6)


@dataclass(frozen=True)
class HourProfile:
    hour: int
    label: str
    time_of_day: str
    baseline_rate: float
    full_moon_rate: float
    percent_change: float | None
    notable_change: bool
    intensity: float | None = None
    full_moon_intensity: float | None = None
    synthetic: bool = field(default=True, init=False)


@dataclass(frozen=True)
class HourlyProfile:
    city_mean: float
    hours: tuple[HourProfile, ...]
    synthetic: bool = field(default=True, init=False)
    method: str = field(
        default="sinusoidal model scaled by city mean with seeded jitter; not measured",
        init=False,
    )


def seeded_random(seed: float) -> float:
    """Deterministic value in [0, 1) derived from ``sin(seed)``."""

    x = math.sin(seed) * 10000
    return x - math.floor(x)


def jitter(hour: int, salt: int) -> float:
    return seeded_random(hour * 1000 * salt)


def sinusoidal_factor(hour: int) -> float:
    return math.sin((hour - 6) * math.pi / 12) + 1.5


def hourly_rates(city_mean: float) -> HourlyProfile:
    """Build the 24-slot modelled profile for a city-wide daily mean."""

    hours: list[HourProfile] = []
    for hour in range(HOURS):
        factor = sinusoidal_factor(hour)
        base_offset, base_span = BASELINE_JITTER
        fm_offset, fm_span = FULL_MOON_JITTER
        baseline = city_mean * factor * (jitter(hour, BASELINE_SALT) * base_span + base_offset)
        full_moon = city_mean * factor * (jitter(hour, FULL_MOON_SALT) * fm_span + fm_offset)
        change = percent_change(full_moon, baseline)
        hours.append(
            HourProfile(
                hour=hour,
                label=hour_label(hour),
                time_of_day=time_of_day(hour),
                baseline_rate=baseline,
                full_moon_rate=full_moon,
                percent_change=change,
                notable_change=is_notable_change(change),
            )
        )
    scaled = with_intensity(hours, value_attr="baseline_rate", full_moon_attr="full_moon_rate")
    return HourlyProfile(city_mean=city_mean, hours=tuple(scaled))


def hourly_profile(data: CityDataset | Iterable[DailyRecord]) -> HourlyProfile:
    """Modelled hourly profile for a dataset; raises on an empty series."""

    records = data.daily_data if isinstance(data, CityDataset) else tuple(data)
    return hourly_rates(mean_count(records, "daily records"))


__all__ = [
    "HourProfile",
    "HourlyProfile",
    "seeded_random",
    "jitter",
    "sinusoidal_factor",
    "hourly_rates",
    "hourly_profile",
]
