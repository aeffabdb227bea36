"""Monthly and day-of-week aggregations of daily incident counts.

Both passes are order-insensitive.  Missing days are absent data: they lower
a month's ``completeness`` but never count as zero incidents.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass

import pandas as pd

from ..core.dataset import CityDataset, FRAME_COLUMNS
from ..stats.estimators import percent_change
from ..stats.significance import is_notable_change
from .profiles import Season, season_for_month, with_intensity

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


@dataclass(frozen=True)
class MonthBucket:
    month_key: str
    year: int
    month: int
    average: float
    full_moon_average: float
    full_moon_day_count: int
    has_full_moon_data: bool
    total_days: int
    days_with_data: int
    days_in_month: int
    completeness: float
    season: Season
    percent_change: float | None
    notable_change: bool
    intensity: float | None = None
    full_moon_intensity: float | None = None


@dataclass(frozen=True)
class WeekdayBucket:
    weekday: int
    name: str
    average: float
    full_moon_average: float
    full_moon_day_count: int
    has_data: bool
    has_full_moon_data: bool
    total_days: int
    percent_change: float | None
    notable_change: bool
    intensity: float | None = None
    full_moon_intensity: float | None = None

    @property
    def sample_size(self) -> int:
        return self.total_days


# ---------------------------------------------------------------------------
# Feature preparation helpers
# ---------------------------------------------------------------------------


def _as_frame(data: CityDataset | pd.DataFrame) -> pd.DataFrame:
    if isinstance(data, CityDataset):
        return data.frame()
    missing = [col for col in FRAME_COLUMNS if col not in data.columns]
    if missing:
        raise ValueError(f"DataFrame is missing required columns: {', '.join(missing)}")
    return data


def add_time_bins(df: pd.DataFrame) -> pd.DataFrame:
    """Augment the daily frame with year/month/day and Sunday-based weekday bins."""

    if df.empty:
        return df.copy()
    df = df.copy()
    dates = pd.to_datetime(df["date"])
    df["year"] = dates.dt.year
    df["month"] = dates.dt.month
    df["day"] = dates.dt.day
    # pandas counts Monday as 0; buckets are Sunday-first
    df["weekday"] = (dates.dt.dayofweek + 1) % 7
    df["full_moon_count"] = df["count"].where(df["is_full_moon"].astype(bool), 0)
    df["full_moon_flag"] = df["is_full_moon"].astype(bool).astype(int)
    return df


def _aggregate(df: pd.DataFrame, group_cols: list[str]) -> pd.DataFrame:
    return df.groupby(group_cols).agg(
        total=("count", "sum"),
        n=("count", "size"),
        days_with_data=("day", "nunique"),
        full_moon_total=("full_moon_count", "sum"),
        full_moon_n=("full_moon_flag", "sum"),
    )


def _full_moon_average(total: int, n: int) -> float:
    return total / n if n else 0.0


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def monthly_profile(data: CityDataset | pd.DataFrame) -> tuple[MonthBucket, ...]:
    """Aggregate daily records by calendar month, sorted by month key."""

    df = _as_frame(data)
    if df.empty:
        return ()
    grouped = _aggregate(add_time_bins(df), ["year", "month"]).reset_index()

    buckets: list[MonthBucket] = []
    for row in grouped.sort_values(["year", "month"]).to_dict("records"):
        year, month = int(row["year"]), int(row["month"])
        total, n = int(row["total"]), int(row["n"])
        fm_total, fm_n = int(row["full_moon_total"]), int(row["full_moon_n"])
        days_in_month = calendar.monthrange(year, month)[1]
        days_with_data = int(row["days_with_data"])
        average = total / n
        has_fm = fm_n > 0
        fm_average = _full_moon_average(fm_total, fm_n)
        change = percent_change(fm_average, average) if has_fm else None
        buckets.append(
            MonthBucket(
                month_key=f"{year:04d}-{month:02d}",
                year=year,
                month=month,
                average=average,
                full_moon_average=fm_average,
                full_moon_day_count=fm_n,
                has_full_moon_data=has_fm,
                total_days=n,
                days_with_data=days_with_data,
                days_in_month=days_in_month,
                completeness=days_with_data / days_in_month,
                season=season_for_month(month),
                percent_change=change,
                notable_change=is_notable_change(change),
            )
        )
    scaled = with_intensity(
        buckets,
        value_attr="average",
        full_moon_attr="full_moon_average",
        has_full_moon="has_full_moon_data",
    )
    return tuple(scaled)


def weekday_profile(data: CityDataset | pd.DataFrame) -> tuple[WeekdayBucket, ...]:
    """Aggregate by weekday; always returns seven Sunday-first buckets."""

    df = _as_frame(data)
    if df.empty:
        grouped = pd.DataFrame(
            0,
            index=range(7),
            columns=["total", "n", "days_with_data", "full_moon_total", "full_moon_n"],
        )
    else:
        grouped = _aggregate(add_time_bins(df), ["weekday"]).reindex(range(7), fill_value=0)

    buckets: list[WeekdayBucket] = []
    for weekday, row in grouped.iterrows():
        total, n = int(row["total"]), int(row["n"])
        fm_total, fm_n = int(row["full_moon_total"]), int(row["full_moon_n"])
        has_data = n > 0
        has_fm = fm_n > 0
        average = total / n if has_data else 0.0
        fm_average = _full_moon_average(fm_total, fm_n)
        change = percent_change(fm_average, average) if has_fm and has_data else None
        buckets.append(
            WeekdayBucket(
                weekday=int(weekday),
                name=WEEKDAY_NAMES[int(weekday)],
                average=average,
                full_moon_average=fm_average,
                full_moon_day_count=fm_n,
                has_data=has_data,
                has_full_moon_data=has_fm,
                total_days=n,
                percent_change=change,
                notable_change=is_notable_change(change),
            )
        )
    scaled = with_intensity(
        buckets,
        value_attr="average",
        full_moon_attr="full_moon_average",
        has_value="has_data",
        has_full_moon="has_full_moon_data",
    )
    return tuple(scaled)


__all__ = [
    "WEEKDAY_NAMES",
    "MonthBucket",
    "WeekdayBucket",
    "add_time_bins",
    "monthly_profile",
    "weekday_profile",
]
