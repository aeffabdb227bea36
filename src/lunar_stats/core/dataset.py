"""Daily record snapshots for a single city.

A :class:`CityDataset` is built once from already-parsed rows and never
mutated afterwards.  Every derived statistic is a pure function of it, and
``version`` gives a stable content hash used to key memoised results.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import date, datetime
from functools import cached_property
from typing import Any, Iterable, Mapping

import pandas as pd

from ..errors import InvalidDateRange

FRAME_COLUMNS = ["date", "count", "moon_phase", "is_full_moon"]


@dataclass(frozen=True)
class DailyRecord:
    """Incident count for one calendar day."""

    date: date
    count: int
    moon_phase: float
    is_full_moon: bool


@dataclass(frozen=True)
class CityDataset:
    city: str
    correlation: float
    p_value: float
    daily_data: tuple[DailyRecord, ...]

    @property
    def day_count(self) -> int:
        return len(self.daily_data)

    @property
    def total_incidents(self) -> int:
        return sum(rec.count for rec in self.daily_data)

    @cached_property
    def version(self) -> str:
        """Content hash of the snapshot, independent of record order."""

        digest = hashlib.sha1()
        digest.update(f"{self.city}|{self.correlation!r}|{self.p_value!r}".encode())
        for rec in sorted(self.daily_data, key=lambda r: r.date):
            line = f"{rec.date.isoformat()}|{rec.count}|{rec.moon_phase!r}|{int(rec.is_full_moon)}"
            digest.update(line.encode())
        return digest.hexdigest()

    def frame(self) -> pd.DataFrame:
        """Return the records as a dataframe sorted by date."""

        if not self.daily_data:
            return pd.DataFrame(columns=FRAME_COLUMNS)
        df = pd.DataFrame(
            {
                "date": pd.to_datetime([rec.date for rec in self.daily_data]),
                "count": [int(rec.count) for rec in self.daily_data],
                "moon_phase": [float(rec.moon_phase) for rec in self.daily_data],
                "is_full_moon": [bool(rec.is_full_moon) for rec in self.daily_data],
            }
        )
        return df.sort_values("date").reset_index(drop=True)


def _parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def coerce_date(value: Any) -> date:
    """Return the calendar date for ``value`` or raise :class:`InvalidDateRange`."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateRange(f"unparseable date: {value!r}")
    text = value.strip()
    try:
        if "T" in text or text.endswith("Z"):
            return _parse_timestamp(text).date()
        if " " in text:
            return datetime.strptime(text, "%Y-%m-%d %H:%M:%S").date()
        return date.fromisoformat(text)
    except ValueError as exc:
        raise InvalidDateRange(f"unparseable date: {value!r}") from exc


def _to_record(row: DailyRecord | Mapping[str, Any]) -> DailyRecord:
    if isinstance(row, DailyRecord):
        return row
    return DailyRecord(
        date=coerce_date(row["date"]),
        count=int(row["count"]),
        moon_phase=float(row["moon_phase"]),
        is_full_moon=bool(row["is_full_moon"]),
    )


def build_dataset(
    city: str,
    *,
    correlation: float,
    p_value: float,
    rows: Iterable[DailyRecord | Mapping[str, Any]],
) -> CityDataset:
    """Build an immutable city snapshot, rejecting duplicate dates."""

    records: list[DailyRecord] = []
    seen: set[date] = set()
    for row in rows:
        rec = _to_record(row)
        if rec.date in seen:
            raise InvalidDateRange(f"duplicate date {rec.date.isoformat()} in {city} series")
        seen.add(rec.date)
        records.append(rec)
    records.sort(key=lambda r: r.date)
    return CityDataset(
        city=city,
        correlation=float(correlation),
        p_value=float(p_value),
        daily_data=tuple(records),
    )


def analysis_period(dataset: CityDataset) -> str | None:
    """Return ``"2023"`` for a single-year series or ``"2021-2023"`` otherwise."""

    if not dataset.daily_data:
        return None
    years = {rec.date.year for rec in dataset.daily_data}
    if len(years) == 1:
        return str(next(iter(years)))
    return f"{min(years)}-{max(years)}"


__all__ = [
    "DailyRecord",
    "CityDataset",
    "FRAME_COLUMNS",
    "coerce_date",
    "build_dataset",
    "analysis_period",
]
