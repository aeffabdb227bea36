"""Helpers to decorate and summarise temporal profiles."""
from __future__ import annotations

from dataclasses import asdict, is_dataclass, replace
from enum import Enum
from typing import Any, Dict, Sequence, TypeVar

from ..stats.estimators import safe_ratio

B = TypeVar("B")


class Season(str, Enum):
    SPRING = "Spring"
    SUMMER = "Summer"
    FALL = "Fall"
    WINTER = "Winter"


def season_for_month(month: int) -> Season:
    """Meteorological season for a 1-based month number."""

    if 3 <= month <= 5:
        return Season.SPRING
    if 6 <= month <= 8:
        return Season.SUMMER
    if 9 <= month <= 11:
        return Season.FALL
    return Season.WINTER


def hour_label(hour: int) -> str:
    """Twelve-hour clock label, e.g. ``12 AM``, ``3 PM``."""

    if hour == 0:
        return "12 AM"
    if hour == 12:
        return "12 PM"
    if hour > 12:
        return f"{hour - 12} PM"
    return f"{hour} AM"


def time_of_day(hour: int) -> str:
    return "day" if 6 <= hour < 18 else "night"


def with_intensity(
    buckets: Sequence[B],
    *,
    value_attr: str,
    full_moon_attr: str,
    has_value: str | None = None,
    has_full_moon: str | None = None,
) -> list[B]:
    """Attach ``intensity``/``full_moon_intensity`` relative to the bucket maxima.

    Buckets whose flag attribute is false are left out of the maxima and keep
    ``None`` intensities.
    """

    def _eligible(bucket: B, flag: str | None) -> bool:
        return flag is None or bool(getattr(bucket, flag))

    values = [getattr(b, value_attr) for b in buckets if _eligible(b, has_value)]
    fm_values = [getattr(b, full_moon_attr) for b in buckets if _eligible(b, has_full_moon)]
    max_value = max(values) if values else None
    max_fm = max(fm_values) if fm_values else None
    out: list[B] = []
    for bucket in buckets:
        intensity = (
            safe_ratio(getattr(bucket, value_attr), max_value)
            if _eligible(bucket, has_value)
            else None
        )
        fm_intensity = (
            safe_ratio(getattr(bucket, full_moon_attr), max_fm)
            if _eligible(bucket, has_full_moon)
            else None
        )
        out.append(replace(bucket, intensity=intensity, full_moon_intensity=fm_intensity))
    return out


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(_plain(k)): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


def to_serialisable(obj: Any) -> Any:
    """Return a JSON-friendly representation of derived-value objects."""

    if is_dataclass(obj) and not isinstance(obj, type):
        payload: Dict[str, Any] = asdict(obj)
        for name in ("synthetic", "sample_size"):
            if hasattr(obj, name) and name not in payload:
                payload[name] = getattr(obj, name)
        return _plain(payload)
    if isinstance(obj, (list, tuple)):
        return [to_serialisable(item) for item in obj]
    if isinstance(obj, dict):
        return {str(_plain(k)): to_serialisable(v) for k, v in obj.items()}
    return _plain(obj)


__all__ = [
    "Season",
    "season_for_month",
    "hour_label",
    "time_of_day",
    "with_intensity",
    "to_serialisable",
]
