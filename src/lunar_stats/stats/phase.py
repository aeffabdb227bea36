"""Moon phase classification.

The boundary table is kept exactly as published, including the wide Waxing
Gibbous band (0.375-0.625) and the narrow Last Quarter / Waning Crescent
bands.  Intervals are half-open and lower-inclusive.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from ..core.dataset import DailyRecord
from ..errors import InvalidPhaseValue


class MoonPhase(str, Enum):
    NEW_MOON = "New Moon"
    WAXING_CRESCENT = "Waxing Crescent"
    FIRST_QUARTER = "First Quarter"
    WAXING_GIBBOUS = "Waxing Gibbous"
    FULL_MOON = "Full Moon"
    WANING_GIBBOUS = "Waning Gibbous"
    LAST_QUARTER = "Last Quarter"
    WANING_CRESCENT = "Waning Crescent"


# (lower bound, category); each band ends where the next one starts, the last at 1.0
PHASE_BOUNDARIES: tuple[tuple[float, MoonPhase], ...] = (
    (0.0, MoonPhase.NEW_MOON),
    (0.125, MoonPhase.WAXING_CRESCENT),
    (0.25, MoonPhase.FIRST_QUARTER),
    (0.375, MoonPhase.WAXING_GIBBOUS),
    (0.625, MoonPhase.FULL_MOON),
    (0.75, MoonPhase.WANING_GIBBOUS),
    (0.875, MoonPhase.LAST_QUARTER),
    (0.95, MoonPhase.WANING_CRESCENT),
)

PHASE_ORDER: tuple[MoonPhase, ...] = tuple(phase for _, phase in PHASE_BOUNDARIES)
_UPPER_EDGES = np.array([lower for lower, _ in PHASE_BOUNDARIES[1:]], dtype=float)


def _validate(values: np.ndarray) -> None:
    bad = ~((values >= 0.0) & (values < 1.0))
    if bad.any():
        raise InvalidPhaseValue(values[bad][0].item())


def classify_phase(value: float) -> MoonPhase:
    """Return the named phase for a lunar-cycle fraction in [0, 1)."""

    arr = np.asarray([value], dtype=float)
    _validate(arr)
    idx = int(np.searchsorted(_UPPER_EDGES, arr[0], side="right"))
    return PHASE_ORDER[idx]


def classify_phases(values: Sequence[float] | pd.Series) -> list[MoonPhase]:
    """Vectorised :func:`classify_phase`; fails on the first invalid value."""

    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return []
    _validate(arr)
    idx = np.searchsorted(_UPPER_EDGES, arr, side="right")
    return [PHASE_ORDER[i] for i in idx]


@dataclass(frozen=True)
class PhaseBucket:
    phase: MoonPhase
    sample_size: int
    average: float | None


def phase_profile(records: Iterable[DailyRecord]) -> tuple[PhaseBucket, ...]:
    """Average daily count per phase category, all eight buckets present."""

    records = list(records)
    phases = classify_phases([rec.moon_phase for rec in records])
    totals = {phase: 0 for phase in PHASE_ORDER}
    counts = {phase: 0 for phase in PHASE_ORDER}
    for rec, phase in zip(records, phases):
        totals[phase] += rec.count
        counts[phase] += 1
    return tuple(
        PhaseBucket(
            phase=phase,
            sample_size=counts[phase],
            average=totals[phase] / counts[phase] if counts[phase] else None,
        )
        for phase in PHASE_ORDER
    )


__all__ = [
    "MoonPhase",
    "PHASE_BOUNDARIES",
    "PHASE_ORDER",
    "classify_phase",
    "classify_phases",
    "PhaseBucket",
    "phase_profile",
]
