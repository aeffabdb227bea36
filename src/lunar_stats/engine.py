"""Memoised facade over the per-city and cross-city computations.

Results are cached by ``(view, city, dataset version)``.  Because datasets are
immutable snapshots and every computation is pure, a cached value is always
identical to a fresh one.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Tuple

from .compare.cities import CrossCityComparison, compare_cities
from .config import get_settings
from .core.dataset import CityDataset
from .stats.phase import PhaseBucket, phase_profile
from .stats.runner import CityStatistics, run_city_statistics
from .temporal.compute import MonthBucket, WeekdayBucket, monthly_profile, weekday_profile
from .temporal.synthetic import HourlyProfile, hourly_profile

logger = logging.getLogger(__name__)

DEFAULT_CITIES = ("CHICAGO", "NYC", "LA")

CacheKey = Tuple[str, str, str]


class AnalysisEngine:
    """Entry point used by the CLI and the HTTP layer."""

    def __init__(
        self,
        datasets: Mapping[str, CityDataset] | Iterable[CityDataset],
        *,
        cache_enabled: bool | None = None,
    ) -> None:
        if isinstance(datasets, Mapping):
            self._datasets: Dict[str, CityDataset] = dict(datasets)
        else:
            self._datasets = {ds.city: ds for ds in datasets}
        if cache_enabled is None:
            cache_enabled = get_settings().cache_enabled
        self._cache_enabled = cache_enabled
        self._cache: Dict[CacheKey, Any] = {}

    @property
    def cities(self) -> list[str]:
        known = [c for c in DEFAULT_CITIES if c in self._datasets]
        return known + sorted(c for c in self._datasets if c not in DEFAULT_CITIES)

    def dataset(self, city: str) -> CityDataset:
        try:
            return self._datasets[city]
        except KeyError:
            raise KeyError(f"unknown city: {city}") from None

    def _memo(self, view: str, city: str, func: Callable[[CityDataset], Any]) -> Any:
        dataset = self.dataset(city)
        if not self._cache_enabled:
            return func(dataset)
        key = (view, city, dataset.version)
        if key in self._cache:
            logger.debug("cache hit for %s/%s", view, city)
            return self._cache[key]
        value = func(dataset)
        self._cache[key] = value
        return value

    def city_statistics(self, city: str) -> CityStatistics:
        return self._memo("statistics", city, run_city_statistics)

    def monthly(self, city: str) -> tuple[MonthBucket, ...]:
        return self._memo("monthly", city, monthly_profile)

    def weekday(self, city: str) -> tuple[WeekdayBucket, ...]:
        return self._memo("weekday", city, weekday_profile)

    def hourly(self, city: str) -> HourlyProfile:
        """Modelled hourly curve; raises ``EmptyPartitionError`` for an empty series."""

        return self._memo("hourly", city, hourly_profile)

    def phases(self, city: str) -> tuple[PhaseBucket, ...]:
        return self._memo("phases", city, lambda ds: phase_profile(ds.daily_data))

    def all_statistics(self) -> Dict[str, CityStatistics]:
        return {city: self.city_statistics(city) for city in self.cities}

    def comparison(self) -> CrossCityComparison:
        return compare_cities(self.all_statistics())

    def clear_cache(self) -> None:
        self._cache.clear()


__all__ = ["AnalysisEngine", "DEFAULT_CITIES"]
