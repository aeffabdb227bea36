"""Synchronous read helpers and their FastAPI wrappers.

The helpers keep the test suite light-weight while the FastAPI application
exposes the same derived values over HTTP for the display layer.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException

from ..config import get_settings
from ..engine import AnalysisEngine
from ..errors import LunarStatsError
from ..io.loader import load_datasets
from ..temporal.profiles import to_serialisable
from . import schemas

logger = logging.getLogger(__name__)

TEMPORAL_VIEWS = ("monthly", "weekday", "hourly")

_engine: AnalysisEngine | None = None
_engine_lock = threading.Lock()


def set_engine(engine: AnalysisEngine | None) -> None:
    """Install the engine served by the helpers (``None`` forces a reload)."""

    global _engine
    with _engine_lock:
        _engine = engine


def get_engine() -> AnalysisEngine:
    """Return the served engine, loading the configured document once."""

    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                path = get_settings().data_path
                logger.info("loading analysis document from %s", path)
                _engine = AnalysisEngine(load_datasets(path))
    return _engine


def list_cities() -> schemas.CityListResponse:
    return schemas.CityListResponse(cities=get_engine().cities)


def city_statistics(city: str) -> Dict[str, Any]:
    return to_serialisable(get_engine().city_statistics(city))


def temporal(city: str, view: str) -> schemas.TemporalView:
    """Return one temporal view; raises ``ValueError`` for an unknown view."""

    engine = get_engine()
    if view == "monthly":
        buckets: List[Dict[str, Any]] = to_serialisable(engine.monthly(city))
        return schemas.TemporalView(city=city, view=view, buckets=buckets)
    if view == "weekday":
        buckets = to_serialisable(engine.weekday(city))
        return schemas.TemporalView(city=city, view=view, buckets=buckets)
    if view == "hourly":
        profile = engine.hourly(city)
        return schemas.TemporalView(
            city=city,
            view=view,
            synthetic=profile.synthetic,
            buckets=to_serialisable(list(profile.hours)),
        )
    raise ValueError(f"unknown temporal view: {view}")


def phases(city: str) -> List[Dict[str, Any]]:
    return to_serialisable(get_engine().phases(city))


def comparison() -> Dict[str, Any]:
    return to_serialisable(get_engine().comparison())


# ---------------------------------------------------------------------------
# FastAPI wrappers


fastapi_app = FastAPI(title="Lunar statistics")


def _city_call(func, *args):
    try:
        return func(*args)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc
    except LunarStatsError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@fastapi_app.get('/cities', response_model=schemas.CityListResponse)
def cities_endpoint() -> schemas.CityListResponse:
    """List the loaded city identifiers."""

    return list_cities()


@fastapi_app.get('/cities/{city}/statistics', response_model=Dict[str, Any])
def city_statistics_endpoint(city: str) -> Dict[str, Any]:
    """Full-moon split, effect size and significance for one city."""

    return _city_call(city_statistics, city)


@fastapi_app.get('/cities/{city}/temporal/{view}', response_model=schemas.TemporalView)
def temporal_endpoint(city: str, view: str) -> schemas.TemporalView:
    """Monthly, weekday or (synthetic) hourly buckets."""

    if view not in TEMPORAL_VIEWS:
        raise HTTPException(status_code=404, detail=f"Unknown view '{view}'")
    return _city_call(temporal, city, view)


@fastapi_app.get('/cities/{city}/phases', response_model=List[Dict[str, Any]])
def phases_endpoint(city: str) -> List[Dict[str, Any]]:
    return _city_call(phases, city)


@fastapi_app.get('/comparison', response_model=Dict[str, Any])
def comparison_endpoint() -> Dict[str, Any]:
    """Cross-city summary."""

    return comparison()


app = fastapi_app
