"""Request/response models for the loader document and HTTP layer."""
from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DailyRecordPayload(BaseModel):
    """One day of the city series as produced by the upstream loader."""

    model_config = ConfigDict(populate_by_name=True)

    date: str
    count: int = Field(ge=0)
    moon_phase: float = Field(ge=0.0, lt=1.0, alias="moonPhase")
    is_full_moon: bool = Field(alias="isFullMoon")


class CityPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    correlation: float = Field(ge=-1.0, le=1.0)
    p_value: float = Field(ge=0.0, alias="pValue")
    daily_data: List[DailyRecordPayload] = Field(default_factory=list, alias="dailyData")


class AnalysisDocument(BaseModel):
    """Top-level document keyed by city identifier.

    Both ``{"cities": {...}}`` and a bare ``{"CHICAGO": {...}}`` mapping are
    accepted.
    """

    cities: Dict[str, CityPayload]

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_mapping(cls, data: Any) -> Any:
        if isinstance(data, dict) and "cities" not in data:
            return {"cities": data}
        return data


class CityListResponse(BaseModel):
    cities: List[str]


class TemporalView(BaseModel):
    city: str
    view: str
    synthetic: bool = False
    buckets: List[Dict[str, Any]]
