"""Adapter from the loader's analysis document to dataset snapshots.

Fetching and JSON decoding belong to the caller; this module only turns an
already-decoded mapping (or a local file, for the CLI) into validated,
immutable :class:`CityDataset` objects.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from ..api.schemas import AnalysisDocument
from ..core.dataset import CityDataset, build_dataset

logger = logging.getLogger(__name__)


def datasets_from_document(raw: Mapping[str, Any]) -> Dict[str, CityDataset]:
    """Validate ``raw`` and build one snapshot per city.

    Raises ``pydantic.ValidationError`` for malformed fields and
    :class:`~lunar_stats.errors.InvalidDateRange` for bad or duplicate dates.
    """

    document = AnalysisDocument.model_validate(raw)
    datasets: Dict[str, CityDataset] = {}
    for city, payload in document.cities.items():
        datasets[city] = build_dataset(
            city,
            correlation=payload.correlation,
            p_value=payload.p_value,
            rows=[rec.model_dump() for rec in payload.daily_data],
        )
        logger.info("loaded %s: %d days", city, datasets[city].day_count)
    return datasets


def load_datasets(path: str | Path) -> Dict[str, CityDataset]:
    """Read a local analysis document and build its city snapshots."""

    path = Path(path)
    raw = json.loads(path.read_text())
    try:
        return datasets_from_document(raw)
    except ValidationError:
        logger.error("invalid analysis document: %s", path)
        raise


__all__ = ["datasets_from_document", "load_datasets"]
