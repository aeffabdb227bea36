"""Utilities to export derived statistics."""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pandas as pd

from ..temporal.profiles import to_serialisable


def write_summary(path: str | Path, summary: Any) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(to_serialisable(summary), indent=2))


def write_table(path: str | Path, buckets: Sequence[Any]) -> None:
    """Write a list of buckets as CSV, one row per bucket."""

    rows: List[Dict[str, Any]] = to_serialisable(buckets)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows).to_csv(path, index=False)
