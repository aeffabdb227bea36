"""Command line interface entry points."""
from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import typer

from ..config import get_settings
from ..engine import AnalysisEngine
from ..errors import LunarStatsError
from ..io import artifacts
from ..io.loader import load_datasets
from ..temporal.profiles import to_serialisable

logger = logging.getLogger(__name__)

app = typer.Typer()


class View(str, Enum):
    MONTHLY = "monthly"
    WEEKDAY = "weekday"
    HOURLY = "hourly"


def _setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, get_settings().log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _engine(data: Optional[Path]) -> AnalysisEngine:
    path = data if data is not None else Path(get_settings().data_path)
    if not path.exists():
        typer.echo(f"Data file not found: {path}")
        raise typer.Exit(1)
    try:
        return AnalysisEngine(load_datasets(path))
    except LunarStatsError as exc:
        typer.echo(f"Invalid dataset: {exc}")
        raise typer.Exit(1)


def _emit(payload: Any, out: Optional[Path]) -> None:
    if out is not None:
        artifacts.write_summary(out, payload)
    typer.echo(json.dumps(to_serialisable(payload), separators=(",", ":")))


DataOption = typer.Option(None, "--data", dir_okay=False, help="Analysis document (JSON)")
OutOption = typer.Option(None, "--out", dir_okay=False, help="Also write the result to this file")


@app.callback()
def main() -> None:
    """Lunar phase vs. daily incident statistics."""

    _setup_logging()


@app.command("summary")
def summary(
    data: Optional[Path] = DataOption,
    city: Optional[str] = typer.Option(None, "--city"),
    out: Optional[Path] = OutOption,
) -> None:
    """Print per-city full-moon statistics."""

    engine = _engine(data)
    try:
        payload: Any = engine.city_statistics(city) if city else engine.all_statistics()
    except KeyError as exc:
        typer.echo(str(exc.args[0]))
        raise typer.Exit(1)
    _emit(payload, out)


@app.command("temporal")
def temporal(
    city: str = typer.Option(..., "--city"),
    view: View = typer.Option(View.MONTHLY, "--view"),
    data: Optional[Path] = DataOption,
    out: Optional[Path] = OutOption,
) -> None:
    """Print monthly, weekday or modelled hourly buckets for a city."""

    engine = _engine(data)
    try:
        if view is View.MONTHLY:
            payload: Any = engine.monthly(city)
        elif view is View.WEEKDAY:
            payload = engine.weekday(city)
        else:
            payload = engine.hourly(city)
    except KeyError as exc:
        typer.echo(str(exc.args[0]))
        raise typer.Exit(1)
    except LunarStatsError as exc:
        typer.echo(f"Insufficient data: {exc}")
        raise typer.Exit(1)
    if out is not None and view is not View.HOURLY:
        artifacts.write_table(out, payload)
        out = None
    _emit(payload, out)


@app.command("phases")
def phases(
    city: str = typer.Option(..., "--city"),
    data: Optional[Path] = DataOption,
    out: Optional[Path] = OutOption,
) -> None:
    """Print the average daily count per moon phase category."""

    engine = _engine(data)
    try:
        payload = engine.phases(city)
    except KeyError as exc:
        typer.echo(str(exc.args[0]))
        raise typer.Exit(1)
    except LunarStatsError as exc:
        typer.echo(f"Invalid phase data: {exc}")
        raise typer.Exit(1)
    _emit(payload, out)


@app.command("compare")
def compare(
    data: Optional[Path] = DataOption,
    out: Optional[Path] = OutOption,
) -> None:
    """Print the cross-city comparison."""

    _emit(_engine(data).comparison(), out)


if __name__ == "__main__":
    app()
