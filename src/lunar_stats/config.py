from __future__ import annotations

"""Settings loader backed by environment variables.

``get_settings`` reads the environment once and caches the resulting
``Settings`` object.  Tests may call ``reset_settings_cache`` to force a
reload after changing environment variables at runtime.
"""

from dataclasses import dataclass
import os
from functools import lru_cache


@dataclass
class Settings:
    data_path: str = "data/combined_analysis.json"
    log_level: str = "INFO"
    cache_enabled: bool = True


@lru_cache()
def get_settings() -> Settings:
    """Return settings loaded from environment variables."""

    data_path = os.getenv("LUNAR_DATA_PATH", "data/combined_analysis.json")
    log_level = os.getenv("LUNAR_LOG_LEVEL", "INFO").upper()
    cache_enabled = os.getenv("LUNAR_CACHE_ENABLED", "true").lower() == "true"
    return Settings(
        data_path=data_path,
        log_level=log_level,
        cache_enabled=cache_enabled,
    )


def reset_settings_cache() -> None:
    """Clear the settings cache (mainly for tests)."""

    get_settings.cache_clear()
