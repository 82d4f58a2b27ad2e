"""TOML configuration loader for the pantry module."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from ..client import DEFAULT_BASE_URL

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class MealDBConfig:
    api_key: str = "1"
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0


@dataclass
class FinderConfig:
    search_delay: float = 0.1
    detail_delay: float = 0.05
    max_candidates: int = 50
    min_match: int = 0


@dataclass
class PantrySettings:
    stale_days: int = 7
    default_category: str = "Other"


@dataclass
class DatabaseConfig:
    path: str = "~/.config/larder/larder.db"


@dataclass
class PantryConfig:
    mealdb: MealDBConfig = field(default_factory=MealDBConfig)
    finder: FinderConfig = field(default_factory=FinderConfig)
    pantry: PantrySettings = field(default_factory=PantrySettings)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


def load_config(path: str | Path | None = None) -> PantryConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    An empty MealDB API key is taken from MEALDB_API_KEY when set.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    mdb = raw.get("mealdb", {})
    fnd = raw.get("finder", {})
    pnt = raw.get("pantry", {})
    dbs = raw.get("database", {})

    api_key = mdb.get("api_key", "") or os.environ.get("MEALDB_API_KEY", "") or "1"

    return PantryConfig(
        mealdb=MealDBConfig(
            api_key=api_key,
            base_url=mdb.get("base_url", DEFAULT_BASE_URL),
            timeout=mdb.get("timeout", 10.0),
        ),
        finder=FinderConfig(
            search_delay=fnd.get("search_delay", 0.1),
            detail_delay=fnd.get("detail_delay", 0.05),
            max_candidates=fnd.get("max_candidates", 50),
            min_match=fnd.get("min_match", 0),
        ),
        pantry=PantrySettings(
            stale_days=pnt.get("stale_days", 7),
            default_category=pnt.get("default_category", "Other"),
        ),
        database=DatabaseConfig(
            path=dbs.get("path", "~/.config/larder/larder.db"),
        ),
    )
