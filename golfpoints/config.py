"""League configuration management."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .points_table import FallbackPolicy, PointsConfig
from .schemas import POINTS_TABLE, LeagueConfig
from .utils import load_json

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'league_config.json'

logger = logging.getLogger('golfpoints.config')


@lru_cache(maxsize=1)
def get_config() -> LeagueConfig:
    """
    Load league configuration from data/league_config.json.

    Configuration is cached after first load.

    Returns:
        LeagueConfig object with validated settings

    Raises:
        FileNotFoundError: If league_config.json doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from golfpoints.config import get_config
        config = get_config()
        print(f"Best events counted: {config.best_events_count}")
    """
    return load_json(DEFAULT_CONFIG_PATH, schema=LeagueConfig)


def load_config(path: Path | str) -> LeagueConfig:
    """Load and validate a league configuration file from any path."""
    return load_json(path, schema=LeagueConfig)


def points_config_from(config: LeagueConfig) -> PointsConfig:
    """
    Build the immutable points snapshot described by a league config.

    A table that is not a list of valid position/points entries is left out
    with a warning; its category then pays 0 points.

    Raises:
        DuplicateConfigPosition: If a table repeats a position
    """
    raw = {}
    malformed = []
    for category, entries in config.points.items():
        try:
            raw[category] = [entry.model_dump() for entry in POINTS_TABLE.validate_python(entries)]
        except ValidationError as e:
            logger.warning(f'Ignoring malformed points table for {category}: {e.error_count()} errors')
            malformed.append(category)

    points_config = PointsConfig.from_mapping(
        raw,
        fallback=FallbackPolicy(config.fallback_policy),
        fallback_points=config.fallback_points,
    )
    if not malformed:
        return points_config
    tables = {category: points_config.table_for(category) for category in points_config.categories}
    return PointsConfig(tables, malformed=[*malformed, *points_config.malformed])


def load_points_config(path: Path | str) -> PointsConfig:
    """Points snapshot from a league configuration file."""
    return points_config_from(load_config(path))


def get_points_config(config: Optional[LeagueConfig] = None) -> PointsConfig:
    """Points snapshot from the given config, or from the cached league config."""
    return points_config_from(config or get_config())


def get_best_events_count() -> int:
    """Get the number of best events counted on the leaderboard."""
    return get_config().best_events_count


def get_lock_timeout() -> float:
    """Get how long a recalculation waits for a busy tournament, in seconds."""
    return get_config().lock_timeout_seconds


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this after the points configuration file is edited so the next
    get_config() call reads the new tables.
    """
    get_config.cache_clear()
