"""Position to points schedules and the immutable set of schedules in force."""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from .constants import DEFAULT_POINTS
from .exceptions import DuplicateConfigPosition, UnknownCategoryTable

logger = logging.getLogger('golfpoints.points_table')


class FallbackPolicy(str, Enum):
    """What a position past the end of a table is worth."""

    ZERO = 'zero'
    LAST_ENTRY = 'last'
    CONSTANT = 'constant'


def _parse_pair(item: Any) -> tuple[int, float]:
    """Accept either {'position': p, 'points': x} or a (p, x) pair."""
    if isinstance(item, Mapping):
        position, points = item['position'], item['points']
    else:
        position, points = item
    if isinstance(position, bool) or not isinstance(position, int):
        raise TypeError(f'Position must be an integer, got {position!r}')
    if isinstance(points, bool) or not isinstance(points, (int, float)):
        raise TypeError(f'Points must be numeric, got {points!r}')
    return position, float(points)


class PointsTable:
    """
    Sparse, ordered schedule of points by finishing position for one category.

    Lookups for a configured position return its value. Positions below 1 and
    gaps inside the table are worth 0. Positions after the last configured one
    follow the table's fallback policy (0 by default).

    Example:
        table = PointsTable([(1, 500), (2, 300), (3, 190)], category='tour')
        table.points_for(2)  # 300.0
        table.points_for(4)  # 0.0
    """

    def __init__(
        self,
        entries: Iterable[Any],
        category: str = '',
        fallback: FallbackPolicy = FallbackPolicy.ZERO,
        fallback_points: float = 0.0,
    ):
        """
        Build a table from ordered (position, points) pairs.

        Args:
            entries: Pairs or {'position', 'points'} dicts
            category: Category the table belongs to (used in error messages)
            fallback: Policy for positions past the last configured position
            fallback_points: Value used by FallbackPolicy.CONSTANT

        Raises:
            DuplicateConfigPosition: If a position appears more than once
            TypeError: If a pair is not an integer position with numeric points
        """
        points: dict[int, float] = {}
        for item in entries:
            position, value = _parse_pair(item)
            if position in points:
                raise DuplicateConfigPosition(category, position)
            points[position] = value

        self.category = category
        self.fallback = FallbackPolicy(fallback)
        self.fallback_points = float(fallback_points)
        self._points = MappingProxyType(dict(sorted(points.items())))
        self._max_position = max(self._points) if self._points else 0

    def points_for(self, position: int) -> float:
        """Points paid for a single finishing position."""
        if position < 1:
            return 0.0
        if position in self._points:
            return self._points[position]
        if position > self._max_position:
            if self.fallback is FallbackPolicy.LAST_ENTRY and self._points:
                return self._points[self._max_position]
            if self.fallback is FallbackPolicy.CONSTANT:
                return self.fallback_points
        return 0.0

    @property
    def max_position(self) -> int:
        return self._max_position

    def items(self) -> list[tuple[int, float]]:
        return list(self._points.items())

    def to_list(self) -> list[dict[str, float]]:
        return [{'position': p, 'points': v} for p, v in self._points.items()]

    def __len__(self) -> int:
        return len(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointsTable):
            return NotImplemented
        return (
            self.items() == other.items()
            and self.fallback is other.fallback
            and self.fallback_points == other.fallback_points
        )

    def __repr__(self) -> str:
        return f'PointsTable(category={self.category!r}, positions={len(self)})'


class PointsConfig:
    """
    Immutable snapshot of every category's points table.

    Administrative changes go through with_table(), which returns a new
    snapshot and leaves this one untouched.
    """

    def __init__(
        self,
        tables: Mapping[str, PointsTable],
        malformed: Iterable[str] = (),
    ):
        self._tables = MappingProxyType(dict(tables))
        self.malformed = tuple(malformed)

    @classmethod
    def from_mapping(
        cls,
        raw: Mapping[str, Any],
        fallback: FallbackPolicy = FallbackPolicy.ZERO,
        fallback_points: float = 0.0,
    ) -> 'PointsConfig':
        """
        Build a config from a raw {category: [entries]} mapping.

        Tables that are not a list of position/points pairs are left out and
        treated as missing. Duplicate positions are fatal.

        Raises:
            DuplicateConfigPosition: If any table repeats a position
        """
        tables = {}
        malformed = []
        for category, entries in raw.items():
            if not isinstance(entries, (list, tuple)):
                logger.warning(f'Ignoring malformed points table for {category}: not a list')
                malformed.append(category)
                continue
            try:
                tables[category] = PointsTable(entries, category, fallback, fallback_points)
            except DuplicateConfigPosition:
                raise
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f'Ignoring malformed points table for {category}: {e}')
                malformed.append(category)
        return cls(tables, malformed)

    def table_for(self, category: str) -> PointsTable:
        """
        Strict lookup of a category's table.

        Raises:
            UnknownCategoryTable: If the category has no usable table
        """
        try:
            return self._tables[category]
        except KeyError:
            raise UnknownCategoryTable(category) from None

    def get(self, category: str) -> Optional[PointsTable]:
        return self._tables.get(category)

    def with_table(self, category: str, entries: Iterable[Any]) -> 'PointsConfig':
        """Return a new snapshot with one category's table replaced."""
        current = self._tables.get(category)
        fallback = current.fallback if current else FallbackPolicy.ZERO
        fallback_points = current.fallback_points if current else 0.0
        tables = dict(self._tables)
        tables[category] = PointsTable(entries, category, fallback, fallback_points)
        logger.info(f'Points table updated for {category} ({len(tables[category])} positions)')
        return PointsConfig(tables, [m for m in self.malformed if m != category])

    @property
    def categories(self) -> list[str]:
        return list(self._tables)

    def to_mapping(self) -> dict[str, list[dict[str, float]]]:
        return {category: table.to_list() for category, table in self._tables.items()}

    def __contains__(self, category: object) -> bool:
        return category in self._tables

    def __repr__(self) -> str:
        return f'PointsConfig(categories={self.categories})'


def default_points_config(
    fallback: FallbackPolicy = FallbackPolicy.ZERO,
    fallback_points: float = 0.0,
) -> PointsConfig:
    """Production schedules for major, tour, league and supr events."""
    raw = {
        category: list(enumerate(points, start=1))
        for category, points in DEFAULT_POINTS.items()
    }
    return PointsConfig.from_mapping(raw, fallback, fallback_points)
