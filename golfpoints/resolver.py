"""Net and gross position/points resolution for a tournament."""

import logging
from typing import Iterable, Sequence

from .constants import GROSS, GROSS_POINTS_CATEGORY, NET, TRACKS
from .exceptions import UnknownCategoryTable
from .models import PositionedResult, ScoreEntry, TournamentResolution
from .points_table import PointsConfig, PointsTable
from .ties import assign_positions, average_points, format_position, group_ties

logger = logging.getLogger('golfpoints.resolver')


def points_category(category: str, track: str) -> str:
    """
    Category whose table pays points on a track.

    Net points come from the tournament's own category. Gross points always
    come from the Tour table, whatever the tournament's category.
    """
    if track == NET:
        return category
    if track == GROSS:
        return GROSS_POINTS_CATEGORY
    raise ValueError(f'Unknown track: {track}')


def resolve_track(entries: Iterable[ScoreEntry], track: str, table: PointsTable) -> list[PositionedResult]:
    """
    Rank one track of a tournament and pay points from a table.

    Entries with no score on the track are left out. Returns results in
    finishing order; an empty field gives an empty list.
    """
    results = []
    for group in assign_positions(group_ties(entries, track)):
        points = average_points(group.position, group.size, table)
        for entry in group.entries:
            results.append(
                PositionedResult(
                    player_id=entry.player_id,
                    position=group.position,
                    is_tied=group.is_tied,
                    points=points,
                    score=group.score,
                    display_position=format_position(group.position, group.is_tied),
                )
            )
    return results


def resolve_tournament(
    entries: Sequence[ScoreEntry],
    category: str,
    points_config: PointsConfig,
    tracks: Iterable[str] = TRACKS,
) -> TournamentResolution:
    """
    Resolve positions and points for both tracks of one tournament.

    A category with no table resolves every position to 0 points; the
    category is reported in missing_tables so callers can flag it.

    Args:
        entries: Every player's scores for the tournament
        category: Tournament category ('major', 'tour', 'league', 'supr')
        points_config: Points tables in force
        tracks: Tracks to resolve (default both)

    Returns:
        TournamentResolution with net and gross result lists
    """
    resolution = TournamentResolution()

    for track in tracks:
        table_category = points_category(category, track)
        try:
            table = points_config.table_for(table_category)
        except UnknownCategoryTable as e:
            logger.warning(f'{e}; {track} points resolve to 0')
            if table_category not in resolution.missing_tables:
                resolution.missing_tables.append(table_category)
            table = PointsTable([], table_category)

        results = resolve_track(entries, track, table)
        if track == NET:
            resolution.net = results
        else:
            resolution.gross = results

    return resolution
