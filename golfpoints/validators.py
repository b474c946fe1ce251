"""Validation functions for points tables, score entries and uploaded positions."""

from typing import Iterable, Mapping, Sequence

from .models import ScoreEntry
from .points_table import PointsTable
from .ties import gross_from_net


def validate_points_table(table: PointsTable) -> list[str]:
    """
    Check that a points table pays out sensibly.

    Checks:
    - No negative points
    - Points do not increase as position gets worse

    These are warnings only; a table that breaks them can still be used.

    Args:
        table: PointsTable to check

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []
    label = table.category or 'points table'

    previous = None
    for position, points in table.items():
        if points < 0:
            warnings.append(f'{label} pays negative points ({points}) for position {position}')
        if previous is not None and points > previous[1]:
            warnings.append(
                f'{label} pays more for position {position} ({points}) '
                f'than for position {previous[0]} ({previous[1]})'
            )
        previous = (position, points)

    return warnings


def validate_score_entries(entries: Sequence[ScoreEntry], tolerance: float = 0.01) -> list[str]:
    """
    Check one tournament's score entries before ranking.

    Checks:
    - Each player appears at most once
    - Where net, gross and handicap are all given, gross == net + handicap

    Args:
        entries: Score entries for one tournament
        tolerance: Allowed difference for the gross/net check

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    seen = set()
    duplicates = set()
    for entry in entries:
        if entry.player_id in seen:
            duplicates.add(entry.player_id)
        seen.add(entry.player_id)

    if duplicates:
        warnings.append(
            f'Players with more than one entry: {", ".join(str(p) for p in sorted(duplicates))}'
        )

    for entry in entries:
        if entry.net_score is None or entry.gross_score is None or entry.handicap is None:
            continue
        expected = gross_from_net(entry.net_score, entry.handicap)
        if abs(expected - entry.gross_score) > tolerance:
            warnings.append(
                f'Player {entry.player_id} gross {entry.gross_score} != '
                f'net {entry.net_score} + handicap {entry.handicap}'
            )

    return warnings


def detect_existing_ties(rows: Iterable[Mapping[str, float]]) -> bool:
    """True if any position in the rows is shared by more than one player."""
    positions = [row['position'] for row in rows]
    return len(positions) != len(set(positions))


def validate_positions(rows: Iterable[Mapping[str, float]]) -> list[str]:
    """
    Check that externally supplied positions agree with their scores.

    Each row needs 'position' and 'score'. Positions may skip after a tie
    (1, 1, 3) but players with the same score must share a position, and
    players with different scores must not.

    Returns:
        List of issues (empty if the positions are consistent)
    """
    issues = []
    ordered = sorted(rows, key=lambda r: r['position'])

    previous = None
    for row in ordered:
        if previous is not None:
            same_score = row['score'] == previous['score']
            same_position = row['position'] == previous['position']
            if same_score and not same_position:
                issues.append(
                    f'Players with the same score ({row["score"]}) have different positions '
                    f'({previous["position"]} and {row["position"]})'
                )
            if not same_score and same_position:
                issues.append(
                    f'Players with different scores ({previous["score"]} and {row["score"]}) '
                    f'share position {row["position"]}'
                )
            if row['score'] < previous['score']:
                issues.append(
                    f'Position {row["position"]} has a better score ({row["score"]}) '
                    f'than position {previous["position"]} ({previous["score"]})'
                )
        previous = row

    if ordered and ordered[0]['position'] != 1:
        issues.append(f'Positions start at {ordered[0]["position"]}, not 1')

    return issues
