"""Tie grouping, position assignment and tie points averaging."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from .models import ScoreEntry, TieGroup
from .points_table import PointsTable


def round_half_up(value: float, places: int = 1) -> float:
    """
    Round to a number of decimal places, halves away from zero.

    Python's round() uses banker's rounding and binary floats, so
    round(2.25, 1) == 2.2. Points use conventional rounding: 2.25 -> 2.3.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_position(position: int, is_tied: bool) -> str:
    """Leaderboard label for a position, e.g. 'T2' for a share of 2nd."""
    return f'T{position}' if is_tied else str(position)


def group_ties(entries: Iterable[ScoreEntry], track: str) -> list[TieGroup]:
    """
    Sort entries by score (lowest first) and split them into groups of equal score.

    Entries with no score on the track are ignored. Within a group, entries
    keep their input order, so the same input always gives the same output.

    Args:
        entries: Score entries for one tournament
        track: 'net' or 'gross'

    Returns:
        Tie groups in finishing order, positions not yet assigned
    """
    scored = [(entry.score_for(track), entry) for entry in entries]
    scored = [(score, entry) for score, entry in scored if score is not None]
    # sorted() is stable, so equal scores keep input order
    scored.sort(key=lambda pair: pair[0])

    groups: list[TieGroup] = []
    current_score: Optional[float] = None
    current: list[ScoreEntry] = []

    for score, entry in scored:
        if current and score != current_score:
            groups.append(TieGroup(score=current_score, entries=tuple(current)))
            current = []
        current_score = score
        current.append(entry)

    if current:
        groups.append(TieGroup(score=current_score, entries=tuple(current)))

    return groups


def assign_positions(groups: Iterable[TieGroup]) -> list[TieGroup]:
    """
    Give every group a position, skipping positions after a tie.

    Three players tied for 1st all hold position 1 and the next score is 4th:
    positions run 1, 1, 1, 4, never 1, 1, 1, 2.
    """
    positioned = []
    next_position = 1
    for group in groups:
        positioned.append(TieGroup(score=group.score, entries=group.entries, position=next_position))
        next_position += group.size
    return positioned


def average_points(position: int, size: int, table: PointsTable) -> float:
    """
    Points paid to each member of a tie group.

    The group shares the points of every position it occupies
    (position .. position + size - 1), split evenly and rounded half up to
    one decimal place. An untied finish is paid the table value exactly.

    Args:
        position: Position the group holds
        size: Number of players in the group
        table: Points table to pay from

    Returns:
        Points per player
    """
    if size < 1:
        raise ValueError(f'Tie group size must be at least 1, got {size}')
    if size == 1:
        return table.points_for(position)

    total = sum(
        (Decimal(str(table.points_for(p))) for p in range(position, position + size)),
        Decimal(0),
    )
    return round_half_up(total / size)


def gross_from_net(net_score: float, handicap: float) -> float:
    """Gross score from a net score and course handicap."""
    return net_score + handicap


def net_from_gross(gross_score: float, handicap: float) -> float:
    """Net score from a gross score and course handicap."""
    return gross_score - handicap
