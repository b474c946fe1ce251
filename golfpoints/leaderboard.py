"""Season leaderboard aggregation from per-tournament points."""

from typing import Iterable, Mapping, Optional, Sequence

from .constants import BEST_EVENTS_COUNT, CATEGORIES, GROSS, NET, TOTAL_POINTS_PLACES, TRACK_FIELDS
from .models import EarnedPoints, LeaderboardRow, StoredResult, Tournament
from .ties import round_half_up


def _round_total(value: float) -> float:
    return round_half_up(value, TOTAL_POINTS_PLACES)


def _category_totals(events: Iterable[EarnedPoints]) -> dict[str, float]:
    totals = {category: 0.0 for category in CATEGORIES}
    for event in events:
        totals[event.category] = totals.get(event.category, 0.0) + event.points
    return {category: _round_total(points) for category, points in totals.items()}


def aggregate_player(
    player_id: int,
    events: Sequence[EarnedPoints],
    player_name: str = '',
    best_events_count: int = BEST_EVENTS_COUNT,
) -> LeaderboardRow:
    """
    Sum one player's points across tournaments on one track.

    Args:
        player_id: Player the events belong to
        events: Points earned per tournament
        player_name: Display name
        best_events_count: How many top-scoring events count towards best_events_points

    Returns:
        LeaderboardRow with rank left at 0
    """
    category_points = _category_totals(events)

    # Only events that paid points count towards the best N
    paying = sorted((e for e in events if e.points > 0), key=lambda e: e.points, reverse=True)
    best = paying[:best_events_count]

    scores = [e.score for e in events if e.score is not None]
    average_score = sum(scores) / len(scores) if scores else None

    return LeaderboardRow(
        player_id=player_id,
        player_name=player_name,
        category_points=category_points,
        total_points=_round_total(sum(category_points.values())),
        best_events_points=_round_total(sum(e.points for e in best)),
        best_events_category_points=_category_totals(best),
        events=len(events),
        average_score=average_score,
    )


def _sort_key(row: LeaderboardRow, rank_by: str) -> tuple:
    points = row.best_events_points if rank_by == 'best_events' else row.total_points
    # Players with no recorded score sort after any average
    average = row.average_score if row.average_score is not None else float('inf')
    return (-points, average, row.player_id)


def build_leaderboard(
    rows: Iterable[LeaderboardRow],
    rank_by: str = 'total',
    include_zero: bool = True,
) -> list[LeaderboardRow]:
    """
    Order players and number them 1..N.

    Ordering is by points, highest first ('total' or 'best_events'). Equal
    points go to the lower (better) average score, then to the lower player
    id, so every player gets a distinct rank and the order never depends on
    input order.

    Args:
        rows: Aggregated player rows
        rank_by: 'total' or 'best_events'
        include_zero: Keep players who have no points

    Returns:
        Rows in rank order with rank set
    """
    if rank_by not in ('total', 'best_events'):
        raise ValueError(f'Invalid rank_by: {rank_by}')

    ranked = sorted(rows, key=lambda r: _sort_key(r, rank_by))
    if not include_zero:
        ranked = [
            r for r in ranked
            if (r.best_events_points if rank_by == 'best_events' else r.total_points) > 0
        ]

    for rank, row in enumerate(ranked, 1):
        row.rank = rank
    return ranked


def earned_points_from_results(
    results: Iterable[StoredResult],
    tournaments: Mapping[int, Tournament],
    track: str,
) -> dict[int, list[EarnedPoints]]:
    """
    Group stored rows into each player's earned points on one track.

    Rows whose tournament is unknown are ignored.
    """
    if track not in (NET, GROSS):
        raise ValueError(f'Unknown track: {track}')
    position_field, points_field, score_field = TRACK_FIELDS[track]

    by_player: dict[int, list[EarnedPoints]] = {}
    for row in results:
        tournament = tournaments.get(row.tournament_id)
        if tournament is None:
            continue
        by_player.setdefault(row.player_id, []).append(
            EarnedPoints(
                tournament_id=row.tournament_id,
                category=tournament.category,
                points=getattr(row, points_field) or 0.0,
                position=getattr(row, position_field),
                score=getattr(row, score_field),
            )
        )
    return by_player


def leaderboard_for_track(
    results: Iterable[StoredResult],
    tournaments: Iterable[Tournament],
    track: str,
    rank_by: str = 'total',
    best_events_count: int = BEST_EVENTS_COUNT,
    player_names: Optional[Mapping[int, str]] = None,
    include_zero: bool = True,
) -> list[LeaderboardRow]:
    """Full leaderboard for one track built straight from stored rows."""
    results = list(results)
    tournament_map = {t.id: t for t in tournaments}
    names = dict(player_names or {})
    for row in results:
        if row.player_name:
            names.setdefault(row.player_id, row.player_name)

    rows = [
        aggregate_player(player_id, events, names.get(player_id, ''), best_events_count)
        for player_id, events in earned_points_from_results(results, tournament_map, track).items()
    ]
    return build_leaderboard(rows, rank_by=rank_by, include_zero=include_zero)
