"""Shared fixtures for points engine tests."""

import pytest

from golfpoints import InMemoryResultStore, PointsConfig, StoredResult, Tournament, default_points_config


@pytest.fixture
def points_config() -> PointsConfig:
    return default_points_config()


@pytest.fixture
def tournaments() -> list[Tournament]:
    return [
        Tournament(id=1, name='Spring Major', category='major'),
        Tournament(id=2, name='Tour Event 1', category='tour'),
        Tournament(id=3, name='Club League Night', category='league', is_manual_entry=True),
    ]


@pytest.fixture
def results() -> list[StoredResult]:
    return [
        # Spring Major: three-way net tie for 1st
        StoredResult(id=1, tournament_id=1, player_id=1, net_score=70, gross_score=78, handicap=8),
        StoredResult(id=2, tournament_id=1, player_id=2, net_score=70, gross_score=74, handicap=4),
        StoredResult(id=3, tournament_id=1, player_id=3, net_score=70, gross_score=82, handicap=12),
        StoredResult(id=4, tournament_id=1, player_id=4, net_score=75, gross_score=75, handicap=0),
        # Tour Event 1: player 4 has no gross score
        StoredResult(id=5, tournament_id=2, player_id=1, net_score=68, gross_score=76, handicap=8),
        StoredResult(id=6, tournament_id=2, player_id=2, net_score=71, gross_score=75, handicap=4),
        StoredResult(id=7, tournament_id=2, player_id=4, net_score=72),
        # Manually curated league night
        StoredResult(
            id=8, tournament_id=3, player_id=3, net_score=33, gross_score=39, handicap=6,
            position=1, points=93.75, gross_position=1, gross_points=500.0,
        ),
    ]


@pytest.fixture
def store(tournaments, results) -> InMemoryResultStore:
    return InMemoryResultStore(tournaments, results)
