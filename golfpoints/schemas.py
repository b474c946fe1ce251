"""Pydantic schemas for JSON data validation."""

from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, field_validator

VALID_CATEGORIES = {'major', 'tour', 'league', 'supr'}


class PointsEntry(BaseModel):
    """Points paid for one finishing position."""

    position: int = Field(..., ge=1)
    points: float = Field(..., ge=0)

    class Config:
        extra = 'forbid'


# Validates a single category table: a list of position/points entries
POINTS_TABLE = TypeAdapter(list[PointsEntry])


class LeagueConfig(BaseModel):
    """League configuration settings."""

    # Each table is validated separately by config.points_config_from
    points: dict[str, Any]
    fallback_policy: str = Field(default='zero', pattern=r'^(zero|last|constant)$')
    fallback_points: float = Field(default=0.0, ge=0)
    best_events_count: int = Field(default=8, ge=1, le=50)
    lock_timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator('points')
    @classmethod
    def validate_categories(cls, v):
        """Ensure every table belongs to a known category."""
        for category in v:
            if category not in VALID_CATEGORIES:
                raise ValueError(f'Invalid category: {category}')
        return v

    class Config:
        extra = 'forbid'


class TournamentRecord(BaseModel):
    """Tournament in tournaments.json."""

    id: int
    name: str = Field(..., min_length=1)
    category: str = Field(..., pattern=r'^(major|tour|league|supr)$')
    date: str = ''
    is_manual_entry: bool = False

    class Config:
        extra = 'forbid'


class TournamentsFile(BaseModel):
    """Complete tournaments.json file structure."""

    tournaments: list[TournamentRecord]

    class Config:
        extra = 'forbid'


class ResultRecord(BaseModel):
    """Player result row in results.json."""

    id: int
    tournament_id: int
    player_id: int
    player_name: str = ''
    net_score: float | None = None
    gross_score: float | None = None
    handicap: float | None = None
    position: int | None = Field(None, ge=1)
    points: float = 0.0
    gross_position: int | None = Field(None, ge=1)
    gross_points: float = 0.0

    class Config:
        extra = 'forbid'


class ResultsFile(BaseModel):
    """Complete results.json file structure."""

    results: list[ResultRecord]

    @field_validator('results')
    @classmethod
    def validate_unique_rows(cls, v):
        """One row per id, and one row per player per tournament."""
        ids = set()
        pairs = set()
        for row in v:
            if row.id in ids:
                raise ValueError(f'Duplicate result id: {row.id}')
            pair = (row.tournament_id, row.player_id)
            if pair in pairs:
                raise ValueError(
                    f'Player {row.player_id} has more than one result in tournament {row.tournament_id}'
                )
            ids.add(row.id)
            pairs.add(pair)
        return v

    class Config:
        extra = 'forbid'
