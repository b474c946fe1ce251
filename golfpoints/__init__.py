from .models import (
    AuditLogEntry,
    EarnedPoints,
    LeaderboardRow,
    PositionedResult,
    RowChange,
    ScoreEntry,
    StoredResult,
    TieGroup,
    Tournament,
    TournamentResolution,
)
from .exceptions import (
    ConcurrentRecalculationConflict,
    DuplicateConfigPosition,
    TournamentNotFound,
    UnknownCategoryTable,
)
from .points_table import FallbackPolicy, PointsConfig, PointsTable, default_points_config
from .ties import (
    assign_positions,
    average_points,
    format_position,
    gross_from_net,
    group_ties,
    net_from_gross,
    round_half_up,
)
from .resolver import points_category, resolve_track, resolve_tournament
from .storage import InMemoryResultStore, JsonResultStore, ResultStore
from .recalculation import (
    AuditLog,
    RecalculationOutcome,
    RecalculationScope,
    RecalculationService,
    recent_entries,
)
from .leaderboard import (
    aggregate_player,
    build_leaderboard,
    earned_points_from_results,
    leaderboard_for_track,
)

__all__ = [
    # Models
    'AuditLogEntry',
    'EarnedPoints',
    'LeaderboardRow',
    'PositionedResult',
    'RowChange',
    'ScoreEntry',
    'StoredResult',
    'TieGroup',
    'Tournament',
    'TournamentResolution',
    # Errors
    'ConcurrentRecalculationConflict',
    'DuplicateConfigPosition',
    'TournamentNotFound',
    'UnknownCategoryTable',
    # Points tables
    'FallbackPolicy',
    'PointsConfig',
    'PointsTable',
    'default_points_config',
    # Ties
    'assign_positions',
    'average_points',
    'format_position',
    'gross_from_net',
    'group_ties',
    'net_from_gross',
    'round_half_up',
    # Resolution
    'points_category',
    'resolve_track',
    'resolve_tournament',
    # Storage
    'InMemoryResultStore',
    'JsonResultStore',
    'ResultStore',
    # Recalculation
    'AuditLog',
    'RecalculationOutcome',
    'RecalculationScope',
    'RecalculationService',
    'recent_entries',
    # Leaderboard
    'aggregate_player',
    'build_leaderboard',
    'earned_points_from_results',
    'leaderboard_for_track',
]
