"""Data models for the golf points engine."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ScoreEntry:
    """One player's raw result in one tournament."""
    player_id: int
    net_score: Optional[float] = None
    gross_score: Optional[float] = None
    handicap: Optional[float] = None
    player_name: str = ''

    def score_for(self, track: str) -> Optional[float]:
        """Score used to rank this entry on the given track ('net' or 'gross')."""
        if track == 'net':
            return self.net_score
        if track == 'gross':
            return self.gross_score
        raise ValueError(f'Unknown track: {track}')


@dataclass(frozen=True)
class TieGroup:
    """Entries sharing one score on a track, and the position they all hold."""
    score: float
    entries: Tuple[ScoreEntry, ...]
    position: int = 0

    @property
    def size(self) -> int:
        return len(self.entries)

    @property
    def is_tied(self) -> bool:
        return len(self.entries) > 1


@dataclass(frozen=True)
class PositionedResult:
    """A player's finishing position and points on one track."""
    player_id: int
    position: int
    is_tied: bool
    points: float
    score: float
    display_position: str = ''


@dataclass
class TournamentResolution:
    """Net and gross results for one tournament."""
    net: List[PositionedResult] = field(default_factory=list)
    gross: List[PositionedResult] = field(default_factory=list)
    missing_tables: List[str] = field(default_factory=list)  # categories resolved at 0 points

    def for_track(self, track: str) -> List[PositionedResult]:
        if track == 'net':
            return self.net
        if track == 'gross':
            return self.gross
        raise ValueError(f'Unknown track: {track}')


@dataclass(frozen=True)
class Tournament:
    """Tournament metadata the engine needs from storage."""
    id: int
    name: str
    category: str
    date: str = ''
    is_manual_entry: bool = False


@dataclass(frozen=True)
class StoredResult:
    """A persisted player result row: raw scores plus derived positions/points."""
    id: int
    tournament_id: int
    player_id: int
    net_score: Optional[float] = None
    gross_score: Optional[float] = None
    handicap: Optional[float] = None
    position: Optional[int] = None
    points: float = 0.0
    gross_position: Optional[int] = None
    gross_points: float = 0.0
    player_name: str = ''

    def to_score_entry(self) -> ScoreEntry:
        return ScoreEntry(
            player_id=self.player_id,
            net_score=self.net_score,
            gross_score=self.gross_score,
            handicap=self.handicap,
            player_name=self.player_name,
        )


@dataclass(frozen=True)
class RowChange:
    """One stored row whose position or points changed on one track."""
    result_id: int
    tournament_id: int
    player_id: int
    track: str
    old_position: Optional[int]
    new_position: Optional[int]
    old_points: float
    new_points: float


@dataclass(frozen=True)
class AuditLogEntry:
    """Immutable record of one recalculation event."""
    timestamp: datetime
    action: str
    level: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp.isoformat(),
            'action': self.action,
            'level': self.level,
            'details': dict(self.details),
        }


@dataclass(frozen=True)
class EarnedPoints:
    """Points a player earned in one tournament on one track."""
    tournament_id: int
    category: str
    points: float
    position: Optional[int] = None
    score: Optional[float] = None


@dataclass
class LeaderboardRow:
    """A player's aggregated standing on one track."""
    player_id: int
    player_name: str = ''
    category_points: Dict[str, float] = field(default_factory=dict)
    total_points: float = 0.0
    best_events_points: float = 0.0
    best_events_category_points: Dict[str, float] = field(default_factory=dict)
    events: int = 0
    average_score: Optional[float] = None
    rank: int = 0
