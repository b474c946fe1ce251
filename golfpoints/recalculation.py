"""Recalculation of stored positions and points from current scores and tables.

Recalculating re-resolves each tournament in scope from the raw scores on
its stored rows, compares the result with what is stored, and writes only
rows whose position or points differ. Running it again with nothing changed
writes nothing, so it is safe to run as routine maintenance.
"""

import logging
import threading
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterator, Optional

from .constants import (
    BOTH,
    CATEGORIES,
    DEFAULT_LOCK_TIMEOUT_SECONDS,
    GROSS,
    MODES,
    NET,
    RECENT_LOG_LIMIT,
    TRACK_FIELDS,
)
from .exceptions import ConcurrentRecalculationConflict, TournamentNotFound
from .models import AuditLogEntry, RowChange, StoredResult, Tournament
from .points_table import PointsConfig
from .resolver import resolve_tournament
from .storage import ResultStore

logger = logging.getLogger('golfpoints.recalculation')

LEVELS = {'info': logging.INFO, 'warning': logging.WARNING}

_recent_entries: deque[AuditLogEntry] = deque(maxlen=RECENT_LOG_LIMIT)
_recent_lock = threading.Lock()


def recent_entries() -> list[AuditLogEntry]:
    """The most recent audit entries recorded by any service in this process."""
    with _recent_lock:
        return list(_recent_entries)


def tracks_for_mode(mode: str) -> tuple[str, ...]:
    """Tracks covered by a recalculation mode."""
    if mode not in MODES:
        raise ValueError(f'Invalid mode: {mode} (expected one of {", ".join(MODES)})')
    return (NET, GROSS) if mode == BOTH else (mode,)


class AuditLog:
    """Append-only log of recalculation events."""

    def __init__(self) -> None:
        self._entries: list[AuditLogEntry] = []
        self._lock = threading.Lock()

    def record(self, action: str, level: str = 'info', **details: Any) -> AuditLogEntry:
        if level not in LEVELS:
            raise ValueError(f'Invalid audit level: {level}')
        entry = AuditLogEntry(
            timestamp=datetime.now(timezone.utc),
            action=action,
            level=level,
            details=dict(details),
        )
        with self._lock:
            self._entries.append(entry)
        with _recent_lock:
            _recent_entries.append(entry)
        logger.log(LEVELS[level], f'[RECALC] {action}: {details}')
        return entry

    @property
    def entries(self) -> tuple[AuditLogEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AuditLogEntry]:
        return iter(self.entries)


class _TournamentLocks:
    """
    One lock per tournament id, shared by every service in the process.

    A lock is dropped from the registry once nobody holds or waits for it.
    """

    def __init__(self) -> None:
        self._locks: dict[int, threading.Lock] = {}
        self._users: dict[int, int] = {}
        self._guard = threading.Lock()

    @contextmanager
    def hold(self, tournament_id: int, timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(tournament_id, threading.Lock())
            self._users[tournament_id] = self._users.get(tournament_id, 0) + 1
        try:
            if not lock.acquire(timeout=timeout):
                raise ConcurrentRecalculationConflict(tournament_id)
            try:
                yield
            finally:
                lock.release()
        finally:
            with self._guard:
                self._users[tournament_id] -= 1
                if not self._users[tournament_id]:
                    del self._users[tournament_id]
                    del self._locks[tournament_id]

    def __contains__(self, tournament_id: object) -> bool:
        with self._guard:
            return tournament_id in self._locks


_tournament_locks = _TournamentLocks()
hold_tournament = _tournament_locks.hold


@dataclass(frozen=True)
class RecalculationScope:
    """
    What to recalculate: one tournament, one player, one category, or everything.

    Example:
        RecalculationScope.for_tournament(12, mode='gross')
        RecalculationScope.everything(category='major')
    """
    mode: str = BOTH
    tournament_id: Optional[int] = None
    player_id: Optional[int] = None
    category: Optional[str] = None

    def __post_init__(self):
        tracks_for_mode(self.mode)
        targets = [v for v in (self.tournament_id, self.player_id, self.category) if v is not None]
        if len(targets) > 1:
            raise ValueError('Scope takes at most one of tournament_id, player_id or category')
        if self.category is not None and self.category not in CATEGORIES:
            raise ValueError(f'Invalid category: {self.category}')

    @classmethod
    def for_tournament(cls, tournament_id: int, mode: str = BOTH) -> 'RecalculationScope':
        return cls(mode=mode, tournament_id=tournament_id)

    @classmethod
    def for_player(cls, player_id: int, mode: str = BOTH) -> 'RecalculationScope':
        return cls(mode=mode, player_id=player_id)

    @classmethod
    def everything(cls, category: Optional[str] = None, mode: str = BOTH) -> 'RecalculationScope':
        if category == 'all':
            category = None
        return cls(mode=mode, category=category)

    @property
    def kind(self) -> str:
        if self.tournament_id is not None:
            return 'tournament'
        if self.player_id is not None:
            return 'player'
        return 'all'


@dataclass
class RecalculationOutcome:
    """Everything one recalculation call changed, skipped or could not process."""
    mode: str
    dry_run: bool = False
    changed: list[RowChange] = field(default_factory=list)
    log: list[AuditLogEntry] = field(default_factory=list)
    tournaments_processed: int = 0
    skipped_tournaments: list[int] = field(default_factory=list)  # manual entry
    conflicted_tournaments: list[int] = field(default_factory=list)  # retryable
    failed_rows: list[int] = field(default_factory=list)
    missing_tables: list[str] = field(default_factory=list)

    @property
    def status(self) -> str:
        """'partial' if anything could not be processed, else 'updated' or 'unchanged'."""
        if self.failed_rows or self.conflicted_tournaments:
            return 'partial'
        if self.changed:
            return 'updated'
        return 'unchanged'

    @property
    def retryable(self) -> bool:
        return bool(self.conflicted_tournaments)

    def to_dict(self) -> dict[str, Any]:
        return {
            'status': self.status,
            'mode': self.mode,
            'dry_run': self.dry_run,
            'tournaments_processed': self.tournaments_processed,
            'changed': [vars(c) for c in self.changed],
            'skipped_tournaments': self.skipped_tournaments,
            'conflicted_tournaments': self.conflicted_tournaments,
            'failed_rows': self.failed_rows,
            'missing_tables': self.missing_tables,
            'log': [entry.to_dict() for entry in self.log],
        }


class RecalculationService:
    """
    Keeps stored positions and points in line with current scores and tables.

    The points configuration is passed in, never read from shared state; to
    apply an administrative change build a new PointsConfig and a new service.
    """

    def __init__(
        self,
        store: ResultStore,
        points_config: PointsConfig,
        audit_log: Optional[AuditLog] = None,
        dry_run: bool = False,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS,
    ):
        """
        Args:
            store: Where tournaments and results are read and written
            points_config: Points tables to pay from
            audit_log: Log to append to (a new one if omitted)
            dry_run: Report changes without writing them
            lock_timeout: Seconds to wait for another recalculation of the same tournament
        """
        self.store = store
        self.points_config = points_config
        self.audit_log = audit_log if audit_log is not None else AuditLog()
        self.dry_run = dry_run
        self.lock_timeout = lock_timeout

    def recalculate(self, scope: RecalculationScope) -> RecalculationOutcome:
        """Run the recalculation a scope describes."""
        if scope.kind == 'tournament':
            return self.recalculate_tournament(scope.tournament_id, scope.mode)
        if scope.kind == 'player':
            return self.recalculate_player(scope.player_id, scope.mode)
        return self.recalculate_all(scope.category, scope.mode)

    def recalculate_tournament(self, tournament_id: int, mode: str = BOTH) -> RecalculationOutcome:
        """
        Recalculate every row of one tournament.

        Raises:
            TournamentNotFound: If the tournament does not exist
            ValueError: If mode is not 'net', 'gross' or 'both'
        """
        tracks_for_mode(mode)
        tournament = self.store.get_tournament(tournament_id)
        if tournament is None:
            raise TournamentNotFound(tournament_id)

        outcome = RecalculationOutcome(mode=mode, dry_run=self.dry_run)
        self._process_tournament(tournament, mode, outcome)
        self._record(
            outcome,
            'recalculateTournament',
            tournament_id=tournament_id,
            mode=mode,
            changed=len(outcome.changed),
            status=outcome.status,
        )
        return outcome

    def recalculate_player(self, player_id: int, mode: str = BOTH) -> RecalculationOutcome:
        """
        Recalculate one player's rows in every tournament they played.

        Each tournament is still ranked over its whole field; only the
        player's own rows are written.
        """
        tracks_for_mode(mode)
        outcome = RecalculationOutcome(mode=mode, dry_run=self.dry_run)

        rows_by_tournament: dict[int, list[StoredResult]] = {}
        for row in self.store.results_for_player(player_id):
            rows_by_tournament.setdefault(row.tournament_id, []).append(row)

        for tournament_id, rows in rows_by_tournament.items():
            tournament = self.store.get_tournament(tournament_id)
            if tournament is None:
                for row in rows:
                    self._record(
                        outcome,
                        'staleResult',
                        level='warning',
                        result_id=row.id,
                        tournament_id=tournament_id,
                        player_id=player_id,
                    )
                    outcome.failed_rows.append(row.id)
                continue
            self._process_tournament(tournament, mode, outcome, player_id=player_id)

        self._record(
            outcome,
            'recalculatePlayer',
            player_id=player_id,
            mode=mode,
            tournaments=len(rows_by_tournament),
            changed=len(outcome.changed),
            status=outcome.status,
        )
        return outcome

    def recalculate_all(self, category: Optional[str] = None, mode: str = BOTH) -> RecalculationOutcome:
        """Recalculate every tournament, or every tournament of one category."""
        tracks_for_mode(mode)
        if category == 'all':
            category = None
        if category is not None and category not in CATEGORIES:
            raise ValueError(f'Invalid category: {category}')

        outcome = RecalculationOutcome(mode=mode, dry_run=self.dry_run)
        tournaments = self.store.list_tournaments(category)
        for tournament in tournaments:
            self._process_tournament(tournament, mode, outcome)

        self._record(
            outcome,
            'recalculateAllTournaments',
            category=category or 'all',
            mode=mode,
            count=len(tournaments),
            changed=len(outcome.changed),
            status=outcome.status,
        )
        return outcome

    def _process_tournament(
        self,
        tournament: Tournament,
        mode: str,
        outcome: RecalculationOutcome,
        player_id: Optional[int] = None,
    ) -> None:
        if tournament.is_manual_entry:
            self._record(
                outcome,
                'manualEntrySkipped',
                tournament_id=tournament.id,
                tournament_name=tournament.name,
            )
            outcome.skipped_tournaments.append(tournament.id)
            return

        try:
            with hold_tournament(tournament.id, self.lock_timeout):
                self._recalculate_rows(tournament, mode, outcome, player_id)
        except ConcurrentRecalculationConflict as e:
            self._record(
                outcome,
                'recalculationConflict',
                level='warning',
                tournament_id=tournament.id,
                error=str(e),
            )
            outcome.conflicted_tournaments.append(tournament.id)
            return

        outcome.tournaments_processed += 1

    def _recalculate_rows(
        self,
        tournament: Tournament,
        mode: str,
        outcome: RecalculationOutcome,
        player_id: Optional[int],
    ) -> None:
        tracks = tracks_for_mode(mode)
        rows = self.store.results_for_tournament(tournament.id)
        resolution = resolve_tournament(
            [row.to_score_entry() for row in rows],
            tournament.category,
            self.points_config,
            tracks,
        )

        for category in resolution.missing_tables:
            self._record(
                outcome,
                'unknownCategoryTable',
                level='warning',
                tournament_id=tournament.id,
                category=category,
            )
            if category not in outcome.missing_tables:
                outcome.missing_tables.append(category)

        for track in tracks:
            position_field, points_field, _ = TRACK_FIELDS[track]
            resolved = {r.player_id: r for r in resolution.for_track(track)}

            for row in rows:
                if player_id is not None and row.player_id != player_id:
                    continue

                result = resolved.get(row.player_id)
                # No score on this track: the row holds no position or points
                new_position = result.position if result else None
                new_points = result.points if result else 0.0
                old_position = getattr(row, position_field)
                old_points = getattr(row, points_field)
                if old_position == new_position and old_points == new_points:
                    continue

                if not self.dry_run:
                    try:
                        self.store.update_result(
                            row.id, **{position_field: new_position, points_field: new_points}
                        )
                    except (KeyError, ValueError) as e:
                        self._record(
                            outcome,
                            'rowUpdateFailed',
                            level='warning',
                            result_id=row.id,
                            tournament_id=tournament.id,
                            error=str(e),
                        )
                        outcome.failed_rows.append(row.id)
                        continue

                change = RowChange(
                    result_id=row.id,
                    tournament_id=tournament.id,
                    player_id=row.player_id,
                    track=track,
                    old_position=old_position,
                    new_position=new_position,
                    old_points=old_points,
                    new_points=new_points,
                )
                outcome.changed.append(change)
                self._record(
                    outcome,
                    'updateResult',
                    result_id=row.id,
                    tournament_id=tournament.id,
                    player_id=row.player_id,
                    track=track,
                    old={position_field: old_position, points_field: old_points},
                    new={position_field: new_position, points_field: new_points},
                    dry_run=self.dry_run,
                )

    def _record(self, outcome: RecalculationOutcome, action: str, level: str = 'info', **details: Any) -> None:
        outcome.log.append(self.audit_log.record(action, level, **details))
