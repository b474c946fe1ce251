"""Result storage used by the recalculation service.

The engine never owns persistence. ResultStore is the seam a caller's
database layer implements; the in-memory and JSON stores here back tests
and the command-line tools.
"""

import dataclasses
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

from .models import StoredResult, Tournament
from .schemas import ResultRecord, ResultsFile, TournamentRecord, TournamentsFile
from .utils import load_json, save_json

logger = logging.getLogger('golfpoints.storage')

UPDATABLE_FIELDS = {'position', 'points', 'gross_position', 'gross_points'}


class ResultStore(ABC):
    """Read tournaments and results; write derived position/points fields."""

    @abstractmethod
    def get_tournament(self, tournament_id: int) -> Optional[Tournament]:
        ...

    @abstractmethod
    def list_tournaments(self, category: Optional[str] = None) -> list[Tournament]:
        ...

    @abstractmethod
    def results_for_tournament(self, tournament_id: int) -> list[StoredResult]:
        ...

    @abstractmethod
    def results_for_player(self, player_id: int) -> list[StoredResult]:
        ...

    @abstractmethod
    def update_result(self, result_id: int, **fields) -> StoredResult:
        """
        Overwrite derived fields on one row. Writing the current values again
        is harmless.

        Raises:
            KeyError: If the row does not exist
            ValueError: If a field is not a derived position/points field
        """


class InMemoryResultStore(ResultStore):
    """Dict-backed store."""

    def __init__(
        self,
        tournaments: Iterable[Tournament] = (),
        results: Iterable[StoredResult] = (),
    ):
        self._tournaments = {t.id: t for t in tournaments}
        self._results = {r.id: r for r in results}
        self._lock = threading.Lock()

    def get_tournament(self, tournament_id: int) -> Optional[Tournament]:
        return self._tournaments.get(tournament_id)

    def list_tournaments(self, category: Optional[str] = None) -> list[Tournament]:
        tournaments = sorted(self._tournaments.values(), key=lambda t: t.id)
        if category is None:
            return tournaments
        return [t for t in tournaments if t.category == category]

    def results_for_tournament(self, tournament_id: int) -> list[StoredResult]:
        return [r for r in self._sorted_results() if r.tournament_id == tournament_id]

    def results_for_player(self, player_id: int) -> list[StoredResult]:
        return [r for r in self._sorted_results() if r.player_id == player_id]

    def get_result(self, result_id: int) -> Optional[StoredResult]:
        return self._results.get(result_id)

    def all_results(self) -> list[StoredResult]:
        return self._sorted_results()

    def add_tournament(self, tournament: Tournament) -> None:
        self._tournaments[tournament.id] = tournament

    def add_result(self, result: StoredResult) -> None:
        self._results[result.id] = result

    def update_result(self, result_id: int, **fields) -> StoredResult:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f'Cannot update fields: {", ".join(sorted(unknown))}')
        with self._lock:
            if result_id not in self._results:
                raise KeyError(f'Result not found: {result_id}')
            updated = dataclasses.replace(self._results[result_id], **fields)
            self._results[result_id] = updated
        return updated

    def _sorted_results(self) -> list[StoredResult]:
        return sorted(self._results.values(), key=lambda r: r.id)


class JsonResultStore(InMemoryResultStore):
    """
    Store backed by tournaments.json and results.json in a data directory.

    Every update rewrites results.json, so each row write stands on its own.

    Example:
        store = JsonResultStore('data')
        store.results_for_tournament(12)
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir)
        self.tournaments_path = self.data_dir / 'tournaments.json'
        self.results_path = self.data_dir / 'results.json'

        tournaments_file = load_json(self.tournaments_path, schema=TournamentsFile)
        results_file = load_json(self.results_path, schema=ResultsFile)

        super().__init__(
            tournaments=[Tournament(**t.model_dump()) for t in tournaments_file.tournaments],
            results=[StoredResult(**r.model_dump()) for r in results_file.results],
        )
        logger.info(
            f'Loaded {len(tournaments_file.tournaments)} tournaments and '
            f'{len(results_file.results)} results from {self.data_dir}'
        )

    def update_result(self, result_id: int, **fields) -> StoredResult:
        updated = super().update_result(result_id, **fields)
        with self._lock:
            self._save_results()
        return updated

    def _save_results(self) -> None:
        records = [ResultRecord(**dataclasses.asdict(r)) for r in self._sorted_results()]
        save_json(self.results_path, ResultsFile(results=records))
