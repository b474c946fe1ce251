"""Exceptions raised by the points engine."""


class DuplicateConfigPosition(ValueError):
    """A points table was configured with two entries for the same position."""

    def __init__(self, category: str, position: int):
        self.category = category
        self.position = position
        super().__init__(f'Duplicate position {position} in {category or "unnamed"} points table')


class UnknownCategoryTable(KeyError):
    """No points table is configured for a tournament category."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(category)

    def __str__(self) -> str:
        return f'No points table configured for category: {self.category}'


class ConcurrentRecalculationConflict(RuntimeError):
    """Another recalculation already holds the tournament. Safe to retry."""

    def __init__(self, tournament_id: int):
        self.tournament_id = tournament_id
        super().__init__(f'Recalculation already in progress for tournament {tournament_id}')


class TournamentNotFound(LookupError):
    """Requested tournament does not exist in the result store."""

    def __init__(self, tournament_id: int):
        self.tournament_id = tournament_id
        super().__init__(f'Tournament not found: {tournament_id}')
