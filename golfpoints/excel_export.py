"""Excel export of leaderboards and recalculation reports."""

import logging
from pathlib import Path
from typing import Sequence

import openpyxl
from openpyxl.styles import Font

from .constants import CATEGORIES
from .models import LeaderboardRow
from .recalculation import RecalculationOutcome

logger = logging.getLogger('golfpoints.excel_export')

LEADERBOARD_HEADERS = (
    ['Rank', 'Player', 'Events']
    + [f'{category.title()} Points' for category in CATEGORIES]
    + ['Total Points', 'Best Events Points', 'Average Score']
)

CHANGE_HEADERS = [
    'Result', 'Tournament', 'Player', 'Track',
    'Old Position', 'New Position', 'Old Points', 'New Points',
]


def _write_header(ws, headers: Sequence[str]) -> None:
    ws.append(list(headers))
    for cell in ws[1]:
        cell.font = Font(bold=True)


def export_leaderboard(
    excel_path: str | Path,
    leaderboards: dict[str, list[LeaderboardRow]],
) -> Path:
    """
    Write one sheet per track with the ranked leaderboard.

    Args:
        excel_path: Output .xlsx path
        leaderboards: Track name ('net', 'gross') -> ranked rows

    Returns:
        Path written
    """
    excel_path = Path(excel_path)
    wb = openpyxl.Workbook()
    wb.remove(wb.active)

    for track, rows in leaderboards.items():
        ws = wb.create_sheet(title=f'{track.title()} Leaderboard')
        _write_header(ws, LEADERBOARD_HEADERS)
        for row in rows:
            average = round(row.average_score, 1) if row.average_score is not None else None
            ws.append(
                [row.rank, row.player_name or str(row.player_id), row.events]
                + [row.category_points.get(category, 0.0) for category in CATEGORIES]
                + [row.total_points, row.best_events_points, average]
            )

    excel_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(excel_path)
    logger.info(f'Leaderboard saved to {excel_path}')
    return excel_path


def export_recalculation(excel_path: str | Path, outcome: RecalculationOutcome) -> Path:
    """Write a recalculation's changed rows and audit log to a workbook."""
    excel_path = Path(excel_path)
    wb = openpyxl.Workbook()

    ws = wb.active
    ws.title = 'Changes'
    _write_header(ws, CHANGE_HEADERS)
    for change in outcome.changed:
        ws.append([
            change.result_id,
            change.tournament_id,
            change.player_id,
            change.track,
            change.old_position,
            change.new_position,
            change.old_points,
            change.new_points,
        ])

    log_ws = wb.create_sheet(title='Log')
    _write_header(log_ws, ['Timestamp', 'Level', 'Action', 'Details'])
    for entry in outcome.log:
        details = ', '.join(f'{k}={v}' for k, v in entry.details.items())
        log_ws.append([entry.timestamp.isoformat(), entry.level, entry.action, details])

    excel_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(excel_path)
    logger.info(f'Recalculation report saved to {excel_path}')
    return excel_path
