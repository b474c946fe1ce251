"""Tests for workbook export."""

import openpyxl

from golfpoints.excel_export import LEADERBOARD_HEADERS, export_leaderboard, export_recalculation
from golfpoints.leaderboard import leaderboard_for_track
from golfpoints.recalculation import RecalculationService


class TestExportLeaderboard:
    """Tests for export_leaderboard."""

    def test_one_sheet_per_track(self, tmp_path, store, tournaments, points_config):
        """Test each track gets its own ranked sheet."""
        RecalculationService(store, points_config).recalculate_all()
        boards = {
            track: leaderboard_for_track(store.all_results(), tournaments, track)
            for track in ('net', 'gross')
        }

        path = export_leaderboard(tmp_path / 'out' / 'leaderboard.xlsx', boards)

        wb = openpyxl.load_workbook(path)
        assert wb.sheetnames == ['Net Leaderboard', 'Gross Leaderboard']
        ws = wb['Net Leaderboard']
        assert [c.value for c in ws[1]] == LEADERBOARD_HEADERS
        assert ws[1][0].font.bold
        assert ws.cell(row=2, column=1).value == 1
        assert ws.cell(row=2, column=2).value == '1'
        assert ws.max_row == 5


class TestExportRecalculation:
    """Tests for export_recalculation."""

    def test_changes_and_log(self, tmp_path, store, points_config):
        outcome = RecalculationService(store, points_config, dry_run=True).recalculate_tournament(2)

        path = export_recalculation(tmp_path / 'recalc.xlsx', outcome)

        wb = openpyxl.load_workbook(path)
        changes = wb['Changes']
        log = wb['Log']
        assert changes.max_row == len(outcome.changed) + 1
        assert changes.cell(row=2, column=2).value == 2
        assert log.max_row == len(outcome.log) + 1
        assert log.cell(row=log.max_row, column=3).value == 'recalculateTournament'
