"""Unit tests for validation functions."""

from golfpoints.models import ScoreEntry
from golfpoints.points_table import PointsTable, default_points_config
from golfpoints.validators import (
    detect_existing_ties,
    validate_points_table,
    validate_positions,
    validate_score_entries,
)


class TestPointsTableValidation:
    """Tests for points table checks."""

    def test_default_tables_are_clean(self):
        """Test every shipped schedule passes."""
        config = default_points_config()
        for category in config.categories:
            assert validate_points_table(config.table_for(category)) == []

    def test_increasing_points(self):
        """Test a worse position paying more is flagged."""
        table = PointsTable([(1, 100), (2, 150), (3, 50)], category='tour')

        warnings = validate_points_table(table)

        assert len(warnings) == 1
        assert 'tour pays more for position 2 (150.0) than for position 1 (100.0)' in warnings[0]

    def test_negative_points(self):
        """Test negative points are flagged."""
        warnings = validate_points_table(PointsTable([(1, 10), (2, -5)], category='league'))
        assert any('negative' in w for w in warnings)

    def test_gaps_allowed(self):
        """Test a sparse table is not a problem in itself."""
        assert validate_points_table(PointsTable([(1, 100), (5, 20)])) == []


class TestScoreEntryValidation:
    """Tests for score entry checks."""

    def test_valid_entries(self):
        entries = [
            ScoreEntry(player_id=1, net_score=70, gross_score=78, handicap=8),
            ScoreEntry(player_id=2, net_score=72),
        ]
        assert validate_score_entries(entries) == []

    def test_duplicate_player(self):
        """Test a player entered twice is flagged once."""
        entries = [
            ScoreEntry(player_id=3, net_score=70),
            ScoreEntry(player_id=3, net_score=71),
            ScoreEntry(player_id=3, net_score=72),
        ]

        warnings = validate_score_entries(entries)

        assert warnings == ['Players with more than one entry: 3']

    def test_gross_net_mismatch(self):
        """Test gross must equal net plus handicap."""
        entries = [ScoreEntry(player_id=1, net_score=70, gross_score=80, handicap=8)]

        warnings = validate_score_entries(entries)

        assert len(warnings) == 1
        assert 'Player 1 gross 80' in warnings[0]

    def test_fractional_handicap_within_tolerance(self):
        entries = [ScoreEntry(player_id=1, net_score=69.6, gross_score=78, handicap=8.4)]
        assert validate_score_entries(entries) == []


class TestPositionValidation:
    """Tests for checking supplied positions against scores."""

    def test_consistent_positions(self):
        """Test a tie followed by a skipped position passes."""
        rows = [
            {'position': 1, 'score': 70},
            {'position': 1, 'score': 70},
            {'position': 3, 'score': 72},
        ]
        assert validate_positions(rows) == []

    def test_same_score_different_positions(self):
        rows = [{'position': 1, 'score': 70}, {'position': 2, 'score': 70}]

        issues = validate_positions(rows)

        assert len(issues) == 1
        assert 'same score (70)' in issues[0]

    def test_different_scores_same_position(self):
        rows = [{'position': 1, 'score': 70}, {'position': 1, 'score': 71}]

        issues = validate_positions(rows)

        assert len(issues) == 1
        assert 'share position 1' in issues[0]

    def test_better_score_at_worse_position(self):
        rows = [{'position': 1, 'score': 72}, {'position': 2, 'score': 70}]

        issues = validate_positions(rows)

        assert len(issues) == 1
        assert 'better score' in issues[0]

    def test_positions_not_starting_at_one(self):
        issues = validate_positions([{'position': 2, 'score': 70}])
        assert issues == ['Positions start at 2, not 1']

    def test_empty(self):
        assert validate_positions([]) == []


class TestDetectExistingTies:
    """Tests for detect_existing_ties."""

    def test_tie_present(self):
        assert detect_existing_ties([{'position': 1}, {'position': 1}, {'position': 3}])

    def test_no_tie(self):
        assert not detect_existing_ties([{'position': 1}, {'position': 2}])
