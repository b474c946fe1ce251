"""Unit tests for net and gross tournament resolution."""

import pytest

from golfpoints.models import ScoreEntry
from golfpoints.points_table import PointsConfig, PointsTable, default_points_config
from golfpoints.resolver import points_category, resolve_track, resolve_tournament


@pytest.fixture
def major_field():
    return [
        ScoreEntry(player_id=1, net_score=70, gross_score=78, handicap=8),
        ScoreEntry(player_id=2, net_score=70, gross_score=74, handicap=4),
        ScoreEntry(player_id=3, net_score=70, gross_score=82, handicap=12),
        ScoreEntry(player_id=4, net_score=75, gross_score=75, handicap=0),
    ]


class TestResolveTrack:
    """Tests for ranking a single track."""

    def test_tied_leaders(self):
        """Test [70, 70, 70, 75] gives positions [1, 1, 1, 4] and points [500, 500, 500, 325]."""
        table = PointsTable([(1, 750), (2, 400), (3, 350), (4, 325)])
        entries = [ScoreEntry(player_id=i, net_score=s) for i, s in enumerate([70, 70, 70, 75], 1)]

        results = resolve_track(entries, 'net', table)

        assert [r.position for r in results] == [1, 1, 1, 4]
        assert [r.points for r in results] == [500, 500, 500, 325]
        assert [r.is_tied for r in results] == [True, True, True, False]
        assert [r.display_position for r in results] == ['T1', 'T1', 'T1', '4']

    def test_single_player(self):
        """Test a field of one is 1st with exactly the position-1 value."""
        table = default_points_config().table_for('league')
        results = resolve_track([ScoreEntry(player_id=9, net_score=36)], 'net', table)
        assert len(results) == 1
        assert results[0].position == 1
        assert results[0].points == 93.75
        assert not results[0].is_tied

    def test_empty_field(self):
        """Test no scores gives no results."""
        assert resolve_track([], 'gross', PointsTable([(1, 10)])) == []

    def test_results_carry_score(self):
        """Test each result records the score it was ranked on."""
        results = resolve_track([ScoreEntry(player_id=1, gross_score=81)], 'gross', PointsTable([]))
        assert results[0].score == 81
        assert results[0].points == 0.0


class TestResolveTournament:
    """Tests for dual-track resolution."""

    def test_net_uses_tournament_category(self, major_field):
        """Test net points come from the major table."""
        resolution = resolve_tournament(major_field, 'major', default_points_config())
        assert [(r.player_id, r.position, r.points) for r in resolution.net] == [
            (1, 1, 500.0),
            (2, 1, 500.0),
            (3, 1, 500.0),
            (4, 4, 325.0),
        ]

    def test_gross_always_uses_tour_table(self, major_field):
        """Test a major's gross winner earns the tour 1st-place value, not the major's."""
        resolution = resolve_tournament(major_field, 'major', default_points_config())
        assert [(r.player_id, r.position, r.points) for r in resolution.gross] == [
            (2, 1, 500.0),
            (4, 2, 300.0),
            (1, 3, 190.0),
            (3, 4, 135.0),
        ]

    @pytest.mark.parametrize('category', ['major', 'tour', 'league', 'supr'])
    def test_gross_table_independent_of_category(self, category):
        """Test gross points are identical whatever the category."""
        entries = [ScoreEntry(player_id=1, gross_score=72), ScoreEntry(player_id=2, gross_score=73)]
        resolution = resolve_tournament(entries, category, default_points_config())
        assert [r.points for r in resolution.gross] == [500.0, 300.0]

    def test_missing_track_score(self):
        """Test a player without a gross score appears only in the net results."""
        entries = [
            ScoreEntry(player_id=1, net_score=68, gross_score=76),
            ScoreEntry(player_id=2, net_score=71),
        ]
        resolution = resolve_tournament(entries, 'tour', default_points_config())
        assert [r.player_id for r in resolution.net] == [1, 2]
        assert [r.player_id for r in resolution.gross] == [1]

    def test_restricted_tracks(self, major_field):
        """Test resolving only one track leaves the other empty."""
        resolution = resolve_tournament(major_field, 'major', default_points_config(), tracks=('gross',))
        assert resolution.net == []
        assert len(resolution.gross) == 4

    def test_missing_category_table(self, major_field):
        """Test an unconfigured category pays 0 and is reported, not raised."""
        config = PointsConfig.from_mapping({'tour': [(1, 500), (2, 300)]})
        resolution = resolve_tournament(major_field, 'major', config)

        assert all(r.points == 0.0 for r in resolution.net)
        assert [r.position for r in resolution.net] == [1, 1, 1, 4]
        assert resolution.missing_tables == ['major']
        assert resolution.gross[0].points == 500.0

    def test_missing_tour_table_hits_gross(self, major_field):
        """Test losing the tour table zeroes gross points for every category."""
        config = PointsConfig.from_mapping({'major': [(1, 750)]})
        resolution = resolve_tournament(major_field, 'major', config)
        assert resolution.missing_tables == ['tour']
        assert all(r.points == 0.0 for r in resolution.gross)

    def test_empty_tournament(self):
        """Test a tournament with no entries resolves to empty lists."""
        resolution = resolve_tournament([], 'major', default_points_config())
        assert resolution.net == []
        assert resolution.gross == []


class TestPointsCategory:
    """Tests for which table pays each track."""

    def test_net_category(self):
        assert points_category('league', 'net') == 'league'

    def test_gross_category(self):
        assert points_category('league', 'gross') == 'tour'

    def test_unknown_track(self):
        with pytest.raises(ValueError):
            points_category('major', 'stableford')
