"""
Tests for bye week and injury lookups.
"""

from lineup_advisor.models import ByeWeekRow, InjuryRow
from lineup_advisor.utils.bye_weeks import build_player_bye_week_map, is_on_bye, players_on_bye
from lineup_advisor.utils.injuries import build_injury_status_map, cannot_play, injured_player_ids


class TestBuildPlayerByeWeekMap:
    """Test building the player bye week map."""

    def test_build_from_dicts_and_models(self):
        rows = [
            {"player_id": "p1", "bye_week": 7},
            ByeWeekRow(player_id="p2", bye_week=10),
            {"player_id": "p3", "bye_week": "12"},
        ]
        assert build_player_bye_week_map(rows) == {"p1": 7, "p2": 10, "p3": 12}

    def test_invalid_weeks_skipped(self):
        rows = [
            {"player_id": "p1", "bye_week": 0},
            {"player_id": "p2", "bye_week": 19},
            {"player_id": "p3", "bye_week": None},
            {"player_id": "p4", "bye_week": "N/A"},
            {"player_id": None, "bye_week": 5},
        ]
        assert build_player_bye_week_map(rows) == {}

    def test_empty_input(self):
        assert build_player_bye_week_map(None) == {}
        assert build_player_bye_week_map([]) == {}


class TestPlayersOnBye:
    def test_players_on_bye(self):
        bye_map = {"p1": 7, "p2": 7, "p3": 9}
        assert players_on_bye(bye_map, 7) == {"p1", "p2"}
        assert players_on_bye(bye_map, 8) == set()

    def test_is_on_bye(self):
        assert is_on_bye({"p1": 7}, "p1", 7)
        assert not is_on_bye({"p1": 7}, "p2", 7)


class TestInjuries:
    """Test injury designation helpers."""

    def test_cannot_play_statuses(self):
        assert cannot_play("O")
        assert cannot_play("ir")
        assert cannot_play(" D ")
        assert not cannot_play("Q")
        assert not cannot_play(None)
        assert not cannot_play("")

    def test_status_map_uppercases_and_skips_blanks(self):
        rows = [
            {"player_id": "p1", "status": "out"},
            InjuryRow(player_id="p2", status="q"),
            {"player_id": "p3", "status": None},
        ]
        statuses = build_injury_status_map(rows)
        assert statuses == {"p1": "OUT", "p2": "Q"}

    def test_injured_player_ids(self):
        assert injured_player_ids({"p1": "O", "p2": "Q", "p3": "IR"}) == {"p1", "p3"}
