"""Unit tests for lineup_advisor/parsers/rows.py - storage row adapters."""

import pytest

from lineup_advisor.exceptions import MissingUpstreamData
from lineup_advisor.models import PlayerWeeklyStat, Position
from lineup_advisor.parsers.rows import (
    _coerce_float,
    _coerce_int,
    extract_joined,
    parse_league_calc_row,
    parse_roster_row,
    parse_rows,
    parse_stat_row,
)


class TestCoercion:
    """Test tolerant number parsing."""

    def test_coerce_float(self):
        assert _coerce_float("3.5") == 3.5
        assert _coerce_float("") is None
        assert _coerce_float("abc", default=0.0) == 0.0
        assert _coerce_float(None) is None

    def test_coerce_int(self):
        assert _coerce_int("7") == 7
        assert _coerce_int("7.0") == 7
        assert _coerce_int(None) == 0
        assert _coerce_int("bad", default=-1) == -1


class TestExtractJoined:
    """A join can be an object, a one-element list or missing."""

    def test_dict(self):
        assert extract_joined({"position": "WR"}) == {"position": "WR"}

    def test_list(self):
        assert extract_joined([{"position": "WR"}]) == {"position": "WR"}

    def test_missing(self):
        assert extract_joined(None) is None
        assert extract_joined([]) is None


class TestParseStatRow:
    def test_joined_player_and_suffixed_columns(self):
        row = {
            "player_id": 42,
            "season_year": 2024,
            "week": "5",
            "players": [{"position": "DST", "team": "SF"}],
            "sacks": "3",
            "passing_yards": "",
            "block_kicks_3wk_avg": 1,
            "sacks_per_game_3wk_avg_norm": 0.75,
            "sacks_per_game": 3,
        }
        stat = parse_stat_row(row)

        assert stat.player_id == "42"
        assert stat.season == 2024
        assert stat.week == 5
        assert stat.position == Position.DEF
        assert stat.team == "SF"
        assert stat.sacks == 3.0
        assert stat.pass_yds is None
        assert stat.trailing == {"blocked_kicks": 1.0}
        assert stat.normalized == {"sacks_per_game": 0.75}
        assert stat.features == {"sacks_per_game": 3.0}

    def test_receiving_touchdown_columns(self):
        row = {
            "player_id": "te-1",
            "season": 2024,
            "week": 3,
            "position": "TE",
            "receiving_touchdowns": 1,
            "receiving_touchdowns_3wk_avg": 0.67,
        }
        stat = parse_stat_row(row)

        assert stat.rec_td == 1.0
        assert stat.trailing == {"receiving_touchdowns": 0.67}

    def test_missing_week_raises(self):
        with pytest.raises(MissingUpstreamData):
            parse_stat_row({"player_id": "p1", "season": 2024})

    def test_missing_player_raises(self):
        with pytest.raises(MissingUpstreamData) as exc_info:
            parse_stat_row({"season": 2024, "week": 1})
        assert exc_info.value.what == "player_id"


class TestParseLeagueCalcRow:
    def test_parse_with_default_league(self):
        row = {
            "player_id": "p1",
            "season": "2024",
            "week": 5,
            "players": {"position": "wr", "team": "KC"},
            "weighted_score": "0.812",
            "recent_mean": None,
            "components": {"recent_mean": 0.9, "catch_rate": None},
        }
        calc = parse_league_calc_row(row, league_id="L1")

        assert calc.league_id == "L1"
        assert calc.position == Position.WR
        assert calc.weighted_score == 0.812
        assert calc.recent_mean is None
        assert calc.components == {"recent_mean": 0.9}
        assert calc.key == ("L1", "p1", 2024, 5)

    def test_missing_league_raises(self):
        with pytest.raises(MissingUpstreamData):
            parse_league_calc_row({"player_id": "p1", "week": 1})


class TestParseRosterRow:
    def test_joins(self):
        row = {
            "slot": "W/R/T",
            "players": [{"id": "p9", "name": "Some Back", "position": "RB", "team": "DAL"}],
            "teams": {"id": 3, "name": "Team Three"},
        }
        entry = parse_roster_row(row)

        assert entry.player_id == "p9"
        assert entry.team_id == "3"
        assert entry.position == Position.RB
        assert entry.nfl_team == "DAL"
        assert entry.display_name == "Some Back"
        assert entry.team_name == "Team Three"

    def test_missing_team_raises(self):
        with pytest.raises(MissingUpstreamData):
            parse_roster_row({"player_id": "p1"})


class TestParseRows:
    def test_skips_unparseable_rows(self):
        rows = [
            {"player_id": "p1", "season": 2024, "week": 1},
            {"player_id": "p2", "season": 2024},
            {"player_id": "p3", "season": 2024, "week": 40},
        ]
        parsed = parse_rows(rows, parse_stat_row)
        assert [s.player_id for s in parsed] == ["p1"]

    def test_typed_rows_pass_through(self):
        stat = PlayerWeeklyStat(player_id="p1", season=2024, week=1)
        assert parse_rows([stat], parse_stat_row) == [stat]

    def test_none_input(self):
        assert parse_rows(None, parse_stat_row) == []
