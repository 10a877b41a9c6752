"""Unit tests for the bulk scoring pipeline."""

import pytest

from lineup_advisor.models import (
    DefensePointsAgainst,
    LeagueCalc,
    Matchup,
    PlayerWeeklyStat,
    Position,
)
from lineup_advisor.services.pipeline import ScoringPipeline

MODIFIERS = {"rush_yds": 0.1, "rush_td": 6}


def _rb_week(player_id, week, rush_att, rush_yds, team="KC"):
    return PlayerWeeklyStat(
        player_id=player_id,
        season=2024,
        week=week,
        position="RB",
        team=team,
        rush_att=rush_att,
        rush_yds=rush_yds,
    )


@pytest.fixture
def stats():
    rows = []
    for week in (3, 4, 5):
        rows.append(_rb_week("r1", week, 20, 100, team="KC"))
        rows.append(_rb_week("r2", week, 10, 50, team="LV"))
    return rows


@pytest.fixture
def pipeline(settings):
    return ScoringPipeline(settings)


class TestScoringPipeline:
    """Test end-to-end scoring for one league week."""

    def test_weighted_scores(self, pipeline, stats):
        result = pipeline.run("league-1", 2024, 5, stats, MODIFIERS)
        calcs = {c.player_id: c for c in result.calcs}

        assert set(calcs) == {"r1", "r2"}
        r1, r2 = calcs["r1"], calcs["r2"]

        assert r1.fantasy_points == 10.0
        assert r1.recent_mean == 10.0
        assert r1.recent_std == 0.0
        assert r1.recent_mean_norm == 1.0
        assert r2.recent_mean_norm == 0.0
        assert r1.weighted_score == pytest.approx(0.66)
        assert r2.weighted_score == pytest.approx(0.0)
        assert r1.components["weighted_opportunity"] == 1.0
        assert r1.week == 5
        assert r1.position == Position.RB

    def test_stat_rows_carry_normalized_features(self, pipeline, stats):
        result = pipeline.run("league-1", 2024, 5, stats, MODIFIERS)
        rows = {s.player_id: s for s in result.stats}

        assert rows["r1"].trailing["weighted_opportunity"] == 20.0
        assert rows["r1"].normalized["weighted_opportunity"] == 1.0
        assert rows["r2"].normalized["weighted_opportunity"] == 0.0
        # Equal values across the cohort normalize to zero
        assert rows["r1"].normalized["yards_per_touch"] == 0.0

    def test_rerun_is_identical(self, pipeline, stats):
        first = pipeline.run("league-1", 2024, 5, stats, MODIFIERS)
        second = pipeline.run("league-1", 2024, 5, stats, MODIFIERS)
        assert [c.model_dump() for c in first.calcs] == [c.model_dump() for c in second.calcs]

    def test_later_weeks_ignored(self, pipeline, stats):
        stats.append(_rb_week("r1", 6, 1, 1))
        result = pipeline.run("league-1", 2024, 5, stats, MODIFIERS)
        assert {c.player_id: c.fantasy_points for c in result.calcs}["r1"] == 10.0

    def test_empty_week(self, pipeline, stats):
        result = pipeline.run("league-1", 2024, 9, stats, MODIFIERS)
        assert result.calcs == []
        assert result.indices == []

    def test_history_fills_weeks_without_stats(self, pipeline):
        stats = [_rb_week("r1", 5, 20, 100), _rb_week("r2", 5, 10, 50, team="LV")]
        history = [
            LeagueCalc(league_id="league-1", player_id="r1", season=2024, week=4, fantasy_points=20.0),
        ]
        result = pipeline.run("league-1", 2024, 5, stats, MODIFIERS, history=history)
        r1 = {c.player_id: c for c in result.calcs}["r1"]

        assert r1.recent_mean == 15.0
        assert r1.recent_std == 5.0

    def test_opponent_difficulty_applied(self, pipeline, stats):
        matchups = [Matchup(home_team="KC", away_team="DEN", season=2024, week=5)]
        defense = [
            DefensePointsAgainst(team="DEN", season=2024, week=5, position="RB", points_against=20),
            DefensePointsAgainst(team="SEA", season=2024, week=5, position="RB", points_against=10),
        ]
        result = pipeline.run(
            "league-1", 2024, 5, stats, MODIFIERS, current_matchups=matchups, defense_rows=defense
        )
        calcs = {c.player_id: c for c in result.calcs}

        assert calcs["r1"].components["opponent_difficulty"] == 1.0
        assert calcs["r1"].weighted_score == pytest.approx(0.72)
        # LV has no game in the schedule
        assert calcs["r2"].components["opponent_difficulty"] == 0.0
        assert len(result.indices) == 2


class TestLeaguePoints:
    def test_idle_weeks_have_no_points(self, pipeline):
        idle = PlayerWeeklyStat(player_id="r1", season=2024, week=2, position="RB")
        calcs = pipeline.league_points("league-1", [idle, _rb_week("r1", 3, 10, 80)], MODIFIERS)

        assert calcs[0].fantasy_points is None
        assert calcs[1].fantasy_points == 8.0
