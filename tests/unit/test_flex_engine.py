"""Unit tests for the flex decision engine."""

import pytest

from lineup_advisor.decisions.common import dedupe_recommendations
from lineup_advisor.decisions.flex import FlexDecisionEngine
from lineup_advisor.decisions.grouping import group_by_position_and_team
from lineup_advisor.decisions.lineup import LineupDecisionEngine
from lineup_advisor.models import Position, Verdict
from lineup_advisor.utils.roster_configs import RosterConfiguration


@pytest.fixture
def slots():
    return RosterConfiguration.default_slots()


def _run(slots, players):
    groups = group_by_position_and_team(players)
    lineup = LineupDecisionEngine(slots).decide(groups)
    flex = FlexDecisionEngine(slots).decide(groups, lineup.position_starters, lineup.recommendations)
    return lineup, flex


class TestFlexDecisionEngine:
    """Test flex START/BENCH decisions."""

    @pytest.fixture
    def roster(self, make_player):
        return [
            make_player("A", Position.RB, 0.9, "RB"),
            make_player("B", Position.RB, 0.8, "RB"),
            make_player("C", Position.RB, 0.7, "BN", name="Charlie"),
            make_player("D", Position.WR, 0.95, "WR"),
            make_player("E", Position.WR, 0.85, "WR"),
            make_player("F", Position.WR, 0.3, "W/R/T", name="Foxtrot"),
            make_player("G", Position.TE, 0.5, "TE"),
        ]

    def test_best_non_starter_takes_flex(self, slots, roster):
        lineup, flex = _run(slots, roster)
        recs = {r.player_id: r for r in flex}

        assert lineup.recommendations == []
        assert set(recs) == {"C", "F"}

        assert recs["C"].verdict == Verdict.START
        assert recs["C"].baseline.player_id == "F"
        assert recs["C"].reason == (
            "Best available for the flex slot. Ranked #1 of 2 flex-eligible players (RB) "
            "with weighted score 0.70. Charlie has a slightly higher weighted score (0.70 vs 0.30)."
        )

        assert recs["F"].verdict == Verdict.BENCH
        assert recs["F"].baseline.player_id == "C"
        assert recs["F"].reason.startswith("Not the best option for the flex slot.")

    def test_start_count_bounded_by_flex_slots(self, slots, roster, make_player):
        roster.append(make_player("H", Position.TE, 0.65, "BN"))
        _, flex = _run(slots, roster)
        starts = [r for r in flex if r.verdict == Verdict.START]
        assert len(starts) <= slots.flex_slots

    def test_injured_flex_player_benched_first(self, slots, make_player):
        players = [
            make_player("A", Position.RB, 0.9, "W/R/T", injury_status="O", name="Hurt"),
            make_player("W1", Position.WR, 0.9, "WR"),
            make_player("W2", Position.WR, 0.8, "WR"),
            make_player("B", Position.WR, 0.4, "BN"),
        ]
        _, flex = _run(slots, players)
        recs = {r.player_id: r for r in flex}

        assert recs["A"].verdict == Verdict.BENCH
        assert recs["A"].reason.startswith("Hurt is currently injured")
        assert recs["A"].baseline.player_id == "B"
        assert recs["B"].verdict == Verdict.START

    def test_bye_flex_player_with_empty_pool(self, slots, make_player):
        _, flex = _run(slots, [make_player("A", Position.TE, 0.9, "W/R/T", on_bye=True)])
        assert flex[0].baseline.name == "any available player"
        assert flex[0].baseline.score == 100.0

    def test_no_flex_slots(self, make_player):
        slots = RosterConfiguration.from_rows([{"position": "RB", "count": 2}])
        _, flex = _run(slots, [make_player("A", Position.RB, 0.9, "BN")])
        assert flex == []

    def test_teams_evaluated_separately(self, slots, make_player):
        players = []
        for team_id, bench_id in (("t1", "A"), ("t2", "B")):
            players += [
                make_player(f"{team_id}-w1", Position.WR, 0.9, "WR", team_id=team_id),
                make_player(f"{team_id}-w2", Position.WR, 0.8, "WR", team_id=team_id),
                make_player(bench_id, Position.WR, 0.5, "BN", team_id=team_id),
            ]
        _, flex = _run(slots, players)
        assert {(r.player_id, r.team_id) for r in flex if r.verdict == Verdict.START} == {
            ("A", "t1"),
            ("B", "t2"),
        }


class TestDedupe:
    def test_first_recommendation_wins(self, slots, make_player):
        lineup, _ = _run(slots, [make_player("A", Position.WR, 0.5, "BN")])
        recs = lineup.recommendations
        assert len(recs) == 1
        assert dedupe_recommendations(recs + recs) == recs
