"""Unit tests for the waiver comparator and availability filter."""

import pytest

from lineup_advisor.decisions.waiver import WaiverComparator, select_available_free_agents
from lineup_advisor.models import Position, Verdict


@pytest.fixture
def free_agent(make_player):
    def _make(player_id, score, position=Position.QB, **kwargs):
        kwargs.setdefault("nfl_team", "BUF")
        return make_player(player_id, position, score, slot=None, team_id=None, **kwargs)

    return _make


class TestWaiverComparator:
    """Test ADD decisions between rostered players and free agents."""

    def test_rostered_without_score_after_grace_period(self, make_player, free_agent):
        rostered = make_player("R", Position.QB, None, "QB", name="Rookie")
        fa = free_agent("F", 0.8, name="Journeyman")

        recs = WaiverComparator(week=4).compare([rostered], [fa])

        assert len(recs) == 1
        rec = recs[0]
        assert rec.verdict == Verdict.ADD
        assert rec.player_id == "F"
        assert rec.team_id == "team-1"
        assert rec.baseline.player_id == "R"
        assert rec.baseline.score is None
        assert rec.confidence.label == "Strong Upgrade"
        assert rec.reason == "Journeyman (BUF) scores 0.80, while Rookie (KC) has no scoring data."

    def test_no_add_during_grace_period(self, make_player, free_agent):
        rostered = make_player("R", Position.QB, None, "QB")
        assert WaiverComparator(week=2).compare([rostered], [free_agent("F", 0.8)]) == []

    def test_lower_or_equal_free_agent_not_added(self, make_player, free_agent):
        rostered = make_player("R", Position.QB, 0.8, "QB")
        comparator = WaiverComparator(week=6)
        assert comparator.compare([rostered], [free_agent("F1", 0.5), free_agent("F2", 0.8)]) == []

    def test_positions_must_match(self, make_player, free_agent):
        rostered = make_player("R", Position.RB, 0.1, "RB")
        assert WaiverComparator(week=6).compare([rostered], [free_agent("F", 0.9, Position.WR)]) == []

    def test_ordering(self, make_player, free_agent):
        """Missing rostered scores first, then largest gaps."""
        rostered = [
            make_player("R3", Position.QB, 0.5, "BN"),
            make_player("R2", Position.QB, 0.2, "BN"),
            make_player("R1", Position.QB, None, "QB"),
        ]
        recs = WaiverComparator(week=5).compare(rostered, [free_agent("X", 0.9)])

        assert [r.baseline.player_id for r in recs] == ["R1", "R2", "R3"]

    def test_score_delta_reason(self, make_player, free_agent):
        rostered = make_player("R", Position.QB, 0.2, "QB", name="Starter")
        fa = free_agent("F", 0.9, name="Upgrade")

        rec = WaiverComparator(week=5).compare([rostered], [fa])[0]

        assert rec.reason == "Upgrade (BUF) outscores Starter (KC): 0.90 vs 0.20 (+0.70, 350% better)."

    def test_zero_rostered_score_omits_percent(self, make_player, free_agent):
        rostered = make_player("R", Position.QB, 0.0, "QB", name="Starter")
        rec = WaiverComparator(week=5).compare([rostered], [free_agent("F", 0.4, name="Upgrade")])[0]
        assert rec.reason.endswith("(+0.40).")

    def test_factor_comparison_when_both_have_components(self, make_player, free_agent, make_calc):
        rostered = make_player(
            "R", Position.QB, 0.1, "QB", name="Starter",
            calc=make_calc("R", Position.QB, 0.1, {"recent_mean": 0.2}),
        )
        fa = free_agent(
            "F", 0.5, name="Upgrade",
            calc=make_calc("F", Position.QB, 0.5, {"recent_mean": 1.0}),
        )
        rec = WaiverComparator(week=5).compare([rostered], [fa])[0]
        assert rec.reason == "Upgrade outscores Starter (0.50 vs 0.10) primarily due to stronger recent production."

    def test_unscored_free_agent_skipped(self, make_player, free_agent):
        rostered = make_player("R", Position.QB, None, "QB")
        assert WaiverComparator(week=8).compare([rostered], [free_agent("F", None)]) == []


class TestSelectAvailableFreeAgents:
    """Test the availability filter."""

    def test_filters_and_keeps_top_per_position(self, free_agent):
        candidates = [
            free_agent("rostered", 2.0, Position.WR),
            free_agent("hurt", 2.0, Position.WR, injury_status="IR"),
            free_agent("idle", 2.0, Position.WR),
            free_agent("unscored", None, Position.WR),
            free_agent("w1", 0.9, Position.WR),
            free_agent("w2", 0.8, Position.WR),
            free_agent("w3", 0.7, Position.WR),
            free_agent("w4", 0.6, Position.WR),
            free_agent("q1", 0.3, Position.QB),
        ]
        selected = select_available_free_agents(
            candidates, rostered_ids={"rostered"}, bye_week_map={"idle": 7}, week=7, per_position=3
        )

        assert [p.player_id for p in selected] == ["q1", "w1", "w2", "w3"]

    def test_bye_in_other_week_kept(self, free_agent):
        selected = select_available_free_agents(
            [free_agent("a", 0.5)], rostered_ids=set(), bye_week_map={"a": 9}, week=7
        )
        assert [p.player_id for p in selected] == ["a"]
