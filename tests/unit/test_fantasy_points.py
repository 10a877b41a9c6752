"""Unit tests for league fantasy point calculation."""

from lineup_advisor.analysis.fantasy_points import fantasy_points
from lineup_advisor.models import PlayerWeeklyStat, StatModifier


def _qb():
    return PlayerWeeklyStat(
        player_id="qb-1", season=2024, week=3, position="QB", pass_yds=250, pass_td=2, pass_int=1
    )


class TestFantasyPoints:
    def test_mapping_modifiers(self):
        modifiers = {"pass_yds": 0.04, "pass_td": 4, "pass_int": -2}
        assert fantasy_points(_qb(), modifiers) == 16.0

    def test_stat_modifier_rows(self):
        modifiers = [StatModifier(stat="pass_yds", points=0.04), StatModifier(stat="pass_td", points=6)]
        assert fantasy_points(_qb(), modifiers) == 22.0

    def test_missing_stats_contribute_nothing(self):
        assert fantasy_points(_qb(), {"rush_yds": 0.1, "receptions": 1}) == 0.0

    def test_rounded_to_two_decimals(self):
        stat = PlayerWeeklyStat(player_id="wr", season=2024, week=1, rec_yds=33)
        assert fantasy_points(stat, {"rec_yds": 0.1}) == 3.3
