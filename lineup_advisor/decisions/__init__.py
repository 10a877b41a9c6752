"""Lineup, flex and waiver decision engines."""

from .common import dedupe_recommendations, rank_players
from .flex import FlexDecisionEngine
from .grouping import build_player_group, build_player_groups, group_by_position_and_team
from .lineup import LineupDecision, LineupDecisionEngine
from .waiver import WaiverComparator, select_available_free_agents

__all__ = [
    "FlexDecisionEngine",
    "LineupDecision",
    "LineupDecisionEngine",
    "WaiverComparator",
    "build_player_group",
    "build_player_groups",
    "dedupe_recommendations",
    "group_by_position_and_team",
    "rank_players",
    "select_available_free_agents",
]
