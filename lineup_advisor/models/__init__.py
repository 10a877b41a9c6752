"""Pydantic models and request-scoped dataclasses."""

from .league import (
    ByeWeekRow,
    DefensePointsAgainst,
    DifficultyIndex,
    InjuryRow,
    LeagueCalc,
    Matchup,
    RosterEntry,
    RosterSlotRow,
    StatModifier,
    TeamOffenseWeek,
)
from .player import RAW_STAT_FIELDS, PlayerWeeklyStat, Position, coerce_position
from .recommendation import (
    Advantage,
    Baseline,
    Confidence,
    PlayerGroup,
    Recommendation,
    ScoreBreakdown,
    ScoreComparison,
    ScoreComponent,
    Verdict,
)

__all__ = [
    "Advantage",
    "Baseline",
    "ByeWeekRow",
    "Confidence",
    "DefensePointsAgainst",
    "DifficultyIndex",
    "InjuryRow",
    "LeagueCalc",
    "Matchup",
    "PlayerGroup",
    "PlayerWeeklyStat",
    "Position",
    "RAW_STAT_FIELDS",
    "Recommendation",
    "RosterEntry",
    "RosterSlotRow",
    "ScoreBreakdown",
    "ScoreComparison",
    "ScoreComponent",
    "StatModifier",
    "TeamOffenseWeek",
    "Verdict",
    "coerce_position",
]
