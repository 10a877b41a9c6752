"""
Recommendation models.

Score breakdowns and player groups are ephemeral, request-scoped dataclasses.
``Recommendation`` is the Pydantic output contract handed to the serving layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .league import LeagueCalc
from .player import PlayerWeeklyStat, Position


class Verdict(str, Enum):
    """What the user should do with a player."""

    START = "START"
    BENCH = "BENCH"
    ADD = "ADD"


class Confidence(BaseModel):
    """Three-tier confidence attached to every verdict."""

    level: int = Field(..., ge=1, le=3, description="1 = lean, 3 = must")
    label: str = Field(..., description="Human readable tier label")


class Baseline(BaseModel):
    """The player (or sentinel) a verdict was judged against."""

    player_id: Optional[str] = Field(None, description="Baseline player, None for sentinels")
    name: str = Field(..., description="Baseline display name")
    score: Optional[float] = Field(None, description="Baseline weighted score")


class Recommendation(BaseModel):
    """A START, BENCH or ADD verdict with its justification."""

    player_id: str = Field(..., description="Player the verdict is about")
    name: str = Field(..., description="Player display name")
    position: Optional[Position] = Field(None, description="Fantasy position")
    team_id: Optional[str] = Field(None, description="Fantasy team the verdict applies to")
    slot: Optional[str] = Field(None, description="Current roster slot")
    verdict: Verdict = Field(..., description="START, BENCH or ADD")
    score: Optional[float] = Field(None, description="Player weighted score")
    reason: str = Field(..., description="Generated justification")
    confidence: Confidence
    baseline: Baseline
    injury_status: Optional[str] = Field(None, description="Current injury designation")

    @property
    def score_gap(self) -> float:
        return (self.score or 0.0) - (self.baseline.score or 0.0)


@dataclass
class ScoreComponent:
    """One factor's share of a weighted score."""

    factor: str
    label: str
    weight: float
    value: float
    contribution: float
    percent_of_total: int = 0


@dataclass
class ScoreBreakdown:
    player_id: str
    position: Optional[Position]
    weighted_score: float
    components: List[ScoreComponent] = field(default_factory=list)

    def component(self, factor: str) -> Optional[ScoreComponent]:
        for comp in self.components:
            if comp.factor == factor:
                return comp
        return None


@dataclass
class Advantage:
    factor: str
    label: str
    difference: float
    better_value: float
    worse_value: float


@dataclass
class ScoreComparison:
    """Factor-by-factor comparison of a stronger and a weaker breakdown."""

    better: ScoreBreakdown
    worse: ScoreBreakdown
    advantages: List[Advantage] = field(default_factory=list)


@dataclass
class PlayerGroup:
    """A roster entry (or free agent) joined with its score and stat rows.

    Built fresh for every request and never persisted. Free agents carry no
    ``team_id`` or ``slot``.
    """

    player_id: str
    name: str
    position: Optional[Position]
    team_id: Optional[str] = None
    slot: Optional[str] = None
    nfl_team: Optional[str] = None
    weighted_score: Optional[float] = None
    fantasy_points: Optional[float] = None
    calc: Optional[LeagueCalc] = None
    stat: Optional[PlayerWeeklyStat] = None
    injury_status: Optional[str] = None
    on_bye: bool = False
    opponent_difficulty: float = 0.0

    @property
    def score(self) -> float:
        """Weighted score with missing data read as zero."""
        return self.weighted_score if self.weighted_score is not None else 0.0

    @property
    def has_score(self) -> bool:
        return self.weighted_score is not None
