"""
League models: per-league calculations, rosters and NFL schedule context.
"""

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field, validator

from .player import Position, coerce_position


class LeagueCalc(BaseModel):
    """Per (league, player, season, week) scoring output.

    ``weighted_score`` is a pure function of the player's weekly stat row and
    the recent performance values stored here, so recomputing from the same
    inputs always yields the same score.
    """

    league_id: str = Field(..., description="League identifier")
    player_id: str = Field(..., description="Player identifier")
    season: int = Field(..., description="Season year")
    week: int = Field(..., ge=1, description="NFL week")
    position: Optional[Position] = Field(None, description="Fantasy position")
    team: Optional[str] = Field(None, description="NFL team abbreviation")

    fantasy_points: Optional[float] = Field(None, description="League fantasy points for the week")
    recent_mean: Optional[float] = Field(None, description="Trailing mean of fantasy points")
    recent_std: Optional[float] = Field(None, ge=0, description="Trailing std of fantasy points")
    recent_mean_norm: Optional[float] = Field(None, description="Min-max normalized recent mean")
    recent_std_norm: Optional[float] = Field(None, description="Z-scored recent std")
    weighted_score: Optional[float] = Field(None, description="Composite weighted score")

    components: Dict[str, float] = Field(
        default_factory=dict, description="Normalized factor values used for the score"
    )

    @validator("position", pre=True)
    def position_aliases(cls, v):
        return coerce_position(v)

    @property
    def key(self) -> Tuple[str, str, int, int]:
        return (self.league_id, self.player_id, self.season, self.week)


class RosterEntry(BaseModel):
    """A fantasy team's rostered player and the slot they currently occupy."""

    team_id: str = Field(..., description="Fantasy team identifier")
    player_id: str = Field(..., description="Player identifier")
    slot: Optional[str] = Field(None, description="Current roster slot code")
    name: Optional[str] = Field(None, description="Player display name")
    position: Optional[Position] = Field(None, description="Fantasy position")
    nfl_team: Optional[str] = Field(None, description="NFL team abbreviation")
    team_name: Optional[str] = Field(None, description="Fantasy team display name")

    @validator("position", pre=True)
    def position_aliases(cls, v):
        return coerce_position(v)

    @property
    def display_name(self) -> str:
        return self.name or self.player_id


class RosterSlotRow(BaseModel):
    """League roster configuration row: slot label and how many of it."""

    league_id: Optional[str] = None
    position: str = Field(..., description="Slot label, e.g. QB, W/R/T, BN")
    count: int = Field(0, ge=0, description="Number of slots with this label")


class InjuryRow(BaseModel):
    player_id: str
    status: Optional[str] = None


class ByeWeekRow(BaseModel):
    player_id: str
    bye_week: Optional[int] = Field(None, ge=1, le=22)


class Matchup(BaseModel):
    """One NFL game in a given week."""

    home_team: str
    away_team: str
    season: int
    week: int = Field(..., ge=1)


class DefensePointsAgainst(BaseModel):
    """Fantasy points a defense allowed to one offensive position in one week."""

    team: str = Field(..., description="Defending NFL team")
    season: int
    week: int = Field(..., ge=1)
    position: Position
    points_against: Optional[float] = None

    @validator("position", pre=True)
    def position_aliases(cls, v):
        return coerce_position(v)


class TeamOffenseWeek(BaseModel):
    """Offensive fantasy points an NFL team scored in one week."""

    team: str
    season: int
    week: int = Field(..., ge=1)
    offensive_points: Optional[float] = None


class DifficultyIndex(BaseModel):
    """Normalized matchup value for players of ``position`` facing ``team``.

    For offensive positions ``team`` is the opposing defense and the value is
    its normalized points allowed to that position. For DEF ``team`` is the
    opposing offense and the value is its z-scored scoring output.
    """

    team: str
    season: int
    week: int
    position: Position
    value: float = 0.0


class StatModifier(BaseModel):
    """League scoring rule: points awarded per unit of a raw stat."""

    stat: str
    points: float
