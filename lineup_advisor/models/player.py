"""
Player models for weekly fantasy scoring.

This module contains Pydantic models for NFL players' weekly raw statistics,
the efficiency features derived from them, and their trailing and normalized
forms.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, validator


class Position(str, Enum):
    """NFL player positions for fantasy football."""
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"
    DEF = "DEF"


POSITION_ALIASES = {
    "DST": "DEF",
    "D/ST": "DEF",
    "DS/T": "DEF",
    "PK": "K",
}


def coerce_position(value) -> Optional[Position]:
    """Map a raw position string (any case, common aliases) onto Position."""
    if value is None:
        return None
    if isinstance(value, Position):
        return value
    text = str(value).strip().upper()
    text = POSITION_ALIASES.get(text, text)
    try:
        return Position(text)
    except ValueError:
        return None


RAW_STAT_FIELDS: List[str] = [
    # Passing
    "pass_att",
    "pass_cmp",
    "pass_yds",
    "pass_td",
    "pass_int",
    # Rushing
    "rush_att",
    "rush_yds",
    "rush_td",
    # Receiving
    "targets",
    "receptions",
    "rec_yds",
    "rec_td",
    # Misc offense
    "fumbles_lost",
    "two_pt",
    # Kicking
    "fg_made_0_19",
    "fg_made_20_29",
    "fg_made_30_39",
    "fg_made_40_49",
    "fg_made_50_plus",
    "fg_missed_0_19",
    "fg_missed_20_29",
    "fg_missed_30_39",
    "fg_missed_40_49",
    "fg_missed_50_plus",
    "pat_made",
    "pat_missed",
    # Team defense
    "sacks",
    "def_int",
    "fumble_rec",
    "def_td",
    "return_td",
    "points_allowed",
    "yards_allowed",
    "blocked_kicks",
    "safeties",
]


class PlayerWeeklyStat(BaseModel):
    """One player's statistics for one NFL week.

    Rows are keyed by (player_id, season, week) and are rebuilt wholesale on
    every recompute. ``features`` holds the week's efficiency features,
    ``trailing`` their ``*_3wk_avg`` forms and ``normalized`` the
    ``*_3wk_avg_norm`` values computed within the position cohort.
    """

    player_id: str = Field(..., description="Unique player identifier")
    season: int = Field(..., ge=1900, description="Season year")
    week: int = Field(..., ge=1, le=22, description="NFL week")
    position: Optional[Position] = Field(None, description="Fantasy position")
    team: Optional[str] = Field(None, description="NFL team abbreviation")
    played: Optional[bool] = Field(None, description="Explicit participation flag")

    # Passing stats
    pass_att: Optional[float] = Field(None, ge=0, description="Pass attempts")
    pass_cmp: Optional[float] = Field(None, ge=0, description="Pass completions")
    pass_yds: Optional[float] = Field(None, description="Passing yards")
    pass_td: Optional[float] = Field(None, ge=0, description="Passing touchdowns")
    pass_int: Optional[float] = Field(None, ge=0, description="Interceptions thrown")

    # Rushing stats
    rush_att: Optional[float] = Field(None, ge=0, description="Rush attempts")
    rush_yds: Optional[float] = Field(None, description="Rushing yards")
    rush_td: Optional[float] = Field(None, ge=0, description="Rushing touchdowns")

    # Receiving stats
    targets: Optional[float] = Field(None, ge=0, description="Pass targets")
    receptions: Optional[float] = Field(None, ge=0, description="Receptions")
    rec_yds: Optional[float] = Field(None, description="Receiving yards")
    rec_td: Optional[float] = Field(None, ge=0, description="Receiving touchdowns")

    fumbles_lost: Optional[float] = Field(None, ge=0, description="Fumbles lost")
    two_pt: Optional[float] = Field(None, ge=0, description="Two point conversions")

    # Kicking stats
    fg_made_0_19: Optional[float] = Field(None, ge=0)
    fg_made_20_29: Optional[float] = Field(None, ge=0)
    fg_made_30_39: Optional[float] = Field(None, ge=0)
    fg_made_40_49: Optional[float] = Field(None, ge=0)
    fg_made_50_plus: Optional[float] = Field(None, ge=0)
    fg_missed_0_19: Optional[float] = Field(None, ge=0)
    fg_missed_20_29: Optional[float] = Field(None, ge=0)
    fg_missed_30_39: Optional[float] = Field(None, ge=0)
    fg_missed_40_49: Optional[float] = Field(None, ge=0)
    fg_missed_50_plus: Optional[float] = Field(None, ge=0)
    pat_made: Optional[float] = Field(None, ge=0, description="Extra points made")
    pat_missed: Optional[float] = Field(None, ge=0, description="Extra points missed")

    # Defense stats
    sacks: Optional[float] = Field(None, ge=0, description="Sacks")
    def_int: Optional[float] = Field(None, ge=0, description="Defensive interceptions")
    fumble_rec: Optional[float] = Field(None, ge=0, description="Fumble recoveries")
    def_td: Optional[float] = Field(None, ge=0, description="Defensive touchdowns")
    return_td: Optional[float] = Field(None, ge=0, description="Kick/punt return touchdowns")
    points_allowed: Optional[float] = Field(None, ge=0, description="Points allowed by defense")
    yards_allowed: Optional[float] = Field(None, description="Yards allowed by defense")
    blocked_kicks: Optional[float] = Field(None, ge=0, description="Blocked kicks")
    safeties: Optional[float] = Field(None, ge=0, description="Safeties")

    # Derived values
    features: Dict[str, Optional[float]] = Field(default_factory=dict)
    trailing: Dict[str, Optional[float]] = Field(default_factory=dict)
    normalized: Dict[str, Optional[float]] = Field(default_factory=dict)

    @validator("position", pre=True)
    def position_aliases(cls, v):
        """Accept DST/D/ST style aliases and lowercase input."""
        if v is None or isinstance(v, Position):
            return v
        return coerce_position(v)

    def stat(self, name: str) -> float:
        """Raw counting stat with missing values read as zero."""
        value = getattr(self, name, None)
        return float(value) if value is not None else 0.0

    @property
    def key(self):
        return (self.player_id, self.season, self.week)

    @property
    def did_play(self) -> bool:
        """Whether the player recorded anything this week.

        An explicit ``played`` flag wins; otherwise any non-zero raw stat
        counts as participation.
        """
        if self.played is not None:
            return self.played
        return any(getattr(self, name) not in (None, 0) for name in RAW_STAT_FIELDS)
