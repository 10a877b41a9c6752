"""
Opponent difficulty: difficulty index builders and matchup resolution.

Offensive positions are judged by how many fantasy points the opposing
defense has allowed to that position lately (min-max across defenses).
Team defenses are judged by the opposing offense's recent scoring
(z-scored across offenses).
"""

from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd
from loguru import logger

from ..models.league import DefensePointsAgainst, DifficultyIndex, Matchup, TeamOffenseWeek
from ..models.player import Position
from ..utils.constants import FINAL_WEEK, UPCOMING_WEEK_POSITIONS
from .normalization import min_max_normalize, z_score_normalize
from .recent_stats import recent_window


def upcoming_week(week: int) -> int:
    """Next week's number, staying on the final week once the season ends."""
    return week if week >= FINAL_WEEK else week + 1


def build_matchup_map(matchups: Iterable[Matchup]) -> Dict[str, str]:
    """Map each team (lowercased) to its opponent, in both directions."""
    matchup_map: Dict[str, str] = {}
    for m in matchups:
        matchup_map[m.home_team.lower()] = m.away_team
        matchup_map[m.away_team.lower()] = m.home_team
    return matchup_map


def _window_frame(rows: List[dict], week: int, window: int) -> pd.DataFrame:
    frame = pd.DataFrame(rows)
    if frame.empty:
        return frame
    start, end = recent_window(week, window)
    return frame[(frame["week"] >= start) & (frame["week"] <= end)]


def defense_difficulty_index(
    rows: Iterable[DefensePointsAgainst],
    season: int,
    week: int,
    window: int = 3,
    precision: int = 3,
) -> List[DifficultyIndex]:
    """
    Build per-position defense difficulty for ``week``.

    Each defense's points allowed to a position are averaged over the trailing
    window, then min-max normalized across all defenses for that position. A
    higher value means the defense gives up more, an easier matchup.
    """
    records = [
        {"team": r.team, "week": r.week, "position": r.position, "points": r.points_against}
        for r in rows
        if r.season == season
    ]
    frame = _window_frame(records, week, window)
    if frame.empty:
        logger.info(f"No defense points-against data for season {season} week {week}")
        return []

    averages = frame.groupby(["position", "team"], sort=True)["points"].mean().reset_index()
    indices: List[DifficultyIndex] = []
    for position, cohort in averages.groupby("position", sort=False):
        values = [None if pd.isna(v) else float(v) for v in cohort["points"]]
        for team, norm in zip(cohort["team"], min_max_normalize(values, precision)):
            indices.append(
                DifficultyIndex(
                    team=team, season=season, week=week, position=position, value=norm or 0.0
                )
            )
    return indices


def offense_difficulty_index(
    rows: Iterable[TeamOffenseWeek],
    season: int,
    week: int,
    window: int = 3,
    precision: int = 3,
) -> List[DifficultyIndex]:
    """
    Build the offense difficulty index used when scoring team defenses.

    Each offense's fantasy points are averaged over the trailing window and
    z-scored across offenses (higher = harder to defend against).
    """
    records = [
        {"team": r.team, "week": r.week, "points": r.offensive_points}
        for r in rows
        if r.season == season
    ]
    frame = _window_frame(records, week, window)
    if frame.empty:
        logger.info(f"No team offense data for season {season} week {week}")
        return []

    averages = frame.groupby("team", sort=True)["points"].mean()
    values = [None if pd.isna(v) else float(v) for v in averages]
    return [
        DifficultyIndex(team=team, season=season, week=week, position=Position.DEF, value=z or 0.0)
        for team, z in zip(averages.index, z_score_normalize(values, precision))
    ]


class OpponentDifficultyResolver:
    """
    Resolves the opponent difficulty factor for a player's NFL team.

    K and DEF face next week's opponent, falling back to the current week's
    schedule when next week has no matchups. Every other position uses the
    current week. The index itself always comes from the latest completed
    week. Unknown teams, byes and missing indices resolve to 0.
    """

    def __init__(
        self,
        week: int,
        current_matchups: Iterable[Matchup],
        upcoming_matchups: Optional[Iterable[Matchup]],
        indices: Iterable[DifficultyIndex],
    ):
        self.week = week
        self.current_map = build_matchup_map(current_matchups)
        upcoming = list(upcoming_matchups or [])
        if upcoming:
            self.upcoming_map = build_matchup_map(upcoming)
        else:
            logger.info(f"No matchups after week {week}, using current week for K/DEF opponents")
            self.upcoming_map = self.current_map

        self.index: Dict[Tuple[Position, str], float] = {
            (idx.position, idx.team.lower()): idx.value for idx in indices
        }

    def opponent_for(self, position: Optional[Position], team: Optional[str]) -> Optional[str]:
        if not team or position is None:
            return None
        matchup_map = self.upcoming_map if position in UPCOMING_WEEK_POSITIONS else self.current_map
        return matchup_map.get(team.lower())

    def difficulty_for(self, position: Optional[Position], team: Optional[str]) -> float:
        opponent = self.opponent_for(position, team)
        if opponent is None:
            return 0.0
        return self.index.get((position, opponent.lower()), 0.0)
