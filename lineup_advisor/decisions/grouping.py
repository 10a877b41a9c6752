"""Joining roster entries with score, stat, injury and bye rows."""

from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from loguru import logger

from ..analysis.difficulty import OpponentDifficultyResolver
from ..models.league import LeagueCalc, RosterEntry
from ..models.player import PlayerWeeklyStat, Position
from ..models.recommendation import PlayerGroup
from ..utils.constants import OPPONENT_DIFFICULTY


def build_player_group(
    player_id: str,
    name: Optional[str],
    position: Optional[Position],
    nfl_team: Optional[str],
    calc: Optional[LeagueCalc],
    stat: Optional[PlayerWeeklyStat],
    injury_statuses: Mapping[str, str],
    bye_ids: Set[str],
    resolver: Optional[OpponentDifficultyResolver] = None,
    team_id: Optional[str] = None,
    slot: Optional[str] = None,
) -> PlayerGroup:
    """Join one player's rows; missing rows leave the matching fields empty."""
    position = position or (calc.position if calc else None) or (stat.position if stat else None)
    nfl_team = nfl_team or (calc.team if calc else None) or (stat.team if stat else None)

    if calc is not None and OPPONENT_DIFFICULTY in calc.components:
        difficulty = calc.components[OPPONENT_DIFFICULTY]
    elif resolver is not None:
        difficulty = resolver.difficulty_for(position, nfl_team)
    else:
        difficulty = 0.0

    return PlayerGroup(
        player_id=player_id,
        name=name or player_id,
        position=position,
        team_id=team_id,
        slot=slot,
        nfl_team=nfl_team,
        weighted_score=calc.weighted_score if calc else None,
        fantasy_points=calc.fantasy_points if calc else None,
        calc=calc,
        stat=stat,
        injury_status=injury_statuses.get(player_id),
        on_bye=player_id in bye_ids,
        opponent_difficulty=difficulty,
    )


def build_player_groups(
    entries: Iterable[RosterEntry],
    calcs: Mapping[str, LeagueCalc],
    stats: Mapping[str, PlayerWeeklyStat],
    injury_statuses: Mapping[str, str],
    bye_ids: Set[str],
    resolver: Optional[OpponentDifficultyResolver] = None,
) -> List[PlayerGroup]:
    """PlayerGroups for every roster entry whose position can be determined."""
    groups: List[PlayerGroup] = []
    missing_scores = 0
    for entry in entries:
        calc = calcs.get(entry.player_id)
        if calc is None:
            missing_scores += 1
        group = build_player_group(
            entry.player_id,
            entry.display_name,
            entry.position,
            entry.nfl_team,
            calc,
            stats.get(entry.player_id),
            injury_statuses,
            bye_ids,
            resolver,
            team_id=entry.team_id,
            slot=entry.slot,
        )
        if group.position is None:
            logger.debug(f"Skipping roster entry {entry.player_id} with unknown position")
            continue
        groups.append(group)

    if missing_scores:
        logger.debug(f"{missing_scores} rostered players have no score row this week")
    return groups


def group_by_position_and_team(
    groups: Iterable[PlayerGroup],
) -> Dict[Tuple[Position, str], List[PlayerGroup]]:
    grouped: Dict[Tuple[Position, str], List[PlayerGroup]] = {}
    for group in groups:
        if group.position is None or group.team_id is None:
            continue
        grouped.setdefault((group.position, group.team_id), []).append(group)
    return grouped
