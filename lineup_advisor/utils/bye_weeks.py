"""
Utility module for bye week lookups.

Turns player bye week rows into lookup maps and the per-week sets of players
who cannot score because their NFL team is idle.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Set, Union

from ..models.league import ByeWeekRow

logger = logging.getLogger(__name__)

MAX_BYE_WEEK = 18


def _valid_week(week: Any) -> bool:
    return isinstance(week, int) and not isinstance(week, bool) and 1 <= week <= MAX_BYE_WEEK


def build_player_bye_week_map(
    rows: Optional[Iterable[Union[ByeWeekRow, Dict[str, Any]]]]
) -> Dict[str, int]:
    """
    Build a player-to-bye-week mapping.

    Rows with a missing or out-of-range bye week are skipped.

    Args:
        rows: Bye week rows (models or plain dicts with player_id/bye_week)

    Returns:
        Dictionary mapping player ids to bye week numbers.
    """
    bye_week_map: Dict[str, int] = {}
    if not rows:
        logger.info("No bye week data provided")
        return bye_week_map

    invalid_count = 0
    for row in rows:
        if isinstance(row, dict):
            player_id = row.get("player_id")
            week = row.get("bye_week")
        else:
            player_id = row.player_id
            week = row.bye_week

        if not player_id:
            continue
        if isinstance(week, str) and week.strip().isdigit():
            week = int(week)
        if _valid_week(week):
            bye_week_map[str(player_id)] = week
        else:
            invalid_count += 1
            logger.debug(f"Ignoring invalid bye week {week} for player {player_id}")

    if invalid_count > 0:
        logger.info(f"Skipped {invalid_count} players with invalid bye week data")

    return bye_week_map


def players_on_bye(bye_week_map: Dict[str, int], week: int) -> Set[str]:
    """
    Get the ids of players whose team is idle in ``week``.

    Args:
        bye_week_map: Output of build_player_bye_week_map
        week: NFL week to check

    Returns:
        Set of player ids on bye.
    """
    return {player_id for player_id, bye in bye_week_map.items() if bye == week}


def is_on_bye(bye_week_map: Dict[str, int], player_id: str, week: int) -> bool:
    return bye_week_map.get(player_id) == week
