"""Injury designation helpers."""

from typing import Any, Dict, Iterable, Optional, Set, Union

from loguru import logger

from ..models.league import InjuryRow
from .constants import CANNOT_PLAY_STATUSES


def cannot_play(status: Optional[str]) -> bool:
    """True when the designation rules the player out this week."""
    if not status:
        return False
    return status.strip().upper() in CANNOT_PLAY_STATUSES


def build_injury_status_map(
    rows: Optional[Iterable[Union[InjuryRow, Dict[str, Any]]]]
) -> Dict[str, str]:
    """Map player ids to their current injury designation, skipping blanks."""
    statuses: Dict[str, str] = {}
    for row in rows or []:
        if isinstance(row, dict):
            player_id, status = row.get("player_id"), row.get("status")
        else:
            player_id, status = row.player_id, row.status
        if player_id and status:
            statuses[str(player_id)] = str(status).strip().upper()
    logger.debug(f"Loaded injury designations for {len(statuses)} players")
    return statuses


def injured_player_ids(status_map: Dict[str, str]) -> Set[str]:
    return {player_id for player_id, status in status_map.items() if cannot_play(status)}
