"""Adapters from loosely shaped storage rows to typed models.

Relational joins from the storage layer come back as a nested object, a
one-element list, or nothing at all. Everything here resolves those shapes
into one canonical form before the scoring core sees the data.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from loguru import logger
from pydantic import ValidationError

from ..exceptions import MissingUpstreamData
from ..models.league import LeagueCalc, RosterEntry
from ..models.player import RAW_STAT_FIELDS, PlayerWeeklyStat
from ..utils.constants import EFFICIENCY_FEATURES

T = TypeVar("T")

TRAILING_SUFFIX = "_3wk_avg"
NORMALIZED_SUFFIX = "_3wk_avg_norm"

# Storage column names that differ from the model's
COLUMN_ALIASES = {
    "season_year": "season",
    "passing_yards": "pass_yds",
    "passing_touchdowns": "pass_td",
    "interceptions": "pass_int",
    "rushing_yards": "rush_yds",
    "rushing_touchdowns": "rush_td",
    "receiving_yards": "rec_yds",
    "receiving_touchdowns": "rec_td",
}

# Feature column names that differ from the model's
FEATURE_ALIASES = {"block_kicks": "blocked_kicks"}

ALL_FEATURES = sorted({name for names in EFFICIENCY_FEATURES.values() for name in names})


def _coerce_float(value: Any, default: Optional[float] = None) -> Optional[float]:
    try:
        if value is None:
            return default
        if isinstance(value, str) and not value.strip():
            return default
        return float(value)
    except (TypeError, ValueError):
        return default


def _coerce_int(value: Any, default: int = 0) -> int:
    try:
        if value is None:
            return default
        if isinstance(value, str) and not value.strip():
            return default
        return int(float(value))
    except (TypeError, ValueError):
        return default


def extract_joined(value: Any) -> Optional[Dict[str, Any]]:
    """Resolve a joined relation to a single dict.

    Accepts ``{"position": "WR"}``, ``[{"position": "WR"}]`` or nothing.
    """
    if isinstance(value, dict):
        return value
    if isinstance(value, list):
        for entry in value:
            if isinstance(entry, dict):
                return entry
    return None


def _components(value: Any) -> Dict[str, float]:
    if not isinstance(value, dict):
        return {}
    parsed = {str(k): _coerce_float(v) for k, v in value.items()}
    return {k: v for k, v in parsed.items() if v is not None}


def _canonical_key(key: str) -> str:
    return COLUMN_ALIASES.get(key, key)


def _feature_name(column: str, suffix: str) -> Optional[str]:
    if not column.endswith(suffix):
        return None
    name = column[: -len(suffix)]
    return FEATURE_ALIASES.get(name, name)


def parse_stat_row(row: Dict[str, Any]) -> PlayerWeeklyStat:
    """Build a PlayerWeeklyStat from a flat or joined stat row.

    Raises:
        MissingUpstreamData: if the row has no player id, season or week.
    """
    player_id = row.get("player_id")
    if not player_id:
        raise MissingUpstreamData("player_id", row.get("id"))

    data: Dict[str, Any] = {"player_id": str(player_id)}
    features: Dict[str, Optional[float]] = {}
    trailing: Dict[str, Optional[float]] = {}
    normalized: Dict[str, Optional[float]] = {}

    for column, value in row.items():
        # Order matters: the normalized suffix also ends with the trailing one
        feature = _feature_name(column, NORMALIZED_SUFFIX)
        if feature:
            normalized[feature] = _coerce_float(value)
            continue
        feature = _feature_name(column, TRAILING_SUFFIX)
        if feature:
            trailing[feature] = _coerce_float(value)
            continue

        key = _canonical_key(column)
        if key in RAW_STAT_FIELDS:
            data[key] = _coerce_float(value)
        elif key in ALL_FEATURES and key not in data:
            features[key] = _coerce_float(value)
        elif key in ("season", "week"):
            data[key] = _coerce_int(value, default=0) or None
        elif key in ("position", "team", "played"):
            data[key] = value

    player = extract_joined(row.get("players"))
    if player:
        data.setdefault("position", player.get("position"))
        data.setdefault("team", player.get("team"))
    if data.get("season") is None or data.get("week") is None:
        raise MissingUpstreamData("season/week", player_id)

    data["features"] = features
    data["trailing"] = trailing
    data["normalized"] = normalized
    return PlayerWeeklyStat(**data)


def parse_league_calc_row(row: Dict[str, Any], league_id: Optional[str] = None) -> LeagueCalc:
    """Build a LeagueCalc from a stored league_calcs row.

    Raises:
        MissingUpstreamData: if the row has no player id or league id.
    """
    player_id = row.get("player_id")
    league = row.get("league_id") or league_id
    if not player_id or not league:
        raise MissingUpstreamData("league calc key", player_id)

    player = extract_joined(row.get("players")) or {}
    return LeagueCalc(
        league_id=str(league),
        player_id=str(player_id),
        season=_coerce_int(row.get("season", row.get("season_year"))),
        week=_coerce_int(row.get("week"), default=1),
        position=row.get("position") or player.get("position"),
        team=row.get("team") or player.get("team"),
        fantasy_points=_coerce_float(row.get("fantasy_points")),
        recent_mean=_coerce_float(row.get("recent_mean")),
        recent_std=_coerce_float(row.get("recent_std")),
        recent_mean_norm=_coerce_float(row.get("recent_mean_norm")),
        recent_std_norm=_coerce_float(row.get("recent_std_norm")),
        weighted_score=_coerce_float(row.get("weighted_score")),
        components=_components(row.get("components")),
    )


def parse_roster_row(row: Dict[str, Any]) -> RosterEntry:
    """Build a RosterEntry from a roster row with optional player/team joins.

    Raises:
        MissingUpstreamData: if no player id or fantasy team id can be found.
    """
    player = extract_joined(row.get("players")) or {}
    team = extract_joined(row.get("teams")) or {}

    player_id = row.get("player_id") or player.get("id")
    team_id = row.get("team_id") or team.get("id")
    if not player_id or not team_id:
        raise MissingUpstreamData("roster entry key", player_id)

    return RosterEntry(
        team_id=str(team_id),
        player_id=str(player_id),
        slot=row.get("slot"),
        name=row.get("name") or player.get("name"),
        position=row.get("position") or player.get("position"),
        nfl_team=row.get("nfl_team") or player.get("team"),
        team_name=row.get("team_name") or team.get("name"),
    )


def parse_rows(rows: Optional[Iterable[Any]], parser: Callable[[Dict[str, Any]], T]) -> List[T]:
    """Apply ``parser`` to each row, skipping rows that cannot be resolved.

    Typed rows pass through untouched.
    """
    parsed: List[T] = []
    skipped = 0
    for row in rows or []:
        if not isinstance(row, dict):
            parsed.append(row)
            continue
        try:
            parsed.append(parser(row))
        except (MissingUpstreamData, ValidationError) as e:
            skipped += 1
            logger.debug(f"Skipping unparseable row: {e}")
    if skipped:
        name = getattr(parser, "__name__", type(parser).__name__)
        logger.warning(f"Skipped {skipped} rows that could not be parsed with {name}")
    return parsed
