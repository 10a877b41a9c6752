"""
Position-specific efficiency features and their trailing averages.

Features are league-agnostic and computed from one week's raw counting stats.
Ratios are None when their denominator is zero rather than imputed.
"""

from typing import Callable, Dict, Iterable, List, Optional

from loguru import logger

from ..models.player import PlayerWeeklyStat, Position
from ..utils.constants import EFFICIENCY_FEATURES

Features = Dict[str, Optional[float]]


def _r2(value: Optional[float]) -> Optional[float]:
    return None if value is None else round(value, 2)


def _ratio(numerator: float, denominator: float) -> Optional[float]:
    return numerator / denominator if denominator > 0 else None


def wr_features(s: PlayerWeeklyStat) -> Features:
    targets = s.stat("targets")
    return {
        "targets_per_game": _r2(targets),
        "catch_rate": _r2(_ratio(s.stat("receptions"), targets)),
        "yards_per_target": _r2(_ratio(s.stat("rec_yds"), targets)),
    }


def rb_features(s: PlayerWeeklyStat) -> Features:
    touches = s.stat("rush_att") + s.stat("targets")
    return {
        "weighted_opportunity": _r2(touches),
        "touchdown_production": _r2(s.stat("rush_td") + s.stat("rec_td")),
        "receiving_profile": _r2(s.stat("receptions") + s.stat("rec_yds")),
        "yards_per_touch": _r2(_ratio(s.stat("rush_yds") + s.stat("rec_yds"), touches)),
    }


def te_features(s: PlayerWeeklyStat) -> Features:
    targets = s.stat("targets")
    return {
        "targets_per_game": _r2(targets),
        "yards_per_target": _r2(_ratio(s.stat("rec_yds"), targets)),
        "receiving_touchdowns": _r2(s.stat("rec_td")),
    }


def qb_features(s: PlayerWeeklyStat) -> Features:
    yards_per_attempt = _ratio(s.stat("pass_yds"), s.stat("pass_att"))
    efficiency = None if yards_per_attempt is None else s.stat("pass_td") + yards_per_attempt
    return {
        "passing_efficiency": _r2(efficiency),
        "turnovers": _r2(s.stat("pass_int") + s.stat("fumbles_lost")),
        "rushing_upside": _r2(s.stat("rush_yds") + 6 * s.stat("rush_td")),
    }


def k_features(s: PlayerWeeklyStat) -> Features:
    short_makes = s.stat("fg_made_0_19") + s.stat("fg_made_20_29") + s.stat("fg_made_30_39")
    makes = short_makes + s.stat("fg_made_40_49") + s.stat("fg_made_50_plus")
    misses = (
        s.stat("fg_missed_0_19")
        + s.stat("fg_missed_20_29")
        + s.stat("fg_missed_30_39")
        + s.stat("fg_missed_40_49")
        + s.stat("fg_missed_50_plus")
    )
    return {
        "fg_profile": _r2(3 * s.stat("fg_made_50_plus") + 2 * s.stat("fg_made_40_49") + short_makes),
        "fg_pat_misses": _r2(misses + s.stat("pat_missed")),
        "fg_attempts": _r2(makes + misses),
    }


def def_features(s: PlayerWeeklyStat) -> Features:
    return {
        "sacks_per_game": _r2(s.stat("sacks")),
        "turnovers_forced": _r2(s.stat("def_int") + s.stat("fumble_rec")),
        "dst_tds": _r2(s.stat("def_td") + s.stat("return_td")),
        "points_allowed": _r2(s.stat("points_allowed")),
        "yards_allowed": _r2(s.stat("yards_allowed")),
        "blocked_kicks": _r2(s.stat("blocked_kicks")),
        "safeties": _r2(s.stat("safeties")),
    }


FEATURE_BUILDERS: Dict[Position, Callable[[PlayerWeeklyStat], Features]] = {
    Position.WR: wr_features,
    Position.RB: rb_features,
    Position.TE: te_features,
    Position.QB: qb_features,
    Position.K: k_features,
    Position.DEF: def_features,
}


def compute_features(stat: PlayerWeeklyStat) -> Features:
    """Efficiency features for one weekly row; empty when position is unknown."""
    builder = FEATURE_BUILDERS.get(stat.position) if stat.position else None
    if builder is None:
        return {}
    return builder(stat)


def trailing_averages(
    history: Iterable[PlayerWeeklyStat], week: int, window: int = 3
) -> Features:
    """
    Average each feature over the most recent ``window`` weeks the player played.

    Only weeks up to and including ``week`` are considered, and each feature
    averages its own non-null values. Rows must already carry ``features``.

    Args:
        history: One player's weekly rows for a season
        week: Current week
        window: Number of played weeks to average

    Returns:
        Feature name to rounded average, None when no week had a value.
    """
    played = sorted(
        (row for row in history if row.week <= week and row.did_play),
        key=lambda row: row.week,
        reverse=True,
    )[:window]
    if not played:
        return {}

    position = played[0].position
    names = EFFICIENCY_FEATURES.get(position, []) if position else []
    averages: Features = {}
    for name in names:
        values = [row.features.get(name) for row in played if row.features.get(name) is not None]
        averages[name] = round(sum(values) / len(values), 2) if values else None
    return averages


def build_efficiency_rows(
    stats: Iterable[PlayerWeeklyStat], week: int, window: int = 3
) -> List[PlayerWeeklyStat]:
    """
    Populate features for every row and trailing averages for ``week``'s rows.

    Returns the current week's rows as new objects; inputs are not mutated.
    """
    by_player: Dict[str, List[PlayerWeeklyStat]] = {}
    for row in stats:
        enriched = row.model_copy(update={"features": compute_features(row)})
        by_player.setdefault(row.player_id, []).append(enriched)

    current: List[PlayerWeeklyStat] = []
    for player_id, rows in by_player.items():
        this_week = next((r for r in rows if r.week == week), None)
        if this_week is None:
            continue
        current.append(
            this_week.model_copy(update={"trailing": trailing_averages(rows, week, window)})
        )

    logger.debug(f"Built efficiency features for {len(current)} players in week {week}")
    return current
