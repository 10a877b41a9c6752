"""
Scoring constants: position factor weights, efficiency feature sets, slot codes
and injury designations.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple

from ..models.player import Position


@dataclass(frozen=True)
class FactorWeight:
    """One term of a position's weighted score.

    ``feature`` names the normalized efficiency feature the term reads; it is
    None for the shared factors (recent_mean, volatility, opponent_difficulty).
    """

    factor: str
    weight: float
    label: str
    feature: Optional[str] = None


RECENT_MEAN = "recent_mean"
VOLATILITY = "volatility"
OPPONENT_DIFFICULTY = "opponent_difficulty"
SHARED_FACTORS = (RECENT_MEAN, VOLATILITY, OPPONENT_DIFFICULTY)


def _f(factor: str, weight: float, label: str, feature: Optional[str] = None) -> FactorWeight:
    if feature is None and factor not in SHARED_FACTORS:
        feature = factor
    return FactorWeight(factor, weight, label, feature)


POSITION_WEIGHTS: Dict[Position, Tuple[FactorWeight, ...]] = {
    Position.WR: (
        _f(RECENT_MEAN, 0.5, "Recent Production"),
        _f(VOLATILITY, -0.04, "Consistency"),
        _f("targets_per_game", 0.28, "Target Volume"),
        _f("yards_per_target", 0.12, "Yards per Target"),
        _f("catch_rate", 0.06, "Catch Rate"),
        _f(OPPONENT_DIFFICULTY, 0.08, "Matchup"),
    ),
    Position.RB: (
        _f(RECENT_MEAN, 0.3, "Recent Production"),
        _f(VOLATILITY, -0.04, "Consistency"),
        _f("weighted_opportunity", 0.36, "Workload (rushing attempts + targets)"),
        _f(
            "touchdown_production",
            0.18,
            "TD Production (rushing touchdowns + receiving touchdowns)",
        ),
        _f("receiving_profile", 0.08, "Receiving Work (receptions + receiving yards)"),
        _f("efficiency", 0.06, "Efficiency", feature="yards_per_touch"),
        _f(OPPONENT_DIFFICULTY, 0.06, "Matchup"),
    ),
    Position.TE: (
        _f(RECENT_MEAN, 0.36, "Recent Production"),
        _f(VOLATILITY, -0.08, "Consistency"),
        _f("targets_per_game", 0.3, "Target Volume"),
        _f("receiving_touchdowns", 0.2, "Receiving TDs"),
        _f("yards_per_target", 0.12, "Yards per Target"),
        _f(OPPONENT_DIFFICULTY, 0.1, "Matchup"),
    ),
    Position.QB: (
        _f(RECENT_MEAN, 0.5, "Recent Production"),
        _f(VOLATILITY, -0.05, "Consistency"),
        _f("passing_efficiency", 0.45, "Passing Efficiency"),
        _f("turnovers", -0.15, "Turnover Avoidance"),
        _f("rushing_upside", 0.15, "Rushing Upside (rushing yards + 6 × rushing touchdowns)"),
        _f(OPPONENT_DIFFICULTY, 0.1, "Matchup"),
    ),
    Position.K: (
        _f(RECENT_MEAN, 0.65, "Recent Production"),
        _f(VOLATILITY, -0.1, "Consistency"),
        _f("fg_profile", 0.4, "FG Profile (fgs weighted by distance)"),
        _f("fg_pat_misses", -0.1, "Accuracy"),
        _f("fg_attempts", 0.15, "Opportunities"),
        _f(OPPONENT_DIFFICULTY, 0.1, "Matchup"),
    ),
    Position.DEF: (
        _f(RECENT_MEAN, 0.3, "Recent Production"),
        _f(VOLATILITY, -0.04, "Consistency"),
        _f("sacks_per_game", 0.28, "Sack Rate"),
        _f("turnovers_forced", 0.26, "Takeaways"),
        _f("dst_tds", 0.1, "Defensive TDs"),
        _f("points_allowed", -0.1, "Points Allowed"),
        _f("yards_allowed", -0.07, "Yards Allowed"),
        _f("blocked_kicks", 0.03, "Blocked Kicks"),
        _f("safeties", 0.02, "Safeties"),
        _f(OPPONENT_DIFFICULTY, 0.22, "Matchup"),
    ),
}

# Efficiency features computed per position, in column order
EFFICIENCY_FEATURES: Dict[Position, List[str]] = {
    Position.WR: ["targets_per_game", "catch_rate", "yards_per_target"],
    Position.RB: [
        "weighted_opportunity",
        "touchdown_production",
        "receiving_profile",
        "yards_per_touch",
    ],
    Position.TE: ["targets_per_game", "yards_per_target", "receiving_touchdowns"],
    Position.QB: ["passing_efficiency", "turnovers", "rushing_upside"],
    Position.K: ["fg_profile", "fg_pat_misses", "fg_attempts"],
    Position.DEF: [
        "sacks_per_game",
        "turnovers_forced",
        "dst_tds",
        "points_allowed",
        "yards_allowed",
        "blocked_kicks",
        "safeties",
    ],
}

# Features normalized by z-score instead of min-max
ZSCORE_FEATURES: Dict[Position, FrozenSet[str]] = {
    Position.QB: frozenset({"turnovers"}),
}

# Positions that face next week's opponent when scored
UPCOMING_WEEK_POSITIONS = frozenset({Position.K, Position.DEF})
FINAL_WEEK = 18

DEFAULT_STARTING_SLOTS: Dict[str, int] = {
    "QB": 1,
    "RB": 2,
    "WR": 2,
    "TE": 1,
    "K": 1,
    "DEF": 1,
}
DEFAULT_FLEX_SLOTS = 1

FLEX_SLOT_PATTERNS = ("W/R/T", "W/R", "W/T", "FLEX")
FLEX_ELIGIBLE_POSITIONS = frozenset({Position.WR, Position.RB, Position.TE})

BENCH_SLOTS = frozenset({"BENCH", "IR", "BN"})

# Injury designations that rule a player out
CANNOT_PLAY_STATUSES = frozenset({"O", "IR", "PUP-R", "D", "SUSP", "NFI-R", "IR-R"})

# Sentinel baselines used when no healthy replacement exists
SENTINEL_SCORE = 100.0
HEALTHY_SENTINEL = "any healthy player"
AVAILABLE_SENTINEL = "any available player"

# Minimum contribution gap worth mentioning in a comparison
ADVANTAGE_THRESHOLD = 0.01
MAX_ADVANTAGES = 3

CONFIDENCE_TIERS = ((25.0, 3), (10.0, 2))
CONFIDENCE_LABELS = {
    "START": {3: "Must Start", 2: "Strong Start", 1: "Lean Start"},
    "BENCH": {3: "Must Bench", 2: "Strong Bench", 1: "Lean Bench"},
    "ADD": {3: "Strong Upgrade", 2: "Good Upgrade", 1: "Slight Upgrade"},
}
