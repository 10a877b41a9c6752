"""
Position scoring models.

Each position's weighted score is a fixed linear combination of normalized
factors: recent production, volatility (clipped z-score), the position's
efficiency features and opponent difficulty. Missing factors count as 0 so a
score is always computable from sparse data.
"""

from typing import Dict, Mapping, Optional, Tuple

from ..analysis.normalization import clip
from ..models.league import LeagueCalc
from ..models.player import PlayerWeeklyStat, Position
from ..utils.constants import (
    OPPONENT_DIFFICULTY,
    POSITION_WEIGHTS,
    RECENT_MEAN,
    VOLATILITY,
    FactorWeight,
)


class PositionScoringModel:
    """Weighted linear model for one position."""

    def __init__(
        self,
        position: Position,
        weights: Optional[Tuple[FactorWeight, ...]] = None,
        volatility_clip: float = 2.0,
        precision: int = 3,
    ):
        self.position = position
        self.weights = weights if weights is not None else POSITION_WEIGHTS[position]
        self.volatility_clip = volatility_clip
        self.precision = precision

    def component_values(
        self,
        calc: Optional[LeagueCalc],
        stat: Optional[PlayerWeeklyStat],
        opponent_difficulty: float = 0.0,
    ) -> Dict[str, float]:
        """Normalized value for every factor in this model, 0 where missing."""
        normalized: Mapping[str, Optional[float]] = stat.normalized if stat is not None else {}
        values: Dict[str, float] = {}
        for fw in self.weights:
            if fw.factor == RECENT_MEAN:
                value = calc.recent_mean_norm if calc is not None else None
            elif fw.factor == VOLATILITY:
                value = clip(calc.recent_std_norm if calc is not None else None, self.volatility_clip)
            elif fw.factor == OPPONENT_DIFFICULTY:
                value = opponent_difficulty
            else:
                value = normalized.get(fw.feature)
            values[fw.factor] = float(value) if value is not None else 0.0
        return values

    def score_components(self, values: Mapping[str, float]) -> float:
        total = sum(fw.weight * values.get(fw.factor, 0.0) for fw in self.weights)
        return round(total, self.precision)

    def score(
        self,
        calc: Optional[LeagueCalc],
        stat: Optional[PlayerWeeklyStat],
        opponent_difficulty: float = 0.0,
    ) -> float:
        return self.score_components(self.component_values(calc, stat, opponent_difficulty))


def build_models(volatility_clip: float = 2.0, precision: int = 3) -> Dict[Position, PositionScoringModel]:
    """One scoring model per position sharing the given clip and precision."""
    return {
        position: PositionScoringModel(position, volatility_clip=volatility_clip, precision=precision)
        for position in POSITION_WEIGHTS
    }
