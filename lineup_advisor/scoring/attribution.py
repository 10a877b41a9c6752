"""
Score attribution and player comparison.

A breakdown splits a weighted score into per-factor contributions
(weight * normalized value). Comparing two breakdowns surfaces the factors
where one player gains the most over the other, which become the plain
English justification attached to recommendations.
"""

from typing import Dict, List, Mapping, Optional

from ..models.league import LeagueCalc
from ..models.player import PlayerWeeklyStat, Position
from ..models.recommendation import (
    Advantage,
    PlayerGroup,
    ScoreBreakdown,
    ScoreComparison,
    ScoreComponent,
)
from ..utils.constants import (
    ADVANTAGE_THRESHOLD,
    MAX_ADVANTAGES,
    OPPONENT_DIFFICULTY,
    POSITION_WEIGHTS,
    VOLATILITY,
)
from .position_models import PositionScoringModel


def breakdown_from_values(
    player_id: str,
    position: Optional[Position],
    weighted_score: float,
    values: Mapping[str, float],
) -> ScoreBreakdown:
    """Build a breakdown from already-resolved factor values."""
    weights = POSITION_WEIGHTS.get(position) if position else None
    if not weights:
        return ScoreBreakdown(player_id, position, weighted_score, [])

    raw = {fw.factor: fw.weight * values.get(fw.factor, 0.0) for fw in weights}
    total_positive = sum(c for c in raw.values() if c > 0)

    components = [
        ScoreComponent(
            factor=fw.factor,
            label=fw.label,
            weight=fw.weight,
            value=values.get(fw.factor, 0.0),
            contribution=round(raw[fw.factor], 3),
            percent_of_total=(
                round(max(0.0, raw[fw.factor]) / total_positive * 100) if total_positive > 0 else 0
            ),
        )
        for fw in weights
    ]
    components.sort(key=lambda c: abs(c.contribution), reverse=True)
    return ScoreBreakdown(player_id, position, weighted_score, components)


def score_breakdown(
    player_id: str,
    position: Optional[Position],
    calc: Optional[LeagueCalc],
    stat: Optional[PlayerWeeklyStat] = None,
    opponent_difficulty: float = 0.0,
    volatility_clip: float = 2.0,
) -> ScoreBreakdown:
    """
    Break a player's weighted score into factor contributions.

    Stored component values on ``calc`` are used when present so the breakdown
    matches the persisted score exactly; otherwise values are resolved from
    the normalized rows. Without a calc row there is nothing to attribute and
    the breakdown has no components.
    """
    weighted_score = calc.weighted_score if calc and calc.weighted_score is not None else 0.0
    if calc is None or position is None or position not in POSITION_WEIGHTS:
        return ScoreBreakdown(player_id, position, weighted_score, [])

    if calc.components:
        values: Dict[str, float] = dict(calc.components)
    else:
        model = PositionScoringModel(position, volatility_clip=volatility_clip)
        values = model.component_values(calc, stat, opponent_difficulty)
    return breakdown_from_values(player_id, position, weighted_score, values)


def breakdown_for_group(group: PlayerGroup, volatility_clip: float = 2.0) -> ScoreBreakdown:
    breakdown = score_breakdown(
        group.player_id,
        group.position,
        group.calc,
        group.stat,
        group.opponent_difficulty,
        volatility_clip,
    )
    # Keep the ranked score even when the calc row has none
    breakdown.weighted_score = group.score
    return breakdown


def compare_breakdowns(better: ScoreBreakdown, worse: ScoreBreakdown) -> ScoreComparison:
    """Factors where ``better`` out-contributes ``worse`` by more than the threshold."""
    advantages: List[Advantage] = []
    for comp in better.components:
        other = worse.component(comp.factor)
        if other is None:
            continue
        difference = comp.contribution - other.contribution
        if difference > ADVANTAGE_THRESHOLD:
            advantages.append(
                Advantage(
                    factor=comp.factor,
                    label=comp.label,
                    difference=round(difference, 3),
                    better_value=comp.value,
                    worse_value=other.value,
                )
            )
    advantages.sort(key=lambda a: a.difference, reverse=True)
    return ScoreComparison(better=better, worse=worse, advantages=advantages)


def format_advantage(advantage: Advantage, positive: bool = True) -> str:
    """Phrase one advantage for use inside a sentence."""
    label = advantage.label.lower()
    factor = advantage.factor

    if factor == OPPONENT_DIFFICULTY:
        return "a better matchup"
    if factor == VOLATILITY:
        return "greater consistency" if positive else "inconsistency"
    if "turnovers" in factor and "forced" not in factor:
        return "fewer turnovers" if positive else "turnover concerns"
    if factor in ("points_allowed", "yards_allowed"):
        return f"better {label}" if positive else f"worse {label}"
    return f"stronger {label}" if positive else f"weaker {label}"


def _join(parts: List[str]) -> str:
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2:
        return f"{parts[0]} and {parts[1]}"
    return f"{', '.join(parts[:-1])}, and {parts[-1]}"


def comparison_reason(
    comparison: ScoreComparison,
    better_name: str,
    worse_name: str,
    is_start: bool,
) -> str:
    """Render a comparison as a sentence from the better (START/ADD) or worse (BENCH) side."""
    better_score = comparison.better.weighted_score
    worse_score = comparison.worse.weighted_score
    top = comparison.advantages[:MAX_ADVANTAGES]

    if not top:
        return score_delta_reason(better_name, better_score, worse_name, worse_score, is_start)

    if is_start:
        head = f"{better_name} outscores {worse_name} ({better_score:.2f} vs {worse_score:.2f}) "
        phrases = [format_advantage(a) for a in top]
        if len(phrases) == 1:
            return head + f"primarily due to {phrases[0]}."
        return head + f"due to {_join(phrases)}."

    head = f"{worse_name} trails {better_name} ({worse_score:.2f} vs {better_score:.2f}) "
    labels = [a.label.lower() for a in top]
    if len(labels) == 1:
        return head + f"mainly because of weaker {labels[0]}."
    if len(labels) == 2:
        return head + f"due to lower {labels[0]} and {labels[1]}."
    return head + f"with gaps in {_join(labels)}."


def score_delta_reason(
    better_name: str,
    better_score: float,
    worse_name: str,
    worse_score: float,
    is_start: bool,
) -> str:
    """Generic sentence used when no factor-level comparison is possible."""
    if is_start:
        return (
            f"{better_name} has a slightly higher weighted score "
            f"({better_score:.2f} vs {worse_score:.2f})."
        )
    return (
        f"{worse_name} has a lower weighted score than {better_name} "
        f"({worse_score:.2f} vs {better_score:.2f})."
    )


def explain_gap(
    better: ScoreBreakdown,
    better_name: str,
    worse: ScoreBreakdown,
    worse_name: str,
    is_start: bool,
) -> str:
    """Detailed comparison when both sides have components, else the score delta."""
    if better.components and worse.components:
        return comparison_reason(compare_breakdowns(better, worse), better_name, worse_name, is_start)
    return score_delta_reason(
        better_name, better.weighted_score, worse_name, worse.weighted_score, is_start
    )


def top_factors(breakdown: ScoreBreakdown, count: int = 3) -> List[ScoreComponent]:
    """The largest positive contributors, in breakdown order."""
    return [c for c in breakdown.components if c.contribution > 0][:count]


def score_drivers_summary(breakdown: ScoreBreakdown, name: str) -> str:
    """One sentence naming what drives a player's score."""
    factors = top_factors(breakdown, 3)
    if not factors:
        return f"{name}'s weighted score is {breakdown.weighted_score:.2f}."

    labels = [f.label.lower() for f in factors]
    head = f"{name}'s score ({breakdown.weighted_score:.2f}) is driven by "
    if len(factors) == 1:
        return head + f"{labels[0]} ({factors[0].percent_of_total}% of score)."
    combined = sum(f.percent_of_total for f in factors)
    return head + f"{_join(labels)} ({combined}% combined)."
