"""Confidence tiers from score gaps."""

from typing import Optional, Union

from ..models.recommendation import Confidence, Verdict
from ..utils.constants import CONFIDENCE_LABELS, CONFIDENCE_TIERS


def percent_difference(score_a: Optional[float], score_b: Optional[float]) -> float:
    """|a - b| as a percentage of the larger magnitude, never dividing by less than 1."""
    a = score_a or 0.0
    b = score_b or 0.0
    # Rounded so exact 10% and 25% gaps land on their tier boundary
    return round(abs(a - b) / max(abs(a), abs(b), 1.0) * 100, 6)


def confidence_level(percent_diff: float) -> int:
    # Boundaries belong to the higher tier
    for threshold, level in CONFIDENCE_TIERS:
        if percent_diff >= threshold:
            return level
    return 1


def estimate_confidence(
    score: Optional[float],
    baseline_score: Optional[float],
    verdict: Union[Verdict, str],
) -> Confidence:
    """Three-tier confidence for a verdict judged against a baseline score."""
    key = verdict.value if isinstance(verdict, Verdict) else str(verdict).upper()
    level = confidence_level(percent_difference(score, baseline_score))
    return Confidence(level=level, label=CONFIDENCE_LABELS[key][level])
