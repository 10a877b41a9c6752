"""Position scoring models, attribution and confidence."""

from .attribution import (
    breakdown_for_group,
    compare_breakdowns,
    comparison_reason,
    explain_gap,
    score_breakdown,
    score_drivers_summary,
)
from .confidence import estimate_confidence, percent_difference
from .position_models import PositionScoringModel, build_models

__all__ = [
    "PositionScoringModel",
    "breakdown_for_group",
    "build_models",
    "compare_breakdowns",
    "comparison_reason",
    "estimate_confidence",
    "explain_gap",
    "percent_difference",
    "score_breakdown",
    "score_drivers_summary",
]
