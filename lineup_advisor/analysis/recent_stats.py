"""
Recent performance tracking: trailing mean and std of fantasy points.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Tuple

import numpy as np

from ..models.league import LeagueCalc


@dataclass(frozen=True)
class RecentPerformance:
    """Trailing fantasy point mean/std, both None when no points exist."""

    mean: Optional[float] = None
    std: Optional[float] = None


def recent_window(week: int, size: int = 3) -> Tuple[int, int]:
    """Inclusive (start, end) weeks of the trailing window; start floors at 1."""
    return max(1, week - size + 1), week


def recent_performance(
    points_by_week: Mapping[int, Optional[float]], week: int, size: int = 3
) -> RecentPerformance:
    """
    Compute the trailing window's mean and population std of fantasy points.

    Only non-null points inside the window count. With no points at all both
    outputs are None so the normalizer treats them as missing, not zero.
    """
    start, end = recent_window(week, size)
    points = [
        float(pts)
        for wk, pts in points_by_week.items()
        if start <= wk <= end and pts is not None
    ]
    if not points:
        return RecentPerformance()
    arr = np.asarray(points, dtype=float)
    return RecentPerformance(
        mean=round(float(arr.mean()), 2),
        std=round(float(arr.std(ddof=0)), 2),
    )


def recent_performance_by_player(
    history: Iterable[LeagueCalc], week: int, size: int = 3
) -> Dict[str, RecentPerformance]:
    """Group a league's calc history by player and compute each trailing window."""
    points: Dict[str, Dict[int, Optional[float]]] = {}
    for calc in history:
        points.setdefault(calc.player_id, {})[calc.week] = calc.fantasy_points
    return {
        player_id: recent_performance(weeks, week, size)
        for player_id, weeks in points.items()
    }
