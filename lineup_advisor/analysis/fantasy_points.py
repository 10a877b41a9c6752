"""League fantasy point calculation from raw stats and scoring modifiers."""

from typing import Iterable, Mapping, Union

from ..models.league import StatModifier
from ..models.player import PlayerWeeklyStat

Modifiers = Union[Mapping[str, float], Iterable[StatModifier]]


def _modifier_map(modifiers: Modifiers) -> Mapping[str, float]:
    if isinstance(modifiers, Mapping):
        return modifiers
    return {m.stat: m.points for m in modifiers}


def fantasy_points(stat: PlayerWeeklyStat, modifiers: Modifiers) -> float:
    """Sum ``stat value * points per unit`` over the league's modifiers.

    Stats absent from the row contribute nothing. Rounded to 2 decimals.
    """
    total = 0.0
    for name, points in _modifier_map(modifiers).items():
        total += stat.stat(name) * points
    return round(total, 2)
