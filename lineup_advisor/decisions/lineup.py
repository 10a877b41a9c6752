"""
Lineup decision engine for standard (non-flex) position slots.

Runs once per position x fantasy team group. Players are ranked by weighted
score; the top ``starting_slots`` should start. Exceptions are evaluated in a
fixed order, first match wins:

1. In a starting slot and injured  -> BENCH against the best healthy player
2. In a starting slot and on bye   -> BENCH against the best available player
3. Slot disagrees with rank        -> START or BENCH against the player on the
                                      other side of the slot boundary
4. Otherwise                       -> no recommendation

Flex-slotted players are left out of the ranking and handled by the flex
engine.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Set, Tuple

from loguru import logger

from ..models.player import Position
from ..models.recommendation import PlayerGroup, Recommendation, Verdict
from ..utils.constants import AVAILABLE_SENTINEL, HEALTHY_SENTINEL
from ..utils.injuries import cannot_play
from ..utils.roster_configs import LeagueRosterSlots, RosterConfiguration
from .common import (
    at,
    baseline_for,
    build_recommendation,
    gap_sentence,
    is_unavailable,
    rank_players,
    replacement_baseline,
    unavailable_reason,
)

GroupKey = Tuple[Position, str]


@dataclass
class LineupDecision:
    """Output of the standard-position pass."""

    recommendations: List[Recommendation] = field(default_factory=list)
    # team_id -> healthy players the ranking puts into positional starting slots
    position_starters: Dict[str, Set[str]] = field(default_factory=dict)


class LineupDecisionEngine:
    """START/BENCH decisions for positional starting slots."""

    def __init__(self, roster_slots: LeagueRosterSlots, volatility_clip: float = 2.0):
        self.roster_slots = roster_slots
        self.volatility_clip = volatility_clip

    def decide(self, groups: Mapping[GroupKey, List[PlayerGroup]]) -> LineupDecision:
        decision = LineupDecision()
        for (position, team_id), players in groups.items():
            if not players:
                continue
            starters = decision.position_starters.setdefault(team_id, set())
            decision.recommendations.extend(
                self.decide_group(position, players, starters)
            )
        logger.debug(f"Lineup engine produced {len(decision.recommendations)} recommendations")
        return decision

    def decide_group(
        self,
        position: Position,
        players: List[PlayerGroup],
        starters: Set[str],
    ) -> List[Recommendation]:
        """Decisions for one position on one fantasy team.

        ``starters`` is updated in place with the healthy players ranked into
        starting slots.
        """
        ranked = rank_players(p for p in players if not RosterConfiguration.is_flex_slot(p.slot))
        starting_slots = self.roster_slots.starting_slots(position)
        recommendations: List[Recommendation] = []

        for rank, player in enumerate(ranked):
            in_starting_slot = RosterConfiguration.is_starting_slot(player.slot)
            should_start = rank < starting_slots

            if should_start and not is_unavailable(player):
                starters.add(player.player_id)

            if in_starting_slot and is_unavailable(player):
                replacement = next(
                    (
                        p
                        for p in ranked
                        if p.player_id != player.player_id and not is_unavailable(p)
                    ),
                    None,
                )
                sentinel = HEALTHY_SENTINEL if cannot_play(player.injury_status) else AVAILABLE_SENTINEL
                recommendations.append(
                    build_recommendation(
                        player,
                        Verdict.BENCH,
                        unavailable_reason(player),
                        replacement_baseline(replacement, sentinel),
                    )
                )
                continue

            if in_starting_slot == should_start:
                continue

            if should_start:
                swapped = at(ranked, starting_slots)
                reason = (
                    f"Ranked #{rank + 1} of {len(ranked)} {position.value}s with weighted score "
                    f"{player.score:.2f} (top {starting_slots} should start). "
                    + gap_sentence(player, swapped, True, self.volatility_clip)
                )
                recommendations.append(
                    build_recommendation(
                        player,
                        Verdict.START,
                        reason.strip(),
                        baseline_for(swapped, "starter", 0.0),
                    )
                )
            else:
                taking_spot = at(ranked, starting_slots - 1)
                reason = (
                    f"Ranked #{rank + 1} of {len(ranked)} {position.value}s with weighted score "
                    f"{player.score:.2f} (only top {starting_slots} should start). "
                    + gap_sentence(taking_spot, player, False, self.volatility_clip)
                )
                recommendations.append(
                    build_recommendation(
                        player,
                        Verdict.BENCH,
                        reason.strip(),
                        baseline_for(taking_spot, "bench", 0.0),
                    )
                )

        return recommendations
