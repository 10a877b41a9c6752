"""
Flex decision engine.

Second pass over flex-eligible players the lineup engine did not place in a
positional starting slot. Injured and bye players are benched out of flex
slots first; the remaining pool is ranked and the top ``flex_slots`` should
occupy flex.
"""

from typing import Dict, Iterable, List, Mapping, Set

from loguru import logger

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
    recommended_keys,
    replacement_baseline,
    unavailable_reason,
)
from .lineup import GroupKey


class FlexDecisionEngine:
    """START/BENCH decisions for shared flex slots."""

    def __init__(self, roster_slots: LeagueRosterSlots, volatility_clip: float = 2.0):
        self.roster_slots = roster_slots
        self.volatility_clip = volatility_clip

    def _eligible(self, player: PlayerGroup) -> bool:
        return player.position in self.roster_slots.flex_eligible

    def build_pool(
        self,
        groups: Mapping[GroupKey, List[PlayerGroup]],
        position_starters: Mapping[str, Set[str]],
    ) -> Dict[str, List[PlayerGroup]]:
        """Ranked flex candidates per team: eligible, not a positional starter, available."""
        pool: Dict[str, List[PlayerGroup]] = {}
        for players in groups.values():
            for player in players:
                if not self._eligible(player) or player.team_id is None:
                    continue
                if player.player_id in position_starters.get(player.team_id, set()):
                    continue
                if is_unavailable(player):
                    continue
                pool.setdefault(player.team_id, []).append(player)
        return {team_id: rank_players(players) for team_id, players in pool.items()}

    def decide(
        self,
        groups: Mapping[GroupKey, List[PlayerGroup]],
        position_starters: Mapping[str, Set[str]],
        existing: Iterable[Recommendation] = (),
    ) -> List[Recommendation]:
        flex_slots = self.roster_slots.flex_slots
        if flex_slots <= 0:
            return []

        pool = self.build_pool(groups, position_starters)
        done = recommended_keys(existing)
        recommendations: List[Recommendation] = []

        # Injured or idle players sitting in a flex slot
        for players in groups.values():
            for player in rank_players(players):
                if not self._eligible(player):
                    continue
                if (player.player_id, player.team_id) in done:
                    continue
                in_flex = RosterConfiguration.is_flex_slot(player.slot)
                if not in_flex or RosterConfiguration.is_bench_slot(player.slot):
                    continue
                if not is_unavailable(player):
                    continue

                team_pool = pool.get(player.team_id, [])
                sentinel = HEALTHY_SENTINEL if cannot_play(player.injury_status) else AVAILABLE_SENTINEL
                rec = build_recommendation(
                    player,
                    Verdict.BENCH,
                    unavailable_reason(player),
                    replacement_baseline(team_pool[0] if team_pool else None, sentinel),
                )
                recommendations.append(rec)
                done.add((rec.player_id, rec.team_id))

        for team_id in sorted(pool):
            ranked = pool[team_id]
            for i, player in enumerate(ranked):
                if (player.player_id, team_id) in done:
                    continue
                in_starting_slot = not RosterConfiguration.is_bench_slot(player.slot)
                should_start = i < flex_slots
                if in_starting_slot == should_start:
                    continue

                if should_start:
                    swapped = at(ranked, flex_slots)
                    reason = (
                        f"Best available for the flex slot. Ranked #{i + 1} of {len(ranked)} "
                        f"flex-eligible players ({player.position.value}) with weighted score "
                        f"{player.score:.2f}. "
                        + gap_sentence(player, swapped, True, self.volatility_clip)
                    )
                    rec = build_recommendation(
                        player, Verdict.START, reason.strip(), baseline_for(swapped, "flex starter", 0.0)
                    )
                else:
                    taking_spot = at(ranked, flex_slots - 1)
                    reason = (
                        f"Not the best option for the flex slot. Ranked #{i + 1} of {len(ranked)} "
                        f"flex-eligible players ({player.position.value}) with weighted score "
                        f"{player.score:.2f}. "
                        + gap_sentence(taking_spot, player, False, self.volatility_clip)
                    )
                    rec = build_recommendation(
                        player, Verdict.BENCH, reason.strip(), baseline_for(taking_spot, "flex bench", 0.0)
                    )
                recommendations.append(rec)
                done.add((rec.player_id, rec.team_id))

        logger.debug(f"Flex engine produced {len(recommendations)} recommendations")
        return recommendations
