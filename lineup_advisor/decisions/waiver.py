"""
Waiver comparator.

Compares every rostered player against available free agents at the same
position and recommends ADD when the free agent is the better play.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Set

from loguru import logger

from ..models.player import Position
from ..models.recommendation import Baseline, PlayerGroup, Recommendation, Verdict
from ..scoring.attribution import breakdown_for_group, compare_breakdowns, comparison_reason, top_factors
from ..utils.injuries import cannot_play
from .common import build_recommendation, rank_players


def _label(player: PlayerGroup) -> str:
    return f"{player.name} ({player.nfl_team})" if player.nfl_team else player.name


def select_available_free_agents(
    candidates: Iterable[PlayerGroup],
    rostered_ids: Set[str],
    bye_week_map: Mapping[str, int],
    week: int,
    per_position: int = 3,
) -> List[PlayerGroup]:
    """
    Availability filter for waiver candidates.

    Drops rostered players, cannot-play designations, players on bye in
    ``week`` and players without a score, then keeps the best ``per_position``
    candidates at each position.

    Args:
        candidates: Every player in the league's player pool with score rows joined
        rostered_ids: Player ids on any fantasy roster in the league
        bye_week_map: Player id to bye week
        week: Week the recommendations are for
        per_position: How many candidates to keep per position

    Returns:
        Ranked available free agents.
    """
    by_position: Dict[Optional[Position], List[PlayerGroup]] = {}
    for player in candidates:
        if player.player_id in rostered_ids:
            continue
        if cannot_play(player.injury_status):
            continue
        if bye_week_map.get(player.player_id) == week:
            continue
        if not player.has_score or player.position is None:
            continue
        by_position.setdefault(player.position, []).append(player)

    selected: List[PlayerGroup] = []
    for position in sorted(by_position, key=lambda p: p.value):
        selected.extend(rank_players(by_position[position])[:per_position])
    logger.debug(f"Selected {len(selected)} available free agents for week {week}")
    return selected


class WaiverComparator:
    """ADD recommendations from rostered players vs. available free agents."""

    def __init__(self, week: int, grace_week: int = 2, volatility_clip: float = 2.0):
        self.week = week
        self.grace_week = grace_week
        self.volatility_clip = volatility_clip

    def should_add(self, free_agent: PlayerGroup, rostered: PlayerGroup) -> bool:
        if not free_agent.has_score:
            return False
        if not rostered.has_score:
            return self.week > self.grace_week
        return free_agent.weighted_score > rostered.weighted_score

    def reason(self, free_agent: PlayerGroup, rostered: PlayerGroup) -> str:
        fa_breakdown = breakdown_for_group(free_agent, self.volatility_clip)

        if not rostered.has_score:
            reason = (
                f"{_label(free_agent)} scores {free_agent.score:.2f}, "
                f"while {_label(rostered)} has no scoring data."
            )
            drivers = [c.label.lower() for c in top_factors(fa_breakdown, 2)]
            if drivers:
                reason += f" {free_agent.name}'s score is driven by {' and '.join(drivers)}."
            return reason

        rostered_breakdown = breakdown_for_group(rostered, self.volatility_clip)
        if fa_breakdown.components and rostered_breakdown.components:
            comparison = compare_breakdowns(fa_breakdown, rostered_breakdown)
            return comparison_reason(comparison, free_agent.name, rostered.name, True)

        diff = free_agent.score - rostered.score
        reason = (
            f"{_label(free_agent)} outscores {_label(rostered)}: "
            f"{free_agent.score:.2f} vs {rostered.score:.2f} (+{diff:.2f}"
        )
        if rostered.score != 0:
            reason += f", {diff / abs(rostered.score) * 100:.0f}% better"
        return reason + ")."

    def compare(
        self,
        rostered: Iterable[PlayerGroup],
        free_agents: Iterable[PlayerGroup],
    ) -> List[Recommendation]:
        """
        Every (rostered, free agent) pair at the same position that warrants an ADD.

        Entries whose rostered player has no score come first, then the
        largest score gaps.
        """
        by_position: Dict[Optional[Position], List[PlayerGroup]] = {}
        for fa in free_agents:
            by_position.setdefault(fa.position, []).append(fa)

        recommendations: List[Recommendation] = []
        for player in rostered:
            for fa in by_position.get(player.position, []):
                if not self.should_add(fa, player):
                    continue
                baseline = Baseline(
                    player_id=player.player_id, name=player.name, score=player.weighted_score
                )
                recommendations.append(
                    build_recommendation(
                        fa, Verdict.ADD, self.reason(fa, player), baseline, team_id=player.team_id
                    )
                )

        recommendations.sort(
            key=lambda r: (
                r.baseline.score is not None,
                -r.score_gap,
                r.player_id,
                r.baseline.player_id or "",
            )
        )
        logger.info(f"Waiver comparator produced {len(recommendations)} ADD recommendations")
        return recommendations
