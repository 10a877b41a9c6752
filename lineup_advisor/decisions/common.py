"""Shared helpers for the decision engines."""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.recommendation import Baseline, PlayerGroup, Recommendation, Verdict
from ..scoring.attribution import breakdown_for_group, explain_gap
from ..scoring.confidence import estimate_confidence
from ..utils.constants import SENTINEL_SCORE
from ..utils.injuries import cannot_play


def rank_players(players: Iterable[PlayerGroup]) -> List[PlayerGroup]:
    """Sort by weighted score descending; equal scores fall back to player id ascending."""
    return sorted(players, key=lambda p: (-p.score, p.player_id))


def is_unavailable(player: PlayerGroup) -> bool:
    """Injured (cannot-play designation) or on bye."""
    return cannot_play(player.injury_status) or player.on_bye


def baseline_for(player: Optional[PlayerGroup], fallback_name: str, fallback_score: float) -> Baseline:
    if player is None:
        return Baseline(player_id=None, name=fallback_name, score=fallback_score)
    return Baseline(player_id=player.player_id, name=player.name, score=player.score)


def at(players: Sequence[PlayerGroup], index: int) -> Optional[PlayerGroup]:
    """Item at a non-negative index, None when out of range."""
    if 0 <= index < len(players):
        return players[index]
    return None


def replacement_baseline(replacement: Optional[PlayerGroup], sentinel_name: str) -> Baseline:
    return baseline_for(replacement, sentinel_name, SENTINEL_SCORE)


def build_recommendation(
    player: PlayerGroup,
    verdict: Verdict,
    reason: str,
    baseline: Baseline,
    team_id: Optional[str] = None,
) -> Recommendation:
    return Recommendation(
        player_id=player.player_id,
        name=player.name,
        position=player.position,
        team_id=team_id if team_id is not None else player.team_id,
        slot=player.slot,
        verdict=verdict,
        score=player.weighted_score,
        reason=reason,
        confidence=estimate_confidence(player.score, baseline.score, verdict),
        baseline=baseline,
        injury_status=player.injury_status,
    )


def unavailable_reason(player: PlayerGroup) -> str:
    if cannot_play(player.injury_status):
        return (
            f"{player.name} is currently injured and should not be started. "
            f"Weighted score: {player.score:.2f}."
        )
    return (
        f"{player.name} is on a bye this week and should not be started. "
        f"Weighted score: {player.score:.2f}."
    )


def gap_sentence(
    better: Optional[PlayerGroup],
    worse: Optional[PlayerGroup],
    is_start: bool,
    volatility_clip: float = 2.0,
) -> str:
    """Factor comparison between two real players, empty when either is missing."""
    if better is None or worse is None:
        return ""
    return explain_gap(
        breakdown_for_group(better, volatility_clip),
        better.name,
        breakdown_for_group(worse, volatility_clip),
        worse.name,
        is_start,
    )


def recommended_keys(recommendations: Iterable[Recommendation]) -> set:
    return {(r.player_id, r.team_id) for r in recommendations}


def dedupe_recommendations(recommendations: Iterable[Recommendation]) -> List[Recommendation]:
    """Keep the first recommendation per (player, team)."""
    seen: Dict[Tuple[str, Optional[str]], Recommendation] = {}
    for rec in recommendations:
        seen.setdefault((rec.player_id, rec.team_id), rec)
    return list(seen.values())
