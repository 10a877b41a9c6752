"""
Recommendation entry points.

Independent upstream reads are issued together and joined before any
decision logic runs. A failed read degrades to an empty snapshot (or default
roster slots) and is logged; it never aborts the request.
"""

import asyncio
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Set, Tuple

from loguru import logger

from config.settings import Settings

from ..analysis.difficulty import OpponentDifficultyResolver, upcoming_week
from ..decisions.common import dedupe_recommendations
from ..decisions.flex import FlexDecisionEngine
from ..decisions.grouping import build_player_groups, group_by_position_and_team
from ..decisions.lineup import LineupDecisionEngine
from ..decisions.waiver import WaiverComparator, select_available_free_agents
from ..models.league import DifficultyIndex, LeagueCalc, Matchup
from ..models.player import PlayerWeeklyStat, Position
from ..models.recommendation import PlayerGroup, Recommendation
from ..parsers.rows import parse_league_calc_row, parse_roster_row, parse_rows, parse_stat_row
from ..scoring.attribution import breakdown_for_group, score_drivers_summary
from ..utils.bye_weeks import build_player_bye_week_map, players_on_bye
from ..utils.injuries import build_injury_status_map
from ..utils.roster_configs import LeagueRosterSlots, resolve_roster_slots
from .data_source import DataSource

POSITION_ORDER = {position: i for i, position in enumerate(Position)}


def _unwrap(result: Any, what: str, default: Any) -> Any:
    if isinstance(result, Exception):
        logger.error(f"Failed to load {what}: {result}")
        return default
    return result if result is not None else default


class RecommendationService:
    """Lineup and waiver recommendations for one league week."""

    def __init__(self, source: DataSource, settings: Settings):
        self.source = source
        self.settings = settings

    async def _player_groups(
        self,
        league_id: str,
        team_ids: Sequence[str],
        season: int,
        week: int,
    ) -> Tuple[List[PlayerGroup], LeagueRosterSlots]:
        """Fetch every snapshot concurrently and join them into PlayerGroups."""
        results = await asyncio.gather(
            self.source.fetch_rosters(league_id, team_ids),
            self.source.fetch_league_calcs(league_id, season, week),
            self.source.fetch_player_stats(season, week),
            self.source.fetch_injuries(),
            self.source.fetch_bye_weeks(season),
            self.source.fetch_roster_slots(league_id),
            self.source.fetch_matchups(season, week),
            self.source.fetch_matchups(season, upcoming_week(week)),
            self.source.fetch_difficulty_indices(season, week),
            return_exceptions=True,
        )
        (
            rosters,
            calc_rows,
            stat_rows,
            injury_rows,
            bye_rows,
            slot_rows,
            current_rows,
            upcoming_rows,
            index_rows,
        ) = results

        wanted = set(team_ids)
        entries = [
            e
            for e in parse_rows(_unwrap(rosters, "rosters", []), parse_roster_row)
            if not wanted or e.team_id in wanted
        ]

        def parse_calc(row: Dict[str, Any]) -> LeagueCalc:
            return parse_league_calc_row(row, league_id=league_id)

        calcs = {
            c.player_id: c
            for c in parse_rows(_unwrap(calc_rows, "league calcs", []), parse_calc)
            if c.week == week
        }
        stats: Dict[str, PlayerWeeklyStat] = {
            s.player_id: s
            for s in parse_rows(_unwrap(stat_rows, "player stats", []), parse_stat_row)
            if s.week == week
        }
        injuries = build_injury_status_map(_unwrap(injury_rows, "injuries", []))
        bye_ids = players_on_bye(build_player_bye_week_map(_unwrap(bye_rows, "bye weeks", [])), week)

        # A failed slot read resolves to the default configuration
        slots = resolve_roster_slots(_unwrap(slot_rows, "roster slots", None), league_id)

        resolver = OpponentDifficultyResolver(
            week,
            parse_rows(_unwrap(current_rows, "matchups", []), Matchup.model_validate),
            parse_rows(_unwrap(upcoming_rows, "upcoming matchups", []), Matchup.model_validate),
            parse_rows(_unwrap(index_rows, "difficulty indices", []), DifficultyIndex.model_validate),
        )

        groups = build_player_groups(entries, calcs, stats, injuries, bye_ids, resolver)
        logger.debug(f"Built {len(groups)} player groups for league {league_id} week {week}")
        return groups, slots

    async def lineup_recommendations(
        self,
        league_id: str,
        team_ids: Sequence[str],
        season: int,
        week: int,
    ) -> List[Recommendation]:
        """
        START/BENCH recommendations for the given fantasy teams.

        Args:
            league_id: League identifier
            team_ids: Fantasy teams to evaluate
            season: Season year
            week: Week the lineups are for

        Returns:
            Recommendations ordered by team then position, at most one per
            player and team.
        """
        groups, slots = await self._player_groups(league_id, team_ids, season, week)
        if not groups:
            logger.warning(f"No rostered players found for league {league_id} week {week}")
            return []

        grouped = group_by_position_and_team(groups)
        ordered = {
            key: grouped[key]
            for key in sorted(grouped, key=lambda k: (k[1], POSITION_ORDER[k[0]]))
        }

        clip = self.settings.volatility_clip
        lineup = LineupDecisionEngine(slots, clip).decide(ordered)
        flex = FlexDecisionEngine(slots, clip).decide(
            ordered, lineup.position_starters, lineup.recommendations
        )
        recommendations = dedupe_recommendations(lineup.recommendations + flex)
        logger.info(
            f"Generated {len(recommendations)} lineup recommendations for "
            f"{len(set(team_ids)) or 'all'} teams in league {league_id} week {week}"
        )
        return recommendations

    def available_free_agents(
        self,
        candidates: Iterable[PlayerGroup],
        rostered_ids: Set[str],
        bye_week_map: Mapping[str, int],
        week: int,
    ) -> List[PlayerGroup]:
        """Waiver candidates kept by the availability filter, up to the configured count per position."""
        return select_available_free_agents(
            candidates,
            rostered_ids,
            bye_week_map,
            week,
            per_position=self.settings.waiver_candidates_per_position,
        )

    async def waiver_recommendations(
        self,
        league_id: str,
        team_id: str,
        season: int,
        week: int,
        free_agents: Iterable[PlayerGroup],
    ) -> List[Recommendation]:
        """ADD recommendations for one team against an already-filtered free agent list."""
        rostered, _ = await self._player_groups(league_id, [team_id], season, week)
        comparator = WaiverComparator(
            week,
            grace_week=self.settings.waiver_grace_week,
            volatility_clip=self.settings.volatility_clip,
        )
        return comparator.compare(rostered, list(free_agents))

    def score_drivers(self, player: PlayerGroup) -> str:
        """Short sentence naming what drives a player's weighted score."""
        breakdown = breakdown_for_group(player, self.settings.volatility_clip)
        return score_drivers_summary(breakdown, player.name)

