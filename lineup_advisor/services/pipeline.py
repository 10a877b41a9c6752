"""
Bulk scoring pipeline for one league, season and week.

Stages run in order over full snapshots:

1. Efficiency features and their trailing averages per player
2. Trailing features normalized within each position cohort
3. League fantasy points and the trailing mean/std of those points
4. Recent mean/std normalized within each position cohort
5. Difficulty indices and opponent resolution
6. Weighted scores from the position models

Nothing here reads or writes storage, so running it twice on the same inputs
returns identical rows.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd
from loguru import logger

from config.settings import Settings

from ..analysis.difficulty import (
    OpponentDifficultyResolver,
    defense_difficulty_index,
    offense_difficulty_index,
)
from ..analysis.efficiency import build_efficiency_rows
from ..analysis.fantasy_points import Modifiers, fantasy_points
from ..analysis.normalization import normalize_cohorts
from ..analysis.recent_stats import recent_performance_by_player
from ..models.league import DefensePointsAgainst, DifficultyIndex, LeagueCalc, Matchup, TeamOffenseWeek
from ..models.player import PlayerWeeklyStat
from ..scoring.position_models import build_models
from ..utils.constants import EFFICIENCY_FEATURES, ZSCORE_FEATURES


@dataclass
class PipelineResult:
    """Rows produced by one scoring pass."""

    calcs: List[LeagueCalc] = field(default_factory=list)
    stats: List[PlayerWeeklyStat] = field(default_factory=list)
    indices: List[DifficultyIndex] = field(default_factory=list)


def _null(value) -> Optional[float]:
    return None if pd.isna(value) else float(value)


class ScoringPipeline:
    """Computes LeagueCalc rows with weighted scores from raw weekly stats."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.models = build_models(settings.volatility_clip, settings.score_precision)

    def normalize_features(self, rows: List[PlayerWeeklyStat]) -> List[PlayerWeeklyStat]:
        """Attach cohort-normalized trailing features to each row."""
        precision = self.settings.normalized_precision
        by_position: Dict[object, List[PlayerWeeklyStat]] = {}
        for row in rows:
            by_position.setdefault(row.position, []).append(row)

        out: List[PlayerWeeklyStat] = []
        for position, cohort in by_position.items():
            features = EFFICIENCY_FEATURES.get(position, []) if position else []
            if not features:
                out.extend(cohort)
                continue
            z_columns = [f for f in features if f in ZSCORE_FEATURES.get(position, frozenset())]
            mm_columns = [f for f in features if f not in z_columns]

            frame = pd.DataFrame(
                [{"position": position.value, **{f: row.trailing.get(f) for f in features}} for row in cohort]
            ).astype({f: "float64" for f in features})
            normalized = normalize_cohorts(frame, mm_columns, z_columns, precision=precision)

            for i, row in enumerate(cohort):
                values = {f: _null(normalized.iloc[i][f"{f}_norm"]) for f in features}
                out.append(row.model_copy(update={"normalized": values}))
        return out

    def league_points(
        self,
        league_id: str,
        stats: Iterable[PlayerWeeklyStat],
        modifiers: Modifiers,
    ) -> List[LeagueCalc]:
        """One LeagueCalc per stat row carrying only its fantasy points.

        Weeks a player did not play carry no points so they stay out of the
        recent window.
        """
        modifier_list = modifiers if isinstance(modifiers, Mapping) else list(modifiers)
        return [
            LeagueCalc(
                league_id=league_id,
                player_id=row.player_id,
                season=row.season,
                week=row.week,
                position=row.position,
                team=row.team,
                fantasy_points=fantasy_points(row, modifier_list) if row.did_play else None,
            )
            for row in stats
        ]

    def difficulty_indices(
        self,
        season: int,
        week: int,
        defense_rows: Iterable[DefensePointsAgainst],
        offense_rows: Iterable[TeamOffenseWeek],
    ) -> List[DifficultyIndex]:
        window = self.settings.recent_window_weeks
        precision = self.settings.normalized_precision
        indices = defense_difficulty_index(defense_rows, season, week, window, precision)
        indices += offense_difficulty_index(offense_rows, season, week, window, precision)
        return indices

    def run(
        self,
        league_id: str,
        season: int,
        week: int,
        stats: Iterable[PlayerWeeklyStat],
        modifiers: Modifiers,
        current_matchups: Iterable[Matchup] = (),
        upcoming_matchups: Optional[Iterable[Matchup]] = None,
        defense_rows: Iterable[DefensePointsAgainst] = (),
        offense_rows: Iterable[TeamOffenseWeek] = (),
        history: Iterable[LeagueCalc] = (),
    ) -> PipelineResult:
        """
        Score every player with a stat row in ``week``.

        Args:
            league_id: League the fantasy points and scores belong to
            season: Season year
            week: Week being scored
            stats: The season's weekly stat rows up to and including ``week``
            modifiers: League scoring rules
            current_matchups: NFL games in ``week``
            upcoming_matchups: NFL games in the following week
            defense_rows: Points allowed per defense, position and week
            offense_rows: Offensive points per team and week
            history: Previously stored calcs, used for weeks without stat rows

        Returns:
            PipelineResult with fresh calcs, normalized stat rows and the
            difficulty indices used.
        """
        season_stats = [s for s in stats if s.season == season and s.week <= week]
        current = self.normalize_features(
            build_efficiency_rows(season_stats, week, self.settings.efficiency_window_weeks)
        )
        if not current:
            logger.info(f"No stat rows for league {league_id} season {season} week {week}")
            return PipelineResult()

        computed = self.league_points(league_id, season_stats, modifiers)
        seen = {(c.player_id, c.week) for c in computed}
        points_rows = computed + [
            c for c in history if c.season == season and (c.player_id, c.week) not in seen
        ]
        recent = recent_performance_by_player(points_rows, week, self.settings.recent_window_weeks)
        points_now = {c.player_id: c.fantasy_points for c in computed if c.week == week}

        frame = pd.DataFrame(
            [
                {
                    "player_id": row.player_id,
                    "position": row.position.value if row.position else None,
                    "recent_mean": recent[row.player_id].mean if row.player_id in recent else None,
                    "recent_std": recent[row.player_id].std if row.player_id in recent else None,
                }
                for row in current
            ]
        ).astype({"recent_mean": "float64", "recent_std": "float64"})
        frame = normalize_cohorts(
            frame,
            min_max_columns=["recent_mean"],
            z_score_columns=["recent_std"],
            precision=self.settings.normalized_precision,
        )

        indices = self.difficulty_indices(season, week, defense_rows, offense_rows)
        resolver = OpponentDifficultyResolver(week, current_matchups, upcoming_matchups, indices)

        calcs: List[LeagueCalc] = []
        for i, row in enumerate(current):
            record = frame.iloc[i]
            calc = LeagueCalc(
                league_id=league_id,
                player_id=row.player_id,
                season=season,
                week=week,
                position=row.position,
                team=row.team,
                fantasy_points=points_now.get(row.player_id),
                recent_mean=_null(record["recent_mean"]),
                recent_std=_null(record["recent_std"]),
                recent_mean_norm=_null(record["recent_mean_norm"]),
                recent_std_norm=_null(record["recent_std_norm"]),
            )
            model = self.models.get(row.position) if row.position else None
            if model is not None:
                values = model.component_values(
                    calc, row, resolver.difficulty_for(row.position, row.team)
                )
                calc = calc.model_copy(
                    update={"components": values, "weighted_score": model.score_components(values)}
                )
            calcs.append(calc)

        logger.info(f"Scored {len(calcs)} players for league {league_id} season {season} week {week}")
        return PipelineResult(
            calcs=calcs,
            stats=current,
            indices=indices,
        )
