"""Pytest configuration and shared fixtures for all tests."""

from typing import Any, Dict, Optional

import pytest

from config.settings import Settings
from lineup_advisor.models import LeagueCalc, PlayerGroup, PlayerWeeklyStat, Position


@pytest.fixture
def settings(monkeypatch, tmp_path) -> Settings:
    """Settings isolated from any local .env file."""
    for name in ("RECENT_WINDOW_WEEKS", "VOLATILITY_CLIP", "WAIVER_GRACE_WEEK", "UPSERT_BATCH_SIZE",
                 "WAIVER_CANDIDATES_PER_POSITION"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "test.log"))
    return Settings(_env_file=None)


@pytest.fixture
def make_player():
    """Factory for PlayerGroups with sensible defaults."""

    def _make(
        player_id: str,
        position: Position = Position.RB,
        score: Optional[float] = 1.0,
        slot: Optional[str] = "BN",
        team_id: Optional[str] = "team-1",
        injury_status: Optional[str] = None,
        on_bye: bool = False,
        name: Optional[str] = None,
        nfl_team: Optional[str] = "KC",
        calc: Optional[LeagueCalc] = None,
    ) -> PlayerGroup:
        return PlayerGroup(
            player_id=player_id,
            name=name or f"Player {player_id}",
            position=position,
            team_id=team_id,
            slot=slot,
            nfl_team=nfl_team,
            weighted_score=score,
            calc=calc,
            injury_status=injury_status,
            on_bye=on_bye,
        )

    return _make


@pytest.fixture
def make_calc():
    """Factory for LeagueCalc rows."""

    def _make(
        player_id: str,
        position: Position = Position.RB,
        weighted_score: Optional[float] = None,
        components: Optional[Dict[str, float]] = None,
        **kwargs: Any,
    ) -> LeagueCalc:
        return LeagueCalc(
            league_id=kwargs.pop("league_id", "league-1"),
            player_id=player_id,
            season=kwargs.pop("season", 2024),
            week=kwargs.pop("week", 5),
            position=position,
            weighted_score=weighted_score,
            components=components or {},
            **kwargs,
        )

    return _make


@pytest.fixture
def wr_stat() -> PlayerWeeklyStat:
    """A receiver's week with a full receiving line."""
    return PlayerWeeklyStat(
        player_id="wr-1",
        season=2024,
        week=5,
        position="WR",
        team="KC",
        targets=10,
        receptions=7,
        rec_yds=95,
        rec_td=1,
    )
