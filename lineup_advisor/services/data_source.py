"""
Upstream read capability.

The recommendation service never talks to storage directly. Callers hand it a
DataSource whose coroutines return either typed models or the loosely shaped
rows the parsers understand.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Union

from ..models.league import (
    ByeWeekRow,
    DifficultyIndex,
    InjuryRow,
    LeagueCalc,
    Matchup,
    RosterEntry,
    RosterSlotRow,
)
from ..models.player import PlayerWeeklyStat

Row = Dict[str, Any]


class DataSource(ABC):
    """Abstract async reads for one recommendation or scoring pass."""

    @abstractmethod
    async def fetch_league_calcs(
        self, league_id: str, season: int, week: int
    ) -> List[Union[LeagueCalc, Row]]:
        """Stored weighted scores for a league week."""
        pass

    @abstractmethod
    async def fetch_player_stats(self, season: int, week: int) -> List[Union[PlayerWeeklyStat, Row]]:
        """Weekly stat rows including normalized features."""
        pass

    @abstractmethod
    async def fetch_injuries(self) -> List[Union[InjuryRow, Row]]:
        pass

    @abstractmethod
    async def fetch_bye_weeks(self, season: int) -> List[Union[ByeWeekRow, Row]]:
        pass

    @abstractmethod
    async def fetch_roster_slots(self, league_id: str) -> Optional[List[Union[RosterSlotRow, Row]]]:
        """League roster configuration, None when the league has none stored."""
        pass

    @abstractmethod
    async def fetch_rosters(
        self, league_id: str, team_ids: Sequence[str]
    ) -> List[Union[RosterEntry, Row]]:
        pass

    @abstractmethod
    async def fetch_matchups(self, season: int, week: int) -> List[Union[Matchup, Row]]:
        pass

    @abstractmethod
    async def fetch_difficulty_indices(
        self, season: int, week: int
    ) -> List[Union[DifficultyIndex, Row]]:
        """Stored opponent difficulty indices computed for a week."""
        pass
