"""
Roster slot resolution for league lineups.

Turns a league's roster position rows into required starting counts per
position plus a single aggregated flex count, falling back to standard
defaults when the configuration is missing or malformed.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set, Union

from loguru import logger

from ..exceptions import InvalidConfiguration
from ..models.league import RosterSlotRow
from ..models.player import Position, coerce_position
from .constants import (
    BENCH_SLOTS,
    DEFAULT_FLEX_SLOTS,
    DEFAULT_STARTING_SLOTS,
    FLEX_ELIGIBLE_POSITIONS,
    FLEX_SLOT_PATTERNS,
)


@dataclass
class RosterPosition:
    """Represents a single roster position slot."""
    position_type: str  # "QB", "RB", "W/R/T", "BN", ...
    count: int = 1
    eligible_positions: Optional[List[str]] = None  # For FLEX positions
    is_bench: bool = False
    is_ir: bool = False

    @property
    def is_flex(self) -> bool:
        return self.eligible_positions is not None


@dataclass
class LeagueRosterSlots:
    """Starting requirements for one league."""

    positions: Dict[str, int]
    flex_slots: int
    flex_eligible: FrozenSet[Position] = field(default=FLEX_ELIGIBLE_POSITIONS)
    is_default: bool = False

    def starting_slots(self, position: Union[Position, str]) -> int:
        """Starting slots for a position, using the standard default when absent."""
        key = position.value if isinstance(position, Position) else str(position).upper()
        if key in self.positions:
            return self.positions[key]
        return DEFAULT_STARTING_SLOTS.get(key, 0)


class RosterConfiguration:
    """
    Parses league roster position rows into slot requirements.
    """

    # Flex labels and the positions they accept
    POSITION_ELIGIBILITY = {
        "FLEX": ["RB", "WR", "TE"],
        "W/R/T": ["WR", "RB", "TE"],
        "W/R": ["WR", "RB"],
        "W/T": ["WR", "TE"],
    }

    @staticmethod
    def is_flex_slot(slot: Optional[str]) -> bool:
        """Check if a slot is a flex slot (W/R/T, W/R, FLEX, etc.)."""
        if not slot:
            return False
        slot_upper = slot.upper()
        return any(pattern in slot_upper for pattern in FLEX_SLOT_PATTERNS)

    @staticmethod
    def is_bench_slot(slot: Optional[str]) -> bool:
        return (slot or "").upper() in BENCH_SLOTS

    @classmethod
    def is_starting_slot(cls, slot: Optional[str]) -> bool:
        """A standard positional starting slot: neither bench/IR nor flex."""
        return not cls.is_bench_slot(slot) and not cls.is_flex_slot(slot)

    @classmethod
    def default_slots(cls) -> LeagueRosterSlots:
        return LeagueRosterSlots(
            positions=dict(DEFAULT_STARTING_SLOTS),
            flex_slots=DEFAULT_FLEX_SLOTS,
            is_default=True,
        )

    @classmethod
    def parse_roster_positions(
        cls, rows: Iterable[Union[RosterSlotRow, Dict[str, Any]]]
    ) -> List[RosterPosition]:
        """Convert raw roster rows into RosterPosition objects.

        Raises:
            InvalidConfiguration: if a row has no label or an invalid count.
        """
        parsed: List[RosterPosition] = []
        for row in rows:
            if isinstance(row, dict):
                label = row.get("position")
                count = row.get("count", 0)
            else:
                label = row.position
                count = row.count

            if not label:
                raise InvalidConfiguration("Roster position row without a label")
            try:
                count = int(count)
            except (TypeError, ValueError):
                raise InvalidConfiguration(f"Invalid slot count {count!r} for {label}")
            if count < 0:
                raise InvalidConfiguration(f"Negative slot count {count} for {label}")

            label_upper = str(label).strip().upper()
            if cls.is_flex_slot(label_upper):
                eligible = cls.POSITION_ELIGIBILITY.get(label_upper, ["RB", "WR", "TE"])
                parsed.append(RosterPosition(label_upper, count, eligible))
            else:
                parsed.append(
                    RosterPosition(
                        label_upper,
                        count,
                        is_bench=label_upper in {"BN", "BENCH"},
                        is_ir=label_upper.startswith("IR"),
                    )
                )
        return parsed

    @classmethod
    def from_rows(cls, rows: Iterable[Union[RosterSlotRow, Dict[str, Any]]]) -> LeagueRosterSlots:
        """Build slot requirements, summing every flex-type label into one count.

        Raises:
            InvalidConfiguration: if there are no rows or a row is malformed.
        """
        roster_positions = cls.parse_roster_positions(rows)
        if not roster_positions:
            raise InvalidConfiguration("League has no roster positions configured")

        positions: Dict[str, int] = {}
        flex_slots = 0
        flex_eligible: Set[Position] = set()
        for rp in roster_positions:
            if rp.is_flex:
                flex_slots += rp.count
                if rp.count > 0:
                    flex_eligible.update(coerce_position(p) for p in rp.eligible_positions)
            elif rp.is_bench or rp.is_ir:
                continue
            else:
                canonical = coerce_position(rp.position_type)
                key = canonical.value if canonical else rp.position_type
                positions[key] = positions.get(key, 0) + rp.count

        return LeagueRosterSlots(
            positions=positions,
            flex_slots=flex_slots,
            flex_eligible=frozenset(flex_eligible) if flex_eligible else FLEX_ELIGIBLE_POSITIONS,
        )


def resolve_roster_slots(
    rows: Optional[Iterable[Union[RosterSlotRow, Dict[str, Any]]]],
    league_id: Optional[str] = None,
) -> LeagueRosterSlots:
    """Resolve a league's slots, falling back to defaults on bad configuration."""
    if rows is None:
        logger.warning(f"No roster configuration for league {league_id}, using defaults")
        return RosterConfiguration.default_slots()
    try:
        return RosterConfiguration.from_rows(rows)
    except InvalidConfiguration as e:
        logger.warning(f"Invalid roster configuration for league {league_id}: {e}; using defaults")
        return RosterConfiguration.default_slots()
