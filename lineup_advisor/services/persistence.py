"""
Persistence of computed league calcs.

Every write is a full overwrite keyed by (league, player, season, week), so a
pass can be retried or re-run safely. Backends are interchangeable: a bulk
writer, a row-by-row writer that isolates bad rows, and a combinator that
falls back from one to the other.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Set

from loguru import logger

from config.settings import Settings

from ..exceptions import PersistenceFailure
from ..models.league import LeagueCalc

Row = Dict[str, Any]
BulkWriter = Callable[[List[Row]], Awaitable[Any]]
RowWriter = Callable[[Row], Awaitable[Any]]

CONFLICT_KEY = ("league_id", "player_id", "season", "week")


class UpsertBackend(ABC):
    """Writes a batch of rows and returns how many were written."""

    @abstractmethod
    async def upsert(self, rows: List[Row]) -> int:
        pass


class BulkUpsertBackend(UpsertBackend):
    """Sends each batch in a single call."""

    def __init__(self, writer: BulkWriter):
        self.writer = writer

    async def upsert(self, rows: List[Row]) -> int:
        if not rows:
            return 0
        try:
            await self.writer(rows)
        except Exception as e:
            raise PersistenceFailure(f"Bulk upsert of {len(rows)} rows failed: {e}", rows=len(rows)) from e
        return len(rows)


class RowByRowUpsertBackend(UpsertBackend):
    """Sends rows one at a time; a failing row never blocks the others."""

    def __init__(self, writer: RowWriter):
        self.writer = writer

    async def upsert(self, rows: List[Row]) -> int:
        written = 0
        for row in rows:
            try:
                await self.writer(row)
                written += 1
            except Exception as e:
                key = tuple(row.get(k) for k in CONFLICT_KEY)
                logger.error(f"Failed to upsert row {key}: {e}")
        return written


class FallbackUpsertBackend(UpsertBackend):
    """Tries ``primary`` once per batch and retries the batch on ``fallback``."""

    def __init__(self, primary: UpsertBackend, fallback: UpsertBackend):
        self.primary = primary
        self.fallback = fallback

    async def upsert(self, rows: List[Row]) -> int:
        try:
            return await self.primary.upsert(rows)
        except PersistenceFailure as e:
            logger.warning(f"{e}; retrying {len(rows)} rows with fallback backend")
            return await self.fallback.upsert(rows)


@dataclass
class PersistenceReport:
    written: int = 0
    failed: int = 0
    failed_positions: Set[str] = field(default_factory=set)

    @property
    def ok(self) -> bool:
        return self.failed == 0


def calc_to_row(calc: LeagueCalc) -> Row:
    row = calc.model_dump(exclude={"components"})
    row["position"] = calc.position.value if calc.position else None
    return row


class CalcPersistenceService:
    """Writes LeagueCalc rows per position in concurrent batches."""

    def __init__(self, backend: UpsertBackend, settings: Settings):
        self.backend = backend
        self.batch_size = settings.upsert_batch_size

    async def persist(self, calcs: Iterable[LeagueCalc]) -> PersistenceReport:
        """
        Upsert calcs grouped by position.

        Rows sharing a conflict key are collapsed to the last one seen, so no
        two writes in a pass touch the same row. Failures are logged and
        counted, never raised.
        """
        by_position: Dict[str, Dict[tuple, Row]] = {}
        for calc in calcs:
            position = calc.position.value if calc.position else "UNKNOWN"
            by_position.setdefault(position, {})[calc.key] = calc_to_row(calc)

        report = PersistenceReport()
        for position in sorted(by_position):
            rows = list(by_position[position].values())
            batches = [rows[i : i + self.batch_size] for i in range(0, len(rows), self.batch_size)]
            results = await asyncio.gather(
                *[self.backend.upsert(batch) for batch in batches], return_exceptions=True
            )

            for batch, result in zip(batches, results):
                if isinstance(result, Exception):
                    logger.error(f"Upsert failed for {position}: {result}")
                    report.failed += len(batch)
                    report.failed_positions.add(position)
                    continue
                report.written += result
                if result < len(batch):
                    report.failed += len(batch) - result
                    report.failed_positions.add(position)

            logger.info(f"Upserted {len(rows)} {position} calcs in {len(batches)} batches")

        if report.failed:
            logger.error(
                f"{report.failed} calc rows failed to persist "
                f"(positions: {', '.join(sorted(report.failed_positions))})"
            )
        return report
