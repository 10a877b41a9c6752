"""
Error taxonomy for the scoring and recommendation core.

Business-rule code never raises these to callers. Adapters and lookups raise
them, and the layer directly above catches them and degrades.
"""

from typing import Any, Optional


class LineupAdvisorError(Exception):
    """Base class for all lineup advisor errors."""


class MissingUpstreamData(LineupAdvisorError):
    """A required score, stat or roster row is absent."""

    def __init__(self, what: str, key: Optional[Any] = None):
        self.what = what
        self.key = key
        detail = f"{what} not found" if key is None else f"{what} not found for {key}"
        super().__init__(detail)


class InvalidConfiguration(LineupAdvisorError):
    """League roster slot configuration cannot be resolved."""


class PersistenceFailure(LineupAdvisorError):
    """An upsert of computed rows failed for a batch or a single row."""

    def __init__(self, message: str, rows: int = 0):
        self.rows = rows
        super().__init__(message)
