"""Scoring pipeline, persistence and recommendation services."""

from .data_source import DataSource
from .persistence import (
    BulkUpsertBackend,
    CalcPersistenceService,
    FallbackUpsertBackend,
    PersistenceReport,
    RowByRowUpsertBackend,
    UpsertBackend,
)
from .pipeline import PipelineResult, ScoringPipeline
from .recommendations import RecommendationService

__all__ = [
    "BulkUpsertBackend",
    "CalcPersistenceService",
    "DataSource",
    "FallbackUpsertBackend",
    "PersistenceReport",
    "PipelineResult",
    "RecommendationService",
    "RowByRowUpsertBackend",
    "ScoringPipeline",
    "UpsertBackend",
]
