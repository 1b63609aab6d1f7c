"""Per-file ingest pipeline for exported listening history.

The pipeline separates one file import into explicit, testable phases:
validation, classification, deduplication and persistence. Phases communicate
through a shared ``PipelineContext`` so domain rules remain explicit and
adapter-free.
"""

from __future__ import annotations

from .classification import ClassificationPhase, classify_entry, extract_track_id
from .context import DEFAULT_INSERT_CHUNK_SIZE, MIN_MS_PLAYED, PipelineContext
from .deduplication import DeduplicationPhase, partition_new
from .orchestrator import IngestionPipeline, PipelinePhase
from .persistence import PersistencePhase
from .validation import ValidationPhase


def default_pipeline() -> IngestionPipeline:
    return IngestionPipeline(
        phases=(ValidationPhase(), ClassificationPhase(), DeduplicationPhase(), PersistencePhase())
    )


__all__ = [
    "DEFAULT_INSERT_CHUNK_SIZE",
    "MIN_MS_PLAYED",
    "ClassificationPhase",
    "DeduplicationPhase",
    "IngestionPipeline",
    "PersistencePhase",
    "PipelineContext",
    "PipelinePhase",
    "ValidationPhase",
    "classify_entry",
    "default_pipeline",
    "extract_track_id",
    "partition_new",
]
