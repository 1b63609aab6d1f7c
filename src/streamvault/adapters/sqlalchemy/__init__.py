"""SQLAlchemy adapter package for StreamVault."""

from __future__ import annotations

from .mappings import mapper_registry, play_record_table, start_mappers
from .repositories import SqlAlchemyPlayRecordRepository
from .unit_of_work import (
    SqlAlchemyHistoryUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyHistoryUnitOfWork",
    "SqlAlchemyPlayRecordRepository",
    "StartupError",
    "configured_engine",
    "is_started",
    "mapper_registry",
    "play_record_table",
    "shutdown",
    "start_mappers",
    "startup",
]
