"""Domain port definitions for adapters."""

from __future__ import annotations

from .parsing import HistoryParser, UploadUnwrapper
from .persistence import PlayRecordRepository
from .unit_of_work import (
    HistoryRepositories,
    HistoryUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "HistoryParser",
    "HistoryRepositories",
    "HistoryUnitOfWork",
    "PlayRecordRepository",
    "RepositoryCollection",
    "UnitOfWork",
    "UploadUnwrapper",
]
