"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from streamvault.adapters.archive import unwrap_upload
from streamvault.adapters.export_format import parse_history_file
from streamvault.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyHistoryUnitOfWork,
    is_started,
    startup,
)
from streamvault.config import get_import_config
from streamvault.domain.history_import import (
    ProgressCallback,
    UnitOfWorkFactory,
    delete_all,
    get_status,
    import_batch,
    import_file,
)
from streamvault.domain.model import UploadedFile

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path
    from threading import Event
    from uuid import UUID

    from streamvault.config import ImportConfig
    from streamvault.domain.model import AggregateImportResult, ImportResult, ImportStatus


log = getLogger(__name__)


def ensure_started() -> None:
    """Start the SQLAlchemy adapter on first use."""

    if not is_started():
        startup()


def _resolve_unit_of_work(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    ensure_started()
    return SqlAlchemyHistoryUnitOfWork


def import_history_payload(
    *,
    user_id: UUID,
    content: bytes,
    file_name: str = "history.json",
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: ImportConfig | None = None,
) -> ImportResult:
    """Import one already-unwrapped data file."""

    effective_config = config or get_import_config()
    return import_file(
        user_id=user_id,
        upload=UploadedFile(name=file_name, content=content),
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
        parser=parse_history_file,
        min_ms_played=effective_config.min_ms_played,
        insert_chunk_size=effective_config.insert_chunk_size,
    )


def import_history_uploads(
    *,
    user_id: UUID,
    uploads: Iterable[UploadedFile],
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    on_progress: ProgressCallback | None = None,
    cancel: Event | None = None,
    config: ImportConfig | None = None,
) -> AggregateImportResult:
    """Import data files and archives, unwrapping archives first."""

    effective_config = config or get_import_config()
    return import_batch(
        user_id=user_id,
        uploads=uploads,
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
        parser=parse_history_file,
        unwrapper=unwrap_upload,
        on_progress=on_progress,
        cancel=cancel,
        min_ms_played=effective_config.min_ms_played,
        insert_chunk_size=effective_config.insert_chunk_size,
    )


def uploads_from_paths(paths: Iterable[Path]) -> Iterator[UploadedFile]:
    """Read files lazily so only one upload is held in memory at a time."""

    for path in paths:
        log.debug("Reading %s", path)
        yield UploadedFile(name=path.name, content=path.read_bytes())


def history_status(
    *,
    user_id: UUID,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ImportStatus:
    return get_status(
        user_id=user_id,
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
    )


def erase_history(
    *,
    user_id: UUID,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> int:
    """Delete every imported record of ``user_id``. Confirmation is the caller's job."""

    return delete_all(
        user_id=user_id,
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
    )
