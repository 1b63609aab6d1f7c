"""Application services for importing and reporting listening history."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from streamvault.domain.errors import CorruptArchiveError, HistoryImportError
from streamvault.domain.ingest_pipeline import (
    DEFAULT_INSERT_CHUNK_SIZE,
    MIN_MS_PLAYED,
    IngestionPipeline,
    PipelineContext,
    default_pipeline,
)
from streamvault.domain.model import (
    AggregateImportResult,
    DateRange,
    FileOutcome,
    ImportResult,
    ImportStatus,
)
from streamvault.domain.ports import HistoryUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from threading import Event
    from uuid import UUID

    from streamvault.domain.model import UploadedFile
    from streamvault.domain.ports import HistoryParser, UploadUnwrapper

UnitOfWorkFactory = Callable[[], HistoryUnitOfWork]
ProgressCallback = Callable[[FileOutcome], None]

log = logging.getLogger(__name__)


def import_file(
    *,
    user_id: UUID,
    upload: UploadedFile,
    unit_of_work_factory: UnitOfWorkFactory,
    parser: HistoryParser,
    min_ms_played: int = MIN_MS_PLAYED,
    insert_chunk_size: int = DEFAULT_INSERT_CHUNK_SIZE,
    pipeline: IngestionPipeline | None = None,
) -> ImportResult:
    """Validate, classify, deduplicate and persist one data file.

    The new records of the file are committed in a single transaction. Raises
    ``SchemaError`` or ``StorageError`` (tagged with the file name) on failure,
    in which case nothing from this file was stored.
    """

    context = PipelineContext(
        user_id=user_id,
        upload=upload,
        parser=parser,
        min_ms_played=min_ms_played,
        insert_chunk_size=insert_chunk_size,
    )
    active_pipeline = pipeline or default_pipeline()

    with unit_of_work_factory() as uow:
        context.uow = uow
        result = active_pipeline.run(context)

    log.info(
        "Imported %s: total=%s, imported=%s, skipped=%s, duplicates=%s",
        upload.name,
        result.total,
        result.imported,
        result.skipped,
        result.duplicates,
    )
    return result


def import_batch(  # noqa: PLR0913
    *,
    user_id: UUID,
    uploads: Iterable[UploadedFile],
    unit_of_work_factory: UnitOfWorkFactory,
    parser: HistoryParser,
    unwrapper: UploadUnwrapper | None = None,
    on_progress: ProgressCallback | None = None,
    cancel: Event | None = None,
    min_ms_played: int = MIN_MS_PLAYED,
    insert_chunk_size: int = DEFAULT_INSERT_CHUNK_SIZE,
) -> AggregateImportResult:
    """Import ``uploads`` one file at a time, in submission order.

    A failing file is recorded and the batch carries on; files that already
    finished stay committed. ``cancel`` is only honoured between files.
    """

    outcomes: list[FileOutcome] = []
    cancelled = False

    for item in _expand_uploads(uploads, unwrapper):
        if cancel is not None and cancel.is_set():
            cancelled = True
            log.info("Import cancelled after %s file(s)", len(outcomes))
            break

        if isinstance(item, FileOutcome):
            outcome = item
        else:
            try:
                result = import_file(
                    user_id=user_id,
                    upload=item,
                    unit_of_work_factory=unit_of_work_factory,
                    parser=parser,
                    min_ms_played=min_ms_played,
                    insert_chunk_size=insert_chunk_size,
                )
            except HistoryImportError as exc:
                log.warning("Import of %s failed: %s", item.name, exc)
                outcome = FileOutcome.failed(item.name, exc)
            else:
                outcome = FileOutcome.done(item.name, result)

        outcomes.append(outcome)
        if on_progress is not None:
            on_progress(outcome)

    aggregate = AggregateImportResult.from_outcomes(outcomes, cancelled=cancelled)
    totals = aggregate.totals
    log.info(
        "Finished batch: files=%s, failed=%s, imported=%s, duplicates=%s, cancelled=%s",
        len(aggregate.outcomes),
        len(aggregate.errors),
        totals.imported,
        totals.duplicates,
        cancelled,
    )
    return aggregate


def _expand_uploads(
    uploads: Iterable[UploadedFile],
    unwrapper: UploadUnwrapper | None,
) -> Iterator[UploadedFile | FileOutcome]:
    for upload in uploads:
        if unwrapper is None:
            yield upload
            continue
        try:
            members = unwrapper(upload)
        except CorruptArchiveError as exc:
            if exc.file_name is None:
                exc.file_name = upload.name
            log.warning("Skipping %s: %s", upload.name, exc)
            yield FileOutcome.failed(upload.name, exc)
            continue
        if not members:
            log.warning("No data files found in %s", upload.name)
        yield from members


def get_status(*, user_id: UUID, unit_of_work_factory: UnitOfWorkFactory) -> ImportStatus:
    """Summarise the stored records of ``user_id``; always read fresh from storage."""

    with unit_of_work_factory() as uow:
        repository = uow.repositories.play_records
        if not repository.has_records(user_id):
            return ImportStatus()
        total_tracks = repository.count_distinct_tracks(user_id)
        bounds = repository.played_at_range(user_id)

    date_range = DateRange(earliest=bounds[0], latest=bounds[1]) if bounds else None
    return ImportStatus(has_data=True, total_tracks=total_tracks, date_range=date_range)


def delete_all(*, user_id: UUID, unit_of_work_factory: UnitOfWorkFactory) -> int:
    """Irreversibly remove every play record of ``user_id``; return the count removed.

    Callers are expected to have obtained an explicit confirmation first.
    """

    with unit_of_work_factory() as uow:
        deleted = uow.repositories.play_records.delete_all(user_id)
        uow.commit()

    log.info("Deleted %s play records for user %s", deleted, user_id)
    return deleted
