"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, distinct, exists, func, select
from sqlalchemy import insert as generic_insert
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from streamvault.adapters.sqlalchemy.mappings import IDENTITY_COLUMNS, play_record_table
from streamvault.domain.errors import StorageError
from streamvault.domain.model import IdentityKey, PlayRecord

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence
    from datetime import datetime
    from uuid import UUID

    from sqlalchemy.orm import Session
    from sqlalchemy.sql.dml import Insert

LOOKUP_CHUNK_SIZE = 400

_CONFLICT_IGNORING_INSERTS: dict[str, Callable[..., Any]] = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _wrap_storage_errors[**P, R](func_: Callable[P, R]) -> Callable[P, R]:
    @functools.wraps(func_)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func_(*args, **kwargs)
        except SQLAlchemyError as exc:
            raise StorageError(f"{func_.__name__} failed: {exc}") from exc

    return wrapper


class SqlAlchemyPlayRecordRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    @_wrap_storage_errors
    def add_many(self, records: Sequence[PlayRecord], *, chunk_size: int = 500) -> int:
        inserted = 0
        for start in range(0, len(records), chunk_size):
            rows = [_row_for(record) for record in records[start : start + chunk_size]]
            result = self.session.execute(self._insert_ignoring_conflicts().values(rows))
            inserted += cast("Any", result).rowcount
        return inserted

    @_wrap_storage_errors
    def existing_keys(self, user_id: UUID, keys: Collection[IdentityKey]) -> set[IdentityKey]:
        wanted = {key for key in keys if key.user_id == user_id}
        if not wanted:
            return set()

        ordered = sorted(wanted, key=lambda key: (key.played_at, key.track_id))
        found: set[IdentityKey] = set()
        for start in range(0, len(ordered), LOOKUP_CHUNK_SIZE):
            chunk = ordered[start : start + LOOKUP_CHUNK_SIZE]
            stmt = (
                select(play_record_table.c.track_id, play_record_table.c.played_at)
                .where(play_record_table.c.user_id == user_id)
                .where(play_record_table.c.track_id.in_({key.track_id for key in chunk}))
                .where(play_record_table.c.played_at.in_({key.played_at for key in chunk}))
            )
            for track_id, played_at in self.session.execute(stmt):
                candidate = IdentityKey(user_id=user_id, track_id=track_id, played_at=played_at)
                if candidate in wanted:
                    found.add(candidate)
        return found

    @_wrap_storage_errors
    def has_records(self, user_id: UUID) -> bool:
        stmt = select(exists().where(play_record_table.c.user_id == user_id))
        return bool(self.session.execute(stmt).scalar())

    @_wrap_storage_errors
    def count_distinct_tracks(self, user_id: UUID) -> int:
        stmt = select(func.count(distinct(play_record_table.c.track_id))).where(
            play_record_table.c.user_id == user_id
        )
        return int(self.session.execute(stmt).scalar_one())

    @_wrap_storage_errors
    def played_at_range(self, user_id: UUID) -> tuple[datetime, datetime] | None:
        stmt = select(
            func.min(play_record_table.c.played_at),
            func.max(play_record_table.c.played_at),
        ).where(play_record_table.c.user_id == user_id)
        earliest, latest = self.session.execute(stmt).one()
        if earliest is None or latest is None:
            return None
        return earliest, latest

    @_wrap_storage_errors
    def list_for_user(self, user_id: UUID) -> Sequence[PlayRecord]:
        stmt = (
            select(PlayRecord)
            .where(play_record_table.c.user_id == user_id)
            .order_by(play_record_table.c.played_at, play_record_table.c.track_id)
        )
        return self.session.execute(stmt).scalars().all()

    @_wrap_storage_errors
    def delete_all(self, user_id: UUID) -> int:
        stmt = delete(play_record_table).where(play_record_table.c.user_id == user_id)
        result = self.session.execute(stmt)
        return cast("Any", result).rowcount

    def _insert_ignoring_conflicts(self) -> Insert:
        dialect = self.session.get_bind().dialect.name
        factory = _CONFLICT_IGNORING_INSERTS.get(dialect)
        if factory is None:
            # Without ON CONFLICT support a concurrent duplicate surfaces as StorageError.
            return generic_insert(play_record_table)
        return factory(play_record_table).on_conflict_do_nothing(index_elements=IDENTITY_COLUMNS)


def _row_for(record: PlayRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "user_id": record.user_id,
        "track_id": record.track_id,
        "played_at": record.played_at,
        "track_name": record.track_name,
        "artist_name": record.artist_name,
        "album_name": record.album_name,
        "ms_played": record.ms_played,
        "source": record.source,
        "reason_start": record.reason_start,
        "reason_end": record.reason_end,
        "skipped": record.skipped,
        "platform": record.platform,
        "shuffle": record.shuffle,
        "offline": record.offline,
        "conn_country": record.conn_country,
    }


if TYPE_CHECKING:
    from streamvault.domain.ports.persistence import PlayRecordRepository

    _session_stub = cast("Session", object())
    _repo_check: PlayRecordRepository = SqlAlchemyPlayRecordRepository(_session_stub)
