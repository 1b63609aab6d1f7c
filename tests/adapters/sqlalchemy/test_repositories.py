"""Tests for SQLAlchemy repositories."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import BigInteger, text
from sqlalchemy.orm import Session  # noqa: TC002

from streamvault.adapters.sqlalchemy.mappings import play_record_table
from streamvault.adapters.sqlalchemy.repositories import SqlAlchemyPlayRecordRepository
from streamvault.domain.errors import StorageError
from streamvault.domain.model import IdentityKey, ImportSource, PlayRecord

if TYPE_CHECKING:
    from uuid import UUID

BASE = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def _record(user_id: UUID, *, track_id: str = "abc", minutes: int = 0) -> PlayRecord:
    return PlayRecord(
        user_id=user_id,
        track_id=track_id,
        played_at=BASE + timedelta(minutes=minutes),
        track_name=f"Track {track_id}",
        artist_name="Artist",
        album_name=None,
        ms_played=200_000,
        platform="ios",
        shuffle=True,
    )


def test_add_many_ignores_identity_conflicts(sqlite_session: Session, user_id: UUID) -> None:
    repository = SqlAlchemyPlayRecordRepository(sqlite_session)

    assert repository.add_many([_record(user_id), _record(user_id, minutes=1)]) == 2
    assert repository.add_many([_record(user_id), _record(user_id, minutes=2)]) == 1
    sqlite_session.commit()

    assert len(repository.list_for_user(user_id)) == 3


def test_add_many_chunks_inserts(sqlite_session: Session, user_id: UUID) -> None:
    repository = SqlAlchemyPlayRecordRepository(sqlite_session)
    records = [_record(user_id, minutes=minute) for minute in range(7)]

    assert repository.add_many(records, chunk_size=3) == 7


def test_existing_keys_returns_only_stored_identities(
    sqlite_session: Session, user_id: UUID, other_user_id: UUID
) -> None:
    repository = SqlAlchemyPlayRecordRepository(sqlite_session)
    stored = _record(user_id, track_id="aaa")
    foreign = _record(other_user_id, track_id="bbb")
    repository.add_many([stored, foreign])
    sqlite_session.commit()

    wanted = {
        stored.identity_key,
        IdentityKey(user_id=user_id, track_id="bbb", played_at=BASE),
        IdentityKey(user_id=user_id, track_id="aaa", played_at=BASE + timedelta(seconds=1)),
    }

    assert repository.existing_keys(user_id, wanted) == {stored.identity_key}
    assert repository.existing_keys(user_id, set()) == set()


def test_existing_keys_handles_many_keys(sqlite_session: Session, user_id: UUID) -> None:
    repository = SqlAlchemyPlayRecordRepository(sqlite_session)
    records = [_record(user_id, track_id=f"t{index}", minutes=index) for index in range(900)]
    repository.add_many(records)

    keys = {record.identity_key for record in records}

    assert repository.existing_keys(user_id, keys) == keys


def test_aggregates(sqlite_session: Session, user_id: UUID) -> None:
    repository = SqlAlchemyPlayRecordRepository(sqlite_session)
    assert repository.has_records(user_id) is False
    assert repository.count_distinct_tracks(user_id) == 0
    assert repository.played_at_range(user_id) is None

    repository.add_many(
        [
            _record(user_id, track_id="aaa", minutes=30),
            _record(user_id, track_id="aaa", minutes=0),
            _record(user_id, track_id="bbb", minutes=90),
        ]
    )
    sqlite_session.commit()

    assert repository.has_records(user_id) is True
    assert repository.count_distinct_tracks(user_id) == 2
    assert repository.played_at_range(user_id) == (BASE, BASE + timedelta(minutes=90))


def test_round_trip_preserves_values(sqlite_session: Session, user_id: UUID) -> None:
    repository = SqlAlchemyPlayRecordRepository(sqlite_session)
    original = _record(user_id, track_id="4uLU6hMCjMI75M1A2tKUQC")
    repository.add_many([original])
    sqlite_session.commit()
    sqlite_session.expunge_all()

    (loaded,) = repository.list_for_user(user_id)

    assert loaded.id == original.id
    assert loaded.played_at == original.played_at
    assert loaded.played_at.tzinfo is not None
    assert loaded.source is ImportSource.IMPORT
    assert loaded.platform == "ios"
    assert loaded.shuffle is True
    assert loaded.album_name is None


def test_ms_played_holds_values_beyond_int32(sqlite_session: Session, user_id: UUID) -> None:
    repository = SqlAlchemyPlayRecordRepository(sqlite_session)
    long_play = replace(_record(user_id), ms_played=2**31 + 5)
    repository.add_many([long_play])
    sqlite_session.commit()
    sqlite_session.expunge_all()

    (loaded,) = repository.list_for_user(user_id)

    assert isinstance(play_record_table.c.ms_played.type, BigInteger)
    assert loaded.ms_played == 2**31 + 5


def test_delete_all_is_scoped_to_user(
    sqlite_session: Session, user_id: UUID, other_user_id: UUID
) -> None:
    repository = SqlAlchemyPlayRecordRepository(sqlite_session)
    repository.add_many(
        [_record(user_id), _record(user_id, minutes=1), _record(other_user_id)]
    )
    sqlite_session.commit()

    assert repository.delete_all(user_id) == 2
    sqlite_session.commit()

    assert repository.has_records(user_id) is False
    assert repository.has_records(other_user_id) is True
    assert repository.delete_all(user_id) == 0


def test_database_errors_become_storage_errors(sqlite_session: Session, user_id: UUID) -> None:
    repository = SqlAlchemyPlayRecordRepository(sqlite_session)
    sqlite_session.execute(text("DROP TABLE play_record"))

    with pytest.raises(StorageError):
        repository.has_records(user_id)
