"""SQLAlchemy mapping metadata for the StreamVault domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from streamvault.domain.model import ImportSource, PlayRecord

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

IDENTITY_COLUMNS = ("user_id", "track_id", "played_at")

play_record_table = Table(
    "play_record",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("user_id", UUIDColumnType, nullable=False),
    Column("track_id", String, nullable=False),
    Column("played_at", UTCDateTime(), nullable=False),
    Column("track_name", String, nullable=False),
    Column("artist_name", String, nullable=False),
    Column("album_name", String, nullable=True),
    Column("ms_played", BigInteger, nullable=False),
    Column("source", Enum(ImportSource, native_enum=False), nullable=False),
    # passthrough descriptive attributes
    Column("reason_start", String, nullable=True),
    Column("reason_end", String, nullable=True),
    Column("skipped", Boolean, nullable=True),
    Column("platform", String, nullable=True),
    Column("shuffle", Boolean, nullable=True),
    Column("offline", Boolean, nullable=True),
    Column("conn_country", String(8), nullable=True),
    UniqueConstraint(*IDENTITY_COLUMNS, name="uq_play_record_identity"),
    Index("ix_play_record_user_id", "user_id"),
    Index("ix_play_record_played_at", "played_at"),
    Index("ix_play_record_user_track", "user_id", "track_id"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(PlayRecord, play_record_table)

    configure_mappers()
    return mapper_registry
