"""Ports for persisting play records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence
    from datetime import datetime
    from uuid import UUID

    from streamvault.domain.model import IdentityKey, PlayRecord


@runtime_checkable
class PlayRecordRepository(Protocol):
    """Persistence contract for play records."""

    def add_many(self, records: Sequence[PlayRecord], *, chunk_size: int = 500) -> int:
        """Insert ``records`` and return how many rows were actually created.

        Rows whose identity key already exists are ignored rather than raising.
        """
        ...

    def existing_keys(self, user_id: UUID, keys: Collection[IdentityKey]) -> set[IdentityKey]:
        """Return the subset of ``keys`` already stored for ``user_id``."""
        ...

    def has_records(self, user_id: UUID) -> bool: ...

    def count_distinct_tracks(self, user_id: UUID) -> int: ...

    def played_at_range(self, user_id: UUID) -> tuple[datetime, datetime] | None: ...

    def list_for_user(self, user_id: UUID) -> Sequence[PlayRecord]: ...

    def delete_all(self, user_id: UUID) -> int: ...
