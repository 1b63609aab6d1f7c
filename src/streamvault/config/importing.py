"""History import defaults."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .env import int_env_var, uuid_env_var

if TYPE_CHECKING:
    from uuid import UUID

DEFAULT_MIN_MS_PLAYED = 30_000
DEFAULT_INSERT_CHUNK_SIZE = 500


@dataclass(frozen=True, slots=True)
class ImportConfig:
    min_ms_played: int = DEFAULT_MIN_MS_PLAYED
    insert_chunk_size: int = DEFAULT_INSERT_CHUNK_SIZE
    default_user_id: UUID | None = None


def get_import_config() -> ImportConfig:
    return ImportConfig(
        min_ms_played=int_env_var("STREAMVAULT_MIN_MS_PLAYED", DEFAULT_MIN_MS_PLAYED),
        insert_chunk_size=int_env_var(
            "STREAMVAULT_INSERT_CHUNK_SIZE", DEFAULT_INSERT_CHUNK_SIZE, minimum=1
        ),
        default_user_id=uuid_env_var("STREAMVAULT_USER_ID"),
    )
