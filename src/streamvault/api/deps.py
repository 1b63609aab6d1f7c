"""FastAPI dependency providers.

The unit-of-work factory and import settings are resolved per request so
tests can swap them through ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import Header, HTTPException, status

from streamvault.adapters.sqlalchemy.unit_of_work import SqlAlchemyHistoryUnitOfWork
from streamvault.app import ensure_started
from streamvault.config import ImportConfig
from streamvault.config import get_import_config as load_import_config
from streamvault.domain.history_import import UnitOfWorkFactory

USER_ID_HEADER = "X-User-Id"


def get_current_user_id(
    x_user_id: Annotated[str | None, Header(alias=USER_ID_HEADER)] = None,
) -> UUID:
    """Return the authenticated user id supplied by the upstream identity provider."""
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {USER_ID_HEADER} header",
        )
    try:
        return UUID(x_user_id.strip())
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid {USER_ID_HEADER} header",
        ) from exc


def get_unit_of_work_factory() -> UnitOfWorkFactory:
    """Return the SQLAlchemy unit-of-work factory, starting the adapter on first use."""
    ensure_started()
    return SqlAlchemyHistoryUnitOfWork


def get_import_config() -> ImportConfig:
    return load_import_config()
