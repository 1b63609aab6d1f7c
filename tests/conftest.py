from __future__ import annotations

import os
from typing import TYPE_CHECKING
from uuid import UUID

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from streamvault.adapters.sqlalchemy import start_mappers
from streamvault.adapters.sqlalchemy.migrations import upgrade_head
from streamvault.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyHistoryUnitOfWork,
    shutdown,
    startup,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def user_id() -> UUID:
    return UUID("00000000-0000-4000-8000-000000000001")


@pytest.fixture
def other_user_id() -> UUID:
    return UUID("00000000-0000-4000-8000-000000000002")


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    # StaticPool keeps one in-memory database shared across threads (TestClient workers).
    engine = create_engine(
        "sqlite+pysqlite://",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyHistoryUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyHistoryUnitOfWork:
        return SqlAlchemyHistoryUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
