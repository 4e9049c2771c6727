from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from campcrap.adapters.sqlalchemy import create_all_tables, start_mappers
from campcrap.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyInventoryUnitOfWork,
    shutdown,
    startup,
)
from campcrap.domain.records import RecordStore

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def campcrap_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    data_dir = tmp_path / "data"
    monkeypatch.setenv("CAMPCRAP_DATA_DIR", str(data_dir))
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")
    for name in ("CAMPCRAP_YEAR", "CAMPCRAP_EXPORT_DIR", "CAMPCRAP_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return data_dir


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:")
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyInventoryUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyInventoryUnitOfWork:
        return SqlAlchemyInventoryUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def record_store(
    sqlite_unit_of_work: Callable[[], SqlAlchemyInventoryUnitOfWork],
) -> RecordStore:
    return RecordStore(sqlite_unit_of_work)
