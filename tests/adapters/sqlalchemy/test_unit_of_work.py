from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from campcrap.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyInventoryUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from campcrap.domain.model import Location

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    assert not is_started()
    with pytest.raises(StartupError):
        SqlAlchemyInventoryUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:")
    engine_b = create_engine("sqlite+pysqlite:///:memory:")

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_startup_uses_configured_database_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    startup()

    engine = configured_engine()
    assert engine is not None
    assert engine.url.drivername == "sqlite+pysqlite"
    assert engine.url.database == ":memory:"


def test_unit_of_work_commits(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemyInventoryUnitOfWork() as uow:
        location = Location(name="Shed", year="2025")
        uow.repositories.locations.add(location)
        uow.commit()

    with SqlAlchemyInventoryUnitOfWork() as uow:
        assert [loc.name for loc in uow.repositories.locations.list_for_year("2025")] == ["Shed"]


def test_unit_of_work_rolls_back_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError, match="boom"), SqlAlchemyInventoryUnitOfWork() as uow:
        uow.repositories.locations.add(Location(name="Shed", year="2025"))
        raise RuntimeError("boom")

    with SqlAlchemyInventoryUnitOfWork() as uow:
        assert not uow.repositories.locations.has_locations("2025")


def test_repositories_require_an_open_session(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyInventoryUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories
