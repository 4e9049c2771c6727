"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, cast

from sqlalchemy import exists, select
from sqlalchemy.exc import SQLAlchemyError

from campcrap.adapters.sqlalchemy.mappings import (
    items_table,
    locations_table,
    people_table,
)
from campcrap.domain.errors import StorageError
from campcrap.domain.model import Item, ItemView, Location, Person, RemovalStatus

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Select
    from sqlalchemy.orm import Session


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as the domain's ``StorageError``."""

    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(f"Storage failure during {operation}: {exc}") from exc


class SqlAlchemyPersonRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Person) -> None:
        with storage_errors("person insert"):
            self.session.add(entity)
            self.session.flush()

    def get(self, entity_id: int) -> Person | None:
        with storage_errors("person lookup"):
            return self.session.get(Person, entity_id)

    def list_for_year(self, year: str, *, include_infrastructure: bool = True) -> list[Person]:
        stmt = (
            select(Person)
            .where(people_table.c.year == year)
            .order_by(people_table.c.name.asc(), people_table.c.id.asc())
        )
        if not include_infrastructure:
            stmt = stmt.where(people_table.c.is_infrastructure.is_(False))
        with storage_errors("person listing"):
            return list(self.session.execute(stmt).scalars())

    def find_infrastructure(self, year: str) -> Person | None:
        stmt = (
            select(Person)
            .where(people_table.c.year == year)
            .where(people_table.c.is_infrastructure.is_(True))
            .order_by(people_table.c.id.asc())
            .limit(1)
        )
        with storage_errors("infrastructure lookup"):
            return self.session.execute(stmt).scalar_one_or_none()

    def has_people(self, year: str) -> bool:
        stmt = select(
            exists()
            .where(people_table.c.year == year)
            .where(people_table.c.is_infrastructure.is_(False))
        )
        with storage_errors("person check"):
            return bool(self.session.execute(stmt).scalar())


class SqlAlchemyLocationRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Location) -> None:
        with storage_errors("location insert"):
            self.session.add(entity)
            self.session.flush()

    def get(self, entity_id: int) -> Location | None:
        with storage_errors("location lookup"):
            return self.session.get(Location, entity_id)

    def list_for_year(self, year: str) -> list[Location]:
        stmt = (
            select(Location)
            .where(locations_table.c.year == year)
            .order_by(locations_table.c.name.asc(), locations_table.c.id.asc())
        )
        with storage_errors("location listing"):
            return list(self.session.execute(stmt).scalars())

    def find_by_name(self, year: str, name: str) -> Location | None:
        stmt = (
            select(Location)
            .where(locations_table.c.year == year)
            .where(locations_table.c.name == name)
            .order_by(locations_table.c.id.asc())
            .limit(1)
        )
        with storage_errors("location lookup"):
            return self.session.execute(stmt).scalar_one_or_none()

    def has_locations(self, year: str) -> bool:
        stmt = select(exists().where(locations_table.c.year == year))
        with storage_errors("location check"):
            return bool(self.session.execute(stmt).scalar())


class SqlAlchemyItemRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Item) -> None:
        with storage_errors("item insert"):
            self.session.add(entity)
            self.session.flush()

    def get(self, entity_id: int) -> Item | None:
        with storage_errors("item lookup"):
            return self.session.get(Item, entity_id)

    def get_view(self, item_id: int) -> ItemView | None:
        stmt = self._view_select().where(items_table.c.id == item_id)
        with storage_errors("item lookup"):
            views = self._views(stmt)
        return views[0] if views else None

    def list_for_year(self, year: str, *, include_removed: bool = False) -> list[ItemView]:
        stmt = self._view_select().where(items_table.c.year == year)
        if not include_removed:
            stmt = stmt.where(items_table.c.removal_status == RemovalStatus.ACTIVE)
        stmt = stmt.order_by(items_table.c.created_at.desc(), items_table.c.id.desc())
        with storage_errors("item listing"):
            return self._views(stmt)

    def find_active_by_tag(self, tag_id: str) -> ItemView | None:
        stmt = (
            self._view_select()
            .where(items_table.c.nfc_tag == tag_id)
            .where(items_table.c.removal_status == RemovalStatus.ACTIVE)
            .order_by(items_table.c.id.asc())
            .limit(1)
        )
        with storage_errors("tag lookup"):
            views = self._views(stmt)
        return views[0] if views else None

    @staticmethod
    def _view_select() -> Select[tuple[Item, str | None, str | None]]:
        # Outer joins keep items whose owner or location row has gone missing.
        return (
            select(
                Item,
                people_table.c.name.label("owner_name"),
                locations_table.c.name.label("location_name"),
            )
            .select_from(items_table)
            .outerjoin(people_table, items_table.c.owner_id == people_table.c.id)
            .outerjoin(locations_table, items_table.c.location_id == locations_table.c.id)
        )

    def _views(self, stmt: Select[tuple[Item, str | None, str | None]]) -> list[ItemView]:
        rows = self.session.execute(stmt).all()
        return [
            ItemView(
                item=cast("Item", item),
                owner_name=owner_name or "",
                location_name=location_name or "",
            )
            for item, owner_name, location_name in rows
        ]


if TYPE_CHECKING:
    from campcrap.domain.ports.persistence import (
        ItemRepository,
        LocationRepository,
        PersonRepository,
    )

    _session_stub = cast("Session", object())
    _person_repo: PersonRepository = SqlAlchemyPersonRepository(_session_stub)
    _location_repo: LocationRepository = SqlAlchemyLocationRepository(_session_stub)
    _item_repo: ItemRepository = SqlAlchemyItemRepository(_session_stub)
