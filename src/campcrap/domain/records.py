"""Record store: year-scoped people, locations and items.

Each operation opens its own unit of work and commits before returning, so a
caller processing many rows gets per-row durability and nothing more.
Lookups by id return ``None`` when nothing matches; storage failures surface
as :class:`~campcrap.domain.errors.StorageError` from the adapters.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from campcrap.domain.model import (
    INFRASTRUCTURE_NAME,
    INFRASTRUCTURE_NOTES,
    STORAGE_LOCATION_DESCRIPTION,
    STORAGE_LOCATION_NAME,
    Item,
    ItemUpdate,
    Location,
    LocationUpdate,
    Person,
    PersonUpdate,
    apply_update,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from campcrap.domain.model import ItemView, RemovalStatus
    from campcrap.domain.ports.unit_of_work import InventoryUnitOfWork

    UnitOfWorkFactory = Callable[[], InventoryUnitOfWork]


log = getLogger(__name__)


def _persisted_id(entity: Person | Location | Item) -> int:
    if entity.id is None:
        raise RuntimeError(f"{type(entity).__name__} was not assigned an id")
    return entity.id


class RecordStore:
    """Create/read/update access to the roster, one unit of work per call."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow = unit_of_work_factory

    # People ------------------------------------------------------------------

    def create_person(  # noqa: PLR0913
        self,
        *,
        name: str,
        year: str,
        email: str = "",
        real_name: str = "",
        entry_date: str = "",
        exit_date: str = "",
        camp_name: str = "",
        notes: str = "",
        skipping: bool = False,
        is_infrastructure: bool = False,
        years_attended: str = "",
        has_ticket: bool = False,
        paid_dues: bool = False,
        photo_path: str | None = None,
    ) -> int:
        person = Person(
            name=name,
            year=year,
            email=email,
            real_name=real_name,
            entry_date=entry_date,
            exit_date=exit_date,
            camp_name=camp_name,
            notes=notes,
            skipping=skipping,
            is_infrastructure=is_infrastructure,
            years_attended=years_attended,
            has_ticket=has_ticket,
            paid_dues=paid_dues,
            photo_path=photo_path or None,
        )
        with self._uow() as uow:
            uow.repositories.people.add(person)
            uow.commit()
        return _persisted_id(person)

    def list_people(self, year: str, *, include_infrastructure: bool = True) -> list[Person]:
        with self._uow() as uow:
            return list(
                uow.repositories.people.list_for_year(
                    year, include_infrastructure=include_infrastructure
                )
            )

    def get_person(self, person_id: int) -> Person | None:
        with self._uow() as uow:
            return uow.repositories.people.get(person_id)

    def has_people(self, year: str) -> bool:
        """Whether any camper other than the infrastructure row exists for ``year``."""
        with self._uow() as uow:
            return uow.repositories.people.has_people(year)

    def update_person(self, person_id: int, update: PersonUpdate) -> bool:
        with self._uow() as uow:
            person = uow.repositories.people.get(person_id)
            if person is None:
                return False
            apply_update(person, update)
            uow.commit()
        return True

    def set_person_skipping(self, person_id: int, *, skipping: bool) -> bool:
        return self.update_person(person_id, PersonUpdate(skipping=skipping))

    def get_infrastructure_person(self, year: str) -> Person | None:
        with self._uow() as uow:
            return uow.repositories.people.find_infrastructure(year)

    def ensure_infrastructure_person(self, year: str) -> int:
        """Return the infrastructure person's id for ``year``, creating it once."""

        with self._uow() as uow:
            people = uow.repositories.people
            existing = people.find_infrastructure(year)
            if existing is not None:
                return _persisted_id(existing)
            person = Person(
                name=INFRASTRUCTURE_NAME,
                notes=INFRASTRUCTURE_NOTES,
                year=year,
                is_infrastructure=True,
            )
            people.add(person)
            uow.commit()
        log.info("Created infrastructure person for %s", year)
        return _persisted_id(person)

    # Locations ---------------------------------------------------------------

    def create_location(self, *, name: str, year: str, description: str = "") -> int:
        location = Location(name=name, year=year, description=description)
        with self._uow() as uow:
            uow.repositories.locations.add(location)
            uow.commit()
        return _persisted_id(location)

    def list_locations(self, year: str) -> list[Location]:
        with self._uow() as uow:
            return list(uow.repositories.locations.list_for_year(year))

    def get_location(self, location_id: int) -> Location | None:
        with self._uow() as uow:
            return uow.repositories.locations.get(location_id)

    def has_locations(self, year: str) -> bool:
        with self._uow() as uow:
            return uow.repositories.locations.has_locations(year)

    def update_location(self, location_id: int, update: LocationUpdate) -> bool:
        with self._uow() as uow:
            location = uow.repositories.locations.get(location_id)
            if location is None:
                return False
            apply_update(location, update)
            uow.commit()
        return True

    def ensure_default_storage_location(self, year: str) -> int:
        """Return the "Camp Storage" location id for ``year``, creating it once."""

        with self._uow() as uow:
            locations = uow.repositories.locations
            existing = locations.find_by_name(year, STORAGE_LOCATION_NAME)
            if existing is not None:
                return _persisted_id(existing)
            location = Location(
                name=STORAGE_LOCATION_NAME,
                description=STORAGE_LOCATION_DESCRIPTION,
                year=year,
            )
            locations.add(location)
            uow.commit()
        log.info("Created default storage location for %s", year)
        return _persisted_id(location)

    # Items -------------------------------------------------------------------

    def create_item(  # noqa: PLR0913
        self,
        *,
        name: str,
        year: str,
        owner_id: int,
        location_id: int,
        description: str = "",
        photo_path: str | None = None,
        nfc_tag: str | None = None,
    ) -> int:
        item = Item(
            name=name,
            year=year,
            owner_id=owner_id,
            location_id=location_id,
            description=description,
            photo_path=photo_path or None,
            nfc_tag=nfc_tag or None,
        )
        with self._uow() as uow:
            uow.repositories.items.add(item)
            uow.commit()
        return _persisted_id(item)

    def get_item(self, item_id: int) -> Item | None:
        with self._uow() as uow:
            return uow.repositories.items.get(item_id)

    def get_item_view(self, item_id: int) -> ItemView | None:
        with self._uow() as uow:
            return uow.repositories.items.get_view(item_id)

    def get_item_by_tag(self, tag_id: str) -> ItemView | None:
        """Return the active item carrying ``tag_id``; removed items never match."""
        with self._uow() as uow:
            return uow.repositories.items.find_active_by_tag(tag_id)

    def list_items(self, year: str, *, include_removed: bool = False) -> list[ItemView]:
        with self._uow() as uow:
            return list(uow.repositories.items.list_for_year(year, include_removed=include_removed))

    def update_item(self, item_id: int, update: ItemUpdate) -> bool:
        with self._uow() as uow:
            item = uow.repositories.items.get(item_id)
            if item is None:
                return False
            apply_update(item, update)
            uow.commit()
        return True

    def set_removal_status(self, item_id: int, status: RemovalStatus) -> bool:
        return self.update_item(item_id, ItemUpdate(removal_status=status))

    def record_sighting(self, item_id: int, *, at: datetime | None = None) -> bool:
        with self._uow() as uow:
            item = uow.repositories.items.get(item_id)
            if item is None:
                return False
            item.record_sighting(at)
            uow.commit()
        return True
