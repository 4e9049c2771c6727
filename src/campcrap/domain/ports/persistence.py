"""Ports for persisting roster entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from campcrap.domain.model import Item, ItemView, Location, Person

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a year-scoped entity store."""

    def add(self, entity: TEntity) -> None:
        """Persist ``entity`` and assign its id."""
        ...

    def get(self, entity_id: int) -> TEntity | None: ...


@runtime_checkable
class PersonRepository(Repository[Person], Protocol):
    """Persistence contract for people."""

    def list_for_year(
        self, year: str, *, include_infrastructure: bool = True
    ) -> Sequence[Person]: ...

    def find_infrastructure(self, year: str) -> Person | None: ...

    def has_people(self, year: str) -> bool: ...


@runtime_checkable
class LocationRepository(Repository[Location], Protocol):
    """Persistence contract for locations."""

    def list_for_year(self, year: str) -> Sequence[Location]: ...

    def find_by_name(self, year: str, name: str) -> Location | None: ...

    def has_locations(self, year: str) -> bool: ...


@runtime_checkable
class ItemRepository(Repository[Item], Protocol):
    """Persistence contract for items, with owner/location names joined in."""

    def get_view(self, item_id: int) -> ItemView | None: ...

    def list_for_year(self, year: str, *, include_removed: bool = False) -> Sequence[ItemView]: ...

    def find_active_by_tag(self, tag_id: str) -> ItemView | None: ...
