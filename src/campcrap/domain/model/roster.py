"""People, locations and items of one event year."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Final

from campcrap.domain.model.enums import RemovalStatus

INFRASTRUCTURE_NAME: Final[str] = "Camp Infrastructure"
INFRASTRUCTURE_NOTES: Final[str] = "Items that belong to the camp overall"
STORAGE_LOCATION_NAME: Final[str] = "Camp Storage"
STORAGE_LOCATION_DESCRIPTION: Final[str] = "Central storage area for camp items"


def utcnow() -> datetime:
    return datetime.now(UTC)


def _require_name(value: str, kind: str) -> None:
    if not value or not value.strip():
        raise ValueError(f"{kind} name must not be empty")


@dataclass(eq=False, kw_only=True)
class Person:
    """A camper, or the infrastructure pseudo-person owning camp-wide items."""

    id: int | None = None
    name: str
    year: str
    email: str = ""
    real_name: str = ""
    entry_date: str = ""
    exit_date: str = ""
    camp_name: str = ""
    notes: str = ""
    skipping: bool = False
    is_infrastructure: bool = False
    years_attended: str = ""
    has_ticket: bool = False
    paid_dues: bool = False
    photo_path: str | None = None

    def __post_init__(self) -> None:
        _require_name(self.name, "Person")


@dataclass(eq=False, kw_only=True)
class Location:
    id: int | None = None
    name: str
    year: str
    description: str = ""

    def __post_init__(self) -> None:
        _require_name(self.name, "Location")


@dataclass(eq=False, kw_only=True)
class Item:
    """A physical object owned by one person and placed at one location.

    Owner and location are plain ids; the reconciliation layer checks that
    they point at rows of the same year.
    """

    id: int | None = None
    name: str
    year: str
    owner_id: int
    location_id: int
    description: str = ""
    photo_path: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    removal_status: RemovalStatus = RemovalStatus.ACTIVE
    nfc_tag: str | None = None
    last_sighting: datetime | None = None

    def __post_init__(self) -> None:
        _require_name(self.name, "Item")

    @property
    def is_active(self) -> bool:
        return self.removal_status == RemovalStatus.ACTIVE

    def record_sighting(self, at: datetime | None = None) -> None:
        self.last_sighting = at or utcnow()


@dataclass(frozen=True, slots=True)
class ItemView:
    """An item joined with the display names of its owner and location."""

    item: Item
    owner_name: str = ""
    location_name: str = ""

    @property
    def id(self) -> int:
        if self.item.id is None:
            raise ValueError("Item view requires a persisted item")
        return self.item.id

    @property
    def name(self) -> str:
        return self.item.name
