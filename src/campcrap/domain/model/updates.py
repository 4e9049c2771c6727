"""Partial-update DTOs for roster entities.

A field left as ``None`` is not touched. An empty string is a supplied value;
for the optional reference fields (photo path, NFC tag) it clears them.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from campcrap.domain.model.enums import RemovalStatus
    from campcrap.domain.model.roster import Item, Location, Person

_CLEARABLE_FIELDS = frozenset({"photo_path", "nfc_tag"})


@dataclass(slots=True)
class PersonUpdate:
    name: str | None = None
    email: str | None = None
    real_name: str | None = None
    entry_date: str | None = None
    exit_date: str | None = None
    camp_name: str | None = None
    notes: str | None = None
    skipping: bool | None = None
    years_attended: str | None = None
    has_ticket: bool | None = None
    paid_dues: bool | None = None
    photo_path: str | None = None


@dataclass(slots=True)
class LocationUpdate:
    name: str | None = None
    description: str | None = None


@dataclass(slots=True)
class ItemUpdate:
    name: str | None = None
    description: str | None = None
    owner_id: int | None = None
    location_id: int | None = None
    photo_path: str | None = None
    removal_status: RemovalStatus | None = None
    nfc_tag: str | None = None


type RosterUpdate = PersonUpdate | LocationUpdate | ItemUpdate


def apply_update(target: Person | Location | Item, update: RosterUpdate) -> None:
    """Copy every supplied field of ``update`` onto ``target``."""

    for update_field in fields(update):
        value = getattr(update, update_field.name)
        if value is None:
            continue
        if update_field.name == "name" and not str(value).strip():
            raise ValueError("name must not be empty")
        if update_field.name in _CLEARABLE_FIELDS and value == "":
            value = None
        setattr(target, update_field.name, value)
