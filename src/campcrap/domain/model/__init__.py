"""Public domain model surface."""

from __future__ import annotations

from campcrap.domain.model.enums import EntityKind, RemovalStatus
from campcrap.domain.model.roster import (
    INFRASTRUCTURE_NAME,
    INFRASTRUCTURE_NOTES,
    STORAGE_LOCATION_DESCRIPTION,
    STORAGE_LOCATION_NAME,
    Item,
    ItemView,
    Location,
    Person,
    utcnow,
)
from campcrap.domain.model.updates import (
    ItemUpdate,
    LocationUpdate,
    PersonUpdate,
    RosterUpdate,
    apply_update,
)

__all__ = [  # noqa: RUF022
    # constants
    "INFRASTRUCTURE_NAME",
    "INFRASTRUCTURE_NOTES",
    "STORAGE_LOCATION_NAME",
    "STORAGE_LOCATION_DESCRIPTION",
    # enums
    "EntityKind",
    "RemovalStatus",
    # roster
    "Person",
    "Location",
    "Item",
    "ItemView",
    "utcnow",
    # updates
    "PersonUpdate",
    "LocationUpdate",
    "ItemUpdate",
    "RosterUpdate",
    "apply_update",
]
