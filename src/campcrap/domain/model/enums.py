"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class RemovalStatus(StrEnum):
    """Lifecycle tag of an item. Any status may follow any other."""

    ACTIVE = "active"
    TRASHED = "trashed"
    TAKEN_HOME = "taken_home"
    DONATED = "donated"

    @classmethod
    def parse(cls, value: str | None) -> RemovalStatus:
        """Parse a stored or imported status; blank means active."""

        if value is None or not value.strip():
            return cls.ACTIVE
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown removal status: {value!r}") from exc


class EntityKind(StrEnum):
    """The three record kinds exchanged through workbooks."""

    LOCATION = "location"
    CAMPER = "camper"
    ITEM = "item"

    @property
    def label(self) -> str:
        return self.value.capitalize()
