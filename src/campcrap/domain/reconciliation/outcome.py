"""Per-row outcomes and the import result they fold into."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path  # noqa: TC003

from campcrap.domain.model import EntityKind

_KIND_ORDER = (EntityKind.LOCATION, EntityKind.CAMPER, EntityKind.ITEM)


def _zero_counts() -> dict[EntityKind, int]:
    return dict.fromkeys(EntityKind, 0)


class SkipReason(StrEnum):
    BLANK_NAME = "blank_name"
    EXISTING = "existing"


@dataclass(frozen=True, slots=True)
class Inserted:
    kind: EntityKind
    row_number: int
    entity_id: int


@dataclass(frozen=True, slots=True)
class Skipped:
    kind: EntityKind
    row_number: int
    reason: SkipReason


@dataclass(frozen=True, slots=True)
class Errored:
    kind: EntityKind
    sheet: str
    row_number: int
    message: str

    def describe(self) -> str:
        return f"{self.kind.label} row {self.row_number} ({self.sheet}): {self.message}"


type RowOutcome = Inserted | Skipped | Errored


@dataclass(slots=True)
class ImportResult:
    """Counts and errors accumulated over one workbook import.

    ``error`` is set only when the workbook itself could not be read; in that
    case no row was processed.
    """

    imported: dict[EntityKind, int] = field(default_factory=_zero_counts)
    skipped: dict[EntityKind, int] = field(default_factory=_zero_counts)
    errors: list[str] = field(default_factory=list[str])
    error: str | None = None

    @classmethod
    def failed(cls, message: str) -> ImportResult:
        return cls(error=message)

    def record(self, outcome: RowOutcome) -> None:
        match outcome:
            case Inserted(kind=kind):
                self.imported[kind] += 1
            case Skipped(kind=kind, reason=SkipReason.EXISTING):
                self.skipped[kind] += 1
            case Skipped():
                pass
            case Errored():
                self.errors.append(outcome.describe())

    @property
    def total_imported(self) -> int:
        return sum(self.imported.values())

    @property
    def total_skipped(self) -> int:
        return sum(self.skipped.values())

    @property
    def has_errors(self) -> bool:
        return self.error is not None or bool(self.errors)

    def summary(self) -> str:
        if self.error is not None:
            return f"Import failed: {self.error}"
        lines = [
            "Imported: " + _counts_line(self.imported),
            "Skipped: " + _counts_line(self.skipped),
        ]
        if self.errors:
            lines.append(f"Errors ({len(self.errors)}):")
            lines.extend(f"  - {message}" for message in self.errors)
        return "\n".join(lines)


def _counts_line(counts: dict[EntityKind, int]) -> str:
    return ", ".join(f"{counts[kind]} {kind.value}s" for kind in _KIND_ORDER)


@dataclass(frozen=True, slots=True)
class ExportResult:
    path: Path
    campers: int
    locations: int
    items: int

    def summary(self) -> str:
        return (
            f"Exported {self.campers} campers, {self.locations} locations and "
            f"{self.items} items to {self.path}"
        )
