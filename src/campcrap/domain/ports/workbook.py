"""Row records exchanged with the spreadsheet codec."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from campcrap.domain.model import EntityKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from campcrap.domain.model import ItemView, Location, Person
    from campcrap.domain.ports.devices import FileChannel


@dataclass(frozen=True, slots=True, kw_only=True)
class SheetRow:
    """Common position data of one parsed data row."""

    sheet: str
    row_number: int
    name: str


@dataclass(frozen=True, slots=True, kw_only=True)
class LocationRow(SheetRow):
    description: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class CamperRow(SheetRow):
    email: str = ""
    real_name: str = ""
    entry_date: str = ""
    exit_date: str = ""
    camp_name: str = ""
    notes: str = ""
    skipping: bool = False
    years_attended: str = ""
    has_ticket: bool = False
    paid_dues: bool = False
    photo_path: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class ItemRow(SheetRow):
    description: str = ""
    camper_name: str = ""
    location_name: str = ""
    photo_path: str = ""
    removal_status: str = ""


@dataclass(frozen=True, slots=True)
class RowFailure:
    """A data row the codec could not turn into a row record."""

    kind: EntityKind
    sheet: str
    row_number: int
    message: str


@dataclass(slots=True)
class ParsedWorkbook:
    locations: list[LocationRow] = field(default_factory=list[LocationRow])
    campers: list[CamperRow] = field(default_factory=list[CamperRow])
    items: list[ItemRow] = field(default_factory=list[ItemRow])
    failures: list[RowFailure] = field(default_factory=list[RowFailure])

    def failures_for(self, kind: EntityKind) -> list[RowFailure]:
        return [failure for failure in self.failures if failure.kind is kind]


@dataclass(frozen=True, slots=True)
class YearSnapshot:
    """Everything exported for one year, live and soft-removed items included."""

    year: str
    people: Sequence[Person]
    locations: Sequence[Location]
    items: Sequence[ItemView]


class WorkbookReader(Protocol):
    """Parse a workbook; raise ``WorkbookError`` if the file is unreadable."""

    def __call__(self, source: FileChannel) -> ParsedWorkbook: ...


class WorkbookWriter(Protocol):
    """Serialize a year snapshot into a workbook."""

    def __call__(self, snapshot: YearSnapshot, destination: FileChannel) -> None: ...
