"""Resolve scanned NFC tags to items and act on them."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from campcrap.domain.errors import ScannerUnavailableError, TagInUseError
from campcrap.domain.model import ItemUpdate

if TYPE_CHECKING:
    from collections.abc import Iterator

    from campcrap.domain.model import ItemView
    from campcrap.domain.ports.devices import TagScanner
    from campcrap.domain.records import RecordStore


log = getLogger(__name__)

_TAG_SEPARATORS = str.maketrans("", "", ": -")


def normalize_tag_id(raw: str) -> str:
    """Canonical form of a tag UID: upper-case hex without separators."""

    tag_id = raw.strip().translate(_TAG_SEPARATORS).upper()
    if not tag_id:
        raise ValueError("Tag id must not be empty")
    return tag_id


@dataclass(frozen=True, slots=True)
class TagFound:
    tag_id: str
    view: ItemView


@dataclass(frozen=True, slots=True)
class TagNotFound:
    tag_id: str


type TagLookupResult = TagFound | TagNotFound


class TagLookup:
    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def lookup(self, tag_id: str) -> TagLookupResult:
        """Find the active item carrying ``tag_id`` and record that it was seen.

        A miss returns :class:`TagNotFound` and writes nothing.
        """

        tag = normalize_tag_id(tag_id)
        view = self._store.get_item_by_tag(tag)
        if view is None:
            log.info("No active item carries tag %s", tag)
            return TagNotFound(tag)
        self._store.record_sighting(view.id)
        refreshed = self._store.get_item_view(view.id)
        return TagFound(tag, refreshed or view)

    def relocate(self, item_id: int, location_id: int) -> bool:
        """Move an item to another location of the same year.

        Returns ``False`` when the item does not exist.
        """

        item = self._store.get_item(item_id)
        if item is None:
            return False
        location = self._store.get_location(location_id)
        if location is None:
            raise ValueError(f"Unknown location id {location_id}")
        if location.year != item.year:
            raise ValueError(
                f"Location {location_id} belongs to {location.year}, item {item_id} to {item.year}"
            )
        return self._store.update_item(item_id, ItemUpdate(location_id=location_id))

    def assign(self, item_id: int, tag_id: str) -> bool:
        tag = normalize_tag_id(tag_id)
        holder = self._store.get_item_by_tag(tag)
        if holder is not None and holder.id != item_id:
            raise TagInUseError(tag, holder.id)
        return self._store.update_item(item_id, ItemUpdate(nfc_tag=tag))

    def watch(self, scanner: TagScanner) -> Iterator[TagLookupResult]:
        """Look up every tag the scanner reports, until it stops yielding."""

        if not scanner.is_supported():
            raise ScannerUnavailableError("This device has no tag reader")
        if not scanner.is_enabled():
            raise ScannerUnavailableError("Tag reading is turned off")
        for raw in scanner.scans():
            yield self.lookup(raw)
