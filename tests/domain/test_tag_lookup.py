from __future__ import annotations

import pytest

from campcrap.domain.errors import ScannerUnavailableError, TagInUseError
from campcrap.domain.model import RemovalStatus
from campcrap.domain.records import RecordStore
from campcrap.domain.tag_lookup import TagFound, TagLookup, TagNotFound, normalize_tag_id
from tests.helpers.devices import FakeTagScanner


@pytest.fixture
def seeded(record_store: RecordStore) -> dict[str, int]:
    owner = record_store.create_person(name="Alice", year="2025")
    shed = record_store.create_location(name="Shed", year="2025")
    kitchen = record_store.create_location(name="Kitchen", year="2025")
    tent = record_store.create_item(
        name="Tent", year="2025", owner_id=owner, location_id=shed, nfc_tag="04A1B2C3"
    )
    stove = record_store.create_item(name="Stove", year="2025", owner_id=owner, location_id=shed)
    return {"owner": owner, "shed": shed, "kitchen": kitchen, "tent": tent, "stove": stove}


@pytest.mark.parametrize("raw", ["04a1b2c3", " 04:A1:B2:C3 ", "04-a1-b2-c3"])
def test_normalize_tag_id(raw: str) -> None:
    assert normalize_tag_id(raw) == "04A1B2C3"


def test_normalize_tag_id_rejects_blank() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        normalize_tag_id(" : ")


def test_lookup_records_sighting(record_store: RecordStore, seeded: dict[str, int]) -> None:
    result = TagLookup(record_store).lookup("04:a1:b2:c3")

    assert isinstance(result, TagFound)
    assert result.view.id == seeded["tent"]
    assert result.view.owner_name == "Alice"
    assert result.view.location_name == "Shed"
    assert result.view.item.last_sighting is not None


def test_lookup_miss_records_nothing(record_store: RecordStore, seeded: dict[str, int]) -> None:
    result = TagLookup(record_store).lookup("DEADBEEF")

    assert result == TagNotFound("DEADBEEF")
    for item_id in (seeded["tent"], seeded["stove"]):
        item = record_store.get_item(item_id)
        assert item is not None
        assert item.last_sighting is None


def test_lookup_ignores_removed_items(record_store: RecordStore, seeded: dict[str, int]) -> None:
    record_store.set_removal_status(seeded["tent"], RemovalStatus.TRASHED)

    assert isinstance(TagLookup(record_store).lookup("04A1B2C3"), TagNotFound)


def test_relocate_moves_item(record_store: RecordStore, seeded: dict[str, int]) -> None:
    assert TagLookup(record_store).relocate(seeded["tent"], seeded["kitchen"])

    view = record_store.get_item_view(seeded["tent"])
    assert view is not None
    assert view.location_name == "Kitchen"


def test_relocate_missing_item_returns_false(
    record_store: RecordStore, seeded: dict[str, int]
) -> None:
    assert not TagLookup(record_store).relocate(999, seeded["kitchen"])


def test_relocate_rejects_location_from_other_year(
    record_store: RecordStore, seeded: dict[str, int]
) -> None:
    old_shed = record_store.create_location(name="Shed", year="2024")

    with pytest.raises(ValueError, match="belongs to 2024"):
        TagLookup(record_store).relocate(seeded["tent"], old_shed)
    with pytest.raises(ValueError, match="Unknown location"):
        TagLookup(record_store).relocate(seeded["tent"], 999)


def test_assign_refuses_tag_held_by_other_active_item(
    record_store: RecordStore, seeded: dict[str, int]
) -> None:
    with pytest.raises(TagInUseError) as excinfo:
        TagLookup(record_store).assign(seeded["stove"], "04a1b2c3")

    assert excinfo.value.item_id == seeded["tent"]
    assert excinfo.value.tag_id == "04A1B2C3"


def test_assign_reuses_tag_of_trashed_item(
    record_store: RecordStore, seeded: dict[str, int]
) -> None:
    lookup = TagLookup(record_store)
    record_store.set_removal_status(seeded["tent"], RemovalStatus.TRASHED)

    assert lookup.assign(seeded["stove"], "04a1b2c3")

    result = lookup.lookup("04A1B2C3")
    assert isinstance(result, TagFound)
    assert result.view.id == seeded["stove"]


def test_assign_same_tag_to_same_item_is_allowed(
    record_store: RecordStore, seeded: dict[str, int]
) -> None:
    assert TagLookup(record_store).assign(seeded["tent"], "04A1B2C3")


def test_watch_looks_up_each_scan(record_store: RecordStore, seeded: dict[str, int]) -> None:
    scanner = FakeTagScanner(tags=["04A1B2C3", "FFFF"])

    results = list(TagLookup(record_store).watch(scanner))

    assert isinstance(results[0], TagFound)
    assert results[0].view.id == seeded["tent"]
    assert results[1] == TagNotFound("FFFF")


@pytest.mark.parametrize(
    "scanner",
    [FakeTagScanner(supported=False), FakeTagScanner(enabled=False)],
)
def test_watch_requires_usable_scanner(record_store: RecordStore, scanner: FakeTagScanner) -> None:
    with pytest.raises(ScannerUnavailableError):
        list(TagLookup(record_store).watch(scanner))
