from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import pytest

from campcrap import app
from campcrap.adapters.sqlalchemy.unit_of_work import is_started, shutdown
from campcrap.config import ConfigurationError
from campcrap.domain.model import INFRASTRUCTURE_NAME, STORAGE_LOCATION_NAME, EntityKind
from campcrap.domain.records import RecordStore
from campcrap.domain.tag_lookup import TagFound, TagNotFound
from tests.helpers.devices import FakePhotoCapture
from tests.helpers.workbooks import camper_cells, item_cells, location_cells, write_sheets

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from campcrap.adapters.sqlalchemy.unit_of_work import SqlAlchemyInventoryUnitOfWork

    UowFactory = Callable[[], SqlAlchemyInventoryUnitOfWork]


def _seed_item(store: RecordStore, year: str = "2025", tag: str | None = None) -> int:
    owner = store.create_person(name="Alice", year=year)
    shed = store.create_location(name="Shed", year=year)
    return store.create_item(name="Tent", year=year, owner_id=owner, location_id=shed, nfc_tag=tag)


def test_prepare_year_defaults_to_configured_year(
    monkeypatch: pytest.MonkeyPatch,
    sqlite_unit_of_work: UowFactory,
    record_store: RecordStore,
) -> None:
    monkeypatch.setenv("CAMPCRAP_YEAR", "2026")

    first = app.prepare_year(unit_of_work_factory=sqlite_unit_of_work)
    second = app.prepare_year("2026", unit_of_work_factory=sqlite_unit_of_work)

    assert first == second
    assert [person.name for person in record_store.list_people("2026")] == [INFRASTRUCTURE_NAME]
    assert [loc.name for loc in record_store.list_locations("2026")] == [STORAGE_LOCATION_NAME]


def test_prepare_year_rejects_bad_year(sqlite_unit_of_work: UowFactory) -> None:
    with pytest.raises(ConfigurationError):
        app.prepare_year("next", unit_of_work_factory=sqlite_unit_of_work)


def test_export_year_writes_timestamped_file(
    sqlite_unit_of_work: UowFactory,
    record_store: RecordStore,
    campcrap_env: Path,
) -> None:
    _seed_item(record_store, year="2024")

    result = app.export_year(
        year="2024",
        unit_of_work_factory=sqlite_unit_of_work,
        now=datetime(2025, 7, 1, 12, 30, 5),  # noqa: DTZ001
    )

    assert result.path.name == "CampCrap_2024_20250701_123005.xlsx"
    assert result.path.parent == campcrap_env.resolve() / "exports"
    assert result.path.exists()
    assert (result.campers, result.locations, result.items) == (1, 1, 1)


def test_export_year_honours_explicit_output(
    sqlite_unit_of_work: UowFactory, tmp_path: Path
) -> None:
    output = tmp_path / "backup.xlsx"

    result = app.export_year(year="2024", output=output, unit_of_work_factory=sqlite_unit_of_work)

    assert result.path == output
    assert output.exists()
    assert (result.campers, result.locations, result.items) == (0, 0, 0)


def test_import_workbook_into_configured_year(
    monkeypatch: pytest.MonkeyPatch,
    sqlite_unit_of_work: UowFactory,
    record_store: RecordStore,
    tmp_path: Path,
) -> None:
    monkeypatch.setenv("CAMPCRAP_YEAR", "2027")
    path = write_sheets(
        tmp_path / "camp.xlsx",
        {
            "Locations_2024": [location_cells("Shed")],
            "Campers_2024": [camper_cells("Alice")],
            "Items_2024": [item_cells("Tent", "Alice", "Shed")],
        },
    )

    result = app.import_workbook(path, unit_of_work_factory=sqlite_unit_of_work)

    assert result.imported[EntityKind.ITEM] == 1
    assert [view.name for view in record_store.list_items("2027")] == ["Tent"]


def test_tag_round_trip(sqlite_unit_of_work: UowFactory, record_store: RecordStore) -> None:
    item_id = _seed_item(record_store)
    kitchen = record_store.create_location(name="Kitchen", year="2025")

    assert app.assign_tag(item_id, "04:aa:bb", unit_of_work_factory=sqlite_unit_of_work)
    assert app.relocate_item(item_id, kitchen, unit_of_work_factory=sqlite_unit_of_work)
    found = app.lookup_tag("04AABB", unit_of_work_factory=sqlite_unit_of_work)
    missing = app.lookup_tag("FFFF", unit_of_work_factory=sqlite_unit_of_work)

    assert isinstance(found, TagFound)
    assert found.view.location_name == "Kitchen"
    assert isinstance(missing, TagNotFound)


def test_attach_item_photo(sqlite_unit_of_work: UowFactory, record_store: RecordStore) -> None:
    item_id = _seed_item(record_store)
    camera = FakePhotoCapture(path="/photos/tent.jpg")

    assert app.attach_item_photo(item_id, camera, unit_of_work_factory=sqlite_unit_of_work)

    item = record_store.get_item(item_id)
    assert item is not None
    assert item.photo_path == "/photos/tent.jpg"


def test_attach_item_photo_cancelled(
    sqlite_unit_of_work: UowFactory, record_store: RecordStore
) -> None:
    item_id = _seed_item(record_store)

    assert not app.attach_item_photo(
        item_id, FakePhotoCapture(path=None), unit_of_work_factory=sqlite_unit_of_work
    )

    item = record_store.get_item(item_id)
    assert item is not None
    assert item.photo_path is None


@pytest.fixture
def stopped_adapter() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


@pytest.mark.usefixtures("stopped_adapter")
def test_build_record_store_starts_adapter_on_demand() -> None:
    assert not is_started()

    store = app.build_record_store()

    assert is_started()
    assert not store.has_locations("2025")
