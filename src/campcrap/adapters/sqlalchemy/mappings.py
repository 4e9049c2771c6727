"""SQLAlchemy mapping metadata for the CampCrap domain model."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    TypeDecorator,
    orm,
)
from sqlalchemy.orm import configure_mappers

from campcrap.domain.model import Item, Location, Person, RemovalStatus

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Ids come from SQLite AUTOINCREMENT so a freed id is never handed out again.

people_table = Table(
    "people",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("email", String, nullable=False, default=""),
    Column("real_name", String, nullable=False, default=""),
    Column("entry_date", String, nullable=False, default=""),
    Column("exit_date", String, nullable=False, default=""),
    Column("camp_name", String, nullable=False, default=""),
    Column("notes", String, nullable=False, default=""),
    Column("year", String(4), nullable=False),
    Column("skipping", Boolean, nullable=False, default=False),
    Column("is_infrastructure", Boolean, nullable=False, default=False),
    Column("years_attended", String, nullable=False, default=""),
    Column("has_ticket", Boolean, nullable=False, default=False),
    Column("paid_dues", Boolean, nullable=False, default=False),
    Column("photo_path", String, nullable=True),
    Index("ix_people_year_name", "year", "name"),
    sqlite_autoincrement=True,
)

locations_table = Table(
    "locations",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("description", String, nullable=False, default=""),
    Column("year", String(4), nullable=False),
    Index("ix_locations_year_name", "year", "name"),
    sqlite_autoincrement=True,
)

items_table = Table(
    "items",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("description", String, nullable=False, default=""),
    Column("owner_id", Integer, ForeignKey("people.id"), nullable=False),
    Column("location_id", Integer, ForeignKey("locations.id"), nullable=False),
    Column("photo_path", String, nullable=True),
    Column("year", String(4), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column(
        "removal_status",
        Enum(RemovalStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=RemovalStatus.ACTIVE,
    ),
    Column("nfc_tag", String, nullable=True),
    Column("last_sighting", UTCDateTime(), nullable=True),
    Index("ix_items_year_created", "year", "created_at"),
    Index("ix_items_nfc_tag", "nfc_tag"),
    sqlite_autoincrement=True,
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Person, people_table)
    mapper_registry.map_imperatively(Location, locations_table)
    mapper_registry.map_imperatively(Item, items_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
