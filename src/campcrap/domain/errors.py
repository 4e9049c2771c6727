"""Domain-level error types."""

from __future__ import annotations


class StorageError(RuntimeError):
    """Raised when the record store cannot read or write its backing storage."""


class WorkbookError(RuntimeError):
    """Raised when a workbook cannot be opened or parsed at all."""


class TagInUseError(ValueError):
    """Raised when a tag is already attached to another active item."""

    def __init__(self, tag_id: str, item_id: int) -> None:
        super().__init__(f"Tag {tag_id!r} is already attached to active item {item_id}")
        self.tag_id = tag_id
        self.item_id = item_id


class ScannerUnavailableError(RuntimeError):
    """Raised when tag scanning is requested on a device that cannot scan."""
