"""Capability ports for device-side collaborators.

The core never talks to a file picker, an NFC radio or a camera directly; the
host application hands in objects satisfying these protocols.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import BinaryIO


@runtime_checkable
class FileChannel(Protocol):
    """A readable source or writable destination for workbook bytes."""

    @property
    def name(self) -> str: ...

    def open_read(self) -> BinaryIO: ...

    def open_write(self) -> BinaryIO: ...


@runtime_checkable
class TagScanner(Protocol):
    """Yields one opaque tag identifier per scan event."""

    def is_supported(self) -> bool: ...

    def is_enabled(self) -> bool: ...

    def scans(self) -> Iterable[str]: ...


@runtime_checkable
class PhotoCapture(Protocol):
    """Captures a photo and returns a path reference, or ``None`` if cancelled."""

    def capture(self) -> str | None: ...
