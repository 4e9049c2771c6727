"""Filesystem-backed workbook channels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path
    from typing import BinaryIO


@dataclass(frozen=True, slots=True)
class PathFileChannel:
    path: Path

    @property
    def name(self) -> str:
        return str(self.path)

    def open_read(self) -> BinaryIO:
        return self.path.open("rb")

    def open_write(self) -> BinaryIO:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        return self.path.open("wb")


if TYPE_CHECKING:
    from campcrap.domain.ports.devices import FileChannel

    _channel_check: FileChannel = PathFileChannel(Path("campcrap.xlsx"))
