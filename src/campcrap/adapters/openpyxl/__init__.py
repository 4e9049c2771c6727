"""Public interface for the openpyxl workbook adapter."""

from __future__ import annotations

from .channels import PathFileChannel
from .codec import read_workbook, write_workbook
from .layout import CAMPERS, ITEMS, LOCATIONS, SHEET_LAYOUTS, SheetLayout, layout_for_sheet

__all__ = [
    "CAMPERS",
    "ITEMS",
    "LOCATIONS",
    "SHEET_LAYOUTS",
    "PathFileChannel",
    "SheetLayout",
    "layout_for_sheet",
    "read_workbook",
    "write_workbook",
]
