# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from campcrap.app import (
    assign_tag,
    export_year,
    import_workbook,
    lookup_tag,
    prepare_year,
    relocate_item,
)
from campcrap.config import ConfigurationError, configure_logging, validate_year
from campcrap.domain.tag_lookup import TagFound, normalize_tag_id

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage the CampCrap inventory")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level name (defaults to CAMPCRAP_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    export = subparsers.add_parser("export", help="Export one year to a workbook")
    export.add_argument("--year", type=str, help="Event year (defaults to CAMPCRAP_YEAR)")
    export.add_argument(
        "--output",
        type=Path,
        help="Target .xlsx file (defaults to a time-stamped file in the export directory)",
    )

    import_ = subparsers.add_parser("import", help="Import a workbook into one year")
    import_.add_argument("path", type=Path, help="Workbook to import")
    import_.add_argument("--year", type=str, help="Target year (defaults to CAMPCRAP_YEAR)")
    import_.add_argument(
        "--no-skip-existing",
        dest="skip_existing",
        action="store_false",
        help="Insert rows even when a matching record already exists",
    )

    setup = subparsers.add_parser(
        "setup",
        help="Create the infrastructure person and the default storage location",
    )
    setup.add_argument("--year", type=str, help="Event year (defaults to CAMPCRAP_YEAR)")

    tag = subparsers.add_parser("tag", help="NFC tag commands")
    tag_sub = tag.add_subparsers(dest="tag_command", required=True)
    tag_lookup = tag_sub.add_parser("lookup", help="Find the item carrying a tag")
    tag_lookup.add_argument("tag_id", type=str)
    tag_assign = tag_sub.add_parser("assign", help="Attach a tag to an item")
    tag_assign.add_argument("item_id", type=int)
    tag_assign.add_argument("tag_id", type=str)
    tag_relocate = tag_sub.add_parser("relocate", help="Move an item to another location")
    tag_relocate.add_argument("item_id", type=int)
    tag_relocate.add_argument("location_id", type=int)

    return parser.parse_args(list(argv))


def _validate(args: argparse.Namespace) -> None:
    year = getattr(args, "year", None)
    if year is not None:
        args.year = validate_year(year)
    tag_id = getattr(args, "tag_id", None)
    if tag_id is not None:
        args.tag_id = normalize_tag_id(tag_id)


def _run(args: argparse.Namespace) -> int:
    if args.command == "export":
        result = export_year(year=args.year, output=args.output)
        print(result.summary())
        return 0
    if args.command == "import":
        result = import_workbook(args.path, year=args.year, skip_existing=args.skip_existing)
        print(result.summary())
        return 1 if result.error is not None else 0
    if args.command == "setup":
        infrastructure_id, storage_id = prepare_year(args.year)
        print(f"Infrastructure person: {infrastructure_id}, storage location: {storage_id}")
        return 0
    if args.command == "tag":
        return _run_tag(args)
    raise ValueError(f"Unsupported command: {args.command}")


def _run_tag(args: argparse.Namespace) -> int:
    if args.tag_command == "lookup":
        found = lookup_tag(args.tag_id)
        if isinstance(found, TagFound):
            view = found.view
            print(f"{view.name} (#{view.id}) owned by {view.owner_name} at {view.location_name}")
        else:
            print(f"No active item carries tag {found.tag_id}")
        return 0
    if args.tag_command == "assign":
        if not assign_tag(args.item_id, args.tag_id):
            print(f"Item {args.item_id} not found", file=sys.stderr)
            return 1
        print(f"Tag {args.tag_id} attached to item {args.item_id}")
        return 0
    if args.tag_command == "relocate":
        if not relocate_item(args.item_id, args.location_id):
            print(f"Item {args.item_id} not found", file=sys.stderr)
            return 1
        print(f"Item {args.item_id} moved to location {args.location_id}")
        return 0
    raise ValueError(f"Unsupported tag command: {args.tag_command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=parsed_args.log_level)
        _validate(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        status = _run(parsed_args)
    except Exception:
        log.exception("Command %s failed", parsed_args.command)
        sys.exit(1)
    if status:
        sys.exit(status)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
