"""Command-line entry for qalendr.

Generate a calendar file or run the web server::

    python -m qalendr generate --region DE-BY --category public-holidays --year 2025
    python -m qalendr serve --port 8080
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from . import __version__
from .config.settings import QalendrSettings, get_settings
from .data.store import get_calendar_data
from .events.engine import EventEngine
from .events.models import CalendarSelection
from .exceptions import QalendrError
from .render import render_calendar
from .utils.logging import setup_logging
from .web.query import parse_categories

logger = logging.getLogger(__name__)


def _comma_list(values: Optional[list[str]]) -> list[str]:
    """Flatten repeated and comma-separated option values."""
    items: list[str] = []
    for value in values or []:
        items.extend(part.strip() for part in value.split(",") if part.strip())
    return items


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the qalendr CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="qalendr",
        description="Qalendr - holiday and special-day calendars as ICS files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m qalendr generate --region DE-BY --category public-holidays --year 2025
  python -m qalendr generate --country AT --category public-holidays,bridge-days -o at.ics
  python -m qalendr serve --port 3000
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level (default: from settings)",
    )
    parser.add_argument(
        "--data-dir", type=Path, metavar="DIR", help="Directory with the record tables"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Write an ICS file for a selection")
    generate.add_argument(
        "--region", "-r", action="append", metavar="CODE", help="Region code(s), e.g. DE-BY"
    )
    generate.add_argument(
        "--country", action="append", metavar="CODE", help="Country code(s), e.g. DE"
    )
    generate.add_argument(
        "--category",
        "-c",
        action="append",
        metavar="NAME",
        help="Categories, e.g. public-holidays,school-holidays",
    )
    generate.add_argument(
        "--year", "-y", type=int, default=date.today().year, help="Calendar year (default: current)"
    )
    generate.add_argument("--observance", action="append", metavar="ID", help="Only these observances")
    generate.add_argument("--fun-day", action="append", metavar="ID", help="Only these fun days")
    generate.add_argument("--person", action="append", metavar="ID", help="Only these people")
    generate.add_argument(
        "--output", "-o", type=Path, metavar="FILE", help="Output file (default: stdout)"
    )

    serve = subparsers.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", help="Bind address (default: from settings)")
    serve.add_argument("--port", type=int, metavar="PORT", help="Port (default: from settings)")

    return parser


def _optional_ids(values: Optional[list[str]]) -> Optional[tuple[str, ...]]:
    return tuple(_comma_list(values)) if values else None


def _build_selection(args: argparse.Namespace) -> CalendarSelection:
    return CalendarSelection(
        region_codes=tuple(_comma_list(args.region)),
        country_codes=tuple(_comma_list(args.country)),
        categories=tuple(parse_categories(_comma_list(args.category))),
        year=args.year,
        selected_observance_ids=_optional_ids(args.observance),
        selected_fun_day_ids=_optional_ids(args.fun_day),
        selected_famous_person_ids=_optional_ids(args.person),
    )


def _run_generate(args: argparse.Namespace, settings: QalendrSettings) -> int:
    engine = EventEngine(get_calendar_data(settings.data_dir))
    try:
        rendered = render_calendar(engine, settings, _build_selection(args))
    except QalendrError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if rendered is None:
        print("Error: no events found for the selected configuration", file=sys.stderr)
        return 1

    document, filename = rendered
    if args.output:
        # newline="" keeps the CRLF line endings intact
        with args.output.open("w", encoding="utf-8", newline="") as f:
            f.write(document)
        logger.info("Wrote %s (suggested name %s)", args.output, filename)
    else:
        sys.stdout.buffer.write(document.encode("utf-8"))
        sys.stdout.flush()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Run the qalendr CLI.

    Args:
        argv: Arguments without the program name (``sys.argv[1:]`` if omitted)

    Returns:
        Process exit code
    """
    parser = _create_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
        if args.data_dir is not None:
            settings.data_dir = args.data_dir
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(settings, level=args.log_level)

    if args.command == "serve":
        from .web.server import run_server  # noqa: PLC0415

        run_server(settings, host=args.host, port=args.port)
        return 0

    try:
        return _run_generate(args, settings)
    except QalendrError as e:
        # Data tables that fail to load
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
