"""iCalendar serialization for calendar events."""

from .formatters import (
    add_one_day,
    escape_ics_text,
    fold_line,
    format_dtstamp,
    format_ics_date,
    generate_uid,
    join_ics_lines,
    unescape_ics_text,
)
from .generator import (
    CATEGORY_TAGS,
    DEFAULT_PRODUCT_ID,
    IcsGeneratorOptions,
    build_rrule,
    category_to_ics,
    generate_calendar_name,
    generate_filename,
    generate_ics,
)
from .validator import IcsValidationResult, validate_ics

__all__ = [
    "CATEGORY_TAGS",
    "DEFAULT_PRODUCT_ID",
    "IcsGeneratorOptions",
    "IcsValidationResult",
    "add_one_day",
    "build_rrule",
    "category_to_ics",
    "escape_ics_text",
    "fold_line",
    "format_dtstamp",
    "format_ics_date",
    "generate_calendar_name",
    "generate_filename",
    "generate_ics",
    "generate_uid",
    "join_ics_lines",
    "unescape_ics_text",
    "validate_ics",
]
