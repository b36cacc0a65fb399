"""iCalendar document generation.

Produces RFC 5545 documents that calendar clients import without complaint:
CRLF line endings, folded lines, DATE values for all-day events with an
exclusive DTEND, and the properties required by the RFC (VERSION, PRODID,
UID, DTSTAMP, DTSTART).
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..events.models import CalendarEvent, EventCategory, RecurrenceRule
from .formatters import (
    CRLF,
    DEFAULT_UID_DOMAIN,
    add_one_day,
    escape_ics_text,
    format_dtstamp,
    format_ics_date,
    generate_uid,
    join_ics_lines,
)

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT_ID = "-//Qalendr//Holiday Calendar//EN"
DEFAULT_CATEGORY_TAG = "OTHER"

CATEGORY_TAGS = {
    EventCategory.SCHOOL_HOLIDAYS: "SCHOOL-HOLIDAYS",
    EventCategory.PUBLIC_HOLIDAYS: "PUBLIC-HOLIDAYS",
    EventCategory.OBSERVANCES: "OBSERVANCES",
    EventCategory.FUN_DAYS: "FUN-DAYS",
    EventCategory.BRIDGE_DAYS: "BRIDGE-DAYS",
    EventCategory.MOON_PHASES: "MOON-PHASES",
    EventCategory.ON_THIS_DAY: "ON-THIS-DAY",
    EventCategory.FAMOUS_BIRTHDAYS: "BIRTHDAYS",
    EventCategory.VACATION: "VACATION",
}

CATEGORY_NAMES = {
    EventCategory.SCHOOL_HOLIDAYS: "School Holidays",
    EventCategory.PUBLIC_HOLIDAYS: "Public Holidays",
    EventCategory.OBSERVANCES: "Observances",
    EventCategory.FUN_DAYS: "Fun Days",
    EventCategory.BRIDGE_DAYS: "Bridge Days",
    EventCategory.MOON_PHASES: "Moon Phases",
    EventCategory.ON_THIS_DAY: "On This Day",
    EventCategory.FAMOUS_BIRTHDAYS: "Famous Birthdays",
    EventCategory.VACATION: "Vacation",
    EventCategory.CUSTOM: "Events",
}


class IcsGeneratorOptions(BaseModel):
    """Document-level options for :func:`generate_ics`."""

    model_config = ConfigDict(frozen=True)

    calendar_name: Optional[str] = Field(default="Holidays", description="X-WR-CALNAME")
    calendar_description: Optional[str] = Field(default=None, description="X-WR-CALDESC")
    product_id: str = Field(default=DEFAULT_PRODUCT_ID, description="PRODID value")
    uid_domain: str = Field(default=DEFAULT_UID_DOMAIN, description="Domain suffix of event UIDs")


def category_to_ics(category) -> str:
    """Map an event category to its CATEGORIES tag, ``OTHER`` when unmapped."""
    try:
        return CATEGORY_TAGS.get(EventCategory(category), DEFAULT_CATEGORY_TAG)
    except ValueError:
        return DEFAULT_CATEGORY_TAG


def build_rrule(rule: RecurrenceRule) -> str:
    """Encode a recurrence rule as an RRULE value.

    Fields are emitted in the order FREQ, INTERVAL, BYMONTH, BYMONTHDAY,
    COUNT, UNTIL. INTERVAL is left out when it is 1, UNTIL is a bare date.
    """
    parts = [f"FREQ={rule.frequency.value}"]
    if rule.interval is not None and rule.interval > 1:
        parts.append(f"INTERVAL={rule.interval}")
    if rule.by_month is not None:
        parts.append(f"BYMONTH={rule.by_month}")
    if rule.by_month_day is not None:
        parts.append(f"BYMONTHDAY={rule.by_month_day}")
    if rule.count is not None:
        parts.append(f"COUNT={rule.count}")
    if rule.until is not None:
        parts.append(f"UNTIL={format_ics_date(rule.until)}")
    return ";".join(parts)


def _event_lines(event: CalendarEvent, dtstamp: str, uid_domain: str) -> list[str]:
    lines = [
        "BEGIN:VEVENT",
        f"UID:{generate_uid(event.id, uid_domain)}",
        f"DTSTAMP:{dtstamp}",
    ]

    if event.all_day:
        lines.append(f"DTSTART;VALUE=DATE:{format_ics_date(event.start_date)}")
        lines.append(f"DTEND;VALUE=DATE:{format_ics_date(add_one_day(event.end_date))}")
    else:
        lines.append(f"DTSTART:{format_ics_date(event.start_date)}T000000")
        lines.append(f"DTEND:{format_ics_date(event.end_date)}T235959")

    lines.append(f"SUMMARY:{escape_ics_text(event.title)}")
    if event.description:
        lines.append(f"DESCRIPTION:{escape_ics_text(event.description)}")
    lines.append(f"CATEGORIES:{category_to_ics(event.category)}")
    lines.append("TRANSP:TRANSPARENT")

    if event.recurrence is not None:
        lines.append(f"RRULE:{build_rrule(event.recurrence)}")

    lines.append("END:VEVENT")
    return lines


def generate_ics(
    events: Iterable[CalendarEvent],
    options: Optional[IcsGeneratorOptions] = None,
    now: Optional[datetime] = None,
) -> str:
    """Render events as a complete iCalendar document.

    Args:
        events: Events in output order
        options: Document options, defaults apply when omitted
        now: Generation time for DTSTAMP (current UTC time if omitted); the
            same stamp is used for every event of the document

    Returns:
        str: Folded, CRLF-joined document with a trailing CRLF
    """
    opts = options or IcsGeneratorOptions()
    dtstamp = format_dtstamp(now)

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{opts.product_id}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    if opts.calendar_name:
        lines.append(f"X-WR-CALNAME:{escape_ics_text(opts.calendar_name)}")
    if opts.calendar_description:
        lines.append(f"X-WR-CALDESC:{escape_ics_text(opts.calendar_description)}")

    count = 0
    for event in events:
        lines.extend(_event_lines(event, dtstamp, opts.uid_domain))
        count += 1

    lines.append("END:VCALENDAR")
    logger.debug("Generated ICS document with %d events", count)
    return join_ics_lines(lines) + CRLF


def generate_calendar_name(
    region_names: Sequence[str],
    categories: Sequence[EventCategory],
    year: Optional[int] = None,
    default: str = "Calendar",
) -> str:
    """Build a display name such as ``"Public Holidays & School Holidays - Bavaria 2025"``.

    Up to three region names are listed; more collapse to ``"N regions"``.
    """
    parts = []

    category_names = [CATEGORY_NAMES.get(c, str(c)) for c in categories]
    if category_names:
        parts.append(" & ".join(category_names))

    if len(region_names) in (1, 2, 3):
        parts.append(", ".join(region_names))
    elif len(region_names) > 3:
        parts.append(f"{len(region_names)} regions")

    name = " - ".join(parts) or default
    return f"{name} {year}" if year else name


def generate_filename(regions: Sequence[str], year: Optional[int] = None) -> str:
    """Build the download file name, e.g. ``de_by_2025.ics``."""
    if len(regions) == 1:
        name = regions[0].lower().replace("-", "_")
    elif regions:
        name = f"calendar_{len(regions)}_regions"
    else:
        name = "calendar"

    if year:
        name += f"_{year}"
    return f"{name}.ics"
