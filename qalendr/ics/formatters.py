"""Low-level iCalendar (RFC 5545) text formatting.

Wire rules applied here:

- Lines end with CRLF.
- Content lines longer than 75 characters are folded: CRLF followed by a
  single space, continuation segments carry at most 74 characters.
- All-day DTEND values are exclusive, i.e. the day after the last day.
- TEXT values escape backslash, semicolon, comma and newline.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional

MAX_LINE_LENGTH = 75
CRLF = "\r\n"
DEFAULT_UID_DOMAIN = "qalendr.com"

_UNESCAPE_RE = re.compile(r"\\([\\;,nN])")


def format_ics_date(value: date) -> str:
    """Format a date as an ICS DATE value (``YYYYMMDD``)."""
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def format_dtstamp(now: Optional[datetime] = None) -> str:
    """Format a UTC timestamp for DTSTAMP (``YYYYMMDDTHHMMSSZ``).

    Naive datetimes are taken to be UTC already.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y%m%dT%H%M%SZ")


def add_one_day(value: date) -> date:
    return value + timedelta(days=1)


def escape_ics_text(text: str) -> str:
    """Escape a TEXT property value.

    Backslashes go first so the escapes added afterwards are not doubled.
    """
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


def unescape_ics_text(text: str) -> str:
    """Inverse of :func:`escape_ics_text`."""

    def _replace(match: "re.Match[str]") -> str:
        char = match.group(1)
        return "\n" if char in "nN" else char

    return _UNESCAPE_RE.sub(_replace, text)


def fold_line(line: str) -> str:
    """Fold a content line to the 75 character limit.

    Example:
        >>> folded = fold_line("DESCRIPTION:" + "x" * 100)
        >>> [len(part) for part in folded.split("\\r\\n")]
        [75, 38]
    """
    if len(line) <= MAX_LINE_LENGTH:
        return line

    parts = [line[:MAX_LINE_LENGTH]]
    step = MAX_LINE_LENGTH - 1
    for i in range(MAX_LINE_LENGTH, len(line), step):
        parts.append(" " + line[i : i + step])
    return CRLF.join(parts)


def join_ics_lines(lines: Iterable[str]) -> str:
    """Fold every line and join with CRLF (no trailing terminator)."""
    return CRLF.join(fold_line(line) for line in lines)


def generate_uid(event_id: str, domain: str = DEFAULT_UID_DOMAIN) -> str:
    """Build a stable UID from the event id; the same id always yields the same UID."""
    return f"{event_id}@{domain}"
