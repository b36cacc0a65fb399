"""Sanity checks for generated iCalendar documents before they are served."""

import logging
import re

from icalendar import Calendar
from pydantic import BaseModel, Field

from .formatters import MAX_LINE_LENGTH

logger = logging.getLogger(__name__)

_EVENT_RE = re.compile(r"BEGIN:VEVENT.*?END:VEVENT", re.DOTALL)
_UID_RE = re.compile(r"^UID:(.+)$", re.MULTILINE)
_LINE_SPLIT_RE = re.compile(r"\r?\n")


class IcsValidationResult(BaseModel):
    """Outcome of :func:`validate_ics`."""

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    event_count: int = 0
    parse_successful: bool = False

    @property
    def is_valid(self) -> bool:
        """Check if no errors were found and the document parsed."""
        return not self.errors and self.parse_successful

    def add_error(self, error: str) -> None:
        """Add an error message."""
        self.errors.append(error)

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)


def _check_event(result: IcsValidationResult, number: int, block: str) -> None:
    if "UID:" not in block:
        result.add_error(f"Event {number}: Missing UID")
    if "DTSTAMP:" not in block:
        result.add_error(f"Event {number}: Missing DTSTAMP")
    if "DTSTART" not in block:
        result.add_error(f"Event {number}: Missing DTSTART")
    if "SUMMARY:" not in block:
        result.add_warning(f"Event {number}: Missing SUMMARY")

    if "DTSTART;VALUE=DATE:" in block and "DTEND;VALUE=DATE:" not in block:
        result.add_warning(f"Event {number}: All-day event should have DTEND;VALUE=DATE")

    uid = _UID_RE.search(block)
    if uid and "@" not in uid.group(1):
        result.add_warning(f"Event {number}: UID should contain @ for uniqueness")


def validate_ics(content: str) -> IcsValidationResult:
    """Validate an iCalendar document.

    Structural checks mirror what strict clients reject (missing VERSION,
    PRODID, UID, DTSTAMP or DTSTART); style problems such as LF line endings
    or unfolded long lines are reported as warnings. Finally the document is
    parsed with :mod:`icalendar`.

    Args:
        content: Complete document text

    Returns:
        IcsValidationResult: Collected errors and warnings
    """
    result = IcsValidationResult()

    if not content or not content.strip():
        result.add_error("Empty calendar document")
        return result

    if "BEGIN:VCALENDAR" not in content:
        result.add_error("Missing BEGIN:VCALENDAR")
    if "END:VCALENDAR" not in content:
        result.add_error("Missing END:VCALENDAR")
    if "VERSION:2.0" not in content:
        result.add_error("Missing or incorrect VERSION (must be 2.0)")
    if "PRODID:" not in content:
        result.add_error("Missing PRODID")

    blocks = _EVENT_RE.findall(content)
    if not blocks:
        result.add_warning("No events in calendar")
    for number, block in enumerate(blocks, start=1):
        _check_event(result, number, block)
    result.event_count = len(blocks)

    if "\r\n" not in content:
        result.add_warning("Line endings should be CRLF (\\r\\n)")

    for number, line in enumerate(_LINE_SPLIT_RE.split(content), start=1):
        if len(line) > MAX_LINE_LENGTH and not line.startswith(" "):
            result.add_warning(f"Line {number} exceeds {MAX_LINE_LENGTH} characters and is not folded")

    try:
        Calendar.from_ical(content)
        result.parse_successful = True
    except Exception as e:
        logger.debug("ICS parse failed: %s", e)
        result.add_error(f"Calendar could not be parsed: {e}")

    return result
