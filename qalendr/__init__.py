"""qalendr - holiday and special-day calendars as iCalendar files.

The core is a synchronous library: resolve date patterns, derive events for a
selection and serialize them as an ICS document. The aiohttp server and the
CLI in :mod:`qalendr.__main__` are thin layers on top.
"""

__version__ = "1.0.0"

from .dates import DatePatternResolver, resolve
from .events import CalendarEvent, CalendarSelection, EventCategory, EventEngine, load_events
from .exceptions import (
    DataLoadError,
    DateResolutionError,
    InvalidSelectionError,
    MissingDataError,
    QalendrError,
    UnknownPatternError,
)
from .ics import IcsGeneratorOptions, generate_ics

__all__ = [
    "CalendarEvent",
    "CalendarSelection",
    "DataLoadError",
    "DatePatternResolver",
    "DateResolutionError",
    "EventCategory",
    "EventEngine",
    "IcsGeneratorOptions",
    "InvalidSelectionError",
    "MissingDataError",
    "QalendrError",
    "UnknownPatternError",
    "__version__",
    "generate_ics",
    "load_events",
    "resolve",
]
