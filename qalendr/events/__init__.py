"""Event derivation: category loaders, bridge days and aggregation."""

from .bridge_days import derive_bridge_days, strip_region_suffix
from .engine import EventEngine, load_events
from .loaders import (
    load_famous_birthdays,
    load_historical_facts,
    load_moon_phases,
    load_public_holidays,
    load_school_holidays,
    load_special_days,
    vacations_to_events,
)
from .models import (
    REGION_SCOPED_CATEGORIES,
    CalendarEvent,
    CalendarSelection,
    EventCategory,
    Frequency,
    RecurrenceRule,
    VacationEntry,
)

__all__ = [
    "REGION_SCOPED_CATEGORIES",
    "CalendarEvent",
    "CalendarSelection",
    "EventCategory",
    "EventEngine",
    "Frequency",
    "RecurrenceRule",
    "VacationEntry",
    "derive_bridge_days",
    "load_events",
    "load_famous_birthdays",
    "load_historical_facts",
    "load_moon_phases",
    "load_public_holidays",
    "load_school_holidays",
    "load_special_days",
    "strip_region_suffix",
    "vacations_to_events",
]
