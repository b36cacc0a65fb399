"""Static holiday and special-day tables."""

from .models import (
    Country,
    FamousPersonRecord,
    HistoricalFactRecord,
    MoonPhase,
    MoonPhaseRecord,
    PublicHolidayRecord,
    Region,
    RegionType,
    SchoolHolidayPeriod,
    SchoolHolidayRecord,
    SpecialDayRecord,
)
from .regions import RegionIndex
from .store import DEFAULT_DATA_DIR, CalendarData, get_calendar_data, load_calendar_data

__all__ = [
    "DEFAULT_DATA_DIR",
    "CalendarData",
    "Country",
    "FamousPersonRecord",
    "HistoricalFactRecord",
    "MoonPhase",
    "MoonPhaseRecord",
    "PublicHolidayRecord",
    "Region",
    "RegionIndex",
    "RegionType",
    "SchoolHolidayPeriod",
    "SchoolHolidayRecord",
    "SpecialDayRecord",
    "get_calendar_data",
    "load_calendar_data",
]
