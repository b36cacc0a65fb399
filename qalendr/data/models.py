"""Record models for the static holiday and special-day tables.

All models are frozen and hold tuples instead of lists so a loaded table can
be shared between requests without any code path able to mutate it.
"""

from datetime import date
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..dates.patterns import FixedDatePattern, parse_pattern
from ..exceptions import UnknownPatternError


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


def _check_month_day(value: str) -> str:
    try:
        pattern = parse_pattern(value)
    except UnknownPatternError as e:
        raise ValueError(e.message) from e
    if not isinstance(pattern, FixedDatePattern):
        raise ValueError(f"expected an MM-DD key, got {value!r}")
    return value


class RegionType(str, Enum):
    """Whether a region code denotes a sub-national state or a whole country."""

    STATE = "state"
    COUNTRY = "country"


class MoonPhase(str, Enum):
    """Principal moon phases."""

    NEW_MOON = "new-moon"
    FIRST_QUARTER = "first-quarter"
    FULL_MOON = "full-moon"
    LAST_QUARTER = "last-quarter"


class Country(_Record):
    code: str
    name: str
    flag: str = ""
    has_school_holidays: bool = False
    has_states: bool = False


class Region(_Record):
    code: str
    name: str
    country: str
    type: RegionType


class PublicHolidayRecord(_Record):
    """Public holiday rule; ``regions=None`` means nationwide."""

    id: str
    name: str
    date: str = Field(..., description="Date pattern, e.g. '12-25' or 'easter+1'")
    regions: Optional[tuple[str, ...]] = None
    type: Literal["fixed", "variable"] = "fixed"


class SchoolHolidayPeriod(_Record):
    region: str
    start_date: date
    end_date: date  # inclusive


class SchoolHolidayRecord(_Record):
    id: str
    name: str
    type: Literal["winter", "easter", "pentecost", "summer", "autumn", "christmas"]
    periods: tuple[SchoolHolidayPeriod, ...] = ()


class SpecialDayRecord(_Record):
    """Observance or fun day driven by a date pattern."""

    id: str
    name: str
    date: str
    type: Literal["fixed", "variable"] = "fixed"
    note: Optional[str] = None


class MoonPhaseRecord(_Record):
    date: str = Field(..., description="MM-DD inside the table's year")
    phase: MoonPhase
    time: Optional[str] = Field(default=None, description="UTC time of the exact phase, HH:MM")

    @field_validator("date")
    @classmethod
    def validate_month_day(cls, v: str) -> str:
        return _check_month_day(v)


class HistoricalFactRecord(_Record):
    """An "on this day" fact, keyed by MM-DD."""

    id: str
    date: str
    year: int
    title: str
    description: Optional[str] = None

    @field_validator("date")
    @classmethod
    def validate_month_day(cls, v: str) -> str:
        return _check_month_day(v)


class FamousPersonRecord(_Record):
    id: str
    name: str
    birth_date: date
    death_date: Optional[date] = None
    description: Optional[str] = None
