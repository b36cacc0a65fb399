"""Event, recurrence and selection models."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

MAX_VACATION_NAME_LENGTH = 200
MAX_VACATION_ENTRIES = 100


class EventCategory(str, Enum):
    """Categories a calendar can be assembled from."""

    SCHOOL_HOLIDAYS = "school-holidays"
    PUBLIC_HOLIDAYS = "public-holidays"
    OBSERVANCES = "observances"
    FUN_DAYS = "fun-days"
    BRIDGE_DAYS = "bridge-days"
    MOON_PHASES = "moon-phases"
    ON_THIS_DAY = "on-this-day"
    FAMOUS_BIRTHDAYS = "famous-birthdays"
    VACATION = "vacation"
    CUSTOM = "custom"


# Categories that only make sense for a concrete region or country selection.
REGION_SCOPED_CATEGORIES = frozenset(
    {
        EventCategory.PUBLIC_HOLIDAYS,
        EventCategory.SCHOOL_HOLIDAYS,
        EventCategory.BRIDGE_DAYS,
    }
)


class Frequency(str, Enum):
    """Recurrence frequencies supported by the RRULE passthrough."""

    YEARLY = "YEARLY"
    MONTHLY = "MONTHLY"
    WEEKLY = "WEEKLY"
    DAILY = "DAILY"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class RecurrenceRule(_FrozenModel):
    """Recurrence passthrough; encoded into RRULE, never expanded locally."""

    frequency: Frequency
    interval: Optional[int] = Field(default=None, ge=1)
    by_month: Optional[int] = Field(default=None, ge=1, le=12)
    by_month_day: Optional[int] = Field(default=None, ge=-31, le=31)
    count: Optional[int] = Field(default=None, ge=1)
    until: Optional[date] = None


class CalendarEvent(_FrozenModel):
    """A resolved all-day calendar event.

    ``end_date`` is inclusive. The exclusive DTEND of the wire format is only
    computed by the serializer.
    """

    id: str = Field(..., min_length=1, description="Stable identifier, unique per year and source")
    title: str = Field(..., description="Event title")
    start_date: date = Field(..., description="First day of the event")
    end_date: date = Field(..., description="Last day of the event (inclusive)")
    all_day: bool = Field(default=True, description="All-day event flag")
    category: EventCategory = Field(..., description="Category the event was loaded from")
    region: Optional[str] = Field(default=None, description="Region code when exactly one applies")
    description: Optional[str] = Field(default=None, description="Longer description")
    recurrence: Optional[RecurrenceRule] = Field(default=None, description="Recurrence rule")

    @model_validator(mode="after")
    def check_date_order(self) -> "CalendarEvent":
        if self.start_date > self.end_date:
            raise ValueError(
                f"start_date {self.start_date} is after end_date {self.end_date} for event {self.id}"
            )
        return self

    @property
    def duration_days(self) -> int:
        """Number of days covered, counting both ends."""
        return (self.end_date - self.start_date).days + 1


class VacationEntry(_FrozenModel):
    """A user-supplied vacation period."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=MAX_VACATION_NAME_LENGTH)
    start_date: date
    end_date: date

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @model_validator(mode="after")
    def check_date_order(self) -> "VacationEntry":
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class CalendarSelection(_FrozenModel):
    """What the caller asked for: regions, categories, year and item filters.

    ``None`` for one of the ``selected_*`` lists means "all items", an empty
    tuple means "none".
    """

    region_codes: tuple[str, ...] = ()
    categories: tuple[EventCategory, ...] = ()
    year: int
    country_codes: tuple[str, ...] = ()
    user_vacations: tuple[VacationEntry, ...] = Field(
        default=(), max_length=MAX_VACATION_ENTRIES
    )
    selected_observance_ids: Optional[tuple[str, ...]] = None
    selected_fun_day_ids: Optional[tuple[str, ...]] = None
    selected_famous_person_ids: Optional[tuple[str, ...]] = None

    def wants(self, category: EventCategory) -> bool:
        return category in self.categories
