"""Shared fixtures: small synthetic record tables and isolated settings."""

from datetime import date
from pathlib import Path

import pytest

from qalendr.config.settings import QalendrSettings, reset_settings
from qalendr.data.models import (
    Country,
    FamousPersonRecord,
    HistoricalFactRecord,
    MoonPhaseRecord,
    PublicHolidayRecord,
    Region,
    SchoolHolidayPeriod,
    SchoolHolidayRecord,
    SpecialDayRecord,
)
from qalendr.data.store import CalendarData, get_calendar_data
from qalendr.events.models import CalendarEvent, EventCategory


@pytest.fixture(autouse=True)
def _reset_global_settings():
    """Keep the global settings instance from leaking between tests."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def test_settings(tmp_path: Path) -> QalendrSettings:
    """Settings that ignore any config.yaml on the machine."""
    return QalendrSettings(_config_file=tmp_path / "absent.yaml", config_dir=tmp_path)


@pytest.fixture
def sample_regions() -> list[Region]:
    return [
        Region(code="DE", name="Germany", country="DE", type="country"),
        Region(code="DE-BY", name="Bavaria", country="DE", type="state"),
        Region(code="DE-BE", name="Berlin", country="DE", type="state"),
        Region(code="DE-NW", name="North Rhine-Westphalia", country="DE", type="state"),
        Region(code="AT", name="Austria", country="AT", type="country"),
    ]


@pytest.fixture
def sample_data(sample_regions: list[Region]) -> CalendarData:
    """Three German states plus Austria, enough to exercise every loader."""
    return CalendarData(
        countries=[
            Country(code="DE", name="Germany", has_school_holidays=True, has_states=True),
            Country(code="AT", name="Austria"),
        ],
        regions=sample_regions,
        public_holidays={
            "DE": [
                PublicHolidayRecord(id="new-year", name="New Year's Day", date="01-01"),
                PublicHolidayRecord(
                    id="epiphany", name="Epiphany", date="01-06", regions=("DE-BY",)
                ),
                PublicHolidayRecord(
                    id="ascension", name="Ascension Day", date="easter+39", type="variable"
                ),
                PublicHolidayRecord(
                    id="corpus-christi",
                    name="Corpus Christi",
                    date="easter+60",
                    regions=("DE-BY", "DE-NW"),
                    type="variable",
                ),
                PublicHolidayRecord(id="leap-day", name="Leap Day", date="02-29"),
                PublicHolidayRecord(id="christmas-day", name="Christmas Day", date="12-25"),
                PublicHolidayRecord(id="st-stephens-day", name="St. Stephen's Day", date="12-26"),
            ],
            "AT": [
                PublicHolidayRecord(id="national-day", name="National Day", date="10-26"),
            ],
        },
        school_holidays={
            ("DE", 2025): [
                SchoolHolidayRecord(
                    id="summer",
                    name="Summer holidays",
                    type="summer",
                    periods=(
                        SchoolHolidayPeriod(
                            region="DE-BY",
                            start_date=date(2025, 8, 1),
                            end_date=date(2025, 9, 15),
                        ),
                        SchoolHolidayPeriod(
                            region="DE-BE",
                            start_date=date(2025, 7, 10),
                            end_date=date(2025, 8, 22),
                        ),
                    ),
                ),
            ],
        },
        observances=[
            SpecialDayRecord(id="valentines-day", name="Valentine's Day", date="02-14"),
            SpecialDayRecord(
                id="mothers-day", name="Mother's Day", date="second-sunday-05", type="variable"
            ),
            SpecialDayRecord(
                id="dst-start",
                name="Daylight saving time begins",
                date="dst-spring",
                type="variable",
                note="Clocks go forward one hour.",
            ),
        ],
        fun_days=[
            SpecialDayRecord(id="pi-day", name="Pi Day", date="03-14"),
            SpecialDayRecord(id="no-such-rule", name="Broken", date="no-such-rule"),
        ],
        moon_phases={
            2025: [
                MoonPhaseRecord(date="01-13", phase="full-moon", time="22:27"),
                MoonPhaseRecord(date="01-29", phase="new-moon"),
            ]
        },
        historical_facts=[
            HistoricalFactRecord(
                id="moon-landing",
                date="07-20",
                year=1969,
                title="Apollo 11 lands on the Moon",
                description="First crewed landing.",
            ),
            HistoricalFactRecord(id="future", date="05-01", year=2025, title="Not yet history"),
        ],
        famous_people=[
            FamousPersonRecord(
                id="einstein",
                name="Albert Einstein",
                birth_date=date(1879, 3, 14),
                death_date=date(1955, 4, 18),
                description="Theoretical physicist",
            ),
            FamousPersonRecord(
                id="leap-baby", name="Leap Baby", birth_date=date(2000, 2, 29)
            ),
        ],
    )


@pytest.fixture(scope="session")
def bundled_data() -> CalendarData:
    """The record tables shipped with the package."""
    return get_calendar_data()


def make_event(
    event_id: str,
    start: date,
    end: date = None,
    title: str = "Event",
    category: EventCategory = EventCategory.CUSTOM,
    **kwargs,
) -> CalendarEvent:
    """Build a single-day (or ranged) all-day event for tests."""
    return CalendarEvent(
        id=event_id,
        title=title,
        start_date=start,
        end_date=end or start,
        category=category,
        **kwargs,
    )
