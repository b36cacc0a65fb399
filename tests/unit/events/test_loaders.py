"""Tests for the per-category event loaders."""

from datetime import date

import pytest

from qalendr.data.store import CalendarData
from qalendr.events.loaders import (
    load_famous_birthdays,
    load_historical_facts,
    load_moon_phases,
    load_public_holidays,
    load_school_holidays,
    load_special_days,
    vacations_to_events,
)
from qalendr.events.models import EventCategory, VacationEntry
from qalendr.utils.logging import VERBOSE

pytestmark = pytest.mark.unit


class TestLoadPublicHolidays:
    """Test public holiday loading and region filtering."""

    def test_load_when_single_state_then_nationwide_and_matching_regional(
        self, sample_data: CalendarData
    ) -> None:
        events = load_public_holidays(sample_data, ["DE-BY"], 2025, "DE")

        assert [e.id for e in events] == [
            "de-new-year-2025",
            "de-epiphany-2025",
            "de-ascension-2025",
            "de-corpus-christi-2025",
            "de-christmas-day-2025",
            "de-st-stephens-day-2025",
        ]
        assert all(e.category is EventCategory.PUBLIC_HOLIDAYS for e in events)
        assert all(e.start_date == e.end_date for e in events)

    def test_load_when_verbose_enabled_then_each_resolution_logged(
        self, sample_data: CalendarData, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(VERBOSE, logger="qalendr"):
            load_public_holidays(sample_data, ["DE-BY"], 2025, "DE")

        resolved = [r.getMessage() for r in caplog.records if r.levelno == VERBOSE]
        assert "Resolved holiday ascension (easter+39) to 2025-05-29" in resolved
        assert len(resolved) == 6

    def test_load_when_regional_holiday_then_suffix_lists_applicable_regions(
        self, sample_data: CalendarData
    ) -> None:
        events = {e.id: e for e in load_public_holidays(sample_data, ["DE-BY"], 2025, "DE")}

        assert events["de-epiphany-2025"].title == "Epiphany (DE-BY)"
        assert events["de-corpus-christi-2025"].title == "Corpus Christi (DE-BY)"
        assert events["de-new-year-2025"].title == "New Year's Day"

    def test_load_when_several_states_apply_then_declared_order_and_no_region(
        self, sample_data: CalendarData
    ) -> None:
        events = {
            e.id: e
            for e in load_public_holidays(sample_data, ["DE-NW", "DE-BE", "DE-BY"], 2025, "DE")
        }

        corpus = events["de-corpus-christi-2025"]
        assert corpus.title == "Corpus Christi (DE-BY, DE-NW)"
        assert corpus.region is None
        assert events["de-new-year-2025"].region is None

    def test_load_when_one_region_applies_then_region_set(self, sample_data: CalendarData) -> None:
        events = load_public_holidays(sample_data, ["DE-BY"], 2025, "DE")

        assert {e.region for e in events} == {"DE-BY"}

    def test_load_when_region_not_listed_then_regional_holiday_excluded(
        self, sample_data: CalendarData
    ) -> None:
        events = load_public_holidays(sample_data, ["DE-BE"], 2025, "DE")

        assert [e.id for e in events] == [
            "de-new-year-2025",
            "de-ascension-2025",
            "de-christmas-day-2025",
            "de-st-stephens-day-2025",
        ]

    def test_load_when_date_missing_in_year_then_record_skipped(
        self, sample_data: CalendarData, caplog: pytest.LogCaptureFixture
    ) -> None:
        events = load_public_holidays(sample_data, ["DE-BE"], 2025, "DE")

        assert "de-leap-day-2025" not in {e.id for e in events}
        assert "leap-day" in caplog.text

    def test_load_when_leap_year_then_feb_29_included(self, sample_data: CalendarData) -> None:
        events = {e.id: e for e in load_public_holidays(sample_data, ["DE-BE"], 2024, "DE")}

        assert events["de-leap-day-2024"].start_date == date(2024, 2, 29)

    def test_load_when_country_without_states_then_country_code_region(
        self, sample_data: CalendarData
    ) -> None:
        events = load_public_holidays(sample_data, ["AT"], 2025, "AT")

        assert len(events) == 1
        assert events[0].id == "at-national-day-2025"
        assert events[0].region == "AT"
        assert events[0].start_date == date(2025, 10, 26)

    def test_load_when_no_table_then_empty(self, sample_data: CalendarData) -> None:
        assert load_public_holidays(sample_data, ["FR"], 2025, "FR") == []

    def test_load_when_called_twice_then_tables_unchanged(self, sample_data: CalendarData) -> None:
        before = sample_data.public_holidays("DE")
        first = load_public_holidays(sample_data, ["DE-BY"], 2025, "DE")
        second = load_public_holidays(sample_data, ["DE-BY"], 2025, "DE")

        assert first == second
        assert sample_data.public_holidays("DE") == before


class TestLoadSchoolHolidays:
    """Test school holiday loading."""

    def test_load_when_region_selected_then_period_event(self, sample_data: CalendarData) -> None:
        events = load_school_holidays(sample_data, ["DE-BY"], 2025, "DE")

        assert len(events) == 1
        event = events[0]
        assert event.id == "de-by-summer-2025"
        assert event.title == "Summer holidays Bavaria"
        assert event.start_date == date(2025, 8, 1)
        assert event.end_date == date(2025, 9, 15)
        assert event.region == "DE-BY"
        assert event.category is EventCategory.SCHOOL_HOLIDAYS

    def test_load_when_region_without_period_then_nothing(self, sample_data: CalendarData) -> None:
        assert load_school_holidays(sample_data, ["DE-NW"], 2025, "DE") == []

    def test_load_when_year_missing_then_empty(self, sample_data: CalendarData) -> None:
        assert load_school_holidays(sample_data, ["DE-BY"], 2026, "DE") == []


class TestLoadSpecialDays:
    """Test observances and fun days."""

    def test_load_when_no_filter_then_all_resolved(self, sample_data: CalendarData) -> None:
        events = load_special_days(
            sample_data.observances, EventCategory.OBSERVANCES, "observance", 2025
        )

        assert [(e.id, e.start_date) for e in events] == [
            ("observance-valentines-day-2025", date(2025, 2, 14)),
            ("observance-mothers-day-2025", date(2025, 5, 11)),
            ("observance-dst-start-2025", date(2025, 3, 30)),
        ]
        assert events[2].description == "Clocks go forward one hour."
        assert events[0].description is None

    def test_load_when_ids_selected_then_only_those(self, sample_data: CalendarData) -> None:
        events = load_special_days(
            sample_data.observances,
            EventCategory.OBSERVANCES,
            "observance",
            2025,
            selected_ids=["mothers-day"],
        )

        assert [e.id for e in events] == ["observance-mothers-day-2025"]

    def test_load_when_empty_selection_then_none(self, sample_data: CalendarData) -> None:
        events = load_special_days(
            sample_data.observances, EventCategory.OBSERVANCES, "observance", 2025, selected_ids=[]
        )

        assert events == []

    def test_load_when_rule_unknown_then_record_skipped(self, sample_data: CalendarData) -> None:
        events = load_special_days(sample_data.fun_days, EventCategory.FUN_DAYS, "funday", 2025)

        assert [e.id for e in events] == ["funday-pi-day-2025"]
        assert events[0].category is EventCategory.FUN_DAYS


class TestLoadMoonPhases:
    """Test moon phase loading."""

    def test_load_when_year_present_then_titled_events(self, sample_data: CalendarData) -> None:
        events = load_moon_phases(sample_data, 2025)

        assert [e.id for e in events] == ["moon-full-moon-2025-0113", "moon-new-moon-2025-0129"]
        assert events[0].title == "🌕 Full moon"
        assert events[0].description == "Exact phase at 22:27 UTC"
        assert events[1].description is None

    def test_load_when_year_absent_then_empty(self, sample_data: CalendarData) -> None:
        assert load_moon_phases(sample_data, 2026) == []


class TestLoadHistoricalFacts:
    """Test "on this day" facts."""

    def test_load_when_fact_in_past_then_years_ago_title(self, sample_data: CalendarData) -> None:
        events = load_historical_facts(sample_data, 2025)

        assert len(events) == 1
        event = events[0]
        assert event.id == "onthisday-moon-landing-2025"
        assert event.title == "Apollo 11 lands on the Moon (56 years ago)"
        assert event.start_date == date(2025, 7, 20)
        assert event.description == "First crewed landing."

    def test_load_when_fact_not_yet_past_then_skipped(self, sample_data: CalendarData) -> None:
        ids = {e.id for e in load_historical_facts(sample_data, 2025)}

        assert "onthisday-future-2025" not in ids
        assert "onthisday-future-2026" in {e.id for e in load_historical_facts(sample_data, 2026)}


class TestLoadFamousBirthdays:
    """Test birth and death anniversaries."""

    def test_load_when_person_died_then_birth_and_death_events(self, sample_data: CalendarData) -> None:
        events = {e.id: e for e in load_famous_birthdays(sample_data, 2025)}

        birthday = events["birthday-einstein-2025"]
        assert birthday.title == "Albert Einstein born 146 years ago"
        assert birthday.start_date == date(2025, 3, 14)
        assert birthday.description == "Theoretical physicist (1879-1955)"

        deathday = events["deathday-einstein-2025"]
        assert deathday.title == "Albert Einstein died 70 years ago"
        assert deathday.start_date == date(2025, 4, 18)

    def test_load_when_born_feb_29_then_feb_28_in_common_year(self, sample_data: CalendarData) -> None:
        events = {e.id: e for e in load_famous_birthdays(sample_data, 2025)}

        leap = events["birthday-leap-baby-2025"]
        assert leap.start_date == date(2025, 2, 28)
        assert leap.description == "born 2000"
        assert "deathday-leap-baby-2025" not in events

    def test_load_when_ids_selected_then_only_those(self, sample_data: CalendarData) -> None:
        events = load_famous_birthdays(sample_data, 2025, selected_ids=["einstein"])

        assert [e.id for e in events] == ["birthday-einstein-2025", "deathday-einstein-2025"]

    def test_load_when_anniversary_not_reached_then_skipped(self, sample_data: CalendarData) -> None:
        events = load_famous_birthdays(sample_data, 1900)

        assert [e.id for e in events] == ["birthday-einstein-1900"]


class TestVacationsToEvents:
    """Test user vacation conversion."""

    def test_convert_when_vacations_then_only_those_starting_in_year(self) -> None:
        vacations = [
            VacationEntry(
                id="summer", name=" Summer trip ", start_date=date(2025, 8, 1), end_date=date(2025, 8, 14)
            ),
            VacationEntry(
                id="ski", name="Ski week", start_date=date(2024, 12, 28), end_date=date(2025, 1, 3)
            ),
        ]

        events = vacations_to_events(vacations, 2025)

        assert len(events) == 1
        assert events[0].id == "vacation-summer"
        assert events[0].title == "Summer trip"
        assert events[0].end_date == date(2025, 8, 14)
        assert events[0].category is EventCategory.VACATION
