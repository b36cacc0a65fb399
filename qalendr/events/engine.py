"""Assemble the events of a calendar selection."""

from __future__ import annotations

import logging
from datetime import MAXYEAR, MINYEAR
from typing import Optional

from ..data.store import CalendarData, get_calendar_data
from ..dates.resolver import DatePatternResolver
from ..exceptions import InvalidSelectionError
from .bridge_days import derive_bridge_days
from .loaders import (
    load_famous_birthdays,
    load_historical_facts,
    load_moon_phases,
    load_public_holidays,
    load_school_holidays,
    load_special_days,
    vacations_to_events,
)
from .models import REGION_SCOPED_CATEGORIES, CalendarEvent, CalendarSelection, EventCategory

logger = logging.getLogger(__name__)


class EventEngine:
    """Turns a :class:`CalendarSelection` into a sorted list of events.

    The engine only reads the record tables it was built with, so a single
    instance can serve concurrent requests.
    """

    def __init__(self, data: CalendarData, resolver: Optional[DatePatternResolver] = None):
        """Initialize engine.

        Args:
            data: Immutable record tables
            resolver: Date pattern resolver; defaults to the built-in named rules
        """
        self.data = data
        self.resolver = resolver or DatePatternResolver()

    def validate_selection(self, selection: CalendarSelection) -> None:
        """Reject selections that cannot produce a calendar.

        Raises:
            InvalidSelectionError: If no category is requested, if region-scoped
                categories are requested without any region or country, or if
                the year is out of range
        """
        if not selection.categories:
            raise InvalidSelectionError("Select at least one category")

        scoped = REGION_SCOPED_CATEGORIES.intersection(selection.categories)
        if scoped and not selection.region_codes and not selection.country_codes:
            names = ", ".join(sorted(c.value for c in scoped))
            raise InvalidSelectionError(f"Select at least one region or country for: {names}")

        if not MINYEAR <= selection.year <= MAXYEAR:
            raise InvalidSelectionError(
                f"Year {selection.year} is outside {MINYEAR}..{MAXYEAR}"
            )

    def load_events(self, selection: CalendarSelection) -> list[CalendarEvent]:
        """Load every requested category and sort by start date.

        Categories are loaded in a fixed order and the final sort is stable, so
        events on the same day keep that order.

        Raises:
            InvalidSelectionError: Before any loading, if the selection is invalid
        """
        self.validate_selection(selection)

        year = selection.year
        index = self.data.region_index
        # A bare country selection stands for all of its regions.
        regions = index.expand(selection.region_codes or selection.country_codes)
        countries = list(selection.country_codes) or index.countries_for(regions)

        logger.debug(
            "Loading %s for %d: regions=%s countries=%s",
            [c.value for c in selection.categories],
            year,
            regions,
            countries,
        )

        events: list[CalendarEvent] = []

        holidays: list[CalendarEvent] = []
        if selection.wants(EventCategory.PUBLIC_HOLIDAYS) or selection.wants(
            EventCategory.BRIDGE_DAYS
        ):
            for country in countries:
                holidays.extend(
                    load_public_holidays(self.data, regions, year, country, self.resolver)
                )
        if selection.wants(EventCategory.PUBLIC_HOLIDAYS):
            events.extend(holidays)

        if selection.wants(EventCategory.SCHOOL_HOLIDAYS):
            for country in countries:
                events.extend(load_school_holidays(self.data, regions, year, country))

        if selection.wants(EventCategory.OBSERVANCES):
            events.extend(
                load_special_days(
                    self.data.observances,
                    EventCategory.OBSERVANCES,
                    "observance",
                    year,
                    selection.selected_observance_ids,
                    self.resolver,
                )
            )

        if selection.wants(EventCategory.FUN_DAYS):
            events.extend(
                load_special_days(
                    self.data.fun_days,
                    EventCategory.FUN_DAYS,
                    "funday",
                    year,
                    selection.selected_fun_day_ids,
                    self.resolver,
                )
            )

        if selection.wants(EventCategory.BRIDGE_DAYS):
            events.extend(derive_bridge_days(holidays))

        if selection.wants(EventCategory.MOON_PHASES):
            events.extend(load_moon_phases(self.data, year))

        if selection.wants(EventCategory.ON_THIS_DAY):
            events.extend(load_historical_facts(self.data, year))

        if selection.wants(EventCategory.FAMOUS_BIRTHDAYS):
            events.extend(
                load_famous_birthdays(self.data, year, selection.selected_famous_person_ids)
            )

        if selection.wants(EventCategory.VACATION):
            events.extend(vacations_to_events(selection.user_vacations, year))

        events.sort(key=lambda e: e.start_date.isoformat())
        logger.info("Loaded %d events for %d", len(events), year)
        return events


def load_events(
    selection: CalendarSelection, data: Optional[CalendarData] = None
) -> list[CalendarEvent]:
    """Load events for ``selection`` from ``data`` (the bundled tables by default)."""
    return EventEngine(data if data is not None else get_calendar_data()).load_events(selection)
