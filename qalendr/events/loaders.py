"""Per-category event loaders.

Every loader is a pure function over the immutable record tables: it returns
freshly built :class:`CalendarEvent` objects and never mutates its inputs.
Region codes handed to the loaders are expected to be expanded already
(see :meth:`qalendr.data.regions.RegionIndex.expand`).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Optional

from ..data.models import MoonPhase, SpecialDayRecord
from ..data.store import CalendarData
from ..dates.resolver import DatePatternResolver, anniversary_date
from ..exceptions import DateResolutionError, MissingDataError
from ..utils.logging import VERBOSE  # noqa: F401  registers Logger.verbose
from .models import CalendarEvent, EventCategory, VacationEntry

logger = logging.getLogger(__name__)

MOON_PHASE_TITLES = {
    MoonPhase.NEW_MOON: "🌑 New moon",
    MoonPhase.FIRST_QUARTER: "🌓 First quarter",
    MoonPhase.FULL_MOON: "🌕 Full moon",
    MoonPhase.LAST_QUARTER: "🌗 Last quarter",
}

_default_resolver = DatePatternResolver()


def load_public_holidays(
    data: CalendarData,
    region_codes: Sequence[str],
    year: int,
    country: str,
    resolver: Optional[DatePatternResolver] = None,
) -> list[CalendarEvent]:
    """Load the public holidays of ``country`` that apply to the selected regions.

    A holiday without a region list is nationwide. A regional holiday applies
    when any of its declared regions is selected (or equals the country code).
    Regional holidays get a ``" (A, B)"`` title suffix listing the applicable
    regions in declared order whenever the declared list is shorter than the
    country's number of states.

    Args:
        data: Record tables
        region_codes: Expanded region codes of the selection
        year: Target year
        country: Country code whose table is read
        resolver: Date pattern resolver (default named rules if omitted)

    Returns:
        list[CalendarEvent]: One single-day event per applicable holiday
    """
    resolver = resolver or _default_resolver

    try:
        records = data.public_holidays(country)
    except MissingDataError as e:
        logger.debug("Skipping public holidays: %s", e.message)
        return []

    index = data.region_index
    country_regions = [
        code for code in region_codes if getattr(index.get(code), "country", None) == country
    ]
    # Countries without states are selected through their own code.
    effective_regions = country_regions or [country]
    total_states = len(index.state_codes(country))

    events: list[CalendarEvent] = []
    for record in records:
        if record.regions is not None and not any(
            r in effective_regions or r == country for r in record.regions
        ):
            continue

        try:
            day = resolver.resolve(record.date, year)
        except DateResolutionError as e:
            logger.warning("Error resolving date for holiday %s: %s", record.id, e.message)
            continue
        logger.verbose("Resolved holiday %s (%s) to %s", record.id, record.date, day)

        if record.regions is not None:
            applicable = [r for r in record.regions if r in effective_regions]
        else:
            applicable = list(effective_regions)

        suffix = ""
        if record.regions is not None and len(record.regions) < total_states and applicable:
            suffix = f" ({', '.join(applicable)})"

        events.append(
            CalendarEvent(
                id=f"{country.lower()}-{record.id}-{year}",
                title=record.name + suffix,
                start_date=day,
                end_date=day,
                category=EventCategory.PUBLIC_HOLIDAYS,
                region=applicable[0] if len(applicable) == 1 else None,
            )
        )

    return events


def load_school_holidays(
    data: CalendarData, region_codes: Sequence[str], year: int, country: str
) -> list[CalendarEvent]:
    """Emit one event per selected region and school holiday period."""
    try:
        records = data.school_holidays(country, year)
    except MissingDataError as e:
        logger.debug("Skipping school holidays: %s", e.message)
        return []

    selected = set(region_codes)
    events = []
    for record in records:
        for period in record.periods:
            if period.region not in selected:
                continue
            region_name = data.region_index.display_name(period.region)
            events.append(
                CalendarEvent(
                    id=f"{period.region.lower()}-{record.id}-{year}",
                    title=f"{record.name} {region_name}",
                    start_date=period.start_date,
                    end_date=period.end_date,
                    category=EventCategory.SCHOOL_HOLIDAYS,
                    region=period.region,
                )
            )
    return events


def load_special_days(
    records: Iterable[SpecialDayRecord],
    category: EventCategory,
    id_prefix: str,
    year: int,
    selected_ids: Optional[Iterable[str]] = None,
    resolver: Optional[DatePatternResolver] = None,
) -> list[CalendarEvent]:
    """Resolve observance or fun-day records for ``year``.

    ``selected_ids=None`` loads every record; an empty collection loads none.
    """
    resolver = resolver or _default_resolver
    wanted = None if selected_ids is None else set(selected_ids)

    events = []
    for record in records:
        if wanted is not None and record.id not in wanted:
            continue
        try:
            day = resolver.resolve(record.date, year)
        except DateResolutionError as e:
            logger.warning("Error resolving date for %s %s: %s", id_prefix, record.id, e.message)
            continue
        logger.verbose("Resolved %s %s (%s) to %s", id_prefix, record.id, record.date, day)
        events.append(
            CalendarEvent(
                id=f"{id_prefix}-{record.id}-{year}",
                title=record.name,
                start_date=day,
                end_date=day,
                category=category,
                description=record.note,
            )
        )
    return events


def load_moon_phases(data: CalendarData, year: int) -> list[CalendarEvent]:
    try:
        records = data.moon_phases(year)
    except MissingDataError as e:
        logger.debug("Skipping moon phases: %s", e.message)
        return []

    events = []
    for record in records:
        day = anniversary_date(record.date, year)
        description = f"Exact phase at {record.time} UTC" if record.time else None
        events.append(
            CalendarEvent(
                id=f"moon-{record.phase.value}-{year}-{record.date.replace('-', '')}",
                title=MOON_PHASE_TITLES[record.phase],
                start_date=day,
                end_date=day,
                category=EventCategory.MOON_PHASES,
                description=description,
            )
        )
    return events


def load_historical_facts(data: CalendarData, year: int) -> list[CalendarEvent]:
    """Place "on this day" facts into ``year`` with a years-ago counter.

    Facts from ``year`` itself or later have no anniversary yet and are skipped.
    """
    events = []
    for fact in data.historical_facts:
        years_ago = year - fact.year
        if years_ago < 1:
            continue
        day = anniversary_date(fact.date, year)
        events.append(
            CalendarEvent(
                id=f"onthisday-{fact.id}-{year}",
                title=f"{fact.title} ({years_ago} years ago)",
                start_date=day,
                end_date=day,
                category=EventCategory.ON_THIS_DAY,
                description=fact.description,
            )
        )
    return events


def load_famous_birthdays(
    data: CalendarData, year: int, selected_ids: Optional[Iterable[str]] = None
) -> list[CalendarEvent]:
    """Emit birth anniversaries, plus death anniversaries where a death date is known."""
    wanted = None if selected_ids is None else set(selected_ids)

    events = []
    for person in data.famous_people:
        if wanted is not None and person.id not in wanted:
            continue

        born = person.birth_date
        if person.death_date:
            lifespan = f"{born.year}-{person.death_date.year}"
        else:
            lifespan = f"born {born.year}"
        description = f"{person.description} ({lifespan})" if person.description else lifespan

        years = year - born.year
        if years >= 1:
            day = anniversary_date(born.strftime("%m-%d"), year)
            events.append(
                CalendarEvent(
                    id=f"birthday-{person.id}-{year}",
                    title=f"{person.name} born {years} years ago",
                    start_date=day,
                    end_date=day,
                    category=EventCategory.FAMOUS_BIRTHDAYS,
                    description=description,
                )
            )

        died = person.death_date
        if died is not None and year - died.year >= 1:
            day = anniversary_date(died.strftime("%m-%d"), year)
            events.append(
                CalendarEvent(
                    id=f"deathday-{person.id}-{year}",
                    title=f"{person.name} died {year - died.year} years ago",
                    start_date=day,
                    end_date=day,
                    category=EventCategory.FAMOUS_BIRTHDAYS,
                    description=description,
                )
            )
    return events


def vacations_to_events(vacations: Iterable[VacationEntry], year: int) -> list[CalendarEvent]:
    """Convert user vacations whose start date lies in ``year``."""
    return [
        CalendarEvent(
            id=f"vacation-{v.id}",
            title=v.name,
            start_date=v.start_date,
            end_date=v.end_date,
            category=EventCategory.VACATION,
        )
        for v in vacations
        if v.start_date.year == year
    ]
