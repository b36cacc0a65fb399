"""Decode calendar selections from shareable URL parameters and JSON bodies.

Query parameters (all comma-separated lists except ``y``):

- ``co``: country codes, e.g. ``DE,AT``
- ``r``: region codes, e.g. ``DE-BY,DE-NW``
- ``c``: categories, e.g. ``public-holidays,bridge-days``
- ``y``: year
- ``obs``, ``fun``, ``ppl``: selected observance, fun day and famous person ids
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any, Optional

from pydantic import ValidationError

from ..config.settings import QalendrSettings
from ..events.models import (
    MAX_VACATION_ENTRIES,
    CalendarSelection,
    EventCategory,
    VacationEntry,
)
from ..exceptions import InvalidSelectionError

logger = logging.getLogger(__name__)

# Older shared links still use the category names of the first release.
CATEGORY_ALIASES = {"wikipedia-today": EventCategory.ON_THIS_DAY}


def split_list(value: Optional[str]) -> Optional[list[str]]:
    """Split a comma list, dropping empty items; ``None`` stays ``None``."""
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_categories(names: list[str]) -> list[EventCategory]:
    """Map category names to enum members, dropping unknown names."""
    categories: list[EventCategory] = []
    for name in names:
        category = CATEGORY_ALIASES.get(name)
        if category is None:
            try:
                category = EventCategory(name)
            except ValueError:
                logger.debug("Ignoring unknown category %r", name)
                continue
        if category not in categories:
            categories.append(category)
    return categories


def parse_year(value: Any, settings: QalendrSettings, today: Optional[date] = None) -> int:
    """Parse a requested year, falling back to the current year when invalid or out of range."""
    current = (today or date.today()).year
    try:
        year = int(value)
    except (TypeError, ValueError):
        return current
    if not settings.min_web_year <= year <= settings.max_web_year:
        logger.debug("Year %s outside %s..%s", year, settings.min_web_year, settings.max_web_year)
        return current
    return year


def _optional_ids(value: Optional[list[str]]) -> Optional[tuple[str, ...]]:
    # An empty parameter means "no filter", as in a shared link that never set it.
    return tuple(value) if value else None


def decode_selection(
    params: Mapping[str, str], settings: QalendrSettings, today: Optional[date] = None
) -> CalendarSelection:
    """Build a selection from URL query parameters.

    Args:
        params: Query parameters (``request.query`` or any mapping)
        settings: Provides default countries, default categories and the year range
        today: Reference date for the current-year fallback

    Returns:
        CalendarSelection: Decoded selection (not yet validated by the engine)
    """
    countries = split_list(params.get("co"))
    regions = split_list(params.get("r")) or []
    category_names = split_list(params.get("c"))

    if category_names is None:
        categories = list(settings.default_categories)
    else:
        categories = parse_categories(category_names)

    if not countries:
        # Without explicit countries the regions decide; a bare link gets the defaults.
        countries = [] if regions else list(settings.default_countries)

    return CalendarSelection(
        country_codes=tuple(countries),
        region_codes=tuple(regions),
        categories=tuple(categories),
        year=parse_year(params.get("y"), settings, today),
        selected_observance_ids=_optional_ids(split_list(params.get("obs"))),
        selected_fun_day_ids=_optional_ids(split_list(params.get("fun"))),
        selected_famous_person_ids=_optional_ids(split_list(params.get("ppl"))),
    )


def _as_list(body: Mapping[str, Any], key: str) -> Optional[list[str]]:
    value = body.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return split_list(value)
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return value
    raise InvalidSelectionError(f"'{key}' must be a list of strings")


def decode_json_selection(
    body: Any, settings: QalendrSettings, today: Optional[date] = None
) -> CalendarSelection:
    """Build a selection from a JSON request body.

    Accepts the query parameter names as well as the long names
    (``countries``, ``regions``, ``categories``, ``year``,
    ``selectedObservances``, ``selectedFunDays``, ``selectedFamousPeople``)
    plus ``vacations``, a list of ``{id, name, startDate, endDate}`` objects.

    Raises:
        InvalidSelectionError: If the body is not an object or a vacation entry is invalid
    """
    if not isinstance(body, dict):
        raise InvalidSelectionError("Request body must be a JSON object")

    params: dict[str, Any] = {}
    for short, long in (
        ("co", "countries"),
        ("r", "regions"),
        ("c", "categories"),
        ("obs", "selectedObservances"),
        ("fun", "selectedFunDays"),
        ("ppl", "selectedFamousPeople"),
    ):
        items = _as_list(body, long) if long in body else _as_list(body, short)
        if items is not None:
            params[short] = ",".join(items)
    params["y"] = body.get("year", body.get("y"))

    selection = decode_selection(params, settings, today)

    vacations = body.get("vacations") or []
    if not isinstance(vacations, list):
        raise InvalidSelectionError("'vacations' must be a list")
    if len(vacations) > MAX_VACATION_ENTRIES:
        raise InvalidSelectionError(f"At most {MAX_VACATION_ENTRIES} vacation entries are allowed")
    try:
        entries = tuple(VacationEntry.model_validate(v) for v in vacations)
        return selection.model_copy(update={"user_vacations": entries})
    except ValidationError as e:
        raise InvalidSelectionError(f"Invalid vacation entry: {e.errors()[0]['msg']}") from e
