"""Selection-to-document pipeline shared by the web server and the CLI."""

import logging
from typing import Optional

from .config.settings import QalendrSettings
from .data.store import CalendarData
from .events.engine import EventEngine
from .events.models import CalendarSelection
from .ics.generator import (
    IcsGeneratorOptions,
    generate_calendar_name,
    generate_filename,
    generate_ics,
)
from .ics.validator import validate_ics

logger = logging.getLogger(__name__)


def calendar_name(data: CalendarData, selection: CalendarSelection, fallback: str) -> str:
    """Display name from the selected regions, or the selected countries when none."""
    if selection.region_codes:
        names = [data.region_index.display_name(code) for code in selection.region_codes]
    else:
        names = []
        for code in selection.country_codes:
            country = data.country(code)
            names.append(country.name if country else code)
    return generate_calendar_name(names, selection.categories, selection.year, default=fallback)


def render_calendar(
    engine: EventEngine, settings: QalendrSettings, selection: CalendarSelection
) -> Optional[tuple[str, str]]:
    """Load and serialize the events of ``selection``.

    Returns:
        ``(document, filename)``, or None when the selection matches no events

    Raises:
        InvalidSelectionError: If the engine rejects the selection
        RuntimeError: If output validation is enabled and the document fails it
    """
    events = engine.load_events(selection)
    if not events:
        return None

    options = IcsGeneratorOptions(
        calendar_name=calendar_name(engine.data, selection, settings.default_calendar_name),
        calendar_description=f"Generated by Qalendr for {selection.year}",
        product_id=settings.product_id,
        uid_domain=settings.uid_domain,
    )
    document = generate_ics(events, options)

    if settings.validate_output:
        result = validate_ics(document)
        for warning in result.warnings:
            logger.warning("Generated calendar: %s", warning)
        if not result.is_valid:
            raise RuntimeError(f"Generated calendar is invalid: {'; '.join(result.errors)}")

    filename = generate_filename(list(selection.region_codes), selection.year)
    return document, filename
