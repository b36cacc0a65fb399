"""aiohttp application serving generated calendars.

Routes:

- ``GET /api/calendar``: selection from query parameters (see :mod:`qalendr.web.query`)
- ``POST /api/calendar``: selection from a JSON body, including user vacations
- ``GET /api/catalog``: countries, regions and selectable items for UIs
- ``GET /api/health``: liveness probe
"""

import logging
from typing import Any, Optional

from aiohttp import web

from .. import __version__
from ..config.settings import QalendrSettings, get_settings
from ..data.store import CalendarData, get_calendar_data
from ..events.engine import EventEngine
from ..events.models import CalendarSelection, EventCategory
from ..exceptions import InvalidSelectionError
from ..render import render_calendar
from .query import decode_json_selection, decode_selection

logger = logging.getLogger(__name__)

SETTINGS_KEY = web.AppKey("settings", QalendrSettings)
ENGINE_KEY = web.AppKey("engine", EventEngine)


def _error(message: str, status: int) -> web.Response:
    return web.json_response({"error": message}, status=status)


def register_calendar_routes(app: web.Application) -> None:
    """Register calendar download routes.

    Args:
        app: aiohttp web application holding the engine and settings
    """

    async def _respond(request: web.Request, selection: CalendarSelection) -> web.Response:
        settings = request.app[SETTINGS_KEY]
        engine = request.app[ENGINE_KEY]
        try:
            rendered = render_calendar(engine, settings, selection)
        except InvalidSelectionError as e:
            logger.info("Rejected calendar selection: %s", e.message)
            return _error(e.message, e.status_code or 400)
        except Exception:
            logger.exception("Error generating calendar")
            return _error("Error generating calendar", 500)

        if rendered is None:
            return _error("No events found for the selected configuration", 404)

        document, filename = rendered
        return web.Response(
            text=document,
            content_type="text/calendar",
            charset="utf-8",
            headers={
                "Content-Disposition": f'attachment; filename="{filename}"',
                "Cache-Control": (
                    f"public, max-age={settings.cache_max_age}, stale-while-revalidate=86400"
                ),
            },
        )

    async def get_calendar(request: web.Request) -> web.Response:
        """Download an ICS file for the selection in the query string."""
        selection = decode_selection(request.query, request.app[SETTINGS_KEY])
        return await _respond(request, selection)

    async def post_calendar(request: web.Request) -> web.Response:
        """Download an ICS file for a JSON selection, including vacations."""
        try:
            body = await request.json()
        except ValueError:
            return _error("invalid json", 400)

        try:
            selection = decode_json_selection(body, request.app[SETTINGS_KEY])
        except InvalidSelectionError as e:
            return _error(e.message, 400)
        return await _respond(request, selection)

    app.router.add_get("/api/calendar", get_calendar)
    app.router.add_post("/api/calendar", post_calendar)


def register_catalog_routes(app: web.Application) -> None:
    """Register catalog and health routes."""

    async def catalog(request: web.Request) -> web.Response:
        """List everything a selection UI can offer."""
        data = request.app[ENGINE_KEY].data

        def dump(records: Any) -> list[dict[str, Any]]:
            return [r.model_dump(mode="json", by_alias=True) for r in records]

        payload = {
            "countries": [
                {
                    **country.model_dump(mode="json", by_alias=True),
                    "hasPublicHolidays": data.has_public_holidays(country.code),
                    "schoolHolidayYears": data.available_school_holiday_years(country.code),
                }
                for country in data.countries
            ],
            "regions": dump(data.regions),
            "observances": dump(data.observances),
            "funDays": dump(data.fun_days),
            "famousPeople": dump(data.famous_people),
            "categories": [c.value for c in EventCategory if c is not EventCategory.CUSTOM],
            "defaultCategories": [c.value for c in request.app[SETTINGS_KEY].default_categories],
        }
        return web.json_response(payload)

    async def health(_request: web.Request) -> web.Response:
        return web.json_response({"status": "ok", "version": __version__})

    app.router.add_get("/api/catalog", catalog)
    app.router.add_get("/api/health", health)


def create_app(
    settings: Optional[QalendrSettings] = None, data: Optional[CalendarData] = None
) -> web.Application:
    """Build the aiohttp application.

    Args:
        settings: Application settings (global settings if omitted)
        data: Record tables (loaded from ``settings.data_dir`` if omitted)

    Returns:
        web.Application: Application with all routes registered
    """
    settings = settings or get_settings()
    if data is None:
        data = get_calendar_data(settings.data_dir)

    app = web.Application()
    app[SETTINGS_KEY] = settings
    app[ENGINE_KEY] = EventEngine(data)

    register_calendar_routes(app)
    register_catalog_routes(app)

    logger.debug("Created web application with %d routes", len(app.router.routes()))
    return app


def run_server(
    settings: Optional[QalendrSettings] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> None:
    """Run the web server until interrupted."""
    settings = settings or get_settings()
    app = create_app(settings)

    host = host or settings.server_host
    port = port or settings.server_port
    logger.info("Starting Qalendr server on http://%s:%d", host, port)
    web.run_app(app, host=host, port=port, print=None)
