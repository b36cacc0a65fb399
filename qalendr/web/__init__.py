"""HTTP boundary: aiohttp application and selection decoding."""

from .query import decode_json_selection, decode_selection
from .server import create_app, register_calendar_routes, register_catalog_routes, run_server

__all__ = [
    "create_app",
    "decode_json_selection",
    "decode_selection",
    "register_calendar_routes",
    "register_catalog_routes",
    "run_server",
]
