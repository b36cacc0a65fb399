"""Configuration management for qalendr."""

from .settings import LoggingSettings, QalendrSettings, get_settings, reset_settings

__all__ = ["LoggingSettings", "QalendrSettings", "get_settings", "reset_settings"]
