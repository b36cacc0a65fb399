"""Settings management using Pydantic for type validation and configuration."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..events.models import EventCategory
from ..ics.formatters import DEFAULT_UID_DOMAIN
from ..ics.generator import DEFAULT_PRODUCT_ID

ENV_PREFIX = "QALENDR_"


class LoggingSettings(BaseModel):
    """Console logging configuration."""

    level: str = Field(
        default="INFO", description="Log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL"
    )
    colors: bool = Field(default=True, description="Enable colored console output (auto-detected)")
    third_party_level: str = Field(
        default="WARNING", description="Log level for third-party libraries"
    )


class QalendrSettings(BaseSettings):
    """Application settings with environment variable support.

    Precedence, highest first: explicit keyword arguments, ``QALENDR_*``
    environment variables (and ``.env``), the YAML config file, defaults.
    """

    _explicit_args: set = PrivateAttr(default_factory=set)
    _config_path: Optional[Path] = PrivateAttr(default=None)

    # Data
    data_dir: Optional[Path] = Field(
        default=None, description="Record table directory (bundled tables if unset)"
    )
    config_dir: Path = Field(
        default_factory=lambda: Path.home() / ".config" / "qalendr",
        description="User configuration directory",
    )

    # Calendar output
    product_id: str = Field(default=DEFAULT_PRODUCT_ID, description="PRODID of generated calendars")
    uid_domain: str = Field(default=DEFAULT_UID_DOMAIN, description="Domain suffix of event UIDs")
    default_calendar_name: str = Field(default="Holidays", description="Fallback calendar name")
    validate_output: bool = Field(
        default=False, description="Validate every generated document before serving it"
    )

    # Selection defaults for the web boundary
    default_categories: list[EventCategory] = Field(
        default_factory=lambda: [EventCategory.SCHOOL_HOLIDAYS, EventCategory.PUBLIC_HOLIDAYS],
        description="Categories used when a request names none",
    )
    default_countries: list[str] = Field(
        default_factory=lambda: ["DE"], description="Countries used when a request names none"
    )
    min_web_year: int = Field(default=2020, description="Earliest year served over HTTP")
    max_web_year: int = Field(default=2100, description="Latest year served over HTTP")

    # Web server
    server_host: str = Field(default="127.0.0.1", description="Web server host")
    server_port: int = Field(default=8080, description="Web server port")
    cache_max_age: int = Field(default=3600, description="Cache-Control max-age in seconds")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        validate_assignment=True,
        extra="ignore",
    )

    def __init__(self, **kwargs: Any) -> None:
        config_path = kwargs.pop("_config_file", None)

        # Track which environment variables are set before calling parent
        env_vars_set = {
            key[len(ENV_PREFIX) :].lower().split("__")[0]
            for key in os.environ
            if key.upper().startswith(ENV_PREFIX)
        }

        super().__init__(**kwargs)

        self._explicit_args = set(kwargs.keys()) | env_vars_set
        self._config_path = Path(config_path) if config_path else None

        self._load_yaml_config()

    def _find_config_file(self) -> Optional[Path]:
        """Find config file, checking project directory first, then user home."""
        if self._config_path is not None:
            return self._config_path if self._config_path.exists() else None

        project_root = Path(__file__).parent.parent.parent
        project_config = project_root / "config" / "config.yaml"
        if project_config.exists():
            return project_config

        user_config = self.config_dir / "config.yaml"
        if user_config.exists():
            return user_config

        return None

    def _set_unless_explicit(self, name: str, value: Any) -> None:
        if name not in self._explicit_args:
            setattr(self, name, value)

    def _load_basic_settings(self, config_data: dict) -> None:
        basic_settings = [
            "data_dir",
            "product_id",
            "uid_domain",
            "default_calendar_name",
            "validate_output",
            "default_categories",
            "default_countries",
            "min_web_year",
            "max_web_year",
        ]
        for setting in basic_settings:
            if setting in config_data:
                self._set_unless_explicit(setting, config_data[setting])

    def _load_web_config(self, config_data: dict) -> None:
        """Load web server configuration from the ``web`` section."""
        web_config = config_data.get("web")
        if not isinstance(web_config, dict):
            return

        mapping = {"host": "server_host", "port": "server_port", "cache_max_age": "cache_max_age"}
        for key, setting in mapping.items():
            if key in web_config:
                self._set_unless_explicit(setting, web_config[key])

    def _load_logging_config(self, config_data: dict) -> None:
        logging_config = config_data.get("logging")
        if not isinstance(logging_config, dict) or "logging" in self._explicit_args:
            return

        for setting in ("level", "colors", "third_party_level"):
            if setting in logging_config:
                setattr(self.logging, setting, logging_config[setting])

    def _load_yaml_config(self) -> None:
        """Load configuration from YAML file if it exists."""
        config_file = self._find_config_file()
        if not config_file:
            return

        try:
            with config_file.open(encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            # Don't fail if YAML loading fails, just continue with defaults/env vars
            logging.warning(f"Could not load YAML config from {config_file}: {e}")
            return

        if not config_data:
            return
        if not isinstance(config_data, dict):
            logging.warning(f"Ignoring YAML config {config_file}: expected a mapping")
            return

        self._load_basic_settings(config_data)
        self._load_web_config(config_data)
        self._load_logging_config(config_data)

    @property
    def config_file(self) -> Path:
        """Path to YAML configuration file."""
        return self.config_dir / "config.yaml"


# Global settings management
_settings_instance: Optional[QalendrSettings] = None


def get_settings() -> QalendrSettings:
    """Get the global settings instance, creating it lazily if needed.

    Returns:
        QalendrSettings: The global settings instance
    """
    if globals()["_settings_instance"] is None:
        globals()["_settings_instance"] = QalendrSettings()
    return globals()["_settings_instance"]


def reset_settings() -> None:
    """Reset the global settings instance (primarily for testing)."""
    globals()["_settings_instance"] = None
