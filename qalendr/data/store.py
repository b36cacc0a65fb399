"""Load the static record tables from disk into an immutable :class:`CalendarData`.

Expected layout below the data directory::

    countries.json
    regions.json
    holidays/<cc>/public-holidays.json
    holidays/<cc>/school-holidays/<year>.json
    special-days/observances.json
    special-days/fun-days.json
    moon-phases/<year>.json
    history/on-this-day.json
    history/famous-people.json

Tables are read once per process. Malformed files fail the load; a missing
optional table simply leaves that category empty.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import DataLoadError, MissingDataError
from .models import (
    Country,
    FamousPersonRecord,
    HistoricalFactRecord,
    MoonPhaseRecord,
    PublicHolidayRecord,
    Region,
    SchoolHolidayRecord,
    SpecialDayRecord,
)
from .regions import RegionIndex

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "resources"

ModelT = TypeVar("ModelT", bound=BaseModel)


class CalendarData:
    """Immutable bundle of every record table the event loaders read."""

    def __init__(
        self,
        countries: Iterable[Country] = (),
        regions: Iterable[Region] = (),
        public_holidays: Optional[Mapping[str, Iterable[PublicHolidayRecord]]] = None,
        school_holidays: Optional[Mapping[tuple[str, int], Iterable[SchoolHolidayRecord]]] = None,
        observances: Iterable[SpecialDayRecord] = (),
        fun_days: Iterable[SpecialDayRecord] = (),
        moon_phases: Optional[Mapping[int, Iterable[MoonPhaseRecord]]] = None,
        historical_facts: Iterable[HistoricalFactRecord] = (),
        famous_people: Iterable[FamousPersonRecord] = (),
    ):
        self.countries: tuple[Country, ...] = tuple(countries)
        self.region_index = RegionIndex(regions)
        self.observances: tuple[SpecialDayRecord, ...] = tuple(observances)
        self.fun_days: tuple[SpecialDayRecord, ...] = tuple(fun_days)
        self.historical_facts: tuple[HistoricalFactRecord, ...] = tuple(historical_facts)
        self.famous_people: tuple[FamousPersonRecord, ...] = tuple(famous_people)

        self._countries_by_code = MappingProxyType({c.code: c for c in self.countries})
        self._public_holidays = MappingProxyType(
            {k: tuple(v) for k, v in (public_holidays or {}).items()}
        )
        self._school_holidays = MappingProxyType(
            {k: tuple(v) for k, v in (school_holidays or {}).items()}
        )
        self._moon_phases = MappingProxyType({k: tuple(v) for k, v in (moon_phases or {}).items()})

    @property
    def regions(self) -> tuple[Region, ...]:
        return self.region_index.regions

    def country(self, code: str) -> Optional[Country]:
        return self._countries_by_code.get(code)

    def has_public_holidays(self, country: str) -> bool:
        return country in self._public_holidays

    def public_holidays(self, country: str) -> tuple[PublicHolidayRecord, ...]:
        try:
            return self._public_holidays[country]
        except KeyError:
            raise MissingDataError(f"No public holiday data for country {country}") from None

    def school_holidays(self, country: str, year: int) -> tuple[SchoolHolidayRecord, ...]:
        try:
            return self._school_holidays[(country, year)]
        except KeyError:
            raise MissingDataError(f"No school holiday data for {country} {year}") from None

    def moon_phases(self, year: int) -> tuple[MoonPhaseRecord, ...]:
        try:
            return self._moon_phases[year]
        except KeyError:
            raise MissingDataError(f"No moon phase data for {year}") from None

    def available_school_holiday_years(self, country: str) -> list[int]:
        return sorted(year for cc, year in self._school_holidays if cc == country)


def _read_json(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DataLoadError(f"Could not read data file {path}: {e}") from e


def _parse_records(model: type[ModelT], items: Any, path: Path) -> list[ModelT]:
    if not isinstance(items, list):
        raise DataLoadError(f"Expected a list of records in {path}")
    try:
        return [model.model_validate(item) for item in items]
    except ValidationError as e:
        raise DataLoadError(f"Invalid record in {path}: {e}") from e


def _read_records(path: Path, key: str, model: type[ModelT], required: bool = False) -> list[ModelT]:
    if not path.exists():
        if required:
            raise DataLoadError(f"Required data file missing: {path}")
        logger.debug("Optional data file not present: %s", path)
        return []
    payload = _read_json(path)
    if not isinstance(payload, dict):
        raise DataLoadError(f"Expected a JSON object in {path}")
    return _parse_records(model, payload.get(key, []), path)


def load_calendar_data(data_dir: Path) -> CalendarData:
    """Load every table below ``data_dir``.

    Args:
        data_dir: Root of the data layout described in the module docstring

    Returns:
        CalendarData: The loaded, immutable tables

    Raises:
        DataLoadError: If a required file is missing or any file is malformed
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise DataLoadError(f"Data directory does not exist: {data_dir}")

    countries = _read_records(data_dir / "countries.json", "countries", Country, required=True)
    regions = _read_records(data_dir / "regions.json", "regions", Region, required=True)

    public_holidays: dict[str, list[PublicHolidayRecord]] = {}
    school_holidays: dict[tuple[str, int], list[SchoolHolidayRecord]] = {}
    holidays_dir = data_dir / "holidays"
    if holidays_dir.is_dir():
        for country_dir in sorted(p for p in holidays_dir.iterdir() if p.is_dir()):
            country = country_dir.name.upper()

            public_file = country_dir / "public-holidays.json"
            if public_file.exists():
                public_holidays[country] = _read_records(
                    public_file, "holidays", PublicHolidayRecord
                )

            school_dir = country_dir / "school-holidays"
            if school_dir.is_dir():
                for year_file in sorted(school_dir.glob("*.json")):
                    try:
                        year = int(year_file.stem)
                    except ValueError:
                        raise DataLoadError(
                            f"School holiday file name must be a year: {year_file}"
                        ) from None
                    school_holidays[(country, year)] = _read_records(
                        year_file, "holidays", SchoolHolidayRecord
                    )

    moon_phases: dict[int, list[MoonPhaseRecord]] = {}
    moon_dir = data_dir / "moon-phases"
    if moon_dir.is_dir():
        for year_file in sorted(moon_dir.glob("*.json")):
            payload = _read_json(year_file)
            if not isinstance(payload, dict) or not isinstance(payload.get("year"), int):
                raise DataLoadError(f"Moon phase file needs an integer 'year': {year_file}")
            moon_phases[payload["year"]] = _parse_records(
                MoonPhaseRecord, payload.get("phases", []), year_file
            )

    data = CalendarData(
        countries=countries,
        regions=regions,
        public_holidays=public_holidays,
        school_holidays=school_holidays,
        observances=_read_records(
            data_dir / "special-days" / "observances.json", "days", SpecialDayRecord
        ),
        fun_days=_read_records(
            data_dir / "special-days" / "fun-days.json", "days", SpecialDayRecord
        ),
        moon_phases=moon_phases,
        historical_facts=_read_records(
            data_dir / "history" / "on-this-day.json", "facts", HistoricalFactRecord
        ),
        famous_people=_read_records(
            data_dir / "history" / "famous-people.json", "people", FamousPersonRecord
        ),
    )

    logger.info(
        "Loaded calendar data from %s: %d countries, %d regions, %d public holiday tables, "
        "%d school holiday tables",
        data_dir,
        len(data.countries),
        len(data.regions),
        len(public_holidays),
        len(school_holidays),
    )
    return data


@lru_cache(maxsize=4)
def get_calendar_data(data_dir: Optional[Path] = None) -> CalendarData:
    """Return the process-wide tables for ``data_dir`` (bundled data by default)."""
    return load_calendar_data(Path(data_dir) if data_dir else DEFAULT_DATA_DIR)
