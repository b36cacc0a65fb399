"""Region lookup and country-to-state expansion."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import MappingProxyType
from typing import Optional

from .models import Region, RegionType

logger = logging.getLogger(__name__)


class RegionIndex:
    """Read-only index over the region reference table."""

    def __init__(self, regions: Iterable[Region]):
        self._regions: tuple[Region, ...] = tuple(regions)
        self._by_code = MappingProxyType({r.code: r for r in self._regions})

    @property
    def regions(self) -> tuple[Region, ...]:
        return self._regions

    def get(self, code: str) -> Optional[Region]:
        return self._by_code.get(code)

    def by_country(self, country: str) -> list[Region]:
        return [r for r in self._regions if r.country == country]

    def state_codes(self, country: str) -> list[str]:
        """Codes of all sub-national states of ``country``, in table order."""
        return [
            r.code for r in self._regions if r.country == country and r.type == RegionType.STATE
        ]

    def expand(self, codes: Iterable[str]) -> list[str]:
        """Expand country-level codes into their states.

        Countries without states stay as themselves, state codes pass through,
        unknown codes are dropped. Duplicates collapse and first-seen order is
        kept, so ``expand(expand(x)) == expand(x)``.

        Example:
            >>> index.expand(["DE-BY", "AT", "DE-BY"])
            ['DE-BY', 'AT']
        """
        expanded: dict[str, None] = {}

        for code in codes:
            region = self.get(code)
            if region is None:
                logger.debug("Ignoring unknown region code %r", code)
                continue

            if region.type == RegionType.COUNTRY:
                states = self.state_codes(region.country)
                for state in states or [code]:
                    expanded.setdefault(state, None)
            else:
                expanded.setdefault(code, None)

        return list(expanded)

    def countries_for(self, codes: Iterable[str]) -> list[str]:
        """Distinct countries of the expanded ``codes``, in first-seen order."""
        countries: dict[str, None] = {}
        for code in self.expand(codes):
            region = self.get(code)
            if region is not None:
                countries.setdefault(region.country, None)
        return list(countries)

    def display_name(self, code: str) -> str:
        region = self.get(code)
        return region.name if region else code
