"""Date pattern grammar.

A date pattern is a year-independent string rule such as ``"12-25"``,
``"easter+39"``, ``"buss-und-bettag"`` or ``"last-sunday-10"``. This module
parses those strings into a closed set of immutable variants; turning a
variant into a concrete date is the job of :mod:`qalendr.dates.resolver`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import lru_cache
from typing import Union

from ..exceptions import UnknownPatternError


class Weekday(IntEnum):
    """Day of week, Sunday-based (0=Sunday ... 6=Saturday)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class Occurrence(str, Enum):
    """Which occurrence of a weekday inside a month."""

    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    FOURTH = "fourth"
    LAST = "last"

    @property
    def ordinal(self) -> int:
        """1-based position; 0 for LAST."""
        return _OCCURRENCE_ORDINALS[self]


_OCCURRENCE_ORDINALS = {
    Occurrence.FIRST: 1,
    Occurrence.SECOND: 2,
    Occurrence.THIRD: 3,
    Occurrence.FOURTH: 4,
    Occurrence.LAST: 0,
}

# Longest day count per month, using a leap year so "02-29" stays valid.
_MAX_DAYS = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


@dataclass(frozen=True)
class FixedDatePattern:
    """Same month/day every year (``MM-DD``)."""

    month: int
    day: int


@dataclass(frozen=True)
class EasterPattern:
    """Easter Sunday plus a signed day offset (``easter``, ``easter+N``, ``easter-N``)."""

    offset: int = 0


@dataclass(frozen=True)
class NamedPattern:
    """Symbolic identifier bound to a named rule, e.g. ``buss-und-bettag``."""

    name: str


@dataclass(frozen=True)
class WeekdayOfMonthPattern:
    """Nth or last weekday of a month (``second-monday-06``)."""

    occurrence: Occurrence
    weekday: Weekday
    month: int


DatePattern = Union[FixedDatePattern, EasterPattern, NamedPattern, WeekdayOfMonthPattern]

_FIXED_RE = re.compile(r"^(\d{2})-(\d{2})$")
_EASTER_RE = re.compile(r"^easter([+-]\d+)?$")
_WEEKDAY_RE = re.compile(
    r"^(first|second|third|fourth|last)-"
    r"(sunday|monday|tuesday|wednesday|thursday|friday|saturday)-(\d{2})$"
)
_NAMED_RE = re.compile(r"^[a-z][a-z0-9]*(?:-[a-z0-9]+)*$")


@lru_cache(maxsize=512)
def parse_pattern(text: str) -> DatePattern:
    """Parse a pattern string into its variant.

    Named identifiers are accepted syntactically here; whether a rule of that
    name exists is decided by the resolver that holds the rule table.

    Raises:
        UnknownPatternError: If ``text`` matches none of the grammars, or is a
            fixed date that never exists (``"04-31"``).
    """
    if not isinstance(text, str):
        raise UnknownPatternError(repr(text))

    fixed = _FIXED_RE.match(text)
    if fixed:
        month, day = int(fixed.group(1)), int(fixed.group(2))
        if not 1 <= month <= 12 or not 1 <= day <= _MAX_DAYS[month - 1]:
            raise UnknownPatternError(text)
        return FixedDatePattern(month=month, day=day)

    easter = _EASTER_RE.match(text)
    if easter:
        return EasterPattern(offset=int(easter.group(1)) if easter.group(1) else 0)

    weekday = _WEEKDAY_RE.match(text)
    if weekday:
        month = int(weekday.group(3))
        if not 1 <= month <= 12:
            raise UnknownPatternError(text)
        return WeekdayOfMonthPattern(
            occurrence=Occurrence(weekday.group(1)),
            weekday=Weekday[weekday.group(2).upper()],
            month=month,
        )

    if _NAMED_RE.match(text):
        return NamedPattern(name=text)

    raise UnknownPatternError(text)
