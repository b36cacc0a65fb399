"""Resolve date patterns into concrete calendar dates.

Resolution is a pure function of ``(pattern, year)``: no event, table or clock
is consulted. Named rules (holidays that follow their own fixed algorithm,
such as US Thanksgiving or the German Buß- und Bettag) live in a rule table
handed to :class:`DatePatternResolver` at construction time.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import MINYEAR, MAXYEAR, date, timedelta
from types import MappingProxyType
from typing import Callable, Optional, Union

from dateutil.relativedelta import relativedelta

from ..exceptions import DateResolutionError, UnknownPatternError
from .patterns import (
    DatePattern,
    EasterPattern,
    FixedDatePattern,
    NamedPattern,
    Occurrence,
    Weekday,
    WeekdayOfMonthPattern,
    parse_pattern,
)

logger = logging.getLogger(__name__)

NamedRule = Callable[[int], date]


def weekday_index(day: date) -> int:
    """Return the Sunday-based weekday index (0=Sunday ... 6=Saturday)."""
    return day.isoweekday() % 7


def calculate_easter(year: int) -> date:
    """Calculate Easter Sunday with the anonymous Gregorian algorithm (Meeus/Jones/Butcher).

    Args:
        year: Gregorian year

    Returns:
        Date of Easter Sunday

    Example:
        >>> calculate_easter(2025)
        datetime.date(2025, 4, 20)
    """
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = (h + l - 7 * m + 114) % 31 + 1
    return date(year, month, day)


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date:
    """Return the ``n``-th (1-based) occurrence of ``weekday`` (0=Sunday) in a month."""
    first = date(year, month, 1)
    days_until_first = (weekday - weekday_index(first)) % 7
    return first + timedelta(days=days_until_first + (n - 1) * 7)


def last_weekday_of_month(year: int, month: int, weekday: int) -> date:
    """Return the last occurrence of ``weekday`` (0=Sunday) in a month."""
    last_day = date(year, month, 1) + relativedelta(day=31)
    days_to_subtract = (weekday_index(last_day) - weekday) % 7
    return last_day - timedelta(days=days_to_subtract)


def calculate_buss_und_bettag(year: int) -> date:
    """Return the Wednesday strictly before November 23 (always Nov 16..22)."""
    nov23 = date(year, 11, 23)
    days_to_subtract = (weekday_index(nov23) + 4) % 7
    if days_to_subtract == 0:
        days_to_subtract = 7
    return nov23 - timedelta(days=days_to_subtract)


def calculate_victoria_day(year: int) -> date:
    """Canadian Victoria Day: the Monday on or before May 24."""
    may24 = date(year, 5, 24)
    return may24 - timedelta(days=(weekday_index(may24) - Weekday.MONDAY) % 7)


def anniversary_date(month_day: str, year: int) -> date:
    """Place an ``MM-DD`` key into ``year``; Feb 29 falls back to Feb 28 in common years.

    Raises:
        UnknownPatternError: If ``month_day`` is not a valid ``MM-DD`` key.
    """
    pattern = parse_pattern(month_day)
    if not isinstance(pattern, FixedDatePattern):
        raise UnknownPatternError(month_day)
    try:
        return date(year, pattern.month, pattern.day)
    except ValueError:
        return date(year, pattern.month, pattern.day - 1)


DEFAULT_NAMED_RULES: Mapping[str, NamedRule] = MappingProxyType(
    {
        # Germany
        "buss-und-bettag": calculate_buss_und_bettag,
        # United States
        "thanksgiving-us": lambda y: nth_weekday_of_month(y, 11, Weekday.THURSDAY, 4),
        "memorial-day": lambda y: last_weekday_of_month(y, 5, Weekday.MONDAY),
        "labor-day-us": lambda y: nth_weekday_of_month(y, 9, Weekday.MONDAY, 1),
        "mlk-day": lambda y: nth_weekday_of_month(y, 1, Weekday.MONDAY, 3),
        "presidents-day": lambda y: nth_weekday_of_month(y, 2, Weekday.MONDAY, 3),
        "columbus-day": lambda y: nth_weekday_of_month(y, 10, Weekday.MONDAY, 2),
        # United Kingdom
        "early-may-bank-holiday": lambda y: nth_weekday_of_month(y, 5, Weekday.MONDAY, 1),
        "spring-bank-holiday": lambda y: last_weekday_of_month(y, 5, Weekday.MONDAY),
        "summer-bank-holiday": lambda y: last_weekday_of_month(y, 8, Weekday.MONDAY),
        # Canada
        "thanksgiving-ca": lambda y: nth_weekday_of_month(y, 10, Weekday.MONDAY, 2),
        "victoria-day": calculate_victoria_day,
        # Australia
        "queens-birthday-au": lambda y: nth_weekday_of_month(y, 6, Weekday.MONDAY, 2),
        # Daylight saving time (Europe)
        "dst-spring": lambda y: last_weekday_of_month(y, 3, Weekday.SUNDAY),
        "dst-autumn": lambda y: last_weekday_of_month(y, 10, Weekday.SUNDAY),
    }
)


class DatePatternResolver:
    """Resolve date patterns for arbitrary years in ``[1, 9999]``.

    The resolver holds no mutable state; one instance can be shared by any
    number of concurrent callers.
    """

    def __init__(self, named_rules: Optional[Mapping[str, NamedRule]] = None):
        """Initialize resolver.

        Args:
            named_rules: Rule table for symbolic identifiers. Defaults to
                :data:`DEFAULT_NAMED_RULES`.
        """
        rules = DEFAULT_NAMED_RULES if named_rules is None else named_rules
        self.named_rules: Mapping[str, NamedRule] = MappingProxyType(dict(rules))

    def resolve(self, pattern: Union[str, DatePattern], year: int) -> date:
        """Resolve ``pattern`` for ``year``.

        Args:
            pattern: Pattern string or an already parsed variant
            year: Target year (1..9999)

        Returns:
            The concrete date

        Raises:
            UnknownPatternError: If the pattern is malformed or names no known rule
            DateResolutionError: If the pattern has no date in ``year``
        """
        parsed = parse_pattern(pattern) if isinstance(pattern, str) else pattern

        if not MINYEAR <= year <= MAXYEAR:
            raise DateResolutionError(f"Year {year} is outside {MINYEAR}..{MAXYEAR}")

        try:
            return self._resolve_parsed(parsed, year)
        except (OverflowError, ValueError) as e:
            raise DateResolutionError(
                f"Pattern {pattern!r} has no date in year {year}: {e}"
            ) from e

    def _resolve_parsed(self, pattern: DatePattern, year: int) -> date:
        if isinstance(pattern, FixedDatePattern):
            return date(year, pattern.month, pattern.day)

        if isinstance(pattern, EasterPattern):
            return calculate_easter(year) + timedelta(days=pattern.offset)

        if isinstance(pattern, NamedPattern):
            rule = self.named_rules.get(pattern.name)
            if rule is None:
                raise UnknownPatternError(pattern.name)
            return rule(year)

        if isinstance(pattern, WeekdayOfMonthPattern):
            if pattern.occurrence is Occurrence.LAST:
                return last_weekday_of_month(year, pattern.month, pattern.weekday)
            return nth_weekday_of_month(
                year, pattern.month, pattern.weekday, pattern.occurrence.ordinal
            )

        raise TypeError(f"Unsupported date pattern variant: {type(pattern).__name__}")


_default_resolver = DatePatternResolver()


def resolve(pattern: Union[str, DatePattern], year: int) -> date:
    """Resolve ``pattern`` for ``year`` with the default named-rule table."""
    return _default_resolver.resolve(pattern, year)
