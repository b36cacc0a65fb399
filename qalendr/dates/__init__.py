"""Date pattern parsing and resolution."""

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
from .resolver import (
    DEFAULT_NAMED_RULES,
    DatePatternResolver,
    anniversary_date,
    calculate_buss_und_bettag,
    calculate_easter,
    last_weekday_of_month,
    nth_weekday_of_month,
    resolve,
    weekday_index,
)

__all__ = [
    "DEFAULT_NAMED_RULES",
    "DatePattern",
    "DatePatternResolver",
    "EasterPattern",
    "FixedDatePattern",
    "NamedPattern",
    "Occurrence",
    "Weekday",
    "WeekdayOfMonthPattern",
    "anniversary_date",
    "calculate_buss_und_bettag",
    "calculate_easter",
    "last_weekday_of_month",
    "nth_weekday_of_month",
    "parse_pattern",
    "resolve",
    "weekday_index",
]
