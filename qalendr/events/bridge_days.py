"""Bridge day derivation.

A bridge day is a working day between a public holiday and a weekend. Taking
it off turns a single holiday into a long weekend:

    ==========  ==========================  =================
    Holiday     Bridge day(s)               Result
    ==========  ==========================  =================
    Tuesday     Monday before               1 day -> 4 free
    Wednesday   Thursday and Friday after   2 days -> 5 free
    Thursday    Friday after                1 day -> 4 free
    ==========  ==========================  =================

Holidays on any other weekday already adjoin a weekend or fall on one and
produce nothing.
"""

import logging
import re
from collections.abc import Sequence
from datetime import timedelta
from typing import NamedTuple, Optional

from ..dates.patterns import Weekday
from ..dates.resolver import weekday_index
from .models import CalendarEvent, EventCategory

logger = logging.getLogger(__name__)

_REGION_CODE = r"[A-Z]{2}(?:-[A-Z0-9]+)?"
_REGION_SUFFIX_RE = re.compile(rf"\s*\((?:{_REGION_CODE})(?:, {_REGION_CODE})*\)$")


class BridgePlan(NamedTuple):
    """Offsets (in days, relative to the holiday) of the bridge and free spans."""

    bridge_start: int
    bridge_end: int
    free_start: int
    free_end: int


BRIDGE_PLANS = {
    Weekday.TUESDAY: BridgePlan(bridge_start=-1, bridge_end=-1, free_start=-3, free_end=0),
    Weekday.WEDNESDAY: BridgePlan(bridge_start=1, bridge_end=2, free_start=0, free_end=4),
    Weekday.THURSDAY: BridgePlan(bridge_start=1, bridge_end=1, free_start=0, free_end=3),
}


def strip_region_suffix(title: str) -> str:
    """Remove a trailing ``" (DE-BY, DE-BW)"`` region list from a holiday title."""
    return _REGION_SUFFIX_RE.sub("", title)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def bridge_day_for(holiday: CalendarEvent) -> Optional[CalendarEvent]:
    """Build the bridge event for a single holiday, if it has one.

    Args:
        holiday: Resolved public holiday

    Returns:
        The bridge event, or None when the holiday is not on a Tuesday,
        Wednesday or Thursday
    """
    plan = BRIDGE_PLANS.get(Weekday(weekday_index(holiday.start_date)))
    if plan is None:
        return None

    day = holiday.start_date
    start = day + timedelta(days=plan.bridge_start)
    end = day + timedelta(days=plan.bridge_end)
    vacation_days = (end - start).days + 1

    name = strip_region_suffix(holiday.title)
    free_start = day + timedelta(days=plan.free_start)
    free_end = day + timedelta(days=plan.free_end)
    free_days = (free_end - free_start).days + 1

    return CalendarEvent(
        id=f"bridge-{holiday.id}",
        title=f"Bridge day: {name}",
        start_date=start,
        end_date=end,
        category=EventCategory.BRIDGE_DAYS,
        region=holiday.region,
        description=(
            f"{name}: {_plural(vacation_days, 'vacation day')} → "
            f"{_plural(free_days, 'free day')} "
            f"({free_start.isoformat()} to {free_end.isoformat()})"
        ),
    )


def derive_bridge_days(holidays: Sequence[CalendarEvent]) -> list[CalendarEvent]:
    """Derive bridge day events from resolved public holidays, in holiday order."""
    bridges = []
    for holiday in holidays:
        bridge = bridge_day_for(holiday)
        if bridge is not None:
            bridges.append(bridge)
    logger.debug("Derived %d bridge days from %d holidays", len(bridges), len(holidays))
    return bridges
