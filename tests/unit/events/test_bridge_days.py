"""Tests for bridge day derivation."""

from datetime import date

import pytest

from qalendr.events.bridge_days import bridge_day_for, derive_bridge_days, strip_region_suffix
from qalendr.events.models import EventCategory
from tests.conftest import make_event

pytestmark = pytest.mark.unit


def _holiday(event_id: str, day: date, title: str = "Holiday", region: str = None):
    return make_event(
        event_id, day, title=title, category=EventCategory.PUBLIC_HOLIDAYS, region=region
    )


class TestBridgeDayFor:
    """Test the per-weekday bridge rules."""

    def test_bridge_when_thursday_then_following_friday(self) -> None:
        holiday = _holiday("de-ascension-2025", date(2025, 5, 29), "Ascension Day")

        bridge = bridge_day_for(holiday)

        assert bridge.id == "bridge-de-ascension-2025"
        assert bridge.title == "Bridge day: Ascension Day"
        assert bridge.start_date == bridge.end_date == date(2025, 5, 30)
        assert bridge.category is EventCategory.BRIDGE_DAYS
        assert bridge.description == (
            "Ascension Day: 1 vacation day → 4 free days (2025-05-29 to 2025-06-01)"
        )

    def test_bridge_when_tuesday_then_preceding_monday(self) -> None:
        bridge = bridge_day_for(_holiday("h", date(2025, 9, 30), "Feast"))

        assert bridge.start_date == bridge.end_date == date(2025, 9, 29)
        assert bridge.description == "Feast: 1 vacation day → 4 free days (2025-09-27 to 2025-09-30)"

    def test_bridge_when_wednesday_then_thursday_and_friday(self) -> None:
        bridge = bridge_day_for(_holiday("de-new-year-2025", date(2025, 1, 1), "New Year's Day"))

        assert bridge.start_date == date(2025, 1, 2)
        assert bridge.end_date == date(2025, 1, 3)
        assert bridge.duration_days == 2
        assert bridge.description == (
            "New Year's Day: 2 vacation days → 5 free days (2025-01-01 to 2025-01-05)"
        )

    @pytest.mark.parametrize(
        "day",
        [
            date(2025, 1, 6),  # Monday
            date(2025, 10, 3),  # Friday
            date(2025, 11, 1),  # Saturday
            date(2025, 4, 20),  # Sunday
        ],
    )
    def test_bridge_when_other_weekday_then_none(self, day: date) -> None:
        assert bridge_day_for(_holiday("h", day)) is None

    def test_bridge_when_regional_title_then_suffix_stripped_and_region_kept(self) -> None:
        holiday = _holiday(
            "de-corpus-christi-2025", date(2025, 6, 19), "Corpus Christi (DE-BY)", region="DE-BY"
        )

        bridge = bridge_day_for(holiday)

        assert bridge.title == "Bridge day: Corpus Christi"
        assert bridge.region == "DE-BY"
        assert bridge.description.startswith("Corpus Christi: ")

    def test_bridge_when_parenthesised_name_then_name_kept(self) -> None:
        holiday = _holiday("gb-boxing-day", date(2025, 12, 25), "Boxing Day (substitute)")

        bridge = bridge_day_for(holiday)

        assert bridge.title == "Bridge day: Boxing Day (substitute)"


class TestDeriveBridgeDays:
    """Test bridge derivation over a holiday list."""

    def test_derive_when_holiday_list_then_one_per_eligible_holiday(self) -> None:
        holidays = [
            _holiday("new-year", date(2025, 1, 1)),
            _holiday("epiphany", date(2025, 1, 6)),
            _holiday("labour-day", date(2025, 5, 1)),
            _holiday("christmas", date(2025, 12, 25)),
            _holiday("st-stephen", date(2025, 12, 26)),
        ]

        bridges = derive_bridge_days(holidays)

        assert [b.id for b in bridges] == [
            "bridge-new-year",
            "bridge-labour-day",
            "bridge-christmas",
        ]
        assert bridges[1].start_date == date(2025, 5, 2)
        assert bridges[2].start_date == date(2025, 12, 26)

    def test_derive_when_bridge_falls_on_other_holiday_then_still_suggested(self) -> None:
        holidays = [
            _holiday("us-christmas-day-2025", date(2025, 12, 25), "Christmas Day"),
            _holiday("gb-boxing-day-2025", date(2025, 12, 26), "Boxing Day"),
        ]

        bridges = derive_bridge_days(holidays)

        assert [(b.id, b.start_date) for b in bridges] == [
            ("bridge-us-christmas-day-2025", date(2025, 12, 26))
        ]

    def test_derive_when_no_holidays_then_empty(self) -> None:
        assert derive_bridge_days([]) == []


class TestStripRegionSuffix:
    """Test title cleanup."""

    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("Corpus Christi (DE-BY, DE-NW)", "Corpus Christi"),
            ("New Year's Day", "New Year's Day"),
            ("Day (of) Unity", "Day (of) Unity"),
            ("National Day (AT)", "National Day"),
            ("Boxing Day (substitute)", "Boxing Day (substitute)"),
            ("Holiday (DE-BY, de-nw)", "Holiday (DE-BY, de-nw)"),
        ],
    )
    def test_strip_when_title_then_trailing_list_removed(self, title: str, expected: str) -> None:
        assert strip_region_suffix(title) == expected
