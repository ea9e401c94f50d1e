"""Unit tests for business-day arithmetic."""

from datetime import UTC, datetime, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.delivery.core.calendar import add_workdays, is_workday

pytestmark = pytest.mark.unit

# 2026-01-05 is a Monday
MONDAY = datetime(2026, 1, 5, 9, 30, tzinfo=UTC)
FRIDAY = MONDAY + timedelta(days=4)
SATURDAY = MONDAY + timedelta(days=5)


class TestIsWorkday:
    def test_weekdays_are_workdays(self):
        for offset in range(5):
            assert is_workday(MONDAY + timedelta(days=offset))

    def test_weekend_is_not(self):
        assert not is_workday(SATURDAY)
        assert not is_workday(SATURDAY + timedelta(days=1))


class TestAddWorkdays:
    def test_zero_returns_start(self):
        assert add_workdays(FRIDAY, 0) == FRIDAY

    def test_within_week(self):
        assert add_workdays(MONDAY, 3) == MONDAY + timedelta(days=3)

    def test_friday_plus_one_is_monday(self):
        assert add_workdays(FRIDAY, 1) == MONDAY + timedelta(days=7)

    def test_starting_on_weekend(self):
        """Counting from a Saturday, the first workday is Monday."""
        assert add_workdays(SATURDAY, 1) == MONDAY + timedelta(days=7)

    def test_two_full_weeks(self):
        assert add_workdays(MONDAY, 10) == MONDAY + timedelta(days=14)

    def test_time_of_day_preserved(self):
        result = add_workdays(MONDAY, 2)
        assert (result.hour, result.minute) == (9, 30)
        assert result.tzinfo is UTC

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            add_workdays(MONDAY, -1)


class TestAddWorkdaysProperties:
    @given(
        start_offset=st.integers(min_value=0, max_value=365),
        workdays=st.integers(min_value=1, max_value=60),
    )
    def test_result_is_workday_after_start(self, start_offset: int, workdays: int):
        start = MONDAY + timedelta(days=start_offset)
        result = add_workdays(start, workdays)
        assert result > start
        assert is_workday(result)

    @given(
        start_offset=st.integers(min_value=0, max_value=365),
        workdays=st.integers(min_value=0, max_value=60),
    )
    def test_calendar_span_bounded(self, start_offset: int, workdays: int):
        """Never more than two weekend days per five workdays, plus one weekend of slack."""
        start = MONDAY + timedelta(days=start_offset)
        span = (add_workdays(start, workdays) - start).days
        assert workdays <= span <= workdays + 2 * (workdays // 5) + 2
