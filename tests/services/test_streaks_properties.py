"""Property-based tests for streaks_service using Hypothesis.

These tests verify properties that must always hold, regardless of the
input series. They complement the example-based tests by exploring edge
cases automatically.
"""

from datetime import date, timedelta

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from schemas import ActivityDay
from services.streaks_service import compute_stats, total_contributions

pytestmark = pytest.mark.unit

# =============================================================================
# Custom Strategies
# =============================================================================


@st.composite
def day_series(draw, min_size: int = 0, max_size: int = 60) -> list[ActivityDay]:
    """Generate dense ascending series starting on an arbitrary date."""
    start = draw(st.dates(min_value=date(2015, 1, 1), max_value=date(2030, 1, 1)))
    counts = draw(
        st.lists(
            st.integers(min_value=0, max_value=20),
            min_size=min_size,
            max_size=max_size,
        )
    )
    return [
        ActivityDay(date=start + timedelta(days=i), count=count)
        for i, count in enumerate(counts)
    ]


break_weekday_sets = st.frozensets(st.integers(min_value=0, max_value=6))

hypothesis_settings = settings(
    max_examples=100,
    suppress_health_check=[HealthCheck.too_slow],
)


# =============================================================================
# Property Tests
# =============================================================================


class TestTotalProperties:
    @given(days=day_series(), data=st.data())
    @hypothesis_settings
    def test_total_ignores_order(self, days: list[ActivityDay], data):
        """Property: total is the sum of counts, whatever the order."""
        shuffled = data.draw(st.permutations(days))

        assert total_contributions(shuffled) == sum(day.count for day in days)
        assert compute_stats(days).total == total_contributions(shuffled)


class TestStreakInvariants:
    @given(days=day_series(), break_weekdays=break_weekday_sets)
    @hypothesis_settings
    def test_longest_streak_gte_current_streak(
        self, days: list[ActivityDay], break_weekdays: frozenset[int]
    ):
        """Property: longest_streak >= current_streak always."""
        stats = compute_stats(days, break_weekdays)

        assert stats.longest_streak >= stats.current_streak

    @given(days=day_series(), break_weekdays=break_weekday_sets)
    @hypothesis_settings
    def test_streaks_bounded_by_active_days(
        self, days: list[ActivityDay], break_weekdays: frozenset[int]
    ):
        """Property: a streak never counts more days than are active."""
        active = sum(1 for day in days if day.count > 0)
        stats = compute_stats(days, break_weekdays)

        assert stats.longest_streak <= active
        assert stats.current_streak <= active

    @given(days=day_series(), break_weekdays=break_weekday_sets)
    @hypothesis_settings
    def test_ranges_empty_exactly_when_streak_is_zero(
        self, days: list[ActivityDay], break_weekdays: frozenset[int]
    ):
        stats = compute_stats(days, break_weekdays)

        assert stats.longest_range.is_empty == (stats.longest_streak == 0)
        assert stats.current_range.is_empty == (stats.current_streak == 0)

    @given(days=day_series(min_size=1), break_weekdays=break_weekday_sets)
    @hypothesis_settings
    def test_range_bounds_are_active_days_in_order(
        self, days: list[ActivityDay], break_weekdays: frozenset[int]
    ):
        """Property: non-empty streak ranges start and end on active days."""
        counts = {day.date: day.count for day in days}
        stats = compute_stats(days, break_weekdays)

        for date_range in (stats.longest_range, stats.current_range):
            if date_range.is_empty:
                continue
            assert date_range.start <= date_range.end
            assert counts[date_range.start] > 0
            assert counts[date_range.end] > 0

    @given(days=day_series(min_size=1), break_weekdays=break_weekday_sets)
    @hypothesis_settings
    def test_current_range_ends_at_last_active_day(
        self, days: list[ActivityDay], break_weekdays: frozenset[int]
    ):
        stats = compute_stats(days, break_weekdays)
        if stats.current_streak == 0:
            return

        last_active = max(day.date for day in days if day.count > 0)
        assert stats.current_range.end == last_active

    @given(days=day_series(), break_weekdays=break_weekday_sets)
    @hypothesis_settings
    def test_all_days_active_is_one_streak(
        self, days: list[ActivityDay], break_weekdays: frozenset[int]
    ):
        active_days = [day.model_copy(update={"count": day.count + 1}) for day in days]

        stats = compute_stats(active_days, break_weekdays)

        assert stats.longest_streak == len(active_days)
        assert stats.current_streak == len(active_days)

    @given(days=day_series(min_size=1))
    @hypothesis_settings
    def test_overall_range_ends_at_last_day(self, days: list[ActivityDay]):
        stats = compute_stats(days)

        assert stats.overall_range.end == days[-1].date
        assert stats.overall_range.start <= stats.overall_range.end
