"""Streak calculation over a contribution day series.

Streak rules:
- A day is active when its count is above zero
- Break days (Friday and Saturday by default) never end a streak when
  inactive, and never extend one either
- Any other inactive day ends the streak
- longest_streak is the best run anywhere in the series
- current_streak is the run ending at the most recent day

All functions here are pure and expect days sorted ascending by date.
"""

from collections.abc import Collection, Sequence

from schemas import ActivityDay, ContributionStats, DateRange

FRIDAY = 4
SATURDAY = 5
DEFAULT_BREAK_WEEKDAYS: frozenset[int] = frozenset({FRIDAY, SATURDAY})


def is_break_day(
    day: ActivityDay, break_weekdays: Collection[int] = DEFAULT_BREAK_WEEKDAYS
) -> bool:
    return day.date.weekday() in break_weekdays


def total_contributions(days: Sequence[ActivityDay]) -> int:
    return sum(day.count for day in days)


def longest_streak(
    days: Sequence[ActivityDay],
    break_weekdays: Collection[int] = DEFAULT_BREAK_WEEKDAYS,
) -> tuple[int, DateRange]:
    """Find the longest run of active days, walking forward.

    Returns:
        Tuple of (length, range). The range spans the first and last active
        day of the run and is empty when no day is active.
    """
    best = 0
    best_range = DateRange()
    rolling = 0
    rolling_start = None

    for day in days:
        if day.is_active:
            if rolling == 0:
                rolling_start = day.date
            rolling += 1
            if rolling > best:
                best = rolling
                best_range = DateRange(start=rolling_start, end=day.date)
        elif not is_break_day(day, break_weekdays):
            rolling = 0
            rolling_start = None

    return best, best_range


def current_streak(
    days: Sequence[ActivityDay],
    break_weekdays: Collection[int] = DEFAULT_BREAK_WEEKDAYS,
) -> tuple[int, DateRange]:
    """Count the run ending at the most recent day, walking backward.

    Inactive break days are stepped over; the first inactive non-break day
    stops the walk.

    Returns:
        Tuple of (length, range). The range end is the most recent active day.
    """
    streak = 0
    start = None
    end = None

    for day in reversed(days):
        if day.is_active:
            streak += 1
            start = day.date
            if end is None:
                end = day.date
        elif is_break_day(day, break_weekdays):
            continue
        else:
            break

    if streak == 0:
        return 0, DateRange()
    return streak, DateRange(start=start, end=end)


def overall_range(days: Sequence[ActivityDay]) -> DateRange:
    """First active day (or first day) through the last day of the series."""
    if not days:
        return DateRange()
    first_active = next((day for day in days if day.is_active), days[0])
    return DateRange(start=first_active.date, end=days[-1].date)


def compute_stats(
    days: Sequence[ActivityDay],
    break_weekdays: Collection[int] = DEFAULT_BREAK_WEEKDAYS,
) -> ContributionStats:
    """Derive totals and streaks from an ascending day series."""
    longest, longest_range = longest_streak(days, break_weekdays)
    current, current_range = current_streak(days, break_weekdays)

    return ContributionStats(
        total=total_contributions(days),
        longest_streak=longest,
        current_streak=current,
        longest_range=longest_range,
        current_range=current_range,
        overall_range=overall_range(days),
    )
