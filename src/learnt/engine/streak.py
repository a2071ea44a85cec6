"""Capture streaks and streak milestones.

A streak counts consecutive calendar days with at least one captured entry.
Today gets one day of grace: if nothing was captured yet today but
yesterday has an entry, the streak still counts back from yesterday.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from learnt.utils.timeutils import to_day

# Streak lengths (days) that trigger a one-time celebration
MILESTONES: tuple[int, ...] = (3, 7, 14, 30, 60, 90, 180, 365)

CELEBRATION_MESSAGES: dict[int, str] = {
    3: "You're building momentum!",
    7: "One week strong!",
    14: "Two weeks of growth!",
    30: "A month of learning!",
    60: "Two months dedicated!",
    90: "A quarter of wisdom!",
    180: "Half a year of insights!",
    365: "A year of transformation!",
}
DEFAULT_CELEBRATION_MESSAGE = "Amazing progress!"


@dataclass(frozen=True)
class StreakState:
    """Streak numbers shown to the user.

    Attributes:
        current_streak: Consecutive capture days ending today or yesterday
        longest_streak: Persisted high-water mark
        last_celebrated_milestone: Highest milestone already celebrated (0 = none)
        last_celebrated_date: Day of that celebration
    """

    current_streak: int = 0
    longest_streak: int = 0
    last_celebrated_milestone: int = 0
    last_celebrated_date: date | None = None


@dataclass(frozen=True)
class MilestoneCheck:
    """Result of a milestone check.

    ``reset`` is True when the stored last-celebrated marker must be cleared
    because the streak broke and was rebuilt below it.
    """

    milestone: int | None
    reset: bool = False


@dataclass(frozen=True)
class CelebratedMilestone:
    milestone: int
    date: date


def current_streak(capture_dates: Iterable[date], today: date) -> int:
    """Count consecutive capture days ending today, or yesterday as grace."""
    days = {to_day(d) for d in capture_dates}
    check = to_day(today)

    if check not in days:
        check -= timedelta(days=1)
        if check not in days:
            return 0

    streak = 0
    while check in days:
        streak += 1
        check -= timedelta(days=1)
    return streak


def longest_streak(capture_dates: Iterable[date]) -> int:
    """Longest run of consecutive capture days anywhere in history."""
    days = sorted({to_day(d) for d in capture_dates})
    best = 0
    run = 0
    previous: date | None = None
    for day in days:
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        best = max(best, run)
        previous = day
    return best


def highest_milestone_reached(streak: int) -> int | None:
    reached = [m for m in MILESTONES if m <= streak]
    return reached[-1] if reached else None


def check_for_new_milestone(
    current_streak_value: int,
    last_celebrated_milestone: int,
    last_celebrated_date: date | None,
    today: date,
) -> MilestoneCheck:
    """Decide whether the current streak crossed a milestone not yet celebrated.

    If the last celebration is older than yesterday and the streak is now
    below the celebrated milestone, the marker is treated as reset to 0 so a
    rebuilt streak gets its milestones celebrated again.
    """
    last = last_celebrated_milestone
    reset = False
    if last_celebrated_date is not None:
        gap = (to_day(today) - to_day(last_celebrated_date)).days
        if gap not in (0, 1) and current_streak_value < last:
            last = 0
            reset = True

    highest = highest_milestone_reached(current_streak_value)
    if highest is not None and highest > last:
        return MilestoneCheck(milestone=highest, reset=reset)
    return MilestoneCheck(milestone=None, reset=reset)


def mark_milestone_celebrated(milestone: int, today: date) -> CelebratedMilestone:
    """Record to persist once a milestone has been shown."""
    return CelebratedMilestone(milestone=milestone, date=to_day(today))


def next_milestone(streak: int) -> int | None:
    return next((m for m in MILESTONES if m > streak), None)


def days_until_next_milestone(streak: int) -> int | None:
    upcoming = next_milestone(streak)
    if upcoming is None:
        return None
    return upcoming - streak


def celebration_message(milestone: int) -> str:
    return CELEBRATION_MESSAGES.get(milestone, DEFAULT_CELEBRATION_MESSAGE)


def compute_streak_state(
    capture_dates: Iterable[date],
    today: date,
    stored_longest: int = 0,
    last_celebrated_milestone: int = 0,
    last_celebrated_date: date | None = None,
) -> StreakState:
    """Bundle current and longest streak, never lowering the stored high-water mark."""
    days = {to_day(d) for d in capture_dates}
    current = current_streak(days, today)
    longest = max(stored_longest, longest_streak(days), current)
    return StreakState(
        current_streak=current,
        longest_streak=longest,
        last_celebrated_milestone=last_celebrated_milestone,
        last_celebrated_date=last_celebrated_date,
    )
