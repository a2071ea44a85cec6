"""Spaced repetition review schedule - fixed interval table with graduation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Any

from learnt.core.entry import Entry, ReviewOutcome
from learnt.utils.timeutils import add_days, start_of_day

logger = logging.getLogger(__name__)

# Days until the next review, indexed by successful review count:
# activation = 1d, after 1st review = 7d, after 2nd = 16d, after 3rd = 35d
DEFAULT_INTERVALS: tuple[int, ...] = (1, 7, 16, 35)
DEFAULT_GRADUATION_THRESHOLD = 4
RETRY_INTERVAL = 1


class ReviewPipelineInactiveError(ValueError):
    """Raised when a review is recorded for an entry that was never activated."""


@dataclass(frozen=True)
class ReviewConfig:
    """Tunables for the review scheduler.

    Attributes:
        graduation_threshold: Successful reviews needed to graduate.
        intervals: Interval table in days, indexed by successful review count.
    """

    graduation_threshold: int = DEFAULT_GRADUATION_THRESHOLD
    intervals: tuple[int, ...] = field(default=DEFAULT_INTERVALS)

    def __post_init__(self) -> None:
        if isinstance(self.graduation_threshold, bool) or not isinstance(
            self.graduation_threshold, int
        ):
            raise ValueError(
                f"graduation_threshold must be an int, got {self.graduation_threshold!r}"
            )
        if self.graduation_threshold < 1:
            raise ValueError(
                f"graduation_threshold must be >= 1, got {self.graduation_threshold}"
            )
        if not self.intervals:
            raise ValueError("intervals must not be empty")
        if any(days < 1 for days in self.intervals):
            raise ValueError(f"intervals must all be >= 1, got {list(self.intervals)}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "graduation_threshold": self.graduation_threshold,
            "intervals": list(self.intervals),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReviewConfig:
        return cls(
            graduation_threshold=int(
                data.get("graduation_threshold", DEFAULT_GRADUATION_THRESHOLD)
            ),
            intervals=tuple(int(days) for days in data.get("intervals", DEFAULT_INTERVALS)),
        )


DEFAULT_REVIEW_CONFIG = ReviewConfig()


def interval_for(review_count: int, config: ReviewConfig = DEFAULT_REVIEW_CONFIG) -> int:
    """Interval in days for an entry with ``review_count`` successful reviews."""
    index = min(max(review_count, 0), len(config.intervals) - 1)
    return config.intervals[index]


def _next_review(now: datetime, days: int) -> datetime:
    return add_days(start_of_day(now), days)


def activate_review_pipeline(
    entry: Entry,
    now: datetime,
    config: ReviewConfig = DEFAULT_REVIEW_CONFIG,
) -> Entry:
    """Start the review schedule for an entry that just got its first reflection.

    Progress is reset unconditionally, so only call this on first activation.
    """
    interval = interval_for(0, config)
    logger.debug("Activating review pipeline for entry %s", entry.id)
    return replace(
        entry,
        first_reflection_date=now,
        next_review_date=_next_review(now, interval),
        review_interval=interval,
        review_count=0,
        is_graduated=False,
        updated_at=now,
    )


def review_graduated_entry(entry: Entry) -> Entry:
    """Re-reviewing a graduated entry is presentation-only: nothing changes."""
    return entry


def record_review(
    entry: Entry,
    outcome: ReviewOutcome,
    now: datetime,
    config: ReviewConfig = DEFAULT_REVIEW_CONFIG,
) -> Entry:
    """Return the entry after applying one review outcome.

    Args:
        entry: The reviewed entry (must have an active pipeline)
        outcome: GOT_IT advances along the interval table, REVIEW_AGAIN
            brings the entry back tomorrow without losing progress
        now: Current time
        config: Graduation threshold and interval table

    Returns:
        New Entry with updated review_count, review_interval,
        next_review_date and is_graduated

    Raises:
        ValueError: ``outcome`` is not a ReviewOutcome value.
        ReviewPipelineInactiveError: The entry was never activated.
    """
    outcome = ReviewOutcome(outcome)
    if entry.is_graduated:
        return review_graduated_entry(entry)
    if not entry.has_active_pipeline:
        raise ReviewPipelineInactiveError(
            f"Entry {entry.id} has no active review pipeline; add a reflection first"
        )

    if outcome is ReviewOutcome.REVIEW_AGAIN:
        return replace(
            entry,
            review_interval=RETRY_INTERVAL,
            next_review_date=_next_review(now, RETRY_INTERVAL),
            updated_at=now,
        )

    review_count = entry.review_count + 1
    if review_count >= config.graduation_threshold:
        logger.debug("Entry %s graduated after %d reviews", entry.id, review_count)
        return replace(
            entry,
            review_count=review_count,
            is_graduated=True,
            next_review_date=None,
            updated_at=now,
        )

    interval = interval_for(review_count, config)
    return replace(
        entry,
        review_count=review_count,
        review_interval=interval,
        next_review_date=_next_review(now, interval),
        updated_at=now,
    )


@dataclass(frozen=True)
class ReviewStreak:
    """Consecutive days on which at least one review was recorded."""

    current: int = 0
    longest: int = 0
    last_review_date: date | None = None


def update_review_streak(streak: ReviewStreak, today: date) -> ReviewStreak:
    """Fold one review done on ``today`` into the review-day streak."""
    last = streak.last_review_date
    if last == today:
        current = max(streak.current, 1)
    elif last is not None and last == today - timedelta(days=1):
        current = streak.current + 1
    else:
        current = 1

    return ReviewStreak(
        current=current,
        longest=max(streak.longest, current),
        last_review_date=today,
    )
