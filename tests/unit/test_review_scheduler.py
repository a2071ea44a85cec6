"""Unit tests for the review scheduler."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from learnt.core.entry import ReviewOutcome
from learnt.engine.review_scheduler import (
    DEFAULT_INTERVALS,
    ReviewConfig,
    ReviewPipelineInactiveError,
    ReviewStreak,
    activate_review_pipeline,
    interval_for,
    record_review,
    review_graduated_entry,
    update_review_streak,
)
from tests.factories import make_entry

DAY0 = datetime(2024, 1, 1, 9, 15)


def day(n: int, hour: int = 10) -> datetime:
    return datetime(2024, 1, 1, hour) + timedelta(days=n)


def midnight(n: int) -> datetime:
    return datetime(2024, 1, 1) + timedelta(days=n)


def reflected_entry(now: datetime = DAY0):
    entry = make_entry(now=now, surprise="It was simpler than I thought")
    return activate_review_pipeline(entry, now)


class TestReviewConfig:
    def test_defaults(self) -> None:
        cfg = ReviewConfig()
        assert cfg.graduation_threshold == 4
        assert cfg.intervals == (1, 7, 16, 35)

    @pytest.mark.parametrize("threshold", [0, -1])
    def test_non_positive_threshold_rejected(self, threshold: int) -> None:
        with pytest.raises(ValueError, match="graduation_threshold"):
            ReviewConfig(graduation_threshold=threshold)

    def test_empty_intervals_rejected(self) -> None:
        with pytest.raises(ValueError, match="intervals"):
            ReviewConfig(intervals=())

    def test_zero_interval_rejected(self) -> None:
        with pytest.raises(ValueError, match="intervals"):
            ReviewConfig(intervals=(1, 0, 5))

    def test_from_dict(self) -> None:
        cfg = ReviewConfig.from_dict({"graduation_threshold": 3, "intervals": [1, 5, 10]})
        assert cfg.graduation_threshold == 3
        assert cfg.intervals == (1, 5, 10)
        assert ReviewConfig.from_dict({}) == ReviewConfig()

    def test_frozen(self) -> None:
        cfg = ReviewConfig()
        with pytest.raises(AttributeError):
            cfg.graduation_threshold = 5  # type: ignore[misc]


class TestIntervalFor:
    def test_table_lookup(self) -> None:
        assert [interval_for(i) for i in range(4)] == list(DEFAULT_INTERVALS)

    def test_past_table_uses_last_interval(self) -> None:
        assert interval_for(4) == 35
        assert interval_for(99) == 35


class TestActivation:
    def test_activation_schedules_tomorrow_midnight(self) -> None:
        entry = reflected_entry(DAY0)
        assert entry.next_review_date == midnight(1)
        assert entry.review_interval == 1
        assert entry.review_count == 0
        assert entry.is_graduated is False
        assert entry.first_reflection_date == DAY0

    def test_activation_late_at_night(self) -> None:
        late = datetime(2024, 1, 31, 23, 59)
        entry = activate_review_pipeline(make_entry(now=late, question="why?"), late)
        assert entry.next_review_date == datetime(2024, 2, 1)

    def test_activation_returns_new_entry(self) -> None:
        original = make_entry(now=DAY0, question="why?")
        activated = activate_review_pipeline(original, DAY0)
        assert activated is not original
        assert original.next_review_date is None


class TestRecordReview:
    def test_got_it_interval_progression(self) -> None:
        """Successive GOT_IT answers use 7, 16 then graduate (1 was activation)."""
        entry = reflected_entry()
        assert entry.next_review_date == midnight(1)

        entry = record_review(entry, ReviewOutcome.GOT_IT, day(1))
        assert entry.review_interval == 7
        assert entry.next_review_date == midnight(8)

        entry = record_review(entry, ReviewOutcome.GOT_IT, day(8))
        assert entry.review_interval == 16
        assert entry.next_review_date == midnight(24)

        entry = record_review(entry, ReviewOutcome.GOT_IT, day(24))
        assert entry.review_interval == 35
        assert entry.next_review_date == midnight(59)

    def test_four_got_it_graduates(self) -> None:
        entry = reflected_entry()
        for n in (1, 8, 24, 59):
            entry = record_review(entry, ReviewOutcome.GOT_IT, day(n))

        assert entry.is_graduated is True
        assert entry.review_count == 4
        assert entry.next_review_date is None

    def test_review_again_keeps_count(self) -> None:
        entry = reflected_entry()
        entry = record_review(entry, ReviewOutcome.GOT_IT, day(1))
        entry = record_review(entry, ReviewOutcome.GOT_IT, day(8))
        assert entry.review_interval == 16

        again = record_review(entry, ReviewOutcome.REVIEW_AGAIN, day(24, hour=22))
        assert again.review_count == 2
        assert again.review_interval == 1
        assert again.next_review_date == midnight(25)
        assert again.is_graduated is False

    def test_review_again_repeatedly(self) -> None:
        entry = reflected_entry()
        for n in range(1, 6):
            entry = record_review(entry, ReviewOutcome.REVIEW_AGAIN, day(n))
            assert entry.review_count == 0
            assert entry.next_review_date == midnight(n + 1)

    def test_full_scenario(self) -> None:
        """Capture and reflect on day 0, then mixed outcomes until graduation."""
        entry = make_entry(capture_date=date(2024, 1, 1), now=DAY0, application="use it at work")
        entry = activate_review_pipeline(entry, DAY0)
        assert entry.next_review_date == midnight(1)

        entry = record_review(entry, ReviewOutcome.GOT_IT, day(1))
        assert (entry.review_count, entry.next_review_date) == (1, midnight(8))

        entry = record_review(entry, ReviewOutcome.REVIEW_AGAIN, day(8))
        assert (entry.review_count, entry.next_review_date) == (1, midnight(9))

        entry = record_review(entry, ReviewOutcome.GOT_IT, day(9))
        assert (entry.review_count, entry.next_review_date) == (2, midnight(25))

        entry = record_review(entry, ReviewOutcome.GOT_IT, day(25))
        assert (entry.review_count, entry.next_review_date) == (3, midnight(60))

        entry = record_review(entry, ReviewOutcome.GOT_IT, day(60))
        assert entry.review_count == 4
        assert entry.is_graduated is True
        assert entry.next_review_date is None

    def test_custom_threshold(self) -> None:
        cfg = ReviewConfig(graduation_threshold=2)
        entry = reflected_entry()
        entry = record_review(entry, ReviewOutcome.GOT_IT, day(1), cfg)
        assert entry.is_graduated is False
        entry = record_review(entry, ReviewOutcome.GOT_IT, day(8), cfg)
        assert entry.is_graduated is True

    def test_threshold_past_table_falls_back_to_last_interval(self) -> None:
        cfg = ReviewConfig(graduation_threshold=6)
        entry = reflected_entry()
        for n in (1, 8, 24, 59):
            entry = record_review(entry, ReviewOutcome.GOT_IT, day(n), cfg)
        assert entry.review_count == 4
        assert entry.review_interval == 35
        assert entry.next_review_date == midnight(59 + 35)

    def test_accepts_string_outcome(self) -> None:
        entry = record_review(reflected_entry(), "got_it", day(1))  # type: ignore[arg-type]
        assert entry.review_count == 1

    def test_inactive_pipeline_rejected(self) -> None:
        entry = make_entry(now=DAY0)
        with pytest.raises(ReviewPipelineInactiveError):
            record_review(entry, ReviewOutcome.GOT_IT, day(1))

    def test_updated_at_moves(self) -> None:
        entry = record_review(reflected_entry(), ReviewOutcome.GOT_IT, day(1))
        assert entry.updated_at == day(1)


class TestGraduatedReReview:
    def _graduated(self):
        entry = reflected_entry()
        for n in (1, 8, 24, 59):
            entry = record_review(entry, ReviewOutcome.GOT_IT, day(n))
        return entry

    def test_review_graduated_entry_is_noop(self) -> None:
        entry = self._graduated()
        assert review_graduated_entry(entry) is entry

    @pytest.mark.parametrize("outcome", list(ReviewOutcome))
    def test_record_review_on_graduated_changes_nothing(self, outcome: ReviewOutcome) -> None:
        entry = self._graduated()
        result = record_review(entry, outcome, day(100))
        assert result == entry
        assert result.is_graduated is True
        assert result.review_count == 4
        assert result.next_review_date is None


class TestReviewStreak:
    def test_first_review(self) -> None:
        streak = update_review_streak(ReviewStreak(), date(2024, 1, 5))
        assert streak == ReviewStreak(current=1, longest=1, last_review_date=date(2024, 1, 5))

    def test_same_day_unchanged(self) -> None:
        start = ReviewStreak(current=3, longest=5, last_review_date=date(2024, 1, 5))
        assert update_review_streak(start, date(2024, 1, 5)).current == 3

    def test_consecutive_day_increments(self) -> None:
        start = ReviewStreak(current=5, longest=5, last_review_date=date(2024, 1, 5))
        streak = update_review_streak(start, date(2024, 1, 6))
        assert streak.current == 6
        assert streak.longest == 6

    def test_gap_resets(self) -> None:
        start = ReviewStreak(current=5, longest=9, last_review_date=date(2024, 1, 5))
        streak = update_review_streak(start, date(2024, 1, 8))
        assert streak.current == 1
        assert streak.longest == 9


class TestDaylightSaving:
    TZ = ZoneInfo("America/New_York")

    def test_activation_before_spring_forward(self) -> None:
        """2024-03-10 is 23h long in New York; review still lands on local midnight."""
        now = datetime(2024, 3, 9, 21, 0, tzinfo=self.TZ)
        entry = activate_review_pipeline(make_entry(now=now, question="q"), now)
        assert entry.next_review_date == datetime(2024, 3, 10, tzinfo=self.TZ)

        later = datetime(2024, 3, 10, 7, tzinfo=self.TZ)
        reviewed = record_review(entry, ReviewOutcome.GOT_IT, later)
        assert reviewed.next_review_date == datetime(2024, 3, 17, tzinfo=self.TZ)
        assert (reviewed.next_review_date.hour, reviewed.next_review_date.minute) == (0, 0)

    def test_review_again_across_fall_back(self) -> None:
        now = datetime(2024, 11, 2, 23, 30, tzinfo=self.TZ)
        entry = activate_review_pipeline(make_entry(now=now, surprise="s"), now)
        later = datetime(2024, 11, 3, 22, tzinfo=self.TZ)
        again = record_review(entry, ReviewOutcome.REVIEW_AGAIN, later)
        assert again.next_review_date == datetime(2024, 11, 4, tzinfo=self.TZ)
        assert again.next_review_date.utcoffset() == timedelta(hours=-5)


class TestInvalidOutcome:
    def test_rejected_for_active_entry(self) -> None:
        with pytest.raises(ValueError):
            record_review(reflected_entry(), "maybe", day(1))  # type: ignore[arg-type]

    def test_rejected_for_graduated_entry(self) -> None:
        entry = reflected_entry()
        for n in (1, 8, 24, 59):
            entry = record_review(entry, ReviewOutcome.GOT_IT, day(n))
        assert entry.is_graduated is True
        with pytest.raises(ValueError):
            record_review(entry, "maybe", day(100))  # type: ignore[arg-type]
