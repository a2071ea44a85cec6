"""Journal service - wires storage, configuration and the review engine.

The engine functions are pure; this layer loads entries and settings,
passes them (together with the current time) into the engine and persists
whatever comes back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime

from learnt.core.category import Category, preset_categories
from learnt.core.entry import Entry, ReviewOutcome
from learnt.engine.review_queue import (
    ReviewStats,
    due_entries,
    review_stats,
    reviewable_entries,
    upcoming_reviews,
)
from learnt.engine.review_scheduler import (
    DEFAULT_REVIEW_CONFIG,
    ReviewConfig,
    ReviewStreak,
    activate_review_pipeline,
    record_review,
    update_review_streak,
)
from learnt.engine.streak import (
    CelebratedMilestone,
    StreakState,
    check_for_new_milestone,
    compute_streak_state,
    mark_milestone_celebrated,
)
from learnt.storage.base import JournalStorage
from learnt.utils.timeutils import local_now

logger = logging.getLogger(__name__)

# Settings keys
LONGEST_STREAK = "longest_streak"
LAST_CELEBRATED_MILESTONE = "last_celebrated_milestone"
LAST_CELEBRATED_DATE = "last_celebrated_date"
REVIEW_STREAK = "review_streak"
LONGEST_REVIEW_STREAK = "longest_review_streak"
LAST_REVIEW_DATE = "last_review_date"


def _parse_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


class JournalService:
    """Capture, reflect, review and streak bookkeeping over a JournalStorage."""

    def __init__(
        self,
        storage: JournalStorage,
        config: ReviewConfig = DEFAULT_REVIEW_CONFIG,
        now: Callable[[], datetime] = local_now,
    ) -> None:
        self._storage = storage
        self._config = config
        self._now = now

    @property
    def config(self) -> ReviewConfig:
        return self._config

    # ========== Capture ==========

    async def capture(
        self,
        content: str,
        capture_date: date | None = None,
        category_ids: Iterable[str] = (),
        is_voice_entry: bool = False,
    ) -> Entry:
        text = content.strip()
        if not text:
            raise ValueError("Entry content must not be empty")

        now = self._now()
        day = capture_date or now.date()
        existing = await self._storage.get_entries_for_date(day)
        entry = Entry.create(
            content=text,
            capture_date=day,
            now=now,
            category_ids=frozenset(category_ids),
            is_voice_entry=is_voice_entry,
            sort_order=len(existing),
        )
        await self._storage.add_entry(entry)
        logger.debug("Captured entry %s for %s", entry.id, day)
        return entry

    async def set_favorite(self, entry_id: str, favorite: bool) -> Entry | None:
        entry = await self._storage.get_entry(entry_id)
        if entry is None:
            return None
        updated = replace(entry, is_favorite=favorite, updated_at=self._now())
        await self._storage.update_entry(updated)
        return updated

    async def delete(self, entry_id: str) -> bool:
        return await self._storage.delete_entry(entry_id)

    # ========== Reflection ==========

    async def reflect(
        self,
        entry_id: str,
        application: str | None = None,
        surprise: str | None = None,
        simplification: str | None = None,
        question: str | None = None,
    ) -> Entry | None:
        """Store reflections; the first reflection ever starts the review pipeline.

        Prompts left as None keep their stored text; an empty string clears one.
        """
        entry = await self._storage.get_entry(entry_id)
        if entry is None:
            return None

        given = {
            "application": application,
            "surprise": surprise,
            "simplification": simplification,
            "question": question,
        }
        changes = {key: (value or None) for key, value in given.items() if value is not None}

        now = self._now()
        had_reflection = entry.has_reflection
        updated = entry.with_reflections(now, **changes)
        if not had_reflection and updated.has_reflection and not updated.has_active_pipeline:
            updated = activate_review_pipeline(updated, now, self._config)

        await self._storage.update_entry(updated)
        return updated

    # ========== Review ==========

    async def review(self, entry_id: str, outcome: ReviewOutcome) -> Entry | None:
        """Apply one review outcome and bump the review-day streak."""
        entry = await self._storage.get_entry(entry_id)
        if entry is None:
            return None

        now = self._now()
        updated = record_review(entry, outcome, now, self._config)
        if updated is not entry:
            await self._storage.update_entry(updated)
        await self._record_review_day(now.date())
        return updated

    async def _record_review_day(self, today: date) -> ReviewStreak:
        streak = await self.review_streak()
        streak = update_review_streak(streak, today)
        await self._storage.set_setting(REVIEW_STREAK, streak.current)
        await self._storage.set_setting(LONGEST_REVIEW_STREAK, streak.longest)
        await self._storage.set_setting(LAST_REVIEW_DATE, today.isoformat())
        return streak

    async def review_streak(self) -> ReviewStreak:
        return ReviewStreak(
            current=int(await self._storage.get_setting(REVIEW_STREAK, 0)),
            longest=int(await self._storage.get_setting(LONGEST_REVIEW_STREAK, 0)),
            last_review_date=_parse_date(await self._storage.get_setting(LAST_REVIEW_DATE)),
        )

    async def due(self) -> list[Entry]:
        entries = await self._storage.get_entries()
        return due_entries(entries, self._now())

    async def reviewable(
        self, include_graduated: bool = False, category_id: str | None = None
    ) -> list[Entry]:
        entries = await self._storage.get_entries()
        return reviewable_entries(
            entries, self._now(), include_graduated=include_graduated, category_id=category_id
        )

    async def upcoming(self, limit: int = 10) -> list[Entry]:
        entries = await self._storage.get_entries()
        return upcoming_reviews(entries, self._now(), limit=limit)

    async def stats(self) -> ReviewStats:
        return review_stats(await self._storage.get_entries(), self._now())

    # ========== Streaks ==========

    async def streak_state(self) -> StreakState:
        """Current and longest capture streak; raises the stored high-water mark."""
        today = self._now().date()
        stored_longest = int(await self._storage.get_setting(LONGEST_STREAK, 0))
        state = compute_streak_state(
            await self._storage.all_capture_dates(),
            today,
            stored_longest=stored_longest,
            last_celebrated_milestone=int(
                await self._storage.get_setting(LAST_CELEBRATED_MILESTONE, 0)
            ),
            last_celebrated_date=_parse_date(
                await self._storage.get_setting(LAST_CELEBRATED_DATE)
            ),
        )
        if state.longest_streak > stored_longest:
            await self._storage.set_setting(LONGEST_STREAK, state.longest_streak)
        return state

    async def check_milestone(self) -> int | None:
        """Newly reached milestone to celebrate, if any."""
        state = await self.streak_state()
        check = check_for_new_milestone(
            state.current_streak,
            state.last_celebrated_milestone,
            state.last_celebrated_date,
            self._now().date(),
        )
        if check.reset:
            logger.debug(
                "Streak rebuilt below milestone %d, clearing celebration marker",
                state.last_celebrated_milestone,
            )
            await self._storage.set_setting(LAST_CELEBRATED_MILESTONE, 0)
            await self._storage.delete_setting(LAST_CELEBRATED_DATE)
        return check.milestone

    async def mark_milestone_celebrated(self, milestone: int) -> CelebratedMilestone:
        record = mark_milestone_celebrated(milestone, self._now().date())
        await self._storage.set_setting(LAST_CELEBRATED_MILESTONE, record.milestone)
        await self._storage.set_setting(LAST_CELEBRATED_DATE, record.date.isoformat())
        return record

    # ========== Categories ==========

    async def ensure_preset_categories(self) -> list[Category]:
        categories = await self._storage.get_categories()
        if any(c.is_preset for c in categories):
            return categories
        for category in preset_categories(self._now()):
            await self._storage.add_category(category)
        return await self._storage.get_categories()

    async def create_category(self, name: str, icon: str) -> Category:
        categories = await self._storage.get_categories()
        category = Category.create(
            name=name, icon=icon, sort_order=len(categories), now=self._now()
        )
        await self._storage.add_category(category)
        return category
