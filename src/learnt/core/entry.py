"""Learning entry - a single captured learning and its review state."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import StrEnum
from typing import Any
from uuid import uuid4

PREVIEW_LENGTH = 50


class ReviewOutcome(StrEnum):
    """What the user answered for one reviewed entry."""

    GOT_IT = "got_it"  # Advance to the next interval
    REVIEW_AGAIN = "review_again"  # Bring it back tomorrow


@dataclass(frozen=True)
class Entry:
    """
    A captured learning.

    Entries are immutable; review transitions return a new Entry.

    Attributes:
        id: Unique identifier (UUID)
        content: Free text of the learning
        capture_date: Calendar day the learning is attributed to
        created_at: When the entry was created
        updated_at: When the entry was last changed
        is_voice_entry: Captured through voice input
        sort_order: Position among entries of the same capture day
        application: Reflection - how would you apply this?
        surprise: Reflection - what surprised you?
        simplification: Reflection - explain it simply
        question: Reflection - what question does it raise?
        first_reflection_date: When the review pipeline was activated
        next_review_date: Earliest moment the entry is due (None = not scheduled)
        review_interval: Days until the next review
        review_count: Number of successful reviews
        is_graduated: Left the review queue for good
        is_favorite: Marked as favorite
        category_ids: Categories this entry belongs to
    """

    id: str
    content: str
    capture_date: date
    created_at: datetime
    updated_at: datetime
    is_voice_entry: bool = False
    sort_order: int = 0
    application: str | None = None
    surprise: str | None = None
    simplification: str | None = None
    question: str | None = None
    first_reflection_date: datetime | None = None
    next_review_date: datetime | None = None
    review_interval: int = 0
    review_count: int = 0
    is_graduated: bool = False
    is_favorite: bool = False
    category_ids: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def create(
        cls,
        content: str,
        capture_date: date,
        now: datetime,
        category_ids: frozenset[str] | set[str] | None = None,
        is_voice_entry: bool = False,
        sort_order: int = 0,
        entry_id: str | None = None,
    ) -> Entry:
        """Create a new entry with no review state."""
        return cls(
            id=entry_id or str(uuid4()),
            content=content,
            capture_date=capture_date,
            created_at=now,
            updated_at=now,
            is_voice_entry=is_voice_entry,
            sort_order=sort_order,
            category_ids=frozenset(category_ids or ()),
        )

    @property
    def has_reflection(self) -> bool:
        return any(
            value is not None and value.strip()
            for value in (self.application, self.surprise, self.simplification, self.question)
        )

    @property
    def has_active_pipeline(self) -> bool:
        return (
            self.first_reflection_date is not None
            or self.next_review_date is not None
            or self.is_graduated
        )

    def is_due_for_review(self, now: datetime) -> bool:
        """True when the entry should show up in the review queue at ``now``."""
        if not self.has_reflection or self.is_graduated:
            return False
        if self.next_review_date is None:
            return False
        return self.next_review_date <= now

    @property
    def preview_text(self) -> str:
        if len(self.content) <= PREVIEW_LENGTH:
            return self.content
        return self.content[:PREVIEW_LENGTH] + "..."

    def with_reflections(self, now: datetime, **reflections: str | None) -> Entry:
        """Return a copy with the given reflection prompts replaced."""
        allowed = {"application", "surprise", "simplification", "question"}
        unknown = set(reflections) - allowed
        if unknown:
            raise ValueError(f"Unknown reflection fields: {sorted(unknown)}")
        return replace(self, updated_at=now, **reflections)

    def in_category(self, category_id: str) -> bool:
        return category_id in self.category_ids

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "capture_date": self.capture_date.isoformat(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "is_voice_entry": self.is_voice_entry,
            "sort_order": self.sort_order,
            "application": self.application,
            "surprise": self.surprise,
            "simplification": self.simplification,
            "question": self.question,
            "first_reflection_date": (
                self.first_reflection_date.isoformat() if self.first_reflection_date else None
            ),
            "next_review_date": (
                self.next_review_date.isoformat() if self.next_review_date else None
            ),
            "review_interval": self.review_interval,
            "review_count": self.review_count,
            "is_graduated": self.is_graduated,
            "is_favorite": self.is_favorite,
            "category_ids": sorted(self.category_ids),
        }
