"""Row -> model conversion for the SQLite backend."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from learnt.core.category import Category
from learnt.core.entry import Entry


def _dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def row_to_entry(row: Any, category_ids: Iterable[str] = ()) -> Entry:
    return Entry(
        id=row["id"],
        content=row["content"],
        capture_date=date.fromisoformat(row["capture_date"]),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
        is_voice_entry=bool(row["is_voice_entry"]),
        sort_order=row["sort_order"],
        application=row["application"],
        surprise=row["surprise"],
        simplification=row["simplification"],
        question=row["question"],
        first_reflection_date=_dt(row["first_reflection_date"]),
        next_review_date=_dt(row["next_review_date"]),
        review_interval=row["review_interval"],
        review_count=row["review_count"],
        is_graduated=bool(row["is_graduated"]),
        is_favorite=bool(row["is_favorite"]),
        category_ids=frozenset(category_ids),
    )


def entry_to_params(entry: Entry) -> tuple[Any, ...]:
    """Column values in the order of ENTRY_COLUMNS."""
    return (
        entry.id,
        entry.content,
        entry.capture_date.isoformat(),
        entry.created_at.isoformat(),
        entry.updated_at.isoformat(),
        int(entry.is_voice_entry),
        entry.sort_order,
        entry.application,
        entry.surprise,
        entry.simplification,
        entry.question,
        entry.first_reflection_date.isoformat() if entry.first_reflection_date else None,
        entry.next_review_date.isoformat() if entry.next_review_date else None,
        entry.review_interval,
        entry.review_count,
        int(entry.is_graduated),
        int(entry.is_favorite),
    )


ENTRY_COLUMNS: tuple[str, ...] = (
    "id",
    "content",
    "capture_date",
    "created_at",
    "updated_at",
    "is_voice_entry",
    "sort_order",
    "application",
    "surprise",
    "simplification",
    "question",
    "first_reflection_date",
    "next_review_date",
    "review_interval",
    "review_count",
    "is_graduated",
    "is_favorite",
)


def row_to_category(row: Any) -> Category:
    return Category(
        id=row["id"],
        name=row["name"],
        icon=row["icon"],
        sort_order=row["sort_order"],
        is_preset=bool(row["is_preset"]),
        created_at=datetime.fromisoformat(row["created_at"]),
    )
