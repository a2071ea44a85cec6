"""Selecting which entries a review session (or the library) shows."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import StrEnum

from learnt.core.entry import Entry
from learnt.utils.timeutils import start_of_month, start_of_week

# Average interval (days) that counts as 100% retention
RETENTION_FULL_INTERVAL = 90.0


class LibraryFilter(StrEnum):
    ALL = "all"
    FAVORITES = "favorites"
    GRADUATED = "graduated"


class DateFilter(StrEnum):
    ALL_TIME = "all_time"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"
    LAST_30_DAYS = "last_30_days"


def due_entries(entries: Iterable[Entry], now: datetime) -> list[Entry]:
    """Entries due at ``now``, in input order."""
    return [e for e in entries if e.is_due_for_review(now)]


def reviewable_entries(
    entries: Iterable[Entry],
    now: datetime,
    include_graduated: bool = False,
    category_id: str | None = None,
) -> list[Entry]:
    """Entries for a review session.

    Due entries, plus graduated ones when ``include_graduated`` is set,
    narrowed to ``category_id`` when given. Input order is kept.
    """
    selected: list[Entry] = []
    for entry in entries:
        wanted = entry.is_due_for_review(now) or (include_graduated and entry.is_graduated)
        if not wanted:
            continue
        if category_id is not None and not entry.in_category(category_id):
            continue
        selected.append(entry)
    return selected


def upcoming_reviews(entries: Iterable[Entry], now: datetime, limit: int = 10) -> list[Entry]:
    """Scheduled entries not yet due, soonest first."""
    upcoming = [
        e
        for e in entries
        if e.has_reflection
        and not e.is_graduated
        and e.next_review_date is not None
        and e.next_review_date > now
    ]
    upcoming.sort(key=lambda e: e.next_review_date or now)
    return upcoming[:limit]


def filter_library(
    entries: Iterable[Entry],
    today: date,
    status: LibraryFilter = LibraryFilter.ALL,
    date_filter: DateFilter = DateFilter.ALL_TIME,
    category_id: str | None = None,
    search: str = "",
) -> list[Entry]:
    """Library listing filters, newest capture date first."""
    result = list(entries)

    if status is LibraryFilter.FAVORITES:
        result = [e for e in result if e.is_favorite]
    elif status is LibraryFilter.GRADUATED:
        result = [e for e in result if e.is_graduated]

    cutoff: date | None = None
    if date_filter is DateFilter.THIS_WEEK:
        cutoff = start_of_week(today)
    elif date_filter is DateFilter.THIS_MONTH:
        cutoff = start_of_month(today)
    elif date_filter is DateFilter.LAST_30_DAYS:
        cutoff = today - timedelta(days=30)
    if cutoff is not None:
        result = [e for e in result if e.capture_date >= cutoff]

    if category_id is not None:
        result = [e for e in result if e.in_category(category_id)]

    needle = search.strip().casefold()
    if needle:
        result = [e for e in result if needle in e.content.casefold()]

    return sorted(result, key=lambda e: e.capture_date, reverse=True)


@dataclass(frozen=True)
class ReviewStats:
    total_entries: int
    total_days: int
    reflected: int
    reviewed: int
    due: int
    graduated: int
    retention_rate: int | None


def retention_rate(entries: Sequence[Entry]) -> int | None:
    """Average interval of reviewed entries as a 0-100 percentage of 90 days."""
    reviewed = [e for e in entries if e.review_count > 0]
    if not reviewed:
        return None
    average = sum(e.review_interval for e in reviewed) / len(reviewed)
    return min(int(average / RETENTION_FULL_INTERVAL * 100), 100)


def review_stats(entries: Iterable[Entry], now: datetime) -> ReviewStats:
    items = list(entries)
    return ReviewStats(
        total_entries=len(items),
        total_days=len({e.capture_date for e in items}),
        reflected=sum(1 for e in items if e.has_reflection),
        reviewed=sum(1 for e in items if e.review_count > 0),
        due=sum(1 for e in items if e.is_due_for_review(now)),
        graduated=sum(1 for e in items if e.is_graduated),
        retention_rate=retention_rate(items),
    )
