"""In-memory storage backend, used by tests and ephemeral sessions."""

from __future__ import annotations

from datetime import date
from typing import Any

from learnt.core.category import Category
from learnt.core.entry import Entry
from learnt.storage.base import JournalStorage


def _entry_sort_key(entry: Entry) -> tuple[date, int, str]:
    return (entry.capture_date, entry.sort_order, entry.created_at.isoformat())


class InMemoryStorage(JournalStorage):
    """Dict-backed JournalStorage."""

    def __init__(self) -> None:
        self._entries: dict[str, Entry] = {}
        self._categories: dict[str, Category] = {}
        self._settings: dict[str, Any] = {}

    async def add_entry(self, entry: Entry) -> str:
        if entry.id in self._entries:
            raise ValueError(f"Entry {entry.id} already exists")
        self._entries[entry.id] = entry
        return entry.id

    async def get_entry(self, entry_id: str) -> Entry | None:
        return self._entries.get(entry_id)

    async def update_entry(self, entry: Entry) -> None:
        if entry.id not in self._entries:
            raise ValueError(f"Entry {entry.id} does not exist")
        self._entries[entry.id] = entry

    async def delete_entry(self, entry_id: str) -> bool:
        return self._entries.pop(entry_id, None) is not None

    async def get_entries(self, limit: int | None = None) -> list[Entry]:
        entries = sorted(self._entries.values(), key=_entry_sort_key)
        return entries[:limit] if limit else entries

    async def get_entries_for_date(self, day: date) -> list[Entry]:
        return [e for e in await self.get_entries() if e.capture_date == day]

    async def dates_with_entries(self, start: date, end: date) -> set[date]:
        return {e.capture_date for e in self._entries.values() if start <= e.capture_date <= end}

    async def add_category(self, category: Category) -> str:
        if category.id in self._categories:
            raise ValueError(f"Category {category.id} already exists")
        self._categories[category.id] = category
        return category.id

    async def get_categories(self) -> list[Category]:
        return sorted(
            self._categories.values(), key=lambda c: (c.sort_order, c.created_at.isoformat())
        )

    async def delete_category(self, category_id: str) -> bool:
        category = self._categories.get(category_id)
        if category is None or category.is_preset:
            return False
        del self._categories[category_id]
        return True

    async def get_setting(self, key: str, default: Any = None) -> Any:
        return self._settings.get(key, default)

    async def set_setting(self, key: str, value: Any) -> None:
        self._settings[key] = value

    async def delete_setting(self, key: str) -> None:
        self._settings.pop(key, None)
