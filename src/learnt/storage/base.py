"""Abstract storage interface for the journal."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from learnt.core.category import Category
from learnt.core.entry import Entry


class JournalStorage(ABC):
    """Durable store of entries, categories and key-value settings.

    The review engine never does I/O itself; the service reads entries from
    here, runs the pure engine functions and writes the results back.
    """

    # ========== Entry Operations ==========

    @abstractmethod
    async def add_entry(self, entry: Entry) -> str:
        """Insert a new entry. Raises ValueError if the id exists."""
        ...

    @abstractmethod
    async def get_entry(self, entry_id: str) -> Entry | None:
        ...

    @abstractmethod
    async def update_entry(self, entry: Entry) -> None:
        """Replace a stored entry. Raises ValueError if it does not exist."""
        ...

    @abstractmethod
    async def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry. Returns True if deleted."""
        ...

    @abstractmethod
    async def get_entries(self, limit: int | None = None) -> list[Entry]:
        """All entries ordered by capture date, then sort order, then creation."""
        ...

    @abstractmethod
    async def get_entries_for_date(self, day: date) -> list[Entry]:
        ...

    @abstractmethod
    async def dates_with_entries(self, start: date, end: date) -> set[date]:
        """Distinct capture dates within ``start``..``end`` inclusive."""
        ...

    # ========== Category Operations ==========

    @abstractmethod
    async def add_category(self, category: Category) -> str:
        ...

    @abstractmethod
    async def get_categories(self) -> list[Category]:
        ...

    @abstractmethod
    async def delete_category(self, category_id: str) -> bool:
        """Delete a custom category. Presets are never deleted."""
        ...

    # ========== Settings ==========

    @abstractmethod
    async def get_setting(self, key: str, default: Any = None) -> Any:
        ...

    @abstractmethod
    async def set_setting(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    async def delete_setting(self, key: str) -> None:
        ...

    async def all_capture_dates(self) -> set[date]:
        return {e.capture_date for e in await self.get_entries()}

    async def close(self) -> None:  # noqa: B027
        """Release resources. No-op by default."""
