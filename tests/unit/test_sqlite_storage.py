"""Tests for the SQLite and in-memory journal storage."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path

import pytest
import pytest_asyncio

from learnt.core.category import Category, preset_categories
from learnt.core.entry import ReviewOutcome
from learnt.engine.review_scheduler import activate_review_pipeline, record_review
from learnt.storage.base import JournalStorage
from learnt.storage.memory_store import InMemoryStorage
from learnt.storage.sqlite_store import SQLiteStorage
from tests.factories import REF_NOW, make_entry


@pytest_asyncio.fixture(params=["sqlite", "memory"])
async def storage(request: pytest.FixtureRequest, tmp_path: Path) -> AsyncIterator[JournalStorage]:
    """Run every test against both backends."""
    if request.param == "sqlite":
        store: JournalStorage = SQLiteStorage(tmp_path / "journal.db")
        await store.initialize()  # type: ignore[attr-defined]
    else:
        store = InMemoryStorage()

    yield store

    await store.close()


class TestEntries:
    @pytest.mark.asyncio
    async def test_get_missing(self, storage: JournalStorage) -> None:
        assert await storage.get_entry("missing") is None

    @pytest.mark.asyncio
    async def test_add_and_get(self, storage: JournalStorage) -> None:
        entry = make_entry("Learned aiosqlite", category_ids=frozenset({"c1", "c2"}))
        await storage.add_entry(entry)

        loaded = await storage.get_entry(entry.id)
        assert loaded == entry

    @pytest.mark.asyncio
    async def test_duplicate_rejected(self, storage: JournalStorage) -> None:
        entry = make_entry()
        await storage.add_entry(entry)
        with pytest.raises(ValueError, match="already exists"):
            await storage.add_entry(entry)

    @pytest.mark.asyncio
    async def test_review_state_round_trip(self, storage: JournalStorage) -> None:
        entry = make_entry(question="why?")
        await storage.add_entry(entry)

        entry = activate_review_pipeline(entry, REF_NOW)
        entry = record_review(entry, ReviewOutcome.GOT_IT, datetime(2024, 3, 14, 9))
        await storage.update_entry(entry)

        loaded = await storage.get_entry(entry.id)
        assert loaded is not None
        assert loaded.review_count == 1
        assert loaded.review_interval == 7
        assert loaded.next_review_date == datetime(2024, 3, 21)
        assert loaded.first_reflection_date == REF_NOW
        assert loaded.question == "why?"

    @pytest.mark.asyncio
    async def test_update_categories(self, storage: JournalStorage) -> None:
        entry = make_entry(category_ids=frozenset({"a"}))
        await storage.add_entry(entry)
        await storage.update_entry(replace(entry, category_ids=frozenset({"b"})))

        loaded = await storage.get_entry(entry.id)
        assert loaded is not None
        assert loaded.category_ids == frozenset({"b"})

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, storage: JournalStorage) -> None:
        with pytest.raises(ValueError, match="does not exist"):
            await storage.update_entry(make_entry())

    @pytest.mark.asyncio
    async def test_delete(self, storage: JournalStorage) -> None:
        entry = make_entry()
        await storage.add_entry(entry)
        assert await storage.delete_entry(entry.id) is True
        assert await storage.delete_entry(entry.id) is False
        assert await storage.get_entry(entry.id) is None

    @pytest.mark.asyncio
    async def test_ordering_and_dates(self, storage: JournalStorage) -> None:
        e1 = make_entry("second", capture_date=date(2024, 3, 2), sort_order=1)
        e2 = make_entry("first", capture_date=date(2024, 3, 2), sort_order=0)
        e3 = make_entry("earlier", capture_date=date(2024, 3, 1))
        for e in (e1, e2, e3):
            await storage.add_entry(e)

        entries = await storage.get_entries()
        assert [e.content for e in entries] == ["earlier", "first", "second"]
        assert len(await storage.get_entries(limit=2)) == 2

        on_day = await storage.get_entries_for_date(date(2024, 3, 2))
        assert [e.content for e in on_day] == ["first", "second"]

        dates = await storage.dates_with_entries(date(2024, 3, 2), date(2024, 3, 31))
        assert dates == {date(2024, 3, 2)}
        assert await storage.all_capture_dates() == {date(2024, 3, 1), date(2024, 3, 2)}


class TestCategories:
    @pytest.mark.asyncio
    async def test_presets_cannot_be_deleted(self, storage: JournalStorage) -> None:
        for category in preset_categories(REF_NOW):
            await storage.add_category(category)
        custom = Category.create(name="Cooking", icon="fork", sort_order=4, now=REF_NOW)
        await storage.add_category(custom)

        categories = await storage.get_categories()
        assert [c.name for c in categories][-1] == "Cooking"

        assert await storage.delete_category(categories[0].id) is False
        assert await storage.delete_category(custom.id) is True
        assert len(await storage.get_categories()) == 4


class TestSettings:
    @pytest.mark.asyncio
    async def test_default(self, storage: JournalStorage) -> None:
        assert await storage.get_setting("nope") is None
        assert await storage.get_setting("nope", 7) == 7

    @pytest.mark.asyncio
    async def test_set_get_delete(self, storage: JournalStorage) -> None:
        await storage.set_setting("longest_streak", 12)
        await storage.set_setting("last_celebrated_date", "2024-03-01")
        assert await storage.get_setting("longest_streak") == 12
        assert await storage.get_setting("last_celebrated_date") == "2024-03-01"

        await storage.set_setting("longest_streak", 13)
        assert await storage.get_setting("longest_streak") == 13

        await storage.delete_setting("longest_streak")
        assert await storage.get_setting("longest_streak", 0) == 0


class TestSQLiteLifecycle:
    @pytest.mark.asyncio
    async def test_uninitialized_raises(self, tmp_path: Path) -> None:
        storage = SQLiteStorage(tmp_path / "x.db")
        with pytest.raises(RuntimeError, match="not initialized"):
            await storage.get_entries()

    @pytest.mark.asyncio
    async def test_reopen_keeps_data(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "journal.db"
        storage = SQLiteStorage(path)
        await storage.initialize()
        entry = make_entry("persisted")
        await storage.add_entry(entry)
        await storage.close()

        reopened = SQLiteStorage(path)
        await reopened.initialize()
        try:
            assert await reopened.get_entry(entry.id) == entry
        finally:
            await reopened.close()
