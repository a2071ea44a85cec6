"""SQLite entry operations mixin."""

from __future__ import annotations

import sqlite3
from collections import defaultdict
from datetime import date
from typing import TYPE_CHECKING

from learnt.core.entry import Entry
from learnt.storage.sqlite_row_mappers import ENTRY_COLUMNS, entry_to_params, row_to_entry

if TYPE_CHECKING:
    import aiosqlite

_INSERT_ENTRY = (
    f"INSERT INTO entries ({', '.join(ENTRY_COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in ENTRY_COLUMNS)})"
)
_UPDATE_ENTRY = (
    "UPDATE entries SET "
    + ", ".join(f"{col} = ?" for col in ENTRY_COLUMNS[1:])
    + " WHERE id = ?"
)
_ORDER = " ORDER BY capture_date, sort_order, created_at"


class SQLiteEntryMixin:
    """Mixin providing entry CRUD operations."""

    def _ensure_conn(self) -> aiosqlite.Connection: ...

    async def _category_ids_for(self, entry_ids: list[str]) -> dict[str, list[str]]:
        if not entry_ids:
            return {}
        conn = self._ensure_conn()
        placeholders = ", ".join("?" for _ in entry_ids)
        mapping: dict[str, list[str]] = defaultdict(list)
        async with conn.execute(
            f"SELECT entry_id, category_id FROM entry_categories WHERE entry_id IN ({placeholders})",
            entry_ids,
        ) as cursor:
            for row in await cursor.fetchall():
                mapping[row["entry_id"]].append(row["category_id"])
        return mapping

    async def _write_categories(self, entry: Entry) -> None:
        conn = self._ensure_conn()
        await conn.execute("DELETE FROM entry_categories WHERE entry_id = ?", (entry.id,))
        await conn.executemany(
            "INSERT INTO entry_categories (entry_id, category_id) VALUES (?, ?)",
            [(entry.id, category_id) for category_id in sorted(entry.category_ids)],
        )

    async def _rows_to_entries(self, rows: list[aiosqlite.Row]) -> list[Entry]:
        categories = await self._category_ids_for([row["id"] for row in rows])
        return [row_to_entry(row, categories.get(row["id"], ())) for row in rows]

    async def add_entry(self, entry: Entry) -> str:
        conn = self._ensure_conn()
        try:
            await conn.execute(_INSERT_ENTRY, entry_to_params(entry))
        except sqlite3.IntegrityError:
            raise ValueError(f"Entry {entry.id} already exists")
        await self._write_categories(entry)
        await conn.commit()
        return entry.id

    async def get_entry(self, entry_id: str) -> Entry | None:
        conn = self._ensure_conn()
        async with conn.execute("SELECT * FROM entries WHERE id = ?", (entry_id,)) as cursor:
            row = await cursor.fetchone()
        if row is None:
            return None
        entries = await self._rows_to_entries([row])
        return entries[0]

    async def update_entry(self, entry: Entry) -> None:
        conn = self._ensure_conn()
        params = entry_to_params(entry)
        cursor = await conn.execute(_UPDATE_ENTRY, (*params[1:], entry.id))
        if cursor.rowcount == 0:
            raise ValueError(f"Entry {entry.id} does not exist")
        await self._write_categories(entry)
        await conn.commit()

    async def delete_entry(self, entry_id: str) -> bool:
        conn = self._ensure_conn()
        cursor = await conn.execute("DELETE FROM entries WHERE id = ?", (entry_id,))
        await conn.commit()
        return cursor.rowcount > 0

    async def get_entries(self, limit: int | None = None) -> list[Entry]:
        conn = self._ensure_conn()
        query = "SELECT * FROM entries" + _ORDER
        params: list[int] = []
        if limit:
            query += " LIMIT ?"
            params.append(limit)
        async with conn.execute(query, params) as cursor:
            rows = list(await cursor.fetchall())
        return await self._rows_to_entries(rows)

    async def get_entries_for_date(self, day: date) -> list[Entry]:
        conn = self._ensure_conn()
        async with conn.execute(
            "SELECT * FROM entries WHERE capture_date = ?" + _ORDER,
            (day.isoformat(),),
        ) as cursor:
            rows = list(await cursor.fetchall())
        return await self._rows_to_entries(rows)

    async def dates_with_entries(self, start: date, end: date) -> set[date]:
        conn = self._ensure_conn()
        async with conn.execute(
            "SELECT DISTINCT capture_date FROM entries WHERE capture_date >= ? AND capture_date <= ?",
            (start.isoformat(), end.isoformat()),
        ) as cursor:
            rows = await cursor.fetchall()
        return {date.fromisoformat(row["capture_date"]) for row in rows}
