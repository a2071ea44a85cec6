"""SQLite category and key-value settings mixin."""

from __future__ import annotations

import json
import sqlite3
from typing import TYPE_CHECKING, Any

from learnt.core.category import Category
from learnt.storage.sqlite_row_mappers import row_to_category

if TYPE_CHECKING:
    import aiosqlite


class SQLiteSettingsMixin:
    """Mixin providing category CRUD and JSON-encoded settings."""

    def _ensure_conn(self) -> aiosqlite.Connection: ...

    # ========== Category Operations ==========

    async def add_category(self, category: Category) -> str:
        conn = self._ensure_conn()
        try:
            await conn.execute(
                """INSERT INTO categories (id, name, icon, sort_order, is_preset, created_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    category.id,
                    category.name,
                    category.icon,
                    category.sort_order,
                    int(category.is_preset),
                    category.created_at.isoformat(),
                ),
            )
            await conn.commit()
        except sqlite3.IntegrityError:
            raise ValueError(f"Category {category.id} already exists")
        return category.id

    async def get_categories(self) -> list[Category]:
        conn = self._ensure_conn()
        async with conn.execute(
            "SELECT * FROM categories ORDER BY sort_order, created_at"
        ) as cursor:
            rows = await cursor.fetchall()
        return [row_to_category(row) for row in rows]

    async def delete_category(self, category_id: str) -> bool:
        conn = self._ensure_conn()
        cursor = await conn.execute(
            "DELETE FROM categories WHERE id = ? AND is_preset = 0", (category_id,)
        )
        deleted = cursor.rowcount > 0
        if deleted:
            await conn.execute(
                "DELETE FROM entry_categories WHERE category_id = ?", (category_id,)
            )
        await conn.commit()
        return deleted

    # ========== Settings ==========

    async def get_setting(self, key: str, default: Any = None) -> Any:
        conn = self._ensure_conn()
        async with conn.execute("SELECT value FROM settings WHERE key = ?", (key,)) as cursor:
            row = await cursor.fetchone()
        if row is None:
            return default
        return json.loads(row["value"])

    async def set_setting(self, key: str, value: Any) -> None:
        conn = self._ensure_conn()
        await conn.execute(
            "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
            (key, json.dumps(value)),
        )
        await conn.commit()

    async def delete_setting(self, key: str) -> None:
        conn = self._ensure_conn()
        await conn.execute("DELETE FROM settings WHERE key = ?", (key,))
        await conn.commit()
