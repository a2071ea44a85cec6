"""SQLite storage backend for the journal.

Composes the entry and settings mixins over a single aiosqlite connection.

Usage:
    storage = SQLiteStorage("~/.learnt/journal.db")
    await storage.initialize()
    ...
    await storage.close()
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiosqlite

from learnt.storage.base import JournalStorage
from learnt.storage.sqlite_entries import SQLiteEntryMixin
from learnt.storage.sqlite_settings import SQLiteSettingsMixin

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS entries (
    id TEXT PRIMARY KEY,
    content TEXT NOT NULL,
    capture_date TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    is_voice_entry INTEGER NOT NULL DEFAULT 0,
    sort_order INTEGER NOT NULL DEFAULT 0,
    application TEXT,
    surprise TEXT,
    simplification TEXT,
    question TEXT,
    first_reflection_date TEXT,
    next_review_date TEXT,
    review_interval INTEGER NOT NULL DEFAULT 0,
    review_count INTEGER NOT NULL DEFAULT 0,
    is_graduated INTEGER NOT NULL DEFAULT 0,
    is_favorite INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS categories (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    icon TEXT NOT NULL,
    sort_order INTEGER NOT NULL DEFAULT 0,
    is_preset INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS entry_categories (
    entry_id TEXT NOT NULL,
    category_id TEXT NOT NULL,
    PRIMARY KEY (entry_id, category_id),
    FOREIGN KEY (entry_id) REFERENCES entries(id) ON DELETE CASCADE
);
CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_entries_capture_date ON entries(capture_date);
CREATE INDEX IF NOT EXISTS idx_entries_next_review ON entries(next_review_date);
CREATE INDEX IF NOT EXISTS idx_entry_categories_category ON entry_categories(category_id);
"""


class SQLiteStorage(SQLiteEntryMixin, SQLiteSettingsMixin, JournalStorage):
    """aiosqlite-backed JournalStorage."""

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path).expanduser()
        self._conn: aiosqlite.Connection | None = None

    def _ensure_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError("SQLite storage not initialized. Call initialize() first.")
        return self._conn

    async def initialize(self) -> None:
        """Open the connection and create the schema if needed."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = await aiosqlite.connect(self._db_path)
        self._conn.row_factory = aiosqlite.Row
        await self._conn.execute("PRAGMA foreign_keys = ON")
        await self._conn.executescript(SCHEMA_SQL)

        async with self._conn.execute("SELECT version FROM schema_version") as cursor:
            row = await cursor.fetchone()
        if row is None:
            await self._conn.execute(
                "INSERT INTO schema_version (version) VALUES (?)", (SCHEMA_VERSION,)
            )
            logger.info("Created journal schema v%d at %s", SCHEMA_VERSION, self._db_path)
        await self._conn.commit()

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
