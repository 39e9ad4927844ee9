"""SQLite-backed path history and named shortcuts.

Rows are listed in a stable order with ``LIMIT``/``OFFSET`` pagination and
substring filtering, which is the contract the list views page through.
Every ``sqlite3.Error`` is logged and re-raised as :class:`StoreError`.
"""

from __future__ import annotations

import logging
import sqlite3
import time
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS paths (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    path TEXT NOT NULL,
    date INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS paths_date ON paths (date);
CREATE TABLE IF NOT EXISTS shortcuts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    path TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS shortcuts_name ON shortcuts (name);
"""

PATH_ORDER = "ORDER BY date DESC, id DESC"
SHORTCUT_ORDER = "ORDER BY name ASC, id DESC"


class StoreError(Exception):
    """Raised when the backing database fails an operation."""


@dataclass(frozen=True)
class PathEntry:
    id: int
    path: str
    date: int  # seconds since the epoch


@dataclass(frozen=True)
class Shortcut:
    id: int
    name: str
    path: str


class Store:
    """Thin query layer over one SQLite connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._conn = connection

    @classmethod
    def open(cls, db_path: Path) -> Store:
        """Open ``db_path``, creating parent directories and schema when new."""
        logger.info("db file=%s", db_path)
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreError(f"cannot create directory {db_path.parent}: {exc}") from exc
        try:
            conn = sqlite3.connect(db_path)
        except sqlite3.Error as exc:
            raise StoreError(f"cannot open database {db_path}: {exc}") from exc
        store = cls(conn)
        store.init_schema()
        return store

    @classmethod
    def in_memory(cls) -> Store:
        store = cls(sqlite3.connect(":memory:"))
        store.init_schema()
        return store

    def close(self) -> None:
        self._conn.close()

    def init_schema(self) -> None:
        logger.debug("initializing schema")
        try:
            with self._conn:
                self._conn.executescript(SCHEMA)
        except sqlite3.Error as exc:
            logger.error("init_schema: %s", exc)
            raise StoreError(f"schema initialization failed: {exc}") from exc

    def _execute(self, sql: str, params: tuple[object, ...] = ()) -> None:
        try:
            with self._conn:
                self._conn.execute(sql, params)
        except sqlite3.Error as exc:
            logger.error("%s failed with %r: %s", sql, params, exc)
            raise StoreError(str(exc)) from exc

    def _query(self, sql: str, params: tuple[object, ...] = ()) -> list[tuple]:
        try:
            return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            logger.error("%s failed with %r: %s", sql, params, exc)
            raise StoreError(str(exc)) from exc

    # --- Paths ---

    def add_path(self, path: str) -> None:
        self.add_path_with_time(path, int(time.time()))

    def add_path_with_time(self, path: str, epoch: int) -> None:
        """Record ``path`` as visited at ``epoch``, dropping older visits."""
        logger.debug("add_path_with_time path=%s epoch=%d", path, epoch)
        try:
            with self._conn:
                self._conn.execute("DELETE FROM paths WHERE path = ?", (path,))
                self._conn.execute("INSERT INTO paths (path, date) VALUES (?, ?)", (path, epoch))
        except sqlite3.Error as exc:
            logger.error("failed to record path %r at %d: %s", path, epoch, exc)
            raise StoreError(str(exc)) from exc

    def delete_path(self, path: str) -> None:
        self._execute("DELETE FROM paths WHERE path = ?", (path,))

    def delete_path_by_id(self, path_id: int) -> None:
        self._execute("DELETE FROM paths WHERE id = ?", (path_id,))

    def list_paths(self, offset: int, limit: int, text: str) -> list[PathEntry]:
        """List one page of history, newest first, optionally filtered by substring."""
        logger.debug("list_paths offset=%d limit=%d text=%r", offset, limit, text)
        if text:
            sql = f"SELECT id, path, date FROM paths WHERE path LIKE '%' || ? || '%' {PATH_ORDER} LIMIT ? OFFSET ?"
            params: tuple[object, ...] = (text, limit, offset)
        else:
            sql = f"SELECT id, path, date FROM paths {PATH_ORDER} LIMIT ? OFFSET ?"
            params = (limit, offset)
        return [PathEntry(*row) for row in self._query(sql, params)]

    def list_all_paths(self) -> list[PathEntry]:
        return [PathEntry(*row) for row in self._query(f"SELECT id, path, date FROM paths {PATH_ORDER}")]

    # --- Shortcuts ---

    def add_shortcut(self, name: str, path: str) -> None:
        """Create or replace the shortcut called ``name``."""
        logger.debug("add_shortcut name=%s path=%s", name, path)
        try:
            with self._conn:
                self._conn.execute("DELETE FROM shortcuts WHERE name = ?", (name,))
                self._conn.execute("INSERT INTO shortcuts (name, path) VALUES (?, ?)", (name, path))
        except sqlite3.Error as exc:
            logger.error("failed to insert shortcut name=%r path=%r: %s", name, path, exc)
            raise StoreError(str(exc)) from exc

    def delete_shortcut(self, name: str) -> None:
        self._execute("DELETE FROM shortcuts WHERE name = ?", (name,))

    def find_shortcut(self, name: str) -> str | None:
        rows = self._query("SELECT path FROM shortcuts WHERE name = ?", (name,))
        return rows[0][0] if rows else None

    def list_shortcuts(self, offset: int, limit: int, text: str) -> list[Shortcut]:
        """List one page of shortcuts by name, filtering on name or target."""
        logger.debug("list_shortcuts offset=%d limit=%d text=%r", offset, limit, text)
        if text:
            sql = (
                "SELECT id, name, path FROM shortcuts"
                " WHERE path LIKE '%' || ?1 || '%' OR name LIKE '%' || ?1 || '%'"
                f" {SHORTCUT_ORDER} LIMIT ?2 OFFSET ?3"
            )
            params: tuple[object, ...] = (text, limit, offset)
        else:
            sql = f"SELECT id, name, path FROM shortcuts {SHORTCUT_ORDER} LIMIT ? OFFSET ?"
            params = (limit, offset)
        return [Shortcut(*row) for row in self._query(sql, params)]

    def list_all_shortcuts(self) -> list[Shortcut]:
        return [Shortcut(*row) for row in self._query(f"SELECT id, name, path FROM shortcuts {SHORTCUT_ORDER}")]
