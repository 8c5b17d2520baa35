"""SQLite report database: tags, transfers and the tags attached to them."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from diurne.config import Config
from diurne.errors import StorageError

_SCHEMA = """
CREATE TABLE IF NOT EXISTS tags(
    tagid INTEGER PRIMARY KEY,
    name TEXT UNIQUE
);
CREATE TABLE IF NOT EXISTS transfers(
    transferid INTEGER PRIMARY KEY,
    store TEXT,
    amount INTEGER
);
CREATE TABLE IF NOT EXISTS tagged_transfers(
    tagid INTEGER,
    transferid INTEGER,
    FOREIGN KEY(tagid) REFERENCES tags(tagid) ON DELETE CASCADE,
    FOREIGN KEY(transferid) REFERENCES transfers(transferid) ON DELETE CASCADE
);
CREATE UNIQUE INDEX IF NOT EXISTS tagged_transfers_lookup
    ON tagged_transfers(tagid, transferid);
"""


class ReportDatabase:
    """Owns one connection to the report database."""

    def __init__(self, connection: sqlite3.Connection, path: Path) -> None:
        self._conn = connection
        self._path = path

    @classmethod
    def with_config(cls, config: Config) -> ReportDatabase:
        return cls.open(config.database_path)

    @classmethod
    def open(cls, path: Path | str) -> ReportDatabase:
        """Open (creating if needed) the database at *path* and ensure the schema."""
        try:
            conn = sqlite3.connect(str(path))
        except sqlite3.Error as exc:
            raise StorageError("failed to open report database.", str(path)) from exc
        try:
            conn.execute("PRAGMA foreign_keys = ON")
            conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            conn.close()
            raise StorageError("failed to open report database.", str(path)) from exc
        return cls(conn, Path(path))

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> ReportDatabase:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def sync_tags(self, tags: list[str]) -> int:
        """Insert tag names not yet present; return how many were added."""
        try:
            with self._conn:
                before = self._conn.total_changes
                self._conn.executemany(
                    "INSERT OR IGNORE INTO tags(name) VALUES (?)",
                    [(name,) for name in tags],
                )
                return self._conn.total_changes - before
        except sqlite3.Error as exc:
            raise StorageError("failed to store tags.", str(self._path)) from exc

    def add_transfer(self, store: str, amount: int) -> int:
        """Record a transfer (amount in minor currency units) and return its id."""
        try:
            with self._conn:
                cur = self._conn.execute(
                    "INSERT INTO transfers(store, amount) VALUES (?, ?)", (store, amount)
                )
        except sqlite3.Error as exc:
            raise StorageError("failed to store transfer.", str(self._path)) from exc
        assert cur.lastrowid is not None
        return cur.lastrowid

    def tag_transfer(self, transferid: int, name: str) -> None:
        """Attach tag *name* to a transfer. Tagging twice is a no-op."""
        row = self._conn.execute("SELECT tagid FROM tags WHERE name = ?", (name,)).fetchone()
        if row is None:
            raise StorageError(f"unknown tag '{name}'.", str(self._path))
        try:
            with self._conn:
                self._conn.execute(
                    "INSERT OR IGNORE INTO tagged_transfers(tagid, transferid) VALUES (?, ?)",
                    (row[0], transferid),
                )
        except sqlite3.Error as exc:
            raise StorageError("failed to tag transfer.", str(self._path)) from exc

    def tags_for(self, transferid: int) -> list[str]:
        rows = self._conn.execute(
            "SELECT tags.name FROM tagged_transfers"
            " JOIN tags ON tags.tagid = tagged_transfers.tagid"
            " WHERE tagged_transfers.transferid = ?"
            " ORDER BY tags.name",
            (transferid,),
        ).fetchall()
        return [name for (name,) in rows]
