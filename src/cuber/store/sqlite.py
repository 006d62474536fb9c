"""SQLite store implementation."""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from typing import List

from cuber.exceptions import StorageFailure
from cuber.store.base import Store, check_draft, check_limit
from cuber.types import SolveDraft, SolveRecord

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS solves (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    start       NOT NULL,
    solve_time  NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_solves_start ON solves(start, id);
"""


class SqliteStore(Store):
    """SQLite-backed solve store.

    Ids come from ``AUTOINCREMENT`` so they are never handed out twice, even
    after the newest solve is deleted. The connection is shared across
    threads behind a lock; callers run operations via ``asyncio.to_thread``.
    """

    def __init__(self, db_path: str) -> None:
        self._lock = threading.Lock()
        try:
            if db_path != ":memory:":
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._init_schema()
        except (OSError, sqlite3.Error) as exc:
            raise StorageFailure(f"Failed to open solve database {db_path}: {exc}") from exc

    def _init_schema(self) -> None:
        version = self._conn.execute("PRAGMA user_version").fetchone()[0]
        if version not in (0, SCHEMA_VERSION):
            self._conn.close()
            raise StorageFailure(
                f"Unsupported schema version {version} (expected {SCHEMA_VERSION})"
            )
        self._conn.executescript(_SCHEMA)
        if version == 0:
            self._conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
            logger.info("Created solves schema (version %d)", SCHEMA_VERSION)
        self._conn.commit()

    def insert(self, draft: SolveDraft) -> int:
        check_draft(draft)
        with self._lock:
            try:
                with self._conn:
                    cursor = self._conn.execute(
                        "INSERT INTO solves (start, solve_time) VALUES (?, ?)",
                        (draft.start, draft.solve_time),
                    )
            except sqlite3.Error as exc:
                raise StorageFailure(f"Failed to insert solve: {exc}") from exc
        return cursor.lastrowid

    def delete(self, solve_id: int) -> None:
        with self._lock:
            try:
                with self._conn:
                    self._conn.execute("DELETE FROM solves WHERE id = ?", (solve_id,))
            except sqlite3.Error as exc:
                raise StorageFailure(f"Failed to delete solve {solve_id}: {exc}") from exc

    def query_latest(self, limit: int) -> List[SolveRecord]:
        check_limit(limit)
        with self._lock:
            try:
                rows = self._conn.execute(
                    "SELECT id, start, solve_time FROM solves"
                    " ORDER BY start DESC, id DESC LIMIT ?",
                    (limit,),
                ).fetchall()
            except sqlite3.Error as exc:
                raise StorageFailure(f"Failed to query solves: {exc}") from exc
        return [self._row_to_solve(r) for r in rows]

    def count(self) -> int:
        with self._lock:
            try:
                return self._conn.execute("SELECT COUNT(*) FROM solves").fetchone()[0]
            except sqlite3.Error as exc:
                raise StorageFailure(f"Failed to count solves: {exc}") from exc

    @staticmethod
    def _row_to_solve(row: sqlite3.Row) -> SolveRecord:
        return SolveRecord(
            id=row["id"],
            start=row["start"],
            solve_time=row["solve_time"],
        )

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            self._conn.close()
