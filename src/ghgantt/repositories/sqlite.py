"""SQLite task store."""

from __future__ import annotations

import contextlib
import logging
import sqlite3
import threading
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from ..models import Task
from ..utils.datetime import from_iso, to_iso

logger = logging.getLogger(__name__)

TABLE = "Task"

# Column name -> declaration, in schema order
COLUMNS: dict[str, str] = {
    "id": "INTEGER PRIMARY KEY",
    "title": "TEXT NOT NULL DEFAULT ''",
    "body": "TEXT NOT NULL DEFAULT ''",
    "url": "TEXT NOT NULL DEFAULT ''",
    "html_url": "TEXT NOT NULL DEFAULT ''",
    "number": "INTEGER NOT NULL",
    "state": "TEXT NOT NULL",
    "remote_created_at": "TEXT NOT NULL",
    "start_date": "TEXT NOT NULL",
    "end_date": "TEXT",
    "duration": "INTEGER NOT NULL DEFAULT 1",
    "label": "TEXT",
    "color": "TEXT",
    "progress": "REAL",
    "is_deleted": "INTEGER NOT NULL DEFAULT 0",
    "type": "TEXT",
    "parent": "INTEGER",
    "level": "INTEGER",
    "open": "INTEGER",
}

_DATETIME_COLUMNS = ("remote_created_at", "start_date", "end_date")
_BOOL_COLUMNS = ("is_deleted", "open")


class TaskStoreError(Exception):
    """A task store read or write failed."""

    pass


def _quote(name: str) -> str:
    return f'"{name}"'


_COLUMN_LIST = ", ".join(_quote(c) for c in COLUMNS)
_PLACEHOLDERS = ", ".join("?" for _ in COLUMNS)
_UPDATE_LIST = ", ".join(f"{_quote(c)} = excluded.{_quote(c)}" for c in COLUMNS if c != "id")

UPSERT_SQL = (
    f"INSERT INTO {TABLE} ({_COLUMN_LIST}) VALUES ({_PLACEHOLDERS}) "
    f"ON CONFLICT(id) DO UPDATE SET {_UPDATE_LIST}"
)

CHART_SQL = (
    f"SELECT * FROM {TABLE} "
    "WHERE is_deleted = 0 AND state = 'open' AND end_date IS NOT NULL "
    "ORDER BY label ASC, start_date DESC, id ASC"
)


class SQLiteTaskStore:
    """Task store backed by a single SQLite table.

    Datetimes are stored as UTC ISO-8601 text so that text ordering matches
    chronological ordering.

    Thread-safety:
    - each method opens its own SQLite connection
    - writers are serialized by a per-store lock and BEGIN IMMEDIATE
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._write_lock = threading.Lock()
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%d", self._db_path, self.count())

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Shutdown hook (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    @contextlib.contextmanager
    def _read(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise TaskStoreError(f"Cannot open task store: {e}") from e
        try:
            yield conn
        except sqlite3.Error as e:
            raise TaskStoreError(f"Task store read failed: {e}") from e
        finally:
            conn.close()

    @contextlib.contextmanager
    def _write(self) -> Iterator[sqlite3.Connection]:
        """One write transaction; rolled back entirely on any error."""
        with self._write_lock:
            try:
                conn = self._get_conn()
            except sqlite3.Error as e:
                raise TaskStoreError(f"Cannot open task store: {e}") from e
            try:
                conn.execute("BEGIN IMMEDIATE")
                try:
                    yield conn
                except BaseException:
                    conn.execute("ROLLBACK")
                    raise
                conn.execute("COMMIT")
            except sqlite3.Error as e:
                logger.error("Task store write failed: %s", e)
                raise TaskStoreError(f"Task store write failed: {e}") from e
            finally:
                conn.close()

    def _ensure_schema(self) -> None:
        with self._write() as conn:
            columns_sql = ", ".join(f"{_quote(c)} {decl}" for c, decl in COLUMNS.items())
            conn.execute(f"CREATE TABLE IF NOT EXISTS {TABLE} ({columns_sql})")

            # Migrations (safe): add missing columns.
            existing = {row["name"] for row in conn.execute(f"PRAGMA table_info({TABLE})")}
            for name, decl in COLUMNS.items():
                if name in existing:
                    continue
                # SQLite cannot add a NOT NULL column without a default
                if "DEFAULT" not in decl:
                    decl = decl.replace(" NOT NULL", "")
                conn.execute(f"ALTER TABLE {TABLE} ADD COLUMN {_quote(name)} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_task_chart ON {TABLE}(is_deleted, state)"
            )
            conn.execute(f"CREATE INDEX IF NOT EXISTS idx_task_label ON {TABLE}(label)")

    @staticmethod
    def _task_to_row(task: Task) -> tuple[Any, ...]:
        data = task.model_dump()
        values = []
        for column in COLUMNS:
            value = data[column]
            if column in _DATETIME_COLUMNS and value is not None:
                value = to_iso(value)
            elif column in _BOOL_COLUMNS and value is not None:
                value = int(value)
            values.append(value)
        return tuple(values)

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        data = {column: row[column] for column in COLUMNS}
        for column in _DATETIME_COLUMNS:
            if data[column] is not None:
                data[column] = from_iso(data[column])
        for column in _BOOL_COLUMNS:
            if data[column] is not None:
                data[column] = bool(data[column])
        return Task(**data)

    # ---- public API ----

    def count(self) -> int:
        with self._read() as conn:
            (n,) = conn.execute(f"SELECT COUNT(*) FROM {TABLE}").fetchone()
            return int(n)

    def upsert(self, task: Task) -> None:
        self.upsert_many([task])

    def upsert_many(self, tasks: Iterable[Task]) -> int:
        rows = [self._task_to_row(task) for task in tasks]
        if not rows:
            return 0
        with self._write() as conn:
            conn.executemany(UPSERT_SQL, rows)
        logger.debug("Upserted %d task(s)", len(rows))
        return len(rows)

    def get(self, task_id: int) -> Task | None:
        with self._read() as conn:
            row = conn.execute(f"SELECT * FROM {TABLE} WHERE id = ?", (task_id,)).fetchone()
        return self._row_to_task(row) if row is not None else None

    def list_ids(self) -> set[int]:
        with self._read() as conn:
            return {int(row["id"]) for row in conn.execute(f"SELECT id FROM {TABLE}")}

    def mark_deleted(self, task_ids: Iterable[int]) -> int:
        ids = [(int(task_id),) for task_id in task_ids]
        if not ids:
            return 0
        with self._write() as conn:
            before = conn.total_changes
            conn.executemany(
                f"UPDATE {TABLE} SET is_deleted = 1 WHERE id = ? AND is_deleted = 0", ids
            )
            changed = conn.total_changes - before
        logger.debug("Marked %d of %d id(s) deleted", changed, len(ids))
        return changed

    def query_for_chart(self) -> list[Task]:
        with self._read() as conn:
            rows = conn.execute(CHART_SQL).fetchall()
        return [self._row_to_task(row) for row in rows]
