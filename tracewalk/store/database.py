"""SQLite span store.

Keeps spans in a single flat table keyed like the search index: by trace
id, span id and parent span id.  Useful for local development, demos and
tests without a cluster.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Iterable

import aiosqlite

from tracewalk.errors import BackendError, NotFoundError
from tracewalk.server.models import SpanNode, SpanRecord
from tracewalk.store._base import SpanStore, build_node

# ── Schema ─────────────────────────────────────────────────────────────────

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS spans (
    trace_id       TEXT NOT NULL,
    span_id        TEXT NOT NULL,
    name           TEXT NOT NULL DEFAULT '',
    start_time     TEXT NOT NULL DEFAULT '',
    end_time       TEXT NOT NULL DEFAULT '',
    parent_span_id TEXT NOT NULL DEFAULT '',
    PRIMARY KEY (trace_id, span_id)
);

CREATE INDEX IF NOT EXISTS idx_spans_parent ON spans(trace_id, parent_span_id, start_time);
"""


class SqliteSpanStore(SpanStore):
    """Async SQLite span store."""

    def __init__(self, db_path: str = "./tracewalk.db"):
        self.db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open database connection and ensure schema exists."""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self._db = await aiosqlite.connect(self.db_path)
            self._db.row_factory = aiosqlite.Row
            await self._db.execute("PRAGMA journal_mode=WAL")
            await self._db.executescript(SCHEMA_SQL)
            await self._db.commit()
        except sqlite3.Error as e:
            raise BackendError(f"failed to open span database: {e}") from e

    async def close(self) -> None:
        """Close database connection."""
        if self._db:
            await self._db.close()
            self._db = None

    @property
    def db(self) -> aiosqlite.Connection:
        if self._db is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._db

    # ── Reads ──────────────────────────────────────────────────────────

    async def _fetch(
        self, trace_id: str, span_id: str, level: int, children_limit: int
    ) -> tuple[SpanNode, list[str]]:
        try:
            async with self.db.execute(
                "SELECT * FROM spans WHERE trace_id = ? AND span_id = ?",
                (trace_id, span_id),
            ) as cursor:
                row = await cursor.fetchone()
            if row is None:
                raise NotFoundError("span not found", span_id=span_id)

            child_ids: list[str] = []
            async with self.db.execute(
                """SELECT span_id FROM spans
                   WHERE trace_id = ? AND parent_span_id = ?
                   ORDER BY start_time ASC, span_id ASC
                   LIMIT ?""",
                (trace_id, span_id, children_limit),
            ) as cursor:
                async for child in cursor:
                    child_ids.append(child["span_id"])

            async with self.db.execute(
                "SELECT COUNT(*) FROM spans WHERE trace_id = ? AND parent_span_id = ?",
                (trace_id, span_id),
            ) as cursor:
                count_row = await cursor.fetchone()
                total = count_row[0] if count_row else 0
        except (sqlite3.Error, OverflowError) as e:
            raise BackendError(f"failed to query span database: {e}") from e

        return build_node(self._row_to_span(row), level, child_ids, total), child_ids

    # ── Maintenance ────────────────────────────────────────────────────

    async def insert_span(self, span: SpanRecord) -> None:
        """Insert or replace a span record."""
        await self.insert_spans([span])

    async def insert_spans(self, spans: Iterable[SpanRecord]) -> None:
        """Insert or replace many span records in one transaction."""
        await self.db.executemany(
            """INSERT OR REPLACE INTO spans
               (trace_id, span_id, name, start_time, end_time, parent_span_id)
               VALUES (?, ?, ?, ?, ?, ?)""",
            [
                (
                    s.trace_id,
                    s.span_id,
                    s.name,
                    s.start_time,
                    s.end_time,
                    s.parent_span_id,
                )
                for s in spans
            ],
        )
        await self.db.commit()

    async def delete_all(self) -> int:
        """Delete all spans. Returns count of deleted spans."""
        async with self.db.execute("SELECT COUNT(*) FROM spans") as cur:
            row = await cur.fetchone()
            count = row[0] if row else 0
        await self.db.execute("DELETE FROM spans")
        await self.db.commit()
        return count

    # ── Helpers ─────────────────────────────────────────────────────────

    @staticmethod
    def _row_to_span(row: aiosqlite.Row) -> SpanRecord:
        return SpanRecord(
            trace_id=row["trace_id"],
            span_id=row["span_id"],
            name=row["name"],
            start_time=row["start_time"],
            end_time=row["end_time"],
            parent_span_id=row["parent_span_id"],
        )
