"""Shared fixtures: a temporary SQLite span store and a span builder."""

import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from tracewalk.server.models import SpanRecord
from tracewalk.store import SqliteSpanStore

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_span(trace_id: str, span_id: str, parent: str = "", offset_ms: int = 0) -> SpanRecord:
    start = BASE_TIME + timedelta(milliseconds=offset_ms)
    return SpanRecord(
        trace_id=trace_id,
        span_id=span_id,
        name=f"op {span_id}",
        start_time=start.isoformat(timespec="milliseconds"),
        end_time=(start + timedelta(milliseconds=5)).isoformat(timespec="milliseconds"),
        parent_span_id=parent,
    )


@pytest.fixture
def span():
    """Factory for span records with a start time offset in milliseconds."""
    return make_span


@pytest_asyncio.fixture
async def store():
    """Create a temporary SQLite span store for testing."""
    tmpdir = tempfile.mkdtemp()
    db_path = os.path.join(tmpdir, "spans.db")
    database = SqliteSpanStore(db_path=db_path)
    await database.connect()
    yield database
    await database.close()
