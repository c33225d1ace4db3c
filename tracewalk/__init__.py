"""
tracewalk — bounded span-tree reconstruction over flat span indexes.

Usage::

    from tracewalk import OpenSearchSpanStore, walk

    async with OpenSearchSpanStore("http://localhost:9200") as store:
        spans = await walk(store, trace_id, span_id, children_limit=3, max_depth=5)
"""

from tracewalk.config import TracewalkConfig
from tracewalk.errors import (
    BackendError,
    ClientInputError,
    DecodeError,
    NotFoundError,
    TracewalkError,
)
from tracewalk.server.models import SpanNode, SpanRecord, TraceDetailRequest
from tracewalk.store import OpenSearchSpanStore, SpanStore, SqliteSpanStore, create_store
from tracewalk.walker import walk

__version__ = "0.1.0"
__all__ = [
    "BackendError",
    "ClientInputError",
    "DecodeError",
    "NotFoundError",
    "OpenSearchSpanStore",
    "SpanNode",
    "SpanRecord",
    "SpanStore",
    "SqliteSpanStore",
    "TraceDetailRequest",
    "TracewalkConfig",
    "TracewalkError",
    "create_store",
    "walk",
]
