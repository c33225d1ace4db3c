"""Span stores — single-query span lookup over flat span documents."""

from __future__ import annotations

from tracewalk.config import TracewalkConfig
from tracewalk.store._base import SpanStore, build_node
from tracewalk.store.database import SqliteSpanStore
from tracewalk.store.opensearch import OpenSearchSpanStore

__all__ = [
    "OpenSearchSpanStore",
    "SpanStore",
    "SqliteSpanStore",
    "build_node",
    "create_store",
]


def create_store(
    config: TracewalkConfig,
    url: str | None = None,
    index: str | None = None,
) -> SpanStore:
    """Create an unconnected store for ``config``.

    An explicit ``url`` always selects OpenSearch, overriding the configured
    backend.
    """
    if url or config.backend == "opensearch":
        return OpenSearchSpanStore(
            url=url or config.opensearch_url,
            index=index or config.opensearch_index,
            timeout=config.request_timeout,
        )
    if config.backend == "sqlite":
        return SqliteSpanStore(db_path=config.db_path)
    raise ValueError(f"unknown span store backend {config.backend!r}")
