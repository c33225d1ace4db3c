"""OpenSearch span store.

Spans live as flat documents in a simple-schema observability index
(``ss4o_traces-*``).  One search with ``size: 0`` and two filter
aggregations answers a whole :meth:`SpanStore.fetch`: ``span`` carries the
span document itself, ``children`` counts every document whose
``parentSpanId`` is the span and returns the first few ids by start time.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from opensearchpy import AsyncOpenSearch
from opensearchpy.exceptions import OpenSearchException
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tracewalk.errors import BackendError, DecodeError, NotFoundError
from tracewalk.server.models import SpanNode, SpanRecord
from tracewalk.store._base import SpanStore, build_node

logger = logging.getLogger("tracewalk")

DEFAULT_INDEX = "ss4o_traces-default-namespace"


# ── Response shape ─────────────────────────────────────────────────────────


class _Hit(BaseModel):
    source: dict[str, Any] = Field(alias="_source")


class _HitList(BaseModel):
    hits: list[_Hit]


class _TopHits(BaseModel):
    hits: _HitList


class _ChildrenAgg(BaseModel):
    doc_count: int
    span_docs: _TopHits


class _SpanAgg(BaseModel):
    doc: _TopHits


class _Aggregations(BaseModel):
    children: _ChildrenAgg
    span: _SpanAgg


class _SearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    aggregations: _Aggregations


class _ChildSource(BaseModel):
    span_id: str = Field(alias="spanId")


# ── Query ──────────────────────────────────────────────────────────────────


def build_span_query(trace_id: str, span_id: str, children_limit: int) -> dict[str, Any]:
    """Build the search body for one span and a sample of its children."""
    return {
        "size": 0,
        "query": {"term": {"traceId": trace_id}},
        "aggs": {
            "children": {
                "filter": {"term": {"parentSpanId": span_id}},
                "aggs": {
                    "span_docs": {
                        "top_hits": {
                            "size": children_limit,
                            "sort": [{"startTime": {"order": "asc"}}],
                            "_source": ["spanId"],
                        }
                    }
                },
            },
            "span": {
                "filter": {"term": {"spanId": span_id}},
                "aggs": {"doc": {"top_hits": {"size": 1}}},
            },
        },
    }


def parse_span_response(
    body: Any, span_id: str, level: int
) -> tuple[SpanNode, list[str]]:
    """Turn a raw search response into ``(node, child_ids)``."""
    try:
        response = _SearchResponse.model_validate(body)
    except ValidationError as e:
        raise DecodeError(f"failed to decode OpenSearch response: {e}") from e

    aggs = response.aggregations
    if not aggs.span.doc.hits.hits:
        raise NotFoundError("span not found", span_id=span_id)

    try:
        record = SpanRecord.model_validate(aggs.span.doc.hits.hits[0].source)
        child_ids = [
            _ChildSource.model_validate(hit.source).span_id
            for hit in aggs.children.span_docs.hits.hits
        ]
        node = build_node(record, level, child_ids, aggs.children.doc_count)
    except ValidationError as e:
        raise DecodeError(f"failed to decode OpenSearch response: {e}") from e
    return node, child_ids


# ── Store ──────────────────────────────────────────────────────────────────


class OpenSearchSpanStore(SpanStore):
    """Span store backed by an OpenSearch cluster.

    Usage::

        async with OpenSearchSpanStore("http://localhost:9200") as store:
            node, child_ids = await store.fetch(trace_id, span_id, 1, 3)

    A ``client`` may be passed in to share one connection pool; the store
    then leaves closing it to the caller.
    """

    def __init__(
        self,
        url: str = "http://localhost:9200",
        index: str = DEFAULT_INDEX,
        timeout: float = 10.0,
        client: AsyncOpenSearch | None = None,
    ):
        self.url = url
        self.index = index
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def connect(self) -> None:
        if self._client is None:
            self._client = AsyncOpenSearch(hosts=[self.url], timeout=self.timeout)

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.close()
            self._client = None

    @property
    def client(self) -> AsyncOpenSearch:
        if self._client is None:
            raise RuntimeError("Store not connected. Call connect() first.")
        return self._client

    async def _fetch(
        self, trace_id: str, span_id: str, level: int, children_limit: int
    ) -> tuple[SpanNode, list[str]]:
        body = build_span_query(trace_id, span_id, children_limit)
        try:
            response = await self.client.search(index=self.index, body=body)
        except OpenSearchException as e:
            raise BackendError(f"failed to execute OpenSearch query: {e}") from e

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("OpenSearch response body: %s", json.dumps(response, default=str))
        return parse_span_response(response, span_id, level)
