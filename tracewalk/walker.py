"""Bounded pre-order expansion of a span subtree.

The store has no tree, only documents pointing at their parent.  The walk
rebuilds a bounded slice of the tree one span at a time: each visited span
yields a capped sample of child ids, and those become the next frontier one
level deeper.  Output is flat and pre-order, so a consumer recovers the
shape from ``level`` and ``parentSpanId`` alone.
"""

from __future__ import annotations

import logging

from tracewalk.server.models import SpanNode
from tracewalk.store._base import SpanStore

logger = logging.getLogger("tracewalk")


async def walk(
    store: SpanStore,
    trace_id: str,
    root_span_id: str,
    children_limit: int,
    max_depth: int,
    start_depth: int = 1,
) -> list[SpanNode]:
    """Walk the subtree under ``root_span_id`` depth-first, parent before child.

    Every visited span costs one :meth:`SpanStore.fetch`.  Siblings are
    visited in sampled order (ascending start time), each subtree finished
    before the next sibling starts.  Spans deeper than ``max_depth`` are never
    fetched.

    Any fetch error aborts the whole walk and propagates unchanged; partial
    results are never returned.
    """
    result: list[SpanNode] = []
    # LIFO work-list of (span_id, level); children are pushed reversed so
    # they pop in sampled order.
    pending: list[tuple[str, int]] = [(root_span_id, start_depth)]

    while pending:
        span_id, level = pending.pop()
        if level > max_depth:
            continue
        node, child_ids = await store.fetch(trace_id, span_id, level, children_limit)
        logger.debug("Found node for: traceId: %r, spanId: %r", trace_id, span_id)
        result.append(node)
        if level + 1 > max_depth:
            continue
        for child_id in reversed(child_ids):
            pending.append((child_id, level + 1))

    logger.info(
        "Walked %d spans of trace %s from %s (depth %d, children limit %d)",
        len(result), trace_id, root_span_id, max_depth, children_limit,
    )
    return result
