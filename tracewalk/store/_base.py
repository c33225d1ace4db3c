"""SpanStore — the per-span query contract shared by all backends.

A store answers one question per call: given a trace and a span, return
the span's own fields, a start-time ordered sample of its direct
children's ids, and how many direct children exist in total.  Each
backend does this with a single round-trip to its engine.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from tracewalk.errors import ClientInputError
from tracewalk.server.models import SpanNode, SpanRecord

logger = logging.getLogger("tracewalk")

MAX_CHILDREN_LIMIT = 10_000


class SpanStore(ABC):
    """Read-only access to spans stored as flat documents."""

    async def connect(self) -> None:
        """Acquire the underlying client or connection."""

    async def close(self) -> None:
        """Release the underlying client or connection."""

    async def __aenter__(self) -> SpanStore:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def fetch(
        self, trace_id: str, span_id: str, level: int, children_limit: int
    ) -> tuple[SpanNode, list[str]]:
        """Fetch one span with a bounded sample of its children's ids.

        Args:
            trace_id: Trace the span belongs to.
            span_id: Span to fetch.
            level: Stamped onto the returned node; does not affect the query.
            children_limit: Maximum number of child ids to return.

        Returns:
            ``(node, child_ids)`` where ``child_ids`` is ordered by ascending
            start time and holds at most ``children_limit`` entries.

        Raises:
            ClientInputError: An identifier is empty or the limit is out of range.
            NotFoundError: No span ``span_id`` exists in ``trace_id``.
            BackendError: The store failed to run the query.
            DecodeError: The store answered with an unexpected shape.
        """
        if not trace_id or not span_id:
            raise ClientInputError("traceId and spanId are required")
        if children_limit < 0:
            raise ClientInputError(
                "childrenLimit must not be negative", children_limit=children_limit
            )
        if children_limit > MAX_CHILDREN_LIMIT:
            raise ClientInputError(
                f"childrenLimit must not exceed {MAX_CHILDREN_LIMIT}",
                children_limit=children_limit,
            )
        logger.debug("Querying span by id: %s, traceId: %s", span_id, trace_id)
        return await self._fetch(trace_id, span_id, level, children_limit)

    @abstractmethod
    async def _fetch(
        self, trace_id: str, span_id: str, level: int, children_limit: int
    ) -> tuple[SpanNode, list[str]]:
        """Backend-specific single query behind :meth:`fetch`."""


def build_node(
    record: SpanRecord, level: int, child_ids: list[str], total_children: int
) -> SpanNode:
    """Combine a stored span with its traversal metadata."""
    return SpanNode(
        trace_id=record.trace_id,
        span_id=record.span_id,
        name=record.name,
        start_time=record.start_time,
        end_time=record.end_time,
        parent_span_id=record.parent_span_id,
        level=level,
        current_children_count=len(child_ids),
        total_children_count=total_children,
    )
