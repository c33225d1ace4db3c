"""Span API routes."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import APIRouter, Body, Request

from tracewalk.config import TracewalkConfig
from tracewalk.errors import ClientInputError
from tracewalk.server.models import SpanNode, TraceDetailRequest
from tracewalk.store import SpanStore, create_store
from tracewalk.walker import walk

logger = logging.getLogger("tracewalk")

router = APIRouter(tags=["spans"])


@asynccontextmanager
async def _acquire_store(request: Request, detail: TraceDetailRequest) -> AsyncIterator[SpanStore]:
    """Yield the store for one request.

    A request naming its own ``url`` gets a client of its own, closed when the
    request ends; otherwise the application's store is shared.
    """
    if detail.url:
        config: TracewalkConfig = request.app.state.config
        async with create_store(config, url=detail.url, index=detail.index) as store:
            yield store
    else:
        yield request.app.state.store


@router.post(
    "/traces/{trace_id}/spans/{span_id}/detail",
    response_model=list[SpanNode],
)
async def get_trace_detail(
    request: Request,
    trace_id: str,
    span_id: str,
    detail: TraceDetailRequest | None = Body(None),
):
    """Get a bounded, pre-order flat list of spans below ``span_id``.

    The starting span is returned at level 1.  Any store failure fails the
    whole request.
    """
    if not trace_id.strip() or not span_id.strip():
        raise ClientInputError("traceId and spanId are required")

    detail = detail or TraceDetailRequest()
    config: TracewalkConfig = request.app.state.config
    depth, children_limit = detail.resolve(
        config.default_depth, config.default_children_limit
    )
    logger.info(
        "Processing trace detail request for traceId: %s, spanId: %s", trace_id, span_id
    )

    async with _acquire_store(request, detail) as store:
        spans = await walk(store, trace_id, span_id, children_limit, depth, start_depth=1)

    logger.info("Successfully returned flat trace for traceId: %s", trace_id)
    return spans
