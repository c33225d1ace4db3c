"""Sample trace generator for local span stores.

Builds a three-level trace: a root span, ``services`` service spans under
it, and ``children`` leaf spans under every service span.  Start times
increase in creation order, so sampled children come back in the order
they were generated.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

from tracewalk.server.models import SpanRecord

OPERATIONS = [
    "Assault Weathertop",
    "Siege Dol Guldur",
    "Cross the Misty Mountains",
    "Guard the Argonath",
    "Seek the Arkenstone",
    "Unearth Moria",
    "Hold Helm's Deep",
    "Reclaim Erebor",
    "Venture into Mirkwood",
    "Pursue the Orc-pack",
]

STEP = timedelta(milliseconds=10)


def _new_id() -> str:
    return uuid.uuid4().hex[:16]


def build_sample_trace(
    services: int = 3,
    children: int = 5,
    trace_id: str | None = None,
    started_at: datetime | None = None,
) -> list[SpanRecord]:
    """Return the spans of one sample trace, root first."""
    trace_id = trace_id or uuid.uuid4().hex
    clock = started_at or datetime(2025, 1, 1, tzinfo=timezone.utc)
    root_id = _new_id()
    operations = (OPERATIONS[k % len(OPERATIONS)] for k in range(services * (children + 1)))

    body: list[SpanRecord] = []
    tick = 1
    for i in range(services):
        service_id = _new_id()
        service_start = clock + STEP * tick
        service_name = f"{next(operations)} (s{i + 1})"
        tick += 1

        leaves = []
        for j in range(children):
            start = clock + STEP * tick
            tick += 1
            leaves.append(
                SpanRecord(
                    trace_id=trace_id,
                    span_id=_new_id(),
                    name=f"{next(operations)} (s{i + 1} c{j + 1})",
                    start_time=start.isoformat(timespec="milliseconds"),
                    end_time=(start + STEP / 2).isoformat(timespec="milliseconds"),
                    parent_span_id=service_id,
                )
            )

        body.append(
            SpanRecord(
                trace_id=trace_id,
                span_id=service_id,
                name=service_name,
                start_time=service_start.isoformat(timespec="milliseconds"),
                end_time=(clock + STEP * tick).isoformat(timespec="milliseconds"),
                parent_span_id=root_id,
            )
        )
        body.extend(leaves)

    root = SpanRecord(
        trace_id=trace_id,
        span_id=root_id,
        name="root",
        start_time=clock.isoformat(timespec="milliseconds"),
        end_time=(clock + STEP * (tick + 1)).isoformat(timespec="milliseconds"),
    )
    return [root, *body]
