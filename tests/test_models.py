"""Tests for span and request models."""

import pytest
from pydantic import ValidationError

from tracewalk.server.models import SpanNode, SpanRecord, TraceDetailRequest


def _node(**overrides) -> SpanNode:
    fields = dict(
        trace_id="t1",
        span_id="s1",
        name="root",
        start_time="2025-01-01T00:00:00+00:00",
        end_time="2025-01-01T00:00:01+00:00",
        parent_span_id="",
        level=1,
        current_children_count=2,
        total_children_count=4,
    )
    fields.update(overrides)
    return SpanNode(**fields)


def test_span_node_serializes_camel_case():
    """Test the wire field names of a span node."""
    data = _node().model_dump(by_alias=True)
    assert set(data) == {
        "traceId",
        "spanId",
        "name",
        "startTime",
        "endTime",
        "parentSpanId",
        "level",
        "currentChildrenCount",
        "totalChildrenCount",
    }
    assert data["currentChildrenCount"] == 2
    assert data["totalChildrenCount"] == 4


def test_span_node_is_frozen():
    """Test that a span node cannot be changed after construction."""
    node = _node()
    with pytest.raises(ValidationError):
        node.level = 3


def test_span_node_rejects_sample_larger_than_total():
    """Test that the sampled count may not exceed the total count."""
    with pytest.raises(ValidationError):
        _node(current_children_count=5, total_children_count=4)


def test_span_node_rejects_negative_counts():
    """Test that child counts are non-negative."""
    with pytest.raises(ValidationError):
        _node(current_children_count=-1)


def test_span_record_from_document():
    """Test reading a stored document with camelCase keys and a null parent."""
    record = SpanRecord.model_validate(
        {
            "traceId": "t1",
            "spanId": "s1",
            "name": "GET /",
            "startTime": "2025-01-01T00:00:00Z",
            "endTime": "2025-01-01T00:00:01Z",
            "parentSpanId": None,
            "serviceName": "frontend",
        }
    )
    assert record.span_id == "s1"
    assert record.parent_span_id == ""


@pytest.mark.parametrize(
    "depth, children_limit, expected",
    [
        (0, 0, (5, 3)),
        (2, 7, (2, 7)),
        (-1, 4, (5, 4)),
        (9, -3, (9, 3)),
    ],
)
def test_request_resolve_defaults(depth, children_limit, expected):
    """Test that only positive values override the defaults."""
    request = TraceDetailRequest(depth=depth, children_limit=children_limit)
    assert request.resolve() == expected


def test_request_accepts_camel_case_body():
    """Test parsing a request body as sent by clients."""
    request = TraceDetailRequest.model_validate({"depth": 2, "childrenLimit": 1, "url": "http://os:9200"})
    assert request.children_limit == 1
    assert request.url == "http://os:9200"
    assert request.resolve(10, 10) == (2, 1)
