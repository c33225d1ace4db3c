"""Pydantic models for the tracewalk API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


# ── Span Models ────────────────────────────────────────────────────────────


class SpanRecord(BaseModel):
    """A span document as stored in the backing span index."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    trace_id: str
    span_id: str
    name: str = ""
    start_time: str = ""
    end_time: str = ""
    parent_span_id: str = ""

    @field_validator("name", "start_time", "end_time", "parent_span_id", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value


class SpanNode(SpanRecord):
    """A span as visited by a traversal, with child-count metadata.

    ``current_children_count`` is the size of the sampled child list,
    ``total_children_count`` the number of direct children in the store.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    level: int
    current_children_count: int = Field(0, ge=0)
    total_children_count: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _check_counts(self) -> SpanNode:
        if self.current_children_count > self.total_children_count:
            raise ValueError(
                f"currentChildrenCount ({self.current_children_count}) exceeds "
                f"totalChildrenCount ({self.total_children_count})"
            )
        return self


# ── Request Models ─────────────────────────────────────────────────────────


DEFAULT_DEPTH = 5
DEFAULT_CHILDREN_LIMIT = 3


class TraceDetailRequest(BaseModel):
    """Body of a trace detail request. Every field is optional."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    depth: int = 0
    children_limit: int = 0
    url: str | None = None
    index: str | None = None

    def resolve(
        self,
        default_depth: int = DEFAULT_DEPTH,
        default_children_limit: int = DEFAULT_CHILDREN_LIMIT,
    ) -> tuple[int, int]:
        """Return ``(depth, children_limit)``, keeping only positive overrides."""
        depth = self.depth if self.depth > 0 else default_depth
        children_limit = (
            self.children_limit if self.children_limit > 0 else default_children_limit
        )
        return depth, children_limit
