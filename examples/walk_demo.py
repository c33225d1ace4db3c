"""
tracewalk demo
==============

Seeds a sample trace into a local SQLite span store and prints the
bounded walk below its root, indented by level.

Usage:
    python walk_demo.py

Against OpenSearch instead:
    tracewalk walk <traceId> <spanId> --url http://localhost:9200 --pretty
"""

import asyncio

from tracewalk import SqliteSpanStore, walk
from tracewalk.seed import build_sample_trace


async def main():
    spans = build_sample_trace(services=3, children=5)
    root = spans[0]

    async with SqliteSpanStore(db_path="./tracewalk_demo.db") as store:
        await store.insert_spans(spans)
        nodes = await walk(store, root.trace_id, root.span_id, children_limit=3, max_depth=5)

    for node in nodes:
        indent = "  " * (node.level - 1)
        print(
            f"{indent}{node.name} "
            f"[{node.current_children_count}/{node.total_children_count} children]"
        )


if __name__ == "__main__":
    asyncio.run(main())
