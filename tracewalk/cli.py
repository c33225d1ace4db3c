"""tracewalk CLI — command-line interface.

Usage:
    tracewalk serve                       Start the API server
    tracewalk walk TRACE_ID SPAN_ID       Print one bounded span walk as JSON
    tracewalk seed --db ./tracewalk.db    Write a sample trace to SQLite
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

import click

from tracewalk.config import TracewalkConfig
from tracewalk.errors import TracewalkError

_BACKENDS = click.Choice(["opensearch", "sqlite"])


def _build_config(backend: str | None, url: str | None, index: str | None, db: str | None) -> TracewalkConfig:
    config = TracewalkConfig.from_env()
    if backend:
        config.backend = backend
    if url:
        config.opensearch_url = url
        if not backend:
            config.backend = "opensearch"
    if index:
        config.opensearch_index = index
    if db:
        config.db_path = str(Path(db).resolve())
        if not backend and not url:
            config.backend = "sqlite"
    return config


@click.group()
@click.version_option(version="0.1.0", prog_name="tracewalk")
@click.option("--verbose", "-v", is_flag=True, help="Log store queries and responses")
def main(verbose: bool):
    """tracewalk — bounded span-tree reconstruction over flat span indexes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("--port", "-p", default=None, type=int, help="Port to serve on (default: 8746)")
@click.option("--host", "-h", default=None, help="Host to bind to (default: 127.0.0.1)")
@click.option("--backend", type=_BACKENDS, default=None, help="Span store backend")
@click.option("--url", default=None, help="OpenSearch URL")
@click.option("--index", default=None, help="OpenSearch span index")
@click.option("--db", default=None, help="Path to SQLite span database")
def serve(port: int | None, host: str | None, backend: str | None, url: str | None, index: str | None, db: str | None):
    """Start the tracewalk API server."""
    import uvicorn
    from tracewalk.server.app import create_app

    config = _build_config(backend, url, index, db)
    host = host or config.server_host
    port = port or config.server_port
    app = create_app(config)

    click.echo("")
    click.echo("  tracewalk v0.1.0")
    click.echo(f"  API:     http://{host}:{port}/api")
    if config.backend == "sqlite":
        click.echo(f"  Store:   sqlite {config.db_path}")
    else:
        click.echo(f"  Store:   {config.opensearch_url} [{config.opensearch_index}]")
    click.echo("")

    uvicorn.run(app, host=host, port=port, log_level="warning")


@main.command()
@click.argument("trace_id")
@click.argument("span_id")
@click.option("--depth", "-d", default=0, help="Maximum depth (default: 5)")
@click.option("--children-limit", "-c", default=0, help="Children sampled per span (default: 3)")
@click.option("--backend", type=_BACKENDS, default=None, help="Span store backend")
@click.option("--url", default=None, help="OpenSearch URL")
@click.option("--index", default=None, help="OpenSearch span index")
@click.option("--db", default=None, help="Path to SQLite span database")
@click.option("--pretty", is_flag=True, help="Pretty-print JSON output")
def walk(
    trace_id: str,
    span_id: str,
    depth: int,
    children_limit: int,
    backend: str | None,
    url: str | None,
    index: str | None,
    db: str | None,
    pretty: bool,
):
    """Print the bounded span walk below SPAN_ID as JSON."""
    from tracewalk.server.models import TraceDetailRequest
    from tracewalk.store import create_store
    from tracewalk.walker import walk as walk_spans

    config = _build_config(backend, url, index, db)
    if config.backend == "sqlite" and not Path(config.db_path).exists():
        click.echo(f"No database found at {config.db_path}", err=True)
        sys.exit(1)

    max_depth, limit = TraceDetailRequest(depth=depth, children_limit=children_limit).resolve(
        config.default_depth, config.default_children_limit
    )

    async def _walk():
        async with create_store(config) as store:
            return await walk_spans(store, trace_id, span_id, limit, max_depth)

    try:
        spans = asyncio.run(_walk())
    except TracewalkError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    indent = 2 if pretty else None
    click.echo(json.dumps([s.model_dump(by_alias=True) for s in spans], indent=indent, ensure_ascii=False))


@main.command()
@click.option("--db", default="./tracewalk.db", help="Path to SQLite span database")
@click.option("--services", default=3, help="Service spans under the root (default: 3)")
@click.option("--children", default=5, help="Leaf spans under each service span (default: 5)")
def seed(db: str, services: int, children: int):
    """Write a sample depth trace into a SQLite span database."""
    from tracewalk.seed import build_sample_trace
    from tracewalk.store import SqliteSpanStore

    db_path = str(Path(db).resolve())
    spans = build_sample_trace(services=services, children=children)

    async def _seed():
        async with SqliteSpanStore(db_path=db_path) as store:
            await store.insert_spans(spans)

    asyncio.run(_seed())
    root = spans[0]
    click.echo(f"Wrote {len(spans)} spans to {db_path}")
    click.echo(f"  traceId: {root.trace_id}")
    click.echo(f"  spanId:  {root.span_id}")


if __name__ == "__main__":
    main()
