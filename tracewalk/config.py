"""tracewalk configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class TracewalkConfig:
    """Configuration for tracewalk."""

    backend: str = "opensearch"
    """Span store backend: ``"opensearch"`` or ``"sqlite"``."""

    opensearch_url: str = "http://localhost:9200"
    """Base URL of the OpenSearch cluster holding the span index."""

    opensearch_index: str = "ss4o_traces-default-namespace"
    """Index (or index pattern) the span documents live in."""

    db_path: str = "./tracewalk.db"
    """Path to the SQLite database file for the ``sqlite`` backend."""

    default_depth: int = 5
    """Depth used when a request does not ask for a positive one."""

    default_children_limit: int = 3
    """Children sample size used when a request does not ask for a positive one."""

    request_timeout: float = 10.0
    """Seconds before a single store query is abandoned."""

    server_host: str = "127.0.0.1"
    """Host to bind the web server to."""

    server_port: int = 8746
    """Port for the web server."""

    @classmethod
    def from_env(cls) -> TracewalkConfig:
        """Build a config from ``TRACEWALK_*`` environment variables."""
        config = cls()
        env = os.environ
        config.backend = env.get("TRACEWALK_BACKEND", config.backend)
        config.opensearch_url = env.get("TRACEWALK_OPENSEARCH_URL", config.opensearch_url)
        config.opensearch_index = env.get("TRACEWALK_OPENSEARCH_INDEX", config.opensearch_index)
        config.db_path = env.get("TRACEWALK_DB_PATH", config.db_path)
        config.default_depth = int(env.get("TRACEWALK_DEFAULT_DEPTH", config.default_depth))
        config.default_children_limit = int(
            env.get("TRACEWALK_DEFAULT_CHILDREN_LIMIT", config.default_children_limit)
        )
        config.request_timeout = float(env.get("TRACEWALK_REQUEST_TIMEOUT", config.request_timeout))
        config.server_host = env.get("TRACEWALK_HOST", config.server_host)
        config.server_port = int(env.get("TRACEWALK_PORT", config.server_port))
        return config
