"""Tests for the command-line interface and sample trace generator."""

import json
import re

from click.testing import CliRunner

from tracewalk.cli import main
from tracewalk.seed import build_sample_trace


def test_build_sample_trace_shape():
    """Test the sample trace has a root, service spans and leaves."""
    spans = build_sample_trace(services=3, children=5, trace_id="trace_x")

    assert len(spans) == 1 + 3 + 15
    root = spans[0]
    assert root.parent_span_id == ""
    assert all(s.trace_id == "trace_x" for s in spans)

    services = [s for s in spans if s.parent_span_id == root.span_id]
    assert len(services) == 3
    for service in services:
        leaves = [s for s in spans if s.parent_span_id == service.span_id]
        assert len(leaves) == 5
        starts = [s.start_time for s in leaves]
        assert starts == sorted(starts)
        assert all(service.start_time < leaf.start_time for leaf in leaves)


def test_seed_then_walk(tmp_path):
    """Test seeding a database and walking it from the command line."""
    runner = CliRunner()
    db_path = str(tmp_path / "cli.db")

    result = runner.invoke(main, ["seed", "--db", db_path, "--services", "2", "--children", "4"])
    assert result.exit_code == 0, result.output
    assert "Wrote 11 spans" in result.output
    trace_id = re.search(r"traceId: (\S+)", result.output).group(1)
    span_id = re.search(r"spanId:\s+(\S+)", result.output).group(1)

    result = runner.invoke(main, ["walk", trace_id, span_id, "--db", db_path, "-c", "2"])
    assert result.exit_code == 0, result.output
    spans = json.loads(result.output)

    assert [s["level"] for s in spans] == [1, 2, 3, 3, 2, 3, 3]
    assert spans[0]["spanId"] == span_id
    assert spans[0]["totalChildrenCount"] == 2
    assert spans[1]["currentChildrenCount"] == 2
    assert spans[1]["totalChildrenCount"] == 4


def test_walk_depth_option(tmp_path):
    """Test the depth option limits the walk."""
    runner = CliRunner()
    db_path = str(tmp_path / "cli.db")
    result = runner.invoke(main, ["seed", "--db", db_path])
    trace_id = re.search(r"traceId: (\S+)", result.output).group(1)
    span_id = re.search(r"spanId:\s+(\S+)", result.output).group(1)

    result = runner.invoke(main, ["walk", trace_id, span_id, "--db", db_path, "--depth", "2", "--pretty"])
    assert result.exit_code == 0, result.output
    spans = json.loads(result.output)
    assert [s["level"] for s in spans] == [1, 2, 2, 2]


def test_walk_missing_span(tmp_path):
    """Test a failing walk exits non-zero with a message."""
    runner = CliRunner()
    db_path = str(tmp_path / "cli.db")
    runner.invoke(main, ["seed", "--db", db_path])

    result = runner.invoke(main, ["walk", "nope", "nope", "--db", db_path])
    assert result.exit_code == 1
    assert "span not found" in result.output


def test_walk_missing_database(tmp_path):
    """Test walking a database that does not exist."""
    runner = CliRunner()
    result = runner.invoke(main, ["walk", "t", "s", "--db", str(tmp_path / "absent.db")])
    assert result.exit_code == 1
    assert "No database found" in result.output


def test_url_selects_opensearch_over_env_backend(monkeypatch):
    """Test an explicit --url selects OpenSearch even when the environment says sqlite."""
    from tracewalk.cli import _build_config

    monkeypatch.setenv("TRACEWALK_BACKEND", "sqlite")

    config = _build_config(None, "http://search:9200", None, None)
    assert config.backend == "opensearch"
    assert config.opensearch_url == "http://search:9200"

    config = _build_config("sqlite", "http://search:9200", None, None)
    assert config.backend == "sqlite"
