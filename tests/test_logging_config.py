import io
import json
import logging

import pytest

from clusters_mcp.config import ClustersConfig
from clusters_mcp.logging_config import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_format_includes_extras(restore_root_logger):
    stream = io.StringIO()
    configure_logging(ClustersConfig(log_level="debug", log_format="json"), stream=stream)

    logging.getLogger("clusters_mcp.test").info(
        "tool=%s outcome=success", "get_cluster_by_id", extra={"tool": "get_cluster_by_id", "request_id": "r1"}
    )

    record = json.loads(stream.getvalue().splitlines()[-1])
    assert record["level"] == "INFO"
    assert record["message"] == "tool=get_cluster_by_id outcome=success"
    assert record["name"] == "clusters_mcp.test"
    assert record["tool"] == "get_cluster_by_id"
    assert record["request_id"] == "r1"
    assert logging.getLogger().level == logging.DEBUG


def test_plain_format_and_unknown_level(restore_root_logger):
    stream = io.StringIO()
    configure_logging(ClustersConfig(log_level="verbose", log_format="plain"), stream=stream)

    logging.getLogger("clusters_mcp.test").warning("hello")

    line = stream.getvalue().splitlines()[-1]
    assert "WARNING clusters_mcp.test hello" in line
    assert logging.getLogger().level == logging.INFO
