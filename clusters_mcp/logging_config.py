"""Logging setup shared by the HTTP and stdio entry points."""

from __future__ import annotations

import json
import logging
from typing import IO, Optional

from clusters_mcp.config import ClustersConfig, default_config

EXTRA_FIELDS = ("tool", "request_id", "error")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(config: ClustersConfig = default_config, *, stream: Optional[IO[str]] = None) -> None:
    """
    Configure root logging from ``config``.

    ``stream`` defaults to stderr. The stdio transport relies on that: stdout
    carries protocol frames only.
    """
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    handler = logging.StreamHandler(stream)
    if config.log_format.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logging.basicConfig(level=level, handlers=[handler], force=True)
