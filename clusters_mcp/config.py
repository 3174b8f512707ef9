"""
Configuration helpers for the Clusters MCP server.

This module centralizes base URL selection, API key loading and the default
HTTP timeout. No secrets are stored in the repository; the API key is read from
the environment (optionally populated from a local ``.env`` file) or from a
key file if present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Default connection settings
DEFAULT_BASE_URL = os.getenv("CLUSTERS_BASE_URL", "https://api.clusters.xyz/v1")
DEFAULT_TIMEOUT_SECONDS = 10.0


def _load_timeout() -> float:
    raw_timeout = os.getenv("CLUSTERS_HTTP_TIMEOUT")
    if raw_timeout:
        try:
            parsed = float(raw_timeout)
        except ValueError:
            return DEFAULT_TIMEOUT_SECONDS
        if parsed <= 0:
            return DEFAULT_TIMEOUT_SECONDS
        return parsed
    return DEFAULT_TIMEOUT_SECONDS


DEFAULT_TIMEOUT = _load_timeout()

# API key handling
API_KEY_ENV_VAR = "CLUSTERS_API_KEY"
API_KEY_FILE_ENV_VAR = "CLUSTERS_API_KEY_FILE"
DEFAULT_API_KEY_FILE = "apikey.txt"

LOG_LEVEL = os.getenv("CLUSTERS_MCP_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("CLUSTERS_MCP_LOG_FORMAT", "json")  # json or plain


def load_api_key() -> str:
    """
    Load the Clusters API key from environment or a local file.

    Returns:
        The API key string, or an empty string when none is configured. A
        missing key is not a startup failure; the remote API decides what to
        do with an empty ``X-API-KEY`` header. The key is never logged or
        returned to callers.
    """
    env_key = os.getenv(API_KEY_ENV_VAR)
    if env_key:
        return env_key.strip()

    key_path = os.getenv(API_KEY_FILE_ENV_VAR, DEFAULT_API_KEY_FILE)
    if key_path:
        path = Path(key_path)
        if path.is_file():
            return path.read_text(encoding="utf-8").strip()

    return ""


@dataclass(slots=True)
class ClustersConfig:
    """Runtime configuration for Clusters API access."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    api_key: str = load_api_key()
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT


default_config = ClustersConfig()
