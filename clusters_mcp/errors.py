"""Exceptions raised while dispatching tool calls."""

from __future__ import annotations


class ClustersMcpError(Exception):
    """Base exception for the Clusters MCP server."""


class UnknownToolError(ClustersMcpError):
    """Raised when a tool name is not present in the registry."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"Unknown tool: {tool}")
        self.tool = tool


class InvalidParametersError(ClustersMcpError):
    """Raised when call parameters do not satisfy the tool's parameter spec."""

    def __init__(self, field: str, reason: str = "invalid value") -> None:
        super().__init__(f"Invalid parameter '{field}': {reason}")
        self.field = field
        self.reason = reason
