"""
Clusters MCP server package.

This package exposes the Clusters wallet/name registry API as MCP tools. Each
tool call is validated against a static schema and forwarded as a single HTTP
request; the raw JSON response is returned as the tool result. See DESIGN.md
for full details.
"""

__all__ = ["config"]
