"""Tool definitions for the Clusters API surface."""

from . import auth, clusters, communities, names, registration, validators
from .base import ToolDefinition

ALL_TOOLS = (
    *auth.TOOLS,
    *clusters.TOOLS,
    *names.TOOLS,
    *registration.TOOLS,
    *communities.TOOLS,
)

__all__ = [
    "ALL_TOOLS",
    "ToolDefinition",
    "validators",
]
