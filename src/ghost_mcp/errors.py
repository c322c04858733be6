"""
Exception and failure types shared across ghost-mcp.
"""

from enum import Enum


class GhostMCPError(Exception):
    """Base class for ghost-mcp errors."""


class ConfigurationError(GhostMCPError, ValueError):
    """Raised once, at construction, when the API key, URL or a setting is unusable."""


class FailureKind(str, Enum):
    TRANSPORT = "transport"
    UPSTREAM = "upstream"
    DECODE = "decode"
    INVALID_REQUEST = "invalid_request"
