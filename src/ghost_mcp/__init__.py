"""
ghost-mcp: MCP tools for the Ghost Admin API.
"""

__version__ = "0.0.1"
SERVER_NAME = "ghost-mcp"

from .config import GhostSettings  # noqa: E402
from .dispatcher import GhostDispatcher  # noqa: E402
from .errors import ConfigurationError, FailureKind, GhostMCPError  # noqa: E402
from .schemas import RequestOutcome, RequestSpec  # noqa: E402
from .signer import ApiCredential, CredentialSigner  # noqa: E402

__all__ = [
    "__version__",
    "SERVER_NAME",
    "ApiCredential",
    "ConfigurationError",
    "CredentialSigner",
    "FailureKind",
    "GhostDispatcher",
    "GhostMCPError",
    "GhostSettings",
    "RequestOutcome",
    "RequestSpec",
]
