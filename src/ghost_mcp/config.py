"""
Runtime settings for the ghost-mcp server.

Values come from the environment (and a .env file, loaded via python-dotenv):

  GHOST_API_URL          base URL of the Ghost site (required)
  GHOST_ADMIN_API_KEY    Admin API key, "id:secret" (required)
  GHOST_API_VERSION      optional Accept-Version header value
  GHOST_REQUEST_TIMEOUT  per-request timeout in seconds (default: 10)
  MCP_TRANSPORT          "stdio" (default) or "streamable-http"
  MCP_HOST / MCP_PORT    bind address for the HTTP transport
"""

import os
from typing import Literal, Mapping, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigurationError


class GhostSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_url: str
    admin_api_key: str
    api_version: Optional[str] = None
    request_timeout: float = 10.0
    transport: Literal["stdio", "streamable-http"] = "stdio"
    host: str = "0.0.0.0"
    port: int = 9100

    @field_validator("api_url")
    @classmethod
    def _check_api_url(cls, value: str) -> str:
        value = value.strip()
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("GHOST_API_URL must be an http(s) URL")
        return value.rstrip("/")

    @field_validator("admin_api_key")
    @classmethod
    def _check_admin_api_key(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("GHOST_ADMIN_API_KEY must not be empty")
        return value

    @field_validator("request_timeout")
    @classmethod
    def _check_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("GHOST_REQUEST_TIMEOUT must be positive")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GhostSettings":
        """
        Build settings from environment variables.

        When no mapping is passed, the process environment is used after
        loading any .env file. Raises ConfigurationError on missing or
        invalid values.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        missing = [name for name in ("GHOST_API_URL", "GHOST_ADMIN_API_KEY") if not environ.get(name)]
        if missing:
            raise ConfigurationError(f"Missing required environment variable(s): {', '.join(missing)}")

        values = {
            "api_url": environ["GHOST_API_URL"],
            "admin_api_key": environ["GHOST_ADMIN_API_KEY"],
            "api_version": environ.get("GHOST_API_VERSION") or None,
            "request_timeout": environ.get("GHOST_REQUEST_TIMEOUT", "10"),
            "transport": environ.get("MCP_TRANSPORT", "stdio"),
            "host": environ.get("MCP_HOST", "0.0.0.0"),
            "port": environ.get("MCP_PORT", "9100"),
        }
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid ghost-mcp settings: {e}") from e
