"""
Tests for the ghost-mcp entry point: startup, configuration failure and shutdown.
"""

import logging

import pytest
from fastmcp import FastMCP

from conftest import ADMIN_API_KEY
from ghost_mcp import mcp_server
from ghost_mcp.logging_config import LOG_FILE_NAME


def read_log(tmp_path):
    for handler in logging.getLogger("ghost_mcp").handlers:
        handler.flush()
    return (tmp_path / LOG_FILE_NAME).read_text(encoding="utf-8")


@pytest.fixture
def server_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(mcp_server, "load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setenv("GHOST_MCP_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("GHOST_API_URL", "https://blog.example.com")
    monkeypatch.setenv("GHOST_ADMIN_API_KEY", ADMIN_API_KEY)
    for name in ("MCP_TRANSPORT", "MCP_HOST", "MCP_PORT", "GHOST_API_VERSION", "GHOST_REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
    root = logging.getLogger("ghost_mcp")
    for handler in root.handlers:
        handler.close()
    root.handlers = []


@pytest.fixture
def run_calls(server_env):
    calls = []

    def fake_run(self, *args, **kwargs):
        calls.append(kwargs)
        raise KeyboardInterrupt

    server_env.setattr(FastMCP, "run", fake_run)
    return calls


class TestMain:
    def test_missing_api_url_exits_with_status_1(self, server_env, tmp_path):
        server_env.delenv("GHOST_API_URL")

        with pytest.raises(SystemExit) as exc_info:
            mcp_server.main()

        assert exc_info.value.code == 1
        log = read_log(tmp_path)
        assert "Configuration error" in log
        assert "GHOST_API_URL" in log

    def test_malformed_key_exits_with_status_1(self, server_env, tmp_path):
        server_env.setenv("GHOST_ADMIN_API_KEY", "nocolon")

        with pytest.raises(SystemExit) as exc_info:
            mcp_server.main()

        assert exc_info.value.code == 1
        assert "Configuration error" in read_log(tmp_path)

    def test_interrupt_shuts_down_cleanly(self, run_calls, tmp_path):
        assert mcp_server.main() is None

        assert run_calls == [{"transport": "stdio"}]
        log = read_log(tmp_path)
        assert "Starting ghost-mcp server..." in log
        assert "Shutting down ghost-mcp server..." in log

    def test_streamable_http_transport_binds_host_and_port(self, server_env, run_calls):
        server_env.setenv("MCP_TRANSPORT", "streamable-http")
        server_env.setenv("MCP_HOST", "127.0.0.1")
        server_env.setenv("MCP_PORT", "9300")

        mcp_server.main()

        assert run_calls == [{"transport": "streamable-http", "host": "127.0.0.1", "port": 9300}]
