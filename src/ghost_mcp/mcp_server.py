"""
FastMCP server for the Ghost Admin API
--------------------------------------
Generic verb tools over one authenticated dispatcher.

Tools exposed:
 - list_tools
 - ghost_get
 - ghost_post
 - ghost_put
 - ghost_delete

Each tool returns text holding a JSON envelope:
  {"success": true, "data": ...}
  {"success": false, "error": "...", "details": "..."}
Error envelopes are sent with the MCP isError flag set.

Run with `ghost-mcp` (stdio by default, or MCP_TRANSPORT=streamable-http).
"""

import json
import os
import sys
from typing import Annotated, Any, Dict, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from . import SERVER_NAME
from .catalog import TOOLS_BY_NAME, list_tools_response
from .config import GhostSettings
from .dispatcher import GhostDispatcher
from .errors import ConfigurationError
from .logging_config import get_logger, setup_logging
from .schemas import RequestOutcome, envelope_from_outcome

logger = get_logger("mcp_server")


def render(envelope: Dict[str, Any]) -> str:
    return json.dumps(envelope, indent=2)


def respond(envelope: Dict[str, Any]) -> str:
    """
    Render a verb tool envelope. Error envelopes are raised as ToolError so the
    MCP result carries isError while its text is still the JSON envelope.
    """
    text = render(envelope)
    if not envelope.get("success"):
        raise ToolError(text)
    return text


class GhostTools:
    """
    Verb-shaped tool handlers. Each returns the response envelope as a dict;
    no exception escapes to the MCP layer.
    """

    def __init__(self, dispatcher: GhostDispatcher):
        self._dispatcher = dispatcher

    async def _call(self, method: str, endpoint: str, data: Optional[Any] = None) -> Dict[str, Any]:
        logger.info("%s called with endpoint=%r", method, endpoint)
        try:
            outcome = await self._dispatcher.make_request(endpoint, method, data)
        except Exception as e:
            logger.exception("Unexpected error dispatching Ghost %s %r", method, endpoint)
            outcome = RequestOutcome(ok=False, message=f"Unexpected error: {type(e).__name__}: {e}")
        return envelope_from_outcome(outcome, method)

    async def get(self, endpoint: str) -> Dict[str, Any]:
        return await self._call("GET", endpoint)

    async def post(self, endpoint: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("POST", endpoint, data)

    async def put(self, endpoint: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("PUT", endpoint, data)

    async def delete(self, endpoint: str) -> Dict[str, Any]:
        return await self._call("DELETE", endpoint)


def _describe(tool_name: str, param: str) -> str:
    for p in TOOLS_BY_NAME[tool_name].parameters:
        if p.name == param:
            return p.description
    raise KeyError(f"{tool_name} has no parameter {param!r}")


def build_server(dispatcher: GhostDispatcher) -> FastMCP:
    """Create the MCP server with every catalog tool bound to one dispatcher."""
    mcp = FastMCP(name=SERVER_NAME)
    tools = GhostTools(dispatcher)

    @mcp.tool(name="list_tools", description=TOOLS_BY_NAME["list_tools"].description)
    def list_tools() -> str:
        return render(list_tools_response())

    @mcp.tool(name="ghost_get", description=TOOLS_BY_NAME["ghost_get"].description)
    async def ghost_get(
        endpoint: Annotated[str, Field(description=_describe("ghost_get", "endpoint"))],
    ) -> str:
        return respond(await tools.get(endpoint))

    @mcp.tool(name="ghost_post", description=TOOLS_BY_NAME["ghost_post"].description)
    async def ghost_post(
        endpoint: Annotated[str, Field(description=_describe("ghost_post", "endpoint"))],
        data: Annotated[Dict[str, Any], Field(description=_describe("ghost_post", "data"))],
    ) -> str:
        return respond(await tools.post(endpoint, data))

    @mcp.tool(name="ghost_put", description=TOOLS_BY_NAME["ghost_put"].description)
    async def ghost_put(
        endpoint: Annotated[str, Field(description=_describe("ghost_put", "endpoint"))],
        data: Annotated[Dict[str, Any], Field(description=_describe("ghost_put", "data"))],
    ) -> str:
        return respond(await tools.put(endpoint, data))

    @mcp.tool(name="ghost_delete", description=TOOLS_BY_NAME["ghost_delete"].description)
    async def ghost_delete(
        endpoint: Annotated[str, Field(description=_describe("ghost_delete", "endpoint"))],
    ) -> str:
        return respond(await tools.delete(endpoint))

    return mcp


# -----------------------------
# Entry point
# -----------------------------
def main() -> None:
    load_dotenv()
    setup_logging()

    try:
        settings = GhostSettings.from_env(os.environ)
        dispatcher = GhostDispatcher.from_settings(settings)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        sys.exit(1)

    mcp = build_server(dispatcher)
    logger.info("Starting ghost-mcp server... (transport=%s, site=%s)", settings.transport, settings.api_url)

    try:
        if settings.transport == "stdio":
            mcp.run(transport="stdio")
        else:
            mcp.run(transport="streamable-http", host=settings.host, port=settings.port)
    except KeyboardInterrupt:
        logger.info("Shutting down ghost-mcp server...")


if __name__ == "__main__":
    main()
