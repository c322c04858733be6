"""
Static tool catalog served by list_tools.

Built once at import time and never mutated; the server registers exactly the
tools named here.
"""

import json
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field

from . import SERVER_NAME, __version__


class ToolParameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    description: str
    required: bool = True


class ToolExample(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str
    parameters: Dict[str, Any]
    response: str


class ResponseFormat(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = "json"
    description: str
    schema_: Dict[str, Any] = Field(alias="schema")


class ToolInfo(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    parameters: Tuple[ToolParameter, ...] = ()
    examples: Tuple[ToolExample, ...] = ()
    response_format: ResponseFormat = Field(alias="responseFormat")


_ENVELOPE_SCHEMA = {
    "type": "object",
    "properties": {
        "success": {"type": "boolean"},
        "data": {"type": "object"},
        "error": {"type": "string"},
        "details": {"type": "string"},
    },
}


def _endpoint_param(example: str) -> ToolParameter:
    return ToolParameter(
        name="endpoint",
        type="string",
        description=f"The Ghost API endpoint path (e.g., {example})",
    )


def _data_param(method: str) -> ToolParameter:
    return ToolParameter(
        name="data",
        type="object",
        description=f"The data to send in the {method} request",
    )


def _envelope_format(description: str) -> ResponseFormat:
    return ResponseFormat(description=description, schema=_ENVELOPE_SCHEMA)


_LIST_TOOLS_EXAMPLE_RESPONSE = json.dumps(
    {
        "tools": [
            {
                "name": "list_tools",
                "description": "Returns a JSON list of all available tools...",
            }
        ],
        "count": 1,
        "server": {"name": SERVER_NAME, "version": __version__},
    },
    indent=2,
)

TOOL_CATALOG: Tuple[ToolInfo, ...] = (
    ToolInfo(
        name="list_tools",
        description="Returns a JSON list of all available tools with their descriptions, parameters, and examples",
        examples=(
            ToolExample(
                description="List all available tools",
                parameters={},
                response=_LIST_TOOLS_EXAMPLE_RESPONSE,
            ),
        ),
        response_format=ResponseFormat(
            description="Returns information about all available tools",
            schema={
                "type": "object",
                "properties": {
                    "tools": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "name": {"type": "string"},
                                "description": {"type": "string"},
                                "parameters": {"type": "array"},
                                "examples": {"type": "array"},
                                "responseFormat": {"type": "object"},
                            },
                        },
                    },
                    "count": {"type": "number"},
                    "server": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string"},
                            "version": {"type": "string"},
                        },
                    },
                },
            },
        ),
    ),
    ToolInfo(
        name="ghost_get",
        description="Makes a GET request to the Ghost Admin API with automatic authentication",
        parameters=(_endpoint_param('"posts", "posts/123", "tags"'),),
        examples=(
            ToolExample(
                description="Get all posts",
                parameters={"endpoint": "posts"},
                response='{ "success": true, "data": { "posts": [...], "meta": {...} } }',
            ),
            ToolExample(
                description="Get a specific post by ID",
                parameters={"endpoint": "posts/5f9c4d732be87a0001c2a123"},
                response='{ "success": true, "data": { "posts": [...] } }',
            ),
            ToolExample(
                description="Get the five most recent drafts",
                parameters={"endpoint": "posts?filter=status:draft&limit=5"},
                response='{ "success": true, "data": { "posts": [...], "meta": {...} } }',
            ),
        ),
        response_format=_envelope_format("Returns data from the Ghost API with success status"),
    ),
    ToolInfo(
        name="ghost_post",
        description="Makes a POST request to the Ghost Admin API with automatic authentication",
        parameters=(_endpoint_param('"posts", "tags"'), _data_param("POST")),
        examples=(
            ToolExample(
                description="Create a new post",
                parameters={
                    "endpoint": "posts",
                    "data": {"posts": [{"title": "New Post", "status": "draft"}]},
                },
                response='{ "success": true, "data": { "posts": [...], "meta": {...} } }',
            ),
        ),
        response_format=_envelope_format("Returns data from the Ghost API with success status"),
    ),
    ToolInfo(
        name="ghost_put",
        description="Makes a PUT request to the Ghost Admin API with automatic authentication",
        parameters=(_endpoint_param('"posts/123", "tags/456"'), _data_param("PUT")),
        examples=(
            ToolExample(
                description="Update an existing post",
                parameters={
                    "endpoint": "posts/5f9c4d732be87a0001c2a123",
                    "data": {
                        "posts": [
                            {
                                "title": "Updated Post Title",
                                "status": "published",
                                "updated_at": "2024-01-01T00:00:00.000Z",
                            }
                        ]
                    },
                },
                response='{ "success": true, "data": { "posts": [...], "meta": {...} } }',
            ),
        ),
        response_format=_envelope_format("Returns data from the Ghost API with success status"),
    ),
    ToolInfo(
        name="ghost_delete",
        description="Makes a DELETE request to the Ghost Admin API with automatic authentication",
        parameters=(_endpoint_param('"posts/123", "tags/456"'),),
        examples=(
            ToolExample(
                description="Delete a post",
                parameters={"endpoint": "posts/5f9c4d732be87a0001c2a123"},
                response='{ "success": true, "data": null }',
            ),
        ),
        response_format=_envelope_format("Returns success status from the Ghost API"),
    ),
)

TOOLS_BY_NAME: Mapping[str, ToolInfo] = MappingProxyType({tool.name: tool for tool in TOOL_CATALOG})


def list_tools_response() -> Dict[str, Any]:
    """Return the discovery payload: every tool, the count and server identity."""
    return {
        "tools": [tool.model_dump(by_alias=True, mode="json") for tool in TOOL_CATALOG],
        "count": len(TOOL_CATALOG),
        "server": {"name": SERVER_NAME, "version": __version__},
    }
