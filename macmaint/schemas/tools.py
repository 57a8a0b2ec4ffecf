"""Tool Schemas — Pydantic models for the JSON-RPC envelope and the REST tool endpoints.

Invariants:
    - JsonRpcRequest.jsonrpc must be "2.0"
    - arguments may be null or omitted; dispatch treats both as {}
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request as sent by tool-calling clients."""
    jsonrpc: Literal["2.0"] = "2.0"
    id: int | str | None = None
    method: str = Field(min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)


class ToolCallParams(BaseModel):
    """params of a tools/call request."""
    name: str = Field(min_length=1)
    arguments: dict[str, Any] | None = None


class ToolCallBody(BaseModel):
    """Body of POST /api/v1/tools/{name}."""
    arguments: dict[str, Any] | None = None


class ToolSummary(BaseModel):
    """One entry of GET /api/v1/tools."""
    name: str
    description: str
    inputSchema: dict[str, Any]
