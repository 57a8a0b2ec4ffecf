"""MCP Route — JSON-RPC 2.0 endpoint speaking the tool-calling protocol.

Invariants:
    - tools/list returns every descriptor in registry order
    - tools/call wraps the invocation result as one text content item (JSON, indent=2)
    - Dispatch errors become JSON-RPC error objects: unknown tool -32601,
      invalid argument -32602; unknown method -32601
    - HTTP status is 200 for every well-formed JSON-RPC request

Design Decisions:
    - Errors are mapped here, not by the global handlers: JSON-RPC carries
      failures in the body
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import ValidationError

from macmaint.api.routes.tools import get_dispatch
from macmaint.core.errors import (
    JSONRPC_INVALID_PARAMS, JSONRPC_METHOD_NOT_FOUND, MacMaintError,
)
from macmaint.schemas.tools import JsonRpcRequest, ToolCallParams
from macmaint.services.tool_dispatch import ToolDispatch
from macmaint.services.tools_registry import wire_catalog

logger = logging.getLogger(__name__)
router = APIRouter(tags=["mcp"])

SERVER_INFO = {"name": "macmaint", "version": "0.1.0"}


def _result(request_id: Any, result: dict) -> dict:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def _error(request_id: Any, error: dict) -> dict:
    return {"jsonrpc": "2.0", "id": request_id, "error": error}


@router.post("/mcp")
async def json_rpc(
    request: JsonRpcRequest, dispatch: ToolDispatch = Depends(get_dispatch),
):
    if request.method == "initialize":
        return _result(request.id, {
            "protocolVersion": "2024-11-05",
            "capabilities": {"tools": {}},
            "serverInfo": SERVER_INFO,
        })

    if request.method == "tools/list":
        return _result(request.id, {"tools": wire_catalog()})

    if request.method == "tools/call":
        try:
            params = ToolCallParams.model_validate(request.params)
        except ValidationError as e:
            return _error(request.id, {
                "code": JSONRPC_INVALID_PARAMS,
                "message": "Invalid tools/call params",
                "data": {"details": e.errors(include_url=False)},
            })
        try:
            result = await dispatch.execute(params.name, params.arguments)
        except MacMaintError as e:
            return _error(request.id, e.to_jsonrpc_error())
        return _result(request.id, {
            "content": [{"type": "text", "text": json.dumps(result, indent=2)}],
        })

    logger.warning(f"Unknown JSON-RPC method: {request.method}")
    return _error(request.id, {
        "code": JSONRPC_METHOD_NOT_FOUND,
        "message": f"Method '{request.method}' not found",
    })
