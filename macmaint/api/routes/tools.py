"""Tool Routes — REST access to the registry and to single tool invocations.

Invariants:
    - GET /api/v1/tools lists tools in registry order
    - POST /api/v1/tools/{name} returns the invocation result verbatim (200),
      including in-band {"error"} results
    - Unknown tool → 404, invalid argument → 400 (via global MacMaintError handler)
"""

from fastapi import APIRouter, Depends, Request

from macmaint.schemas.tools import ToolCallBody, ToolSummary
from macmaint.services.tool_dispatch import ToolDispatch
from macmaint.services.tools_registry import wire_catalog

router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


def get_dispatch(request: Request) -> ToolDispatch:
    return request.app.state.dispatch


@router.get("", response_model=list[ToolSummary])
async def list_tools():
    return wire_catalog()


@router.post("/{name}")
async def call_tool(
    name: str,
    body: ToolCallBody | None = None,
    dispatch: ToolDispatch = Depends(get_dispatch),
):
    arguments = body.arguments if body else None
    return await dispatch.execute(name, arguments)
