from __future__ import annotations

import logging

from fastmcp import FastMCP
from fastmcp.tools import FunctionTool
from mcp.types import ToolAnnotations

from ..api import ApiFunction, get_api_functions

INSTRUCTIONS = (
    "Datebook exposes calendar tools. Use calendars_list to discover calendars, "
    "events_fetch to search a date range, and events_create to add events. "
    "Dates are ISO 8601; values without a timezone are read as local time and "
    "a bare YYYY-MM-DD means the whole local day."
)

logger = logging.getLogger(__name__)


def _as_tool(function: ApiFunction) -> FunctionTool:
    return FunctionTool.from_function(
        function.func,
        name=function.name,
        description=function.description,
        tags=set(function.tags),
        annotations=ToolAnnotations(
            title=function.title,
            readOnlyHint=function.read_only,
            destructiveHint=function.destructive,
            openWorldHint=False,
        ),
    )


def build_mcp_server() -> FastMCP:
    server = FastMCP(name="datebook", instructions=INSTRUCTIONS)
    for function in get_api_functions():
        logger.debug("Registering MCP tool: %s", function.name)
        server.add_tool(_as_tool(function))
    return server


def run_mcp_server(transport: str = "stdio", host: str = "127.0.0.1", port: int = 8765) -> None:
    server = build_mcp_server()
    if transport == "stdio":
        server.run()
    else:
        server.run(transport, host=host, port=port)
