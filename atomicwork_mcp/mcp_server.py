from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import anyio
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .client import AtomicworkClient
from .config import MISSING_API_KEY_MESSAGE, Settings, configure_logging, get_settings
from .tool_list import TOOLS, TOOLS_BY_NAME

logger = logging.getLogger(__name__)

SERVER_NAME = "atomicwork-mcp"


def text_result(text: str) -> List[types.TextContent]:
    return [types.TextContent(type="text", text=text)]


class ToolAdapter:
    """Expose the ticket tools and dispatch invocations to their handlers.

    Every invocation resolves to a single text block; failures are reported
    inside it rather than raised.
    """

    def __init__(self, settings: Settings, client: Optional[AtomicworkClient] = None) -> None:
        self.settings = settings
        self.client = client or AtomicworkClient(settings)

    def list_tools(self) -> List[types.Tool]:
        return [
            types.Tool(name=t.name, description=t.description, inputSchema=t.inputSchema)
            for t in TOOLS
        ]

    async def call_tool(
        self, name: str, arguments: Mapping[str, Any] | None = None
    ) -> List[types.TextContent]:
        if not self.settings.has_api_key:
            return text_result(MISSING_API_KEY_MESSAGE)

        tool = TOOLS_BY_NAME.get(name)
        if tool is None:
            logger.warning("Unknown tool requested: %s", name)
            return text_result(f"Unknown tool: {name}")

        args: Dict[str, Any] = dict(arguments or {})
        logger.info("Calling tool %s", name)
        try:
            text = await tool._implementation(self.client, args)
        except Exception as exc:
            logger.exception("Unhandled error in tool %s", name)
            text = f"Error executing {name}: {exc}"
        return text_result(text)


def create_server(
    settings: Optional[Settings] = None,
    client: Optional[AtomicworkClient] = None,
) -> Server:
    """Instantiate a Server and register tools."""
    adapter = ToolAdapter(settings or get_settings(), client)
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def _list_tools() -> List[types.Tool]:
        return adapter.list_tools()

    # Handlers validate their own arguments and report problems as text.
    @server.call_tool(validate_input=False)
    async def _call_tool(name: str, arguments: dict | None) -> List[types.TextContent]:
        return await adapter.call_tool(name, arguments)

    server.adapter = adapter
    logger.info("MCP server created with %d tools", len(TOOLS))
    return server


def run_server(settings: Optional[Settings] = None) -> None:
    """Run the MCP server with stdio transport."""
    settings = settings or get_settings()
    configure_logging(settings)

    async def _main() -> None:
        server = create_server(settings)
        logger.info("Atomicwork MCP server running on stdio")
        async with stdio_server() as (read, write):
            await server.run(read, write, server.create_initialization_options())

    anyio.run(_main)


__all__ = ["ToolAdapter", "create_server", "run_server", "text_result"]
