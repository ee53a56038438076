"""MCP stdio transport for the dispatcher.

Registers ``tools/list`` and ``tools/call`` on a low-level MCP ``Server``
and runs it over stdin/stdout until the client disconnects.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from devhelper.catalog.capabilities import Capability
from devhelper.config import Config
from devhelper.server.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


def capability_to_tool(capability: Capability) -> types.Tool:
    """Describe a catalog entry as an MCP tool."""
    return types.Tool(
        name=capability.name,
        description=capability.description,
        inputSchema=capability.input_shape.to_json_schema(),
    )


class ToolServer:
    """Binds a :class:`Dispatcher` to an MCP server.

    The SDK may run request handlers concurrently; ``tools/call`` handling
    is serialised behind one lock so each call finishes before the next
    one starts.
    """

    def __init__(self, dispatcher: Dispatcher, config: Optional[Config] = None) -> None:
        self.dispatcher = dispatcher
        self.config = config or dispatcher.config
        self._lock = asyncio.Lock()
        self.server: Server = Server(self.config.server_name, version=self.config.server_version)
        self.server.list_tools()(self.list_tools)
        # Arguments are validated by the dispatcher, which reports problems
        # as in-band error text rather than protocol errors.
        self.server.call_tool(validate_input=False)(self.call_tool)

    async def list_tools(self) -> list[types.Tool]:
        return [capability_to_tool(capability) for capability in self.dispatcher.catalog]

    async def call_tool(self, name: str, arguments: Optional[dict[str, Any]]) -> list[types.TextContent]:
        async with self._lock:
            result = await self.dispatcher.call(name, arguments)
        return [types.TextContent(type="text", text=block.text) for block in result.content]

    async def run_stdio(self) -> None:
        """Serve over stdin/stdout until the client closes the stream."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info(
                "%s %s listening on stdio (%d tools)",
                self.config.server_name,
                self.config.server_version,
                len(self.dispatcher.catalog),
            )
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


async def serve(config: Config) -> None:
    """Build the dispatcher and run the stdio server."""
    tool_server = ToolServer(Dispatcher(config), config)
    await tool_server.run_stdio()
