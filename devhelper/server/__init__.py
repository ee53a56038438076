"""Tool server: request dispatch and the MCP stdio transport."""

from devhelper.server.dispatcher import (
    CallRequest,
    ContentBlock,
    Dispatcher,
    Failure,
    FailureKind,
    Success,
    flatten,
)
from devhelper.server.transport import ToolServer, capability_to_tool, serve

__all__ = [
    "CallRequest",
    "ContentBlock",
    "Dispatcher",
    "Failure",
    "FailureKind",
    "Success",
    "ToolServer",
    "capability_to_tool",
    "flatten",
    "serve",
]
