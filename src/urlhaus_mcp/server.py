#!/usr/bin/env python3
"""
URLhaus MCP Server v0.1.0

Exposes the URLhaus (abuse.ch) malicious URL database as MCP tools:
- Recent malicious URLs and recent payloads
- URL, host and payload lookups
- URL search by malware tag or signature

The URLhaus API is free and unauthenticated but rate limited.
"""

import asyncio
from typing import Optional

import aiohttp
from fastmcp import FastMCP
from mcp import types
from mcp.shared.exceptions import McpError

from .config import LOGGER_NAME, SERVER_NAME, SERVER_VERSION, setup_logging
from .dispatcher import ToolDispatcher

# Configure logging
logger = setup_logging(LOGGER_NAME)


def transport_error(error: BaseException) -> McpError:
    """Wrap a timeout or connection failure as a protocol-level fault."""
    detail = str(error) or type(error).__name__
    return McpError(types.ErrorData(
        code=types.INTERNAL_ERROR,
        message=f"URLhaus request failed: {detail}",
    ))


def create_server(dispatcher: Optional[ToolDispatcher] = None) -> FastMCP:
    """
    Build a FastMCP server exposing every registered URLhaus tool.

    Tool listing and tool calls are answered straight from the dispatcher, so
    invalid calls and transport failures reach the client as JSON-RPC errors
    while upstream HTTP failures come back as ``isError`` results.

    Args:
        dispatcher: Dispatcher to route calls through (a default one is built if omitted)

    Returns:
        Configured FastMCP instance
    """
    dispatcher = dispatcher or ToolDispatcher()
    mcp = FastMCP(SERVER_NAME)

    async def list_tools(request: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(
            tools=[tool.to_mcp_tool() for tool in dispatcher.list_tools()]
        ))

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        name = request.params.name
        try:
            result = await dispatcher.call_tool(name, request.params.arguments)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Network error calling {name}: {e!r}")
            raise transport_error(e) from e

        return types.ServerResult(result.to_mcp_result())

    # McpError raised by a request handler is sent back as the JSON-RPC error
    handlers = mcp._mcp_server.request_handlers
    handlers[types.ListToolsRequest] = list_tools
    handlers[types.CallToolRequest] = call_tool

    return mcp


# =============================================================================
# Entry Point
# =============================================================================

def main():
    """Entry point for MCP server."""
    logger.info(f"Starting URLhaus MCP server v{SERVER_VERSION}")
    mcp = create_server()
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
