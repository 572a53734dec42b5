"""
Tool dispatcher for URLhaus MCP.

Routes a tool call to its handler, issues the single upstream request the tool
needs, and shapes the reply into a JSON envelope. Invalid calls raise McpError;
upstream HTTP failures are returned as error-flagged results.
"""

import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import aiohttp
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, METHOD_NOT_FOUND, CallToolResult, ErrorData, TextContent

from .client import URLhausClient
from .config import (
    LOGGER_NAME,
    RATE_LIMIT_MESSAGE,
    RATE_LIMIT_STATUS,
    as_list,
    as_mapping,
    coerce_limit,
    normalize_string,
    setup_logging,
)
from .registry import ToolDescriptor, list_tools

logger = setup_logging(f"{LOGGER_NAME}.dispatcher")

Arguments = dict[str, Any]
Handler = Callable[[URLhausClient, Arguments], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class ToolCallResult:
    """The single text block returned for a tool call."""
    text: str
    is_error: bool = False

    def to_mcp_result(self) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )


# =============================================================================
# Errors
# =============================================================================

def invalid_params(message: str) -> McpError:
    return McpError(ErrorData(code=INVALID_PARAMS, message=message))


def method_not_found(name: str) -> McpError:
    return McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))


def upstream_error_result(error: aiohttp.ClientResponseError) -> ToolCallResult:
    """Map an upstream HTTP failure to an error-flagged result."""
    if error.status == RATE_LIMIT_STATUS:
        logger.warning("URLhaus rate limit exceeded")
        return ToolCallResult(RATE_LIMIT_MESSAGE, is_error=True)

    detail = getattr(error, "query_status", None) or error.message or f"HTTP {error.status}"
    logger.warning(f"URLhaus API error ({error.status}): {detail}")
    return ToolCallResult(f"URLhaus API error ({error.status}): {detail}", is_error=True)


def _require(arguments: Arguments, field: str, label: str) -> str:
    value = normalize_string(arguments.get(field))
    if not value:
        raise invalid_params(f"{label} parameter is required")
    return value


# =============================================================================
# Handlers
# =============================================================================

def _url_list_envelope(data: Any, limit: int) -> tuple[Any, int, list[Any]]:
    body = as_mapping(data)
    urls = as_list(body.get("urls"))
    return body.get("query_status"), len(urls), urls[:limit]


async def get_recent_urls(client: URLhausClient, arguments: Arguments) -> dict[str, Any]:
    limit = coerce_limit(arguments.get("limit"))
    data = await client.get("/urls/recent/", params={"limit": limit})

    query_status, count, urls = _url_list_envelope(data, limit)
    return {
        "query_status": query_status,
        "urls_count": count,
        "urls": urls,
        "summary": f"Retrieved {count} recent malicious URLs",
    }


async def lookup_url(client: URLhausClient, arguments: Arguments) -> dict[str, Any]:
    url = _require(arguments, "url", "URL")
    data = await client.post("/url/", {"url": url})

    query_status = as_mapping(data).get("query_status")
    return {
        "query_status": query_status,
        "url_info": data,
        "summary": (
            "URL found in URLhaus database" if query_status == "ok"
            else "URL not found in URLhaus database"
        ),
    }


async def lookup_host(client: URLhausClient, arguments: Arguments) -> dict[str, Any]:
    host = _require(arguments, "host", "Host")
    data = await client.post("/host/", {"host": host})

    body = as_mapping(data)
    query_status = body.get("query_status")
    count = len(as_list(body.get("urls")))
    return {
        "query_status": query_status,
        "host_info": data,
        "urls_count": count,
        "summary": (
            f"Found {count} URLs for host {host}" if query_status == "ok"
            else f"No data found for host {host}"
        ),
    }


async def lookup_payload(client: URLhausClient, arguments: Arguments) -> dict[str, Any]:
    file_hash = _require(arguments, "hash", "Hash")
    data = await client.post("/payload/", {"hash": file_hash})

    query_status = as_mapping(data).get("query_status")
    return {
        "query_status": query_status,
        "payload_info": data,
        "summary": (
            "Payload found in URLhaus database" if query_status == "ok"
            else "Payload not found in URLhaus database"
        ),
    }


async def get_urls_by_tag(client: URLhausClient, arguments: Arguments) -> dict[str, Any]:
    tag = _require(arguments, "tag", "Tag")
    limit = coerce_limit(arguments.get("limit"))
    data = await client.post("/tag/", {"tag": tag, "limit": str(limit)})

    query_status, count, urls = _url_list_envelope(data, limit)
    return {
        "query_status": query_status,
        "tag": tag,
        "urls_count": count,
        "urls": urls,
        "summary": f'Found {count} URLs tagged with "{tag}"',
    }


async def get_urls_by_signature(client: URLhausClient, arguments: Arguments) -> dict[str, Any]:
    signature = _require(arguments, "signature", "Signature")
    limit = coerce_limit(arguments.get("limit"))
    data = await client.post("/signature/", {"signature": signature, "limit": str(limit)})

    query_status, count, urls = _url_list_envelope(data, limit)
    return {
        "query_status": query_status,
        "signature": signature,
        "urls_count": count,
        "urls": urls,
        "summary": f'Found {count} URLs with signature "{signature}"',
    }


async def get_payloads(client: URLhausClient, arguments: Arguments) -> dict[str, Any]:
    limit = coerce_limit(arguments.get("limit"))
    data = await client.get("/payloads/recent/", params={"limit": limit})

    body = as_mapping(data)
    payloads = as_list(body.get("payloads"))
    return {
        "query_status": body.get("query_status"),
        "payloads_count": len(payloads),
        "payloads": payloads[:limit],
        "summary": f"Retrieved {len(payloads)} recent malware payloads",
    }


HANDLERS: dict[str, Handler] = {
    "get_recent_urls": get_recent_urls,
    "lookup_url": lookup_url,
    "lookup_host": lookup_host,
    "lookup_payload": lookup_payload,
    "get_urls_by_tag": get_urls_by_tag,
    "get_urls_by_signature": get_urls_by_signature,
    "get_payloads": get_payloads,
}


# =============================================================================
# Dispatcher
# =============================================================================

class ToolDispatcher:
    """Owns the HTTP client and the tool registry and routes calls to handlers."""

    def __init__(self, client: Optional[URLhausClient] = None, tools: Optional[list[ToolDescriptor]] = None):
        self._client = client or URLhausClient()
        self._tools = list(tools) if tools is not None else list_tools()
        self._handlers = {tool.name: HANDLERS[tool.name] for tool in self._tools}

    @property
    def client(self) -> URLhausClient:
        return self._client

    def list_tools(self) -> list[ToolDescriptor]:
        return list(self._tools)

    async def call_tool(self, name: str, arguments: Optional[Arguments] = None) -> ToolCallResult:
        """
        Invoke a tool by name.

        Args:
            name: Registered tool name
            arguments: Tool arguments; None is treated as no arguments

        Returns:
            ToolCallResult with the JSON envelope, or an error-flagged result
            when URLhaus answered with an HTTP error

        Raises:
            McpError: unknown tool or missing required parameter
            aiohttp.ClientError: transport failure
            asyncio.TimeoutError: request timed out
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise method_not_found(name)

        logger.debug(f"Calling tool {name}")
        try:
            envelope = await handler(self._client, arguments or {})
        except aiohttp.ClientResponseError as e:
            return upstream_error_result(e)

        return ToolCallResult(json.dumps(envelope, indent=2))
