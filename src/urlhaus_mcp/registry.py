"""
Tool registry: the URLhaus tools and their input schemas.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from mcp import types

from .config import DEFAULT_LIMIT, MAX_LIMIT, MIN_LIMIT


@dataclass(frozen=True)
class ToolDescriptor:
    """A callable tool and the JSON schema of its arguments."""
    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


def _limit_property(description: str) -> dict[str, Any]:
    return {
        "type": "number",
        "description": f"{description} ({MIN_LIMIT}-{MAX_LIMIT}, default: {DEFAULT_LIMIT})",
        "minimum": MIN_LIMIT,
        "maximum": MAX_LIMIT,
    }


def _string_property(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def _schema(properties: dict[str, Any], required: Optional[list[str]] = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="get_recent_urls",
        description=f"Get the most recent malicious URLs from URLhaus (up to {MAX_LIMIT} entries)",
        input_schema=_schema({
            "limit": _limit_property("Number of URLs to retrieve"),
        }),
    ),
    ToolDescriptor(
        name="lookup_url",
        description="Get detailed information about a specific URL",
        input_schema=_schema({
            "url": _string_property("The URL to look up (must be a complete URL with protocol)"),
        }, required=["url"]),
    ),
    ToolDescriptor(
        name="lookup_host",
        description="Get information about URLs hosted on a specific host/domain",
        input_schema=_schema({
            "host": _string_property('The hostname or domain to look up (e.g., "example.com")'),
        }, required=["host"]),
    ),
    ToolDescriptor(
        name="lookup_payload",
        description="Get information about a malware payload by its hash",
        input_schema=_schema({
            "hash": _string_property("MD5 or SHA256 hash of the malware payload"),
        }, required=["hash"]),
    ),
    ToolDescriptor(
        name="get_urls_by_tag",
        description="Get URLs associated with a specific malware tag/family",
        input_schema=_schema({
            "tag": _string_property('Malware tag/family (e.g., "emotet", "trickbot", "cobalt_strike")'),
            "limit": _limit_property("Number of results to return"),
        }, required=["tag"]),
    ),
    ToolDescriptor(
        name="get_urls_by_signature",
        description="Get URLs associated with a specific malware signature",
        input_schema=_schema({
            "signature": _string_property("Malware signature name"),
            "limit": _limit_property("Number of results to return"),
        }, required=["signature"]),
    ),
    ToolDescriptor(
        name="get_payloads",
        description="Get recent malware payloads from URLhaus",
        input_schema=_schema({
            "limit": _limit_property("Number of payloads to retrieve"),
        }),
    ),
)


def list_tools() -> list[ToolDescriptor]:
    """Get all tools in declaration order."""
    return list(TOOLS)


def get_tool(name: str) -> Optional[ToolDescriptor]:
    """Get a tool descriptor by name."""
    for tool in TOOLS:
        if tool.name == name:
            return tool
    return None
