"""
URLhaus MCP Server

Exposes URLhaus malicious URL and payload lookups as MCP tools.
"""

__version__ = "0.1.0"

from .client import URLhausClient, UpstreamHTTPError
from .config import (
    # Configuration
    ClientConfig,
    DEFAULT_CLIENT_CONFIG,
    URLHAUS_API_BASE,
    # Functions
    setup_logging,
    normalize_string,
    coerce_limit,
)
from .dispatcher import ToolCallResult, ToolDispatcher
from .registry import ToolDescriptor, get_tool, list_tools

__all__ = [
    "__version__",
    # Configuration
    "ClientConfig",
    "DEFAULT_CLIENT_CONFIG",
    "URLHAUS_API_BASE",
    # Functions
    "setup_logging",
    "normalize_string",
    "coerce_limit",
    # Client
    "URLhausClient",
    "UpstreamHTTPError",
    # Tools
    "ToolDescriptor",
    "ToolCallResult",
    "ToolDispatcher",
    "get_tool",
    "list_tools",
]
