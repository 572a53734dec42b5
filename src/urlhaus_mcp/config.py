"""
Shared configuration for URLhaus MCP.

Centralizes constants, client configuration and input normalization used by
the registry, the dispatcher and the server.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any

import aiohttp


# =============================================================================
# Logging Setup
# =============================================================================

LOGGER_NAME = "urlhaus-mcp"


def setup_logging(name: str = LOGGER_NAME, level: int = logging.INFO, to_stderr: bool = True) -> logging.Logger:
    """
    Set up logging for a module.

    Args:
        name: Logger name
        level: Logging level
        to_stderr: Log to stderr (stdout carries the MCP transport)

    Returns:
        Configured logger
    """
    import sys

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr if to_stderr else sys.stdout)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        ))
        logger.addHandler(handler)

    return logger


# =============================================================================
# Constants
# =============================================================================

SERVER_NAME = "urlhaus"
SERVER_VERSION = "0.1.0"

URLHAUS_API_BASE = "https://urlhaus-api.abuse.ch/v1"
USER_AGENT = f"URLhaus-MCP-Server/{SERVER_VERSION}"

# Request settings
DEFAULT_REQUEST_TIMEOUT = 30  # seconds

# Result limits
DEFAULT_LIMIT = 100
MIN_LIMIT = 1
MAX_LIMIT = 1000

RATE_LIMIT_STATUS = 429
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."


# =============================================================================
# Client Configuration
# =============================================================================

@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings shared by every outbound URLhaus request."""
    base_url: str = URLHAUS_API_BASE
    timeout: float = DEFAULT_REQUEST_TIMEOUT
    user_agent: str = USER_AGENT

    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    def client_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self.timeout)

    def url_for(self, path: str) -> str:
        """Join an endpoint path such as ``/url/`` onto the base URL."""
        return self.base_url.rstrip("/") + "/" + path.lstrip("/")


DEFAULT_CLIENT_CONFIG = ClientConfig()


# =============================================================================
# Input Normalization
# =============================================================================

def normalize_string(value: Any) -> str:
    """
    Coerce a tool argument to a trimmed string.

    Missing and falsy values become the empty string.
    """
    if not value:
        return ""
    return str(value).strip()


def coerce_limit(value: Any, default: int = DEFAULT_LIMIT) -> int:
    """
    Coerce a ``limit`` argument into the range [MIN_LIMIT, MAX_LIMIT].

    Absent, falsy, zero and unparseable values fall back to ``default``.
    Anything above MAX_LIMIT is capped rather than rejected.

    Args:
        value: Raw argument value (int, float, numeric string, or junk)
        default: Limit used when value is unusable

    Returns:
        Clamped integer limit
    """
    if not value or isinstance(value, bool):
        return default

    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return default

    if math.isnan(number):
        return default
    if math.isinf(number):
        return MAX_LIMIT if number > 0 else MIN_LIMIT

    limit = int(number)
    if limit == 0:
        return default
    return min(max(MIN_LIMIT, limit), MAX_LIMIT)


# =============================================================================
# Helper Functions
# =============================================================================

def as_mapping(data: Any) -> dict[str, Any]:
    """Return ``data`` if it is a JSON object, otherwise an empty dict."""
    return data if isinstance(data, dict) else {}


def as_list(value: Any) -> list[Any]:
    """Return ``value`` if it is a JSON array, otherwise an empty list."""
    return value if isinstance(value, list) else []
