"""
HTTP client for the URLhaus API.
"""

from typing import Any, Optional

import aiohttp

from .config import DEFAULT_CLIENT_CONFIG, LOGGER_NAME, ClientConfig, as_mapping, setup_logging

logger = setup_logging(f"{LOGGER_NAME}.client")


class UpstreamHTTPError(aiohttp.ClientResponseError):
    """A non-2xx URLhaus response, carrying the decoded error body if any."""

    def __init__(
        self,
        request_info: Any,
        history: tuple,
        *,
        status: int,
        message: str = "",
        headers: Any = None,
        body: Any = None,
    ):
        super().__init__(request_info, history, status=status, message=message, headers=headers)
        self.body = body

    @property
    def query_status(self) -> Optional[str]:
        """The upstream ``query_status`` field, when the body has one."""
        value = as_mapping(self.body).get("query_status")
        return str(value) if value else None


async def _read_json(response: aiohttp.ClientResponse) -> Any:
    # URLhaus does not always label error bodies as JSON
    try:
        return await response.json(content_type=None)
    except ValueError:
        return None


async def _decode(response: aiohttp.ClientResponse) -> Any:
    """Decode a response body or raise UpstreamHTTPError for HTTP errors."""
    if response.status >= 400:
        body = await _read_json(response)
        raise UpstreamHTTPError(
            response.request_info,
            response.history,
            status=response.status,
            message=response.reason or "",
            headers=response.headers,
            body=body,
        )
    return await response.json(content_type=None)


class URLhausClient:
    """
    Issues single requests against the URLhaus API.

    The client only holds an immutable ClientConfig and opens a session per
    request, so one instance can serve concurrent tool calls.
    """

    def __init__(self, config: ClientConfig = DEFAULT_CLIENT_CONFIG):
        self._config = config

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            headers=self._config.headers(),
            timeout=self._config.client_timeout(),
        )

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        Send a GET request with query parameters.

        Args:
            path: Endpoint path, e.g. ``/urls/recent/``
            params: Query parameters

        Returns:
            Decoded JSON body
        """
        url = self._config.url_for(path)
        logger.debug(f"GET {url} params={params}")
        async with self._session() as session:
            async with session.get(url, params=params) as response:
                return await _decode(response)

    async def post(self, path: str, data: dict[str, str]) -> Any:
        """
        Send a form-encoded POST request.

        Args:
            path: Endpoint path, e.g. ``/host/``
            data: Form fields

        Returns:
            Decoded JSON body
        """
        url = self._config.url_for(path)
        logger.debug(f"POST {url} fields={sorted(data)}")
        async with self._session() as session:
            async with session.post(url, data=data) as response:
                return await _decode(response)
