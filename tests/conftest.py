"""
Pytest fixtures for urlhaus-mcp tests.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from urlhaus_mcp.client import UpstreamHTTPError
from urlhaus_mcp.dispatcher import ToolDispatcher


class FakeClient:
    """Stand-in for URLhausClient that records requests and returns canned bodies."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else {"query_status": "ok"}
        self.error = error
        self.get = AsyncMock(side_effect=self._reply)
        self.post = AsyncMock(side_effect=self._reply)

    async def _reply(self, *args, **kwargs):
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def request_count(self):
        return self.get.await_count + self.post.await_count


def upstream_error(status, body=None, message=""):
    """Build the error URLhausClient raises for an HTTP error response."""
    return UpstreamHTTPError(None, (), status=status, message=message, body=body)


def mock_session(response):
    """Mock aiohttp ClientSession whose get/post yield the given response."""
    request_cm = MagicMock()
    request_cm.__aenter__ = AsyncMock(return_value=response)
    request_cm.__aexit__ = AsyncMock(return_value=None)

    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=None)
    session.get = MagicMock(return_value=request_cm)
    session.post = MagicMock(return_value=request_cm)
    return session


def mock_response(status=200, body=None, reason="OK"):
    """Mock aiohttp ClientResponse."""
    response = MagicMock()
    response.status = status
    response.reason = reason
    response.history = ()
    response.headers = {}
    if isinstance(body, Exception):
        response.json = AsyncMock(side_effect=body)
    else:
        response.json = AsyncMock(return_value=body)
    return response


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def dispatcher(fake_client):
    return ToolDispatcher(client=fake_client)


@pytest.fixture
def sample_url_record():
    """Sample URLhaus URL lookup response."""
    return {
        "query_status": "ok",
        "id": "105821",
        "urlhaus_reference": "https://urlhaus.abuse.ch/url/105821/",
        "url": "http://malware.example.com/payload.exe",
        "url_status": "online",
        "host": "malware.example.com",
        "date_added": "2024-01-01 10:00:00 UTC",
        "threat": "malware_download",
        "blacklists": {"spamhaus_dbl": "not listed", "surbl": "not listed"},
        "reporter": "abuse_ch",
        "larted": "true",
        "takedown_time_seconds": None,
        "tags": ["elf", "mirai"],
    }


@pytest.fixture
def sample_url_list():
    """Sample response of the recent/tag/signature endpoints."""
    return {
        "query_status": "ok",
        "urls": [
            {"id": "1", "url": "http://a.example.com/x.exe", "url_status": "online", "tags": ["emotet"]},
            {"id": "2", "url": "http://b.example.com/y.doc", "url_status": "offline", "tags": ["emotet"]},
            {"id": "3", "url": "https://c.example.com/z.zip", "url_status": "online", "tags": []},
        ],
    }


@pytest.fixture
def sample_host_record(sample_url_list):
    """Sample URLhaus host lookup response."""
    return {
        "query_status": "ok",
        "urlhaus_reference": "https://urlhaus.abuse.ch/host/malware.example.com/",
        "host": "malware.example.com",
        "firstseen": "2024-01-01 10:00:00 UTC",
        "url_count": "3",
        "blacklists": {"spamhaus_dbl": "abused_legit_malware", "surbl": "listed"},
        "urls": sample_url_list["urls"],
    }


@pytest.fixture
def sample_payload_record():
    """Sample URLhaus payload lookup response."""
    return {
        "query_status": "ok",
        "md5_hash": "12c8aec5766ac3e6f26f2505e2f4a8f2",
        "sha256_hash": "01fa56184fcaa42b6ee1882787a34098c79898c182814774fd81dc18a6af0b00",
        "file_type": "exe",
        "file_size": "1073152",
        "signature": "Heodo",
        "firstseen": "2024-01-01 10:00:00",
        "lastseen": None,
        "url_count": "2",
        "urlhaus_download": "https://urlhaus-api.abuse.ch/v1/download/01fa5618/",
        "virustotal": None,
        "urls": [],
    }


@pytest.fixture
def sample_payload_list():
    """Sample response of the recent payloads endpoint."""
    return {
        "query_status": "ok",
        "payloads": [
            {"md5_hash": "a" * 32, "sha256_hash": "b" * 64, "file_type": "exe", "signature": "Heodo"},
            {"md5_hash": "c" * 32, "sha256_hash": "d" * 64, "file_type": "dll", "signature": None},
        ],
    }
