"""Test configuration and fixtures."""

import json
from typing import Any
from typing import Dict
from typing import List
from typing import Tuple
from urllib.parse import parse_qs

import httpx
import pytest

from zulip_sdk.client import ZulipClient
from zulip_sdk.config import ZulipConfig
from zulip_sdk.http import ZulipHTTPClient
from zulip_sdk.models import Credentials
from zulip_sdk.models import DispatchResult

REALM_URL = "https://chat.example.com"
API_URL = f"{REALM_URL}/api/v1"


class RecordingServer:
    """httpx handler that records requests and answers from canned routes."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], httpx.Response] = {}

    def add(self, method: str, path: str, status_code: int = 200, json: Any = None, **kwargs) -> None:
        """Register a response for ``method`` on ``/api/v1<path>``."""
        self.routes[(method, f"/api/v1{path}")] = httpx.Response(
            status_code, json=json, **kwargs
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(
                404,
                json={"result": "error", "msg": "Not found", "code": "BAD_REQUEST"},
            )
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def form(self, request: httpx.Request = None) -> Dict[str, str]:
        """Decode a form-encoded request body."""
        request = request or self.last
        parsed = parse_qs(request.content.decode("utf-8"), keep_blank_values=True)
        return {key: values[0] for key, values in parsed.items()}

    def query(self, request: httpx.Request = None) -> Dict[str, str]:
        request = request or self.last
        return dict(request.url.params)


@pytest.fixture
def config():
    """Client configuration fixture."""
    return ZulipConfig(
        email="bot@example.com",
        api_key="test_api_key",
        realm_url=REALM_URL,
        timeout=10.0,
        user_agent="test-agent/1.0.0",
    )


@pytest.fixture
def credentials():
    """Basic auth credentials fixture."""
    return Credentials(username="bot@example.com", password="test_api_key")


@pytest.fixture
def server():
    """Recording fake server fixture."""
    return RecordingServer()


@pytest.fixture
async def http_client(server):
    """HTTP client wired to the fake server."""
    async with ZulipHTTPClient(
        timeout=10.0,
        user_agent="test-agent/1.0.0",
        transport=httpx.MockTransport(server),
    ) as client:
        yield client


@pytest.fixture
async def client(config, server):
    """Zulip client wired to the fake server."""
    async with ZulipClient(config=config, transport=httpx.MockTransport(server)) as zulip:
        yield zulip


@pytest.fixture
def success_result():
    """Factory for successful dispatch results."""
    def make(data: Any, status_code: int = 200, method: str = "GET", url: str = f"{API_URL}/test"):
        return DispatchResult.success(method, url, status_code, data)
    return make


@pytest.fixture
def decoded_form():
    """Decode JSON-encoded form fields."""
    def decode(form: Dict[str, str], key: str) -> Any:
        return json.loads(form[key])
    return decode
