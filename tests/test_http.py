"""Tests for the HTTP dispatcher."""

from base64 import b64decode
from unittest.mock import AsyncMock
from unittest.mock import MagicMock

import httpx
import pytest

from zulip_sdk.errors import ZulipTimeoutError
from zulip_sdk.errors import ZulipTransportError
from zulip_sdk.http import ZulipHTTPClient
from zulip_sdk.models import DispatchResult

API_URL = "https://chat.example.com/api/v1"


class TestZulipHTTPClient:
    """Test dispatcher functionality."""

    def test_init(self):
        """Test HTTP client initialization."""
        client = ZulipHTTPClient(timeout=12.5, user_agent="test-sdk/1.0.0")

        assert client.timeout == 12.5
        assert client.user_agent == "test-sdk/1.0.0"
        assert not client.is_closed

    @pytest.mark.asyncio
    async def test_context_manager_closes(self):
        """Test using client as context manager."""
        async with ZulipHTTPClient() as client:
            assert isinstance(client, ZulipHTTPClient)
        assert client.is_closed

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "POST", "PATCH", "DELETE"])
    async def test_one_request_per_dispatch(self, http_client, server, method):
        """Each dispatch issues exactly one call with the given verb and URL."""
        server.add(method, "/thing", json={"result": "success", "msg": ""})

        result = await http_client.dispatch(method, f"{API_URL}/thing", {"a": "1"})

        assert len(server.requests) == 1
        assert server.last.method == method
        assert server.last.url.path == "/api/v1/thing"
        assert result.ok
        assert result.status_code == 200
        assert result.data == {"result": "success", "msg": ""}

    @pytest.mark.asyncio
    async def test_get_sends_query_string(self, http_client, server):
        """GET parameters travel in the query string."""
        server.add("GET", "/streams", json={"result": "success", "streams": []})

        await http_client.get(f"{API_URL}/streams", {"include_public": True, "stream": "general"})

        assert server.query() == {"include_public": "true", "stream": "general"}
        assert server.last.content == b""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["POST", "PATCH", "DELETE"])
    async def test_body_verbs_send_form(self, http_client, server, method):
        """Non-GET parameters travel as a form-encoded body."""
        server.add(method, "/thing", json={"result": "success"})

        await http_client.dispatch(method, f"{API_URL}/thing", {"content": "hi there", "id": 7})

        assert server.last.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert server.form() == {"content": "hi there", "id": "7"}
        assert not server.last.url.params

    @pytest.mark.asyncio
    async def test_structured_params_are_json_encoded(self, http_client, server, decoded_form):
        """Lists and dicts are sent as JSON text."""
        server.add("POST", "/users/me/subscriptions", json={"result": "success"})

        await http_client.post(
            f"{API_URL}/users/me/subscriptions",
            {"subscriptions": [{"name": "test"}], "principals": ["a@example.com"]},
        )

        form = server.form()
        assert decoded_form(form, "subscriptions") == [{"name": "test"}]
        assert decoded_form(form, "principals") == ["a@example.com"]

    @pytest.mark.asyncio
    async def test_credentials_add_basic_auth(self, http_client, server, credentials):
        """Credentials become an HTTP basic auth header."""
        server.add("GET", "/users/me", json={"result": "success"})

        await http_client.get(f"{API_URL}/users/me", credentials=credentials)

        scheme, _, encoded = server.last.headers["Authorization"].partition(" ")
        assert scheme == "Basic"
        assert b64decode(encoded).decode() == "bot@example.com:test_api_key"

    @pytest.mark.asyncio
    async def test_no_credentials_no_auth_header(self, http_client, server):
        """Without credentials no Authorization header is sent."""
        server.add("GET", "/server_settings", json={"result": "success"})

        await http_client.get(f"{API_URL}/server_settings")

        assert "Authorization" not in server.last.headers

    @pytest.mark.asyncio
    async def test_user_agent_header(self, http_client, server):
        """Requests carry the configured user agent."""
        server.add("GET", "/x", json={})

        await http_client.get(f"{API_URL}/x")

        assert server.last.headers["User-Agent"] == "test-agent/1.0.0"

    @pytest.mark.asyncio
    async def test_method_is_case_insensitive(self, http_client, server):
        """Lower-case verbs are accepted."""
        server.add("PATCH", "/messages/1", json={"result": "success"})

        result = await http_client.dispatch("patch", f"{API_URL}/messages/1")

        assert result.method == "PATCH"
        assert server.last.method == "PATCH"

    @pytest.mark.asyncio
    async def test_unsupported_method(self, http_client, server):
        """Unsupported verbs are a programming error."""
        with pytest.raises(ValueError):
            await http_client.dispatch("PUT", f"{API_URL}/x")
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_error_status_keeps_json_body(self, http_client, server):
        """Server errors are decoded bodies, not transport failures."""
        server.add(
            "GET", "/get_stream_id", status_code=400,
            json={"result": "error", "msg": "Invalid stream name 'nope'", "code": "BAD_REQUEST"},
        )

        result = await http_client.get(f"{API_URL}/get_stream_id", {"stream": "nope"})

        assert result.ok
        assert result.status_code == 400
        assert result.data["code"] == "BAD_REQUEST"

    @pytest.mark.asyncio
    async def test_non_object_body(self, http_client, server):
        """Any JSON value is delivered as-is."""
        server.add("GET", "/list", json=[1, 2, 3])

        result = await http_client.get(f"{API_URL}/list")

        assert result.ok
        assert result.data == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_redirect_is_not_followed(self):
        """A 3xx reply is the outcome of the one request sent."""
        sent = []

        def redirect(request):
            sent.append((request.method, str(request.url)))
            if request.url.scheme == "http":
                return httpx.Response(
                    301,
                    headers={"Location": str(request.url.copy_with(scheme="https"))},
                    text="Moved Permanently",
                )
            return httpx.Response(200, json={"result": "success", "id": 1})

        async with ZulipHTTPClient(transport=httpx.MockTransport(redirect)) as client:
            result = await client.post(
                "http://chat.example.com/api/v1/messages", {"content": "hello"}
            )

        assert sent == [("POST", "http://chat.example.com/api/v1/messages")]
        assert not result.ok
        assert result.status_code == 301

    @pytest.mark.asyncio
    async def test_default_timeout_on_request(self, http_client, server):
        """Requests carry the client timeout unless one is given."""
        server.add("GET", "/events", json={"result": "success", "events": []})

        await http_client.get(f"{API_URL}/events")

        assert server.last.extensions["timeout"]["read"] == 10.0

    @pytest.mark.asyncio
    async def test_per_request_timeout(self, http_client, server):
        """A timeout given to dispatch applies to that request only."""
        server.add("GET", "/events", json={"result": "success", "events": []})

        await http_client.dispatch("GET", f"{API_URL}/events", timeout=90.0)
        assert server.last.extensions["timeout"] == {
            "connect": 90.0, "read": 90.0, "write": 90.0, "pool": 90.0,
        }

        await http_client.dispatch("GET", f"{API_URL}/events")
        assert server.last.extensions["timeout"]["read"] == 10.0


class TestTransportFailures:
    """Transport failures come back as values, never as exceptions."""

    @pytest.mark.asyncio
    async def test_connection_error(self):
        """Test connection failure handling."""
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        async with ZulipHTTPClient(transport=httpx.MockTransport(refuse)) as client:
            result = await client.get(f"{API_URL}/users/me")

        assert not result.ok
        assert isinstance(result.error, ZulipTransportError)
        assert "Connection refused" in str(result.error)
        assert result.status_code is None
        assert result.data is None

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test timeout handling."""
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with ZulipHTTPClient(timeout=3.0, transport=httpx.MockTransport(slow)) as client:
            result = await client.get(f"{API_URL}/events")

        assert isinstance(result.error, ZulipTimeoutError)
        assert result.error.timeout == 3.0
        assert result.error.error_code == "TIMEOUT"

    @pytest.mark.asyncio
    async def test_timeout_reports_per_request_value(self):
        """Test the timeout error names the timeout actually used."""
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with ZulipHTTPClient(timeout=3.0, transport=httpx.MockTransport(slow)) as client:
            result = await client.dispatch("GET", f"{API_URL}/events", timeout=90.0)

        assert result.error.timeout == 90.0

    @pytest.mark.asyncio
    async def test_invalid_json_body(self):
        """A body that is not JSON is a transport failure."""
        def html(request):
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        async with ZulipHTTPClient(transport=httpx.MockTransport(html)) as client:
            result = await client.get(f"{API_URL}/users")

        assert not result.ok
        assert result.status_code == 502
        assert "not valid JSON" in result.error.message
        assert result.error.details["body"] == "<html>Bad Gateway</html>"

    @pytest.mark.asyncio
    async def test_unsupported_scheme(self):
        """URLs httpx cannot send are reported, not raised."""
        async with ZulipHTTPClient() as client:
            result = await client.get("ftp://chat.example.com/api/v1/users")

        assert not result.ok
        assert isinstance(result.error, ZulipTransportError)

    @pytest.mark.asyncio
    async def test_send_failure_with_mocked_client(self):
        """Test error mapping with the httpx client mocked out."""
        client = ZulipHTTPClient()
        client._client = AsyncMock(spec=httpx.AsyncClient)
        client._client.build_request = MagicMock(return_value=MagicMock(spec=httpx.Request))
        client._client.send.side_effect = httpx.RemoteProtocolError("Server disconnected")

        result = await client.post(f"{API_URL}/messages", {"content": "x"})

        assert result.error.message == "Server disconnected"
        client._client.send.assert_called_once()


class TestCallback:
    """The continuation runs exactly once per dispatch."""

    @pytest.mark.asyncio
    async def test_sync_callback(self, http_client, server):
        """Test plain function callback."""
        server.add("GET", "/x", json={"result": "success"})
        callback = MagicMock()

        result = await http_client.get(f"{API_URL}/x", callback=callback)

        callback.assert_called_once_with(result)

    @pytest.mark.asyncio
    async def test_async_callback(self, http_client, server):
        """Test coroutine callback."""
        server.add("GET", "/x", json={"result": "success"})
        callback = AsyncMock()

        result = await http_client.get(f"{API_URL}/x", callback=callback)

        callback.assert_awaited_once_with(result)

    @pytest.mark.asyncio
    async def test_callback_receives_failure(self):
        """Failures reach the callback too."""
        def refuse(request):
            raise httpx.ConnectError("refused", request=request)

        received = []
        async with ZulipHTTPClient(transport=httpx.MockTransport(refuse)) as client:
            await client.get(f"{API_URL}/x", callback=received.append)

        assert len(received) == 1
        assert isinstance(received[0], DispatchResult)
        assert not received[0].ok
