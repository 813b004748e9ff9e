"""Tests for pydantic models and auth handlers."""

from base64 import b64encode

import httpx
import pytest
from pydantic import ValidationError

from zulip_sdk.auth import BasicAuthHandler
from zulip_sdk.errors import ZulipConfigurationError
from zulip_sdk.errors import ZulipTransportError
from zulip_sdk.models import Credentials
from zulip_sdk.models import DispatchResult
from zulip_sdk.models import EventQueue
from zulip_sdk.models import HTTPMethod
from zulip_sdk.models import MessageType
from zulip_sdk.models import SubscribeResult


class TestCredentials:
    """Test credential model."""

    def test_password_hidden_from_repr(self, credentials):
        assert credentials.username == "bot@example.com"
        assert "test_api_key" not in repr(credentials)

    def test_frozen(self, credentials):
        with pytest.raises(ValidationError):
            credentials.username = "other@example.com"


class TestDispatchResult:
    """Test dispatch result model."""

    def test_success(self):
        result = DispatchResult.success("GET", "https://x/api/v1/users", 200, {"members": []})
        assert result.ok
        assert result.error is None

    def test_failure(self):
        error = ZulipTransportError("Connection refused")
        result = DispatchResult.failure("GET", "https://x/api/v1/users", error)
        assert not result.ok
        assert result.error is error
        assert result.data is None

    def test_rejects_foreign_error_type(self):
        with pytest.raises(ValidationError):
            DispatchResult(method="GET", url="u", error=RuntimeError("boom"))


class TestEndpointModels:
    """Test endpoint result models."""

    def test_enums(self):
        assert MessageType("stream") is MessageType.STREAM
        assert HTTPMethod("DELETE") is HTTPMethod.DELETE

    def test_subscribe_result_defaults(self):
        result = SubscribeResult()
        assert result.subscribed == {}
        assert result.already_subscribed == {}
        assert result.unauthorized == []

    def test_event_queue_keeps_extra_state(self):
        queue = EventQueue.model_validate({
            "queue_id": "q1", "last_event_id": 4, "realm_users": [{"user_id": 1}],
        })
        assert queue.queue_id == "q1"
        assert queue.model_extra["realm_users"] == [{"user_id": 1}]

    def test_event_queue_requires_id(self):
        with pytest.raises(ValidationError):
            EventQueue.model_validate({"last_event_id": 1})


class TestBasicAuthHandler:
    """Test basic authentication handler."""

    def test_authenticate_request(self, credentials):
        handler = BasicAuthHandler(credentials)
        request = httpx.Request("GET", "https://chat.example.com/api/v1/users/me")

        authenticated = handler.authenticate(request)

        expected = b64encode(b"bot@example.com:test_api_key").decode()
        assert authenticated is request
        assert request.headers["Authorization"] == f"Basic {expected}"

    def test_matches_httpx_basic_auth(self, credentials):
        expected = httpx.Request("GET", "https://chat.example.com/")
        next(httpx.BasicAuth("bot@example.com", "test_api_key").auth_flow(expected))

        request = BasicAuthHandler(credentials).authenticate(
            httpx.Request("GET", "https://chat.example.com/")
        )

        assert request.headers["Authorization"] == expected.headers["Authorization"]

    def test_init_with_invalid_credentials(self):
        with pytest.raises(ZulipConfigurationError):
            BasicAuthHandler(("user", "pass"))
