"""Authentication handlers for Zulip API requests."""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod

import httpx

from zulip_sdk.errors import ZulipConfigurationError
from zulip_sdk.models import Credentials


class AuthHandler(ABC):
    """Base class for authentication handlers."""

    def __init__(self, credentials: Credentials) -> None:
        """Initialize auth handler.

        Args:
            credentials: Authentication credentials
        """
        self.credentials = credentials

    @abstractmethod
    def authenticate(self, request: httpx.Request) -> httpx.Request:
        """Authenticate a request.

        Args:
            request: HTTP request to authenticate

        Returns:
            Authenticated request
        """


class BasicAuthHandler(AuthHandler):
    """HTTP basic authentication with an email address and API key."""

    def __init__(self, credentials: Credentials) -> None:
        """Initialize basic auth handler.

        Args:
            credentials: Username/password pair
        """
        if not isinstance(credentials, Credentials):
            raise ZulipConfigurationError(
                "Basic auth handler requires Credentials"
            )
        super().__init__(credentials)

    def authenticate(self, request: httpx.Request) -> httpx.Request:
        """Add an ``Authorization: Basic`` header to the request.

        Args:
            request: HTTP request to authenticate

        Returns:
            Authenticated request
        """
        auth = httpx.BasicAuth(self.credentials.username, self.credentials.password)
        # Basic auth needs a single step of the flow, no server challenge
        return next(auth.auth_flow(request))
