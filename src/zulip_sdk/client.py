"""Zulip Python SDK - Main client implementation.

Async client for the Zulip REST API with:
- One HTTP request per call, authenticated with the account's API key
- Typed results for multi-field endpoints using Pydantic
- Transport failures and server errors surfaced as typed exceptions
"""

import logging
from typing import Optional

import httpx

from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, ZulipConfig
from .env_config import load_config_from_env
from .errors import ZulipConfigurationError
from .http import ZulipHTTPClient
from .rest.events import EventsAPI
from .rest.messages import MessagesAPI
from .rest.streams import StreamsAPI
from .rest.users import UsersAPI

logger = logging.getLogger(__name__)


class ZulipClient:
    """Main Zulip SDK client.

    Provides access to the messages, streams, users and events APIs of a
    single realm.

    Example:
        ```python
        from zulip_sdk import ZulipClient

        async with ZulipClient(
            email="bot@example.com",
            api_key="your-api-key",
            realm_url="https://chat.example.com",
        ) as client:
            message_id = await client.messages.send(
                "stream", to="general", subject="greetings", content="Hello!"
            )
            streams = await client.streams.get_subscribed()
        ```
    """

    def __init__(
        self,
        config: Optional[ZulipConfig] = None,
        email: Optional[str] = None,
        api_key: Optional[str] = None,
        realm_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize Zulip client.

        Args:
            config: Complete configuration object (takes precedence)
            email: Account email address
            api_key: Account API key
            realm_url: Realm base URL
            timeout: Request timeout in seconds
            user_agent: User agent string
            transport: Optional httpx transport, mainly for tests
        """
        if config:
            self.config = config
        else:
            if not (email and api_key and realm_url):
                raise ZulipConfigurationError(
                    "email, api_key and realm_url are required when no config is given"
                )
            self.config = ZulipConfig(
                email=email,
                api_key=api_key,
                realm_url=realm_url,
                timeout=timeout,
                user_agent=user_agent,
            )

        self.http = ZulipHTTPClient(
            timeout=self.config.timeout,
            user_agent=self.config.user_agent,
            transport=transport,
        )

        self.messages = MessagesAPI(self.config, self.http)
        self.streams = StreamsAPI(self.config, self.http)
        self.users = UsersAPI(self.config, self.http)
        self.events = EventsAPI(self.config, self.http)

        logger.debug(f"Client created for {self.config.email} at {self.config.api_url}")

    @classmethod
    def from_env(cls, transport: Optional[httpx.AsyncBaseTransport] = None) -> "ZulipClient":
        """Create a client from ``ZULIP_*`` environment variables."""
        return cls(config=load_config_from_env(), transport=transport)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.http.close()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


def create_client(
    email: str,
    api_key: str,
    realm_url: str,
    **kwargs
) -> ZulipClient:
    """Factory function to create a Zulip client.

    Args:
        email: Account email address
        api_key: Account API key
        realm_url: Realm base URL
        **kwargs: Additional configuration options

    Returns:
        ZulipClient instance
    """
    return ZulipClient(email=email, api_key=api_key, realm_url=realm_url, **kwargs)
