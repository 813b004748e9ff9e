"""
Streams REST API client.

Provides methods for listing streams, resolving stream IDs and managing
subscriptions.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Union

from .base import BaseAPI
from ..models import HTTPMethod, SubscribeResult, UnsubscribeResult
from ..response import get_field

logger = logging.getLogger(__name__)

StreamSpec = Union[str, Mapping[str, Any]]


class StreamsAPI(BaseAPI):
    """Streams REST API client."""

    async def get_all(
        self,
        include_public: bool = True,
        include_subscribed: bool = True,
        include_default: bool = False,
        include_all_active: bool = False,
    ) -> List[Dict[str, Any]]:
        """Get all streams the user can access.

        Args:
            include_public: Include all public streams
            include_subscribed: Include all subscribed-to streams
            include_default: Include all default streams
            include_all_active: Include all active streams (admins only;
                the server rejects this for other users)

        Returns:
            Stream records
        """
        params = {
            "include_public": include_public,
            "include_subscribed": include_subscribed,
            "include_default": include_default,
            "include_all_active": include_all_active,
        }
        result = await self._request(HTTPMethod.GET, "/streams", params)
        return self._require(result, "streams", list)

    async def get_id(self, name: str) -> int:
        """Get the ID of the stream called ``name``."""
        result = await self._request(HTTPMethod.GET, "/get_stream_id", {"stream": name})
        return self._require(result, "stream_id", int)

    async def get_subscribed(self) -> List[Dict[str, Any]]:
        """Get the streams the user is subscribed to."""
        result = await self._request(HTTPMethod.GET, "/users/me/subscriptions")
        return self._require(result, "subscriptions", list)

    async def subscribe(
        self,
        streams: Iterable[StreamSpec],
        principals: Iterable[str] = (),
    ) -> SubscribeResult:
        """Subscribe users to streams, creating streams that do not exist.

        Args:
            streams: Stream names, or stream objects such as
                ``{"name": "general", "description": "..."}``
            principals: Emails of the users to subscribe; the current user
                when empty

        Returns:
            Subscribed, already-subscribed and unauthorized streams
        """
        subscriptions = [
            {"name": stream} if isinstance(stream, str) else dict(stream)
            for stream in streams
        ]
        params: Dict[str, Any] = {"subscriptions": subscriptions}
        principals = list(principals)
        if principals:
            params["principals"] = principals

        result = await self._request(HTTPMethod.POST, "/users/me/subscriptions", params)
        outcome = SubscribeResult(
            subscribed=self._require(result, "subscribed", dict),
            already_subscribed=self._require(result, "already_subscribed", dict),
            # Only present when some streams were refused
            unauthorized=get_field(result, "unauthorized") or [],
        )
        logger.info(f"Subscribed to {[s.get('name') for s in subscriptions]}")
        return outcome

    async def unsubscribe(
        self,
        stream_names: Iterable[str],
        principals: Iterable[str] = (),
    ) -> UnsubscribeResult:
        """Unsubscribe users from streams.

        Args:
            stream_names: Names of the streams to leave
            principals: Emails of the users to unsubscribe; the current user
                when empty

        Returns:
            Removed and not-subscribed streams
        """
        params: Dict[str, Any] = {"subscriptions": list(stream_names)}
        principals = list(principals)
        if principals:
            params["principals"] = principals

        result = await self._request(HTTPMethod.DELETE, "/users/me/subscriptions", params)
        return UnsubscribeResult(
            removed=self._require(result, "removed", list),
            not_subscribed=self._require(result, "not_subscribed", list),
        )
