"""
Events REST API client.

Provides methods for registering an event queue, polling it and deleting it.
Polling is a sequence of independent calls: the caller keeps track of the
last event ID it has seen and passes it to the next ``get``.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from .base import BaseAPI
from ..config import LONG_POLL_TIMEOUT
from ..models import EventQueue, HTTPMethod

logger = logging.getLogger(__name__)


class EventsAPI(BaseAPI):
    """Events REST API client."""

    async def register(
        self,
        apply_markdown: bool = False,
        client_gravatar: bool = False,
        event_types: Optional[Sequence[str]] = None,
        all_public_streams: bool = False,
        include_subscribers: bool = False,
        narrow: Optional[Sequence[Sequence[str]]] = None,
    ) -> EventQueue:
        """Register an event queue.

        Args:
            apply_markdown: Deliver message content rendered as HTML
            client_gravatar: Let the client compute gravatar URLs
            event_types: Event types to receive; all types when None
            all_public_streams: Receive events for all public streams
            include_subscribers: Include subscriber lists in stream data
            narrow: Only receive messages matching these ``[operator, operand]`` pairs

        Returns:
            The queue, including the initial state the server sent
        """
        params: Dict[str, Any] = {
            "apply_markdown": apply_markdown,
            "client_gravatar": client_gravatar,
            "all_public_streams": all_public_streams,
            "include_subscribers": include_subscribers,
        }
        if event_types is not None:
            params["event_types"] = list(event_types)
        if narrow is not None:
            params["narrow"] = [list(term) for term in narrow]

        result = await self._request(HTTPMethod.POST, "/register", params)
        self._require(result, "queue_id", str)
        queue = EventQueue.model_validate(self._require_object(result))
        logger.info(f"Registered event queue {queue.queue_id}")
        return queue

    async def get(
        self,
        queue_id: str,
        last_event_id: int,
        dont_block: bool = False,
    ) -> List[Dict[str, Any]]:
        """Fetch events newer than ``last_event_id`` from a queue.

        Args:
            queue_id: Queue returned by ``register``
            last_event_id: Highest event ID already processed
            dont_block: Return immediately instead of long-polling. A blocking
                poll waits at least LONG_POLL_TIMEOUT seconds for the server

        Returns:
            Event records, possibly empty
        """
        params = {
            "queue_id": queue_id,
            "last_event_id": last_event_id,
            "dont_block": dont_block,
        }
        timeout = None if dont_block else max(self.config.timeout, LONG_POLL_TIMEOUT)
        result = await self._request(HTTPMethod.GET, "/events", params, timeout=timeout)
        return self._require(result, "events", list)

    async def delete_queue(self, queue_id: str) -> None:
        """Delete an event queue."""
        result = await self._request(HTTPMethod.DELETE, "/events", {"queue_id": queue_id})
        self._require_success(result)
        logger.info(f"Deleted event queue {queue_id}")
