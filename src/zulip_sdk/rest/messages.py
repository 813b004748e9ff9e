"""
Messages REST API client.

Provides methods for sending, fetching, rendering and editing messages.
"""

import logging
from typing import Any, Dict, List, Sequence, Union

from .base import BaseAPI
from ..models import HTTPMethod, MessageType

logger = logging.getLogger(__name__)

Narrow = Sequence[Sequence[str]]


class MessagesAPI(BaseAPI):
    """Messages REST API client."""

    async def send(
        self,
        message_type: Union[MessageType, str],
        to: Union[str, Sequence[str]],
        subject: str,
        content: str,
    ) -> int:
        """Send a message.

        Args:
            message_type: ``stream`` or ``private``
            to: Stream name, or recipient email(s) for a private message
            subject: Topic of a stream message (ignored for private messages)
            content: Message body in Zulip markdown

        Returns:
            ID of the new message
        """
        params: Dict[str, Any] = {
            "type": MessageType(message_type).value,
            "to": to if isinstance(to, str) else list(to),
            "subject": subject,
            "content": content,
        }
        result = await self._request(HTTPMethod.POST, "/messages", params)
        message_id = self._require(result, "id", int)
        logger.info(f"Sent {params['type']} message {message_id}")
        return message_id

    async def get(
        self,
        narrow: Narrow,
        anchor: Union[int, str],
        num_before: int,
        num_after: int,
    ) -> List[Dict[str, Any]]:
        """Fetch messages around an anchor.

        Args:
            narrow: Filter as ``[operator, operand]`` pairs, e.g. ``[["stream", "general"]]``
            anchor: Message ID (or ``"newest"``, ``"oldest"``, ``"first_unread"``)
            num_before: Number of messages before the anchor
            num_after: Number of messages after the anchor

        Returns:
            Message records
        """
        params = {
            "narrow": [list(term) for term in narrow],
            "anchor": anchor,
            "num_before": num_before,
            "num_after": num_after,
        }
        result = await self._request(HTTPMethod.GET, "/messages", params)
        return self._require(result, "messages", list)

    async def render(self, content: str) -> str:
        """Render Zulip markdown to HTML on the server."""
        result = await self._request(
            HTTPMethod.POST, "/messages/render", {"content": content}
        )
        return self._require(result, "rendered", str)

    async def update(self, message_id: int, content: str) -> None:
        """Replace the content of an existing message."""
        result = await self._request(
            HTTPMethod.PATCH, f"/messages/{int(message_id)}", {"content": content}
        )
        self._require_success(result)
