"""REST API endpoints for Zulip."""

from zulip_sdk.rest.events import EventsAPI
from zulip_sdk.rest.messages import MessagesAPI
from zulip_sdk.rest.streams import StreamsAPI
from zulip_sdk.rest.users import UsersAPI

__all__ = [
    "EventsAPI",
    "MessagesAPI",
    "StreamsAPI",
    "UsersAPI",
]
