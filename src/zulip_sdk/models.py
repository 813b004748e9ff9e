"""Pydantic models for Zulip API requests and results."""

from __future__ import annotations

from enum import Enum
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from zulip_sdk.errors import ZulipTransportError


class ZulipBaseModel(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        # Use enum values instead of enum objects
        use_enum_values=True,
        # Allow population by field name and alias
        populate_by_name=True,
        # Servers add keys over time; keep them rather than fail
        extra="allow",
        arbitrary_types_allowed=True,
    )


# ============================================================================
# Enums
# ============================================================================

class MessageType(str, Enum):
    """Message type enumeration."""
    STREAM = "stream"
    PRIVATE = "private"


class HTTPMethod(str, Enum):
    """HTTP verbs used by the Zulip API."""
    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"


# ============================================================================
# Transport Models
# ============================================================================

class Credentials(ZulipBaseModel):
    """HTTP basic authentication credentials."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    username: str = Field(..., description="Account email address")
    password: str = Field(..., description="API key", repr=False)


class DispatchResult(ZulipBaseModel):
    """Outcome of a single dispatched request.

    Exactly one of two shapes: ``error`` is set when the transport failed,
    otherwise ``data`` holds the decoded JSON body (object, array or scalar)
    and ``status_code`` the HTTP status.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    method: str = Field(..., description="HTTP method")
    url: str = Field(..., description="Request URL")
    status_code: Optional[int] = Field(None, description="HTTP status code")
    data: Any = Field(None, description="Decoded JSON body")
    error: Optional[ZulipTransportError] = Field(None, description="Transport failure")

    @property
    def ok(self) -> bool:
        """Whether the transport delivered a decodable body."""
        return self.error is None

    @classmethod
    def success(cls, method: str, url: str, status_code: int, data: Any) -> DispatchResult:
        """Build a result for a decoded response."""
        return cls(method=method, url=url, status_code=status_code, data=data)

    @classmethod
    def failure(
        cls,
        method: str,
        url: str,
        error: ZulipTransportError,
        status_code: Optional[int] = None,
    ) -> DispatchResult:
        """Build a result for a transport failure."""
        return cls(method=method, url=url, status_code=status_code, error=error)


# ============================================================================
# Endpoint Result Models
# ============================================================================

class SubscribeResult(ZulipBaseModel):
    """Result of subscribing users to streams.

    ``subscribed`` and ``already_subscribed`` map user emails to the stream
    names affected; ``unauthorized`` lists stream names the caller may not join.
    """
    subscribed: Dict[str, List[str]] = Field(default_factory=dict)
    already_subscribed: Dict[str, List[str]] = Field(default_factory=dict)
    unauthorized: List[str] = Field(default_factory=list)


class UnsubscribeResult(ZulipBaseModel):
    """Result of unsubscribing users from streams."""
    removed: List[str] = Field(default_factory=list)
    not_subscribed: List[str] = Field(default_factory=list)


class EventQueue(ZulipBaseModel):
    """A registered event queue plus the initial state the server sent."""
    queue_id: str = Field(..., description="Queue identifier")
    last_event_id: int = Field(-1, description="ID of the last event already delivered")
