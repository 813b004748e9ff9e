"""
Users REST API client.

Provides methods for listing users, reading the current user's profile and
creating accounts.
"""

import logging
from typing import Any, Dict, List

from .base import BaseAPI
from ..models import HTTPMethod
from ..response import strip_envelope

logger = logging.getLogger(__name__)


class UsersAPI(BaseAPI):
    """Users REST API client."""

    async def get_all(self, client_gravatar: bool = False) -> List[Dict[str, Any]]:
        """Get all users in the realm.

        Args:
            client_gravatar: Let the client compute gravatar URLs, so the
                server may send ``avatar_url: null``

        Returns:
            User records
        """
        result = await self._request(
            HTTPMethod.GET, "/users", {"client_gravatar": client_gravatar}
        )
        return self._require(result, "members", list)

    async def get_current(self, client_gravatar: bool = False) -> Dict[str, Any]:
        """Get the profile of the authenticated user."""
        result = await self._request(
            HTTPMethod.GET, "/users/me", {"client_gravatar": client_gravatar}
        )
        return strip_envelope(self._require_object(result))

    async def create(
        self,
        email: str,
        password: str,
        full_name: str,
        short_name: str,
    ) -> None:
        """Create a user account (requires administrator rights)."""
        params = {
            "email": email,
            "password": password,
            "full_name": full_name,
            "short_name": short_name,
        }
        result = await self._request(HTTPMethod.POST, "/users", params)
        self._require_success(result)
        logger.info(f"Created user {email}")
