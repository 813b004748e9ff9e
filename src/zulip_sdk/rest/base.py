"""Base class for REST API endpoints."""

from __future__ import annotations

import logging
from typing import Any
from typing import Dict
from typing import Mapping
from typing import Optional
from typing import Tuple
from typing import Type
from typing import Union

from zulip_sdk.config import ZulipConfig
from zulip_sdk.errors import ZulipResponseError
from zulip_sdk.http import ZulipHTTPClient
from zulip_sdk.models import Credentials
from zulip_sdk.models import DispatchResult
from zulip_sdk.models import HTTPMethod
from zulip_sdk.response import as_object
from zulip_sdk.response import error_from_result
from zulip_sdk.response import get_field
from zulip_sdk.response import is_success

logger = logging.getLogger(__name__)

ExpectedType = Union[Type[Any], Tuple[Type[Any], ...]]


class BaseAPI:
    """Base class for REST API endpoints."""

    def __init__(self, config: ZulipConfig, http_client: ZulipHTTPClient) -> None:
        """Initialize base API.

        Args:
            config: Client configuration
            http_client: HTTP client instance
        """
        self.config = config
        self.http_client = http_client
        self._credentials = Credentials(username=config.email, password=config.api_key)

    async def _request(
        self,
        method: HTTPMethod,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> DispatchResult:
        """Make authenticated request against an endpoint path.

        Args:
            method: HTTP method
            path: Endpoint path relative to the API URL
            params: Request parameters
            timeout: Per-request timeout in seconds; the client default when None

        Returns:
            Dispatched result
        """
        return await self.http_client.dispatch(
            method,
            self.config.endpoint_url(path),
            params=params,
            credentials=self._credentials,
            timeout=timeout,
        )

    def _require(
        self,
        result: DispatchResult,
        key: str,
        expected_type: ExpectedType = object,
    ) -> Any:
        """Extract a field that the endpoint promises.

        Args:
            result: Dispatched result
            key: Field name
            expected_type: Type(s) the value must have

        Returns:
            The field value

        Raises:
            ZulipTransportError: Transport failed
            ZulipAPIError: Server reported an error
            ZulipResponseError: Field missing or of the wrong type
        """
        value = get_field(result, key)
        if value is None:
            raise error_from_result(result, key)
        # bool is a subclass of int
        if not isinstance(value, expected_type) or (
            isinstance(value, bool) and expected_type is int
        ):
            raise ZulipResponseError(
                f"Field '{key}' from {result.method} {result.url} has unexpected "
                f"type {type(value).__name__}",
                response=result.data,
            )
        return value

    def _require_object(self, result: DispatchResult) -> Dict[str, Any]:
        """Return the response object, raising if the call did not succeed."""
        body = as_object(result)
        if body is None or not is_success(result):
            raise error_from_result(result)
        return body

    def _require_success(self, result: DispatchResult) -> None:
        """Raise unless the server reported ``"result": "success"``."""
        self._require_object(result)
        logger.debug(f"{result.method} {result.url} succeeded")
