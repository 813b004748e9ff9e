"""Async HTTP dispatcher for the Zulip REST API."""

from __future__ import annotations

import inspect
import logging
from typing import Any
from typing import Awaitable
from typing import Callable
from typing import Dict
from typing import Mapping
from typing import Optional
from typing import Union

import httpx

from zulip_sdk.auth import BasicAuthHandler
from zulip_sdk.config import DEFAULT_TIMEOUT
from zulip_sdk.config import DEFAULT_USER_AGENT
from zulip_sdk.errors import ZulipTimeoutError
from zulip_sdk.errors import ZulipTransportError
from zulip_sdk.models import Credentials
from zulip_sdk.models import DispatchResult
from zulip_sdk.models import HTTPMethod
from zulip_sdk.utils import encode_params

logger = logging.getLogger(__name__)

ResultCallback = Callable[[DispatchResult], Union[None, Awaitable[None]]]


class ZulipHTTPClient:
    """Sends one HTTP request per dispatch and reports the outcome as a value.

    Transport failures never escape as exceptions; they are returned as a
    failed ``DispatchResult``. There are no retries, no rate limiting and no
    caching.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds
            user_agent: User agent header value
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
        """
        self.timeout = timeout
        self.user_agent = user_agent

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    async def __aenter__(self) -> ZulipHTTPClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    @property
    def is_closed(self) -> bool:
        """Whether the underlying connection pool has been closed."""
        return self._client.is_closed

    async def dispatch(
        self,
        method: Union[str, HTTPMethod],
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        credentials: Optional[Credentials] = None,
        callback: Optional[ResultCallback] = None,
        timeout: Optional[float] = None,
    ) -> DispatchResult:
        """Send a request and return its outcome.

        Args:
            method: HTTP verb (GET, POST, PATCH or DELETE)
            url: Fully-qualified request URL
            params: Query parameters for GET, form body for other verbs
            credentials: Optional basic auth username/secret pair
            callback: Optional continuation, invoked exactly once with the result
            timeout: Seconds for this request only, overriding the client default

        Returns:
            Decoded response body or transport failure

        Raises:
            ValueError: Unsupported HTTP verb
        """
        verb = HTTPMethod(method.upper() if isinstance(method, str) else method)
        result = await self._send(verb, url, encode_params(params), credentials, timeout)

        if callback is not None:
            outcome = callback(result)
            if inspect.isawaitable(outcome):
                await outcome

        return result

    async def _send(
        self,
        verb: HTTPMethod,
        url: str,
        params: Mapping[str, str],
        credentials: Optional[Credentials],
        timeout: Optional[float] = None,
    ) -> DispatchResult:
        """Build, authenticate and send one request. Redirects are not followed."""
        effective_timeout = self.timeout if timeout is None else timeout
        extra: Dict[str, Any] = {}
        if timeout is not None:
            extra["timeout"] = httpx.Timeout(timeout)
        try:
            if verb is HTTPMethod.GET:
                request = self._client.build_request(verb.value, url, params=params, **extra)
            else:
                request = self._client.build_request(verb.value, url, data=params, **extra)
        except httpx.InvalidURL as e:
            logger.warning(f"{verb.value} {url} rejected: {e}")
            return DispatchResult.failure(
                verb.value, url, ZulipTransportError(f"Invalid URL: {e}")
            )

        if credentials is not None:
            request = BasicAuthHandler(credentials).authenticate(request)

        logger.debug(f"{verb.value} {url} params={sorted(params)}")

        try:
            response = await self._client.send(request)
        except httpx.TimeoutException as e:
            logger.warning(f"{verb.value} {url} timed out: {e}")
            return DispatchResult.failure(
                verb.value, url,
                ZulipTimeoutError(f"Request timed out: {e}", timeout=effective_timeout),
            )
        except httpx.HTTPError as e:
            logger.warning(f"{verb.value} {url} failed: {e}")
            return DispatchResult.failure(
                verb.value, url,
                ZulipTransportError(str(e) or e.__class__.__name__),
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(
                f"{verb.value} {url} -> {response.status_code} with non-JSON body"
            )
            return DispatchResult.failure(
                verb.value, url,
                ZulipTransportError(
                    f"HTTP {response.status_code}: response is not valid JSON ({e})",
                    details={"body": response.text[:500]},
                ),
                status_code=response.status_code,
            )

        logger.debug(f"{verb.value} {url} -> {response.status_code}")
        return DispatchResult.success(verb.value, url, response.status_code, data)

    # Convenience methods
    async def get(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        credentials: Optional[Credentials] = None,
        callback: Optional[ResultCallback] = None,
    ) -> DispatchResult:
        """Make GET request."""
        return await self.dispatch(HTTPMethod.GET, url, params, credentials, callback)

    async def post(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        credentials: Optional[Credentials] = None,
        callback: Optional[ResultCallback] = None,
    ) -> DispatchResult:
        """Make POST request."""
        return await self.dispatch(HTTPMethod.POST, url, params, credentials, callback)

    async def patch(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        credentials: Optional[Credentials] = None,
        callback: Optional[ResultCallback] = None,
    ) -> DispatchResult:
        """Make PATCH request."""
        return await self.dispatch(HTTPMethod.PATCH, url, params, credentials, callback)

    async def delete(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        credentials: Optional[Credentials] = None,
        callback: Optional[ResultCallback] = None,
    ) -> DispatchResult:
        """Make DELETE request."""
        return await self.dispatch(HTTPMethod.DELETE, url, params, credentials, callback)
