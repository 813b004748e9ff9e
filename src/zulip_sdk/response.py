"""Helpers for pulling values out of dispatched responses.

``as_object`` and ``get_field`` report absence with ``None``; they never
raise. ``error_from_result`` turns a result that did not carry the expected
value into the exception that best describes why.
"""

from __future__ import annotations

from typing import Any
from typing import Dict
from typing import Optional

from zulip_sdk.errors import ZulipAPIError
from zulip_sdk.errors import ZulipError
from zulip_sdk.errors import ZulipResponseError
from zulip_sdk.models import DispatchResult

ENVELOPE_KEYS = ("result", "msg")


def as_object(result: DispatchResult) -> Optional[Dict[str, Any]]:
    """Return the decoded body if it is a JSON object, else None."""
    if not result.ok:
        return None
    if isinstance(result.data, dict):
        return result.data
    return None


def get_field(result: DispatchResult, key: str) -> Optional[Any]:
    """Return the value stored at ``key`` in an object body, else None."""
    body = as_object(result)
    if body is None:
        return None
    return body.get(key)


def is_transport_failure(result: DispatchResult) -> bool:
    """Whether the result failed before a body could be interpreted."""
    return not result.ok


def is_success(result: DispatchResult) -> bool:
    """Whether the server reported ``"result": "success"``."""
    return get_field(result, "result") == "success"


def strip_envelope(body: Dict[str, Any]) -> Dict[str, Any]:
    """Drop the ``result``/``msg`` envelope keys from a response object."""
    return {key: value for key, value in body.items() if key not in ENVELOPE_KEYS}


def error_from_result(result: DispatchResult, key: Optional[str] = None) -> ZulipError:
    """Describe why ``result`` did not yield the expected value.

    Args:
        result: Dispatched result
        key: Field the caller expected, if any

    Returns:
        The transport error, a ``ZulipAPIError`` when the server reported an
        error, or a ``ZulipResponseError`` for any other unexpected body
    """
    if result.error is not None:
        return result.error

    body = as_object(result)
    if body is None:
        return ZulipResponseError(
            f"Expected a JSON object from {result.method} {result.url}, "
            f"got {type(result.data).__name__}",
            response=result.data,
        )

    if body.get("result") == "error":
        return ZulipAPIError(
            str(body.get("msg") or "Unknown error"),
            status_code=result.status_code,
            code=body.get("code"),
            response=body,
        )

    if result.status_code is not None and result.status_code >= 400:
        return ZulipAPIError(
            str(body.get("msg") or f"HTTP {result.status_code}"),
            status_code=result.status_code,
            code=body.get("code"),
            response=body,
        )

    if key is not None:
        message = f"Response from {result.method} {result.url} is missing '{key}'"
    else:
        message = f"Unexpected response from {result.method} {result.url}"
    return ZulipResponseError(message, response=body)
