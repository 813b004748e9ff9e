"""Utility functions for the Zulip SDK."""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any
from typing import Dict
from typing import List
from typing import Mapping
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def encode_param(value: Any) -> str:
    """Encode a single parameter value the way the Zulip API expects.

    Strings pass through, booleans become ``"true"``/``"false"``, lists and
    dicts become JSON text and any other scalar is converted with ``str``.

    Args:
        value: Parameter value

    Returns:
        Encoded string value
    """
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(list(value) if isinstance(value, tuple) else value)
    return str(value)


def encode_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Encode a parameter mapping, dropping keys whose value is None.

    Args:
        params: Raw parameters

    Returns:
        String-keyed, string-valued parameters
    """
    if not params:
        return {}
    return {
        str(key): encode_param(value)
        for key, value in params.items()
        if value is not None
    }


def split_list(value: Optional[str], separator: str = ",") -> List[str]:
    """Split a separated string into stripped, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(separator) if item.strip()]


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for scripts using the SDK.

    Args:
        level: Log level name
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))
