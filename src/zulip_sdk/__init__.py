"""Zulip Python SDK - Async client for the Zulip REST API."""

__version__ = "1.0.0"

from .client import ZulipClient, create_client
from .config import ZulipConfig
from .env_config import load_config_from_env
from .errors import (
    ZulipAPIError,
    ZulipConfigurationError,
    ZulipError,
    ZulipResponseError,
    ZulipTimeoutError,
    ZulipTransportError,
)
from .models import MessageType

__all__ = [
    "ZulipClient",
    "create_client",
    "ZulipConfig",
    "load_config_from_env",
    "ZulipError",
    "ZulipAPIError",
    "ZulipConfigurationError",
    "ZulipResponseError",
    "ZulipTimeoutError",
    "ZulipTransportError",
    "MessageType",
    "__version__",
]
