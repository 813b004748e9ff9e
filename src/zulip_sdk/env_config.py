"""
Environment variable configuration loader for the Zulip SDK.

Lets scripts and the command-line example pick up credentials without
hard-coding them.
"""

import os
import logging

from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, ZulipConfig
from .errors import ZulipConfigurationError

logger = logging.getLogger(__name__)


def load_config_from_env() -> ZulipConfig:
    """
    Load SDK configuration from environment variables.

    Environment variables:
        ZULIP_EMAIL: Account email address
        ZULIP_API_KEY: Account API key
        ZULIP_REALM_URL: Realm base URL (``ZULIP_SITE`` is accepted as a fallback)
        ZULIP_TIMEOUT: Request timeout in seconds
        ZULIP_USER_AGENT: User agent string
        ZULIP_LOG_LEVEL: Log level (DEBUG/INFO/WARNING/ERROR)

    Returns:
        ZulipConfig: Configuration object loaded from environment

    Raises:
        ZulipConfigurationError: A required variable is missing
    """
    email = os.getenv('ZULIP_EMAIL', '')
    api_key = os.getenv('ZULIP_API_KEY', '')
    realm_url = os.getenv('ZULIP_REALM_URL') or os.getenv('ZULIP_SITE', '')

    timeout = DEFAULT_TIMEOUT
    if timeout_val := os.getenv('ZULIP_TIMEOUT'):
        try:
            timeout = float(timeout_val)
        except ValueError:
            logger.warning(f"Invalid timeout value: {timeout_val}, using default: {timeout}")

    log_level = (os.getenv('ZULIP_LOG_LEVEL') or 'INFO').upper()

    return ZulipConfig(
        email=email,
        api_key=api_key,
        realm_url=realm_url.rstrip('/'),
        timeout=timeout,
        user_agent=os.getenv('ZULIP_USER_AGENT') or DEFAULT_USER_AGENT,
        log_level=log_level,
    )


def env_config_available() -> bool:
    """Check whether the environment holds a complete account configuration."""
    try:
        load_config_from_env()
    except ZulipConfigurationError:
        return False
    return True
