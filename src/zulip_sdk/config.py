"""
Configuration for the Zulip SDK.

A single immutable configuration object describes which realm to talk to
and which account to authenticate as. Every REST API module receives the
same instance from the client and only reads from it.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .errors import ZulipConfigurationError

API_PATH = '/api/v1'
DEFAULT_TIMEOUT = 30.0
# Zulip holds an idle long-poll open until its heartbeat, roughly a minute
LONG_POLL_TIMEOUT = 90.0
DEFAULT_USER_AGENT = 'zulip-python-sdk/1.0.0'


@dataclass(frozen=True)
class ZulipConfig:
    """Account and realm settings used by every request."""
    email: str
    api_key: str
    realm_url: str
    timeout: float = DEFAULT_TIMEOUT  # seconds
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = 'INFO'

    def __post_init__(self) -> None:
        missing = [
            name for name in ('email', 'api_key', 'realm_url')
            if not getattr(self, name)
        ]
        if missing:
            raise ZulipConfigurationError(
                f"Missing required configuration: {', '.join(missing)}",
                details={'missing': missing}
            )
        if self.timeout <= 0:
            raise ZulipConfigurationError(
                f"Timeout must be positive, got {self.timeout}"
            )

    @property
    def api_url(self) -> str:
        """Base URL of the REST API, e.g. ``https://chat.example.com/api/v1``."""
        return f"{self.realm_url.rstrip('/')}{API_PATH}"

    def endpoint_url(self, path: str) -> str:
        """Join an endpoint path onto the API URL."""
        return f"{self.api_url}{path if path.startswith('/') else '/' + path}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary, leaving out the API key."""
        return {
            'email': self.email,
            'realm_url': self.realm_url,
            'api_url': self.api_url,
            'timeout': self.timeout,
            'user_agent': self.user_agent,
            'log_level': self.log_level,
        }
