"""
Configuration module for alchemy-http.
"""

import os
from typing import Dict

from pydantic import BaseModel, Field, field_validator

from .__version__ import __version__

# Seconds. Used whenever a caller omits the timeout argument.
DEFAULT_TIMEOUT = 30.0

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in _TRUTHY


class ExecutorConfig(BaseModel):
    """
    Executor configuration.

    Supports environment variables through ``from_env``:
    - ALCHEMY_HTTP_USER_AGENT: User-Agent header (default: alchemy-http/<version>)
    - ALCHEMY_HTTP_VERIFY_SSL: Verify TLS certificates (default: true)
    - ALCHEMY_HTTP_DEBUG: Enable debug logging (default: false)
    """

    user_agent: str = Field(f"alchemy-http/{__version__}", description="User-Agent header")
    default_headers: Dict[str, str] = Field(
        default_factory=dict, description="Headers sent unless the request overrides them"
    )
    verify_ssl: bool = Field(True, description="Verify SSL certificates")
    debug: bool = Field(False, description="Enable debug logging")

    @field_validator("default_headers")
    @classmethod
    def validate_default_headers(cls, v):
        for key in v:
            if not key or not key.strip():
                raise ValueError("Header name must not be empty")
        return v

    @classmethod
    def from_env(cls) -> "ExecutorConfig":
        """Build a configuration from ALCHEMY_HTTP_* environment variables."""
        return cls(
            user_agent=os.getenv("ALCHEMY_HTTP_USER_AGENT") or f"alchemy-http/{__version__}",
            verify_ssl=_env_flag("ALCHEMY_HTTP_VERIFY_SSL", True),
            debug=_env_flag("ALCHEMY_HTTP_DEBUG", False),
        )

    def base_headers(self) -> Dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        headers.update(self.default_headers)
        return headers
