"""
alchemy-http Data Models
"""

import enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HttpVerb(str, enum.Enum):
    """HTTP method an executor is bound to"""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value: Any) -> "HttpVerb":
        """
        Resolve a verb from an ``HttpVerb`` or a case-insensitive name.

        Raises:
            ValueError: If the value is not a known verb
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise ValueError(f"Unknown HTTP verb: {value!r}")


class HttpRequest(BaseModel):
    """Fully formed request handed to an executor"""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Target URL")
    headers: Dict[str, str] = Field(default_factory=dict, description="Request headers")
    query_params: Dict[str, str] = Field(
        default_factory=dict, description="Query string parameters"
    )
    body: Any = Field(None, description="Request body, None for no body")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        if not v or not v.strip():
            raise ValueError("URL must not be empty")
        return v.strip()

    @field_validator("headers")
    @classmethod
    def validate_headers(cls, v):
        for key in v:
            if not key:
                raise ValueError("Header name must not be empty")
        return v

    @property
    def has_body(self) -> bool:
        return self.body is not None

    def with_header(self, key: str, value: Optional[str]) -> "HttpRequest":
        """Return a copy with ``key`` set; a ``None`` value is sent as an empty header."""
        if not key:
            raise ValueError("missing key")
        headers = dict(self.headers)
        headers[key] = value if value is not None else ""
        return self.model_copy(update={"headers": headers})

    def with_headers(self, headers: Dict[str, str]) -> "HttpRequest":
        """Return a copy whose headers are replaced by ``headers``."""
        if not headers:
            raise ValueError("headers must not be empty")
        return self.model_copy(update={"headers": dict(headers)})

    def with_query_params(self, query_params: Dict[str, str]) -> "HttpRequest":
        return self.model_copy(update={"query_params": dict(query_params)})

    def with_body(self, body: Any) -> "HttpRequest":
        return self.model_copy(update={"body": body})


class HttpResponse(BaseModel):
    """Result of a completed HTTP exchange"""

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Any = None
    raw_body: bytes = b""

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default

    @property
    def content_type(self) -> Optional[str]:
        return self.header("Content-Type")

    @property
    def is_ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.raw_body.decode("utf-8", errors="replace")
