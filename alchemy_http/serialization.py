"""
Body serialization for alchemy-http.

Executors do not own a serializer; callers pass one per call so different
encodings can be used side by side.
"""

import json
from typing import Any, Optional, Protocol, runtime_checkable


def media_type(content_type: Optional[str]) -> str:
    """
    Strip parameters from a Content-Type header value.

    Example:
        >>> media_type("application/json; charset=utf-8")
        'application/json'
    """
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


@runtime_checkable
class Serializer(Protocol):
    """Encode request bodies and decode response bodies."""

    content_type: str

    def accepts(self, content_type: Optional[str]) -> bool:
        ...

    def encode(self, value: Any) -> bytes:
        ...

    def decode(self, data: bytes) -> Any:
        ...


class JsonSerializer:
    """
    JSON serializer backed by the standard ``json`` module.

    Accepts ``application/json`` and any structured ``+json`` media type.
    """

    content_type = "application/json"

    def __init__(self, encoding: str = "utf-8", **dumps_kwargs: Any):
        """
        Initialize JSON serializer.

        Args:
            encoding: Encoding for outgoing bodies
            dumps_kwargs: Extra keyword arguments for ``json.dumps``
        """
        self.encoding = encoding
        self.dumps_kwargs = dumps_kwargs

    def accepts(self, content_type: Optional[str]) -> bool:
        mt = media_type(content_type)
        return mt == "application/json" or mt.endswith("+json")

    def encode(self, value: Any) -> bytes:
        return json.dumps(value, **self.dumps_kwargs).encode(self.encoding)

    def decode(self, data: bytes) -> Any:
        # json.loads detects utf-8/16/32 on bytes input
        return json.loads(data)

    def __repr__(self) -> str:
        return f"JsonSerializer(encoding={self.encoding!r})"


class RawSerializer:
    """
    Pass-through serializer: bodies stay bytes in both directions.

    Useful when the caller wants the untouched response bytes.
    """

    def __init__(self, content_type: str = "application/octet-stream"):
        self.content_type = content_type

    def accepts(self, content_type: Optional[str]) -> bool:
        return False

    def encode(self, value: Any) -> bytes:
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        raise TypeError(f"RawSerializer can only send bytes, got {type(value).__name__}")

    def decode(self, data: bytes) -> Any:
        return data
