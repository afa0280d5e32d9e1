"""
Base HTTP adapter interface.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from ..config import DEFAULT_TIMEOUT


class HTTPAdapter(ABC):
    """
    Abstract base class for synchronous HTTP adapters.

    An adapter performs the socket-level exchange for an executor. It does not
    interpret status codes or bodies.
    """

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[bytes] = None,
        params: Optional[Dict[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Tuple[int, bytes, Dict[str, str]]:
        """
        Send HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL
            headers: Request headers
            data: Encoded request body
            params: Query string parameters
            timeout: Bound on the whole exchange, in seconds

        Returns:
            Tuple of (status_code, response_bytes, response_headers)

        Raises:
            TransportError: On network connectivity issues
            TimeoutError: When the timeout elapses
        """
        raise NotImplementedError


class AsyncHTTPAdapter(ABC):
    """Abstract base class for asynchronous HTTP adapters."""

    @abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[bytes] = None,
        params: Optional[Dict[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Tuple[int, bytes, Dict[str, str]]:
        """Async counterpart of ``HTTPAdapter.send``."""
        raise NotImplementedError
