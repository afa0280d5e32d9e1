"""
Aiohttp-based HTTP adapter (asynchronous).
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

import aiohttp

from .adapter import AsyncHTTPAdapter
from ..config import DEFAULT_TIMEOUT
from ..exceptions import TransportError, TimeoutError as HttpTimeoutError

logger = logging.getLogger("alchemy_http.http.aiohttp")


class AiohttpAdapter(AsyncHTTPAdapter):
    """
    Asynchronous HTTP adapter using aiohttp library.

    Features:
    - Non-blocking requests for async applications
    - Whole-exchange timeout
    - Per-call session unless the caller supplies one
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        verify_ssl: bool = True,
    ):
        """
        Initialize aiohttp adapter.

        Args:
            session: Optional aiohttp.ClientSession owned by the caller; never closed here
            verify_ssl: Verify TLS certificates
        """
        self.session = session
        self.verify_ssl = verify_ssl

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[bytes] = None,
        params: Optional[Dict[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Tuple[int, bytes, Dict[str, str]]:
        """
        Send HTTP request using aiohttp library.

        Args:
            method: HTTP method
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
        if timeout <= 0:
            raise HttpTimeoutError(f"Request timed out: no time left for {method} {url}")

        timeout_obj = aiohttp.ClientTimeout(total=timeout)
        request_kwargs: Dict[str, Any] = {
            "headers": headers,
            "params": params or None,
            "data": data,
            "timeout": timeout_obj,
        }
        if not self.verify_ssl:
            request_kwargs["ssl"] = False

        try:
            if self.session is not None:
                return await asyncio.wait_for(
                    self._exchange(self.session, method, url, request_kwargs), timeout
                )
            async with aiohttp.ClientSession() as session:
                return await asyncio.wait_for(
                    self._exchange(session, method, url, request_kwargs), timeout
                )

        except asyncio.TimeoutError as e:
            raise HttpTimeoutError(f"Request timed out after {timeout}s", cause=e) from e

        except aiohttp.ClientError as e:
            raise TransportError(f"Network request failed: {e}", cause=e) from e

    @staticmethod
    async def _exchange(
        session: aiohttp.ClientSession,
        method: str,
        url: str,
        request_kwargs: Dict[str, Any],
    ) -> Tuple[int, bytes, Dict[str, str]]:
        async with session.request(method, url, **request_kwargs) as response:
            body = await response.read()
            logger.debug("%s %s -> %d (%d bytes)", method, url, response.status, len(body))
            return (
                response.status,
                body,
                dict(response.headers),
            )
