"""
Requests-based HTTP adapter (synchronous).
"""

import logging
import socket
import threading
import time
from typing import Dict, Optional, Tuple

import requests
from urllib3.util import Timeout

from .adapter import HTTPAdapter
from ..config import DEFAULT_TIMEOUT
from ..exceptions import TransportError, TimeoutError as HttpTimeoutError

logger = logging.getLogger("alchemy_http.http.requests")

CHUNK_SIZE = 8192


def _socket_of(response: requests.Response) -> Optional[socket.socket]:
    raw = response.raw
    conn = getattr(raw, "connection", None) or getattr(raw, "_connection", None)
    sock = getattr(conn, "sock", None)
    if sock is None:
        fp = getattr(getattr(raw, "_fp", None), "fp", None)
        sock = getattr(getattr(fp, "raw", None), "_sock", None)
    return sock


def _abort(response: requests.Response, expired: threading.Event) -> None:
    """Interrupt a body read that outlived its deadline."""
    expired.set()
    sock = _socket_of(response)
    if sock is None:
        response.close()
        return
    try:
        # wakes a recv blocked in the calling thread
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        pass  # already closed by the peer


class RequestsAdapter(HTTPAdapter):
    """
    Synchronous HTTP adapter using requests library.

    Features:
    - Whole-exchange timeout (connect, headers and body share one deadline)
    - Body reads interrupted at the deadline, however slowly the peer sends
    - Per-call session, closed on every exit path
    - Optional caller-owned session for connection pooling
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        verify_ssl: bool = True,
    ):
        """
        Initialize requests adapter.

        Args:
            session: Optional requests.Session owned by the caller; never closed here
            verify_ssl: Verify TLS certificates
        """
        self.session = session
        self.verify_ssl = verify_ssl

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
        Send HTTP request using requests library.

        The connect and header phases run under a urllib3 ``Timeout(total=...)``
        so together they cannot exceed ``timeout``. The body is then streamed
        under a timer that shuts the socket down once the deadline passes.

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

        deadline = time.monotonic() + timeout
        session = self.session if self.session is not None else requests.Session()

        try:
            with session.request(
                method=method,
                url=url,
                headers=headers,
                params=params or None,
                data=data,
                timeout=Timeout(total=timeout),
                verify=self.verify_ssl,
                stream=True,
            ) as response:
                body = self._read_body(response, deadline, timeout)
                logger.debug("%s %s -> %d (%d bytes)", method, url, response.status_code, len(body))
                return (
                    response.status_code,
                    body,
                    dict(response.headers),
                )

        except requests.exceptions.Timeout as e:
            raise HttpTimeoutError(f"Request timed out: {e}", cause=e) from e

        except requests.exceptions.RequestException as e:
            # read timeouts while streaming surface as ConnectionError
            if time.monotonic() >= deadline:
                raise HttpTimeoutError(f"Request timed out: {e}", cause=e) from e
            raise TransportError(f"Network request failed: {e}", cause=e) from e

        finally:
            if session is not self.session:
                session.close()

    @staticmethod
    def _read_body(response: requests.Response, deadline: float, timeout: float) -> bytes:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise HttpTimeoutError(f"Request timed out after {timeout}s waiting for the response")

        expired = threading.Event()
        timer = threading.Timer(remaining, _abort, args=(response, expired))
        timer.daemon = True
        timer.start()

        chunks = []
        try:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                chunks.append(chunk)
        except Exception as e:
            if expired.is_set():
                raise HttpTimeoutError(
                    f"Request timed out after {timeout}s while reading the response body",
                    cause=e,
                    raw_body=b"".join(chunks),
                ) from e
            raise
        finally:
            timer.cancel()

        # a shutdown socket ends an unsized body early instead of failing
        if expired.is_set() or time.monotonic() > deadline:
            raise HttpTimeoutError(
                f"Request timed out after {timeout}s while reading the response body",
                raw_body=b"".join(chunks),
            )
        return b"".join(chunks)
