"""
Pytest configuration and fixtures
"""

import socket
import threading
from typing import Any, Dict, List, Optional, Tuple

import pytest

from alchemy_http.config import DEFAULT_TIMEOUT
from alchemy_http.http.adapter import HTTPAdapter


class DummyAdapter(HTTPAdapter):
    """Mock HTTP adapter for testing."""

    def __init__(self):
        self.requests: List[Dict[str, Any]] = []
        self.response_data = b'{"id":"item_1","name":"widget"}'
        self.response_status = 200
        self.response_headers = {"Content-Type": "application/json", "X-Request-Id": "req_test_123"}
        self.error: Optional[BaseException] = None

    @property
    def last_request(self) -> Optional[Dict[str, Any]]:
        return self.requests[-1] if self.requests else None

    def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[bytes] = None,
        params: Optional[Dict[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Tuple[int, bytes, Dict[str, str]]:
        """Mock send method."""
        self.requests.append(
            {
                "method": method,
                "url": url,
                "headers": headers,
                "data": data,
                "params": params,
                "timeout": timeout,
            }
        )
        if self.error is not None:
            raise self.error
        return self.response_status, self.response_data, self.response_headers


@pytest.fixture
def adapter():
    """Create dummy adapter fixture"""
    return DummyAdapter()


@pytest.fixture
def closed_port():
    """A localhost port with nothing listening on it"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


class TrickleServer:
    """Local HTTP server that answers slowly, one body byte at a time."""

    def __init__(self, body: bytes, header_delay: float = 0.0, byte_interval: float = 0.0):
        self.body = body
        self.header_delay = header_delay
        self.byte_interval = byte_interval
        self._stop = threading.Event()
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(5)
        self._sock.settimeout(0.1)
        self.port = self._sock.getsockname()[1]
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def url(self, path: str = "/items") -> str:
        return f"http://127.0.0.1:{self.port}{path}"

    def close(self) -> None:
        self._stop.set()
        self._thread.join(1)
        self._sock.close()

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            threading.Thread(target=self._respond, args=(conn,), daemon=True).start()

    def _respond(self, conn: socket.socket) -> None:
        with conn:
            try:
                conn.recv(65536)
                if self._stop.wait(self.header_delay):
                    return
                conn.sendall(
                    b"HTTP/1.1 200 OK\r\n"
                    b"Content-Type: application/json\r\n"
                    b"Content-Length: %d\r\n"
                    b"Connection: close\r\n\r\n" % len(self.body)
                )
                for i in range(len(self.body)):
                    if self.byte_interval and self._stop.wait(self.byte_interval):
                        return
                    conn.sendall(self.body[i:i + 1])
            except OSError:
                # client hung up
                return


@pytest.fixture
def trickle_server():
    """Factory for slow local HTTP servers, stopped after the test"""
    servers: List[TrickleServer] = []

    def start(body: bytes = b'{"id": "item_1"}', header_delay: float = 0.0, byte_interval: float = 0.0):
        server = TrickleServer(body, header_delay=header_delay, byte_interval=byte_interval)
        servers.append(server)
        return server

    yield start
    for server in servers:
        server.close()
