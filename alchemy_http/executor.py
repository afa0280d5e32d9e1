"""
Verb-bound HTTP executors.

An executor performs exactly one HTTP exchange per ``execute`` call using the
verb it was constructed with. It holds no per-call state, so one instance can
be shared freely between threads.
"""

import functools
import logging
import math
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple, Union

from .config import DEFAULT_TIMEOUT, ExecutorConfig
from .exceptions import (
    DecodeError,
    ExecutionFailure,
    InternalError,
    TimeoutError as HttpTimeoutError,
)
from .http.adapter import HTTPAdapter
from .http.requests_adapter import RequestsAdapter
from .logging_setup import sanitize_headers, setup_structured_logger
from .metrics import record_execution
from .models import HttpRequest, HttpResponse, HttpVerb
from .result import ExecutionResult
from .serialization import Serializer, media_type

logger = logging.getLogger("alchemy_http.executor")

VerbLike = Union[HttpVerb, str]


def check_arguments(request: Any, serialization: Any, timeout: Any) -> None:
    """
    Reject programming errors before any I/O happens.

    Raises:
        ValueError: On a missing request/serializer or a bad timeout
    """
    if request is None:
        raise ValueError("missing request")
    if not isinstance(request, HttpRequest):
        raise ValueError(f"request must be an HttpRequest, got {type(request).__name__}")
    if serialization is None:
        raise ValueError("missing serialization")
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ValueError(f"timeout must be a number of seconds, got {timeout!r}")
    if not math.isfinite(timeout):
        raise ValueError(f"timeout must be finite, got {timeout!r}")
    if timeout < 0:
        raise ValueError(f"timeout must be non-negative, got {timeout!r}")


def prepare_request(
    request: HttpRequest,
    serialization: Serializer,
    config: ExecutorConfig,
) -> Tuple[Dict[str, str], Optional[bytes]]:
    """
    Build the wire headers and body for ``request``.

    Config headers are applied first so the request's own headers win.

    Raises:
        InternalError: If the serializer cannot encode the body
    """
    headers = config.base_headers()
    headers.update(request.headers)
    present = {key.lower() for key in headers}

    if "accept" not in present:
        headers["Accept"] = serialization.content_type

    body = request.body
    if body is None:
        return headers, None
    if isinstance(body, (bytes, bytearray)):
        return headers, bytes(body)
    if isinstance(body, str):
        return headers, body.encode("utf-8")

    try:
        data = serialization.encode(body)
    except Exception as e:
        raise InternalError(f"Could not encode request body: {e}", cause=e) from e

    if "content-type" not in present:
        headers["Content-Type"] = serialization.content_type
    return headers, data


def build_response(
    status_code: int,
    raw_body: bytes,
    headers: Dict[str, str],
    serialization: Serializer,
) -> HttpResponse:
    """
    Decode the body when the serializer accepts the response's content type.

    Raises:
        DecodeError: If the body cannot be decoded; the raw bytes are kept
    """
    raw_body = raw_body or b""
    response = HttpResponse(status_code=status_code, headers=headers, raw_body=raw_body)

    if not raw_body:
        return response

    content_type = response.content_type
    if not serialization.accepts(content_type):
        return response.model_copy(update={"body": raw_body})

    try:
        body = serialization.decode(raw_body)
    except Exception as e:
        raise DecodeError(
            f"Could not decode {media_type(content_type)} response body: {e}",
            cause=e,
            response=response,
        ) from e

    return response.model_copy(update={"body": body})


def finish(verb: HttpVerb, request: HttpRequest, result: ExecutionResult, start: float) -> None:
    """Log and record metrics for a completed call."""
    latency = time.monotonic() - start
    if result.ok:
        logger.debug(
            "Response %s %s -> %d in %.3fs",
            verb.value,
            request.url,
            result.response.status_code,
            latency,
            extra={"verb": verb.value, "url": request.url, "status_code": result.response.status_code},
        )
        record_execution(verb.value, "ok", latency)
    else:
        kind = result.failure.kind.value
        logger.warning(
            "%s %s failed (%s): %s",
            verb.value,
            request.url,
            kind,
            result.failure.message,
            extra={"verb": verb.value, "url": request.url, "failure_kind": kind},
        )
        record_execution(verb.value, kind, latency)


class HttpExecutor(ABC):
    """
    Contract for performing one HTTP exchange with a fixed verb.

    Examples:
        >>> from alchemy_http import GET, HttpRequest, JsonSerializer
        >>> result = GET.execute(HttpRequest(url="https://httpbin.org/json"), JsonSerializer())
        >>> result.unwrap().body
    """

    @property
    @abstractmethod
    def verb(self) -> HttpVerb:
        raise NotImplementedError

    @abstractmethod
    def execute(
        self,
        request: HttpRequest,
        serialization: Serializer,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> ExecutionResult:
        """
        Perform one HTTP exchange.

        Args:
            request: Fully formed request
            serialization: Encoder/decoder for the bodies of this call
            timeout: Bound on the whole call, in seconds

        Returns:
            ExecutionResult holding a response or a typed failure

        Raises:
            ValueError: On a missing request/serializer or a negative timeout
        """
        raise NotImplementedError


class HttpExecutorImpl(HttpExecutor):
    """
    Executor backed by a synchronous ``HTTPAdapter``.

    Features:
    - No retries, every failure is reported to the caller
    - Pluggable HTTP adapter
    - Request/response logging and Prometheus metrics
    """

    def __init__(
        self,
        verb: VerbLike,
        adapter: Optional[HTTPAdapter] = None,
        config: Optional[ExecutorConfig] = None,
    ):
        """
        Initialize executor.

        Args:
            verb: HTTP verb this executor is bound to
            adapter: Optional custom HTTP adapter
            config: Executor configuration
        """
        self._verb = HttpVerb.parse(verb)
        self.config = config or ExecutorConfig()
        self.http = adapter or RequestsAdapter(verify_ssl=self.config.verify_ssl)

        if self.config.debug:
            setup_structured_logger(logging.DEBUG)

    @classmethod
    def using(cls, verb: VerbLike) -> "HttpExecutorImpl":
        return cls(verb)

    @property
    def verb(self) -> HttpVerb:
        return self._verb

    def execute(
        self,
        request: HttpRequest,
        serialization: Serializer,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> ExecutionResult:
        check_arguments(request, serialization, timeout)
        start = time.monotonic()

        try:
            response = self._exchange(request, serialization, timeout)
        except ExecutionFailure as failure:
            result = ExecutionResult.failed(failure)
        except Exception as e:
            result = ExecutionResult.failed(InternalError(f"Unexpected error: {e}", cause=e))
        else:
            result = ExecutionResult.success(response)

        finish(self._verb, request, result, start)
        return result

    def _exchange(
        self,
        request: HttpRequest,
        serialization: Serializer,
        timeout: float,
    ) -> HttpResponse:
        if not isinstance(self._verb, HttpVerb):
            raise InternalError(f"Executor has an invalid verb: {self._verb!r}")
        if timeout == 0:
            raise HttpTimeoutError(f"Request timed out: timeout of 0s for {request.url}")

        headers, data = prepare_request(request, serialization, self.config)

        logger.debug(
            "Request %s %s headers=%s",
            self._verb.value,
            request.url,
            sanitize_headers(headers),
            extra={"verb": self._verb.value, "url": request.url},
        )

        status, raw_body, resp_headers = self.http.send(
            method=self._verb.value,
            url=request.url,
            headers=headers,
            data=data,
            params=dict(request.query_params),
            timeout=timeout,
        )

        return build_response(status, raw_body, resp_headers, serialization)

    def __repr__(self) -> str:
        return f"HttpExecutorImpl(verb={self._verb.value}, adapter={type(self.http).__name__})"


@functools.lru_cache(maxsize=None)
def _default_executor(verb: HttpVerb) -> HttpExecutor:
    return HttpExecutorImpl.using(verb)


def for_verb(
    verb: VerbLike,
    adapter: Optional[HTTPAdapter] = None,
    config: Optional[ExecutorConfig] = None,
) -> HttpExecutor:
    """
    Get an executor bound to ``verb``.

    Without an adapter or config the shared default executor for that verb is
    returned. Callers should not depend on instance identity.

    Raises:
        ValueError: If ``verb`` is not a known HTTP verb
    """
    verb = HttpVerb.parse(verb)
    if adapter is None and config is None:
        return _default_executor(verb)
    return HttpExecutorImpl(verb, adapter=adapter, config=config)


GET = for_verb(HttpVerb.GET)
POST = for_verb(HttpVerb.POST)
PUT = for_verb(HttpVerb.PUT)
DELETE = for_verb(HttpVerb.DELETE)
