"""
Asynchronous verb-bound HTTP executors.

Same contract as ``alchemy_http.executor`` but ``execute`` is a coroutine, so a
slow exchange suspends the task instead of blocking the thread.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

from .config import DEFAULT_TIMEOUT, ExecutorConfig
from .exceptions import (
    ExecutionFailure,
    InternalError,
    TimeoutError as HttpTimeoutError,
)
from .executor import VerbLike, build_response, check_arguments, finish, prepare_request
from .http.adapter import AsyncHTTPAdapter
from .http.aiohttp_adapter import AiohttpAdapter
from .logging_setup import sanitize_headers, setup_structured_logger
from .models import HttpRequest, HttpResponse, HttpVerb
from .result import ExecutionResult
from .serialization import Serializer

logger = logging.getLogger("alchemy_http.async_executor")


class AsyncHttpExecutor(ABC):
    """
    Async contract for performing one HTTP exchange with a fixed verb.

    Examples:
        >>> import asyncio
        >>> from alchemy_http import HttpRequest, JsonSerializer, for_verb_async
        >>>
        >>> async def main():
        ...     result = await for_verb_async("GET").execute(
        ...         HttpRequest(url="https://httpbin.org/json"), JsonSerializer()
        ...     )
        ...     print(result.unwrap().body)
        >>>
        >>> asyncio.run(main())
    """

    @property
    @abstractmethod
    def verb(self) -> HttpVerb:
        raise NotImplementedError

    @abstractmethod
    async def execute(
        self,
        request: HttpRequest,
        serialization: Serializer,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> ExecutionResult:
        raise NotImplementedError


class AsyncHttpExecutorImpl(AsyncHttpExecutor):
    """Executor backed by an ``AsyncHTTPAdapter`` (aiohttp by default)."""

    def __init__(
        self,
        verb: VerbLike,
        adapter: Optional[AsyncHTTPAdapter] = None,
        config: Optional[ExecutorConfig] = None,
    ):
        """
        Initialize async executor.

        Args:
            verb: HTTP verb this executor is bound to
            adapter: Optional custom async HTTP adapter
            config: Executor configuration
        """
        self._verb = HttpVerb.parse(verb)
        self.config = config or ExecutorConfig()
        self.http = adapter or AiohttpAdapter(verify_ssl=self.config.verify_ssl)

        if self.config.debug:
            setup_structured_logger(logging.DEBUG)

    @property
    def verb(self) -> HttpVerb:
        return self._verb

    async def execute(
        self,
        request: HttpRequest,
        serialization: Serializer,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> ExecutionResult:
        check_arguments(request, serialization, timeout)
        start = time.monotonic()

        try:
            response = await self._exchange(request, serialization, timeout)
        except ExecutionFailure as failure:
            result = ExecutionResult.failed(failure)
        except Exception as e:
            result = ExecutionResult.failed(InternalError(f"Unexpected error: {e}", cause=e))
        else:
            result = ExecutionResult.success(response)

        finish(self._verb, request, result, start)
        return result

    async def _exchange(
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
            "Async Request %s %s headers=%s",
            self._verb.value,
            request.url,
            sanitize_headers(headers),
            extra={"verb": self._verb.value, "url": request.url},
        )

        try:
            status, raw_body, resp_headers = await asyncio.wait_for(
                self.http.send(
                    method=self._verb.value,
                    url=request.url,
                    headers=headers,
                    data=data,
                    params=dict(request.query_params),
                    timeout=timeout,
                ),
                timeout,
            )
        except asyncio.TimeoutError as e:
            raise HttpTimeoutError(f"Request timed out after {timeout}s", cause=e) from e

        return build_response(status, raw_body, resp_headers, serialization)

    def __repr__(self) -> str:
        return f"AsyncHttpExecutorImpl(verb={self._verb.value}, adapter={type(self.http).__name__})"


def for_verb_async(
    verb: VerbLike,
    adapter: Optional[AsyncHTTPAdapter] = None,
    config: Optional[ExecutorConfig] = None,
) -> AsyncHttpExecutor:
    """
    Get an async executor bound to ``verb``.

    Raises:
        ValueError: If ``verb`` is not a known HTTP verb
    """
    return AsyncHttpExecutorImpl(verb, adapter=adapter, config=config)
