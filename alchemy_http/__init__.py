"""
alchemy-http

Verb-bound HTTP executors with pluggable transports and per-call serialization.
"""

from .__version__ import __version__
from .config import DEFAULT_TIMEOUT, ExecutorConfig
from .models import HttpVerb, HttpRequest, HttpResponse
from .serialization import Serializer, JsonSerializer, RawSerializer
from .exceptions import (
    AlchemyHttpError,
    ExecutionFailure,
    FailureKind,
    TransportError,
    TimeoutError,
    DecodeError,
    InternalError,
)
from .result import ExecutionResult
from .executor import HttpExecutor, HttpExecutorImpl, for_verb, GET, POST, PUT, DELETE
from .async_executor import AsyncHttpExecutor, AsyncHttpExecutorImpl, for_verb_async
from .download import download

__all__ = [
    "DEFAULT_TIMEOUT",
    "ExecutorConfig",
    "HttpVerb",
    "HttpRequest",
    "HttpResponse",
    "Serializer",
    "JsonSerializer",
    "RawSerializer",
    "AlchemyHttpError",
    "ExecutionFailure",
    "FailureKind",
    "TransportError",
    "TimeoutError",
    "DecodeError",
    "InternalError",
    "ExecutionResult",
    "HttpExecutor",
    "HttpExecutorImpl",
    "for_verb",
    "GET",
    "POST",
    "PUT",
    "DELETE",
    "AsyncHttpExecutor",
    "AsyncHttpExecutorImpl",
    "for_verb_async",
    "download",
    "__version__",
]
