"""
Exception classes for alchemy-http.
"""

import enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import HttpResponse


class AlchemyHttpError(Exception):
    """Base exception for all alchemy-http errors."""

    pass


class FailureKind(str, enum.Enum):
    """Why an HTTP exchange could not be completed."""

    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    DECODE = "decode"
    INTERNAL = "internal"


class ExecutionFailure(AlchemyHttpError):
    """
    Typed failure of a single HTTP exchange.

    Raised by transport adapters and carried inside a failed
    ``ExecutionResult`` by the executors.
    """

    kind = FailureKind.INTERNAL

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        response: Optional["HttpResponse"] = None,
        raw_body: Optional[bytes] = None,
    ):
        """
        Initialize execution failure.

        Args:
            message: Error message
            cause: Underlying exception, if any
            response: Partial response received before the failure
            raw_body: Raw response bytes received before the failure
        """
        super().__init__(message)
        self.cause = cause
        self.response = response
        if raw_body is None and response is not None:
            raw_body = response.raw_body
        self.raw_body = raw_body

    @property
    def message(self) -> str:
        return self.args[0] if self.args else ""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"kind={self.kind.value!r}, "
            f"cause={self.cause!r})"
        )


class TransportError(ExecutionFailure):
    """
    Network connectivity error.

    Raised when the remote is unreachable or the connection is refused or reset.
    """

    kind = FailureKind.TRANSPORT


class TimeoutError(ExecutionFailure):
    """
    Request timeout error.

    Raised when the timeout elapses before the exchange completes.
    """

    kind = FailureKind.TIMEOUT


class DecodeError(ExecutionFailure):
    """
    Response decoding error.

    Raised when the response body cannot be read with the supplied serializer.
    The raw bytes stay available on ``raw_body``.
    """

    kind = FailureKind.DECODE


class InternalError(ExecutionFailure):
    """Unexpected condition inside the executor."""

    kind = FailureKind.INTERNAL
