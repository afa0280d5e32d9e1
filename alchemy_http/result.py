"""
Outcome of a single executor call.
"""

from typing import Optional

from .exceptions import ExecutionFailure, FailureKind
from .models import HttpResponse


class ExecutionResult:
    """
    Either a response or a typed failure, never both.

    Examples:
        >>> result = GET.execute(HttpRequest(url="https://example.com"), JsonSerializer())
        >>> if result.ok:
        ...     print(result.response.status_code)
        ... else:
        ...     print(result.failure.kind)
    """

    __slots__ = ("_response", "_failure")

    def __init__(
        self,
        response: Optional[HttpResponse] = None,
        failure: Optional[ExecutionFailure] = None,
    ):
        if (response is None) == (failure is None):
            raise ValueError("ExecutionResult needs exactly one of response or failure")
        self._response = response
        self._failure = failure

    @classmethod
    def success(cls, response: HttpResponse) -> "ExecutionResult":
        return cls(response=response)

    @classmethod
    def failed(cls, failure: ExecutionFailure) -> "ExecutionResult":
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self._failure is None

    @property
    def response(self) -> Optional[HttpResponse]:
        return self._response

    @property
    def failure(self) -> Optional[ExecutionFailure]:
        return self._failure

    @property
    def failure_kind(self) -> Optional[FailureKind]:
        return self._failure.kind if self._failure is not None else None

    def unwrap(self) -> HttpResponse:
        """
        Return the response or raise the failure.

        Raises:
            ExecutionFailure: If the exchange failed
        """
        if self._failure is not None:
            raise self._failure
        return self._response

    def __bool__(self) -> bool:
        return self.ok

    def __repr__(self) -> str:
        if self._failure is not None:
            return f"ExecutionResult(failure={self._failure!r})"
        return f"ExecutionResult(status_code={self._response.status_code})"
