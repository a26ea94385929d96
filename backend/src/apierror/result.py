"""ErrorResult: a classified ErrorKind plus an optional message.

The message is only set when it adds information over the kind's default
message. Request handlers build one when an operation concludes and either
return it, log it, or turn it back into an exception with to_exception().

Usage:
    result = ErrorResult.from_exception(exc)
    if result.is_failure:
        logger.warning("request_failed", error=result)
        return ErrorResponse.from_result(result)
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from apierror.exceptions import ApiError
from apierror.kinds import ErrorKind


def unwrap_exception(exc: BaseException) -> BaseException:
    """Strip exception groups that only carry a single failure.

    asyncio.TaskGroup wraps a lone task failure in an ExceptionGroup. The
    group adds nothing, and classifying it directly would report a
    deterministic failure as UNKNOWN_SERVER_ERROR.
    """
    while isinstance(exc, BaseExceptionGroup) and len(exc.exceptions) == 1:
        exc = exc.exceptions[0]
    return exc


def should_suppress(kind: ErrorKind, raw_message: str | None) -> bool:
    """Decide whether an exception's own message is dropped from the result.

    UNKNOWN_SERVER_ERROR never carries the exception text, which may contain
    internal details. A message identical to the kind's default adds nothing.
    The comparison is exact: a reworded default message stops matching.
    """
    return kind is ErrorKind.UNKNOWN_SERVER_ERROR or raw_message == kind.default_message


@dataclass(frozen=True, slots=True)
class ErrorResult:
    """Immutable (kind, message) pair with structural equality and hashing.

    The factories hand back the shared ErrorResult.NONE for success, but the
    plain constructor does not: ``ErrorResult(ErrorKind.NONE, None)`` equals
    ErrorResult.NONE without being the same object. Test for success with
    ``is_success`` or ``==``, never with ``is``.

    Attributes:
        kind: The classified failure, ErrorKind.NONE on success.
        message: Extra detail, or None to fall back to kind.default_message.
    """

    NONE: ClassVar["ErrorResult"]

    kind: ErrorKind
    message: str | None = None

    @classmethod
    def of(cls, kind: ErrorKind) -> "ErrorResult":
        """Result whose message is the kind's default message."""
        return cls(kind, kind.default_message)

    @classmethod
    def for_code(cls, code: int, message: str | None = None) -> "ErrorResult":
        """Resolve a numeric code; unknown codes become UNKNOWN_SERVER_ERROR."""
        return cls._shared(ErrorKind.for_code(code), message)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorResult":
        """Classify a caught exception.

        The exception is not retained; only its kind and message are kept.
        """
        exc = unwrap_exception(exc)
        kind = ErrorKind.for_exception(exc)
        raw_message = exc.message if isinstance(exc, ApiError) else (str(exc) or None)
        message = None if should_suppress(kind, raw_message) else raw_message
        return cls._shared(kind, message)

    @classmethod
    def _shared(cls, kind: ErrorKind, message: str | None) -> "ErrorResult":
        if kind is ErrorKind.NONE and message is None:
            return cls.NONE
        return cls(kind, message)

    def is_kind(self, kind: ErrorKind) -> bool:
        return self.kind is kind

    @property
    def is_success(self) -> bool:
        return self.is_kind(ErrorKind.NONE)

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @property
    def message_with_fallback(self) -> str:
        """The message if set, otherwise the kind's default message."""
        if self.message is None:
            return self.kind.default_message
        return self.message

    def to_exception(self) -> ApiError | None:
        """Build the kind's exception carrying this result's message.

        Returns None for a success result.
        """
        return self.kind.to_exception(self.message)

    def __str__(self) -> str:
        return f"ErrorResult(kind={self.kind.name}, message={self.message})"

    def __structlog__(self) -> dict[str, Any]:
        return {"code": self.kind.code, "kind": self.kind.name, "message": self.message}


ErrorResult.NONE = ErrorResult(ErrorKind.NONE, None)
