"""Error response schemas.

All error responses use the same envelope:
{"error": {"code": 3, "name": "UNKNOWN_TOPIC_OR_PARTITION", "message": "..."}}.
Exception handlers in main.py construct these from an ErrorResult.
"""

from pydantic import BaseModel

from apierror.result import ErrorResult


class ErrorDetail(BaseModel):
    """Inner error object with the numeric code, kind name and human-readable message."""

    code: int
    name: str
    message: str


class ErrorResponse(BaseModel):
    """Top-level error envelope returned by all error responses."""

    error: ErrorDetail

    @classmethod
    def from_result(cls, result: ErrorResult) -> "ErrorResponse":
        """Render a result, substituting the kind's default message when none is set."""
        return cls(
            error=ErrorDetail(
                code=result.kind.code,
                name=result.kind.name,
                message=result.message_with_fallback,
            )
        )


class ErrorKindResponse(BaseModel):
    """One entry of the error catalog."""

    model_config = {"from_attributes": True}

    code: int
    name: str
    default_message: str
    retriable: bool
    http_status: int


class ErrorResultResponse(BaseModel):
    """How a numeric code resolves, as a client would decode it."""

    code: int
    name: str
    message: str
    success: bool

    @classmethod
    def from_result(cls, result: ErrorResult) -> "ErrorResultResponse":
        return cls(
            code=result.kind.code,
            name=result.kind.name,
            message=result.message_with_fallback,
            success=result.is_success,
        )


class RaiseErrorRequest(BaseModel):
    """Body of POST /errors/{code}/raise. A null message means the default message."""

    message: str | None = None
