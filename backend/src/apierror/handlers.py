"""Exception handlers that render every failure as the standard error envelope.

Each handler translates the exception with ErrorResult.from_exception, so
the status code and body depend only on the classified kind. Registered in
main.py; RequestIDMiddleware also calls unhandled_exception_handler for
exceptions that no registered handler caught, so those responses still
carry X-Request-ID.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from apierror.exceptions import ApiError
from apierror.kinds import ErrorKind
from apierror.logging import get_logger
from apierror.result import ErrorResult
from apierror.schemas.error import ErrorResponse

logger = get_logger(__name__)


def error_response(result: ErrorResult) -> JSONResponse:
    """Build the standard error envelope with the kind's HTTP status."""
    return JSONResponse(
        status_code=result.kind.http_status,
        content=ErrorResponse.from_result(result).model_dump(),
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Return the classified failure with its code and message."""
    result = ErrorResult.from_exception(exc)
    logger.warning("api_error", error=result, path=request.url.path)
    return error_response(result)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Classify anything else that escaped a handler.

    A single failure wrapped by a TaskGroup still maps to its own kind.
    Unclassified exceptions are logged with their traceback, and the client
    only sees UNKNOWN_SERVER_ERROR's default message.
    """
    result = ErrorResult.from_exception(exc)
    if result.is_kind(ErrorKind.UNKNOWN_SERVER_ERROR):
        logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    else:
        logger.warning("api_error", error=result, path=request.url.path)
    return error_response(result)
