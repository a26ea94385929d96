"""Error catalog endpoints."""

from fastapi import APIRouter, Query

from apierror.config import settings
from apierror.kinds import ErrorKind
from apierror.schemas.catalog import ErrorKindListResponse
from apierror.schemas.error import ErrorResultResponse, RaiseErrorRequest
from apierror.services.error import list_error_kinds, resolve_code

router = APIRouter()


@router.get("/errors", response_model=ErrorKindListResponse, status_code=200)
async def list_errors(
    skip: int = Query(0, ge=0),
    limit: int = Query(settings.catalog_default_limit, ge=1, le=settings.catalog_max_limit),
) -> ErrorKindListResponse:
    """List every classified error kind with its code and default message."""
    return ErrorKindListResponse.model_validate(list_error_kinds(skip, limit))


@router.get("/errors/{code}", response_model=ErrorResultResponse, status_code=200)
async def get_error(code: int) -> ErrorResultResponse:
    """Resolve a numeric code. Unknown codes resolve to UNKNOWN_SERVER_ERROR, not 404."""
    return ErrorResultResponse.from_result(resolve_code(code))


@router.post("/errors/{code}/raise", response_model=ErrorResultResponse, status_code=200)
async def raise_error(code: int, body: RaiseErrorRequest) -> ErrorResultResponse:
    """Raise the exception for ``code`` so clients can exercise their error decoding.

    The exception handlers in main.py render the envelope. NONE has nothing to
    raise and returns the success rendering.
    """
    kind = ErrorKind.for_code(code)
    exc = kind.to_exception(body.message)
    if exc is not None:
        raise exc
    return ErrorResultResponse.from_result(resolve_code(code))
