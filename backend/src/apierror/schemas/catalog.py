"""Error catalog response schemas."""

from apierror.schemas.error import ErrorKindResponse
from apierror.schemas.pagination import PaginatedResponse

ErrorKindListResponse = PaginatedResponse[ErrorKindResponse]
