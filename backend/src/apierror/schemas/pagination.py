"""Generic pagination types shared by list endpoints.

PaginatedResponse[T]: Pydantic model for HTTP responses (serializable).
Paginated[T]:         plain dataclass for service-layer returns (not serializable).
"""

from dataclasses import dataclass

from pydantic import BaseModel


class PaginatedResponse[T](BaseModel):
    """Pydantic model for paginated HTTP responses.

    ``from_attributes`` lets ``model_validate`` read a ``Paginated`` dataclass
    directly, including items that are plain objects such as ErrorKind members::

        # schemas/catalog.py
        ErrorKindListResponse = PaginatedResponse[ErrorKindResponse]

    Use this in **routers** only.
    """

    model_config = {"from_attributes": True}

    items: list[T]
    total: int
    skip: int
    limit: int


@dataclass
class Paginated[T]:
    """Plain dataclass for paginated results inside the service layer.

    Services return this; the router converts it::

        page = list_error_kinds(skip, limit)
        return ErrorKindListResponse.model_validate(page)
    """

    items: list[T]
    total: int
    skip: int
    limit: int
