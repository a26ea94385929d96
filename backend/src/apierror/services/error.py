"""Error catalog logic.

Pages through the ErrorKind taxonomy and resolves numeric codes the way a
client decoding a response would.
"""

from apierror.kinds import ErrorKind
from apierror.result import ErrorResult
from apierror.schemas.pagination import Paginated


def list_error_kinds(skip: int, limit: int) -> Paginated[ErrorKind]:
    """Page through all kinds in declaration order."""
    kinds = list(ErrorKind)
    return Paginated(items=kinds[skip : skip + limit], total=len(kinds), skip=skip, limit=limit)


def resolve_code(code: int) -> ErrorResult:
    """Resolve a code with no message. Unknown codes yield UNKNOWN_SERVER_ERROR."""
    return ErrorResult.for_code(code)
