"""Shared FastAPI dependencies.

Reusable type aliases and dependency functions that routers import.
Defined here (not in main.py) to avoid circular imports when routers
are registered in main.
"""

from typing import Annotated

from fastapi import Depends

from apierror.clock import SystemTime, Time

_system_time = SystemTime()


def get_clock() -> Time:
    """Clock used by request handlers. Tests override this with a MockTime."""
    return _system_time


Clock = Annotated[Time, Depends(get_clock)]
