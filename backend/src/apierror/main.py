from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from apierror.config import settings
from apierror.dependencies import Clock
from apierror.exceptions import ApiError
from apierror.handlers import api_error_handler, unhandled_exception_handler
from apierror.logging import get_logger
from apierror.middleware import RequestIDMiddleware
from apierror.routers.error import router as error_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager: code before yield runs on startup, after yield on shutdown."""
    logger.info("startup", service=settings.app_name)
    yield
    logger.info("shutdown", service=settings.app_name)


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.add_middleware(RequestIDMiddleware)
app.include_router(error_router)

# ApiError and ExceptionGroup are handled inside the middleware stack. Starlette
# runs the Exception handler outside every middleware, so it only sees failures
# raised by middleware itself; RequestIDMiddleware translates the rest.
app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(ExceptionGroup, unhandled_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get("/health")
async def health(clock: Clock) -> dict[str, str | int]:
    """Health check endpoint, reporting the server's wall-clock time in milliseconds."""
    return {"status": "ok", "time_ms": clock.milliseconds()}
