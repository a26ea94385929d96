import asyncio
from collections.abc import AsyncIterator

import pytest_asyncio
from fastapi import APIRouter
from httpx import ASGITransport, AsyncClient

from apierror.clock import MockTime
from apierror.dependencies import get_clock
from apierror.exceptions import TopicExistsError
from apierror.main import app

# Pytest only picks up fixtures from conftest.py files. Fixtures defined in other
# modules (like tests/clocks.py) are invisible unless we register them here.
pytest_plugins = ["tests.clocks"]

# Endpoints that fail the way real handlers do, for exercising the catch-all handler
failing_router = APIRouter(prefix="/_test")


@failing_router.get("/unclassified")
async def fail_unclassified() -> None:
    raise RuntimeError("connection string postgres://admin:hunter2@db/prod is unreachable")


@failing_router.get("/task-group")
async def fail_in_task_group() -> None:
    async def create_topic() -> None:
        raise TopicExistsError("Topic 'orders' already exists.")

    async with asyncio.TaskGroup() as tg:
        tg.create_task(create_topic())


app.include_router(failing_router)


@pytest_asyncio.fixture
async def client(mock_time: MockTime) -> AsyncIterator[AsyncClient]:
    """HTTP client whose requests see the mock clock.

    The transport re-raises any exception that escapes the app, so a failure
    the app does not translate into a response fails the test.
    """
    app.dependency_overrides[get_clock] = lambda: mock_time

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
