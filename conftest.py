"""
Root conftest for the pytest test suite.

This file contains the main fixtures that are used across the entire test suite.

Each test runs against a fresh, isolated in-memory SQLite database created
with a manual, async-native Tortoise initialisation.

Key Fixtures:
- `anyio_backend`: Specifies the asyncio backend.
- `initialize_test_db`: (autouse) Creates a fresh DB schema for each test.
- `db`: The connection handle the service functions expect.
- `app_for_testing`: Provides the FastAPI application instance with its production
  lifespan disabled to allow `initialize_test_db` to manage the test DB.
- `client`: Provides a TestClient.
- `failing_client`: A TestClient that returns 500 responses instead of re-raising.
- `report_factory`: Creates report rows with sensible defaults.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from tortoise import BaseDBAsyncClient, Tortoise, connections

from invoice_reports.core.database import build_tortoise_config
from invoice_reports.features.reports.models import Report
from invoice_reports.features.reports.service import format_report_date, today_utc

# Import the app
from invoice_reports.main import app as actual_app


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_test_db() -> AsyncGenerator[None, None]:
    """
    Initializes the database for each test function.

    This async, autouse fixture creates a fresh in-memory database and schema
    for each test and tears it down afterwards.
    """
    await Tortoise.init(config=build_tortoise_config("sqlite://:memory:"))
    await Tortoise.generate_schemas()

    yield

    await Tortoise.close_connections()


@pytest.fixture
def db(initialize_test_db) -> BaseDBAsyncClient:
    return connections.get("default")


@pytest.fixture(scope="function")
def app_for_testing() -> Generator[FastAPI, Any, None]:
    """
    Provides the FastAPI application with its production lifespan manager
    replaced, so the test DB fixture owns the database connection.
    """
    original_lifespan = actual_app.router.lifespan_context

    @asynccontextmanager
    async def dummy_lifespan(app: FastAPI):
        yield

    actual_app.router.lifespan_context = dummy_lifespan

    yield actual_app

    # Restore the original lifespan context after the test
    actual_app.router.lifespan_context = original_lifespan


@pytest.fixture(scope="function")
def client(app_for_testing: FastAPI) -> Generator[TestClient, Any, None]:
    with TestClient(app_for_testing) as tc:
        yield tc


@pytest.fixture(scope="function")
def failing_client(app_for_testing: FastAPI) -> Generator[TestClient, Any, None]:
    with TestClient(app_for_testing, raise_server_exceptions=False) as tc:
        yield tc


@pytest.fixture
def report_factory():
    """A factory to create report rows, dated today unless told otherwise."""

    async def _factory(
        invoice_number: int,
        name: str = "Widget",
        date: str | None = None,
        payment_method: str = "cash",
        gst: float = 9.0,
        spl: float = 9.0,
    ) -> Report:
        return await Report.create(
            invoice_number=invoice_number,
            name=name,
            date=date or format_report_date(today_utc()),
            payment_method=payment_method,
            gst=gst,
            spl=spl,
        )

    return _factory
