"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from datetime import date
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

TEST_JWT_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest_asyncio.fixture(scope="function")
async def test_database(tmp_path: Any) -> AsyncGenerator[str, None]:
    """Point the shared connection pool at a fresh SQLite file with all tables created."""
    from staffdir.database.connection import create_all, dispose_database, init_database

    dsn = f"sqlite+aiosqlite:///{tmp_path / 'staffdir-test.db'}"
    os.environ["STAFFDIR_DATABASE_URL"] = dsn

    init_database(dsn, force_reinit=True)
    await create_all()

    yield dsn

    await dispose_database()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_database: str) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async SQLAlchemy session for testing."""
    _ = test_database

    from staffdir.database.connection import get_async_session

    async with get_async_session() as session:
        yield session


def make_employee(**overrides: Any):
    """Build an unsaved employee row with sensible defaults."""
    from staffdir.dbmodels import Employees

    fields: dict[str, Any] = {
        "name": "Test Employee",
        "email": "test.employee@example.com",
        "age": 30,
        "department": "Engineering",
        "subjects": ["python"],
        "attendance": 90,
        "position": "Engineer",
        "salary": 50000.0,
        "hire_date": date(2022, 3, 1),
        "is_active": True,
        "flagged": False,
    }
    fields.update(overrides)
    return Employees(**fields)


def employee_input(**overrides: Any) -> dict[str, Any]:
    """Wire-format input for CreateEmployee."""
    fields: dict[str, Any] = {
        "name": "Dana Reyes",
        "email": "dana.reyes@example.com",
        "age": 34,
        "class": "Finance",
        "subjects": ["accounting", "sql"],
        "attendance": 95,
        "position": "Analyst",
        "salary": 72000.5,
        "phone": "+1-555-0199",
        "address": "12 Elm Street",
        "hire_date": "2021-06-15",
    }
    fields.update(overrides)
    return fields


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(  # type: ignore[reportUnknownMemberType]
        "markers", "requires_db: mark test as requiring database connection"
    )
    config.addinivalue_line("markers", "integration: mark test as integration test")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "unit: mark test as unit test")  # type: ignore[reportUnknownMemberType]
