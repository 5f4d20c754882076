"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

# Keep the app quiet and deterministic regardless of the developer's .env
os.environ.setdefault("FEEDGRAPH_DEBUG", "false")
os.environ.setdefault("FEEDGRAPH_LOG_LEVEL", "WARNING")


@pytest.fixture(scope="function")
def test_database_url(tmp_path: Path) -> str:
    """Return the URL of a throwaway SQLite database file."""
    return f"sqlite:///{tmp_path / 'feedgraph.db'}"


@pytest_asyncio.fixture(scope="function")
async def database(test_database_url: str) -> AsyncGenerator[str, None]:
    """Point the shared engine at a fresh schema with member types seeded."""
    from feedgraph.database.connection import (
        create_schema,
        dispose_database,
        get_async_session,
        init_database,
    )
    from feedgraph.database.seed_data import ensure_member_types

    init_database(test_database_url, force_reinit=True)
    await create_schema()
    async with get_async_session() as session:
        await ensure_member_types(session)

    yield test_database_url

    await dispose_database()


@pytest.fixture
def execute(database: str) -> Callable[..., Awaitable[Any]]:
    """Execute a GraphQL document against the schema with a fresh request context."""
    _ = database

    from feedgraph.graphql.context import build_context
    from feedgraph.graphql.schema import schema

    async def _execute(query: str, variables: dict[str, Any] | None = None) -> Any:
        return await schema.execute(
            query,
            variable_values=variables,
            context_value=build_context(),
        )

    return _execute


@pytest.fixture
def make_user(execute: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[dict]]:
    """Create a user through the API and return its selected fields."""

    async def _make_user(name: str = "Ann", balance: float = 10.0) -> dict:
        result = await execute(
            """
            mutation CreateUser($dto: CreateUserInput!) {
                createUser(dto: $dto) { id name balance }
            }
            """,
            {"dto": {"name": name, "balance": balance}},
        )
        assert result.errors is None, result.errors
        return result.data["createUser"]

    return _make_user


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)



def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
