"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import Generator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from userql.store import SEED_USERS, User, UserStore


@pytest.fixture
def seeded_store() -> UserStore:
    """A store holding the same users as the process-wide store."""
    return UserStore(SEED_USERS)


@pytest.fixture
def custom_store() -> UserStore:
    """A store with users that do not exist in the seed data."""
    return UserStore(
        [
            User(id="42", name="Ada", email="ada@example.com"),
            User(id="abc-7", name="Grace", email="grace@example.com"),
        ]
    )


@pytest.fixture
def app() -> FastAPI:
    """A freshly built application instance."""
    from userql.api.app import create_app

    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Synchronous HTTP client bound to the application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
