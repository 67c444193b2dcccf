"""Shared fixtures for unit tests."""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.hour import Hour


class FakeUnitOfWork:
    """Fake Unit of Work with all 7 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.hours = AsyncMock()
        self.tags = AsyncMock()
        self.audits = AsyncMock()
        self.users = AsyncMock()
        self.clients = AsyncMock()
        self.projects = AsyncMock()
        self.categories = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def actor_id() -> UUID:
    """A random actor ID (distinct from user_id)."""
    return uuid4()


def make_hour(user_id: UUID | None = None, **overrides: Any) -> Hour:
    """An hour with every required reference filled in."""
    values: dict[str, Any] = {
        "user_id": user_id or uuid4(),
        "project_id": uuid4(),
        "category_id": uuid4(),
        "starting_time": datetime(2015, 4, 20, 9, 0),
        "value": 2.0,
    }
    values.update(overrides)
    return Hour(**values)
