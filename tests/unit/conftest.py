"""Shared fixtures for unit tests."""

from datetime import date
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.profile import Education, Experience, Profile


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.users = AsyncMock()
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


def make_experience(title: str = "Engineer", **overrides: Any) -> Experience:
    values: dict[str, Any] = {
        "title": title,
        "company": "Acme",
        "from_date": date(2020, 1, 1),
    }
    values.update(overrides)
    return Experience(**values)


def make_education(school: str = "ITB", **overrides: Any) -> Education:
    values: dict[str, Any] = {
        "school": school,
        "degree": "BSc",
        "field_of_study": "Computer Science",
        "from_date": date(2014, 8, 1),
    }
    values.update(overrides)
    return Education(**values)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    uow = FakeUnitOfWork()
    # Repositories echo back whatever they are asked to persist
    uow.profiles.create.side_effect = lambda profile: profile
    uow.profiles.update.side_effect = lambda profile: profile
    return uow


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def profile(user_id: UUID) -> Profile:
    """An existing profile owned by ``user_id``."""
    return Profile(user_id=user_id, status="Developer", skills=["python"])
