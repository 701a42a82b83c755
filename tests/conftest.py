"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable, Generator
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, UserModel
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.github.client import GitHubClient


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user ID for consistency
TEST_USER_ID = UUID("5f3c7b0e-2d4a-4e8b-9a61-0c9d2e7f4b18")

# Repositories the fake GitHub knows about
GITHUB_REPOS: dict[str, list[dict[str, Any]]] = {
    "octocat": [
        {"id": 1, "name": "hello-world", "html_url": "https://github.com/octocat/hello-world"},
        {"id": 2, "name": "spoon-knife", "html_url": "https://github.com/octocat/spoon-knife"},
    ],
}


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def add_user(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Any]:
    """Insert a user row, as the identity provider sync would."""

    async def _add_user(
        user_id: UUID | None = None,
        email: str | None = None,
        name: str | None = "Someone",
        avatar_url: str | None = None,
    ) -> UUID:
        user_id = user_id or uuid4()
        async with session_factory() as session:
            session.add(
                UserModel(
                    id=user_id,
                    email=email or f"{user_id}@example.com",
                    name=name,
                    avatar_url=avatar_url,
                )
            )
            await session.commit()
        return user_id

    return _add_user


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="test@example.com",
        name="Test User",
        avatar_url="https://gravatar.com/avatar/test",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


def _github_handler(request: httpx.Request) -> httpx.Response:
    """Fake GitHub: known users get repos, everyone else a 404."""
    parts = request.url.path.strip("/").split("/")
    if len(parts) == 3 and parts[0] == "users" and parts[2] == "repos":
        repos = GITHUB_REPOS.get(parts[1])
        if repos is not None:
            return httpx.Response(200, json=repos)
    return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def github_client() -> GitHubClient:
    """GitHub client talking to an in-process fake instead of the network."""
    return GitHubClient(
        base_url="https://api.github.test",
        client_id="",
        client_secret="",
        transport=httpx.MockTransport(_github_handler),
    )


@pytest.fixture
def app(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
    github_client: GitHubClient,
) -> Generator[FastAPI, None, None]:
    """
    Create the application wired to test collaborators.

    Services use the in-memory database, tokens are checked with the test
    provider and GitHub is replaced by the fake.
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_github_client,
        get_profile_service,
        get_timeline_service,
    )
    from domain.services.profile_service import ProfileService
    from domain.services.timeline_service import TimelineService
    from main import create_app

    app = create_app()
    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(uow_factory)
    app.dependency_overrides[get_timeline_service] = lambda: TimelineService(uow_factory)
    app.dependency_overrides[get_github_client] = lambda: github_client
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def authenticated_client(
    app: FastAPI,
    client: AsyncClient,
    test_user: TokenUser,
    add_user: Callable[..., Any],
) -> AsyncClient:
    """
    Create authenticated test client.

    The test user exists in the users table and the auth dependency
    returns it directly.
    """
    from api.dependencies.auth import get_current_user

    await add_user(
        user_id=test_user.id,
        email=test_user.email,
        name=test_user.name,
        avatar_url=test_user.avatar_url,
    )

    async def override_get_user() -> TokenUser:
        return test_user

    app.dependency_overrides[get_current_user] = override_get_user
    return client
