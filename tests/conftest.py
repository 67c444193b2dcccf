"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any
from uuid import uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
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
from infrastructure.database.models import Base, CategoryModel, ClientModel, ProjectModel, UserModel
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user ID for consistency
TEST_USER_ID = uuid4()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test, shared by every connection."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
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
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def uow_factory(session_factory: async_sessionmaker[AsyncSession]) -> Any:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="test@example.com",
        display_name="Test User",
    )


@pytest.fixture
async def seed(
    session_factory: async_sessionmaker[AsyncSession], test_user: TokenUser
) -> dict[str, Any]:
    """Insert the records hours are logged against.

    ``acme`` is billed to a client, ``internal`` is not.
    """
    client = ClientModel(id=uuid4(), name="Acme Corp")
    records = {
        "user": UserModel(id=test_user.id, email=test_user.email, name=test_user.display_name),
        "other_user": UserModel(id=uuid4(), email="other@example.com", name="Other User"),
        "client": client,
        "acme": ProjectModel(id=uuid4(), name="Acme site", client_id=client.id),
        "internal": ProjectModel(id=uuid4(), name="Internal"),
        "development": CategoryModel(id=uuid4(), name="Development"),
        "meeting": CategoryModel(id=uuid4(), name="Meeting"),
    }
    async with session_factory() as session:
        session.add(client)
        await session.flush()
        session.add_all(value for key, value in records.items() if key != "client")
        await session.commit()
    return {key: value.id for key, value in records.items()}


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


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def authenticated_client(
    uow_factory: Any,
    seed: dict[str, Any],
    test_user: TokenUser,
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create authenticated test client with proper database and auth overrides.

    This client:
    - Uses an in-memory SQLite database seeded with users and catalog records
    - Overrides auth dependency to return the test user
    - Overrides every service dependency to use the test database
    """
    from api.dependencies.auth import get_auth_provider, get_current_user
    from api.v1.dependencies import (
        get_catalog_service,
        get_hour_service,
        get_tag_service,
        get_user_service,
    )
    from domain.services.audit_service import AuditService
    from domain.services.catalog_service import CatalogService
    from domain.services.hour_service import HourService
    from domain.services.tag_service import TagService
    from domain.services.user_service import UserService
    from main import create_app

    app = create_app()

    async def override_get_user() -> TokenUser:
        return test_user

    app.dependency_overrides[get_current_user] = override_get_user
    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_hour_service] = lambda: HourService(
        uow_factory, audit_service=AuditService(uow_factory)
    )
    app.dependency_overrides[get_tag_service] = lambda: TagService(uow_factory)
    app.dependency_overrides[get_catalog_service] = lambda: CatalogService(uow_factory)
    app.dependency_overrides[get_user_service] = lambda: UserService(uow_factory)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
