import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


_load_env_file(ENV_TEST_PATH)

# Settings are read at import time, so these must be set before importing the app.
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("JWT_SECRET", "test-secret-key-not-for-production")

from moneytree.db.session import enforce_sqlite_foreign_keys, get_db  # noqa: E402
from moneytree.main import app  # noqa: E402


def _engine_options(url: str) -> dict:
    # One shared connection so every session sees the same in-memory database.
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {}


test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_options(TEST_DATABASE_URL))
enforce_sqlite_foreign_keys(test_engine)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables and seed the system roots, then drop everything after.

    This fixture is intentionally NOT autouse so pure unit tests (tree,
    classifier, security) run without touching a database.
    """
    from moneytree.models.base import BaseModel
    from moneytree.repositories.category import CategoryRepository

    async with test_engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    async with TestSessionLocal() as session:
        await CategoryRepository(session).ensure_system_roots()

    yield

    async with test_engine.begin() as conn:
        if test_engine.dialect.name == "sqlite":
            # DROP TABLE deletes rows first, and RESTRICT blocks deleting parents.
            await conn.exec_driver_sql("PRAGMA foreign_keys=OFF")
        await conn.run_sync(BaseModel.metadata.drop_all)

    await test_engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session with fresh connection per test."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def roots(db_session: AsyncSession):
    """The two system roots keyed by RootKind."""
    from moneytree.repositories.category import CategoryRepository

    return await CategoryRepository(db_session).get_roots()


async def _register(db_session: AsyncSession, email: str):
    from moneytree.repositories.category import CategoryRepository
    from moneytree.repositories.user import UserRepository
    from moneytree.services.auth import AuthService

    service = AuthService(UserRepository(db_session), CategoryRepository(db_session))
    return await service.register(email=email, password="password123")


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Registered user with the default categories seeded."""
    return await _register(db_session, "testuser@example.com")


@pytest.fixture
async def other_user(db_session: AsyncSession):
    """Second registered user, for ownership checks."""
    return await _register(db_session, "other@example.com")


@pytest.fixture
async def auth_headers(test_user):
    """Provide authentication headers with valid JWT token."""
    from moneytree.core.security import create_access_token

    token = create_access_token(user_id=test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def other_auth_headers(other_user):
    """Authentication headers for the second user."""
    from moneytree.core.security import create_access_token

    token = create_access_token(user_id=other_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
