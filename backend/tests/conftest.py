"""Pytest configuration: in-memory SQLite document store and wired services."""
import sys
from pathlib import Path

# Add the backend directory to Python path
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from campus.domain.roles.services import NotificationPreferencesService, RoleRegistry
from campus.domain.notifications.services import NotificationInbox
from campus.infra.db.base import Base
from campus.infra.db.document_store import SqlDocumentStore
from campus.infra.db.models import DocumentModel  # noqa: F401
from campus.infra.db.repositories.notification_repo import NotificationRepositoryImpl
from campus.infra.db.repositories.preferences_repo import PreferencesRepositoryImpl
from campus.infra.db.repositories.role_repo import RoleRepositoryImpl


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests that need a real DB (deselect with '-m \"not integration\"')"
    )


@pytest.fixture
async def db_engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(db_session):
    return SqlDocumentStore(db_session)


@pytest.fixture
def role_repo(store):
    return RoleRepositoryImpl(store)


@pytest.fixture
def preferences_repo(store):
    return PreferencesRepositoryImpl(store)


@pytest.fixture
def notification_repo(store):
    return NotificationRepositoryImpl(store)


@pytest.fixture
async def registry(role_repo, preferences_repo):
    """Role registry with the default roles seeded."""
    registry = RoleRegistry(role_repo, preferences_repo)
    await registry.seed_default_roles()
    return registry


@pytest.fixture
def preferences(preferences_repo, role_repo):
    return NotificationPreferencesService(preferences_repo, role_repo)


@pytest.fixture
def inbox(notification_repo):
    return NotificationInbox(notification_repo)


@pytest.fixture
async def client(session_factory):
    """HTTP client against the app, backed by the in-memory database with default roles seeded."""
    from campus.api.deps import get_db
    from campus.main import app

    async with session_factory() as session:
        store = SqlDocumentStore(session)
        await RoleRegistry(RoleRepositoryImpl(store), PreferencesRepositoryImpl(store)).seed_default_roles()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
