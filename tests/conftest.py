"""Shared fixtures: in-memory SQLite store and an API client wired to it."""

import pytest
import pytest_asyncio
from cryptography.fernet import Fernet
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from client_roster.application.interfaces import NotificationStore
from client_roster.application.services import NotificationBus
from client_roster.domain.entities import Notification
from client_roster.infrastructure.database import (
    Base,
    enable_sqlite_foreign_keys,
    get_db_session,
)
from client_roster.infrastructure.dependencies import (
    get_credential_vault,
    get_notification_bus,
)
from client_roster.infrastructure.security import CredentialVault
from client_roster.main import app


class InMemoryNotificationStore(NotificationStore):
    """Fake store keeping the last saved list in memory."""

    def __init__(self, initial: list[Notification] | None = None):
        self.saved: list[Notification] = list(initial or [])
        self.save_calls = 0

    def load(self) -> list[Notification]:
        return list(self.saved)

    def save(self, notifications: list[Notification]) -> None:
        self.saved = list(notifications)
        self.save_calls += 1


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def vault() -> CredentialVault:
    return CredentialVault(Fernet.generate_key())


@pytest.fixture
def notification_store() -> InMemoryNotificationStore:
    return InMemoryNotificationStore()


@pytest.fixture
def notification_bus(notification_store) -> NotificationBus:
    return NotificationBus(notification_store)


@pytest_asyncio.fixture
async def api_client(session_factory, vault, notification_bus):
    """AsyncClient against the app with the store, vault and bus overridden."""

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_credential_vault] = lambda: vault
    app.dependency_overrides[get_notification_bus] = lambda: notification_bus

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
