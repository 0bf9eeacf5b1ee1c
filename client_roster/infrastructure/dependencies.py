"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from client_roster.application.interfaces import ClientRepository, PullHistoryRepository
from client_roster.application.services import (
    ClientService,
    DashboardService,
    NotificationBus,
)
from client_roster.config import get_settings
from client_roster.infrastructure.database.repositories import (
    SQLAlchemyClientRepository,
    SQLAlchemyPullHistoryRepository,
)
from client_roster.infrastructure.database.session import get_db_session
from client_roster.infrastructure.security import CredentialVault
from client_roster.infrastructure.storage import JsonFileNotificationStore
from client_roster.infrastructure.supabase import (
    SupabaseClientRepository,
    SupabasePullHistoryRepository,
    SupabaseRestClient,
)

NOTIFICATIONS_FILENAME = "notifications.json"


@dataclass
class StoreRepositories:
    """The pair of repository ports for the configured backend."""

    clients: ClientRepository
    history: PullHistoryRepository


@lru_cache
def get_notification_bus() -> NotificationBus:
    """Process-wide notification bus backed by a JSON file in ``data_dir``."""
    settings = get_settings()
    store = JsonFileNotificationStore(Path(settings.data_dir) / NOTIFICATIONS_FILENAME)
    return NotificationBus(store, limit=settings.notification_limit)


@lru_cache
def get_credential_vault() -> CredentialVault:
    """Process-wide credential vault — one Fernet key for the process lifetime."""
    return CredentialVault.from_settings_key(get_settings().credential_encryption_key)


async def get_store_repositories(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[StoreRepositories, None]:
    """Provides the repositories of the backend selected by ``STORE_BACKEND``.

    The SQL session is always provided by ``get_db_session`` but never opens a
    connection when the hosted backend is selected.
    """
    settings = get_settings()
    if settings.store_backend == "supabase":
        rest = SupabaseRestClient(
            base_url=settings.supabase_url,
            api_key=settings.supabase_key,
            timeout=settings.supabase_timeout,
        )
        try:
            yield StoreRepositories(
                clients=SupabaseClientRepository(rest),
                history=SupabasePullHistoryRepository(rest),
            )
        finally:
            await rest.aclose()
        return

    yield StoreRepositories(
        clients=SQLAlchemyClientRepository(session),
        history=SQLAlchemyPullHistoryRepository(session),
    )


async def get_client_service(
    repositories: StoreRepositories = Depends(get_store_repositories),
    vault: CredentialVault = Depends(get_credential_vault),
    notifications: NotificationBus = Depends(get_notification_bus),
) -> AsyncGenerator[ClientService, None]:
    """Provides a ClientService with its repositories, vault and notification bus."""
    yield ClientService(
        client_repository=repositories.clients,
        history_repository=repositories.history,
        credentials=vault,
        notifications=notifications,
    )


async def get_dashboard_service(
    client_service: ClientService = Depends(get_client_service),
) -> AsyncGenerator[DashboardService, None]:
    """Provides a DashboardService reading through the ClientService."""
    yield DashboardService(client_service)
