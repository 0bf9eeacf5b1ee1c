"""Application service (use case) for client and pull history operations."""

import logging

from client_roster.application.interfaces import (
    ClientRepository,
    CredentialProtector,
    PullHistoryRepository,
)
from client_roster.application.schemas import ClientCreate, ClientUpdate, PullHistoryCreate
from client_roster.application.services.notification_bus import NotificationBus
from client_roster.domain.entities import (
    Client,
    NotificationKind,
    PullHistoryEntry,
    ensure_utc,
)
from client_roster.domain.exceptions import CredentialError, EntityNotFoundError

logger = logging.getLogger(__name__)


class ClientService:
    """Orchestrates client CRUD and pull recording. Depends on the repository ports (DI)."""

    def __init__(
        self,
        client_repository: ClientRepository,
        history_repository: PullHistoryRepository,
        credentials: CredentialProtector,
        notifications: NotificationBus | None = None,
    ):
        self._clients = client_repository
        self._history = history_repository
        self._credentials = credentials
        self._notifications = notifications

    async def list_clients(self) -> list[Client]:
        return await self._clients.get_all()

    async def get_client(self, client_pk: int) -> Client:
        client = await self._clients.get_by_id(client_pk)
        if client is None:
            raise EntityNotFoundError("Client", client_pk)
        return client

    async def create_client(self, data: ClientCreate) -> Client:
        client = Client(
            client_name=data.client_name,
            domain_url=data.domain_url,
            client_id=data.client_id,
            latest_pull_date=ensure_utc(data.latest_pull_date),
            latest_pull_by=data.latest_pull_by,
            gsos_version=data.gsos_version,
        )
        self._apply_password(client, data.password)
        created = await self._clients.create(client)
        logger.info("Client created: %s (id=%s)", created.client_name, created.id)
        self._notify(NotificationKind.CLIENT_CREATED, created.client_name)
        return created

    async def update_client(self, client_pk: int, data: ClientUpdate) -> Client:
        client = await self.get_client(client_pk)

        # Only fields the caller actually sent take part in the update
        provided = data.model_dump(exclude_unset=True)
        password = provided.pop("password", None)
        if "latest_pull_date" in provided:
            provided["latest_pull_date"] = ensure_utc(provided["latest_pull_date"])
        client.update(**provided)
        if password:
            self._apply_password(client, password)

        updated = await self._clients.update(client)
        logger.info(
            "Client updated: id=%s fields=%s credentials_changed=%s",
            client_pk, sorted(provided), bool(password),
        )
        self._notify(NotificationKind.CLIENT_EDITED, updated.client_name)
        return updated

    async def delete_client(self, client_pk: int) -> Client:
        client = await self.get_client(client_pk)
        deleted = await self._clients.delete(client_pk)
        if not deleted:
            raise EntityNotFoundError("Client", client_pk)
        logger.info("Client deleted: %s (id=%s)", client.client_name, client_pk)
        self._notify(NotificationKind.CLIENT_DELETED, client.client_name)
        return client

    async def list_history(self, client_pk: int) -> list[PullHistoryEntry]:
        return await self._history.list_for_client(client_pk)

    async def record_pull(self, client_pk: int, data: PullHistoryCreate) -> PullHistoryEntry:
        """Append a pull and mirror it onto the client, whatever its date."""
        client = await self.get_client(client_pk)
        entry = await self._history.append(
            PullHistoryEntry(
                client_id=client_pk,
                pull_date=ensure_utc(data.pull_date),
                pull_by=data.pull_by,
                version=data.version or None,
            )
        )
        logger.info(
            "Pull recorded for client %s: by=%s version=%s date=%s",
            client_pk, entry.pull_by, entry.version, entry.pull_date.isoformat(),
        )
        self._notify(NotificationKind.PULL_RECORDED, client.client_name)
        return entry

    def reveal_password(self, client: Client) -> str | None:
        """Decrypt the display copy of a client's password.

        Returns None when nothing is stored or the copy cannot be decrypted
        (for instance after the encryption key was rotated).
        """
        if not client.original_password:
            return None
        try:
            return self._credentials.reveal(client.original_password)
        except CredentialError:
            logger.warning("Could not decrypt stored password for client id=%s", client.id)
            return None

    def _apply_password(self, client: Client, plain_password: str) -> None:
        client.set_credentials(
            self._credentials.hash_password(plain_password),
            self._credentials.seal(plain_password),
        )

    def _notify(self, kind: NotificationKind, client_name: str) -> None:
        if self._notifications is not None:
            self._notifications.publish(kind, client_name)
