"""Unit tests for the ClientService."""

from datetime import datetime, timedelta, timezone

import pytest

from client_roster.application.interfaces import (
    ClientRepository,
    CredentialProtector,
    PullHistoryRepository,
)
from client_roster.application.schemas import ClientCreate, ClientUpdate, PullHistoryCreate
from client_roster.application.services import ClientService, NotificationBus
from client_roster.domain.entities import Client, NotificationKind, PullHistoryEntry
from client_roster.domain.exceptions import CredentialError, EntityNotFoundError


class FakeClientRepository(ClientRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self.clients: dict[int, Client] = {}
        self._next_id = 1

    async def get_by_id(self, client_pk: int) -> Client | None:
        return self.clients.get(client_pk)

    async def get_all(self) -> list[Client]:
        return sorted(self.clients.values(), key=lambda c: (c.client_name, c.id))

    async def create(self, client: Client) -> Client:
        client.id = self._next_id
        self._next_id += 1
        self.clients[client.id] = client
        return client

    async def update(self, client: Client) -> Client:
        if client.id not in self.clients:
            raise EntityNotFoundError("Client", client.id)
        self.clients[client.id] = client
        return client

    async def delete(self, client_pk: int) -> bool:
        return self.clients.pop(client_pk, None) is not None


class FakePullHistoryRepository(PullHistoryRepository):
    """Keeps entries in a list and mirrors appends onto the fake clients."""

    def __init__(self, clients: FakeClientRepository):
        self._clients = clients
        self.entries: list[PullHistoryEntry] = []

    async def list_for_client(self, client_pk: int) -> list[PullHistoryEntry]:
        rows = [e for e in self.entries if e.client_id == client_pk]
        return sorted(rows, key=lambda e: (e.pull_date, e.id), reverse=True)

    async def append(self, entry: PullHistoryEntry) -> PullHistoryEntry:
        client = self._clients.clients.get(entry.client_id)
        if client is None:
            raise EntityNotFoundError("Client", entry.client_id)
        entry.id = len(self.entries) + 1
        self.entries.append(entry)
        client.latest_pull_date = entry.pull_date
        client.latest_pull_by = entry.pull_by
        client.gsos_version = entry.version
        return entry


class FakeCredentialProtector(CredentialProtector):
    """Reversible stand-in for bcrypt + Fernet."""

    def hash_password(self, plain_password: str) -> str:
        return f"hash:{plain_password}"

    def verify_password(self, plain_password: str, password_hash: str) -> bool:
        return password_hash == f"hash:{plain_password}"

    def seal(self, plain_password: str) -> str:
        return f"sealed:{plain_password}"

    def reveal(self, sealed_password: str) -> str:
        if not sealed_password.startswith("sealed:"):
            raise CredentialError("bad token")
        return sealed_password.removeprefix("sealed:")


@pytest.fixture
def clients() -> FakeClientRepository:
    return FakeClientRepository()


@pytest.fixture
def bus(notification_bus) -> NotificationBus:
    return notification_bus


@pytest.fixture
def service(clients, bus) -> ClientService:
    return ClientService(
        client_repository=clients,
        history_repository=FakePullHistoryRepository(clients),
        credentials=FakeCredentialProtector(),
        notifications=bus,
    )


def new_client(name: str = "Acme", password: str = "s3cret", **kwargs) -> ClientCreate:
    return ClientCreate(
        client_name=name,
        domain_url=f"https://{name.lower()}.example.com",
        client_id=f"{name.lower()}-001",
        password=password,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_create_client_derives_both_credentials(service: ClientService):
    client = await service.create_client(new_client(password="hunter2"))

    assert client.id is not None
    assert client.password == "hash:hunter2"
    assert client.original_password == "sealed:hunter2"
    assert service.reveal_password(client) == "hunter2"


@pytest.mark.asyncio
async def test_create_client_normalises_naive_pull_date(service: ClientService):
    naive = datetime(2026, 10, 1, 9, 30)
    client = await service.create_client(new_client(latest_pull_date=naive))
    assert client.latest_pull_date == naive.replace(tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_get_client_not_found(service: ClientService):
    with pytest.raises(EntityNotFoundError):
        await service.get_client(999)


@pytest.mark.asyncio
async def test_list_clients_ordered_by_name(service: ClientService):
    await service.create_client(new_client("Zeta"))
    await service.create_client(new_client("Alpha"))
    names = [c.client_name for c in await service.list_clients()]
    assert names == ["Alpha", "Zeta"]


@pytest.mark.asyncio
async def test_update_without_password_keeps_credentials(service: ClientService):
    created = await service.create_client(new_client(password="keep-me"))

    updated = await service.update_client(created.id, ClientUpdate(client_name="Acme Retail"))

    assert updated.client_name == "Acme Retail"
    assert updated.domain_url == "https://acme.example.com"
    assert updated.password == "hash:keep-me"
    assert updated.original_password == "sealed:keep-me"


@pytest.mark.asyncio
async def test_update_with_blank_password_keeps_credentials(service: ClientService):
    created = await service.create_client(new_client(password="keep-me"))
    updated = await service.update_client(created.id, ClientUpdate(password=""))
    assert updated.original_password == "sealed:keep-me"


@pytest.mark.asyncio
async def test_update_with_password_replaces_both_fields(service: ClientService):
    created = await service.create_client(new_client(password="old"))
    updated = await service.update_client(created.id, ClientUpdate(password="new"))
    assert updated.password == "hash:new"
    assert updated.original_password == "sealed:new"


@pytest.mark.asyncio
async def test_update_can_clear_pull_summary_explicitly(service: ClientService):
    created = await service.create_client(
        new_client(latest_pull_date=datetime(2026, 1, 1, tzinfo=timezone.utc), gsos_version="4.0")
    )
    updated = await service.update_client(
        created.id, ClientUpdate(latest_pull_date=None, gsos_version=None)
    )
    assert updated.latest_pull_date is None
    assert updated.gsos_version is None


@pytest.mark.asyncio
async def test_update_missing_client_raises(service: ClientService):
    with pytest.raises(EntityNotFoundError):
        await service.update_client(42, ClientUpdate(client_name="Ghost"))


@pytest.mark.asyncio
async def test_delete_client(service: ClientService):
    created = await service.create_client(new_client())
    deleted = await service.delete_client(created.id)
    assert deleted.client_name == "Acme"
    with pytest.raises(EntityNotFoundError):
        await service.get_client(created.id)


@pytest.mark.asyncio
async def test_delete_missing_client_raises(service: ClientService):
    with pytest.raises(EntityNotFoundError):
        await service.delete_client(7)


@pytest.mark.asyncio
async def test_record_pull_overwrites_summary_even_with_older_date(service: ClientService):
    created = await service.create_client(new_client())
    newer = datetime(2026, 10, 10, tzinfo=timezone.utc)
    older = newer - timedelta(days=30)

    await service.record_pull(created.id, PullHistoryCreate(pull_date=newer, pull_by="jane", version="4.2"))
    await service.record_pull(created.id, PullHistoryCreate(pull_date=older, pull_by="omar", version="4.1"))

    client = await service.get_client(created.id)
    assert client.latest_pull_date == older
    assert client.latest_pull_by == "omar"
    assert client.gsos_version == "4.1"

    history = await service.list_history(created.id)
    assert [e.pull_by for e in history] == ["jane", "omar"]


@pytest.mark.asyncio
async def test_record_pull_blank_version_is_stored_as_none(service: ClientService):
    created = await service.create_client(new_client(gsos_version="4.2"))
    entry = await service.record_pull(
        created.id,
        PullHistoryCreate(pull_date=datetime(2026, 10, 1, tzinfo=timezone.utc), pull_by="jane", version=""),
    )
    assert entry.version is None
    assert (await service.get_client(created.id)).gsos_version is None


@pytest.mark.asyncio
async def test_record_pull_for_missing_client_raises(service: ClientService):
    with pytest.raises(EntityNotFoundError):
        await service.record_pull(
            5, PullHistoryCreate(pull_date=datetime.now(timezone.utc), pull_by="jane")
        )


@pytest.mark.asyncio
async def test_list_history_for_unknown_client_is_empty(service: ClientService):
    assert await service.list_history(123) == []


@pytest.mark.asyncio
async def test_reveal_password_returns_none_for_unreadable_copy(service: ClientService):
    client = Client(client_name="A", domain_url="d", client_id="c", original_password="garbage")
    assert service.reveal_password(client) is None
    client.original_password = ""
    assert service.reveal_password(client) is None


@pytest.mark.asyncio
async def test_mutations_publish_notifications(service: ClientService, bus: NotificationBus):
    created = await service.create_client(new_client("Acme"))
    await service.update_client(created.id, ClientUpdate(gsos_version="4.3"))
    await service.record_pull(
        created.id, PullHistoryCreate(pull_date=datetime.now(timezone.utc), pull_by="jane")
    )
    await service.delete_client(created.id)

    kinds = [n.kind for n in bus.get_all()]
    assert kinds == [
        NotificationKind.CLIENT_DELETED,
        NotificationKind.PULL_RECORDED,
        NotificationKind.CLIENT_EDITED,
        NotificationKind.CLIENT_CREATED,
    ]
    assert bus.get_all()[-1].message == 'Client "Acme" has been successfully added'


@pytest.mark.asyncio
async def test_service_works_without_notification_bus(clients):
    service = ClientService(clients, FakePullHistoryRepository(clients), FakeCredentialProtector())
    created = await service.create_client(new_client())
    assert created.id == 1
