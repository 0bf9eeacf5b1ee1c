"""Integration tests for the SQLAlchemy repositories against in-memory SQLite."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from client_roster.domain.entities import Client, PullHistoryEntry
from client_roster.domain.exceptions import EntityNotFoundError, StoreError
from client_roster.infrastructure.database.errors import sql_errors
from client_roster.infrastructure.database.repositories import (
    SQLAlchemyClientRepository,
    SQLAlchemyPullHistoryRepository,
)


def make_client(name: str = "Acme") -> Client:
    return Client(
        client_name=name,
        domain_url=f"https://{name.lower()}.example.com",
        client_id=f"{name.lower()}-001",
        password="$2b$12$hash",
        original_password="sealed",
    )


@pytest.mark.asyncio
async def test_create_assigns_id_and_timestamps(db_session):
    repo = SQLAlchemyClientRepository(db_session)
    created = await repo.create(make_client())

    assert created.id is not None
    assert created.created_at.tzinfo is not None

    fetched = await repo.get_by_id(created.id)
    assert fetched is not None
    assert fetched.client_name == "Acme"
    assert fetched.password == "$2b$12$hash"


@pytest.mark.asyncio
async def test_get_by_id_missing_returns_none(db_session):
    assert await SQLAlchemyClientRepository(db_session).get_by_id(404) is None


@pytest.mark.asyncio
async def test_get_all_orders_by_name_then_id(db_session):
    repo = SQLAlchemyClientRepository(db_session)
    for name in ("Globex", "Acme", "Acme"):
        await repo.create(make_client(name))

    clients = await repo.get_all()
    assert [c.client_name for c in clients] == ["Acme", "Acme", "Globex"]
    assert clients[0].id < clients[1].id


@pytest.mark.asyncio
async def test_update_persists_fields(db_session):
    repo = SQLAlchemyClientRepository(db_session)
    client = await repo.create(make_client())
    client.update(client_name="Acme Retail", gsos_version="4.2")

    updated = await repo.update(client)
    assert updated.client_name == "Acme Retail"
    assert (await repo.get_by_id(client.id)).gsos_version == "4.2"


@pytest.mark.asyncio
async def test_update_missing_raises(db_session):
    ghost = make_client()
    ghost.id = 77
    with pytest.raises(EntityNotFoundError):
        await SQLAlchemyClientRepository(db_session).update(ghost)


@pytest.mark.asyncio
async def test_delete_reports_whether_a_row_was_removed(db_session):
    repo = SQLAlchemyClientRepository(db_session)
    client = await repo.create(make_client())
    assert await repo.delete(client.id) is True
    assert await repo.delete(client.id) is False


@pytest.mark.asyncio
async def test_append_mirrors_summary_and_lists_newest_first(db_session):
    clients = SQLAlchemyClientRepository(db_session)
    history = SQLAlchemyPullHistoryRepository(db_session)
    client = await clients.create(make_client())
    base = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)

    await history.append(PullHistoryEntry(client_id=client.id, pull_date=base, pull_by="a", version="1"))
    await history.append(
        PullHistoryEntry(client_id=client.id, pull_date=base + timedelta(days=2), pull_by="b", version="2")
    )
    entry = await history.append(
        PullHistoryEntry(client_id=client.id, pull_date=base - timedelta(days=5), pull_by="c")
    )

    assert entry.id is not None
    assert entry.pull_date == base - timedelta(days=5)

    refreshed = await clients.get_by_id(client.id)
    assert refreshed.latest_pull_by == "c"
    assert refreshed.latest_pull_date == base - timedelta(days=5)
    assert refreshed.gsos_version is None

    listed = await history.list_for_client(client.id)
    assert [e.pull_by for e in listed] == ["b", "a", "c"]
    assert all(e.pull_date.tzinfo is not None for e in listed)


@pytest.mark.asyncio
async def test_append_for_missing_client_raises(db_session):
    history = SQLAlchemyPullHistoryRepository(db_session)
    with pytest.raises(EntityNotFoundError):
        await history.append(
            PullHistoryEntry(client_id=5, pull_date=datetime.now(timezone.utc), pull_by="x")
        )


@pytest.mark.asyncio
async def test_deleting_client_cascades_history(db_session):
    clients = SQLAlchemyClientRepository(db_session)
    history = SQLAlchemyPullHistoryRepository(db_session)
    client = await clients.create(make_client())
    await history.append(
        PullHistoryEntry(client_id=client.id, pull_date=datetime.now(timezone.utc), pull_by="x")
    )

    await clients.delete(client.id)
    assert await history.list_for_client(client.id) == []


def test_sql_errors_wraps_sqlalchemy_failures():
    with pytest.raises(StoreError) as exc_info:
        with sql_errors("list clients"):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    assert exc_info.value.backend == "sql"
    assert exc_info.value.operation == "list clients"
    assert "database is locked" in exc_info.value.message
