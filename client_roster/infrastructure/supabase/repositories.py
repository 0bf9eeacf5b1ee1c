"""Client and PullHistory repositories backed by the hosted Supabase API.

Both repositories rely on the same schema as the SQL backend (see
``schema.sql``): ``pull_history.client_id`` references ``clients.id`` with
ON DELETE CASCADE, so deleting a client never issues a separate history call.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from client_roster.application.interfaces import ClientRepository, PullHistoryRepository
from client_roster.domain.entities import Client, PullHistoryEntry, ensure_utc
from client_roster.domain.exceptions import EntityNotFoundError, StoreError
from client_roster.infrastructure.supabase.rest_client import Row, SupabaseRestClient

logger = logging.getLogger(__name__)

CLIENTS_TABLE = "clients"
PULL_HISTORY_TABLE = "pull_history"


def _parse_datetime(value: Any) -> datetime | None:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    return ensure_utc(datetime.fromisoformat(str(value)))


def _format_datetime(value: datetime | None) -> str | None:
    return ensure_utc(value).isoformat() if value is not None else None


class SupabaseClientRepository(ClientRepository):
    """Implements the ClientRepository port over PostgREST."""

    def __init__(self, rest: SupabaseRestClient):
        self._rest = rest

    @staticmethod
    def _to_entity(row: Row) -> Client:
        """Map a PostgREST row → domain entity."""
        return Client(
            id=row["id"],
            client_name=row["client_name"],
            domain_url=row["domain_url"],
            client_id=row["client_id"],
            password=row.get("password") or "",
            original_password=row.get("original_password") or "",
            latest_pull_date=_parse_datetime(row.get("latest_pull_date")),
            latest_pull_by=row.get("latest_pull_by"),
            gsos_version=row.get("gsos_version"),
            created_at=_parse_datetime(row.get("created_at")) or datetime.now(timezone.utc),
            updated_at=_parse_datetime(row.get("updated_at")) or datetime.now(timezone.utc),
        )

    @staticmethod
    def _to_row(entity: Client) -> Row:
        """Map domain entity → writable columns (id and timestamps are server-managed)."""
        return {
            "client_name": entity.client_name,
            "domain_url": entity.domain_url,
            "client_id": entity.client_id,
            "password": entity.password,
            "original_password": entity.original_password,
            "latest_pull_date": _format_datetime(entity.latest_pull_date),
            "latest_pull_by": entity.latest_pull_by,
            "gsos_version": entity.gsos_version,
        }

    async def get_by_id(self, client_pk: int) -> Client | None:
        rows = await self._rest.select(CLIENTS_TABLE, filters={"id": client_pk})
        return self._to_entity(rows[0]) if rows else None

    async def get_all(self) -> list[Client]:
        rows = await self._rest.select(CLIENTS_TABLE, order="client_name.asc,id.asc")
        return [self._to_entity(row) for row in rows]

    async def create(self, client: Client) -> Client:
        rows = await self._rest.insert(CLIENTS_TABLE, self._to_row(client))
        if not rows:
            raise StoreError("supabase", "POST clients", "insert returned no row")
        return self._to_entity(rows[0])

    async def update(self, client: Client) -> Client:
        values = self._to_row(client)
        values["updated_at"] = _format_datetime(client.updated_at)
        rows = await self._rest.update(CLIENTS_TABLE, values, filters={"id": client.id})
        if not rows:
            raise EntityNotFoundError("Client", client.id)
        return self._to_entity(rows[0])

    async def delete(self, client_pk: int) -> bool:
        rows = await self._rest.delete(CLIENTS_TABLE, filters={"id": client_pk})
        return bool(rows)


class SupabasePullHistoryRepository(PullHistoryRepository):
    """Implements the PullHistoryRepository port over PostgREST.

    PostgREST cannot span two tables in one transaction, so ``append``
    compensates: if the client summary update fails, the history row it just
    inserted is deleted again before the error propagates.
    """

    def __init__(self, rest: SupabaseRestClient):
        self._rest = rest

    @staticmethod
    def _to_entity(row: Row) -> PullHistoryEntry:
        return PullHistoryEntry(
            id=row["id"],
            client_id=row["client_id"],
            pull_date=_parse_datetime(row["pull_date"]),
            pull_by=row["pull_by"],
            version=row.get("version"),
            created_at=_parse_datetime(row.get("created_at")) or datetime.now(timezone.utc),
        )

    async def list_for_client(self, client_pk: int) -> list[PullHistoryEntry]:
        rows = await self._rest.select(
            PULL_HISTORY_TABLE,
            filters={"client_id": client_pk},
            order="pull_date.desc,id.desc",
        )
        return [self._to_entity(row) for row in rows]

    async def append(self, entry: PullHistoryEntry) -> PullHistoryEntry:
        pull_date = _format_datetime(entry.pull_date)
        rows = await self._rest.insert(
            PULL_HISTORY_TABLE,
            {
                "client_id": entry.client_id,
                "pull_date": pull_date,
                "pull_by": entry.pull_by,
                "version": entry.version,
            },
        )
        if not rows:
            raise StoreError("supabase", "POST pull_history", "insert returned no row")
        inserted = self._to_entity(rows[0])

        try:
            updated = await self._rest.update(
                CLIENTS_TABLE,
                {
                    "latest_pull_date": pull_date,
                    "latest_pull_by": entry.pull_by,
                    "gsos_version": entry.version,
                },
                filters={"id": entry.client_id},
            )
            if not updated:
                raise EntityNotFoundError("Client", entry.client_id)
        except (StoreError, EntityNotFoundError):
            logger.warning(
                "Client summary update failed; removing pull_history row %s", inserted.id
            )
            try:
                await self._rest.delete(PULL_HISTORY_TABLE, filters={"id": inserted.id})
            except StoreError:
                logger.exception(
                    "Could not remove pull_history row %s; it is now orphaned", inserted.id
                )
            raise
        return inserted
