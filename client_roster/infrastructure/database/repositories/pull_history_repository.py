"""Concrete PullHistory repository backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from client_roster.application.interfaces import PullHistoryRepository
from client_roster.domain.entities import PullHistoryEntry, ensure_utc
from client_roster.domain.exceptions import EntityNotFoundError
from client_roster.infrastructure.database.errors import sql_errors
from client_roster.infrastructure.database.models import ClientModel, PullHistoryModel


class SQLAlchemyPullHistoryRepository(PullHistoryRepository):
    """Implements the PullHistoryRepository port using SQLAlchemy async sessions.

    ``append`` writes the history row and the client summary in the caller's
    session, so they share one transaction.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    @staticmethod
    def _to_entity(model: PullHistoryModel) -> PullHistoryEntry:
        """Map ORM model → domain entity."""
        return PullHistoryEntry(
            id=model.id,
            client_id=model.client_id,
            pull_date=ensure_utc(model.pull_date),
            pull_by=model.pull_by,
            version=model.version,
            created_at=ensure_utc(model.created_at),
        )

    async def list_for_client(self, client_pk: int) -> list[PullHistoryEntry]:
        stmt = (
            select(PullHistoryModel)
            .where(PullHistoryModel.client_id == client_pk)
            .order_by(PullHistoryModel.pull_date.desc(), PullHistoryModel.id.desc())
        )
        with sql_errors("list pull history"):
            result = await self._session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    async def append(self, entry: PullHistoryEntry) -> PullHistoryEntry:
        with sql_errors("append pull history"):
            client = await self._session.get(ClientModel, entry.client_id)
            if client is None:
                raise EntityNotFoundError("Client", entry.client_id)

            model = PullHistoryModel(
                client_id=entry.client_id,
                pull_date=entry.pull_date,
                pull_by=entry.pull_by,
                version=entry.version,
                created_at=entry.created_at,
            )
            self._session.add(model)

            # No date comparison: the newest append always wins
            client.latest_pull_date = entry.pull_date
            client.latest_pull_by = entry.pull_by
            client.gsos_version = entry.version
            await self._session.flush()
        return self._to_entity(model)
