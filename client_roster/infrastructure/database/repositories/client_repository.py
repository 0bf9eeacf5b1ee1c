"""Concrete Client repository backed by SQLAlchemy."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from client_roster.application.interfaces import ClientRepository
from client_roster.domain.entities import Client, ensure_utc
from client_roster.domain.exceptions import EntityNotFoundError
from client_roster.infrastructure.database.errors import sql_errors
from client_roster.infrastructure.database.models import ClientModel


class SQLAlchemyClientRepository(ClientRepository):
    """Implements the ClientRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @staticmethod
    def _to_entity(model: ClientModel) -> Client:
        """Map ORM model → domain entity."""
        return Client(
            id=model.id,
            client_name=model.client_name,
            domain_url=model.domain_url,
            client_id=model.client_id,
            password=model.password,
            original_password=model.original_password,
            latest_pull_date=ensure_utc(model.latest_pull_date),
            latest_pull_by=model.latest_pull_by,
            gsos_version=model.gsos_version,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    @staticmethod
    def _to_model(entity: Client) -> ClientModel:
        """Map domain entity → ORM model (for creation)."""
        return ClientModel(
            client_name=entity.client_name,
            domain_url=entity.domain_url,
            client_id=entity.client_id,
            password=entity.password,
            original_password=entity.original_password,
            latest_pull_date=entity.latest_pull_date,
            latest_pull_by=entity.latest_pull_by,
            gsos_version=entity.gsos_version,
        )

    async def get_by_id(self, client_pk: int) -> Client | None:
        with sql_errors("get client"):
            result = await self._session.get(ClientModel, client_pk)
        return self._to_entity(result) if result else None

    async def get_all(self) -> list[Client]:
        stmt = select(ClientModel).order_by(ClientModel.client_name.asc(), ClientModel.id.asc())
        with sql_errors("list clients"):
            result = await self._session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, client: Client) -> Client:
        model = self._to_model(client)
        with sql_errors("create client"):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)

    async def update(self, client: Client) -> Client:
        with sql_errors("update client"):
            model = await self._session.get(ClientModel, client.id)
            if model is None:
                raise EntityNotFoundError("Client", client.id)
            model.client_name = client.client_name
            model.domain_url = client.domain_url
            model.client_id = client.client_id
            model.password = client.password
            model.original_password = client.original_password
            model.latest_pull_date = client.latest_pull_date
            model.latest_pull_by = client.latest_pull_by
            model.gsos_version = client.gsos_version
            model.updated_at = client.updated_at
            await self._session.flush()
        return self._to_entity(model)

    async def delete(self, client_pk: int) -> bool:
        # Core DELETE so the database's ON DELETE CASCADE removes history rows
        stmt = delete(ClientModel).where(ClientModel.id == client_pk)
        with sql_errors("delete client"):
            result = await self._session.execute(stmt)
            await self._session.flush()
        return result.rowcount > 0
