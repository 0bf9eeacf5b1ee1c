"""Abstract repository interface (port) for Client persistence."""

from abc import ABC, abstractmethod

from client_roster.domain.entities import Client


class ClientRepository(ABC):
    """Port for client persistence — implemented by the SQL and hosted adapters."""

    @abstractmethod
    async def get_by_id(self, client_pk: int) -> Client | None:
        """Retrieve a single client by its primary key."""
        ...

    @abstractmethod
    async def get_all(self) -> list[Client]:
        """Retrieve every client ordered by ``client_name`` ascending."""
        ...

    @abstractmethod
    async def create(self, client: Client) -> Client:
        """Persist a new client and return it with its assigned id."""
        ...

    @abstractmethod
    async def update(self, client: Client) -> Client:
        """Write back an existing client. Raises EntityNotFoundError if it is gone."""
        ...

    @abstractmethod
    async def delete(self, client_pk: int) -> bool:
        """Delete a client and, through the schema cascade, its pull history.

        Returns True if deleted, False if not found.
        """
        ...
