"""Abstract repository interface (port) for pull history persistence."""

from abc import ABC, abstractmethod

from client_roster.domain.entities import PullHistoryEntry


class PullHistoryRepository(ABC):
    """Port for the append-only pull log."""

    @abstractmethod
    async def list_for_client(self, client_pk: int) -> list[PullHistoryEntry]:
        """Return all entries for a client, newest ``pull_date`` first."""
        ...

    @abstractmethod
    async def append(self, entry: PullHistoryEntry) -> PullHistoryEntry:
        """Insert an entry and copy its values onto the owning client.

        The client's ``latest_pull_date``, ``latest_pull_by`` and
        ``gsos_version`` are overwritten unconditionally, even when the new
        ``pull_date`` is older than the current one. Implementations must not
        leave the history row behind if the client update fails.
        """
        ...
