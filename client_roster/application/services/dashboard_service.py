"""Application service behind the dashboard's list, analytics and export views."""

from datetime import datetime

from client_roster.application.services import roster_metrics
from client_roster.application.services.client_service import ClientService
from client_roster.domain.entities import Client, RosterAnalytics, RosterFilter


class DashboardService:
    """Loads the full roster once per call and derives the filtered view from it."""

    def __init__(self, client_service: ClientService):
        self._client_service = client_service

    async def filtered_clients(
        self, criteria: RosterFilter | None = None, now: datetime | None = None
    ) -> list[Client]:
        clients = await self._client_service.list_clients()
        return roster_metrics.filter_clients(clients, criteria, now)

    async def analytics(
        self, criteria: RosterFilter | None = None, now: datetime | None = None
    ) -> RosterAnalytics:
        clients = await self.filtered_clients(criteria, now)
        return roster_metrics.summarize(clients, now)
