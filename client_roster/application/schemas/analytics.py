"""Pydantic DTOs for dashboard analytics."""

from pydantic import BaseModel

from client_roster.domain.entities import RosterAnalytics


class CountEntry(BaseModel):
    """A ``(label, count)`` pair from a histogram."""

    label: str
    count: int


class RosterAnalyticsResponse(BaseModel):
    total_clients: int
    recent_pulls: int
    outdated_clients: int
    clients_with_history: int
    distinct_versions: int
    healthy_clients: int
    health_score: int
    version_distribution: list[CountEntry]
    top_contributors: list[CountEntry]

    @classmethod
    def from_analytics(cls, analytics: RosterAnalytics) -> "RosterAnalyticsResponse":
        return cls(
            total_clients=analytics.total_clients,
            recent_pulls=analytics.recent_pulls,
            outdated_clients=analytics.outdated_clients,
            clients_with_history=analytics.clients_with_history,
            distinct_versions=analytics.distinct_versions,
            healthy_clients=analytics.healthy_clients,
            health_score=analytics.health_score,
            version_distribution=[
                CountEntry(label=label, count=count)
                for label, count in analytics.version_distribution
            ],
            top_contributors=[
                CountEntry(label=label, count=count)
                for label, count in analytics.top_contributors
            ],
        )
