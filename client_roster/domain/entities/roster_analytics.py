"""Value objects produced by the roster metrics computations."""

from dataclasses import dataclass, field
from enum import Enum


class PullStatus(str, Enum):
    """Recency buckets used by the pull-status filter."""

    ALL = "all"
    RECENT = "recent"
    OUTDATED = "outdated"
    NEVER = "never"


class HealthStatus(str, Enum):
    """Health-score bands used by the health filter."""

    ALL = "all"
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class HealthScore:
    """Discrete freshness classification of a single client."""

    value: int
    label: str
    color: str


@dataclass
class RosterFilter:
    """Dashboard filter inputs — every field is optional."""

    search: str = ""
    version: str = ""
    pull_status: PullStatus = PullStatus.ALL
    health_status: HealthStatus = HealthStatus.ALL


@dataclass
class RosterAnalytics:
    """Fleet-wide metrics derived from a list of clients."""

    total_clients: int
    recent_pulls: int
    outdated_clients: int
    clients_with_history: int
    distinct_versions: int
    healthy_clients: int
    health_score: int
    version_distribution: list[tuple[str, int]] = field(default_factory=list)
    top_contributors: list[tuple[str, int]] = field(default_factory=list)
