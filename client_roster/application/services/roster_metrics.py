"""Dashboard computations over an in-memory client list.

Everything here is a pure function of its inputs plus ``now``. Time windows
compare the elapsed time since ``latest_pull_date`` against whole-day
thresholds:

* recent    — elapsed < 7 days
* outdated  — no pull, or elapsed > 30 days
* health    — elapsed < 7 days → 90, elapsed < 30 days → 70, otherwise 30

So a pull exactly 7 days old scores 70 and is no longer "recent", and a pull
exactly 30 days old scores 30 while not yet counting as "outdated".
"Recent" is strict rather than inclusive at 7 days so that it agrees with
the health bands: nothing counted as recent ever scores below "Excellent".
"""

import math
from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from client_roster.domain.entities import (
    Client,
    HealthScore,
    HealthStatus,
    PullStatus,
    RosterAnalytics,
    RosterFilter,
    ensure_utc,
)

RECENT_WINDOW = timedelta(days=7)
OUTDATED_WINDOW = timedelta(days=30)

UNKNOWN_VERSION = "Unknown"
TOP_CONTRIBUTORS_LIMIT = 5

EXCELLENT = HealthScore(value=90, label="Excellent", color="#4caf50")
GOOD = HealthScore(value=70, label="Good", color="#ff9800")
NEEDS_ATTENTION = HealthScore(value=30, label="Needs Attention", color="#f44336")


def _now(now: datetime | None) -> datetime:
    return ensure_utc(now) if now is not None else datetime.now(timezone.utc)


def time_since_last_pull(client: Client, now: datetime | None = None) -> timedelta | None:
    """Elapsed time since the client's latest pull, or None if it never pulled."""
    if client.latest_pull_date is None:
        return None
    return _now(now) - ensure_utc(client.latest_pull_date)


def is_recent(client: Client, now: datetime | None = None) -> bool:
    elapsed = time_since_last_pull(client, now)
    return elapsed is not None and elapsed < RECENT_WINDOW


def is_outdated(client: Client, now: datetime | None = None) -> bool:
    elapsed = time_since_last_pull(client, now)
    return elapsed is None or elapsed > OUTDATED_WINDOW


def health_score(client: Client, now: datetime | None = None) -> HealthScore:
    """Three-step freshness classifier; a client that never pulled needs attention."""
    elapsed = time_since_last_pull(client, now)
    if elapsed is None:
        return NEEDS_ATTENTION
    if elapsed < RECENT_WINDOW:
        return EXCELLENT
    if elapsed < OUTDATED_WINDOW:
        return GOOD
    return NEEDS_ATTENTION


def matches_search(client: Client, search: str) -> bool:
    """Case-insensitive substring match over the searchable text fields."""
    term = search.strip().lower()
    if not term:
        return True
    fields = (
        client.client_name,
        client.domain_url,
        client.client_id,
        client.latest_pull_by,
        client.gsos_version,
    )
    return any(value and term in value.lower() for value in fields)


def _matches_pull_status(client: Client, status: PullStatus, now: datetime) -> bool:
    if status is PullStatus.RECENT:
        return is_recent(client, now)
    if status is PullStatus.OUTDATED:
        return is_outdated(client, now)
    if status is PullStatus.NEVER:
        return client.latest_pull_date is None
    return True


def _matches_health_status(client: Client, status: HealthStatus, now: datetime) -> bool:
    value = health_score(client, now).value
    if status is HealthStatus.HEALTHY:
        return value >= 70
    if status is HealthStatus.WARNING:
        return 30 <= value < 70
    if status is HealthStatus.CRITICAL:
        return value < 30
    return True


def filter_clients(
    clients: Iterable[Client],
    criteria: RosterFilter | None = None,
    now: datetime | None = None,
) -> list[Client]:
    """Apply search, version, pull-status and health filters, preserving order."""
    criteria = criteria or RosterFilter()
    current = _now(now)
    version = criteria.version.strip().lower()

    result: list[Client] = []
    for client in clients:
        if not matches_search(client, criteria.search):
            continue
        if version and not (client.gsos_version and version in client.gsos_version.lower()):
            continue
        if not _matches_pull_status(client, criteria.pull_status, current):
            continue
        if not _matches_health_status(client, criteria.health_status, current):
            continue
        result.append(client)
    return result


def _ranked(counter: Counter[str]) -> list[tuple[str, int]]:
    # Counter keeps insertion order and sorted() is stable, so ties stay
    # in first-seen order.
    return sorted(counter.items(), key=lambda item: item[1], reverse=True)


def version_histogram(
    clients: Iterable[Client], unknown_label: str = UNKNOWN_VERSION
) -> list[tuple[str, int]]:
    """Clients per GSOS version, most common first."""
    return _ranked(Counter(c.gsos_version or unknown_label for c in clients))


def top_contributors(
    clients: Iterable[Client], limit: int = TOP_CONTRIBUTORS_LIMIT
) -> list[tuple[str, int]]:
    """Most frequent ``latest_pull_by`` values; clients without one are skipped."""
    return _ranked(Counter(c.latest_pull_by for c in clients if c.latest_pull_by))[:limit]


def fleet_health_score(clients: list[Client], now: datetime | None = None) -> int:
    """Percentage of clients with a recent pull, 0 for an empty roster."""
    if not clients:
        return 0
    current = _now(now)
    recent = sum(1 for c in clients if is_recent(c, current))
    # Half-up rounding, so 12.5% reports as 13
    return math.floor(recent / len(clients) * 100 + 0.5)


def distinct_versions(clients: Iterable[Client]) -> int:
    return len({c.gsos_version for c in clients if c.gsos_version})


def summarize(clients: list[Client], now: datetime | None = None) -> RosterAnalytics:
    """Compute every dashboard metric for ``clients`` in one pass of calls."""
    current = _now(now)
    return RosterAnalytics(
        total_clients=len(clients),
        recent_pulls=sum(1 for c in clients if is_recent(c, current)),
        outdated_clients=sum(1 for c in clients if is_outdated(c, current)),
        clients_with_history=sum(1 for c in clients if c.has_pull_history),
        distinct_versions=distinct_versions(clients),
        healthy_clients=sum(1 for c in clients if health_score(c, current).value >= 70),
        health_score=fleet_health_score(clients, current),
        version_distribution=version_histogram(clients),
        top_contributors=top_contributors(clients),
    )
