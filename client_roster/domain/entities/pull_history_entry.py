"""Domain entity — one recorded version pull for a client."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class PullHistoryEntry:
    """Append-only record of a single pull.

    ``pull_date`` is asserted by the caller; ``created_at`` is when the
    row was written and may differ.
    """

    client_id: int
    pull_date: datetime
    pull_by: str
    version: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
