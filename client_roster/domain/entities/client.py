"""Domain entity — a tracked GSOS client deployment."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalise to UTC; naive values are taken to be UTC already.

    SQLite stores wall-clock time only, so everything is converted before it
    is written and tagged again when read back.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass
class Client:
    """Core domain entity for one external deployment being tracked.

    ``password`` holds the one-way hash and ``original_password`` the
    encrypted reversible copy; both are always derived from the same input.
    The ``latest_*`` fields mirror the most recently appended pull.
    """

    client_name: str
    domain_url: str
    client_id: str
    password: str = ""
    original_password: str = ""
    latest_pull_date: datetime | None = None
    latest_pull_by: str | None = None
    gsos_version: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_pull_history(self) -> bool:
        return self.latest_pull_date is not None

    def update(
        self,
        client_name: str | None = None,
        domain_url: str | None = None,
        client_id: str | None = None,
        latest_pull_date: datetime | None = ...,  # type: ignore[assignment]
        latest_pull_by: str | None = ...,  # type: ignore[assignment]
        gsos_version: str | None = ...,  # type: ignore[assignment]
    ) -> None:
        """Update mutable fields and refresh the updated_at timestamp.

        The pull summary fields use ``...`` as "not provided" so callers can
        clear them explicitly with ``None``.
        """
        if client_name is not None:
            self.client_name = client_name
        if domain_url is not None:
            self.domain_url = domain_url
        if client_id is not None:
            self.client_id = client_id
        if latest_pull_date is not ...:
            self.latest_pull_date = latest_pull_date
        if latest_pull_by is not ...:
            self.latest_pull_by = latest_pull_by
        if gsos_version is not ...:
            self.gsos_version = gsos_version
        self.updated_at = datetime.now(timezone.utc)

    def set_credentials(self, password_hash: str, sealed_password: str) -> None:
        """Replace both credential fields together."""
        self.password = password_hash
        self.original_password = sealed_password
        self.updated_at = datetime.now(timezone.utc)
