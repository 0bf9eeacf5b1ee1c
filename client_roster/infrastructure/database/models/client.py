"""SQLAlchemy ORM model for the Client entity."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from client_roster.infrastructure.database.base import Base


class ClientModel(Base):
    """ORM model — maps to the 'clients' table."""

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    domain_url: Mapped[str] = mapped_column(String(255), nullable=False)
    client_id: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    original_password: Mapped[str] = mapped_column(Text, nullable=False)
    latest_pull_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    latest_pull_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    gsos_version: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_clients_client_name", "client_name"),
        Index("ix_clients_client_id", "client_id"),
    )

    def __repr__(self) -> str:
        return f"<ClientModel(id={self.id}, client_name='{self.client_name}')>"
