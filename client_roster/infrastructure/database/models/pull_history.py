"""SQLAlchemy ORM model for pull history entries."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from client_roster.infrastructure.database.base import Base


class PullHistoryModel(Base):
    """ORM model — maps to the 'pull_history' table.

    Rows disappear with their client through the ON DELETE CASCADE foreign key.
    """

    __tablename__ = "pull_history"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"), nullable=False
    )
    pull_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    pull_by: Mapped[str] = mapped_column(String(255), nullable=False)
    version: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_pull_history_client_date", "client_id", "pull_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<PullHistoryModel(id={self.id}, client_id={self.client_id}, "
            f"pull_by='{self.pull_by}')>"
        )
