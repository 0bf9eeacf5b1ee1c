"""Pydantic DTOs for pull history entries."""

from datetime import datetime

from pydantic import BaseModel, Field


class PullHistoryCreate(BaseModel):
    """Schema for recording a pull. ``pull_date`` is supplied by the caller."""

    pull_date: datetime = Field(..., examples=["2026-10-01T09:30:00Z"])
    pull_by: str = Field(..., min_length=1, max_length=255, examples=["jane.doe"])
    version: str | None = Field(None, max_length=100, examples=["4.2.1"])


class PullHistoryResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    client_id: int
    pull_date: datetime
    pull_by: str
    version: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
