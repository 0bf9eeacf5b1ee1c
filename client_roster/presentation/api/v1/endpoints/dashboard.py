"""Dashboard analytics and report export endpoints."""

from datetime import datetime, timezone
from typing import Literal

from fastapi import APIRouter, Depends, Query, Response

from client_roster.application.schemas import RosterAnalyticsResponse
from client_roster.application.services import DashboardService
from client_roster.application.services.export_service import EXPORTERS
from client_roster.domain.entities import HealthStatus, PullStatus, RosterFilter
from client_roster.infrastructure.dependencies import get_dashboard_service

router = APIRouter(prefix="/clients", tags=["Dashboard"])


def roster_filter(
    search: str = Query("", description="Case-insensitive text search"),
    version: str = Query("", description="Substring of the GSOS version"),
    pull_status: PullStatus = Query(PullStatus.ALL),
    health_status: HealthStatus = Query(HealthStatus.ALL),
) -> RosterFilter:
    """Collects the shared filter query parameters."""
    return RosterFilter(
        search=search,
        version=version,
        pull_status=pull_status,
        health_status=health_status,
    )


@router.get("/analytics", response_model=RosterAnalyticsResponse)
async def get_analytics(
    criteria: RosterFilter = Depends(roster_filter),
    service: DashboardService = Depends(get_dashboard_service),
) -> RosterAnalyticsResponse:
    """Fleet metrics for the clients matching the filters."""
    analytics = await service.analytics(criteria)
    return RosterAnalyticsResponse.from_analytics(analytics)


@router.get("/export/{fmt}")
async def export_clients(
    fmt: Literal["xlsx", "csv", "pdf"],
    filename: str = Query("gsos-clients", pattern=r"^[A-Za-z0-9_.-]{1,100}$"),
    criteria: RosterFilter = Depends(roster_filter),
    service: DashboardService = Depends(get_dashboard_service),
) -> Response:
    """Download the filtered client list as Excel, CSV or PDF."""
    now = datetime.now(timezone.utc)
    clients = await service.filtered_clients(criteria, now)
    artifact = EXPORTERS[fmt](clients, filename=filename, now=now)
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )
