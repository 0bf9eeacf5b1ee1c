"""Settings API controller — persisted dashboard display settings."""

from fastapi import APIRouter

from client_roster.application.schemas import DashboardSettings, DashboardSettingsUpdate
from client_roster.application.services.dashboard_settings_service import (
    get_dashboard_settings,
    reset_dashboard_settings,
    update_dashboard_settings,
)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/dashboard", response_model=DashboardSettings)
async def get_settings_endpoint():
    """Return the current dashboard settings merged over the defaults."""
    return get_dashboard_settings()


@router.put("/dashboard", response_model=DashboardSettings)
async def put_settings(body: DashboardSettingsUpdate):
    """Update some settings. Unknown keys are rejected with 422."""
    return update_dashboard_settings(body)


@router.delete("/dashboard", response_model=DashboardSettings)
async def reset_settings():
    """Restore the default settings."""
    return reset_dashboard_settings()
