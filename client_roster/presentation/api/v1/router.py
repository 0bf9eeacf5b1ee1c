"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from client_roster.presentation.api.v1.endpoints.health import router as health_router
from client_roster.presentation.api.v1.endpoints.dashboard import router as dashboard_router
from client_roster.presentation.api.v1.endpoints.clients import router as clients_router
from client_roster.presentation.api.v1.endpoints.notifications import router as notifications_router
from client_roster.presentation.api.v1.settings_controller import router as settings_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
# dashboard routes live under /clients/... and must be matched before /clients/{id}
router.include_router(dashboard_router)
router.include_router(clients_router)
router.include_router(notifications_router)
router.include_router(settings_router)
