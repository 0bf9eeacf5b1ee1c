"""Root API router; every versioned router is mounted under /api."""

from fastapi import APIRouter

from client_roster.presentation.api.v1.router import router as v1_router

router = APIRouter(prefix="/api")
router.include_router(v1_router)
