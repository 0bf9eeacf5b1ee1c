"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from client_roster.config import get_settings
from client_roster.domain.exceptions import CredentialError, StoreError
from client_roster.infrastructure.database import Base, engine
from client_roster.infrastructure.logging.log_config import setup_logging
from client_roster.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)

GENERIC_STORE_ERROR = "Internal store error"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — prepare the data directory and create tables."""
    settings = get_settings()
    setup_logging()

    # 1. Notification log and dashboard settings live under data_dir
    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)

    # 2. Create the SQL tables; the hosted backend is provisioned from schema.sql
    if settings.store_backend == "sql":
        if engine.dialect.name == "sqlite" and engine.url.database:
            Path(engine.url.database).parent.mkdir(parents=True, exist_ok=True)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready (%s)", engine.dialect.name)
    else:
        logger.info("Using hosted store at %s", settings.supabase_url or "<unset>")

    yield

    await engine.dispose()


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """500 for backend failures; the raw message is only echoed when configured."""
    logger.exception(
        "Store failure during %s %s", request.method, request.url.path, exc_info=exc
    )
    detail = str(exc) if get_settings().expose_error_details else GENERIC_STORE_ERROR
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail},
    )


async def credential_error_handler(request: Request, exc: CredentialError) -> JSONResponse:
    logger.error("Credential failure during %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Credential processing failed"},
    )


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(CredentialError, credential_error_handler)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "client_roster.main:app",
        host="0.0.0.0",
        port=5000,
        reload=True,
    )
