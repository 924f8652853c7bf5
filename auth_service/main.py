"""
Auth Service - FastAPI Application
Credential and identity authority, reachable only through internal RPC
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI

from shared.utils.health import create_health_router
from shared.utils.logger import log_requests, setup_logging
from shared.utils.rpc import register_rpc_exception_handlers
from shared.utils.security import SecurityUtils

from auth_service.config import settings
from auth_service.routes import rpc
from auth_service.services.auth_service import AuthService
from auth_service.utils.database import UserDatabase

setup_logging("auth-service", settings.log_level, settings.log_format, settings.logging_config_path)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    logger.info("Starting Auth Service")

    db = UserDatabase(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size
    )
    await db.initialize()
    app.state.db = db

    security = SecurityUtils(
        settings.jwt_secret,
        settings.jwt_algorithm,
        settings.jwt_expires_hours
    )
    app.state.auth_service = AuthService(db, security)
    logger.info("Auth Service startup complete")

    yield

    await db.close()
    logger.info("Auth Service shutdown complete")


app = FastAPI(
    title="Project Tracker - Auth Service",
    description="Credential verification, token issuance and user lookup",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan
)

register_rpc_exception_handlers(app)
app.middleware("http")(log_requests)

app.include_router(create_health_router("auth-service"), tags=["Health"])
app.include_router(rpc.router, tags=["RPC"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "auth_service.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level="info"
    )
