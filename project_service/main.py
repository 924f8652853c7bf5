"""
Project Service - FastAPI Application
Project lifecycle and membership, reachable only through internal RPC
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI

from shared.utils.health import create_health_router
from shared.utils.logger import log_requests, setup_logging
from shared.utils.rpc import register_rpc_exception_handlers

from project_service.config import settings
from project_service.routes import rpc
from project_service.services.project_service import ProjectService
from project_service.utils.database import ProjectDatabase

setup_logging("project-service", settings.log_level, settings.log_format, settings.logging_config_path)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    logger.info("Starting Project Service")

    db = ProjectDatabase(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size
    )
    await db.initialize()
    app.state.db = db
    app.state.project_service = ProjectService(db)
    logger.info("Project Service startup complete")

    yield

    await db.close()
    logger.info("Project Service shutdown complete")


app = FastAPI(
    title="Project Tracker - Project Service",
    description="Project lifecycle and membership",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan
)

register_rpc_exception_handlers(app)
app.middleware("http")(log_requests)

app.include_router(create_health_router("project-service"), tags=["Health"])
app.include_router(rpc.router, tags=["RPC"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "project_service.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level="info"
    )
