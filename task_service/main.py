"""
Task Service - FastAPI Application
Task lifecycle, reachable only through internal RPC
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI

from shared.clients.project_client import ProjectClient
from shared.utils.health import create_health_router
from shared.utils.logger import log_requests, setup_logging
from shared.utils.rpc import register_rpc_exception_handlers

from task_service.config import settings
from task_service.routes import rpc
from task_service.services.task_service import TaskService
from task_service.utils.database import TaskDatabase

setup_logging("task-service", settings.log_level, settings.log_format, settings.logging_config_path)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    logger.info("Starting Task Service")

    db = TaskDatabase(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size
    )
    await db.initialize()
    app.state.db = db

    project_client = ProjectClient(settings.project_service_url, read_timeout=settings.rpc_read_timeout)
    await project_client.start()
    app.state.project_client = project_client

    app.state.task_service = TaskService(db, project_client)
    logger.info("Task Service startup complete")

    yield

    await project_client.stop()
    await db.close()
    logger.info("Task Service shutdown complete")


app = FastAPI(
    title="Project Tracker - Task Service",
    description="Task lifecycle with project validation",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan
)

register_rpc_exception_handlers(app)
app.middleware("http")(log_requests)

app.include_router(create_health_router("task-service"), tags=["Health"])
app.include_router(rpc.router, tags=["RPC"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "task_service.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level="info"
    )
