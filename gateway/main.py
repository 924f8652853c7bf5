"""
API Gateway - FastAPI Application
The only public HTTP surface; resolves identity and forwards commands to the
backend services over internal RPC
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.clients import AuthClient, ProjectClient, TaskClient
from shared.utils.logger import log_requests, setup_logging

from gateway.config import settings
from gateway.routes import auth, health, projects, tasks
from gateway.utils.errors import register_exception_handlers

setup_logging("api-gateway", settings.log_level, settings.log_format, settings.logging_config_path)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    logger.info("Starting API Gateway")

    app.state.auth_client = AuthClient(settings.auth_service_url, read_timeout=settings.rpc_read_timeout)
    app.state.project_client = ProjectClient(settings.project_service_url, read_timeout=settings.rpc_read_timeout)
    app.state.task_client = TaskClient(settings.task_service_url, read_timeout=settings.rpc_read_timeout)

    for client in (app.state.auth_client, app.state.project_client, app.state.task_client):
        await client.start()
    logger.info("API Gateway startup complete")

    yield

    for client in (app.state.auth_client, app.state.project_client, app.state.task_client):
        await client.stop()
    logger.info("API Gateway shutdown complete")


app = FastAPI(
    title="Project Tracker - API Gateway",
    description="Authentication, projects and tasks",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.middleware("http")(log_requests)

app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(projects.router, prefix="/projects", tags=["Projects"])
app.include_router(tasks.router, tags=["Tasks"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "gateway.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level="info"
    )
