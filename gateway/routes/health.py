"""
Health check routes for the gateway
"""

import asyncio
from datetime import datetime, timezone

from fastapi import APIRouter, Request
import structlog

logger = structlog.get_logger(__name__)

router = APIRouter()

SERVICE_NAME = "api-gateway"
SERVICE_VERSION = "1.0.0"


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "service": SERVICE_NAME,
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": SERVICE_VERSION
    }


@router.get("/health/services")
async def services_health_check(request: Request):
    """Reachability of every backend service"""
    clients = [
        request.app.state.auth_client,
        request.app.state.project_client,
        request.app.state.task_client,
    ]
    results = await asyncio.gather(*(client.health_check() for client in clients))
    components = {client.service_name: result for client, result in zip(clients, results)}

    overall = "healthy" if all(result == "healthy" for result in results) else "degraded"
    if overall != "healthy":
        logger.warning("Backend services degraded", components=components)

    return {
        "service": SERVICE_NAME,
        "status": overall,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": components
    }


@router.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "docs": "/docs"
    }
