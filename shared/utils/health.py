"""
Health check routes shared by the backend services
"""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, HTTPException, Request

logger = structlog.get_logger(__name__)

SERVICE_VERSION = "1.0.0"


def create_health_router(service_name: str) -> APIRouter:
    """Build ``/health`` and ``/`` for a service whose store lives on ``app.state.db``"""
    router = APIRouter()

    @router.get("/health")
    async def health_check(request: Request):
        """Health check endpoint"""
        db = getattr(request.app.state, 'db', None)
        try:
            if db is not None and db.pool is not None:
                await db.ping()
                db_status = "healthy"
            else:
                db_status = "not_initialized"
        except Exception as e:
            logger.error("Health check failed", error=str(e))
            raise HTTPException(status_code=503, detail="Service unavailable")

        return {
            "service": service_name,
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": db_status,
            "version": SERVICE_VERSION
        }

    @router.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": service_name,
            "version": SERVICE_VERSION,
            "status": "running",
            "docs": "/docs"
        }

    return router
