"""Health & Readiness Probes — ping and readiness endpoints.

Invariants:
    - GET /ping answers 202 "pong" only if the identities table can be counted
    - GET /health/ready returns 503 if the database is unreachable
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

import courier.infrastructure.database as database
from courier.api.dependencies import get_user_service
from courier.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/ping", status_code=status.HTTP_202_ACCEPTED)
async def ping(users: UserService = Depends(get_user_service)):
    """Liveness probe backed by a trivial query."""
    await users.total()
    return "pong"


@router.get("/health/ready")
async def readiness_check():
    """Readiness probe — includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        logger.warning(
            "Readiness check failed", extra={"path": "/api/v1/health/ready"},
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
