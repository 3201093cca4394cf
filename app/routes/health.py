"""Health check endpoints for monitoring and readiness probes.

Provides endpoints to verify the API is running and its store is reachable.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException

from app.config import get_settings
from app.services import database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    """Basic liveness check.

    Returns:
        Dictionary with status and timestamp.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now().astimezone().isoformat(),
    }


@router.get("/health/ready")
def readiness_check() -> dict:
    """Readiness check verifying the database and service configuration.

    Returns:
        Dictionary with status and individual check results.

    Raises:
        HTTPException: If any dependency check fails.
    """
    checks = {}

    # Check MongoDB connection
    try:
        db = database.get_database()
        db.command("ping")
        checks["database"] = "ok"
    except Exception as e:
        logger.error("Database readiness check failed: %s", e)
        checks["database"] = "error: database unreachable"

    # Outbound services only need to be configured; they are not called here
    settings = get_settings()
    if settings.services.advice_url and settings.services.translate_url:
        checks["services"] = "ok"
    else:
        checks["services"] = "error: service URL missing"

    # Determine overall status
    all_ok = all(check == "ok" for check in checks.values())

    if not all_ok:
        raise HTTPException(
            status_code=503,
            detail={"status": "not ready", "checks": checks},
        )

    return {
        "status": "ready",
        "checks": checks,
    }
