"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health always returns 200 if process is up (liveness),
      body {success, message, timestamp} with no data
    - GET /health/ready returns 503 if database is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from catalog_api.api.responses import build_envelope, send_error, send_success

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    body = build_envelope(True, "Server is healthy")
    body["timestamp"] = datetime.now(timezone.utc).isoformat()
    return JSONResponse(status_code=status.HTTP_200_OK, content=body)


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — includes database connectivity."""
    db_manager = getattr(request.app.state, "db_manager", None)
    db_ok = await db_manager.health_check() if db_manager else False
    if not db_ok:
        return send_error(
            "Server is not ready",
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "database_unavailable",
        )
    return send_success({"database": "healthy"}, "Server is ready")
