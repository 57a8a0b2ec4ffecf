"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the executor cannot run a trivial command
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "macmaint",
        "version": "0.1.0",
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — the executor can spawn a process."""
    executor = getattr(request.app.state, "executor", None)
    ok = False
    if executor is not None:
        result = await executor.execute("true", [], 5.0)
        ok = result.ok
    if not ok:
        logger.warning("Readiness check failed: executor unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "executor_unavailable",
            },
        )
    return {"status": "ready", "checks": {"executor": "healthy"}}
