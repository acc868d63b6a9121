"""Health & Readiness Probes — liveness and database readiness.

Invariants:
    - GET /health/ returns 200 whenever the process is serving
    - GET /health/ready returns 503 until init_db has run and the database answers

Design Decisions:
    - db_manager read through the module at call time: it is assigned by init_db on startup
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from threadboard.infrastructure import database

SERVICE_NAME = "threadboard-api"

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": SERVICE_NAME}


@router.get("/ready")
async def readiness_check():
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "service": SERVICE_NAME},
        )
    return {"status": "ready", "service": SERVICE_NAME}
