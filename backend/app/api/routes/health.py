"""Healthcheck — liveness plus database readiness in one check.

Invariants:
    - GET /healthcheck needs no token
    - 200 with state "active" when the database answers, 503 with state "inactive" otherwise
"""

import logging
import time

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])

SERVER_NAME = "Week List"


@router.get("/healthcheck")
async def health_check():
    """Report server state and database connectivity."""
    started = time.perf_counter()
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    health = {
        "serverName": SERVER_NAME,
        "currentTime": int(time.time() * 1000),
        "state": "active" if db_ok else "inactive",
        "database": "healthy" if db_ok else "unavailable",
        "responseTime": round((time.perf_counter() - started) * 1000, 3),
    }
    if not db_ok:
        logger.warning("Healthcheck failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health,
        )
    return health
