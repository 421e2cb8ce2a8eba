"""
QuickNotes Backend — Health Check Route
=========================================

What:  Liveness endpoint for monitoring and container probes.
How:   Answers 200 whenever the process is serving. A SELECT 1 against the
       store is reported in the `database` field for visibility, but does
       not change the status code: the readiness gate already guarantees
       the store was reachable at startup.
"""

import logging
import time

from fastapi import APIRouter, Depends

from quicknotes import __version__
from quicknotes.schemas.note import HealthResponse
from quicknotes.store import NoteStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Process start time, for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service liveness check",
)
async def health_check(store: NoteStore = Depends(get_store)) -> HealthResponse:
    db_status = "connected"
    try:
        await store.ping()
    except Exception as e:
        db_status = "disconnected"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status="ok",
        message="Backend is running",
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
