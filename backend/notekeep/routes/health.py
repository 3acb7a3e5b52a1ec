"""
NoteKeep — Health Check Route
==============================

What:  Health check endpoint for monitoring and container probes.
How:   Loads the state file through the store (the same path every request
       takes) and reports whether it succeeded.

Status levels:
    - healthy:   State file readable (HTTP 200)
    - unhealthy: State file missing permissions, corrupted, or on a dead volume (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from notekeep import __version__
from notekeep.exceptions import StorageError
from notekeep.schemas.note import HealthResponse
from notekeep.services.note_store import NoteStore, get_note_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "State file unavailable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: NoteStore = Depends(get_note_store),
) -> HealthResponse:
    storage_status = "readable"
    overall = "healthy"

    try:
        await store.list_all()
    except StorageError as e:
        storage_status = "unavailable"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: state file unavailable: %s", e.message)

    return HealthResponse(
        status=overall,
        version=__version__,
        storage=storage_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
