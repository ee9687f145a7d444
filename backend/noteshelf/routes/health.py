"""
NoteShelf Backend — Health Check Route
========================================

What:  Health check endpoint for monitoring and container probes.
How:   Lists the note store; if that works the notes directory exists (or
       was just created) and is readable.

Status levels:
    - healthy:   Note store reachable (HTTP 200)
    - unhealthy: Note store unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from noteshelf import __version__
from noteshelf.exceptions import NoteShelfError
from noteshelf.schemas.note import HealthResponse
from noteshelf.services.note_repository import NoteRepository, get_note_repository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    repository: NoteRepository = Depends(get_note_repository),
) -> HealthResponse:
    storage_status = "available"
    overall = "healthy"

    try:
        await repository.storage.list_keys()
    except NoteShelfError as e:
        storage_status = "unavailable"
        overall = "unhealthy"
        logger.warning("Health check: note store unreachable: %s", e.message)

    if overall == "unhealthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        storage=storage_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
