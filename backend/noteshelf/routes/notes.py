"""
NoteShelf Backend — Notes Route Handlers
==========================================

What:  Handles the /api/notes resource: list, fetch, create, update.
How:   Reads the JSON body, delegates to NoteRepository, shapes the result.
Who:   Called by the bundled front-end and any other HTTP client.

Endpoints:
    GET  /api/notes        → 200, array of notes
    GET  /api/notes/{id}   → 200 + note, or 404
    POST /api/notes        → 201 + created note
    PUT  /api/notes/{id}   → 200 + updated note, or 404

Failures are not handled here: NotFoundError and every other exception are
turned into responses by the global handlers registered in main.py.
"""

import json
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request

from noteshelf.config import settings
from noteshelf.exceptions import InvalidRequestBodyError, NotFoundError
from noteshelf.schemas.note import ErrorResponse, NoteResponse
from noteshelf.services.note_repository import NoteRepository, get_note_repository

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api", tags=["Notes"])

_NOT_FOUND = {404: {"description": "Note not found", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}

NOTE_FIELDS = ("title", "description", "content")


async def read_json_body(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    An empty body, or JSON that is not an object, yields {} so every field
    falls back to its default. The body is read in chunks and abandoned as
    soon as it passes settings.max_body_size.

    Raises:
        InvalidRequestBodyError: Body too large or not valid JSON.
    """
    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > settings.max_body_size:
            raise InvalidRequestBodyError(
                message="Payload too large",
                context={"limit": settings.max_body_size},
            )
        chunks.append(chunk)

    body = b"".join(chunks)
    if not body.strip():
        return {}
    try:
        data = json.loads(body)
    except ValueError as e:
        raise InvalidRequestBodyError(context={"error": str(e)}) from e
    return data if isinstance(data, dict) else {}


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses=_SERVER_ERROR,
    summary="List all notes",
)
async def list_notes(
    repository: NoteRepository = Depends(get_note_repository),
) -> List[NoteResponse]:
    """Every stored note, in storage-key order. Not paginated."""
    notes = await repository.list_all()
    return [NoteResponse.from_note(note) for note in notes]


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    repository: NoteRepository = Depends(get_note_repository),
) -> NoteResponse:
    note = await repository.find_by_id(note_id)
    if note is None:
        raise NotFoundError(resource="note", resource_id=note_id)
    return NoteResponse.from_note(note)


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=201,
    responses=_SERVER_ERROR,
    summary="Create a note",
    description=(
        "Body: {title?, description?, content?}. A missing or blank title takes "
        "the template title, then 'Untitled Note'. Missing description/content "
        "are empty; null takes the template value."
    ),
)
async def create_note(
    body: Dict[str, Any] = Depends(read_json_body),
    repository: NoteRepository = Depends(get_note_repository),
) -> NoteResponse:
    # Absent keys keep create()'s defaults; an explicit null reaches it as None
    fields = {name: body[name] for name in NOTE_FIELDS if name in body}
    note = await repository.create(**fields)
    return NoteResponse.from_note(note)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Update a note",
    description=(
        "Body: {title?, description?, content?}. Only string fields are applied. "
        "Changing the title may rename the note's file; the id stays the same."
    ),
)
async def update_note(
    note_id: str,
    body: Dict[str, Any] = Depends(read_json_body),
    repository: NoteRepository = Depends(get_note_repository),
) -> NoteResponse:
    note = await repository.update(note_id, body)
    if note is None:
        raise NotFoundError(resource="note", resource_id=note_id)
    return NoteResponse.from_note(note)
