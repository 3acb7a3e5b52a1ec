"""
NoteKeep — Notes Route Handlers
================================

What:  HTTP adapter for the note store.
How:   Parses path ids and JSON bodies, calls NoteStore, and maps store
       outcomes to the status codes below by raising RequestRejectedError.
       StorageError and unexpected exceptions propagate to the global
       handlers (→ 500).

Route Inventory:
    GET    /notes              200 list | 404 empty
    GET    /note/{id}          200 note | 404 invalid id or missing
    GET    /note/read/{title}  200 note | 404 missing
    POST   /note               201 note | 409 missing field or title taken
    PUT    /note/{id}          204      | 409 invalid id, nothing to update, title taken, missing
    DELETE /note/{id}          204      | 409 invalid id or missing
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response

from notekeep.exceptions import (
    ConflictError,
    NotFoundError,
    RequestRejectedError,
    ValidationError,
)
from notekeep.models.note import Note
from notekeep.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from notekeep.services.note_store import NoteStore, get_note_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

NOT_FOUND_MESSAGE = "Note not found"
CREATE_REJECTED_MESSAGE = "Cannot create note"
UPDATE_REJECTED_MESSAGE = "Cannot update note"
DELETE_REJECTED_MESSAGE = "Cannot delete note"


def parse_note_id(raw: str) -> Optional[int]:
    """Return the id if `raw` is a positive decimal integer, else None."""
    if not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    return value if value > 0 else None


def _to_response(note: Note) -> NoteResponse:
    return NoteResponse.model_validate(note, from_attributes=True)


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={
        404: {"description": "No notes stored", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all notes",
)
async def list_notes(
    response: Response,
    store: NoteStore = Depends(get_note_store),
) -> List[NoteResponse]:
    notes = await store.list_all()
    if not notes:
        raise RequestRejectedError(404, "No notes found", error="not_found")

    response.headers["X-Total-Count"] = str(len(notes))
    return [_to_response(note) for note in notes]


@router.get(
    "/note/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Invalid id or note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    parsed_id = parse_note_id(note_id)
    if parsed_id is None:
        raise RequestRejectedError(
            404, NOT_FOUND_MESSAGE, error="not_found", context={"raw_id": note_id}
        )

    note = await store.get_by_id(parsed_id)
    if note is None:
        raise RequestRejectedError(
            404, NOT_FOUND_MESSAGE, error="not_found", context={"note_id": parsed_id}
        )
    return _to_response(note)


@router.get(
    "/note/read/{title}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by exact title",
)
async def get_note_by_title(
    title: str,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    note = await store.get_by_title(title)
    if note is None:
        raise RequestRejectedError(
            404, NOT_FOUND_MESSAGE, error="not_found", context={"title": title}
        )
    return _to_response(note)


@router.post(
    "/note",
    status_code=201,
    response_model=NoteResponse,
    responses={
        409: {"description": "Missing field or title already used", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    try:
        note = await store.create(title=payload.title, content=payload.content)
    except (ValidationError, ConflictError) as e:
        raise RequestRejectedError(
            409,
            CREATE_REJECTED_MESSAGE,
            error=e.kind.value,
            context={"reason": e.reason.value, **e.context},
        ) from e
    return _to_response(note)


@router.put(
    "/note/{note_id}",
    status_code=204,
    response_class=Response,
    responses={
        409: {
            "description": "Invalid id, nothing to update, title already used, or note not found",
            "model": ErrorResponse,
        },
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a note's title and/or content",
)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    store: NoteStore = Depends(get_note_store),
) -> Response:
    parsed_id = parse_note_id(note_id)
    if parsed_id is None:
        raise RequestRejectedError(
            409, UPDATE_REJECTED_MESSAGE, error="validation_error", context={"raw_id": note_id}
        )

    try:
        await store.update(parsed_id, title=payload.title, content=payload.content)
    except (ValidationError, ConflictError, NotFoundError) as e:
        raise RequestRejectedError(
            409,
            UPDATE_REJECTED_MESSAGE,
            error=e.kind.value,
            context={"reason": e.reason.value, **e.context},
        ) from e
    return Response(status_code=204)


@router.delete(
    "/note/{note_id}",
    status_code=204,
    response_class=Response,
    responses={
        409: {"description": "Invalid id or note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    store: NoteStore = Depends(get_note_store),
) -> Response:
    parsed_id = parse_note_id(note_id)
    if parsed_id is None:
        raise RequestRejectedError(
            409, DELETE_REJECTED_MESSAGE, error="validation_error", context={"raw_id": note_id}
        )

    try:
        await store.delete(parsed_id)
    except NotFoundError as e:
        raise RequestRejectedError(
            409,
            DELETE_REJECTED_MESSAGE,
            error=e.kind.value,
            context={"reason": e.reason.value, **e.context},
        ) from e
    return Response(status_code=204)
