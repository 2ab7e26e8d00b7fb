"""
Daybook Backend — Note Route Handlers
=======================================

What:  POST/GET/PUT/DELETE under /note.
How:   Each handler receives the caller's verified user id and a database
       session through Depends(), delegates to NoteService, and shapes the
       result. Errors are raised by the service and turned into responses by
       the global exception handlers in main.py.

Response shapes:
    POST   /note        201  {"message": "Note saved", "note": {...}}
    GET    /note        200  [{...}, ...]
    GET    /note/{id}   200  {...}
    PUT    /note/{id}   200  {"message": "Note updated", "note": {...}}
    DELETE /note/{id}   204  (empty)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user_id
from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.note import NoteIn, NoteOut, NoteWriteResponse
from app.services.note_service import note_service

router = APIRouter(
    prefix="/note",
    tags=["Notes"],
    responses={
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
)


@router.post(
    "",
    status_code=201,
    response_model=NoteWriteResponse,
    responses={400: {"description": "Note text missing", "model": ErrorResponse}},
    summary="Create a note",
)
async def create_note(
    payload: Optional[NoteIn] = None,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> NoteWriteResponse:
    """
    Create a note owned by the caller.

    A `userId` in the body is ignored; the owner is always the token subject.
    """
    fields = payload.model_dump(exclude_unset=True) if payload else {}
    note = await note_service.create(db, user_id, fields)
    return NoteWriteResponse(message="Note saved", note=NoteOut.model_validate(note))


@router.get(
    "",
    response_model=List[NoteOut],
    responses={404: {"description": "Caller has no notes", "model": ErrorResponse}},
    summary="List the caller's notes",
)
async def list_notes(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteOut]:
    notes = await note_service.list_for_owner(db, user_id)
    return [NoteOut.model_validate(note) for note in notes]


@router.get(
    "/{note_id}",
    response_model=NoteOut,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> NoteOut:
    note = await note_service.get(db, note_id, user_id)
    return NoteOut.model_validate(note)


@router.put(
    "/{note_id}",
    response_model=NoteWriteResponse,
    responses={
        400: {"description": "Invalid note text", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Update a note",
)
async def update_note(
    note_id: str,
    payload: Optional[NoteIn] = None,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> NoteWriteResponse:
    fields = payload.model_dump(exclude_unset=True) if payload else {}
    note = await note_service.update(db, note_id, fields, user_id)
    return NoteWriteResponse(message="Note updated", note=NoteOut.model_validate(note))


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete(db, note_id, user_id)
    return Response(status_code=204)
