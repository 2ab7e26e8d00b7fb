"""
Daybook Backend — Event Route Handlers
========================================

What:  POST/GET/PUT/DELETE under /event. Same shape as routes/notes.py.
       dateTime is required on create and cannot be cleared by an update.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user_id
from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.event import EventIn, EventOut, EventWriteResponse
from app.services.event_service import event_service

router = APIRouter(
    prefix="/event",
    tags=["Events"],
    responses={
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
)


@router.post(
    "",
    status_code=201,
    response_model=EventWriteResponse,
    responses={400: {"description": "dateTime missing or malformed", "model": ErrorResponse}},
    summary="Create an event",
)
async def create_event(
    payload: Optional[EventIn] = None,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> EventWriteResponse:
    fields = payload.model_dump(exclude_unset=True) if payload else {}
    event = await event_service.create(db, user_id, fields)
    return EventWriteResponse(message="Event created", event=EventOut.model_validate(event))


@router.get(
    "",
    response_model=List[EventOut],
    responses={404: {"description": "Caller has no events", "model": ErrorResponse}},
    summary="List the caller's events by date",
)
async def list_events(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[EventOut]:
    events = await event_service.list_for_owner(db, user_id)
    return [EventOut.model_validate(event) for event in events]


@router.get(
    "/{event_id}",
    response_model=EventOut,
    responses={404: {"description": "Event not found", "model": ErrorResponse}},
    summary="Get a single event by ID",
)
async def get_event(
    event_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> EventOut:
    event = await event_service.get(db, event_id, user_id)
    return EventOut.model_validate(event)


@router.put(
    "/{event_id}",
    response_model=EventWriteResponse,
    responses={
        400: {"description": "dateTime malformed or cleared", "model": ErrorResponse},
        404: {"description": "Event not found", "model": ErrorResponse},
    },
    summary="Update an event",
)
async def update_event(
    event_id: str,
    payload: Optional[EventIn] = None,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> EventWriteResponse:
    fields = payload.model_dump(exclude_unset=True) if payload else {}
    event = await event_service.update(db, event_id, fields, user_id)
    return EventWriteResponse(message="Event updated", event=EventOut.model_validate(event))


@router.delete(
    "/{event_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Event not found", "model": ErrorResponse}},
    summary="Delete an event",
)
async def delete_event(
    event_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await event_service.delete(db, event_id, user_id)
    return Response(status_code=204)
