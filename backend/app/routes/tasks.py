"""
Daybook Backend — Task Route Handlers
=======================================

What:  POST/GET/PUT/DELETE under /task. Same shape as routes/notes.py.
       The list is sorted by dueDate, undated tasks first.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user_id
from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.task import TaskIn, TaskOut, TaskWriteResponse
from app.services.task_service import task_service

router = APIRouter(
    prefix="/task",
    tags=["Tasks"],
    responses={
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
)


@router.post(
    "",
    status_code=201,
    response_model=TaskWriteResponse,
    responses={400: {"description": "Invalid status or dueDate", "model": ErrorResponse}},
    summary="Create a task",
)
async def create_task(
    payload: Optional[TaskIn] = None,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> TaskWriteResponse:
    """Create a task owned by the caller. Status defaults to 'pending'."""
    fields = payload.model_dump(exclude_unset=True) if payload else {}
    task = await task_service.create(db, user_id, fields)
    return TaskWriteResponse(message="Task created", task=TaskOut.model_validate(task))


@router.get(
    "",
    response_model=List[TaskOut],
    responses={404: {"description": "Caller has no tasks", "model": ErrorResponse}},
    summary="List the caller's tasks by due date",
)
async def list_tasks(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[TaskOut]:
    tasks = await task_service.list_for_owner(db, user_id)
    return [TaskOut.model_validate(task) for task in tasks]


@router.get(
    "/{task_id}",
    response_model=TaskOut,
    responses={404: {"description": "Task not found", "model": ErrorResponse}},
    summary="Get a single task by ID",
)
async def get_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> TaskOut:
    task = await task_service.get(db, task_id, user_id)
    return TaskOut.model_validate(task)


@router.put(
    "/{task_id}",
    response_model=TaskWriteResponse,
    responses={
        400: {"description": "Invalid status or dueDate", "model": ErrorResponse},
        404: {"description": "Task not found", "model": ErrorResponse},
    },
    summary="Update a task",
)
async def update_task(
    task_id: str,
    payload: Optional[TaskIn] = None,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> TaskWriteResponse:
    """Either status can be set at any time; there are no transition rules."""
    fields = payload.model_dump(exclude_unset=True) if payload else {}
    task = await task_service.update(db, task_id, fields, user_id)
    return TaskWriteResponse(message="Task updated", task=TaskOut.model_validate(task))


@router.delete(
    "/{task_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Task not found", "model": ErrorResponse}},
    summary="Delete a task",
)
async def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await task_service.delete(db, task_id, user_id)
    return Response(status_code=204)
