"""Task API routes.

Learn: Routes translate HTTP to TaskService calls and nothing else.
Failures are raised as TaskboxError subclasses and rendered by the
exception handler in main.py, so no handler builds an error response.

  GET    /tasks        → 200 [TaskRead, ...] newest first
  POST   /tasks        → 201 TaskRead
  DELETE /tasks/{id}   → 200 {"success": true}
"""

from typing import AsyncIterator

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from taskbox.auth.dependencies import get_current_identity
from taskbox.auth.identity import Identity
from taskbox.db import engine as db
from taskbox.errors import InvalidInput
from taskbox.schemas.task import DeleteResult, TaskCreate, TaskRead
from taskbox.services.task_service import TaskService
from taskbox.store.base import TaskStore
from taskbox.store.sql import SqlTaskStore

router = APIRouter()


async def get_task_store(request: Request) -> AsyncIterator[TaskStore]:
    """One store per request: the app's shared memory store, or a DB session."""
    shared = getattr(request.app.state, "task_store", None)
    if shared is not None:
        yield shared
        return
    async with db.async_session_factory() as session:
        yield SqlTaskStore(session)


def _task_svc(store: TaskStore = Depends(get_task_store)) -> TaskService:
    return TaskService(store)


async def _task_create_body(request: Request) -> TaskCreate:
    """Parse the POST body; anything that isn't a JSON object is a 400."""
    try:
        return TaskCreate.model_validate(await request.json())
    except (ValueError, ValidationError):
        raise InvalidInput()


@router.get("/tasks", response_model=list[TaskRead])
async def list_tasks(
    identity: Identity = Depends(get_current_identity),
    svc: TaskService = Depends(_task_svc),
):
    """List the caller's tasks, most recent first."""
    return await svc.list_tasks(identity)


@router.post("/tasks", response_model=TaskRead, status_code=201)
async def create_task(
    identity: Identity = Depends(get_current_identity),
    body: TaskCreate = Depends(_task_create_body),
    svc: TaskService = Depends(_task_svc),
):
    """Create a task owned by the caller. Title and description are trimmed."""
    return await svc.create_task(identity, body.title, body.description)


@router.delete("/tasks/{task_id}", response_model=DeleteResult)
async def delete_task(
    task_id: str,
    identity: Identity = Depends(get_current_identity),
    svc: TaskService = Depends(_task_svc),
):
    """Delete one of the caller's tasks.

    Learn: 404 when the id doesn't exist, 403 when it belongs to someone
    else. With TASKBOX_CONCEAL_FOREIGN_TASKS the 403 is rendered as 404
    (see main.py) so ids can't be probed.
    """
    await svc.delete_task(identity, task_id)
    return DeleteResult(success=True)
