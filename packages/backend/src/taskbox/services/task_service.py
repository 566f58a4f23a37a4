"""Task service — owner-scoped CRUD over a TaskStore.

Learn: This is the CORE of the app. Every operation:
1. Requires a resolved Identity (None → Unauthenticated, store untouched)
2. Scopes the store call to identity.id
3. Ends in exactly one outcome: a result or one TaskboxError

Delete is fetch → check owner → delete, in that order, within one
request. Two distinct failures come out of the check: NotFound (no such
row) and Forbidden (someone else's row). The API decides whether to
show the difference to the caller.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

import structlog

from taskbox.auth.identity import Identity
from taskbox.errors import Forbidden, InvalidInput, NotFound, Unauthenticated
from taskbox.store.base import TaskRecord, TaskStore

logger = structlog.get_logger()


def _require(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise Unauthenticated()
    return identity


def _clean(value: Optional[str], field: str) -> str:
    """Trim a required text field; empty or missing is InvalidInput."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(f"{field} is required")
    return value.strip()


class TaskService:
    """Business logic for listing, creating and deleting a user's tasks."""

    def __init__(self, store: TaskStore):
        self.store = store

    # ─── Read ────────────────────────────────────────────

    async def list_tasks(self, identity: Optional[Identity]) -> list[TaskRecord]:
        """The caller's tasks, newest first. Empty list is a valid answer."""
        identity = _require(identity)
        return await self.store.find_by_owner_ordered(identity.id)

    # ─── Create ──────────────────────────────────────────

    async def create_task(
        self,
        identity: Optional[Identity],
        title: Optional[str],
        description: Optional[str],
    ) -> TaskRecord:
        identity = _require(identity)
        title = _clean(title, "title")
        description = _clean(description, "description")

        now = datetime.now(timezone.utc)
        task = await self.store.insert(
            TaskRecord(
                id=str(uuid.uuid4()),
                title=title,
                description=description,
                owner_id=identity.id,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("task.created", task_id=task.id, owner_id=identity.id)
        return task

    # ─── Delete ──────────────────────────────────────────

    async def delete_task(self, identity: Optional[Identity], task_id: str) -> None:
        """Delete one of the caller's tasks.

        Learn: Ownership is re-read from this request's own fetch, never
        cached. If the row vanishes between the fetch and the delete
        (a concurrent delete by the owner), delete_by_id is a no-op and
        this still succeeds.
        """
        identity = _require(identity)

        task = await self.store.find_by_id(task_id)
        if task is None:
            raise NotFound()
        if task.owner_id != identity.id:
            logger.info(
                "task.delete_forbidden", task_id=task_id, caller_id=identity.id
            )
            raise Forbidden()

        await self.store.delete_by_id(task_id)
        logger.info("task.deleted", task_id=task_id, owner_id=identity.id)
