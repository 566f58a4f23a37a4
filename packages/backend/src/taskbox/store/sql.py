"""SQLAlchemy-backed TaskStore.

Learn: One SqlTaskStore wraps one AsyncSession, i.e. one request. Every
SQLAlchemy/driver failure is rolled back and re-raised as StoreError so
callers only ever see the public taxonomy in taskbox.errors.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskbox.db.models import Task
from taskbox.errors import StoreError
from taskbox.store.base import TaskRecord

logger = structlog.get_logger()


def _to_record(row: Task) -> TaskRecord:
    return TaskRecord(
        id=row.id,
        title=row.title,
        description=row.description,
        owner_id=row.owner_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlTaskStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _guard(self, op: str):
        try:
            yield
        except (SQLAlchemyError, OSError) as e:
            logger.error("store.error", op=op, error=str(e))
            await self.db.rollback()
            raise StoreError(f"{op} failed: {e}") from e

    async def insert(self, task: TaskRecord) -> TaskRecord:
        async with self._guard("insert"):
            row = Task(
                id=task.id,
                title=task.title,
                description=task.description,
                owner_id=task.owner_id,
                created_at=task.created_at,
                updated_at=task.updated_at,
            )
            self.db.add(row)
            await self.db.commit()
            return _to_record(row)

    async def find_by_id(self, task_id: str) -> Optional[TaskRecord]:
        async with self._guard("find_by_id"):
            row = await self.db.get(Task, task_id)
            return _to_record(row) if row else None

    async def find_by_owner_ordered(self, owner_id: str) -> list[TaskRecord]:
        async with self._guard("find_by_owner_ordered"):
            q = (
                select(Task)
                .where(Task.owner_id == owner_id)
                .order_by(Task.created_at.desc(), Task.id.desc())
            )
            result = await self.db.execute(q)
            return [_to_record(row) for row in result.scalars().all()]

    async def delete_by_id(self, task_id: str) -> None:
        async with self._guard("delete_by_id"):
            await self.db.execute(delete(Task).where(Task.id == task_id))
            await self.db.commit()
