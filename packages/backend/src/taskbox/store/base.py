"""TaskStore contract and the record type that crosses it."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol


@dataclass
class TaskRecord:
    id: str
    title: str
    description: str
    owner_id: str
    created_at: datetime
    updated_at: datetime


class TaskStore(Protocol):
    """Persistence operations TaskService relies on.

    Implementations raise taskbox.errors.StoreError for any backend
    failure and nothing else.
    """

    async def insert(self, task: TaskRecord) -> TaskRecord:
        ...

    async def find_by_id(self, task_id: str) -> Optional[TaskRecord]:
        ...

    async def find_by_owner_ordered(self, owner_id: str) -> list[TaskRecord]:
        """All tasks owned by ``owner_id``, newest first."""
        ...

    async def delete_by_id(self, task_id: str) -> None:
        """Delete the task if present. A missing id is a no-op."""
        ...
