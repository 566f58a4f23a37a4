"""In-process TaskStore, for tests and throwaway local runs."""

import itertools
from dataclasses import replace
from typing import Optional

from taskbox.store.base import TaskRecord


class InMemoryTaskStore:
    """Dict-backed store.

    Each insert gets a sequence number so tasks created within the same
    clock tick still list newest first.
    """

    def __init__(self):
        self._rows: dict[str, tuple[int, TaskRecord]] = {}
        self._seq = itertools.count()

    async def insert(self, task: TaskRecord) -> TaskRecord:
        self._rows[task.id] = (next(self._seq), replace(task))
        return replace(task)

    async def find_by_id(self, task_id: str) -> Optional[TaskRecord]:
        row = self._rows.get(task_id)
        return replace(row[1]) if row else None

    async def find_by_owner_ordered(self, owner_id: str) -> list[TaskRecord]:
        owned = [row for row in self._rows.values() if row[1].owner_id == owner_id]
        owned.sort(key=lambda row: (row[1].created_at, row[0]), reverse=True)
        return [replace(task) for _, task in owned]

    async def delete_by_id(self, task_id: str) -> None:
        self._rows.pop(task_id, None)

    def __len__(self) -> int:
        return len(self._rows)
