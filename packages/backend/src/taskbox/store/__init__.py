"""Task persistence behind a small capability interface.

Learn: TaskService depends on TaskStore, not on SQLAlchemy. Production
wires SqlTaskStore (one session per request); tests and memory:// URLs
use InMemoryTaskStore.
"""

from taskbox.store.base import TaskRecord, TaskStore
from taskbox.store.memory import InMemoryTaskStore
from taskbox.store.sql import SqlTaskStore

__all__ = ["InMemoryTaskStore", "SqlTaskStore", "TaskRecord", "TaskStore"]
