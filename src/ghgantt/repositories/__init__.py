"""Repository layer for task persistence."""

from .protocol import TaskStoreProtocol
from .sqlite import SQLiteTaskStore, TaskStoreError

__all__ = [
    "SQLiteTaskStore",
    "TaskStoreError",
    "TaskStoreProtocol",
]
