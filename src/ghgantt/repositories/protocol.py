"""Task store protocol."""

from collections.abc import Iterable
from typing import Protocol

from ..models import Task


class TaskStoreProtocol(Protocol):
    """Interface for the keyed, transactional task store.

    Tasks are keyed by the remote issue id. Writes are atomic per call: a
    batch either commits entirely or leaves the store unchanged.
    """

    def upsert(self, task: Task) -> None:
        """Create or replace a task by id."""
        ...

    def upsert_many(self, tasks: Iterable[Task]) -> int:
        """Create or replace several tasks in one transaction.

        Returns:
            Number of tasks written.
        """
        ...

    def get(self, task_id: int) -> Task | None:
        """Get a single task by id, or None if unknown."""
        ...

    def list_ids(self) -> set[int]:
        """All known ids, tombstoned or not."""
        ...

    def mark_deleted(self, task_ids: Iterable[int]) -> int:
        """Tombstone the given ids in one transaction.

        Unknown ids are ignored.

        Returns:
            Number of tasks that changed from live to deleted.
        """
        ...

    def query_for_chart(self) -> list[Task]:
        """Live, open tasks with an end date.

        Ordered by label ascending, then start date descending.
        """
        ...
