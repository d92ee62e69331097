"""Sync engine mirroring a remote issue feed into the task store.

One run walks every page of the feed in order, upserts one task per issue
(one store transaction per page), then tombstones every stored task whose id
did not appear anywhere in the feed. Reconciliation only happens after the
last page has been committed; a run that fails part-way never tombstones.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from ..github.feed import iter_pages
from ..models import DEFAULT_DURATION, Issue, SyncResult, Task
from ..utils.datetime import now_utc
from .extractor import MetadataExtractor

if TYPE_CHECKING:
    from ..github.feed import IssueFeed, IssuePage
    from ..repositories.protocol import TaskStoreProtocol

logger = logging.getLogger(__name__)


class SyncInProgressError(Exception):
    """Another sync run is already in flight."""

    pass


class SyncEngine:
    """Runs full synchronization passes from an issue feed into a task store.

    Only one run may be in flight per engine; overlapping calls fail fast
    with SyncInProgressError.
    """

    def __init__(
        self,
        feed: IssueFeed,
        store: TaskStoreProtocol,
        extractor: MetadataExtractor | None = None,
        duration: int = DEFAULT_DURATION,
    ) -> None:
        """Initialize the sync engine.

        Args:
            feed: Source of issue pages
            store: Task store to mirror into
            extractor: Keyword extractor (default keywords if omitted)
            duration: Duration written to every task
        """
        self._feed = feed
        self._store = store
        self._extractor = extractor or MetadataExtractor()
        self._duration = duration
        self._run_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    def build_task(self, issue: Issue) -> Task:
        """Combine an issue and its body keywords into a task."""
        metadata = self._extractor.extract(issue.body, issue.labels)
        return Task(
            id=issue.id,
            title=issue.title or "",
            body=issue.body or "",
            url=issue.url or "",
            html_url=issue.html_url or "",
            number=issue.number,
            state=issue.state,
            remote_created_at=issue.created_at,
            start_date=metadata.start_date or issue.created_at,
            end_date=metadata.due_date,
            duration=self._duration,
            label=metadata.label,
            color=metadata.color,
            progress=metadata.progress,
            is_deleted=False,
        )

    def run(self) -> SyncResult:
        """Run one full sync pass.

        Returns:
            SyncResult with page, upsert and tombstone counts

        Raises:
            SyncInProgressError: Another run is in flight
            GitHubClientError: A page could not be fetched
            TaskStoreError: A page or the tombstone batch could not be written
        """
        if not self._run_lock.acquire(blocking=False):
            raise SyncInProgressError("A sync run is already in progress")
        try:
            return self._run()
        finally:
            self._run_lock.release()

    def _run(self) -> SyncResult:
        result = SyncResult(started_at=now_utc())
        logger.info("Sync started")

        try:
            for page in iter_pages(self._feed):
                self._process_page(page, result)
        except Exception as e:
            logger.error(
                "Sync aborted after %d page(s), reconciliation skipped: %s", result.pages, e
            )
            raise

        result.tombstoned = self._reconcile(result.seen_ids)
        result.finished_at = now_utc()
        logger.info(
            "Sync finished: %d page(s), %d upserted, %d tombstoned (%.0fms)",
            result.pages,
            result.upserted,
            result.tombstoned,
            result.duration_ms or 0.0,
        )
        return result

    def _process_page(self, page: IssuePage, result: SyncResult) -> None:
        tasks = [self.build_task(issue) for issue in page.items]
        written = self._store.upsert_many(tasks)

        # Only ids from committed pages count as seen
        result.seen_ids.update(task.id for task in tasks)
        result.upserted += written
        result.pages += 1
        logger.debug("Page %d: upserted %d task(s)", result.pages, written)

    def _reconcile(self, seen_ids: set[int]) -> int:
        deleted_ids = self._store.list_ids() - seen_ids
        if not deleted_ids:
            return 0
        tombstoned = self._store.mark_deleted(sorted(deleted_ids))
        logger.info("Tombstoned %d task(s) missing from the feed", tombstoned)
        return tombstoned
