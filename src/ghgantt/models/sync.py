"""Sync run result model."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class SyncResult:
    """Result of one full sync run."""

    pages: int = 0  # Feed pages processed
    upserted: int = 0  # Tasks written
    tombstoned: int = 0  # Tasks newly marked deleted
    seen_ids: set[int] = field(default_factory=set)
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def seen_count(self) -> int:
        """Number of distinct issues seen in the feed."""
        return len(self.seen_ids)

    @property
    def duration_ms(self) -> float | None:
        """Wall-clock duration of the run in milliseconds."""
        if self.started_at is None or self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds() * 1000
