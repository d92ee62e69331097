"""Scheduling metadata extracted from issue bodies."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class IssueMetadata:
    """Keyword values found in an issue body. Unset fields are None."""

    start_date: datetime | None = None
    due_date: datetime | None = None
    label: str | None = None
    color: str | None = None
    progress: float | None = None
