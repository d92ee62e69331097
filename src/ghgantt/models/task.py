"""Task domain model."""

from datetime import datetime

from pydantic import BaseModel, Field

# Chart bars are one unit long unless the front end derives a length from end_date
DEFAULT_DURATION = 1

STATE_OPEN = "open"


class Task(BaseModel):
    """A schedulable task mirrored from a single GitHub issue."""

    # Remote issue database id, stable across syncs
    id: int

    # Mirrored from the issue
    title: str = ""
    body: str = ""
    url: str = ""  # API url
    html_url: str = ""
    number: int
    state: str = STATE_OPEN
    remote_created_at: datetime

    # Scheduling fields derived from body keywords
    start_date: datetime
    end_date: datetime | None = None
    duration: int = DEFAULT_DURATION
    label: str | None = None
    color: str | None = None
    progress: float | None = Field(default=None, ge=0.0, le=1.0)

    # Tombstone set when the issue disappears from the feed
    is_deleted: bool = False

    # Hierarchy fields for project/milestone task types, not populated by sync
    type: str | None = None
    parent: int | None = None
    level: int | None = None
    open: bool | None = None


class TaskChartRow(BaseModel):
    """One row of chart data as consumed by the Gantt front end."""

    id: int
    text: str
    start_date: str
    duration: int
    end_date: str
    url: str
    progress: float | None = None
    color: str | None = None


class ChartData(BaseModel):
    """Envelope returned by the chart endpoints."""

    data: list[TaskChartRow] = Field(default_factory=list)
