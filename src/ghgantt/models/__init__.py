"""Data models."""

from .gantt_config import ChartConfig, GanttConfig, KeywordConfig, RepositoryConfig
from .issue import Issue, IssueLabel
from .metadata import IssueMetadata
from .sync import SyncResult
from .task import (
    DEFAULT_DURATION,
    STATE_OPEN,
    ChartData,
    Task,
    TaskChartRow,
)

__all__ = [
    "DEFAULT_DURATION",
    "STATE_OPEN",
    "ChartConfig",
    "ChartData",
    "GanttConfig",
    "Issue",
    "IssueLabel",
    "IssueMetadata",
    "KeywordConfig",
    "RepositoryConfig",
    "SyncResult",
    "Task",
    "TaskChartRow",
]
