"""Chart projection of the task store."""

from ..models import ChartData, Task, TaskChartRow
from ..repositories.protocol import TaskStoreProtocol
from ..utils.datetime import CHART_DATE_FORMAT, format_chart_date


class ChartProjector:
    """Shapes chartable tasks into the Gantt front end's row format.

    Read-only; never triggers a remote fetch.
    """

    def __init__(self, store: TaskStoreProtocol, date_format: str = CHART_DATE_FORMAT) -> None:
        self._store = store
        self.date_format = date_format

    def project(self) -> ChartData:
        """Build chart data from the store's chart query, keeping its order."""
        return ChartData(data=[self.to_row(task) for task in self._store.query_for_chart()])

    def to_row(self, task: Task) -> TaskChartRow:
        if task.end_date is None:
            raise ValueError(f"Task {task.id} has no end date and cannot be charted")
        return TaskChartRow(
            id=task.id,
            text=task.title,
            start_date=format_chart_date(task.start_date, self.date_format),
            duration=task.duration,
            end_date=format_chart_date(task.end_date, self.date_format),
            url=task.url,
            progress=task.progress,
            color=task.color,
        )

    def issue_url(self, task_id: int) -> str | None:
        """The issue's web URL, or None for an unknown id."""
        task = self._store.get(task_id)
        return task.html_url if task is not None else None
