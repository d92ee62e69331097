"""
FastAPI application serving chart data.

Routes:
- GET /data - current chart projection, no remote fetch
- GET /refreshData - run one full sync, then return the projection
- GET /getIssueURL?id=<int> - web URL of one issue
- GET /health - health check

Collaborators are passed to create_app; nothing is global.
"""

import logging
from enum import Enum

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from ..github.client import GitHubClientError
from ..models import ChartData
from ..repositories.protocol import TaskStoreProtocol
from ..repositories.sqlite import TaskStoreError
from ..services.chart_projector import ChartProjector
from ..sync.engine import SyncEngine, SyncInProgressError

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Standard error codes for API responses."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    SYNC_IN_PROGRESS = "SYNC_IN_PROGRESS"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def _error(status_code: int, error_code: ErrorCode, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error_code": error_code.value, "message": message},
    )


def create_app(
    store: TaskStoreProtocol,
    engine: SyncEngine,
    projector: ChartProjector | None = None,
) -> FastAPI:
    """Build the HTTP application around explicit collaborators.

    Args:
        store: Task store read by the chart endpoints
        engine: Sync engine used by /refreshData
        projector: Chart projector (built over store if omitted)

    Returns:
        Configured FastAPI app
    """
    projector = projector or ChartProjector(store)

    app = FastAPI(
        title="ghgantt",
        description="Gantt chart data mirrored from GitHub issues",
        version="0.1.0",
    )

    @app.get("/health")
    def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/data")
    def data() -> ChartData:
        """Current chart projection."""
        return projector.project()

    @app.get("/refreshData")
    def refresh_data() -> ChartData:
        """Sync from GitHub, then return the chart projection."""
        result = engine.run()
        logger.info("Refresh complete: %d issue(s) seen", result.seen_count)
        return projector.project()

    @app.get("/getIssueURL", response_class=PlainTextResponse)
    def get_issue_url(task_id: int = Query(alias="id")) -> str:
        """Web URL of the issue behind a task."""
        url = projector.issue_url(task_id)
        if url is None:
            raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
        return url

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        error_code = (
            ErrorCode.NOT_FOUND
            if exc.status_code == status.HTTP_404_NOT_FOUND
            else ErrorCode.INTERNAL_ERROR
        )
        logger.info(
            "HTTP %d on %s %s: %s", exc.status_code, request.method, request.url.path, exc.detail
        )
        return _error(exc.status_code, error_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(
            "Validation error on %s %s: %s", request.method, request.url.path, exc.errors()
        )
        first_error = exc.errors()[0] if exc.errors() else {}
        field = " -> ".join(str(loc) for loc in first_error.get("loc", []))
        error_msg = first_error.get("msg", "Invalid input")
        return _error(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            ErrorCode.VALIDATION_ERROR,
            f"{field}: {error_msg}" if field else error_msg,
        )

    @app.exception_handler(SyncInProgressError)
    async def sync_in_progress_handler(request: Request, exc: SyncInProgressError) -> JSONResponse:
        logger.info("Rejected %s: %s", request.url.path, exc)
        return _error(status.HTTP_409_CONFLICT, ErrorCode.SYNC_IN_PROGRESS, str(exc))

    @app.exception_handler(GitHubClientError)
    async def github_error_handler(request: Request, exc: GitHubClientError) -> JSONResponse:
        logger.error("GitHub error on %s: %s", request.url.path, exc)
        return _error(status.HTTP_502_BAD_GATEWAY, ErrorCode.UPSTREAM_ERROR, str(exc))

    @app.exception_handler(TaskStoreError)
    async def store_error_handler(request: Request, exc: TaskStoreError) -> JSONResponse:
        logger.error("Task store error on %s: %s", request.url.path, exc)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorCode.DATABASE_ERROR,
            "Task store operation failed",
        )

    return app
