"""Sync command for mirroring GitHub issues into the task store."""

import logging

from ..config import Settings
from ..github.client import GitHubAuthError, GitHubClientError
from ..repositories.sqlite import TaskStoreError
from .bootstrap import ConfigurationError, build_components, load_config
from .output import error, header, info, success

logger = logging.getLogger(__name__)


def run_sync(settings: Settings) -> int:
    """Run one full sync pass and report the result.

    Args:
        settings: Runtime settings

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = load_config(settings)
    except ConfigurationError as e:
        error(str(e))
        return 1

    header("Authenticating with GitHub...")
    try:
        components = build_components(settings, config)
    except GitHubAuthError as e:
        error(f"GitHub authentication failed: {e}")
        info("Set GITHUB_TOKEN environment variable or run 'gh auth login'")
        return 1
    except TaskStoreError as e:
        error(f"Cannot open task store: {e}")
        return 1

    repository = components.config.repository
    header(f"Syncing issues from {repository.full_name if repository else '?'}...")
    try:
        result = components.engine.run()
        chart_rows = len(components.projector.project().data)
    except GitHubClientError as e:
        error(f"Sync aborted: {e}")
        info("Pages already fetched were saved; no tasks were marked deleted")
        return 1
    except TaskStoreError as e:
        error(f"Sync aborted: {e}")
        return 1
    finally:
        components.close()

    print()
    success(f"Synced {result.seen_count} issue(s) across {result.pages} page(s)")
    if result.tombstoned:
        info(f"Marked {result.tombstoned} task(s) deleted")
    info(f"{chart_rows} task(s) on the chart")
    return 0
