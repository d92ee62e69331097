"""Serve command running the HTTP API."""

import logging

import uvicorn

from ..api import create_app
from ..config import Settings
from ..github.client import GitHubAuthError
from ..repositories.sqlite import TaskStoreError
from .bootstrap import ConfigurationError, build_components, load_config
from .output import error, header, info

logger = logging.getLogger(__name__)


def run_serve(settings: Settings) -> int:
    """Start the HTTP server and block until it stops.

    Args:
        settings: Runtime settings (host, port, store location)

    Returns:
        Exit code (0 for clean shutdown, non-zero for startup error)
    """
    try:
        config = load_config(settings)
        components = build_components(settings, config)
    except ConfigurationError as e:
        error(str(e))
        return 1
    except GitHubAuthError as e:
        error(f"GitHub authentication failed: {e}")
        info("Set GITHUB_TOKEN environment variable or run 'gh auth login'")
        return 1
    except TaskStoreError as e:
        error(f"Cannot open task store: {e}")
        return 1

    app = create_app(components.store, components.engine, components.projector)

    url = f"http://{settings.host}:{settings.port}"
    header("Starting ghgantt server...")
    info(f"Chart data: {url}/data")
    info(f"Refresh: {url}/refreshData")
    logger.info("ghgantt listening on %s", url)

    try:
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            log_level="info" if settings.verbose else "warning",
        )
    finally:
        components.close()
    return 0
