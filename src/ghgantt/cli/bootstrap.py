"""Composition root wiring settings and config into concrete collaborators."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import Settings
from ..github.client import GitHubClient
from ..github.feed import GitHubIssueFeed
from ..models import GanttConfig
from ..repositories.sqlite import SQLiteTaskStore
from ..services.chart_projector import ChartProjector
from ..services.config_service import ConfigService
from ..sync.engine import SyncEngine
from ..sync.extractor import MetadataExtractor

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """ghgantt.yml is missing something required to run."""

    pass


@dataclass
class Components:
    """Everything the sync command and HTTP server need."""

    config: GanttConfig
    client: GitHubClient
    store: SQLiteTaskStore
    engine: SyncEngine
    projector: ChartProjector

    def close(self) -> None:
        self.client.close()
        self.store.close()


def load_config(settings: Settings) -> GanttConfig:
    """Load ghgantt.yml and check that a repository is configured.

    Raises:
        ConfigurationError: Config is invalid or names no repository
    """
    config_service = ConfigService(settings.project_root)
    config = config_service.get_config()
    if config_service.has_config_error:
        raise ConfigurationError(config_service.config_error)
    if config.repository is None:
        raise ConfigurationError(
            f"No repository configured in {config_service.config_path}. "
            "Run 'ghgantt --generate' and set repository.owner and repository.name."
        )
    return config


def build_components(
    settings: Settings,
    config: GanttConfig,
    client: GitHubClient | None = None,
) -> Components:
    """Wire store, feed, engine and projector from settings and config.

    Args:
        settings: Runtime settings
        config: Loaded ghgantt.yml with a repository
        client: GitHub client (discovered from the environment if omitted)

    Raises:
        ConfigurationError: No repository configured
        GitHubAuthError: No token available
    """
    repository = config.repository
    if repository is None:
        raise ConfigurationError("No repository configured")

    # Store first so a store failure leaves no open HTTP client behind
    store = SQLiteTaskStore(settings.resolved_db_path)
    client = client or GitHubClient.from_environment()
    feed = GitHubIssueFeed(client, repository.owner, repository.name, per_page=repository.per_page)
    engine = SyncEngine(feed, store, MetadataExtractor(config.keywords))
    projector = ChartProjector(store, date_format=config.chart.date_format)

    logger.info(
        "Mirroring %s into %s", repository.full_name, settings.resolved_db_path
    )
    return Components(
        config=config,
        client=client,
        store=store,
        engine=engine,
        projector=projector,
    )
