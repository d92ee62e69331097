"""Configuration service for loading ghgantt.yml."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import GanttConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and caching application configuration."""

    CONFIG_FILE = "ghgantt.yml"

    def __init__(self, project_root: Path) -> None:
        """Initialize the config service.

        Args:
            project_root: Directory containing ghgantt.yml
        """
        self.project_root = project_root
        self._config: GanttConfig | None = None
        self._config_error: str | None = None

    @property
    def config_path(self) -> Path:
        """Location of the config file."""
        return self.project_root / self.CONFIG_FILE

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    def get_config(self) -> GanttConfig:
        """Get configuration, loading from file if not cached."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def _load_config(self) -> GanttConfig:
        """Load configuration from file or return default."""
        config_path = self.config_path
        self._config_error = None

        if not config_path.exists():
            logger.debug("No %s found, using defaults", self.CONFIG_FILE)
            return GanttConfig.default()

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self._config_error = f"Invalid YAML in {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return GanttConfig.default()

        if data is None:
            self._config_error = f"{self.CONFIG_FILE} is empty"
            logger.warning(self._config_error)
            return GanttConfig.default()

        if not isinstance(data, dict):
            self._config_error = f"{self.CONFIG_FILE} must contain a mapping"
            logger.warning(self._config_error)
            return GanttConfig.default()

        try:
            config = GanttConfig(**data)
        except ValidationError as e:
            self._config_error = f"Invalid {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return GanttConfig.default()

        logger.info(
            "Loaded %s for repository %s",
            self.CONFIG_FILE,
            config.repository.full_name if config.repository else "<none>",
        )
        return config
