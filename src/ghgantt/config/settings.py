"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    project_root: Path = Field(
        default=Path(),
        description="Path to project root containing ghgantt.yml",
    )

    db_path: Path = Field(
        default=Path("tasks.sqlite3"),
        description="SQLite task store, relative paths resolve against project_root",
    )

    host: str = Field(
        default="127.0.0.1",
        description="Interface the HTTP server binds to",
    )

    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port the HTTP server listens on",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "GHGANTT_",
    }

    @property
    def resolved_db_path(self) -> Path:
        """Task store path with project_root applied."""
        if self.db_path.is_absolute():
            return self.db_path
        return self.project_root / self.db_path
