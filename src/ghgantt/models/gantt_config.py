"""Configuration models for ghgantt.yml."""

import re
from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

_REPO_PART = re.compile(r"^[A-Za-z0-9_.-]+$")


class RepositoryConfig(BaseModel):
    """The single GitHub repository whose issues are mirrored."""

    owner: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    per_page: int = Field(default=100, ge=1, le=100, description="Issues per feed page")

    @field_validator("owner", "name")
    @classmethod
    def validate_part(cls, v: str) -> str:
        """Validate owner/name contain only characters GitHub allows."""
        if not _REPO_PART.match(v):
            raise ValueError(f"Invalid repository component '{v}'")
        return v

    @property
    def full_name(self) -> str:
        """Repository in owner/name form."""
        return f"{self.owner}/{self.name}"


class KeywordConfig(BaseModel):
    """Line prefixes recognised in issue bodies.

    A line contributes a value only when it starts with the prefix.
    """

    start_date: str = Field(default="Start Date:", min_length=1)
    due_date: str = Field(default="Due Date:", min_length=1)
    label: str = Field(default="Label:", min_length=1)
    progress: str = Field(default="Progress:", min_length=1)


class ChartConfig(BaseModel):
    """Chart presentation options."""

    date_format: str = Field(default="%m-%d-%Y", description="strftime format for chart dates")

    @field_validator("date_format")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        """Validate the format renders a date."""
        try:
            rendered = datetime(2000, 1, 2, tzinfo=UTC).strftime(v)
        except ValueError as err:
            raise ValueError(f"Invalid date format '{v}'") from err
        if rendered == v:
            raise ValueError(f"Date format '{v}' contains no directives")
        return v


class GanttConfig(BaseModel):
    """Root configuration from ghgantt.yml."""

    version: int = 1
    repository: RepositoryConfig | None = None
    keywords: KeywordConfig = Field(default_factory=KeywordConfig)
    chart: ChartConfig = Field(default_factory=ChartConfig)

    @classmethod
    def default(cls) -> "GanttConfig":
        """Return default configuration (no repository configured)."""
        return cls()
