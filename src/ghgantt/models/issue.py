"""Remote issue models as returned by the GitHub REST issues endpoint."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class IssueLabel(BaseModel):
    """A label attached to an issue."""

    model_config = ConfigDict(extra="ignore")

    name: str
    color: str | None = None  # hex without leading '#'


class Issue(BaseModel):
    """A single issue item from the feed.

    Only the fields the sync needs are kept; the rest of the payload is
    ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str | None = None
    body: str | None = None
    url: str | None = None
    html_url: str | None = None
    number: int
    state: str
    created_at: datetime
    labels: list[IssueLabel] = Field(default_factory=list)
