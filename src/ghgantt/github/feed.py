"""Paginated issue feed over the GitHub REST API."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol

from pydantic import ValidationError

from ..models import Issue
from .client import GitHubClientError

if TYPE_CHECKING:
    from .client import GitHubClient, GitHubResponse

logger = logging.getLogger(__name__)


class IssuePage(Protocol):
    """One page of issues plus the means to fetch the next one."""

    @property
    def items(self) -> list[Issue]:
        """Issues on this page, in feed order."""
        ...

    def has_next_page(self) -> bool:
        """Whether the feed has more pages after this one."""
        ...

    def fetch_next_page(self) -> IssuePage:
        """Fetch the following page.

        Raises:
            GitHubClientError: If the request fails or there is no next page
        """
        ...


class IssueFeed(Protocol):
    """Source of issue pages. Filters and page size are fixed per feed."""

    def fetch_first_page(self) -> IssuePage:
        """Fetch the first page of the feed."""
        ...


def iter_pages(feed: IssueFeed) -> Iterator[IssuePage]:
    """Yield every page of a feed in order.

    Each next-page fetch happens only when the consumer asks for it, so a
    consumer finishes its work on a page before the cursor is followed.
    """
    page = feed.fetch_first_page()
    yield page
    while page.has_next_page():
        page = page.fetch_next_page()
        yield page


class GitHubIssuePage:
    """A page of the repository issues listing."""

    def __init__(self, client: GitHubClient, items: list[Issue], next_url: str | None) -> None:
        self._client = client
        self._items = items
        self._next_url = next_url

    @property
    def items(self) -> list[Issue]:
        return self._items

    def has_next_page(self) -> bool:
        return self._next_url is not None

    def fetch_next_page(self) -> GitHubIssuePage:
        if self._next_url is None:
            raise GitHubClientError("No next page")
        return GitHubIssuePage.from_response(self._client, self._client.get(self._next_url))

    @classmethod
    def from_response(cls, client: GitHubClient, response: GitHubResponse) -> GitHubIssuePage:
        """Build a page from a decoded issues listing.

        Raises:
            GitHubClientError: If the body is not a list of issues
        """
        if not isinstance(response.data, list):
            raise GitHubClientError("Unexpected issues payload: expected a list")
        try:
            items = [Issue.model_validate(raw) for raw in response.data]
        except ValidationError as e:
            raise GitHubClientError(f"Malformed issue in feed: {e}") from e
        return cls(client, items, response.next_url)


class GitHubIssueFeed:
    """All issues (open and closed) of one repository.

    Pull requests appear in the GitHub issues listing and are mirrored like
    any other issue.
    """

    def __init__(
        self,
        client: GitHubClient,
        owner: str,
        repo: str,
        per_page: int = 100,
    ) -> None:
        """Initialize the feed.

        Args:
            client: Authenticated GitHub client
            owner: Repository owner
            repo: Repository name
            per_page: Issues per page (GitHub allows at most 100)
        """
        self._client = client
        self.owner = owner
        self.repo = repo
        self.per_page = per_page

    @property
    def path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}/issues"

    def fetch_first_page(self) -> GitHubIssuePage:
        logger.debug("Fetching first issues page for %s/%s", self.owner, self.repo)
        response = self._client.get(self.path, {"state": "all", "per_page": self.per_page})
        return GitHubIssuePage.from_response(self._client, response)
