"""GitHub API access."""

from .client import (
    GitHubAuthError,
    GitHubClient,
    GitHubClientError,
    GitHubForbiddenError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubResponse,
)
from .feed import GitHubIssueFeed, GitHubIssuePage, IssueFeed, IssuePage, iter_pages

__all__ = [
    "GitHubAuthError",
    "GitHubClient",
    "GitHubClientError",
    "GitHubForbiddenError",
    "GitHubIssueFeed",
    "GitHubIssuePage",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
    "GitHubResponse",
    "IssueFeed",
    "IssuePage",
    "iter_pages",
]
