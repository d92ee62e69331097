"""GitHub REST API client."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    pass


class GitHubAuthError(GitHubClientError):
    """Authentication failed."""

    pass


class GitHubNotFoundError(GitHubClientError):
    """Resource not found."""

    pass


class GitHubForbiddenError(GitHubClientError):
    """Permission denied."""

    pass


class GitHubRateLimitError(GitHubClientError):
    """Rate limit exceeded."""

    pass


@dataclass
class GitHubResponse:
    """Decoded response body plus the pagination cursor."""

    data: Any
    next_url: str | None = None  # 'next' relation of the Link header


class GitHubClient:
    """GitHub REST API client.

    Provides a thin wrapper around the GitHub REST API with:
    - Token authentication (from env var or gh CLI)
    - Enterprise support via custom base_url
    - Error handling and rate limit awareness
    - Link header pagination cursors
    """

    def __init__(self, token: str, base_url: str = "api.github.com"):
        """Initialize the GitHub client.

        Args:
            token: GitHub personal access token
            base_url: API host (default: api.github.com, use custom for Enterprise)
        """
        self.token = token
        self.base_url = base_url
        self._api_url = f"https://{base_url}"
        self._client = httpx.Client(
            base_url=self._api_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
            },
            timeout=30.0,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @classmethod
    def from_environment(cls, base_url: str = "api.github.com") -> GitHubClient:
        """Create a client from environment variables or gh CLI.

        Tries in order:
        1. GITHUB_TOKEN environment variable
        2. gh auth token (if gh CLI is installed and authenticated)

        Args:
            base_url: API host

        Returns:
            Configured GitHubClient

        Raises:
            GitHubAuthError: If no token is available
        """
        token = os.environ.get("GITHUB_TOKEN")
        if token:
            logger.debug("Using token from GITHUB_TOKEN environment variable")
            return cls(token, base_url)

        try:
            result = subprocess.run(
                ["gh", "auth", "token"],
                capture_output=True,
                text=True,
                check=True,
            )
            token = result.stdout.strip()
            if token:
                logger.debug("Using token from gh CLI")
                return cls(token, base_url)
        except (subprocess.CalledProcessError, FileNotFoundError):
            logger.debug("gh CLI not available or not authenticated")

        logger.error("No GitHub token found")
        raise GitHubAuthError(
            "No GitHub token found. Either:\n"
            "  - Set GITHUB_TOKEN environment variable\n"
            "  - Run 'gh auth login' to authenticate with GitHub CLI"
        )

    def get(self, path: str, params: dict[str, Any] | None = None) -> GitHubResponse:
        """Issue a GET request.

        Args:
            path: API path (e.g. "/repos/o/r/issues") or an absolute URL
                taken from a previous response's next_url
            params: Query parameters

        Returns:
            GitHubResponse with the decoded JSON body and next page URL

        Raises:
            GitHubAuthError: Authentication failed
            GitHubNotFoundError: Resource not found
            GitHubForbiddenError: Permission denied
            GitHubRateLimitError: Rate limit exceeded
            GitHubClientError: Other errors
        """
        logger.debug("GET %s: params=%s", path, params)

        start_time = time.monotonic()
        try:
            response = self._client.get(path, params=params)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("GET %s failed after %.0fms: %s", path, elapsed_ms, e)
            raise GitHubClientError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000

        if response.status_code == 401:
            logger.error("GET %s: 401 Unauthorized (%.0fms)", path, elapsed_ms)
            raise GitHubAuthError(
                "Authentication failed. Check your GITHUB_TOKEN.\n"
                "Required scope: repo (or public_repo for public repositories)"
            )
        if response.status_code == 403:
            if "rate limit" in response.text.lower():
                logger.error("GET %s: 403 Rate Limited (%.0fms)", path, elapsed_ms)
                raise GitHubRateLimitError("GitHub API rate limit exceeded. Try again later.")
            logger.error("GET %s: 403 Forbidden (%.0fms)", path, elapsed_ms)
            raise GitHubForbiddenError(
                "Permission denied. Check that your token can read the repository issues."
            )
        if response.status_code == 404:
            logger.error("GET %s: 404 Not Found (%.0fms)", path, elapsed_ms)
            raise GitHubNotFoundError(f"Resource not found: {path}")

        if response.status_code >= 400:
            logger.error("GET %s: HTTP %d (%.0fms)", path, response.status_code, elapsed_ms)
            raise GitHubClientError(f"HTTP {response.status_code}: {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            logger.error("GET %s: Invalid JSON response (%.0fms)", path, elapsed_ms)
            raise GitHubClientError(f"Invalid JSON response: {e}") from e

        next_url = (response.links or {}).get("next", {}).get("url")

        logger.info("GET %s: %d OK (%.0fms)", path, response.status_code, elapsed_ms)
        return GitHubResponse(data=data, next_url=next_url)
