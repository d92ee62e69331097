"""HTTP API."""

from .app import ErrorCode, create_app

__all__ = ["ErrorCode", "create_app"]
