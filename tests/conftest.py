"""Shared fixtures."""

from pathlib import Path

import pytest

from ghgantt.repositories import SQLiteTaskStore


@pytest.fixture
def store(tmp_path: Path) -> SQLiteTaskStore:
    """Empty task store in a temporary directory."""
    return SQLiteTaskStore(tmp_path / "tasks.sqlite3")
