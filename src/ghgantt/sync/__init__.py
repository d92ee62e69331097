"""Issue feed to task store synchronization."""

from .engine import SyncEngine, SyncInProgressError
from .extractor import MetadataExtractor, match_label, sanitize_progress

__all__ = [
    "MetadataExtractor",
    "SyncEngine",
    "SyncInProgressError",
    "match_label",
    "sanitize_progress",
]
