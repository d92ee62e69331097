"""Service layer."""

from .chart_projector import ChartProjector
from .config_service import ConfigService

__all__ = [
    "ChartProjector",
    "ConfigService",
]
