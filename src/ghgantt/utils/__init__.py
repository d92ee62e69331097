"""Utility functions."""

from .datetime import (
    format_chart_date,
    from_iso,
    now_utc,
    parse_calendar_date,
    to_iso,
)

__all__ = [
    "format_chart_date",
    "from_iso",
    "now_utc",
    "parse_calendar_date",
    "to_iso",
]
