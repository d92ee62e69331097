"""Utilities for datetime handling."""

from datetime import UTC, date, datetime

# Non-ISO calendar layouts accepted in issue bodies
CALENDAR_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m-%d-%Y",
)

CHART_DATE_FORMAT = "%m-%d-%Y"


def now_utc() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def to_iso(dt: datetime) -> str:
    """Convert datetime to an ISO string normalised to UTC.

    Naive datetimes are assumed to already be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat()


def from_iso(value: str) -> datetime:
    """Parse ISO format string to datetime."""
    # Handle both 'Z' suffix and explicit timezone
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def parse_calendar_date(text: str) -> datetime | None:
    """Parse a calendar date typed into an issue body.

    Accepts ISO dates and datetimes plus the slash and US dash layouts in
    CALENDAR_FORMATS. Dates without a time or timezone are UTC midnight;
    explicit offsets are converted to UTC, which can move the calendar day.

    Args:
        text: Raw text, surrounding whitespace allowed

    Returns:
        UTC datetime, or None if the text is not a valid date or falls
        outside the representable range once converted to UTC
    """
    value = text.strip()
    if not value:
        return None

    parsed: datetime | None = None
    try:
        parsed = from_iso(value)
    except ValueError:
        for fmt in CALENDAR_FORMATS:
            try:
                parsed = datetime.strptime(value, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except OverflowError:
        return None


def format_chart_date(value: datetime | date, fmt: str = CHART_DATE_FORMAT) -> str:
    """Format a date for the chart front end (mm-dd-yyyy by default)."""
    return value.strftime(fmt)
