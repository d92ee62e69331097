"""Tests for datetime utilities."""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from ghgantt.utils.datetime import format_chart_date, from_iso, parse_calendar_date, to_iso


class TestParseCalendarDate:
    """Tests for parse_calendar_date."""

    @pytest.mark.parametrize(
        "text",
        ["2024-03-15", " 2024-03-15 ", "2024/03/15", "03/15/2024", "03-15-2024"],
    )
    def test_accepted_layouts(self, text):
        """Supported layouts parse to UTC midnight."""
        assert parse_calendar_date(text) == datetime(2024, 3, 15, tzinfo=UTC)

    def test_iso_datetime_keeps_offset(self):
        """Explicit offsets are preserved."""
        parsed = parse_calendar_date("2024-03-15T08:00:00+02:00")
        assert parsed == datetime(2024, 3, 15, 6, 0, tzinfo=UTC)

    def test_offset_can_move_calendar_day(self):
        """An evening date west of UTC lands on the next UTC day."""
        parsed = parse_calendar_date("2024-03-15T20:00:00-05:00")
        assert parsed == datetime(2024, 3, 16, 1, 0, tzinfo=UTC)
        assert parsed.tzinfo is UTC

    @pytest.mark.parametrize(
        "text", ["9999-12-31T23:00:00-05:00", "0001-01-01T00:00:00+01:00"]
    )
    def test_out_of_range_after_utc_conversion(self, text):
        """Dates that overflow when converted to UTC are rejected."""
        assert parse_calendar_date(text) is None

    def test_z_suffix(self):
        assert parse_calendar_date("2024-03-15T08:00:00Z") == datetime(
            2024, 3, 15, 8, 0, tzinfo=UTC
        )

    @pytest.mark.parametrize("text", ["", "   ", "tomorrow", "2024-13-01", "02/30/2024"])
    def test_invalid(self, text):
        """Invalid dates return None."""
        assert parse_calendar_date(text) is None


class TestIso:
    """Tests for ISO conversion helpers."""

    def test_to_iso_normalises_to_utc(self):
        dt = datetime(2024, 3, 15, 10, 0, tzinfo=timezone(timedelta(hours=2)))
        assert to_iso(dt) == "2024-03-15T08:00:00+00:00"

    def test_to_iso_naive_is_utc(self):
        assert to_iso(datetime(2024, 3, 15)) == "2024-03-15T00:00:00+00:00"

    def test_round_trip(self):
        dt = datetime(2024, 3, 15, 8, 30, tzinfo=UTC)
        assert from_iso(to_iso(dt)) == dt


class TestFormatChartDate:
    """Tests for format_chart_date."""

    def test_default_format(self):
        assert format_chart_date(datetime(2024, 3, 5, tzinfo=UTC)) == "03-05-2024"

    def test_plain_date(self):
        assert format_chart_date(date(2024, 12, 31)) == "12-31-2024"

    def test_custom_format(self):
        assert format_chart_date(date(2024, 3, 5), "%Y-%m-%d") == "2024-03-05"
