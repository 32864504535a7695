"""Unit tests for date utilities."""
from datetime import datetime, timedelta, timezone

import pytest

from holipass.utils.date_utils import (
    format_event_date,
    parse_iso_timestamp,
    to_iso_timestamp,
)


class TestToIsoTimestamp:
    """Test timestamp formatting."""

    def test_utc_with_milliseconds(self):
        moment = datetime(2025, 3, 1, 9, 30, 15, 123456, tzinfo=timezone.utc)
        assert to_iso_timestamp(moment) == "2025-03-01T09:30:15.123Z"

    def test_converts_offset_to_utc(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        moment = datetime(2025, 3, 1, 15, 0, 0, tzinfo=ist)
        assert to_iso_timestamp(moment) == "2025-03-01T09:30:00.000Z"

    def test_naive_treated_as_utc(self):
        assert to_iso_timestamp(datetime(2025, 3, 11, 0, 0)) == "2025-03-11T00:00:00.000Z"

    def test_defaults_to_now(self):
        before = datetime.now(timezone.utc).replace(microsecond=0)
        stamp = parse_iso_timestamp(to_iso_timestamp())
        assert stamp >= before


class TestParseIsoTimestamp:
    """Test timestamp parsing."""

    def test_parses_z_suffix(self):
        parsed = parse_iso_timestamp("2025-03-01T09:30:15.123Z")
        assert parsed.tzinfo is not None
        assert parsed.utcoffset() == timedelta(0)

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            parse_iso_timestamp("01/03/2025")

    def test_non_string_raises(self):
        with pytest.raises(ValueError):
            parse_iso_timestamp(None)


class TestFormatEventDate:
    """Test event date display."""

    def test_format(self):
        assert format_event_date("2025-03-11") == "March 11, 2025"

    def test_invalid_date_raises(self):
        with pytest.raises(ValueError):
            format_event_date("2025-13-01")
