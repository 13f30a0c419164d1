"""Unit tests for timestamp utilities."""

from datetime import datetime, timedelta, timezone

import pytest

from catalog.utils.timestamps import (
    EARLIEST,
    coerce_datetime,
    ensure_utc,
    format_timestamp,
    parse_iso_datetime,
    utc_now,
)

NOV_4_NOON = datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc)
EST = timezone(timedelta(hours=-5))


class TestUtcNow:
    """Tests for utc_now."""

    def test_aware_and_current(self):
        """Test that utc_now is timezone-aware and sits between two clock reads."""
        before = datetime.now(timezone.utc)
        now = utc_now()
        after = datetime.now(timezone.utc)

        assert now.tzinfo == timezone.utc
        assert before <= now <= after


class TestEnsureUtc:
    """Tests for ensure_utc."""

    def test_none_passes_through(self):
        assert ensure_utc(None) is None

    def test_naive_is_treated_as_utc(self):
        """Test that a naive datetime keeps its wall-clock time."""
        assert ensure_utc(datetime(2025, 11, 4, 12, 0, 0)) == NOV_4_NOON

    def test_utc_is_unchanged(self):
        assert ensure_utc(NOV_4_NOON) == NOV_4_NOON

    def test_offset_is_converted(self):
        """Test that 07:00 EST becomes 12:00 UTC."""
        result = ensure_utc(datetime(2025, 11, 4, 7, 0, 0, tzinfo=EST))

        assert result == NOV_4_NOON
        assert result.tzinfo == timezone.utc


class TestParseIsoDatetime:
    """Tests for parse_iso_datetime with the shapes job boards send."""

    @pytest.mark.parametrize(
        "raw",
        [
            "2025-11-04T12:00:00Z",
            "2025-11-04T12:00:00+00:00",
            "2025-11-04T12:00:00",
            "2025-11-04T07:00:00-05:00",
            "  2025-11-04T12:00:00Z  ",
        ],
    )
    def test_datetime_forms(self, raw):
        """Test that every form lands on the same UTC instant."""
        assert parse_iso_datetime(raw) == NOV_4_NOON

    def test_date_only(self):
        """Test that a bare date becomes UTC midnight."""
        assert parse_iso_datetime("2025-11-04") == datetime(2025, 11, 4, tzinfo=timezone.utc)

    @pytest.mark.parametrize("raw", [None, "", "   ", "not a date", "2025/11/04"])
    def test_unparseable_is_none(self, raw):
        assert parse_iso_datetime(raw) is None


class TestCoerceDatetime:
    """Tests for coerce_datetime, used by JobRecord for posted_at and fetched_at."""

    @pytest.mark.parametrize(
        "value",
        [
            "2025-11-04T12:00:00Z",
            1762257600,
            1762257600.0,
            datetime(2025, 11, 4, 12, 0, 0),
            datetime(2025, 11, 4, 7, 0, 0, tzinfo=EST),
        ],
    )
    def test_supported_inputs(self, value):
        """Test ISO strings, unix seconds and datetimes."""
        assert coerce_datetime(value) == NOV_4_NOON

    def test_unix_epoch(self):
        assert coerce_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, True, False, ["2025-11-04"], {"ts": 0}, "yesterday"])
    def test_unsupported_inputs_are_none(self, value):
        """Test that booleans, containers and unparseable strings become None."""
        assert coerce_datetime(value) is None


class TestFormatTimestamp:
    """Tests for format_timestamp."""

    def test_seconds_precision(self):
        assert format_timestamp(datetime(2025, 11, 4, 12, 30, 45, 123456, tzinfo=timezone.utc)) == (
            "2025-11-04T12:30:45Z"
        )

    def test_microseconds(self):
        dt = datetime(2025, 11, 4, 12, 30, 45, 123456, tzinfo=timezone.utc)

        assert format_timestamp(dt, include_microseconds=True) == "2025-11-04T12:30:45.123456Z"

    def test_converts_to_utc(self):
        """Test that offsets are rendered as UTC with a Z suffix."""
        assert format_timestamp(datetime(2025, 11, 4, 7, 0, 0, tzinfo=EST)) == "2025-11-04T12:00:00Z"


class TestEarliest:
    """Tests for the sort position of records without posted_at."""

    def test_sorts_before_real_timestamps(self):
        assert EARLIEST < datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert EARLIEST < NOV_4_NOON

    def test_usable_as_sort_key(self):
        """Test that mixing EARLIEST with real timestamps sorts without TypeError."""
        keys = [NOV_4_NOON, EARLIEST, coerce_datetime(0)]

        assert sorted(keys, reverse=True)[-1] is EARLIEST
