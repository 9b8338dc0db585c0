"""Tests for shared model utilities."""

from datetime import UTC, datetime, timedelta, timezone

from app.models.shared import as_utc, utc_now


class TestUtcNow:
    def test_returns_datetime(self):
        result = utc_now()
        assert isinstance(result, datetime)

    def test_returns_utc(self):
        result = utc_now()
        assert result.tzinfo == UTC

    def test_returns_current_time(self):
        before = datetime.now(UTC)
        result = utc_now()
        after = datetime.now(UTC)
        assert before <= result <= after


class TestAsUtc:
    def test_naive_is_treated_as_utc(self):
        result = as_utc(datetime(2026, 1, 1, 12, 0))
        assert result == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def test_aware_is_converted(self):
        value = datetime(2026, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        result = as_utc(value)
        assert result.tzinfo == UTC
        assert result.hour == 12

    def test_utc_is_unchanged(self):
        value = datetime(2026, 1, 1, tzinfo=UTC)
        assert as_utc(value) == value
