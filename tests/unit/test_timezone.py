"""
Tests for start time helpers (utils/timezone.py)
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from conference_api.utils.timezone import (
    format_iso_utc,
    parse_iso_datetime,
    partition_key_for,
    start_time_sort_key,
    to_utc,
)


class TestParseIsoDatetime:
    """Test parse_iso_datetime."""

    def test_zulu_suffix(self):
        assert parse_iso_datetime('2026-03-15T14:00:00Z') == datetime(2026, 3, 15, 14, 0, tzinfo=timezone.utc)

    def test_offset_is_converted_to_utc(self):
        assert parse_iso_datetime('2026-03-15T10:00:00-04:00') == datetime(2026, 3, 15, 14, 0, tzinfo=timezone.utc)

    def test_fractional_seconds(self):
        result = parse_iso_datetime('2026-03-15T14:00:00.123Z')
        assert result.microsecond == 123000

    def test_naive_value_is_assumed_utc(self):
        assert parse_iso_datetime('2026-03-15T14:00:00') == datetime(2026, 3, 15, 14, 0, tzinfo=timezone.utc)

    def test_date_only(self):
        assert parse_iso_datetime('2026-03-15') == datetime(2026, 3, 15, tzinfo=timezone.utc)

    def test_surrounding_whitespace(self):
        assert parse_iso_datetime('  2026-03-15T14:00:00Z ') is not None

    @pytest.mark.parametrize('value', ['not-a-date', '', '   ', None, '2026-13-45'])
    def test_invalid_values(self, value):
        assert parse_iso_datetime(value) is None

    def test_datetime_passthrough(self):
        dt = datetime(2026, 3, 15, 10, 0, tzinfo=ZoneInfo('America/New_York'))
        assert parse_iso_datetime(dt) == datetime(2026, 3, 15, 14, 0, tzinfo=timezone.utc)


class TestPartitionKey:
    """Test partition_key_for."""

    def test_utc_date(self):
        assert partition_key_for('2026-03-15T14:00:00Z') == '2026-03-15'

    def test_offset_crossing_midnight(self):
        assert partition_key_for('2026-03-15T23:30:00-05:00') == '2026-03-16'

    def test_invalid_start_time(self):
        with pytest.raises(ValueError, match='Invalid startTime'):
            partition_key_for('not-a-date')


class TestSortKey:
    """Test start_time_sort_key."""

    def test_orders_valid_times_and_puts_invalid_last(self):
        values = ['2026-03-16T09:00:00Z', 'not-a-date', '2026-03-15T14:00:00Z', '', '2026-03-15T09:00:00-04:00']

        ordered = sorted(values, key=start_time_sort_key)

        assert ordered == [
            '2026-03-15T09:00:00-04:00',
            '2026-03-15T14:00:00Z',
            '2026-03-16T09:00:00Z',
            'not-a-date',
            '',
        ]


class TestFormatting:
    """Test to_utc and format_iso_utc."""

    def test_to_utc_naive(self):
        assert to_utc(datetime(2026, 3, 15, 14, 0)).tzinfo == timezone.utc

    def test_format_iso_utc(self):
        dt = datetime(2026, 3, 15, 10, 0, tzinfo=ZoneInfo('America/New_York'))
        assert format_iso_utc(dt) == '2026-03-15T14:00:00Z'
