"""Tests for ansilog.timestamps — format selection and the timer override."""

import re
from datetime import datetime

import pytest

from ansilog.timestamps import (
    DEFAULT_CUSTOM_FORMAT, TimestampFormat,
    format_custom_timestamp, format_timer, format_timestamp,
)


NOW = datetime(2024, 3, 7, 9, 5, 4, 123456)


def fixed():
    return NOW


class TestCustomPattern:
    """Test format_custom_timestamp()."""

    def test_default_pattern(self):
        assert format_custom_timestamp(NOW, DEFAULT_CUSTOM_FORMAT) == '2024-03-07 09:05:04'

    def test_month_is_one_based(self):
        january = datetime(2024, 1, 31, 0, 0, 0)
        assert format_custom_timestamp(january, 'MM') == '01'

    def test_unknown_text_passes_through(self):
        assert format_custom_timestamp(NOW, 'day dd at HH:mm!') == 'day 07 at 09:05!'

    def test_each_token_replaced_once(self):
        assert format_custom_timestamp(NOW, 'yyyy yyyy') == '2024 yyyy'


class TestFormatTimestamp:
    """Test format_timestamp() dispatch."""

    def test_time_millis(self):
        assert format_timestamp(TimestampFormat.TIME_MILLIS, now_provider=fixed) == '09:05:04.123'

    def test_custom(self):
        result = format_timestamp(TimestampFormat.CUSTOM, 'dd/MM/yyyy', now_provider=fixed)
        assert result == '07/03/2024'

    def test_iso_is_utc_with_millis(self):
        result = format_timestamp(TimestampFormat.ISO, now_provider=fixed)
        assert re.fullmatch(r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.123Z', result)

    def test_local_variants(self):
        assert format_timestamp(TimestampFormat.LOCAL_DATE, now_provider=fixed) == NOW.strftime('%x')
        assert format_timestamp(TimestampFormat.LOCAL_TIME, now_provider=fixed) == NOW.strftime('%X')
        assert (format_timestamp(TimestampFormat.LOCAL_DATE_TIME, now_provider=fixed)
                == NOW.strftime('%x, %X'))

    def test_homebridge_matches_local_date_time(self):
        assert (format_timestamp(TimestampFormat.HOMEBRIDGE, now_provider=fixed)
                == format_timestamp(TimestampFormat.LOCAL_DATE_TIME, now_provider=fixed))

    def test_default_uses_wall_clock(self):
        assert format_timestamp() != ''


class TestTimerOverride:
    """A running timer replaces the format selector."""

    def test_format_timer(self):
        assert format_timer(42) == 'Timer:         42 ms'

    @pytest.mark.parametrize("fmt", list(TimestampFormat))
    def test_timer_overrides_every_format(self, fmt):
        result = format_timestamp(fmt, timer_start=1000.0, now_provider=fixed,
                                  clock_ms=lambda: 1250.0)
        assert result == 'Timer:        250 ms'

    def test_zero_start_means_no_timer(self):
        result = format_timestamp(TimestampFormat.TIME_MILLIS, timer_start=0,
                                  now_provider=fixed, clock_ms=lambda: 99.0)
        assert result == '09:05:04.123'
