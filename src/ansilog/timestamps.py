"""
Timestamp formatting for log lines.

A running timer overrides the selected format: while a logger's timer is
active every line is stamped with the elapsed milliseconds instead of the
wall clock. Otherwise the format selector picks the rendering.
"""

import time
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional


class TimestampFormat(Enum):
    """Selector for the wall-clock rendering of a log timestamp."""
    ISO = 0
    LOCAL_DATE = 1
    LOCAL_TIME = 2
    LOCAL_DATE_TIME = 3
    TIME_MILLIS = 4
    HOMEBRIDGE = 5
    CUSTOM = 6


DEFAULT_CUSTOM_FORMAT = 'yyyy-MM-dd HH:mm:ss'

# Substituted in this order, first occurrence only
_CUSTOM_TOKENS = (
    ('yyyy', lambda d: f'{d.year:04d}'),
    ('MM', lambda d: f'{d.month:02d}'),
    ('dd', lambda d: f'{d.day:02d}'),
    ('HH', lambda d: f'{d.hour:02d}'),
    ('mm', lambda d: f'{d.minute:02d}'),
    ('ss', lambda d: f'{d.second:02d}'),
)


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds, used for the timer."""
    return time.monotonic() * 1000.0


def format_custom_timestamp(date: datetime, pattern: str) -> str:
    """Substitute yyyy, MM, dd, HH, mm and ss in ``pattern`` from ``date``.

    Each token is replaced once, in the order listed. Any other text is
    passed through unchanged.
    """
    for token, render in _CUSTOM_TOKENS:
        pattern = pattern.replace(token, render(date), 1)
    return pattern


def format_timer(elapsed_ms: float) -> str:
    """Render the elapsed time of a running timer."""
    return f'Timer:    {int(elapsed_ms):>7} ms'


def format_timestamp(
    fmt: TimestampFormat = TimestampFormat.LOCAL_DATE_TIME,
    custom_pattern: str = DEFAULT_CUSTOM_FORMAT,
    timer_start: float = 0,
    now_provider: Optional[Callable[[], datetime]] = None,
    clock_ms: Callable[[], float] = monotonic_ms,
) -> str:
    """Build the timestamp string for one log line.

    Args:
        fmt: Wall-clock format selector
        custom_pattern: Template used when ``fmt`` is CUSTOM
        timer_start: Monotonic start of a running timer in ms, 0 if none
        now_provider: Returns the current local datetime (default: datetime.now)
        clock_ms: Monotonic clock in ms, compared against ``timer_start``

    Returns:
        The rendered timestamp, without surrounding brackets.
    """
    if timer_start:
        return format_timer(clock_ms() - timer_start)

    now = now_provider() if now_provider is not None else datetime.now()

    if fmt is TimestampFormat.ISO:
        utc = now.astimezone(timezone.utc)
        return utc.strftime('%Y-%m-%dT%H:%M:%S.') + f'{utc.microsecond // 1000:03d}Z'
    if fmt is TimestampFormat.LOCAL_DATE:
        return now.strftime('%x')
    if fmt is TimestampFormat.LOCAL_TIME:
        return now.strftime('%X')
    if fmt is TimestampFormat.TIME_MILLIS:
        return now.strftime('%H:%M:%S.') + f'{now.microsecond // 1000:03d}'
    if fmt is TimestampFormat.CUSTOM:
        return format_custom_timestamp(now, custom_pattern)
    # LOCAL_DATE_TIME, HOMEBRIDGE
    return now.strftime('%x, %X')
