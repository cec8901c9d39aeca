"""
Severity levels and the level gate.

The emit rule is simple:

    rank(message.level) >= rank(configured)  ->  message is shown

where the ranks run from the most verbose to the most severe:

    ──── louder ──────────────────────────── quieter ───→
    debug   info   notice   warn   error   fatal

NONE is the silent sentinel. A NONE message is never shown, and a sink
configured at NONE shows nothing. Values that are not a known level
fail closed: the gate answers False instead of raising.
"""

from enum import Enum
from typing import Optional, Union


class LogLevel(str, Enum):
    """Severity of a log message, or the configured threshold of a sink."""
    NONE = ''
    DEBUG = 'debug'
    INFO = 'info'
    NOTICE = 'notice'
    WARN = 'warn'
    ERROR = 'error'
    FATAL = 'fatal'

    def __str__(self) -> str:
        return self.value


# Ordered from most verbose to most severe. NONE has no rank.
LEVEL_ORDER = (
    LogLevel.DEBUG,
    LogLevel.INFO,
    LogLevel.NOTICE,
    LogLevel.WARN,
    LogLevel.ERROR,
    LogLevel.FATAL,
)

_RANK = {level: rank for rank, level in enumerate(LEVEL_ORDER)}


def coerce_level(value: Union[LogLevel, str, None]) -> Optional[LogLevel]:
    """Return the LogLevel for a member or its string value, else None."""
    if isinstance(value, LogLevel):
        return value
    if isinstance(value, str):
        try:
            return LogLevel(value)
        except ValueError:
            return None
    return None


def should_log(level: Union[LogLevel, str, None],
               configured: Union[LogLevel, str, None]) -> bool:
    """Decide whether a message at ``level`` passes a sink set to ``configured``.

    Args:
        level: Severity of the message
        configured: Threshold of the sink being evaluated

    Returns:
        True if the configured level is at least as verbose as the message
        level. False for NONE on either side and for unknown values.
    """
    message_level = coerce_level(level)
    configured_level = coerce_level(configured)
    if message_level is None or configured_level is None:
        return False
    if message_level is LogLevel.NONE or configured_level is LogLevel.NONE:
        return False
    return _RANK[message_level] >= _RANK[configured_level]
