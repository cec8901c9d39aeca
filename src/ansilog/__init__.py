"""
ansilog — leveled, colored console and file logging with a cycle-safe serializer.

Public API:
    AnsiLogger        — logger with console, callback, file and delegate sinks
    AnsiLoggerParams  — construction options
    LogLevel          — severity levels (NONE, DEBUG ... FATAL)
    should_log        — the level gate
    TimestampFormat   — timestamp format selector
    stringify         — value to display string, plus the named presets
    UNDEFINED, Symbol — values with their own renderings
    StringifyError    — raised for values the serializer cannot render
"""

from ansilog._version import __version__, __app_name__
from ansilog.levels import LogLevel, should_log, coerce_level
from ansilog.timestamps import TimestampFormat, format_timestamp
from ansilog.stringify import (
    stringify, payload_stringify, color_stringify, history_stringify,
    mqtt_stringify, debug_stringify, StringifyError, UNDEFINED, Symbol,
)
from ansilog.filelog import (
    MAX_FILE_SIZE, get_global_state, reset_global_state,
)
from ansilog.logger import AnsiLogger, AnsiLoggerParams, Logger

__all__ = [
    '__version__', '__app_name__',
    'LogLevel', 'should_log', 'coerce_level',
    'TimestampFormat', 'format_timestamp',
    'stringify', 'payload_stringify', 'color_stringify', 'history_stringify',
    'mqtt_stringify', 'debug_stringify', 'StringifyError', 'UNDEFINED', 'Symbol',
    'MAX_FILE_SIZE', 'get_global_state', 'reset_global_state',
    'AnsiLogger', 'AnsiLoggerParams', 'Logger',
]
