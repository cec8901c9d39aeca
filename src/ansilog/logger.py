"""
AnsiLogger — leveled, timestamped, optionally colored logging to many sinks.

One ``log()`` call fans out to up to five destinations, each gated on its
own configured level and each isolated from the others:

    instance callback   -> gated on the logger's level
    global callback     -> gated on the global callback level
    instance file       -> gated on the logger's level, size capped
    global file         -> gated on the global file level, size capped
    delegate or console -> delegate gets every level but NONE,
                           console is gated on the logger's level

A failing sink is reported on the diagnostics stream and the remaining
sinks still run. Nothing is ever raised back to the caller.

Usage::

    log = AnsiLogger(AnsiLoggerParams(log_name='Matter', log_level=LogLevel.DEBUG))
    log.log_file_path = 'matter.log'
    log.info("Device online", {'id': 1})
    log.notice("*Highlighted name tag")
"""

import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, Protocol, TextIO

from . import colors
from .filelog import (
    MAX_FILE_SIZE, FileSink, LogCallback, StrPath, get_global_state,
)
from .levels import LogLevel, coerce_level, should_log
from .stringify import StringifyError, stringify
from .timestamps import (
    DEFAULT_CUSTOM_FORMAT, TimestampFormat, format_timestamp, monotonic_ms,
)


DEFAULT_LOG_NAME = 'NodeAnsiLogger'

LEVEL_COLORS = {
    LogLevel.DEBUG: colors.db,
    LogLevel.INFO: colors.nf,
    LogLevel.NOTICE: colors.nt,
    LogLevel.WARN: colors.wr,
    LogLevel.ERROR: colors.er,
    LogLevel.FATAL: colors.ft,
}


class Logger(Protocol):
    """Capabilities required of a delegate logger."""

    def debug(self, message: str, *parameters: Any) -> None: ...
    def info(self, message: str, *parameters: Any) -> None: ...
    def notice(self, message: str, *parameters: Any) -> None: ...
    def warn(self, message: str, *parameters: Any) -> None: ...
    def error(self, message: str, *parameters: Any) -> None: ...
    def fatal(self, message: str, *parameters: Any) -> None: ...
    def log(self, level: LogLevel, message: str, *parameters: Any) -> None: ...


@dataclass
class AnsiLoggerParams:
    """Construction options for AnsiLogger. Every field is optional.

    Attributes:
        ext_log: Delegate logger that replaces console output
        log_name: Name shown in every line
        log_debug: Legacy flag, selects DEBUG when log_level is not given
        log_level: Threshold for the console, instance callback and file
        log_with_colors: Color the console output
        log_timestamp_format: Wall-clock format of the timestamp
        log_custom_timestamp_format: Template for TimestampFormat.CUSTOM
    """
    ext_log: Optional[Logger] = None
    log_name: Optional[str] = None
    log_debug: Optional[bool] = None
    log_level: Optional[LogLevel] = None
    log_with_colors: Optional[bool] = None
    log_timestamp_format: Optional[TimestampFormat] = None
    log_custom_timestamp_format: Optional[str] = None


def format_parameter(parameter: Any) -> str:
    """Render one extra log argument.

    Strings pass through unquoted and exceptions render as
    ``Type: message``. Values the serializer does not know (datetime,
    Path, ...) fall back to their ``str()``.
    """
    if isinstance(parameter, str):
        return parameter
    if isinstance(parameter, BaseException):
        return f'{type(parameter).__name__}: {parameter}'
    try:
        return stringify(parameter)
    except StringifyError:
        return str(parameter)


def format_parameters(parameters: tuple) -> str:
    return ' '.join(format_parameter(p) for p in parameters)


def split_highlight(message: str):
    """Strip 1-4 leading '*' and return (name color or None, message)."""
    stars = len(message) - len(message.lstrip('*'))
    tier = min(stars, 4)
    if tier == 0:
        return None, message
    return colors.HIGHLIGHT_NAME_COLORS[tier], message[tier:]


class AnsiLogger:
    """Leveled logger with console, callback, file and delegate sinks.

    Args:
        params: Construction options, all defaulted
        stream: Console destination (default: sys.stdout at write time)
        diagnostics: Where sink failures are reported (default: sys.stderr)
        now_provider: Returns the current local datetime (default: datetime.now)
    """

    def __init__(
        self,
        params: Optional[AnsiLoggerParams] = None,
        *,
        stream: Optional[TextIO] = None,
        diagnostics: Optional[TextIO] = None,
        now_provider: Optional[Callable[[], datetime]] = None,
    ):
        params = params or AnsiLoggerParams()
        self._ext_log = params.ext_log
        self._log_name = params.log_name if params.log_name is not None else DEFAULT_LOG_NAME
        if params.log_level is not None:
            self._log_level = params.log_level
        else:
            self._log_level = LogLevel.DEBUG if params.log_debug is True else LogLevel.INFO
        self._log_with_colors = params.log_with_colors if params.log_with_colors is not None else True
        self._log_timestamp_format = (params.log_timestamp_format
                                      if params.log_timestamp_format is not None
                                      else TimestampFormat.LOCAL_DATE_TIME)
        self._log_custom_timestamp_format = (params.log_custom_timestamp_format
                                             if params.log_custom_timestamp_format is not None
                                             else DEFAULT_CUSTOM_FORMAT)
        self._log_timestamp_color = colors.TIMESTAMP_COLOR
        self._log_name_color = colors.NAME_COLOR
        self._max_file_size = MAX_FILE_SIZE
        self._file = FileSink()
        self._callback: Optional[LogCallback] = None
        self._timer_start = 0.0
        self._stream = stream
        self._diagnostics = diagnostics
        self._now_provider = now_provider

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def ext_log(self) -> Optional[Logger]:
        return self._ext_log

    @property
    def log_name(self) -> str:
        return self._log_name

    @log_name.setter
    def log_name(self, name: str) -> None:
        self._log_name = name

    @property
    def log_level(self) -> LogLevel:
        return self._log_level

    @log_level.setter
    def log_level(self, level: LogLevel) -> None:
        self._log_level = level

    @property
    def log_with_colors(self) -> bool:
        return self._log_with_colors

    @log_with_colors.setter
    def log_with_colors(self, enabled: bool) -> None:
        self._log_with_colors = enabled

    @property
    def log_name_color(self) -> str:
        return self._log_name_color

    @log_name_color.setter
    def log_name_color(self, color: str) -> None:
        self._log_name_color = color

    @property
    def log_timestamp_format(self) -> TimestampFormat:
        return self._log_timestamp_format

    @log_timestamp_format.setter
    def log_timestamp_format(self, fmt: TimestampFormat) -> None:
        self._log_timestamp_format = fmt

    @property
    def log_custom_timestamp_format(self) -> str:
        return self._log_custom_timestamp_format

    @log_custom_timestamp_format.setter
    def log_custom_timestamp_format(self, pattern: str) -> None:
        self._log_custom_timestamp_format = pattern

    @property
    def log_file_path(self) -> Optional[str]:
        """Absolute path of the instance log file, None while unset."""
        return self._file.path

    @log_file_path.setter
    def log_file_path(self, file_path: Optional[StrPath]) -> None:
        # Starting a log file always deletes whatever was at the path
        self._file.open(file_path, unlink=True, diagnostics=self.diagnostics)

    @property
    def log_file_size(self) -> Optional[int]:
        """Bytes written to the instance log file, None while unset."""
        return self._file.size

    @property
    def max_file_size(self) -> int:
        return self._max_file_size

    @max_file_size.setter
    def max_file_size(self, size: int) -> None:
        self._max_file_size = min(size, MAX_FILE_SIZE)

    @property
    def callback(self) -> Optional[LogCallback]:
        return self._callback

    @callback.setter
    def callback(self, callback: Optional[LogCallback]) -> None:
        self._callback = callback

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def diagnostics(self) -> TextIO:
        return self._diagnostics if self._diagnostics is not None else sys.stderr

    # -------------------------------------------------------------------------
    # Process-wide sinks
    # -------------------------------------------------------------------------

    @staticmethod
    def set_global_callback(callback: Optional[LogCallback],
                            callback_level: LogLevel = LogLevel.DEBUG) -> Optional[LogCallback]:
        """Set the callback shared by all loggers and its level."""
        return get_global_state().set_callback(callback, callback_level)

    @staticmethod
    def get_global_callback() -> Optional[LogCallback]:
        return get_global_state().callback

    @staticmethod
    def get_global_callback_level() -> Optional[LogLevel]:
        return get_global_state().callback_level

    @staticmethod
    def set_global_callback_level(level: LogLevel = LogLevel.DEBUG) -> LogLevel:
        return get_global_state().set_callback_level(level)

    @staticmethod
    def set_global_logfile(file_path: Optional[StrPath],
                           logfile_level: LogLevel = LogLevel.DEBUG,
                           unlink: bool = False) -> Optional[str]:
        """Set the log file shared by all loggers.

        Args:
            file_path: Path of the file, relative paths are resolved.
                Empty or None disables the global file.
            logfile_level: Threshold for the global file
            unlink: Delete an existing file at the path first

        Returns:
            The absolute path of the global file, or None if disabled.
        """
        return get_global_state().set_logfile(file_path, logfile_level, unlink)

    @staticmethod
    def get_global_logfile() -> Optional[str]:
        return get_global_state().file_path

    @staticmethod
    def get_global_logfile_level() -> Optional[LogLevel]:
        return get_global_state().file_level

    @staticmethod
    def set_global_logfile_level(level: LogLevel) -> LogLevel:
        return get_global_state().set_file_level(level)

    # -------------------------------------------------------------------------
    # Timestamps and timer
    # -------------------------------------------------------------------------

    def now(self) -> str:
        """Current timestamp string, as it would appear in a log line."""
        return format_timestamp(self._log_timestamp_format,
                                self._log_custom_timestamp_format,
                                self._timer_start, self._now_provider)

    def start_timer(self, message: str = '') -> None:
        """Start the timer. Until stopped, timestamps show elapsed ms."""
        self._timer_start = monotonic_ms()
        self.info(f'Timer started {message}')

    def stop_timer(self, message: str = '') -> None:
        """Log the elapsed time and return timestamps to the wall clock."""
        if self._timer_start:
            elapsed = int(monotonic_ms() - self._timer_start)
            self.info(f'Timer stopped at {elapsed} ms {message}')
        self._timer_start = 0.0

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------

    def _report(self, message: str) -> None:
        try:
            print(message, file=self.diagnostics)
        except Exception:
            pass

    def _plain_line(self, level: LogLevel, message: str, parameters: tuple) -> str:
        line = f'[{self.now()}] [{self._log_name}] [{level.value}] {message}'
        if parameters:
            line += ' ' + format_parameters(parameters)
        return line

    def _callback_message(self, message: str, parameters: tuple) -> str:
        if not parameters:
            return message
        return f'{message} {format_parameters(parameters)}'

    def _console_line(self, level: LogLevel, message: str, parameters: tuple) -> str:
        if not self._log_with_colors:
            return self._plain_line(level, message, parameters)
        name_color, message = split_highlight(message)
        if name_color is None:
            name_color = self._log_name_color
        line = (f'{colors.rs}{self._log_timestamp_color}[{self.now()}] '
                f'{name_color}[{self._log_name}]{colors.rs}{LEVEL_COLORS[level]} '
                f'{message}{colors.rs}{colors.rk}')
        if parameters:
            line += ' ' + format_parameters(parameters)
        return line

    def log(self, level: LogLevel, message: str, *parameters: Any) -> None:
        """Log ``message`` at ``level`` to every sink whose gate passes.

        Args:
            level: Severity of the message
            message: Message text. A leading '*' to '****' highlights the
                name tag on the colored console and is stripped there.
            *parameters: Extra values, rendered after the message
        """
        level = coerce_level(level)
        if level is None:
            return
        if not isinstance(message, str):
            try:
                message = str(message)
            except Exception as e:
                self._report(f'Error converting the log message: {e}')
                return

        try:
            if self._callback is not None and should_log(level, self._log_level):
                self._callback(level.value, self.now(), self._log_name,
                               self._callback_message(message, parameters))
        except Exception as e:
            self._report(f'Error executing local callback: {e}')

        state = get_global_state()
        try:
            callback = state.callback
            if callback is not None and should_log(level, state.callback_level):
                callback(level.value, self.now(), self._log_name,
                         self._callback_message(message, parameters))
        except Exception as e:
            self._report(f'Error executing global callback: {e}')

        try:
            if self._file.path is not None and should_log(level, self._log_level):
                self._file.write(self._plain_line(level, message, parameters),
                                 self._max_file_size)
        except Exception as e:
            self._report(f'Error writing to the local log file {self._file.path}: {e}')

        try:
            if state.file_path is not None and should_log(level, state.file_level):
                state.file.write(self._plain_line(level, message, parameters),
                                 self._max_file_size)
        except Exception as e:
            self._report(f'Error writing to the global log file {state.file_path}: {e}')

        if self._ext_log is not None:
            if level is not LogLevel.NONE:
                try:
                    self._ext_log.log(level, message, *parameters)
                except Exception as e:
                    self._report(f'Error forwarding to the external logger: {e}')
            return

        try:
            if should_log(level, self._log_level):
                print(self._console_line(level, message, parameters), file=self.stream)
        except Exception as e:
            self._report(f'Error writing to the console: {e}')

    def debug(self, message: str, *parameters: Any) -> None:
        self.log(LogLevel.DEBUG, message, *parameters)

    def info(self, message: str, *parameters: Any) -> None:
        self.log(LogLevel.INFO, message, *parameters)

    def notice(self, message: str, *parameters: Any) -> None:
        self.log(LogLevel.NOTICE, message, *parameters)

    def warn(self, message: str, *parameters: Any) -> None:
        self.log(LogLevel.WARN, message, *parameters)

    def error(self, message: str, *parameters: Any) -> None:
        self.log(LogLevel.ERROR, message, *parameters)

    def fatal(self, message: str, *parameters: Any) -> None:
        self.log(LogLevel.FATAL, message, *parameters)
