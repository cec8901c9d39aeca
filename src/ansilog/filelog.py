"""
Plain-text file sinks and the process-wide sink state.

Lines written to a file are stripped of ANSI escapes so log files stay
greppable. Every destination keeps a running byte count; once it reaches
the cap one sentinel line is appended and the destination stops taking
lines until a new path is assigned.

The process-wide callback and file live in a single GlobalLogState,
created on first use and reached through get_global_state(). It is never
torn down automatically; reset_global_state() exists for tests.
"""

import os
import re
import sys
import threading
from pathlib import Path
from typing import Callable, Optional, TextIO, Union

from .levels import LogLevel


# Hard ceiling for any file destination (100 MB)
MAX_FILE_SIZE = 100_000_000

ANSI_ESCAPE_RE = re.compile(
    r'[\u001b\u009b][\[()#;?]*(?:[0-9]{1,4}(?:;[0-9]{0,4})*)?[0-9A-ORZcf-nqry=><]'
)

StrPath = Union[str, 'os.PathLike[str]']

# callback(level, timestamp, name, message)
LogCallback = Callable[[str, str, str, str], None]


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return ANSI_ESCAPE_RE.sub('', text)


def normalize_line(line: str) -> str:
    """Strip ANSI escapes and normalize tabs and line endings for a file."""
    line = strip_ansi(line)
    return line.replace('\t', ' ').replace('\r', '').replace('\n', os.linesep)


def append_line(path: StrPath, line: str) -> int:
    """Append one normalized line to ``path``.

    Returns:
        Number of bytes written, including the trailing line separator.
    """
    data = (normalize_line(line) + os.linesep).encode('utf-8')
    with open(path, 'ab') as f:
        f.write(data)
    return len(data)


def stop_message(max_size: int) -> str:
    return (f'Logging on file has been stopped because the file size '
            f'is greater than {max_size} bytes.')


def _report(diagnostics: Optional[TextIO], message: str) -> None:
    print(message, file=diagnostics if diagnostics is not None else sys.stderr)


class FileSink:
    """One size-capped file destination.

    ``path`` is None while the sink is unset. Writes and the byte counter
    are serialized by a per-sink lock.
    """

    def __init__(self):
        self._path: Optional[str] = None
        self._size: Optional[int] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def size(self) -> Optional[int]:
        """Bytes written since the path was assigned, None while unset."""
        return self._size if self._path is not None else None

    def open(self, file_path: Optional[StrPath], unlink: bool = True,
             diagnostics: Optional[TextIO] = None) -> Optional[str]:
        """Point the sink at ``file_path`` and reset the byte counter.

        An empty or non-path value unsets the sink. With ``unlink`` an
        existing file at the path is deleted first; if that fails the sink
        is unset. Without ``unlink`` a failed deletion is only reported.

        Returns:
            The absolute path now in use, or None if the sink is unset.
        """
        with self._lock:
            self._path = None
            self._size = None
            if not isinstance(file_path, (str, os.PathLike)) or os.fspath(file_path) == '':
                return None
            try:
                resolved = str(Path(file_path).resolve())
            except (OSError, RuntimeError, ValueError) as e:
                _report(diagnostics, f'Error resolving log file path {file_path}: {e}')
                return None
            if unlink and os.path.exists(resolved):
                try:
                    os.unlink(resolved)
                except OSError as e:
                    _report(diagnostics, f'Error unlinking the log file {resolved}: {e}')
                    return None
            self._path = resolved
            self._size = 0
            return resolved

    def close(self) -> None:
        """Unset the sink. The file on disk is left alone."""
        with self._lock:
            self._path = None
            self._size = None

    def write(self, line: str, max_size: int = MAX_FILE_SIZE) -> bool:
        """Append ``line`` unless the sink is unset or already at the cap.

        The first write that takes the counter to ``max_size`` or beyond
        is followed by a single stop sentinel line.

        Returns:
            True if the line was written.

        Raises:
            OSError: If the file cannot be written.
        """
        with self._lock:
            if self._path is None or self._size is None or self._size >= max_size:
                return False
            self._size += append_line(self._path, line)
            if self._size >= max_size:
                append_line(self._path, stop_message(max_size))
            return True


class GlobalLogState:
    """Callback and file destinations shared by every logger in the process.

    The callback, its level and the file level are guarded by one lock;
    the file destination serializes its own writes.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._callback: Optional[LogCallback] = None
        self._callback_level: Optional[LogLevel] = None
        self._file_level: Optional[LogLevel] = None
        self.file = FileSink()

    @property
    def callback(self) -> Optional[LogCallback]:
        return self._callback

    @property
    def callback_level(self) -> Optional[LogLevel]:
        return self._callback_level

    @property
    def file_path(self) -> Optional[str]:
        return self.file.path

    @property
    def file_level(self) -> Optional[LogLevel]:
        return self._file_level

    def set_callback(self, callback: Optional[LogCallback],
                     level: LogLevel = LogLevel.DEBUG) -> Optional[LogCallback]:
        with self._lock:
            self._callback = callback
            self._callback_level = level
            return self._callback

    def set_callback_level(self, level: LogLevel = LogLevel.DEBUG) -> LogLevel:
        with self._lock:
            self._callback_level = level
            return self._callback_level

    def set_logfile(self, file_path: Optional[StrPath],
                    level: LogLevel = LogLevel.DEBUG, unlink: bool = False,
                    diagnostics: Optional[TextIO] = None) -> Optional[str]:
        with self._lock:
            self._file_level = level
        if not unlink:
            return self.file.open(file_path, unlink=False, diagnostics=diagnostics)
        # A failed unlink is reported but keeps the file destination
        resolved = self.file.open(file_path, unlink=True, diagnostics=diagnostics)
        if resolved is None and isinstance(file_path, (str, os.PathLike)) \
                and os.fspath(file_path) != '':
            resolved = self.file.open(file_path, unlink=False, diagnostics=diagnostics)
        return resolved

    def set_file_level(self, level: LogLevel) -> LogLevel:
        with self._lock:
            self._file_level = level
            return self._file_level


# =============================================================================
# Module-level singleton
# =============================================================================

_state: Optional[GlobalLogState] = None
_state_lock = threading.Lock()


def get_global_state() -> GlobalLogState:
    """Get the process-wide sink state, creating it on first use."""
    global _state
    if _state is None:
        with _state_lock:
            if _state is None:
                _state = GlobalLogState()
    return _state


def reset_global_state() -> GlobalLogState:
    """Replace the process-wide sink state with a fresh, empty one."""
    global _state
    with _state_lock:
        _state = GlobalLogState()
    return _state
