"""Shared test fixtures for ansilog test suite."""

import io
from datetime import datetime

import pytest

from ansilog.filelog import reset_global_state
from ansilog.levels import LogLevel
from ansilog.logger import AnsiLogger, AnsiLoggerParams


# ---------------------------------------------------------------------------
# Process-wide state
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _reset_global_state():
    """Give every test an empty global callback/file state."""
    reset_global_state()
    yield
    reset_global_state()


# ---------------------------------------------------------------------------
# Streams
# ---------------------------------------------------------------------------
@pytest.fixture
def buf():
    """A StringIO buffer standing in for the console."""
    return io.StringIO()


@pytest.fixture
def diag():
    """A StringIO buffer capturing sink failure reports."""
    return io.StringIO()


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------
FIXED_NOW = datetime(2024, 3, 7, 9, 5, 4, 123456)


@pytest.fixture
def fixed_now():
    """A now_provider returning 2024-03-07 09:05:04.123456."""
    return lambda: FIXED_NOW


# ---------------------------------------------------------------------------
# Loggers
# ---------------------------------------------------------------------------
@pytest.fixture
def make_logger(buf, diag, fixed_now):
    """Factory for loggers writing to ``buf`` and reporting to ``diag``.

    Defaults to a plain (uncolored) DEBUG logger named TestLogger.
    """
    def _make(**kwargs):
        kwargs.setdefault('log_name', 'TestLogger')
        kwargs.setdefault('log_level', LogLevel.DEBUG)
        kwargs.setdefault('log_with_colors', False)
        return AnsiLogger(AnsiLoggerParams(**kwargs), stream=buf,
                          diagnostics=diag, now_provider=fixed_now)
    return _make


@pytest.fixture
def log(make_logger):
    """A plain DEBUG logger named TestLogger."""
    return make_logger()
