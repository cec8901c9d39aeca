"""
Tests for ansilog.levels — severity order and the level gate.
"""

import itertools

import pytest

from ansilog.levels import LEVEL_ORDER, LogLevel, coerce_level, should_log


# =============================================================================
# Level Constants
# =============================================================================

class TestLevelConstants:
    """Verify LogLevel values and ordering."""

    def test_level_values(self):
        """Levels carry their lower-case tag as value; NONE is empty."""
        assert LogLevel.NONE.value == ''
        assert LogLevel.DEBUG.value == 'debug'
        assert LogLevel.WARN.value == 'warn'
        assert LogLevel.FATAL.value == 'fatal'

    def test_level_order(self):
        """Order runs from most verbose to most severe."""
        assert LEVEL_ORDER == (
            LogLevel.DEBUG, LogLevel.INFO, LogLevel.NOTICE,
            LogLevel.WARN, LogLevel.ERROR, LogLevel.FATAL,
        )

    def test_none_has_no_rank(self):
        assert LogLevel.NONE not in LEVEL_ORDER

    def test_str_is_tag(self):
        assert str(LogLevel.NOTICE) == 'notice'


# =============================================================================
# Coercion
# =============================================================================

class TestCoerceLevel:
    """Test coerce_level()."""

    def test_member_passes_through(self):
        assert coerce_level(LogLevel.INFO) is LogLevel.INFO

    def test_string_value(self):
        assert coerce_level('error') is LogLevel.ERROR

    def test_empty_string_is_none_level(self):
        assert coerce_level('') is LogLevel.NONE

    @pytest.mark.parametrize("value", ['verbose', 'DEBUG', 3, None, object()])
    def test_unknown_values(self, value):
        assert coerce_level(value) is None


# =============================================================================
# Gate
# =============================================================================

class TestShouldLog:
    """Test the should_log() gate."""

    def test_all_pairs_follow_rank(self):
        """Every (message, configured) pair passes iff message rank >= configured rank."""
        for message, configured in itertools.product(LEVEL_ORDER, repeat=2):
            expected = LEVEL_ORDER.index(message) >= LEVEL_ORDER.index(configured)
            assert should_log(message, configured) is expected, (message, configured)

    @pytest.mark.parametrize("level", list(LogLevel))
    def test_none_message_never_emits(self, level):
        assert should_log(LogLevel.NONE, level) is False

    @pytest.mark.parametrize("level", list(LogLevel))
    def test_none_configured_never_emits(self, level):
        assert should_log(level, LogLevel.NONE) is False

    def test_debug_configured_shows_everything(self):
        assert all(should_log(level, LogLevel.DEBUG) for level in LEVEL_ORDER)

    def test_fatal_configured_shows_only_fatal(self):
        shown = [level for level in LEVEL_ORDER if should_log(level, LogLevel.FATAL)]
        assert shown == [LogLevel.FATAL]

    def test_string_values_accepted(self):
        assert should_log('warn', 'info') is True
        assert should_log('info', 'warn') is False

    def test_unknown_message_level_fails_closed(self):
        assert should_log('verbose', LogLevel.DEBUG) is False

    def test_unknown_configured_level_fails_closed(self):
        assert should_log(LogLevel.FATAL, 'loud') is False

    def test_unset_configured_level_fails_closed(self):
        """An unset (None) threshold, e.g. a global sink never configured, shows nothing."""
        assert should_log(LogLevel.FATAL, None) is False
