"""Tests for the desktop event log.

The logger records structured entries for events across the desktop,
tagged with the subsystem and the node or window they concern.
"""

from py_webos.logging import LogEntry, Logger, LogLevel


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_str_with_ref(self) -> None:
        """The string form includes level, source, message and ref."""
        entry = LogEntry(
            level=LogLevel.WARNING,
            message="no such window",
            source="windows",
            ref="w3",
        )
        assert str(entry) == "[WARNING] windows: no such window (w3)"

    def test_entry_str_without_ref(self) -> None:
        """The ref suffix is omitted when absent."""
        entry = LogEntry(level=LogLevel.INFO, message="ready", source="desktop")
        assert str(entry) == "[INFO] desktop: ready"


class TestLogger:
    """Verify recording, filtering and clearing."""

    def test_log_appends(self) -> None:
        """Entries are kept in order."""
        logger = Logger()
        logger.log(LogLevel.INFO, "one", source="vfs")
        logger.log(LogLevel.DEBUG, "two", source="drag")
        assert [e.message for e in logger.entries] == ["one", "two"]

    def test_min_level_drops_entries(self) -> None:
        """Entries below the minimum level are not recorded."""
        logger = Logger(min_level=LogLevel.WARNING)
        logger.log(LogLevel.INFO, "quiet", source="vfs")
        logger.log(LogLevel.ERROR, "loud", source="vfs")
        assert [e.message for e in logger.entries] == ["loud"]

    def test_filter_by_criteria(self) -> None:
        """filter() combines level, source and ref."""
        logger = Logger()
        logger.log(LogLevel.INFO, "a", source="vfs", ref="n1")
        logger.log(LogLevel.WARNING, "b", source="vfs", ref="n2")
        logger.log(LogLevel.WARNING, "c", source="windows", ref="n2")
        assert [e.message for e in logger.filter(min_level=LogLevel.WARNING)] == ["b", "c"]
        assert [e.message for e in logger.filter(source="vfs", ref="n2")] == ["b"]

    def test_lines_hide_debug(self) -> None:
        """lines() formats INFO and above by default."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "noise", source="drag")
        logger.log(LogLevel.INFO, "closed", source="windows", ref="w1")
        assert logger.lines() == ["[INFO] windows: closed (w1)"]

    def test_entries_is_a_copy(self) -> None:
        """Mutating the returned list does not touch the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "x", source="vfs")
        logger.entries.clear()
        assert len(logger.entries) == 1

    def test_clear(self) -> None:
        """clear() empties the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "x", source="vfs")
        logger.clear()
        assert logger.entries == []
