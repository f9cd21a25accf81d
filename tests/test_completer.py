"""Tests for the tab-completion engine.

The Completer looks at the line typed so far and offers either command
names or entry names from the terminal's current folder.  Its logic is
pure, so it is tested without readline.
"""

from unittest.mock import patch

from py_webos.completer import Completer
from py_webos.terminal import Terminal
from py_webos.vfs import sample_filesystem


def _completer() -> tuple[Terminal, Completer]:
    """Create a terminal on the sample disk and a completer for it."""
    vfs = sample_filesystem()
    terminal = Terminal(vfs=vfs)
    return terminal, Completer(terminal, vfs)


class TestCommandCompletion:
    """Verify completion of the first word."""

    def test_empty_line_returns_all_commands(self) -> None:
        """Tab on a blank line lists every command."""
        terminal, completer = _completer()
        assert completer.completions("", "") == terminal.command_names

    def test_partial_match(self) -> None:
        """A prefix returns only matching commands."""
        _terminal, completer = _completer()
        assert completer.completions("c", "c") == ["cat", "cd", "clear", "cls"]

    def test_case_insensitive(self) -> None:
        """Command names complete regardless of case."""
        _terminal, completer = _completer()
        assert completer.completions("DI", "DI") == ["dir"]

    def test_no_match(self) -> None:
        """An unknown prefix yields nothing."""
        _terminal, completer = _completer()
        assert completer.completions("zz", "zz") == []


class TestArgumentCompletion:
    """Verify completion of entry names after a command."""

    def test_cd_offers_folders(self) -> None:
        """cd completes folder names in the current folder."""
        _terminal, completer = _completer()
        assert completer.completions("P", "cd P") == ["Pictures", "Projects"]

    def test_cat_offers_files(self) -> None:
        """cat completes only file names."""
        terminal, completer = _completer()
        terminal.execute("cd Documents")
        assert completer.completions("", "cat ") == ["Resume.txt", "todo.txt"]

    def test_cat_skips_folders(self) -> None:
        """Folders are not offered to cat."""
        _terminal, completer = _completer()
        assert completer.completions("", "type ") == []

    def test_other_commands_have_no_arguments(self) -> None:
        """Commands without a name argument complete nothing."""
        _terminal, completer = _completer()
        assert completer.completions("", "echo ") == []


class TestReadlineInterface:
    """Verify the readline callback."""

    def test_complete_state_interface(self) -> None:
        """complete() returns candidates by index and None when done."""
        _terminal, completer = _completer()
        with patch("readline.get_line_buffer", return_value="hel"):
            assert completer.complete("hel", 0) == "help"
            assert completer.complete("hel", 1) is None
