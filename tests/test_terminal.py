"""Tests for the terminal command interpreter.

The terminal parses a line into a command and arguments, runs it
against the virtual file system, and records the prompt, the input and
the response in an append-only output log.
"""

from datetime import datetime

from py_webos.config import DEFAULT_BANNER, DesktopConfig
from py_webos.logging import Logger, LogLevel
from py_webos.terminal import EMPTY_LISTING, FILE_NOT_FOUND, PATH_NOT_FOUND, Terminal
from py_webos.vfs import ROOT_ID, VirtualFileSystem, sample_filesystem

NOW = datetime(2024, 5, 17, 14, 5, 9)


def _clock() -> datetime:
    return NOW


def _terminal(vfs: VirtualFileSystem | None = None) -> tuple[VirtualFileSystem, Terminal]:
    """Create a terminal over an empty (or given) file system."""
    vfs = vfs if vfs is not None else VirtualFileSystem(clock=_clock)
    return vfs, Terminal(vfs=vfs, clock=_clock)


class TestTerminalCreation:
    """Verify the initial state of a terminal."""

    def test_starts_at_root(self) -> None:
        """The path stack should start at the root."""
        _vfs, term = _terminal()
        assert term.path_ids == [ROOT_ID]
        assert term.prompt() == "C:>"

    def test_output_starts_with_banner(self) -> None:
        """The log should open with the banner lines."""
        _vfs, term = _terminal()
        assert term.output == list(DEFAULT_BANNER)

    def test_custom_banner(self) -> None:
        """The banner should come from the config."""
        vfs = VirtualFileSystem()
        term = Terminal(vfs=vfs, config=DesktopConfig(banner=("hi",)))
        assert term.output == ["hi"]


class TestExecute:
    """Verify parsing, dispatch and logging of input lines."""

    def test_blank_line_is_ignored(self) -> None:
        """Blank input should neither respond nor log."""
        _vfs, term = _terminal()
        before = term.output
        assert term.execute("   ") == []
        assert term.output == before

    def test_prompt_and_input_are_logged(self) -> None:
        """The prompt plus input should be appended before the response."""
        _vfs, term = _terminal()
        term.execute("echo hi")
        assert term.output[-2:] == ["C:> echo hi", "hi"]

    def test_unknown_command(self) -> None:
        """Unknown commands should produce the DOS error line."""
        _vfs, term = _terminal()
        result = term.execute("foobar")
        assert result == ["'foobar' is not recognized as an internal or external command."]

    def test_command_names_are_case_insensitive(self) -> None:
        """ECHO and echo should be the same command."""
        _vfs, term = _terminal()
        assert term.execute("ECHO Hello") == ["Hello"]

    def test_unknown_command_is_lowercased(self) -> None:
        """The error should quote the lower-cased name."""
        _vfs, term = _terminal()
        assert term.execute("FOO")[0].startswith("'foo'")

    def test_output_is_never_truncated(self) -> None:
        """Every line ever produced should stay in the log."""
        _vfs, term = _terminal()
        for i in range(500):
            term.execute(f"echo {i}")
        assert term.output[-1] == "499"
        assert len(term.output) == len(DEFAULT_BANNER) + 1000


class TestSimpleCommands:
    """Verify cls, help, echo and time."""

    def test_cls_clears_log(self) -> None:
        """cls should empty the log entirely."""
        _vfs, term = _terminal()
        term.execute("echo one")
        assert term.execute("cls") == []
        assert term.output == []

    def test_clear_is_an_alias(self) -> None:
        """clear should behave like cls."""
        _vfs, term = _terminal()
        term.execute("clear")
        assert term.output == []

    def test_help_lists_commands(self) -> None:
        """help should describe the supported commands."""
        _vfs, term = _terminal()
        text = "\n".join(term.execute("help"))
        for name in ("dir", "cd", "mkdir", "touch", "cat", "echo", "cls"):
            assert name in text

    def test_echo_keeps_spacing(self) -> None:
        """echo should print its text with inner runs of spaces intact."""
        _vfs, term = _terminal()
        assert term.execute("echo hello   big world") == ["hello   big world"]

    def test_echo_keeps_leading_spaces(self) -> None:
        """Only the single space after the command word is dropped."""
        _vfs, term = _terminal()
        assert term.execute("echo   indented") == ["  indented"]

    def test_echo_without_text(self) -> None:
        """echo alone should print an empty line."""
        _vfs, term = _terminal()
        assert term.execute("echo") == [""]

    def test_time_uses_clock(self) -> None:
        """time should format the injected clock."""
        _vfs, term = _terminal()
        assert term.execute("time") == ["Fri May 17 2024 14:05:09"]


class TestDir:
    """Verify directory listings."""

    def test_empty_folder(self) -> None:
        """An empty folder lists exactly the not-found line and a zero count."""
        _vfs, term = _terminal()
        result = term.execute("dir")
        assert result[0] == EMPTY_LISTING
        assert result[1].strip() == "0 File(s)"
        assert len(result) == 2

    def test_lists_children_in_creation_order(self) -> None:
        """Entries should follow creation order with a DIR marker."""
        _vfs, term = _terminal()
        term.execute("touch b.txt")
        term.execute("mkdir Alpha")
        result = term.execute("ls")
        stamp = "05/17/2024  02:05:09 PM"
        assert result[0] == stamp + "    " + " " * 5 + "    b.txt"
        assert result[1] == stamp + "    <DIR>    Alpha"
        assert result[2].strip() == "2 File(s)"

    def test_sample_root(self) -> None:
        """The sample disk root should list its four folders."""
        _vfs, term = _terminal(sample_filesystem(clock=_clock))
        result = term.execute("dir")
        assert [line.split()[-1] for line in result[:4]] == [
            "Documents",
            "Pictures",
            "Projects",
            "System",
        ]


class TestCd:
    """Verify directory navigation."""

    def test_cd_into_folder(self) -> None:
        """cd name should push the folder and update the prompt."""
        _vfs, term = _terminal(sample_filesystem())
        assert term.execute("cd Documents") == []
        assert term.path_ids == [ROOT_ID, "docs"]
        assert term.prompt() == "C:\\Documents>"

    def test_cd_without_argument_echoes_path(self) -> None:
        """cd alone should print the current path."""
        _vfs, term = _terminal(sample_filesystem())
        term.execute("cd Documents")
        assert term.execute("cd") == ["C:\\Documents"]

    def test_cd_missing_folder(self) -> None:
        """An unknown name should error and leave the stack alone."""
        _vfs, term = _terminal()
        assert term.execute("cd nope") == [PATH_NOT_FOUND]
        assert term.path_ids == [ROOT_ID]

    def test_cd_into_file_fails(self) -> None:
        """Files are not directories."""
        _vfs, term = _terminal()
        term.execute("touch notes")
        assert term.execute("cd notes") == [PATH_NOT_FOUND]

    def test_cd_is_case_sensitive(self) -> None:
        """Folder names must match exactly."""
        _vfs, term = _terminal(sample_filesystem())
        assert term.execute("cd documents") == [PATH_NOT_FOUND]

    def test_cd_dotdot_at_root_is_noop(self) -> None:
        """cd .. at the root should stay put silently."""
        _vfs, term = _terminal()
        assert term.execute("cd ..") == []
        assert term.path_ids == [ROOT_ID]

    def test_cd_backslash_resets_to_root(self) -> None:
        """cd \\ and cd / should return to the root."""
        _vfs, term = _terminal()
        term.execute("mkdir a")
        term.execute("cd a")
        term.execute("mkdir b")
        term.execute("cd b")
        term.execute("cd \\")
        assert term.path_ids == [ROOT_ID]
        term.execute("cd a")
        term.execute("cd /")
        assert term.path_ids == [ROOT_ID]

    def test_mkdir_cd_round_trip(self) -> None:
        """mkdir X, cd X, cd .. should restore the original stack."""
        _vfs, term = _terminal(sample_filesystem())
        term.execute("cd Projects")
        before = term.path_ids
        term.execute("mkdir X")
        term.execute("cd X")
        assert term.path_ids[:-1] == before
        term.execute("cd ..")
        assert term.path_ids == before

    def test_cd_first_match_with_duplicates(self) -> None:
        """Duplicate folder names resolve to the first one created."""
        vfs, term = _terminal()
        first = vfs.create_folder(ROOT_ID, "dup")
        vfs.create_folder(ROOT_ID, "dup")
        term.execute("cd dup")
        assert term.cwd == first


class TestMkdirTouch:
    """Verify creation commands."""

    def test_mkdir_creates_folder(self) -> None:
        """mkdir should create a folder in the current directory."""
        vfs, term = _terminal()
        assert term.execute("mkdir Games") == ["Directory created."]
        assert [c.name for c in vfs.list_children(ROOT_ID)] == ["Games"]

    def test_mkdir_usage(self) -> None:
        """mkdir without a name should print usage."""
        _vfs, term = _terminal()
        assert term.execute("mkdir") == ["Usage: mkdir <directory_name>"]

    def test_touch_creates_file_in_cwd(self) -> None:
        """touch should create an empty file in the current directory."""
        vfs, term = _terminal(sample_filesystem())
        term.execute("cd Pictures")
        assert term.execute("touch cat.png") == ["File created."]
        assert [c.name for c in vfs.list_children("pics")] == ["cat.png"]

    def test_touch_usage(self) -> None:
        """touch without a name should print usage."""
        _vfs, term = _terminal()
        assert term.execute("touch") == ["Usage: touch <filename>"]

    def test_mkdir_in_stale_directory(self) -> None:
        """A current directory that vanished should report a path error."""
        vfs, term = _terminal()
        term.execute("mkdir gone")
        term.execute("cd gone")
        del vfs._nodes[term.cwd]
        assert term.execute("mkdir x") == [PATH_NOT_FOUND]
        assert term.prompt() == "C:\\?>"


class TestCat:
    """Verify reading files."""

    def test_touch_then_cat_is_empty(self) -> None:
        """A freshly touched file reads back as an empty line."""
        _vfs, term = _terminal()
        term.execute("touch a.txt")
        assert term.execute("cat a.txt") == [""]

    def test_cat_after_save(self) -> None:
        """cat should show content saved by an editor."""
        vfs, term = _terminal()
        term.execute("touch a.txt")
        file_id = vfs.resolve_child_by_name(ROOT_ID, "a.txt")
        assert file_id is not None
        vfs.write_file(file_id, "hi")
        assert term.execute("cat a.txt") == ["hi"]

    def test_type_is_an_alias(self) -> None:
        """type should behave like cat and split lines."""
        _vfs, term = _terminal(sample_filesystem())
        term.execute("cd Documents")
        expected = ["- Build WebOS", "- Integrate Gemini", "- Fix bugs"]
        assert term.execute("type todo.txt") == expected

    def test_cat_missing_file(self) -> None:
        """An unknown file should print the not-found line."""
        _vfs, term = _terminal()
        assert term.execute("cat nope.txt") == [FILE_NOT_FOUND]

    def test_cat_folder_is_not_found(self) -> None:
        """Folders cannot be printed."""
        _vfs, term = _terminal(sample_filesystem())
        assert term.execute("cat Documents") == [FILE_NOT_FOUND]

    def test_cat_without_name_is_silent(self) -> None:
        """cat alone should print nothing."""
        _vfs, term = _terminal()
        assert term.execute("cat") == []


class TestTerminalLogging:
    """Verify terminal events reach the event log."""

    def test_failed_cd_is_a_warning(self) -> None:
        """An unresolved cd should be logged as a warning."""
        logger = Logger()
        term = Terminal(vfs=VirtualFileSystem(), logger=logger)
        term.execute("cd nope")
        warnings = logger.filter(min_level=LogLevel.WARNING, source="terminal")
        assert len(warnings) == 1
        assert "nope" in warnings[0].message
