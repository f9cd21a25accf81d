"""The terminal — a DOS-style command interpreter over the virtual disk.

The terminal reads one line at a time, splits it into a command name
and arguments, dispatches to a handler, and appends the prompt, the
input and the response lines to an append-only output log.

State is deliberately small:

- **Path stack** — folder ids from the root down to the current
  directory.  ``cd name`` pushes, ``cd ..`` pops, ``cd \\`` resets.
- **Output log** — every line the terminal has shown since the last
  ``cls``.

Design choices:
    - **Returns lines, not prints.**  ``execute`` returns the response
      lines and also records them in ``output``; the caller decides how
      to display them (REPL, web UI, tests).
    - **Command dispatch via a dict.**  Adding a command means writing
      a ``_cmd_*`` method and adding one entry.
    - **Errors are output.**  Unknown commands and missing files or
      folders produce a message line; nothing is raised.
    - **Ids, not nodes.**  The path stack holds ids and every command
      re-resolves them against the file system.
"""

from collections.abc import Callable
from datetime import datetime
from typing import TypeAlias

from py_webos.config import DesktopConfig
from py_webos.logging import Logger, LogLevel
from py_webos.vfs.store import NodeKind, VirtualFileSystem

# Type alias for a command handler: takes a list of args, returns lines.
_Handler: TypeAlias = Callable[[list[str]], list[str]]

PATH_NOT_FOUND = "The system cannot find the path specified."
FILE_NOT_FOUND = "File not found."
EMPTY_LISTING = "File Not Found"

_HELP_LINES: tuple[str, ...] = (
    "Available commands:",
    "  dir, ls    - List directory contents",
    "  cd <name>  - Change directory",
    "  mkdir <name> - Create directory",
    "  touch <name> - Create file",
    "  cat <name> - View file content",
    "  echo <txt> - Print text",
    "  cls        - Clear screen",
)

# Commands that receive the rest of the line untouched as their only argument.
_RAW_TEXT_COMMANDS = frozenset({"echo"})

# Width of the indent in front of the "N File(s)" summary line.
_COUNT_INDENT = 15


class Terminal:
    """Command interpreter bound to a virtual file system.

    Each terminal window owns one ``Terminal``; they share the file
    system but each has its own current directory and output log.
    """

    def __init__(
        self,
        *,
        vfs: VirtualFileSystem,
        config: DesktopConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
        logger: Logger | None = None,
    ) -> None:
        """Create a terminal positioned at the root folder.

        Args:
            vfs: The file system the commands operate on.
            config: Supplies the banner printed at the top of the log.
            clock: Source of the time shown by ``time``.
            logger: Optional event log.

        """
        self._vfs = vfs
        self._clock = clock
        self._logger = logger
        self._path: list[str] = [vfs.root_id]
        banner = (config or DesktopConfig()).banner
        self._output: list[str] = list(banner)

        # Command dispatch table; names are matched case-insensitively.
        self._commands: dict[str, _Handler] = {
            "cls": self._cmd_cls,
            "clear": self._cmd_cls,
            "help": self._cmd_help,
            "echo": self._cmd_echo,
            "time": self._cmd_time,
            "dir": self._cmd_dir,
            "ls": self._cmd_dir,
            "cd": self._cmd_cd,
            "mkdir": self._cmd_mkdir,
            "touch": self._cmd_touch,
            "cat": self._cmd_cat,
            "type": self._cmd_cat,
        }

    @property
    def output(self) -> list[str]:
        """Return every line in the output log, oldest first."""
        return list(self._output)

    @property
    def path_ids(self) -> list[str]:
        """Return the path stack from the root to the current directory."""
        return list(self._path)

    @property
    def cwd(self) -> str:
        """Return the id of the current directory."""
        return self._path[-1]

    @property
    def command_names(self) -> list[str]:
        """Return the sorted list of command names."""
        return sorted(self._commands)

    def path_string(self) -> str:
        r"""Render the path stack as ``C:\Folder\Sub``.

        A folder id that no longer resolves renders as ``?``.
        """
        parts: list[str] = []
        for node_id in self._path:
            if node_id == self._vfs.root_id:
                parts.append("C:")
                continue
            node = self._vfs.get(node_id)
            parts.append(node.name if node is not None else "?")
        return "\\".join(parts) or "C:"

    def prompt(self) -> str:
        """Return the prompt shown before the input line."""
        return f"{self.path_string()}>"

    def execute(self, line: str) -> list[str]:
        """Run one input line.

        The prompt and the input are appended to the output log before
        dispatch, followed by the response lines.  Blank input is
        ignored entirely.

        Args:
            line: The raw input line (e.g. ``"cd Documents"``).

        Returns:
            The response lines produced by the command.

        """
        stripped = line.strip()
        if not stripped:
            return []

        self._output.append(f"{self.prompt()} {stripped}")
        parts = stripped.split()
        name = parts[0].lower()
        # One separator space is dropped; runs of spaces after it are kept.
        args = [stripped[len(parts[0]) + 1 :]] if name in _RAW_TEXT_COMMANDS else parts[1:]

        handler = self._commands.get(name)
        if handler is None:
            self._log(LogLevel.WARNING, f"unknown command {name!r}")
            response = [f"'{name}' is not recognized as an internal or external command."]
        else:
            self._log(LogLevel.DEBUG, f"run {name} {' '.join(args)}".rstrip())
            response = handler(args)

        self._output.extend(response)
        return response

    def _log(self, level: LogLevel, message: str) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source="terminal", ref=self.cwd)

    # -- Command handlers ------------------------------------------------

    def _cmd_cls(self, _args: list[str]) -> list[str]:
        """Clear the output log."""
        self._output.clear()
        return []

    def _cmd_help(self, _args: list[str]) -> list[str]:
        """Show the usage summary."""
        return list(_HELP_LINES)

    def _cmd_echo(self, args: list[str]) -> list[str]:
        """Echo the text after the command word exactly as typed."""
        return [" ".join(args)]

    def _cmd_time(self, _args: list[str]) -> list[str]:
        """Show the current date and time."""
        return [self._clock().strftime("%a %b %d %Y %H:%M:%S")]

    def _cmd_dir(self, _args: list[str]) -> list[str]:
        """List the current directory, oldest entry first."""
        children = self._vfs.list_children(self.cwd)
        lines: list[str] = []
        for child in children:
            date = child.created_at.strftime("%m/%d/%Y")
            time = child.created_at.strftime("%I:%M:%S %p")
            marker = "<DIR>" if child.kind is NodeKind.FOLDER else " " * 5
            lines.append(f"{date}  {time}    {marker}    {child.name}")
        if not lines:
            lines.append(EMPTY_LISTING)
        lines.append(f"{' ' * _COUNT_INDENT}{len(children)} File(s)")
        return lines

    def _cmd_cd(self, args: list[str]) -> list[str]:
        """Change the current directory."""
        if not args:
            return [self.path_string()]

        target = args[0]
        if target == "..":
            if len(self._path) > 1:
                self._path.pop()
                self._log(LogLevel.INFO, "cd ..")
            return []
        if target in ("\\", "/"):
            self._path = [self._vfs.root_id]
            self._log(LogLevel.INFO, "cd to root")
            return []

        folder_id = self._vfs.resolve_child_by_name(self.cwd, target, NodeKind.FOLDER)
        if folder_id is None:
            self._log(LogLevel.WARNING, f"cd {target}: not found")
            return [PATH_NOT_FOUND]
        self._path.append(folder_id)
        self._log(LogLevel.INFO, f"cd {target}")
        return []

    def _cmd_mkdir(self, args: list[str]) -> list[str]:
        """Create a folder in the current directory."""
        if not args:
            return ["Usage: mkdir <directory_name>"]
        if self._vfs.create_folder(self.cwd, args[0]) is None:
            return [PATH_NOT_FOUND]
        return ["Directory created."]

    def _cmd_touch(self, args: list[str]) -> list[str]:
        """Create an empty file in the current directory."""
        if not args:
            return ["Usage: touch <filename>"]
        if self._vfs.create_file(self.cwd, args[0]) is None:
            return [PATH_NOT_FOUND]
        return ["File created."]

    def _cmd_cat(self, args: list[str]) -> list[str]:
        """Show the content of a file in the current directory."""
        if not args:
            return []
        file_id = self._vfs.resolve_child_by_name(self.cwd, args[0], NodeKind.FILE)
        content = self._vfs.read_file(file_id) if file_id is not None else None
        if content is None:
            return [FILE_NOT_FOUND]
        return content.split("\n")
