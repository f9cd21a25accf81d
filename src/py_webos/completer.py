"""Tab completer for the WebOS terminal.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)`` which looks at the command
being typed and offers names from the current directory.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

from py_webos.vfs.store import NodeKind

if TYPE_CHECKING:
    from py_webos.terminal import Terminal
    from py_webos.vfs.store import VirtualFileSystem

# Which kind of entry each command takes as its argument.
_ARGUMENT_KINDS: dict[str, NodeKind] = {
    "cd": NodeKind.FOLDER,
    "cat": NodeKind.FILE,
    "type": NodeKind.FILE,
}


class Completer:
    """Complete command names and entry names in the current directory."""

    def __init__(self, terminal: Terminal, vfs: VirtualFileSystem) -> None:
        """Create a completer for *terminal*, reading entries from *vfs*."""
        self._terminal = terminal
        self._vfs = vfs

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*."""
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.lstrip().split()

        # Still typing the first word → command completion
        if not words or (len(words) == 1 and not line.endswith(" ")):
            prefix = text.lower()
            return [cmd for cmd in self._terminal.command_names if cmd.startswith(prefix)]

        kind = _ARGUMENT_KINDS.get(words[0].lower())
        if kind is None:
            return []
        return sorted(
            {
                child.name
                for child in self._vfs.list_children(self._terminal.cwd)
                if child.kind is kind and child.name.startswith(text)
            }
        )
