"""Interactive REPL for the WebOS terminal.

Runs one terminal on ``stdin``/``stdout`` against a fresh sample disk:

    1. **Read** — display the ``C:\\...>`` prompt and read a line.
    2. **Eval** — pass it to ``terminal.execute()``.
    3. **Print** — display the response lines.
    4. **Loop** — until Ctrl+D, Ctrl+C, or ``exit``.

``exit`` belongs to the REPL, not the terminal: the terminal's command
set matches the desktop app exactly.  ``cls`` clears the screen with an
ANSI escape since the terminal's own log is not reprinted here.

The helper ``format_banner`` is pure and testable.  ``run()`` is the
I/O entrypoint.
"""

import readline

from py_webos.completer import Completer
from py_webos.desktop import Desktop
from py_webos.terminal import Terminal
from py_webos.windows.catalog import AppId

_EXIT_COMMANDS = frozenset({"exit", "quit"})
_CLEAR_SCREEN = "\033[2J\033[H"


def format_banner(terminal: Terminal) -> str:
    """Return the terminal's current output log as one printable string."""
    return "\n".join(terminal.output)


def run() -> None:
    """Start a desktop, open a terminal window, and run the REPL.

    This is the ``py-webos`` console entry point.
    """
    desktop = Desktop()
    window = desktop.launch(AppId.TERMINAL)
    terminal = desktop.terminal(window.id)
    if terminal is None:  # pragma: no cover - launch always attaches a terminal
        msg = "Terminal window has no terminal session"
        raise RuntimeError(msg)

    completer = Completer(terminal, desktop.vfs)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner(terminal))  # noqa: T201

    try:
        while True:
            try:
                line = input(terminal.prompt() + " ")
            except EOFError:
                # Ctrl+D: graceful exit
                print()  # noqa: T201
                break

            if line.strip().lower() in _EXIT_COMMANDS:
                break
            response = terminal.execute(line)
            if not terminal.output:
                print(_CLEAR_SCREEN, end="")  # noqa: T201
            for out in response:
                print(out)  # noqa: T201

    except KeyboardInterrupt:
        print("\nInterrupted.")  # noqa: T201

    finally:
        desktop.close(window.id)
