"""The desktop — application host tying windows to the virtual disk.

The desktop is to this system what the kernel is to an OS: it owns the
subsystems and coordinates work that spans more than one of them.

    Logger  →  VirtualFileSystem  →  WindowRegistry  →  DragController

On top of those it keeps one *session* per window — the state of the
application running inside it (a ``Terminal``, an ``EditorSession``,
or an ``ExplorerSession``).  Windows for presentation-only apps
(browser, paint, ...) have no session.

Everything the user can do maps to one method here:

- launching apps from the taskbar, start menu, or explorer,
- pointer presses on a window body (focus) or title bar (drag),
- pointer moves and releases anywhere on the screen,
- the "show desktop" strip at the end of the taskbar.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TypeAlias

from py_webos.apps import EditorMode, EditorSession, ExplorerSession
from py_webos.config import DesktopConfig
from py_webos.logging import Logger, LogLevel
from py_webos.terminal import Terminal
from py_webos.vfs.seed import sample_filesystem
from py_webos.vfs.store import NodeKind, VirtualFileSystem
from py_webos.windows.catalog import PINNED_APPS, AppId, Icon, profile_for
from py_webos.windows.drag import DragController, DragSession
from py_webos.windows.registry import WindowRecord, WindowRegistry

Session: TypeAlias = Terminal | EditorSession | ExplorerSession


@dataclass(frozen=True)
class TaskbarButton:
    """State of one pinned taskbar button.

    Attributes:
        app_id: Application the button launches.
        icon: Icon drawn on the button.
        running: At least one visible window of this app is open.
        minimized: At least one minimized window of this app is open.

    """

    app_id: AppId
    icon: Icon
    running: bool
    minimized: bool


class Desktop:
    """Own the file system, the window manager, and per-window sessions."""

    def __init__(
        self,
        *,
        config: DesktopConfig | None = None,
        vfs: VirtualFileSystem | None = None,
        logger: Logger | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Create a desktop with no open windows.

        Args:
            config: Geometry and banner settings.
            vfs: File system to use; defaults to the sample disk.
            logger: Event log shared by every subsystem.
            clock: Source of timestamps for new nodes and ``time``.

        """
        self._config = config or DesktopConfig()
        self._logger = logger if logger is not None else Logger()
        self._clock = clock
        self._vfs = vfs if vfs is not None else sample_filesystem(clock=clock, logger=self._logger)
        self._windows = WindowRegistry(config=self._config, logger=self._logger)
        self._drag = DragController(self._windows, logger=self._logger)
        self._sessions: dict[str, Session] = {}
        self._logger.log(LogLevel.INFO, f"desktop ready ({len(self._vfs)} nodes)", source="desktop")

    @property
    def config(self) -> DesktopConfig:
        """Return the desktop configuration."""
        return self._config

    @property
    def logger(self) -> Logger:
        """Return the shared event log."""
        return self._logger

    @property
    def vfs(self) -> VirtualFileSystem:
        """Return the virtual file system."""
        return self._vfs

    @property
    def windows(self) -> WindowRegistry:
        """Return the window registry."""
        return self._windows

    @property
    def drag(self) -> DragController:
        """Return the drag controller."""
        return self._drag

    def dmesg(self) -> list[str]:
        """Return the formatted event log (INFO and above)."""
        return self._logger.lines()

    # -- Application lifecycle ----------------------------------------------

    def launch(self, app_id: AppId, file_id: str | None = None) -> WindowRecord:
        """Open a window for *app_id*, optionally on a file.

        Editors opened on a file take the file's name as their title;
        a stale *file_id* falls back to the application's default title.
        """
        profile = profile_for(app_id)
        title: str | None = None
        if file_id is not None and profile.opens_files:
            node = self._vfs.get(file_id)
            if node is not None:
                title = node.name

        record = self._windows.launch(app_id, file_id, title=title)
        session = self._new_session(record)
        if session is not None:
            self._sessions[record.id] = session
        return record

    def _new_session(self, record: WindowRecord) -> Session | None:
        match record.app_id:
            case AppId.TERMINAL:
                return Terminal(
                    vfs=self._vfs,
                    config=self._config,
                    clock=self._clock,
                    logger=self._logger,
                )
            case AppId.NOTEPAD:
                return EditorSession(self._vfs, record.file_id, mode=EditorMode.TEXT)
            case AppId.CODE:
                return EditorSession(self._vfs, record.file_id, mode=EditorMode.CODE)
            case AppId.FILES:
                return ExplorerSession(self._vfs)
            case _:
                return None

    def close(self, window_id: str) -> bool:
        """Close a window and discard its session."""
        if not self._windows.close(window_id):
            return False
        self._sessions.pop(window_id, None)
        return True

    def focus(self, window_id: str) -> WindowRecord | None:
        """Bring a window to the front."""
        return self._windows.focus(window_id)

    def minimize(self, window_id: str) -> WindowRecord | None:
        """Minimize a window to the taskbar."""
        return self._windows.minimize(window_id)

    def restore(self, window_id: str) -> WindowRecord | None:
        """Show a minimized window again."""
        return self._windows.restore(window_id)

    def toggle_maximize(self, window_id: str) -> WindowRecord | None:
        """Maximize or un-maximize a window."""
        return self._windows.toggle_maximize(window_id)

    def show_desktop(self) -> int:
        """Minimize every window; return how many were visible."""
        return self._windows.minimize_all()

    # -- Sessions -------------------------------------------------------------

    def session(self, window_id: str) -> Session | None:
        """Return the application state of a window, if it has any."""
        return self._sessions.get(window_id)

    def terminal(self, window_id: str) -> Terminal | None:
        """Return the terminal hosted by *window_id*, or None."""
        session = self._sessions.get(window_id)
        return session if isinstance(session, Terminal) else None

    def editor(self, window_id: str) -> EditorSession | None:
        """Return the editor hosted by *window_id*, or None."""
        session = self._sessions.get(window_id)
        return session if isinstance(session, EditorSession) else None

    def explorer(self, window_id: str) -> ExplorerSession | None:
        """Return the file explorer hosted by *window_id*, or None."""
        session = self._sessions.get(window_id)
        return session if isinstance(session, ExplorerSession) else None

    # -- Files ------------------------------------------------------------

    def open_file(self, file_id: str) -> WindowRecord | None:
        """Open a file in a new Notepad window.

        Returns:
            The new window, or None if *file_id* is not a file.

        """
        node = self._vfs.get(file_id)
        if node is None or node.kind is not NodeKind.FILE:
            self._logger.log(LogLevel.WARNING, "open: not a file", source="desktop", ref=file_id)
            return None
        return self.launch(AppId.NOTEPAD, file_id)

    def explorer_activate(self, window_id: str, node_id: str) -> WindowRecord | None:
        """Double-click *node_id* in an explorer window.

        Folders are entered in place; files open in Notepad.

        Returns:
            The Notepad window opened for a file, otherwise None.

        """
        explorer = self.explorer(window_id)
        if explorer is None:
            return None
        file_id = explorer.activate(node_id)
        return self.open_file(file_id) if file_id is not None else None

    def save_file(self, file_id: str, content: str) -> bool:
        """Write *content* to a file and refresh editors showing it.

        Editors without unsaved edits reload the new text; editors with
        unsaved edits keep them.
        """
        if not self._vfs.write_file(file_id, content):
            return False
        self._refresh_editors(file_id)
        return True

    def save_editor(self, window_id: str, content: str | None = None) -> bool:
        """Save an editor window (its Save button).

        Args:
            window_id: The Notepad or Code window.
            content: New buffer text to store first, if given.

        Returns:
            True if the file was written.

        """
        editor = self.editor(window_id)
        if editor is None:
            return False
        if content is not None:
            editor.edit(content)
        if not editor.save():
            self._logger.log(LogLevel.WARNING, "save: no file", source="desktop", ref=window_id)
            return False
        if editor.file_id is not None:
            self._refresh_editors(editor.file_id, skip=window_id)
        return True

    def _refresh_editors(self, file_id: str, *, skip: str | None = None) -> None:
        for window_id, session in self._sessions.items():
            if window_id == skip or not isinstance(session, EditorSession):
                continue
            if session.file_id == file_id and not session.dirty:
                session.reload()

    # -- Pointer input ------------------------------------------------------

    def press_window(self, window_id: str) -> WindowRecord | None:
        """Handle a press anywhere on a window: bring it to the front."""
        return self._windows.focus(window_id)

    def press_title(self, window_id: str, x: int, y: int) -> DragSession | None:
        """Handle a press on a window's title bar: start dragging."""
        return self._drag.start(window_id, x, y)

    def pointer_move(self, x: int, y: int) -> WindowRecord | None:
        """Handle pointer motion anywhere on the screen."""
        return self._drag.move(x, y)

    def pointer_up(self) -> None:
        """Handle a pointer release anywhere on the screen."""
        self._drag.release()

    # -- Taskbar ------------------------------------------------------------

    def taskbar(self) -> list[TaskbarButton]:
        """Return the state of each pinned taskbar button."""
        buttons: list[TaskbarButton] = []
        for app_id in PINNED_APPS:
            windows = [w for w in self._windows.windows if w.app_id is app_id]
            buttons.append(
                TaskbarButton(
                    app_id=app_id,
                    icon=profile_for(app_id).icon,
                    running=any(not w.is_minimized for w in windows),
                    minimized=any(w.is_minimized for w in windows),
                )
            )
        return buttons
