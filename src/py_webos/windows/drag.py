"""Drag controller — moving windows with the pointer.

Dragging is a two-state machine::

    IDLE  --start-->  DRAGGING  --release-->  IDLE
                        |  ^
                        move

- ``start`` happens on a press over a window's title bar.  It records
  the grab offset (pointer minus the window's top-left corner) and
  focuses the window.
- ``move`` events arrive from anywhere on the screen, not just the
  window, and place the window at ``pointer - offset``.  Maximized
  windows stay put.
- ``release`` ends the drag wherever the pointer is, from any state.

There is never more than one session.  The session holds a window id,
not the record, so a window closed mid-drag simply stops moving.
"""

from dataclasses import dataclass
from enum import StrEnum

from py_webos.logging import Logger, LogLevel
from py_webos.windows.registry import WindowRecord, WindowRegistry


class DragState(StrEnum):
    """Whether a drag is in progress."""

    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class DragSession:
    """The window being dragged and where it was grabbed."""

    window_id: str
    grab_offset_x: int
    grab_offset_y: int


class DragController:
    """Translate pointer press/move/release into window positions."""

    def __init__(self, registry: WindowRegistry, *, logger: Logger | None = None) -> None:
        """Create an idle controller for *registry*."""
        self._registry = registry
        self._logger = logger
        self._session: DragSession | None = None

    @property
    def session(self) -> DragSession | None:
        """Return the active session, or None when idle."""
        return self._session

    @property
    def state(self) -> DragState:
        """Return the current state of the machine."""
        return DragState.IDLE if self._session is None else DragState.DRAGGING

    def start(self, window_id: str, pointer_x: int, pointer_y: int) -> DragSession | None:
        """Begin dragging a window grabbed at the pointer position.

        Unknown and minimized windows cannot be grabbed; the controller
        then stays (or becomes) idle.

        Returns:
            The new session, or None if nothing was grabbed.

        """
        record = self._registry.get(window_id)
        if record is None or record.is_minimized:
            self._session = None
            self._log(LogLevel.WARNING, "start: window not grabbable", window_id)
            return None

        self._session = DragSession(
            window_id=window_id,
            grab_offset_x=pointer_x - record.position.x,
            grab_offset_y=pointer_y - record.position.y,
        )
        self._registry.focus(window_id)
        self._log(LogLevel.DEBUG, f"start at ({pointer_x}, {pointer_y})", window_id)
        return self._session

    def move(self, pointer_x: int, pointer_y: int) -> WindowRecord | None:
        """Follow the pointer with the dragged window.

        Returns:
            The moved window, or None if idle, the window is gone, or it
            is maximized.

        """
        session = self._session
        if session is None:
            return None
        record = self._registry.get(session.window_id)
        if record is None or record.is_maximized:
            return None
        return self._registry.move(
            session.window_id,
            pointer_x - session.grab_offset_x,
            pointer_y - session.grab_offset_y,
        )

    def release(self) -> None:
        """End any drag in progress."""
        if self._session is not None:
            self._log(LogLevel.DEBUG, "release", self._session.window_id)
        self._session = None

    def _log(self, level: LogLevel, message: str, ref: str | None = None) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source="drag", ref=ref)
