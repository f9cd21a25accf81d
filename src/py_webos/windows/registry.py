"""Window registry — open windows, stacking order, and focus.

The registry is the window manager's source of truth.  It owns:

- **Window records** — one immutable ``WindowRecord`` per open window,
  kept in launch order (the order the renderer draws them in before
  z-index sorting).
- **Z-order counter** — the next stacking value.  Launching or
  focusing a window hands out the current value and increments it, so
  the most recently touched window is always strictly on top.
- **Focus pointer** — the id of the active window, or ``None``.  It
  only ever names an existing, non-minimized window.

Records are frozen; every operation swaps in an updated copy via
``dataclasses.replace``.  Callers get snapshots they cannot corrupt,
and all invariants are enforced here.

Operations on ids that are not open are silent no-ops that return
``None`` (or ``False``).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from itertools import count
from typing import Any

from py_webos.config import DesktopConfig
from py_webos.logging import Logger, LogLevel
from py_webos.windows.catalog import AppId, Icon, profile_for


@dataclass(frozen=True)
class Position:
    """Top-left corner of a window."""

    x: int
    y: int


@dataclass(frozen=True)
class Size:
    """Outer dimensions of a window."""

    width: int
    height: int


@dataclass(frozen=True)
class WindowRecord:
    """Snapshot of one open window.

    Attributes:
        id: Unique window id.
        app_id: The application hosted by the window.
        title: Title bar text.
        icon: Title bar icon.
        z_index: Stacking rank; higher is drawn above.
        position: Top-left corner.
        size: Outer dimensions.
        is_minimized: Hidden, shown only on the taskbar.
        is_maximized: Filling the work area.
        file_id: Virtual file the window was opened on, if any.

    """

    id: str
    app_id: AppId
    title: str
    icon: Icon
    z_index: int
    position: Position
    size: Size
    is_minimized: bool = False
    is_maximized: bool = False
    file_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly view of the record."""
        return {
            "id": self.id,
            "app_id": str(self.app_id),
            "title": self.title,
            "icon": str(self.icon),
            "z_index": self.z_index,
            "position": {"x": self.position.x, "y": self.position.y},
            "size": {"width": self.size.width, "height": self.size.height},
            "is_minimized": self.is_minimized,
            "is_maximized": self.is_maximized,
            "file_id": self.file_id,
        }


class WindowRegistry:
    """Track open windows, their stacking order, and the focused window."""

    def __init__(
        self,
        *,
        config: DesktopConfig | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create an empty registry.

        Args:
            config: Geometry defaults (viewport, cascade, restore size).
            logger: Optional event log.

        """
        self._config = config or DesktopConfig()
        self._logger = logger
        self._windows: dict[str, WindowRecord] = {}
        self._ids = count(start=1)
        self._next_z = self._config.base_z_index
        self._active_id: str | None = None
        self._viewport = Size(self._config.viewport_width, self._config.viewport_height)

    # -- Queries -----------------------------------------------------------

    @property
    def windows(self) -> list[WindowRecord]:
        """Return every open window in launch order."""
        return list(self._windows.values())

    @property
    def active_id(self) -> str | None:
        """Return the id of the focused window, or None."""
        return self._active_id

    @property
    def active(self) -> WindowRecord | None:
        """Return the focused window, or None."""
        return self._windows.get(self._active_id) if self._active_id else None

    @property
    def next_z_index(self) -> int:
        """Return the value the next launch or focus will receive."""
        return self._next_z

    @property
    def viewport(self) -> Size:
        """Return the current screen size."""
        return self._viewport

    def get(self, window_id: str) -> WindowRecord | None:
        """Return the window with *window_id*, or None."""
        return self._windows.get(window_id)

    def __len__(self) -> int:
        """Return the number of open windows."""
        return len(self._windows)

    def __contains__(self, window_id: object) -> bool:
        """Return True if *window_id* names an open window."""
        return window_id in self._windows

    def stacking_order(self) -> list[WindowRecord]:
        """Return open windows bottom to top."""
        return sorted(self._windows.values(), key=lambda w: w.z_index)

    # -- Lifecycle ---------------------------------------------------------

    def launch(
        self,
        app_id: AppId,
        file_id: str | None = None,
        *,
        title: str | None = None,
    ) -> WindowRecord:
        """Open a new window for *app_id* and focus it.

        The window takes the next z-index, its application's default
        title, icon and size, and a cascading position that steps down
        and right with the number of open windows.

        Args:
            app_id: Application the window hosts.
            file_id: Virtual file to open, if any.
            title: Overrides the application's default title.

        Returns:
            The new window record.

        """
        cfg = self._config
        profile = profile_for(app_id)
        offset = cfg.cascade_origin + (len(self._windows) % cfg.cascade_slots) * cfg.cascade_step
        window_id = f"w{next(self._ids)}"
        while window_id in self._windows:
            window_id = f"w{next(self._ids)}"

        record = WindowRecord(
            id=window_id,
            app_id=app_id,
            title=title if title is not None else profile.title,
            icon=profile.icon,
            z_index=self._take_z(),
            position=Position(offset, offset),
            size=Size(profile.width, profile.height),
            file_id=file_id,
        )
        self._windows[window_id] = record
        self._active_id = window_id
        self._log(LogLevel.INFO, f"launched {app_id} at z={record.z_index}", window_id)
        return record

    def close(self, window_id: str) -> bool:
        """Remove a window.  Focus is cleared, not handed to another window.

        Returns:
            True if a window was closed.

        """
        if self._windows.pop(window_id, None) is None:
            self._log(LogLevel.WARNING, "close: no such window", window_id)
            return False
        if self._active_id == window_id:
            self._active_id = None
        self._log(LogLevel.INFO, "closed", window_id)
        return True

    # -- State transitions -------------------------------------------------

    def focus(self, window_id: str) -> WindowRecord | None:
        """Raise a window to the top and make it active.

        The window always receives a fresh z-index, even if it is
        already on top.  A minimized window is restored first so the
        focus pointer never names a hidden window.
        """
        record = self._windows.get(window_id)
        if record is None:
            self._log(LogLevel.WARNING, "focus: no such window", window_id)
            return None
        record = replace(record, z_index=self._take_z(), is_minimized=False)
        self._windows[window_id] = record
        self._active_id = window_id
        self._log(LogLevel.DEBUG, f"focused at z={record.z_index}", window_id)
        return record

    def minimize(self, window_id: str) -> WindowRecord | None:
        """Hide a window.  Focus is cleared if it was the active window."""
        record = self._windows.get(window_id)
        if record is None:
            self._log(LogLevel.WARNING, "minimize: no such window", window_id)
            return None
        record = replace(record, is_minimized=True)
        self._windows[window_id] = record
        if self._active_id == window_id:
            self._active_id = None
        self._log(LogLevel.INFO, "minimized", window_id)
        return record

    def restore(self, window_id: str) -> WindowRecord | None:
        """Show a minimized window again and focus it.

        The maximized flag and geometry are left as they were.
        """
        return self.focus(window_id)

    def minimize_all(self) -> int:
        """Minimize every window (show desktop) and clear focus.

        Returns:
            The number of windows that were visible.

        """
        visible = 0
        for window_id, record in self._windows.items():
            if not record.is_minimized:
                visible += 1
                self._windows[window_id] = replace(record, is_minimized=True)
        self._active_id = None
        self._log(LogLevel.INFO, f"show desktop: minimized {visible} window(s)")
        return visible

    def toggle_maximize(self, window_id: str) -> WindowRecord | None:
        """Maximize a window, or return a maximized one to normal size.

        Maximizing snaps the window to the origin and fills the screen
        above the taskbar.  Leaving maximized applies the configured
        restore geometry, not the geometry the window had before.  The
        window is focused either way.
        """
        record = self._windows.get(window_id)
        if record is None:
            self._log(LogLevel.WARNING, "maximize: no such window", window_id)
            return None

        cfg = self._config
        if record.is_maximized:
            record = replace(
                record,
                is_maximized=False,
                position=Position(cfg.restore_x, cfg.restore_y),
                size=Size(cfg.restore_width, cfg.restore_height),
            )
        else:
            record = replace(
                record,
                is_maximized=True,
                position=Position(0, 0),
                size=Size(
                    self._viewport.width,
                    self._viewport.height - cfg.taskbar_height,
                ),
            )
        self._windows[window_id] = record
        self._log(LogLevel.INFO, f"maximized={record.is_maximized}", window_id)
        return self.focus(window_id)

    def move(self, window_id: str, x: int, y: int) -> WindowRecord | None:
        """Set a window's top-left corner."""
        record = self._windows.get(window_id)
        if record is None:
            return None
        record = replace(record, position=Position(x, y))
        self._windows[window_id] = record
        return record

    def set_viewport(self, width: int, height: int) -> None:
        """Record a new screen size, used by later maximize operations.

        Raises:
            ValueError: If the screen would leave no room above the taskbar.

        """
        if width <= 0 or height <= self._config.taskbar_height:
            msg = f"Viewport {width}x{height} leaves no work area"
            raise ValueError(msg)
        self._viewport = Size(width, height)
        self._log(LogLevel.DEBUG, f"viewport {width}x{height}")

    # -- Internals ---------------------------------------------------------

    def _take_z(self) -> int:
        """Hand out the next z-index and advance the counter."""
        z = self._next_z
        self._next_z += 1
        return z

    def _log(self, level: LogLevel, message: str, ref: str | None = None) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source="windows", ref=ref)
