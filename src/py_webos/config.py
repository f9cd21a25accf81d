"""Desktop configuration — screen geometry and window defaults.

The desktop needs a handful of numbers before the first window opens:
how big the screen is, how tall the taskbar is, where new windows
cascade from, and which z-index the stacking counter starts at.  They
live in one frozen ``DesktopConfig`` so every subsystem reads the same
values.

A configuration can be loaded from a JSON file::

    {"viewport_width": 1920, "viewport_height": 1080, "taskbar_height": 48}

Keys that are absent keep their defaults.  Unknown keys are ignored.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_BANNER: tuple[str, ...] = (
    "WebOS Kernel [Version 10.0.22000.1]",
    "(c) WebOS Corporation. All rights reserved.",
    "",
)


class ConfigError(ValueError):
    """Raise when a configuration file is unreadable or holds bad values."""


@dataclass(frozen=True)
class DesktopConfig:
    """Geometry and stacking defaults shared by the window manager.

    Attributes:
        viewport_width: Width of the whole screen.
        viewport_height: Height of the whole screen, taskbar included.
        taskbar_height: Height reserved for the taskbar at the bottom.
        base_z_index: First value handed out by the z-order counter.
        cascade_origin: Offset of the first window from the top-left.
        cascade_step: Extra offset per already-open window.
        cascade_slots: Number of cascade positions before wrapping.
        restore_x: X position applied when leaving maximized.
        restore_y: Y position applied when leaving maximized.
        restore_width: Width applied when leaving maximized.
        restore_height: Height applied when leaving maximized.
        banner: Lines printed at the top of every new terminal.

    """

    viewport_width: int = 1280
    viewport_height: int = 800
    taskbar_height: int = 48
    base_z_index: int = 10
    cascade_origin: int = 50
    cascade_step: int = 30
    cascade_slots: int = 10
    restore_x: int = 100
    restore_y: int = 100
    restore_width: int = 800
    restore_height: int = 600
    banner: tuple[str, ...] = DEFAULT_BANNER

    def __post_init__(self) -> None:
        """Reject geometry that cannot describe a screen."""
        positive = (
            "viewport_width",
            "viewport_height",
            "cascade_slots",
            "restore_width",
            "restore_height",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                msg = f"{name} must be positive, got {getattr(self, name)}"
                raise ConfigError(msg)
        if not 0 <= self.taskbar_height < self.viewport_height:
            msg = f"taskbar_height must fit inside the viewport, got {self.taskbar_height}"
            raise ConfigError(msg)

    @property
    def work_area_height(self) -> int:
        """Return the height available to maximized windows."""
        return self.viewport_height - self.taskbar_height

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DesktopConfig:
        """Build a config from a mapping, ignoring unknown keys.

        Raises:
            ConfigError: If a value has the wrong type or is out of range.

        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                continue
            if key == "banner":
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    msg = "banner must be a list of strings"
                    raise ConfigError(msg)
                kwargs[key] = tuple(value)
            elif isinstance(value, bool) or not isinstance(value, int):
                msg = f"{key} must be an integer, got {value!r}"
                raise ConfigError(msg)
            else:
                kwargs[key] = value
        return cls(**kwargs)


def load_config(path: Path | None = None) -> DesktopConfig:
    """Load a desktop configuration from a JSON file.

    Args:
        path: JSON file to read.  ``None`` returns the defaults.

    Raises:
        ConfigError: If the file cannot be read or parsed, or holds
            invalid values.

    """
    if path is None:
        return DesktopConfig()
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Cannot load desktop config: {e}"
        raise ConfigError(msg) from e
    if not isinstance(data, dict):
        msg = "Desktop config must be a JSON object"
        raise ConfigError(msg)
    return DesktopConfig.from_dict(data)
