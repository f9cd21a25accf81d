"""Window manager — application catalog, window registry, and dragging.

Re-exports public symbols so callers can write::

    from py_webos.windows import AppId, WindowRegistry, DragController
"""

from py_webos.windows.catalog import (
    APP_PROFILES,
    DEFAULT_PROFILE,
    PINNED_APPS,
    AppId,
    AppProfile,
    Icon,
    profile_for,
)
from py_webos.windows.drag import DragController, DragSession, DragState
from py_webos.windows.registry import Position, Size, WindowRecord, WindowRegistry

__all__ = [
    "APP_PROFILES",
    "DEFAULT_PROFILE",
    "PINNED_APPS",
    "AppId",
    "AppProfile",
    "DragController",
    "DragSession",
    "DragState",
    "Icon",
    "Position",
    "Size",
    "WindowRecord",
    "WindowRegistry",
    "profile_for",
]
