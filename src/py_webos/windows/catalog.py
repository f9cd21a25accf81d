"""Application catalog — which apps exist and how their windows look.

Every window belongs to one application kind (``AppId``).  The catalog
maps each kind to an ``AppProfile``: the default title, the icon the
renderer should draw, and the initial window size.  Icons are a closed
``Icon`` variant; turning one into artwork is the renderer's job.
"""

from dataclasses import dataclass
from enum import StrEnum


class AppId(StrEnum):
    """The application kinds a window can host."""

    DESKTOP = "desktop"
    NOTEPAD = "notepad"
    TERMINAL = "terminal"
    BROWSER = "browser"
    PAINT = "paint"
    VIDEOPRO = "videopro"
    CODE = "code"
    GEMINI = "gemini"
    FILES = "files"
    SETTINGS = "settings"
    MINESWEEPER = "minesweeper"
    CALCULATOR = "calculator"


class Icon(StrEnum):
    """Icons a window title bar or taskbar button can show."""

    FILE_TEXT = "file-text"
    CODE = "code"
    TERMINAL = "terminal"
    GLOBE = "globe"
    FOLDER = "folder"
    PALETTE = "palette"
    BOT = "bot"
    WINDOW = "square"


@dataclass(frozen=True)
class AppProfile:
    """Window defaults for one application kind.

    Attributes:
        title: Title used when no file gives the window a name.
        icon: Icon shown in the title bar.
        width: Initial window width.
        height: Initial window height.
        opens_files: Whether a launched file's name becomes the title.

    """

    title: str
    icon: Icon
    width: int
    height: int
    opens_files: bool = False


DEFAULT_PROFILE = AppProfile(title="Application", icon=Icon.WINDOW, width=800, height=600)

APP_PROFILES: dict[AppId, AppProfile] = {
    AppId.NOTEPAD: AppProfile("Notepad", Icon.FILE_TEXT, 600, 400, opens_files=True),
    AppId.CODE: AppProfile("VS Code", Icon.CODE, 900, 600, opens_files=True),
    AppId.TERMINAL: AppProfile("Terminal", Icon.TERMINAL, 700, 450),
    AppId.BROWSER: AppProfile("Edge Browser", Icon.GLOBE, 1000, 700),
    AppId.FILES: AppProfile("File Explorer", Icon.FOLDER, 800, 500),
    AppId.PAINT: AppProfile("Paint", Icon.PALETTE, 800, 600),
    AppId.GEMINI: AppProfile("Gemini Assistant", Icon.BOT, 400, 600),
}

# Apps with a permanent button on the taskbar, left to right.
PINNED_APPS: tuple[AppId, ...] = (AppId.FILES, AppId.BROWSER, AppId.TERMINAL, AppId.CODE)


def profile_for(app_id: AppId) -> AppProfile:
    """Return the window defaults for *app_id*."""
    return APP_PROFILES.get(app_id, DEFAULT_PROFILE)
