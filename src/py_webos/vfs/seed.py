"""The sample disk every new desktop boots with.

A fresh desktop is more useful with something on the disk: a couple of
documents, a code project, and a boot log under ``System``.  The
layout is fixed and the ids are readable words so that other modules
and tests can refer to well-known nodes (``docs``, ``todo``, ...).
"""

from collections.abc import Callable
from datetime import datetime

from py_webos.logging import Logger
from py_webos.vfs.store import ROOT_ID, VirtualFileSystem

# (node_id, parent_id, name), created in this order.
SAMPLE_FOLDERS: tuple[tuple[str, str, str], ...] = (
    ("docs", ROOT_ID, "Documents"),
    ("pics", ROOT_ID, "Pictures"),
    ("code", ROOT_ID, "Projects"),
    ("sys", ROOT_ID, "System"),
)

# (node_id, parent_id, name, content)
SAMPLE_FILES: tuple[tuple[str, str, str, str], ...] = (
    (
        "resume",
        "docs",
        "Resume.txt",
        "JOHN DOE\nSenior Frontend Engineer\n\nSkills:\n"
        "- React, TypeScript, Tailwind\n- Windows 98 to 11 Expert",
    ),
    ("todo", "docs", "todo.txt", "- Build WebOS\n- Integrate Gemini\n- Fix bugs"),
    (
        "hello_py",
        "code",
        "hello.py",
        'print("Hello from WebOS!")\nx = 10\ny = 20\nprint(f"Sum is {x+y}")',
    ),
    (
        "react_app",
        "code",
        "App.tsx",
        'import React from "react";\n\nexport default function App() {\n'
        "  return <div>Hello World</div>;\n}",
    ),
    (
        "sys_log",
        "sys",
        "boot.log",
        "[INFO] Kernel loaded.\n[INFO] UI mounted.\n[WARN] Low caffeine levels detected.",
    ),
)


# Quick-access links in the File Explorer sidebar: (label, folder_id).
QUICK_ACCESS: tuple[tuple[str, str], ...] = (
    ("This PC", ROOT_ID),
    ("Documents", "docs"),
    ("Pictures", "pics"),
)


def populate(vfs: VirtualFileSystem) -> None:
    """Create the sample folders and files inside *vfs*."""
    for node_id, parent_id, name in SAMPLE_FOLDERS:
        vfs.create_folder(parent_id, name, node_id=node_id)
    for node_id, parent_id, name, content in SAMPLE_FILES:
        vfs.create_file(parent_id, name, content, node_id=node_id)


def sample_filesystem(
    *,
    clock: Callable[[], datetime] = datetime.now,
    logger: Logger | None = None,
) -> VirtualFileSystem:
    """Return a new file system pre-populated with the sample tree."""
    vfs = VirtualFileSystem(clock=clock, logger=logger)
    populate(vfs)
    return vfs
