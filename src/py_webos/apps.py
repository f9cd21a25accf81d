"""Application sessions — the per-window state of editors and explorers.

Windows are only frames; what happens inside depends on the
application.  Two applications carry state that touches the file
system:

- **EditorSession** — Notepad and Code.  Loads a file's text when the
  window opens, tracks unsaved edits, and writes back on ``save``.
- **ExplorerSession** — the File Explorer.  Keeps its own path stack,
  independent of any terminal, and turns a double-click into either
  "enter this folder" or "open this file".

Both keep ids, never node objects, and re-read the file system on
every call.
"""

from __future__ import annotations

from enum import StrEnum

from py_webos.vfs.store import NodeInfo, NodeKind, VirtualFileSystem

UNTITLED = "Untitled"
UNKNOWN_FOLDER = "Unknown"


class EditorMode(StrEnum):
    """How an editor presents its text."""

    TEXT = "text"
    CODE = "code"


class EditorSession:
    """Text being edited in a Notepad or Code window."""

    def __init__(
        self,
        vfs: VirtualFileSystem,
        file_id: str | None = None,
        *,
        mode: EditorMode = EditorMode.TEXT,
    ) -> None:
        """Open an editor, loading *file_id* if it names a file."""
        self._vfs = vfs
        self._file_id = file_id
        self._mode = mode
        self._content = ""
        self._dirty = False
        self.reload()

    @property
    def file_id(self) -> str | None:
        """Return the file being edited, if any."""
        return self._file_id

    @property
    def mode(self) -> EditorMode:
        """Return the presentation mode."""
        return self._mode

    @property
    def content(self) -> str:
        """Return the current (possibly unsaved) text."""
        return self._content

    @property
    def dirty(self) -> bool:
        """Return True if there are unsaved edits."""
        return self._dirty

    def edit(self, content: str) -> None:
        """Replace the buffer with *content* and mark it unsaved."""
        self._content = content
        self._dirty = True

    def save(self) -> bool:
        """Write the buffer back to the file.

        Returns:
            True on success; False for untitled buffers or when the file
            no longer exists (the edits are kept).

        """
        if self._file_id is None:
            return False
        if not self._vfs.write_file(self._file_id, self._content):
            return False
        self._dirty = False
        return True

    def reload(self) -> None:
        """Discard edits and load the file's current text.

        A missing or stale file loads as an empty buffer.
        """
        text = self._vfs.read_file(self._file_id) if self._file_id is not None else None
        self._content = text or ""
        self._dirty = False

    def caption(self) -> str:
        """Return the toolbar caption: file name plus ``*`` when unsaved."""
        node = self._vfs.get(self._file_id) if self._file_id is not None else None
        name = node.name if node is not None else UNTITLED
        return f"{name} *" if self._dirty else name

    def status(self) -> str:
        """Return the status bar text (line count and character count)."""
        lines = self._content.split("\n")
        return f"Ln {len(lines)}, Col {len(self._content)}"


class ExplorerSession:
    """Folder browsing state of a File Explorer window."""

    def __init__(self, vfs: VirtualFileSystem) -> None:
        """Open an explorer at the root folder."""
        self._vfs = vfs
        self._path: list[str] = [vfs.root_id]

    @property
    def path_ids(self) -> list[str]:
        """Return the folder ids from the root to the current folder."""
        return list(self._path)

    @property
    def current_folder_id(self) -> str:
        """Return the id of the folder being shown."""
        return self._path[-1]

    def breadcrumbs(self) -> list[str]:
        """Return the names along the path; stale ids show as ``Unknown``."""
        names: list[str] = []
        for node_id in self._path:
            node = self._vfs.get(node_id)
            names.append(node.name if node is not None else UNKNOWN_FOLDER)
        return names

    def items(self) -> list[NodeInfo]:
        """Return the entries of the current folder in creation order."""
        return self._vfs.list_children(self.current_folder_id)

    @property
    def item_count(self) -> int:
        """Return the number of entries in the current folder."""
        return len(self.items())

    def navigate_up(self) -> bool:
        """Go to the parent folder; no-op at the root."""
        if len(self._path) <= 1:
            return False
        self._path.pop()
        return True

    def navigate_to(self, folder_id: str) -> bool:
        """Enter *folder_id*, which must be a folder inside the current one."""
        if not self._is_child_folder(folder_id):
            return False
        self._path.append(folder_id)
        return True

    def navigate_to_crumb(self, index: int) -> bool:
        """Jump back to the breadcrumb at *index* (0 is the root)."""
        if not 0 <= index < len(self._path):
            return False
        del self._path[index + 1 :]
        return True

    def open_location(self, folder_id: str) -> bool:
        """Show *folder_id* directly, rebuilding the path from the root.

        Used by the quick-access links, which jump to a folder from
        anywhere.
        """
        node = self._vfs.get(folder_id)
        if node is None or node.kind is not NodeKind.FOLDER:
            return False
        self._path = self._vfs.path_to(folder_id)
        return True

    def activate(self, node_id: str) -> str | None:
        """Handle a double-click on an entry of the current folder.

        Folders are entered.  Files are not opened here; the caller
        launches an editor for them.

        Returns:
            The file id to open, or None if a folder was entered or the
            id is not an entry of the current folder.

        """
        node = self._vfs.get(node_id)
        if node is None or node.parent_id != self.current_folder_id:
            return None
        if node.kind is NodeKind.FOLDER:
            self._path.append(node_id)
            return None
        return node_id

    def _is_child_folder(self, folder_id: str) -> bool:
        node = self._vfs.get(folder_id)
        return (
            node is not None
            and node.kind is NodeKind.FOLDER
            and node.parent_id == self.current_folder_id
        )
