"""In-memory virtual file system — a flat arena of id-indexed nodes.

The desktop's "disk" is a tree of folders and text files, but it is
stored flat:

- **Node**: a record for one file or folder, keyed by an opaque id.
  Relations are ids too: ``parent_id`` points up, a folder's
  ``children`` lists ids in creation order.
- **Arena**: one ``dict[str, _Node]`` owned by ``VirtualFileSystem``.
  Nothing else holds a node; applications keep ids and re-resolve
  them on every use.

Why ids instead of nested objects?
    Windows, terminals and file browsers all point into the same tree.
    Holding ids means a stale reference is simply "not found" rather
    than a dangling object, and the tree can be checked for
    consistency in one place.

Failures are returned, not raised: an unknown id gives ``None`` (or
``False`` for writes) so callers can show a message and carry on.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from itertools import count
from typing import Any

from py_webos.logging import Logger, LogLevel

ROOT_ID = "root"
ROOT_NAME = "C:"


class NodeKind(StrEnum):
    """The kind of object a node represents."""

    FILE = "file"
    FOLDER = "folder"


@dataclass(frozen=True)
class NodeInfo:
    """Read-only snapshot of a node (returned to consumers)."""

    id: str
    parent_id: str | None
    name: str
    kind: NodeKind
    created_at: datetime
    content: str | None = None
    children: tuple[str, ...] = ()

    @property
    def is_folder(self) -> bool:
        """Return True for folders."""
        return self.kind is NodeKind.FOLDER


@dataclass
class _Node:
    """Internal node — the mutable record owned by the arena.

    For files, ``content`` holds the text and ``children`` stays empty.
    For folders, ``content`` is None and ``children`` lists child ids.
    """

    id: str
    parent_id: str | None
    name: str
    kind: NodeKind
    created_at: datetime
    content: str | None = None
    children: list[str] = field(default_factory=list)  # pyright: ignore[reportUnknownVariableType]

    def to_info(self) -> NodeInfo:
        """Create a read-only snapshot of this node."""
        return NodeInfo(
            id=self.id,
            parent_id=self.parent_id,
            name=self.name,
            kind=self.kind,
            created_at=self.created_at,
            content=self.content,
            children=tuple(self.children),
        )


class VirtualFileSystem:
    """An id-indexed tree of folders and text files.

    The file system starts with a single root folder named ``C:``.
    Every other node is created by ``create_folder`` or ``create_file``
    and lives for the lifetime of the store.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = datetime.now,
        logger: Logger | None = None,
    ) -> None:
        """Create a file system holding only the root folder.

        Args:
            clock: Source of creation timestamps.
            logger: Optional event log.

        """
        self._clock = clock
        self._logger = logger
        self._ids = count(start=1)
        root = _Node(
            id=ROOT_ID,
            parent_id=None,
            name=ROOT_NAME,
            kind=NodeKind.FOLDER,
            created_at=clock(),
        )
        self._nodes: dict[str, _Node] = {root.id: root}

    @property
    def root_id(self) -> str:
        """Return the id of the root folder."""
        return ROOT_ID

    def __len__(self) -> int:
        """Return the number of nodes, root included."""
        return len(self._nodes)

    def _log(self, level: LogLevel, message: str, ref: str | None = None) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source="vfs", ref=ref)

    def _new_id(self) -> str:
        node_id = f"n{next(self._ids)}"
        while node_id in self._nodes:
            node_id = f"n{next(self._ids)}"
        return node_id

    def _folder(self, node_id: str) -> _Node | None:
        node = self._nodes.get(node_id)
        if node is None or node.kind is not NodeKind.FOLDER:
            return None
        return node

    # -- Queries -----------------------------------------------------------

    def exists(self, node_id: str) -> bool:
        """Check whether *node_id* names a node."""
        return node_id in self._nodes

    def get(self, node_id: str) -> NodeInfo | None:
        """Return a snapshot of the node, or None if the id is unknown."""
        node = self._nodes.get(node_id)
        return node.to_info() if node is not None else None

    def list_children(self, node_id: str) -> list[NodeInfo]:
        """List the children of a folder in creation order.

        Unknown ids and files have no children, so both give ``[]``.
        Child ids that no longer resolve are skipped.
        """
        folder = self._folder(node_id)
        if folder is None:
            return []
        return [self._nodes[c].to_info() for c in folder.children if c in self._nodes]

    def resolve_child_by_name(
        self,
        parent_id: str,
        name: str,
        kind: NodeKind | None = None,
    ) -> str | None:
        """Find a direct child of *parent_id* by exact, case-sensitive name.

        Sibling names are not unique, so the first match in creation
        order wins.

        Args:
            parent_id: Folder to search.
            name: Name to match.
            kind: If set, only children of this kind match.

        Returns:
            The child's id, or None if nothing matches.

        """
        folder = self._folder(parent_id)
        if folder is None:
            return None
        for child_id in folder.children:
            child = self._nodes.get(child_id)
            if child is None:
                continue
            if child.name == name and (kind is None or child.kind is kind):
                return child_id
        return None

    def path_to(self, node_id: str) -> list[str]:
        """Return the chain of ids from the root down to *node_id*.

        Returns ``[]`` for unknown ids.
        """
        chain: list[str] = []
        current = self._nodes.get(node_id)
        while current is not None:
            chain.append(current.id)
            current = self._nodes.get(current.parent_id) if current.parent_id else None
        chain.reverse()
        return chain

    def read_file(self, node_id: str) -> str | None:
        """Return the text of a file, or None if *node_id* is not a file."""
        node = self._nodes.get(node_id)
        if node is None or node.kind is not NodeKind.FILE:
            return None
        return node.content or ""

    # -- Mutations ---------------------------------------------------------

    def create_folder(self, parent_id: str, name: str, *, node_id: str | None = None) -> str | None:
        """Create an empty folder inside *parent_id*.

        Args:
            parent_id: The folder that will own the new node.
            name: Display name; duplicates among siblings are allowed.
            node_id: Use this id instead of generating one (for seeding).

        Returns:
            The new id, or None if the parent is not an existing folder
            or *node_id* is already taken.

        """
        return self._create(parent_id, name, NodeKind.FOLDER, None, node_id)

    def create_file(
        self,
        parent_id: str,
        name: str,
        content: str = "",
        *,
        node_id: str | None = None,
    ) -> str | None:
        """Create a text file inside *parent_id*.

        Returns:
            The new id, or None if the parent is not an existing folder
            or *node_id* is already taken.

        """
        return self._create(parent_id, name, NodeKind.FILE, content, node_id)

    def _create(
        self,
        parent_id: str,
        name: str,
        kind: NodeKind,
        content: str | None,
        node_id: str | None,
    ) -> str | None:
        """Create a node and link it into its parent folder."""
        parent = self._folder(parent_id)
        if parent is None:
            self._log(LogLevel.WARNING, f"create {kind} {name!r}: no such folder", parent_id)
            return None
        if node_id is not None and node_id in self._nodes:
            self._log(LogLevel.WARNING, f"create {kind} {name!r}: id already in use", node_id)
            return None

        node = _Node(
            id=node_id if node_id is not None else self._new_id(),
            parent_id=parent.id,
            name=name,
            kind=kind,
            created_at=self._clock(),
            content=content,
        )
        self._nodes[node.id] = node
        parent.children.append(node.id)
        self._log(LogLevel.INFO, f"created {kind} {name!r} in {parent.name!r}", node.id)
        return node.id

    def write_file(self, node_id: str, content: str) -> bool:
        """Replace the text of a file.

        Returns:
            True on success, False if *node_id* is not an existing file.

        """
        node = self._nodes.get(node_id)
        if node is None or node.kind is not NodeKind.FILE:
            self._log(LogLevel.WARNING, "write: not a file", node_id)
            return False
        node.content = content
        self._log(LogLevel.INFO, f"wrote {len(content)} chars to {node.name!r}", node_id)
        return True

    # -- Consistency -------------------------------------------------------

    def check(self) -> list[str]:
        """Verify the tree invariants and describe every violation.

        Checks that there is exactly one parentless folder, that parent
        and child links agree in both directions, that child lists hold
        no duplicates or dangling ids, and that no node is its own
        ancestor.

        Returns:
            A list of problems; empty when the tree is consistent.

        """
        problems: list[str] = []
        roots = [n.id for n in self._nodes.values() if n.parent_id is None]
        if roots != [ROOT_ID]:
            problems.append(f"expected a single root, found {roots}")

        for node in self._nodes.values():
            if node.kind is NodeKind.FOLDER:
                if len(set(node.children)) != len(node.children):
                    problems.append(f"{node.id}: duplicate children")
                for child_id in node.children:
                    child = self._nodes.get(child_id)
                    if child is None:
                        problems.append(f"{node.id}: dangling child {child_id}")
                    elif child.parent_id != node.id:
                        problems.append(
                            f"{child_id}: listed under {node.id} but parent is {child.parent_id}"
                        )
            elif node.children:
                problems.append(f"{node.id}: file with children")

            if node.parent_id is not None:
                parent = self._folder(node.parent_id)
                if parent is None:
                    problems.append(f"{node.id}: parent {node.parent_id} is not a folder")
                elif parent.children.count(node.id) != 1:
                    problems.append(f"{node.id}: not listed exactly once under {parent.id}")

            seen: set[str] = set()
            current: _Node | None = node
            while current is not None and current.parent_id is not None:
                if current.id in seen:
                    problems.append(f"{node.id}: cycle through {current.id}")
                    break
                seen.add(current.id)
                current = self._nodes.get(current.parent_id)
        return problems

    def snapshot(self) -> dict[str, dict[str, Any]]:
        """Return a JSON-friendly view of every node, keyed by id."""
        result: dict[str, dict[str, Any]] = {}
        for node in self._nodes.values():
            entry: dict[str, Any] = {
                "id": node.id,
                "parent_id": node.parent_id,
                "name": node.name,
                "kind": str(node.kind),
                "created_at": node.created_at.isoformat(),
            }
            if node.kind is NodeKind.FILE:
                entry["content"] = node.content or ""
            else:
                entry["children"] = list(node.children)
            result[node.id] = entry
        return result
