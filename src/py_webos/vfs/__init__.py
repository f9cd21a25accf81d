"""Virtual file system — the id-indexed node arena and its sample tree.

Re-exports public symbols so callers can write::

    from py_webos.vfs import VirtualFileSystem, NodeKind
"""

from py_webos.vfs.seed import QUICK_ACCESS, populate, sample_filesystem
from py_webos.vfs.store import ROOT_ID, ROOT_NAME, NodeInfo, NodeKind, VirtualFileSystem

__all__ = [
    "QUICK_ACCESS",
    "ROOT_ID",
    "ROOT_NAME",
    "NodeInfo",
    "NodeKind",
    "VirtualFileSystem",
    "populate",
    "sample_filesystem",
]
