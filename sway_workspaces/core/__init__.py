"""Core sway access: runtime paths, command builders, IPC client, tree snapshot."""

from .config import RuntimePaths, resolve_paths
from .snapshot import MarkedWorkspace, TreeSnapshot
from .sway_client import SwayClient

__all__ = [
    "RuntimePaths",
    "resolve_paths",
    "MarkedWorkspace",
    "TreeSnapshot",
    "SwayClient",
]
