"""Data models for sway-workspaces."""

from .mapping import MappingFile, PreviousWorkspace, normalize_numbers, parse_mapping_spec
from .sway import Output, Workspace
from .target import TargetKind, WorkspaceTarget

__all__ = [
    "MappingFile",
    "PreviousWorkspace",
    "normalize_numbers",
    "parse_mapping_spec",
    "Output",
    "Workspace",
    "TargetKind",
    "WorkspaceTarget",
]
