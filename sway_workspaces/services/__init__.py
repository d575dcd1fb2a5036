"""Services: mapping persistence, placement, bulk reassignment, monitoring."""

from .mapping_store import MappingStore, atomic_write_json
from .monitor import WorkspaceMonitor
from .placement import Placement, PlacementReconciler, decide_placement
from .workspace_assigner import AssignmentReport, WorkspaceAssigner

__all__ = [
    "MappingStore",
    "atomic_write_json",
    "WorkspaceMonitor",
    "Placement",
    "PlacementReconciler",
    "decide_placement",
    "AssignmentReport",
    "WorkspaceAssigner",
]
