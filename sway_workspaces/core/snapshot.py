"""Memoized view of sway state for the duration of one operation.

Outputs, workspaces and the tree are fetched lazily on first access and
reused until ``invalidate()`` is called. Lookups return None when nothing
matches; query failures propagate from the client.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple

from ..errors import MarkNotFound, UnexpectedTree
from ..models.sway import Output, Workspace
from ..models.target import WorkspaceTarget
from .sway_client import SwayClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkedWorkspace:
    """Where a marked container ended up.

    Attributes:
        num: Workspace number (-1 if the name has no number)
        name: Workspace name
        windows: Direct children (tiled and floating) of that workspace,
            including the container holding the mark
        output: Name of the output owning the workspace
    """

    num: int
    name: str
    windows: int
    output: str


def _children(con: Any) -> List[Any]:
    return list(getattr(con, "nodes", None) or []) + list(getattr(con, "floating_nodes", None) or [])


def _iter_workspaces(tree: Any) -> Iterator[Tuple[Any, Any]]:
    for output in getattr(tree, "nodes", None) or []:
        for workspace in getattr(output, "nodes", None) or []:
            if getattr(workspace, "type", "workspace") == "workspace":
                yield output, workspace


def _workspace_windows(workspace: Any) -> int:
    # Direct children only: a split container counts once however many
    # windows it holds.
    return len(_children(workspace))


def _contains_mark(con: Any, mark: str) -> bool:
    if mark in (getattr(con, "marks", None) or []):
        return True
    return any(_contains_mark(child, mark) for child in _children(con))


class TreeSnapshot:
    """Lazily fetched, cached outputs/workspaces/tree.

    Example:
        >>> snapshot = TreeSnapshot(client)
        >>> snapshot.focused_workspace()   # fetches GET_WORKSPACES
        >>> snapshot.workspaces()          # cached, no IPC
        >>> snapshot.invalidate()          # next access re-fetches
    """

    def __init__(self, client: SwayClient):
        self.client = client
        self._outputs: Optional[List[Output]] = None
        self._workspaces: Optional[List[Workspace]] = None
        self._tree: Optional[Any] = None

    def invalidate(self) -> None:
        self._outputs = None
        self._workspaces = None
        self._tree = None

    def outputs(self) -> List[Output]:
        if self._outputs is None:
            self._outputs = [Output.from_ipc(reply.ipc_data) for reply in self.client.get_outputs()]
            logger.debug(f"Snapshot: {len(self._outputs)} output(s)")
        return self._outputs

    def workspaces(self) -> List[Workspace]:
        if self._workspaces is None:
            self._workspaces = [Workspace.from_ipc(reply.ipc_data) for reply in self.client.get_workspaces()]
            logger.debug(f"Snapshot: {len(self._workspaces)} workspace(s)")
        return self._workspaces

    def tree(self) -> Any:
        if self._tree is None:
            self._tree = self.client.get_tree()
        return self._tree

    # Workspaces

    def workspace_by_num(self, num: int) -> Optional[Workspace]:
        return next((ws for ws in self.workspaces() if ws.num == num), None)

    def workspace_by_name(self, name: str) -> Optional[Workspace]:
        return next((ws for ws in self.workspaces() if ws.name == name), None)

    def workspace_by_target(self, target: WorkspaceTarget) -> Optional[Workspace]:
        """First workspace whose name OR number matches the target."""
        return next((ws for ws in self.workspaces() if target.matches(ws)), None)

    def focused_workspace(self) -> Optional[Workspace]:
        return next((ws for ws in self.workspaces() if ws.focused), None)

    # Outputs

    def output_by_identifier(self, identifier: str) -> Optional[Output]:
        """Find an output by name or by its "make model serial" descriptor."""
        return next((o for o in self.outputs() if o.matches(identifier)), None)

    def focused_output(self) -> Optional[Output]:
        return next((o for o in self.outputs() if o.focused), None)

    # Tree

    def locate_mark(self, mark: str) -> MarkedWorkspace:
        """Find the workspace holding the container carrying ``mark``.

        Raises:
            MarkNotFound: If no container carries the mark
            UnexpectedTree: If the owning workspace/output lacks a number or name
        """
        for output, workspace in _iter_workspaces(self.tree()):
            if not any(_contains_mark(child, mark) for child in _children(workspace)):
                continue
            num = getattr(workspace, "num", None)
            name = getattr(workspace, "name", None)
            output_name = getattr(output, "name", None)
            if num is None:
                raise UnexpectedTree("workspace node has no number")
            if name is None:
                raise UnexpectedTree("workspace node has no name")
            if output_name is None:
                raise UnexpectedTree("output node has no name")
            return MarkedWorkspace(
                num=num,
                name=name,
                windows=_workspace_windows(workspace),
                output=output_name,
            )
        raise MarkNotFound(mark)

    def window_count(self, workspace_name: str) -> Optional[int]:
        """Direct children of the named workspace, or None if it is not in the tree."""
        for _, workspace in _iter_workspaces(self.tree()):
            if getattr(workspace, "name", None) == workspace_name:
                return _workspace_windows(workspace)
        return None
