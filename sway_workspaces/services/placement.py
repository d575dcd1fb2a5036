"""Placement reconciler: focus and move while honouring the output mapping.

Sway creates a missing workspace on the currently focused output. When the
mapping assigns that workspace number to another output, the reconciler
issues a short command sequence whose side effects cancel out, leaving the
workspace on its mapped output and the user's focus history intact.

The decision itself (``decide_placement``) is a pure function over observed
state; IPC commands are the only effects.
"""

import logging
import uuid
from enum import Enum
from typing import List, Optional, Sequence

from ..core import commands
from ..core.snapshot import TreeSnapshot
from ..core.sway_client import SwayClient
from ..errors import NoFocusedOutput, NoFocusedWorkspace
from ..models.sway import Workspace
from ..models.target import WorkspaceTarget
from .mapping_store import MappingStore

logger = logging.getLogger(__name__)

MOVE_MARK_PREFIX = "__sway_ws_move_"


class Placement(str, Enum):
    """Outcome of creating a numbered workspace on ``current_output``."""
    UNMAPPED = "unmapped"      # no output claims the number
    IN_PLACE = "in_place"      # it will be (or was) created on a claiming output
    RELOCATE = "relocate"      # it must be moved to the first claiming output


def decide_placement(claiming_outputs: Sequence[str], current_output: str) -> Placement:
    """Decide whether a workspace created on ``current_output`` needs correcting.

    Examples:
        >>> decide_placement([], "VGA-1")
        <Placement.UNMAPPED: 'unmapped'>
        >>> decide_placement(["VGA-1"], "VGA-1")
        <Placement.IN_PLACE: 'in_place'>
        >>> decide_placement(["HDMI-A-1"], "VGA-1")
        <Placement.RELOCATE: 'relocate'>
    """
    if not claiming_outputs:
        return Placement.UNMAPPED
    if current_output in claiming_outputs:
        return Placement.IN_PLACE
    return Placement.RELOCATE


def _same_workspace(a: Workspace, b: Workspace) -> bool:
    return a.num == b.num and a.name == b.name


def new_move_mark() -> str:
    return f"{MOVE_MARK_PREFIX}{uuid.uuid4().hex[:12]}__"


class PlacementReconciler:
    """Focus/move workspaces, correcting sway's default output placement."""

    def __init__(self, client: SwayClient, snapshot: TreeSnapshot, store: MappingStore):
        self.client = client
        self.snapshot = snapshot
        self.store = store

    def _run(self, cmd: str) -> None:
        self.client.command(cmd)

    def _focused_workspace(self) -> Workspace:
        focused = self.snapshot.focused_workspace()
        if focused is None:
            raise NoFocusedWorkspace()
        return focused

    def focus(self, target: WorkspaceTarget, no_auto_back_and_forth: bool = False) -> List[str]:
        """Focus ``target``, creating it on its mapped output if needed.

        Args:
            target: Workspace to focus
            no_auto_back_and_forth: Do nothing if the target is already focused

        Returns:
            Commands issued, in order

        Raises:
            NoFocusedWorkspace: If sway reports no focused workspace
            NoFocusedOutput: If a relocation is needed but no output is focused
        """
        start = len(self.client.history)
        focused = self._focused_workspace()
        existing = self.snapshot.workspace_by_target(target)

        if existing is not None:
            if no_auto_back_and_forth and _same_workspace(existing, focused):
                logger.debug(f"Workspace {target} already focused, nothing to do")
                return []
            # Sway applies its own auto-back-and-forth here when enabled
            self._run(commands.focus_workspace(target))
            return self.client.history[start:]

        if target.number is None:
            # Name-only workspaces are outside the mapping
            self._run(commands.focus_workspace(target))
            return self.client.history[start:]

        self.store.load_or_empty()
        claiming = self.store.outputs_claiming(target.number)
        if not claiming:
            self._run(commands.focus_workspace(target))
            return self.client.history[start:]

        focused_output = self.snapshot.focused_output()
        if focused_output is None:
            raise NoFocusedOutput()

        placement = decide_placement(claiming, focused_output.name)
        if placement == Placement.IN_PLACE:
            self._run(commands.focus_workspace(target))
            return self.client.history[start:]

        output = claiming[0]
        logger.info(
            f"Creating workspace {target} on {output} (focused output is {focused_output.name})"
        )
        self._run(commands.focus_output(output))
        self._run(commands.focus_workspace(target))
        # Revisit the original workspace so back-and-forth still returns there
        self._run(commands.focus_workspace(WorkspaceTarget.by_name(focused.name)))
        self._run(commands.focus_workspace(target))
        return self.client.history[start:]

    def move(self, target: WorkspaceTarget, no_auto_back_and_forth: bool = False) -> List[str]:
        """Move the focused container to ``target``.

        If the move creates a new workspace on the wrong output, that
        workspace is moved to its mapped output and the previous focus is
        restored.

        Args:
            target: Destination workspace
            no_auto_back_and_forth: Do nothing if the target is the focused workspace

        Returns:
            Commands issued, in order

        Raises:
            NoFocusedWorkspace: If sway reports no focused workspace
            MarkNotFound: If the moved container cannot be found afterwards
            UnexpectedTree: If its workspace lacks a number or name
        """
        start = len(self.client.history)
        focused = self._focused_workspace()
        before = list(self.snapshot.workspaces())

        if no_auto_back_and_forth:
            existing = self.snapshot.workspace_by_target(target)
            if existing is not None and _same_workspace(existing, focused):
                logger.debug(f"Workspace {target} already focused, nothing to move")
                return []

        mark = new_move_mark()
        self._run(commands.mark_add(mark))
        try:
            self._move_marked(target, mark, focused, before)
        finally:
            self._run(commands.unmark(mark))

        return self.client.history[start:]

    def _move_marked(
        self,
        target: WorkspaceTarget,
        mark: str,
        focused: Workspace,
        before: List[Workspace],
    ) -> None:
        self._run(commands.move_container_to_workspace(target))

        if self.client.dry_run:
            logger.info("Dry run: placement after the move cannot be observed, skipping relocation")
            return

        self.snapshot.invalidate()
        located = self.snapshot.locate_mark(mark)
        # A pre-existing workspace or a name-only one needs no correction
        if located.windows > 1 or located.num < 0:
            return

        self.store.load_or_empty()
        claiming = self.store.outputs_claiming(located.num)
        if decide_placement(claiming, located.output) != Placement.RELOCATE:
            return

        self._relocate_new_workspace(located.num, located.output, claiming[0], focused, before)

    def _relocate_new_workspace(
        self,
        num: int,
        landed_on: str,
        output: str,
        focused: Workspace,
        before: List[Workspace],
    ) -> None:
        logger.info(f"Relocating new workspace {num} from {landed_on} to {output}")
        visible: Optional[Workspace] = next(
            (ws for ws in before if ws.output == output and ws.visible), None
        )
        # The origin workspace is destroyed once unfocused if the move emptied it
        origin_windows = self.snapshot.window_count(focused.name)

        self._run(commands.focus_workspace(WorkspaceTarget.by_number(num), no_auto_back_and_forth=True))
        self._run(commands.move_workspace_to_output(output))
        if visible is not None:
            self._run(commands.focus_workspace(WorkspaceTarget.by_name(visible.name), no_auto_back_and_forth=True))
        if origin_windows:
            self._run(commands.focus_workspace(WorkspaceTarget.by_name(focused.name), no_auto_back_and_forth=True))
        else:
            self._run(commands.focus_output(landed_on))
