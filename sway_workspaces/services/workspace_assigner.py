"""
Bulk workspace-to-output reassignment.

Applies a complete mapping to the running session in three ordered passes:
move misplaced workspaces, show a declared workspace on every claiming
output left empty, then restore the focus the user had before.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ..core import commands
from ..core.snapshot import TreeSnapshot
from ..core.sway_client import SwayClient
from ..models.target import WorkspaceTarget

logger = logging.getLogger(__name__)


@dataclass
class AssignmentReport:
    """What a bulk pass did.

    Attributes:
        moved: (workspace number, output) for every corrective move
        filled: (output, workspace number) for every previously empty output
        restored: Name of the workspace focused again at the end
    """

    moved: List[Tuple[int, str]] = field(default_factory=list)
    filled: List[Tuple[str, int]] = field(default_factory=list)
    restored: Optional[str] = None

    @property
    def changed(self) -> bool:
        return bool(self.moved or self.filled)


class WorkspaceAssigner:
    """Moves existing workspaces onto the outputs that claim them."""

    def __init__(self, client: SwayClient, snapshot: TreeSnapshot):
        """
        Initialize workspace assigner.

        Args:
            client: Sway IPC client used for the corrective commands
            snapshot: Snapshot of the state before the pass
        """
        self.client = client
        self.snapshot = snapshot

    def _assign(self, num: int, output: str) -> None:
        self.client.command(
            commands.chain(
                commands.focus_workspace(WorkspaceTarget.by_number(num), no_auto_back_and_forth=True),
                commands.move_workspace_to_output(output),
            )
        )

    def _connected_mapping(self, mapping: Dict[str, List[int]]) -> Dict[str, List[int]]:
        available = {output.name for output in self.snapshot.outputs() if output.active}
        connected = {}
        for output in sorted(mapping):
            if output in available:
                connected[output] = mapping[output]
            else:
                logger.warning(f"Output '{output}' is not connected, skipping its workspaces")
        return connected

    def apply(self, mapping: Dict[str, List[int]]) -> AssignmentReport:
        """Apply ``mapping`` to the current workspaces.

        Args:
            mapping: Output name to declared workspace numbers

        Returns:
            Report of the moves, fills and the restored workspace

        Raises:
            CommandError: If any corrective command fails; the rest of the
                pass is abandoned
        """
        report = AssignmentReport()
        mapping = self._connected_mapping(mapping)
        workspaces = list(self.snapshot.workspaces())
        focused = self.snapshot.focused_workspace()
        occupied: Set[str] = set()

        for ws in workspaces:
            if ws.num < 0:
                continue
            claiming = [output for output, numbers in mapping.items() if ws.num in numbers]
            if not claiming:
                continue
            if ws.output in claiming:
                occupied.add(ws.output)
                continue

            target = claiming[0]
            logger.info(f"Moving workspace {ws.name} from {ws.output} to {target}")
            self._assign(ws.num, target)
            report.moved.append((ws.num, target))
            occupied.add(target)

        for output, numbers in mapping.items():
            if output in occupied or not numbers:
                continue
            num = numbers[0]
            logger.info(f"Output {output} has no workspace, showing workspace {num}")
            self._assign(num, output)
            report.filled.append((output, num))

        if focused is not None:
            if focused.has_number:
                target = WorkspaceTarget.by_number(focused.num)
            else:
                target = WorkspaceTarget.by_name(focused.name)
            self.client.command(commands.focus_workspace(target, no_auto_back_and_forth=True))
            report.restored = focused.name

        logger.debug(
            f"Bulk pass done: {len(report.moved)} moved, {len(report.filled)} filled"
        )
        return report
