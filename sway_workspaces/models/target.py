"""Workspace target: the thing a focus or move request points at."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import MissingTarget
from .sway import Workspace


class TargetKind(str, Enum):
    """How a target was specified."""
    NUMBER = "number"
    NAME = "name"
    BOTH = "both"


@dataclass(frozen=True)
class WorkspaceTarget:
    """A workspace addressed by number, by name, or by both.

    Construct through the classmethods so that at least one of the two is
    always present.

    Examples:
        >>> WorkspaceTarget.by_number(3).kind
        <TargetKind.NUMBER: 'number'>
        >>> WorkspaceTarget.from_workspace("3:web", 3)
        WorkspaceTarget(number=3, name='web')
    """

    number: Optional[int] = None
    name: Optional[str] = None

    def __post_init__(self):
        if self.number is None and not self.name:
            raise MissingTarget()

    @classmethod
    def by_number(cls, number: int) -> "WorkspaceTarget":
        return cls(number=number)

    @classmethod
    def by_name(cls, name: str) -> "WorkspaceTarget":
        return cls(name=name)

    @classmethod
    def by_both(cls, number: int, name: str) -> "WorkspaceTarget":
        return cls(number=number, name=name)

    @classmethod
    def from_args(cls, number: Optional[int], name: Optional[str]) -> "WorkspaceTarget":
        """Build a target from optional CLI values.

        Raises:
            MissingTarget: If neither value is given
        """
        return cls(number=number, name=name or None)

    @classmethod
    def from_workspace(cls, name: str, num: int) -> "WorkspaceTarget":
        """Rebuild a target from a recorded (name, num) pair.

        Sway names numbered workspaces either ``"N"`` or ``"N:label"``.
        """
        if num >= 0:
            prefix = f"{num}:"
            if name == str(num):
                return cls.by_number(num)
            if name.startswith(prefix) and len(name) > len(prefix):
                return cls.by_both(num, name[len(prefix):])
        return cls.by_name(name)

    @property
    def kind(self) -> TargetKind:
        if self.number is not None and self.name:
            return TargetKind.BOTH
        if self.number is not None:
            return TargetKind.NUMBER
        return TargetKind.NAME

    def matches(self, workspace: Workspace) -> bool:
        """A workspace matches if its name OR its number equals the target's."""
        if self.name is not None and workspace.name == self.name:
            return True
        return self.number is not None and workspace.num == self.number

    def __str__(self) -> str:
        if self.kind == TargetKind.BOTH:
            return f"{self.number}:{self.name}"
        if self.kind == TargetKind.NUMBER:
            return str(self.number)
        return self.name
