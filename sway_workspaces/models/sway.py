"""Snapshot value models for sway outputs and workspaces.

These are immutable copies of the IPC replies, taken once per invocation.
They are built from the raw ``ipc_data`` dict so that sway-only fields
(``focused`` on outputs, ``make``/``model``/``serial``) survive regardless of
what the i3ipc reply classes expose as attributes.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Output(BaseModel):
    """A physical (or headless) display."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Output name, e.g. VGA-1")
    make: str = ""
    model: str = ""
    serial: str = ""
    focused: bool = False
    active: bool = True

    @property
    def descriptor(self) -> str:
        """Alternate identifier: make, model and serial joined by spaces."""
        return f"{self.make} {self.model} {self.serial}"

    def matches(self, identifier: str) -> bool:
        return identifier == self.name or identifier == self.descriptor

    @classmethod
    def from_ipc(cls, data: Dict[str, Any]) -> "Output":
        return cls(
            name=data["name"],
            make=data.get("make") or "",
            model=data.get("model") or "",
            serial=data.get("serial") or "",
            focused=bool(data.get("focused", False)),
            active=bool(data.get("active", True)),
        )


class Workspace(BaseModel):
    """A workspace as reported by GET_WORKSPACES.

    ``num`` is -1 for workspaces whose name does not start with a number.
    """

    model_config = ConfigDict(frozen=True)

    num: int = -1
    name: str
    output: str = ""
    focused: bool = False
    visible: bool = False

    @property
    def has_number(self) -> bool:
        return self.num >= 0

    @classmethod
    def from_ipc(cls, data: Dict[str, Any]) -> "Workspace":
        num = data.get("num")
        return cls(
            num=num if num is not None else -1,
            name=data["name"],
            output=data.get("output") or "",
            focused=bool(data.get("focused", False)),
            visible=bool(data.get("visible", False)),
        )
