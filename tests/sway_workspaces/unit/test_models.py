"""Tests for the sway snapshot models."""

import pytest
from pydantic import ValidationError

from sway_workspaces.models.sway import Output, Workspace


class TestOutput:
    """Test Output."""

    def test_from_ipc(self):
        output = Output.from_ipc({
            "name": "HDMI-A-1",
            "make": "Dell Inc.",
            "model": "DELL U2415",
            "serial": "7MT0186",
            "focused": True,
            "active": True,
        })

        assert output.descriptor == "Dell Inc. DELL U2415 7MT0186"
        assert output.matches("HDMI-A-1")
        assert output.matches("Dell Inc. DELL U2415 7MT0186")
        assert not output.matches("DELL U2415")

    def test_missing_sway_fields(self):
        """i3-style replies without make/model/serial still load."""
        output = Output.from_ipc({"name": "VGA-1"})

        assert output.descriptor == "  "
        assert not output.focused

    def test_frozen(self):
        output = Output(name="VGA-1")

        with pytest.raises(ValidationError):
            output.name = "DP-1"


class TestWorkspace:
    """Test Workspace."""

    def test_from_ipc(self):
        ws = Workspace.from_ipc({
            "num": 3,
            "name": "3:web",
            "output": "VGA-1",
            "focused": True,
            "visible": True,
        })

        assert (ws.num, ws.name, ws.output) == (3, "3:web", "VGA-1")
        assert ws.focused and ws.visible
        assert ws.has_number

    def test_named_workspace(self):
        """A missing number is normalized to -1."""
        ws = Workspace.from_ipc({"num": None, "name": "mail"})

        assert ws.num == -1
        assert not ws.has_number
