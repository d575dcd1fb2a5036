"""Pytest configuration and shared fixtures for sway_workspaces tests."""

import sys
from pathlib import Path

import pytest

# Make the fixtures package importable
tests_root = Path(__file__).parent
if str(tests_root) not in sys.path:
    sys.path.insert(0, str(tests_root))

from fixtures.mock_sway_ipc import FakeSwayConnection, two_output_connection  # noqa: E402

from sway_workspaces.core.snapshot import TreeSnapshot  # noqa: E402
from sway_workspaces.core.sway_client import SwayClient  # noqa: E402
from sway_workspaces.services.mapping_store import MappingStore  # noqa: E402
from sway_workspaces.services.placement import PlacementReconciler  # noqa: E402


@pytest.fixture
def sway_conn() -> FakeSwayConnection:
    """Two outputs: VGA-1 focused showing workspace 1, HDMI-A-1 showing 5."""
    return two_output_connection()


@pytest.fixture
def client(sway_conn: FakeSwayConnection) -> SwayClient:
    return SwayClient(connection=sway_conn)


@pytest.fixture
def snapshot(client: SwayClient) -> TreeSnapshot:
    return TreeSnapshot(client)


@pytest.fixture
def store(tmp_path: Path) -> MappingStore:
    """Store backed by files in a temporary runtime directory."""
    return MappingStore(tmp_path / "ws.json", tmp_path / "ws-prev.json")


@pytest.fixture
def reconciler(client: SwayClient, snapshot: TreeSnapshot, store: MappingStore) -> PlacementReconciler:
    return PlacementReconciler(client, snapshot, store)
