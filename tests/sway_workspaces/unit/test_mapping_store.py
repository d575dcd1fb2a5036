"""Tests for MappingStore persistence."""

import json
from pathlib import Path

import pytest

from fixtures.mock_sway_ipc import MockOutput

from sway_workspaces.errors import ErrorCode, MappingSpecError, PersistenceError
from sway_workspaces.models.sway import Output
from sway_workspaces.services.mapping_store import MappingStore, atomic_write_json


def _outputs():
    return [
        Output.from_ipc(MockOutput(name="VGA-1", make="Goldstar", model="L1980", serial="0x01").ipc_data),
        Output.from_ipc(MockOutput(name="HDMI-A-1", make="Dell Inc.", model="DELL U2415", serial="7MT0186").ipc_data),
    ]


class TestMappingPersistence:
    """Test save/load of the mapping file."""

    def test_round_trip(self, store: MappingStore, tmp_path: Path):
        """Saving then loading reproduces the same structure."""
        store.set_output("VGA-1", [3, 1, 2, 2])
        store.set_output("HDMI-A-1", [10])
        store.save()

        reloaded = MappingStore(store.mapping_file, store.previous_file)
        assert reloaded.load() == {"VGA-1": [1, 2, 3], "HDMI-A-1": [10]}

    def test_file_format(self, store: MappingStore):
        """The file is a plain JSON object of output -> sorted numbers."""
        store.set_output("VGA-1", [2, 1])
        store.save()

        assert json.loads(store.mapping_file.read_text()) == {"VGA-1": [1, 2]}

    def test_save_overwrites_wholesale(self, store: MappingStore):
        """Outputs absent from the in-memory mapping disappear from the file."""
        store.set_output("VGA-1", [1])
        store.set_output("HDMI-A-1", [2])
        store.save()

        store.mapping = {}
        store.set_output("HDMI-A-1", [3])
        store.save()

        assert json.loads(store.mapping_file.read_text()) == {"HDMI-A-1": [3]}

    def test_save_leaves_no_temp_files(self, store: MappingStore, tmp_path: Path):
        store.set_output("VGA-1", [1])
        store.save()

        assert sorted(p.name for p in tmp_path.iterdir()) == ["ws.json"]

    def test_load_missing_file(self, store: MappingStore):
        with pytest.raises(PersistenceError) as exc_info:
            store.load()

        assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND

    def test_load_or_empty_missing_file(self, store: MappingStore):
        """A missing file is an empty mapping where that is allowed."""
        store.mapping = {"stale": [1]}
        assert store.load_or_empty() == {}

    def test_load_invalid_json(self, store: MappingStore):
        """Corrupt files surface as read errors, even through load_or_empty."""
        store.mapping_file.write_text("{not json")

        with pytest.raises(PersistenceError) as exc_info:
            store.load_or_empty()

        assert exc_info.value.code == ErrorCode.FILE_READ_ERROR

    def test_load_wrong_shape(self, store: MappingStore):
        store.mapping_file.write_text(json.dumps({"VGA-1": "1-3"}))

        with pytest.raises(PersistenceError) as exc_info:
            store.load()

        assert exc_info.value.code == ErrorCode.FILE_READ_ERROR

    def test_write_failure(self, tmp_path: Path):
        """An unwritable location raises a write error."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        store = MappingStore(blocker / "ws.json", tmp_path / "ws-prev.json")
        store.set_output("VGA-1", [1])

        with pytest.raises(PersistenceError) as exc_info:
            store.save()

        assert exc_info.value.code == ErrorCode.FILE_WRITE_ERROR

    def test_atomic_write_creates_parent(self, tmp_path: Path):
        target = tmp_path / "nested" / "dir" / "data.json"
        atomic_write_json(target, [1, 2])

        assert json.loads(target.read_text()) == [1, 2]


class TestMappingQueries:
    """Test in-memory mapping queries."""

    def test_set_output_replaces(self, store: MappingStore):
        """Setting an output twice keeps only the later set."""
        store.set_output("VGA-1", [1, 2])
        store.set_output("VGA-1", [3])

        assert store.mapping == {"VGA-1": [3]}

    def test_outputs_claiming_sorted(self, store: MappingStore):
        store.mapping = {"VGA-1": [1, 2], "DP-1": [2], "HDMI-A-1": [3]}

        assert store.outputs_claiming(2) == ["DP-1", "VGA-1"]
        assert store.outputs_claiming(9) == []


class TestApplySpecs:
    """Test resolving OUTPUT:SPEC tokens against connected outputs."""

    def test_resolves_by_name(self, store: MappingStore):
        applied = store.apply_specs(["VGA-1:1-3"], _outputs())

        assert applied == ["VGA-1"]
        assert store.mapping == {"VGA-1": [1, 2, 3]}

    def test_resolves_by_descriptor(self, store: MappingStore):
        """Descriptors are stored under the output's name."""
        store.apply_specs(["Dell Inc. DELL U2415 7MT0186:4,5"], _outputs())

        assert store.mapping == {"HDMI-A-1": [4, 5]}

    def test_later_token_replaces_earlier(self, store: MappingStore):
        """Re-mapping the same output in one call replaces, never unions."""
        store.apply_specs(["VGA-1:1-3", "Goldstar L1980 0x01:7"], _outputs())

        assert store.mapping == {"VGA-1": [7]}

    def test_unknown_output_skipped(self, store: MappingStore):
        applied = store.apply_specs(["DP-9:1", "VGA-1:2"], _outputs())

        assert applied == ["VGA-1"]
        assert store.mapping == {"VGA-1": [2]}

    def test_bad_token_rejects_everything(self, store: MappingStore):
        """One malformed token leaves the mapping untouched."""
        with pytest.raises(MappingSpecError):
            store.apply_specs(["VGA-1:1-3", "HDMI-A-1"], _outputs())

        assert store.mapping == {}


class TestPreviousWorkspaceRecord:
    """Test the previous-workspace file."""

    def test_record_and_load(self, store: MappingStore):
        store.record_previous("3:web", 3)

        assert json.loads(store.previous_file.read_text()) == ["3:web", 3]
        previous = store.load_previous()
        assert (previous.name, previous.num) == ("3:web", 3)

    def test_record_overwrites(self, store: MappingStore):
        store.record_previous("1", 1)
        store.record_previous("mail", -1)

        assert store.load_previous().to_pair() == ["mail", -1]

    def test_load_missing(self, store: MappingStore):
        with pytest.raises(PersistenceError) as exc_info:
            store.load_previous()

        assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND

    def test_load_malformed(self, store: MappingStore):
        store.previous_file.write_text(json.dumps({"name": 3}))

        with pytest.raises(PersistenceError) as exc_info:
            store.load_previous()

        assert exc_info.value.code == ErrorCode.FILE_READ_ERROR
