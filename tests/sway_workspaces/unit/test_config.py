"""Tests for runtime path resolution."""

from pathlib import Path

import pytest

from sway_workspaces.core.config import resolve_paths, runtime_dir


class TestRuntimeDir:
    """Test runtime_dir()."""

    def test_uses_xdg_runtime_dir(self):
        assert runtime_dir({"XDG_RUNTIME_DIR": "/run/user/1000"}) == Path("/run/user/1000")

    @pytest.mark.parametrize("env", [{}, {"XDG_RUNTIME_DIR": ""}])
    def test_falls_back_to_tmp(self, env):
        """Unset or empty falls back to /tmp."""
        assert runtime_dir(env) == Path("/tmp")


class TestResolvePaths:
    """Test resolve_paths()."""

    def test_defaults(self):
        paths = resolve_paths(env={"XDG_RUNTIME_DIR": "/run/user/1000"})

        assert paths.runtime_dir == Path("/run/user/1000")
        assert paths.mapping_file == Path("/run/user/1000/ws.json")
        assert paths.previous_file == Path("/run/user/1000/ws-prev.json")

    def test_defaults_without_runtime_dir(self):
        paths = resolve_paths(env={})

        assert paths.mapping_file == Path("/tmp/ws.json")
        assert paths.previous_file == Path("/tmp/ws-prev.json")

    def test_expands_runtime_dir_token(self):
        """Both $VAR and ${VAR} forms are expanded against the given env."""
        paths = resolve_paths(
            mapping_file="$XDG_RUNTIME_DIR/custom.json",
            previous_file="${XDG_RUNTIME_DIR}/prev.json",
            env={"XDG_RUNTIME_DIR": "/run/user/42"},
        )

        assert paths.mapping_file == Path("/run/user/42/custom.json")
        assert paths.previous_file == Path("/run/user/42/prev.json")

    def test_token_falls_back_to_tmp(self):
        paths = resolve_paths(mapping_file="$XDG_RUNTIME_DIR/ws.json", env={})

        assert paths.mapping_file == Path("/tmp/ws.json")

    def test_relative_paths_made_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        paths = resolve_paths(mapping_file="map.json", env={})

        assert paths.mapping_file.is_absolute()
        assert paths.mapping_file.resolve() == (tmp_path / "map.json").resolve()

    def test_home_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))

        paths = resolve_paths(previous_file="~/prev.json", env={})

        assert paths.previous_file == tmp_path / "prev.json"
