"""Test fixtures for sway_workspaces tests."""
