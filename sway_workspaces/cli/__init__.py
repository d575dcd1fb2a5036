"""Command line interface for sway-ws."""

from .commands import build_parser, cli_main

__all__ = ["build_parser", "cli_main"]
