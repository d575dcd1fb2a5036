"""Sway command string builders.

Pure functions; nothing here talks to sway. Names are always double-quoted
so that workspace and output names containing spaces or commas survive the
command parser.
"""

from ..models.target import TargetKind, WorkspaceTarget


def quote(value: str) -> str:
    """Quote a string argument for the sway command parser."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _workspace_argument(target: WorkspaceTarget) -> str:
    if target.kind == TargetKind.BOTH:
        return f"number {quote(f'{target.number}:{target.name}')}"
    if target.kind == TargetKind.NUMBER:
        return f"number {target.number}"
    return quote(target.name)


def focus_workspace(target: WorkspaceTarget, no_auto_back_and_forth: bool = False) -> str:
    """``workspace [--no-auto-back-and-forth] <target>``"""
    flag = "--no-auto-back-and-forth " if no_auto_back_and_forth else ""
    return f"workspace {flag}{_workspace_argument(target)}"


def move_container_to_workspace(target: WorkspaceTarget) -> str:
    return f"move container to workspace {_workspace_argument(target)}"


def focus_output(output: str) -> str:
    return f"focus output {quote(output)}"


def move_workspace_to_output(output: str) -> str:
    return f"move workspace to output {quote(output)}"


def mark_add(mark: str) -> str:
    return f"mark --add {quote(mark)}"


def unmark(mark: str) -> str:
    return f"unmark {quote(mark)}"


def chain(*commands: str) -> str:
    """Join commands so sway runs them against the same criteria/focus in one request."""
    return ", ".join(commands)
