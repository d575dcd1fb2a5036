"""CLI command handlers for sway-ws.

Implements focus, move, map, monitor, workspaces-to-outputs, previous and
show on top of the placement services.
"""

import argparse
import json
import logging
import sys
from typing import Iterable, List, Optional, Sequence, Tuple

from .. import __version__
from ..core.config import resolve_paths
from ..core.snapshot import TreeSnapshot
from ..core.sway_client import SwayClient
from ..errors import WorkspaceError
from ..models.target import WorkspaceTarget
from ..services.mapping_store import MappingStore
from ..services.monitor import WorkspaceMonitor
from ..services.placement import PlacementReconciler
from ..services.workspace_assigner import WorkspaceAssigner
from .logging_config import log_timing, setup_logging

logger = logging.getLogger(__name__)


# ANSI color codes for output
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    BLUE = "\033[34m"
    GRAY = "\033[90m"


def print_success(message: str) -> None:
    """Print success message in green."""
    print(f"{Colors.GREEN}✓{Colors.RESET} {message}")


def print_error(message: str) -> None:
    """Print error message in red."""
    print(f"{Colors.RED}✗ Error:{Colors.RESET} {message}", file=sys.stderr)


def print_error_with_remediation(error: str, remediation: str) -> None:
    """Print error with remediation steps.

    Format: "Error: <issue>" followed by "Remediation: <steps>"
    """
    print_error(error)
    print(f"{Colors.BLUE}  Remediation:{Colors.RESET} {remediation}", file=sys.stderr)


def format_numbers(numbers: Iterable[int]) -> str:
    """Collapse sorted workspace numbers into ranges.

    Examples:
        >>> format_numbers([1, 2, 3, 5, 7, 8])
        '1-3, 5, 7-8'
    """
    ranges: List[Tuple[int, int]] = []
    for num in numbers:
        if ranges and num == ranges[-1][1] + 1:
            ranges[-1] = (ranges[-1][0], num)
        else:
            ranges.append((num, num))
    return ", ".join(str(a) if a == b else f"{a}-{b}" for a, b in ranges)


# ============================================================================
# Service wiring
# ============================================================================


def _client(args: argparse.Namespace) -> SwayClient:
    return SwayClient(dry_run=getattr(args, "dry_run", False))


def _store(args: argparse.Namespace) -> MappingStore:
    paths = resolve_paths(
        mapping_file=getattr(args, "mapping_file", None),
        previous_file=getattr(args, "previous_file", None),
    )
    logger.debug(f"Mapping file: {paths.mapping_file}, previous file: {paths.previous_file}")
    return MappingStore(paths.mapping_file, paths.previous_file)


def _reconciler(args: argparse.Namespace, store: MappingStore) -> PlacementReconciler:
    client = _client(args)
    return PlacementReconciler(client, TreeSnapshot(client), store)


# ============================================================================
# Placement commands
# ============================================================================


def cmd_focus(args: argparse.Namespace) -> int:
    """Focus a workspace, creating it on its mapped output.

    Args:
        args: Parsed arguments with 'number', 'name' and 'no_auto_back_and_forth'

    Returns:
        0 on success
    """
    target = WorkspaceTarget.from_args(args.number, args.name)
    reconciler = _reconciler(args, _store(args))

    with log_timing(f"focus {target}", logger):
        reconciler.focus(target, no_auto_back_and_forth=args.no_auto_back_and_forth)
    return 0


def cmd_move(args: argparse.Namespace) -> int:
    """Move the focused container to a workspace."""
    target = WorkspaceTarget.from_args(args.number, args.name)
    reconciler = _reconciler(args, _store(args))

    with log_timing(f"move to {target}", logger):
        reconciler.move(target, no_auto_back_and_forth=args.no_auto_back_and_forth)
    return 0


def cmd_previous(args: argparse.Namespace) -> int:
    """Focus the workspace recorded by the monitor."""
    store = _store(args)
    previous = store.load_previous()
    target = WorkspaceTarget.from_workspace(previous.name, previous.num)
    logger.info(f"Previous workspace: {previous.name}")

    reconciler = _reconciler(args, store)
    with log_timing(f"focus previous {target}", logger):
        reconciler.focus(target, no_auto_back_and_forth=args.no_auto_back_and_forth)
    return 0


# ============================================================================
# Mapping commands
# ============================================================================


def _map_tokens(args: argparse.Namespace, store: MappingStore, snapshot: TreeSnapshot) -> List[str]:
    # The file is rewritten wholesale from this invocation's tokens
    store.mapping = {}
    applied = store.apply_specs(args.mappings, snapshot.outputs())
    if args.dry_run:
        logger.info(f"Dry run: mapping not saved to {store.mapping_file}")
    else:
        store.save()
    return applied


def cmd_map(args: argparse.Namespace) -> int:
    """Set the output-to-workspace mapping."""
    store = _store(args)
    client = _client(args)
    applied = _map_tokens(args, store, TreeSnapshot(client))

    if args.dry_run:
        print_success(f"Mapped {len(applied)} output(s) (dry run, not saved)")
    else:
        print_success(f"Mapped {len(applied)} output(s), saved to {store.mapping_file}")
    for output in applied:
        print(f"  {output}: {format_numbers(store.mapping[output])}")
    return 0


def cmd_workspaces_to_outputs(args: argparse.Namespace) -> int:
    """Move every workspace onto the output its number is mapped to."""
    store = _store(args)
    client = _client(args)
    snapshot = TreeSnapshot(client)

    if args.mappings:
        _map_tokens(args, store, snapshot)
    else:
        store.load()

    with log_timing("workspaces-to-outputs", logger):
        report = WorkspaceAssigner(client, snapshot).apply(store.mapping)

    if report.changed:
        print_success(
            f"Moved {len(report.moved)} workspace(s), filled {len(report.filled)} output(s)"
        )
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Show the stored mapping."""
    store = _store(args)
    mapping = store.load_or_empty()
    connected = {output.name for output in TreeSnapshot(_client(args)).outputs() if output.active}

    if args.json:
        data = {
            "mapping_file": str(store.mapping_file),
            "outputs": [
                {"output": output, "workspaces": numbers, "connected": output in connected}
                for output, numbers in sorted(mapping.items())
            ],
        }
        print(json.dumps(data, indent=2))
        return 0

    from rich.console import Console
    from rich.table import Table

    console = Console()
    table = Table(title=f"Workspace Mapping ({store.mapping_file})", show_header=True, header_style="bold")
    table.add_column("Output", style="cyan")
    table.add_column("Workspaces")
    table.add_column("Connected", justify="center")

    for output, numbers in sorted(mapping.items()):
        status = "[green]yes[/green]" if output in connected else "[dim]no[/dim]"
        table.add_row(output, format_numbers(numbers), status)

    console.print(table)
    return 0


# ============================================================================
# Monitor
# ============================================================================


def cmd_monitor(args: argparse.Namespace) -> int:
    """Record the previously focused workspace until stopped."""
    store = _store(args)
    WorkspaceMonitor(_client(args), store).run()
    return 0


# ============================================================================
# Entry point
# ============================================================================


def _add_target_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-auto-back-and-forth",
        action="store_true",
        help="Do nothing if the workspace is already focused"
    )
    parser.add_argument(
        "--number",
        type=int,
        help="Workspace number"
    )
    parser.add_argument(
        "name",
        nargs="?",
        help="Workspace name"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="sway-ws",
        description="Keep sway workspaces on the outputs they are mapped to"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"sway-ws {__version__}"
    )
    parser.add_argument(
        "--mapping-file", "-m",
        help="Output-to-workspace mapping file (default: $XDG_RUNTIME_DIR/ws.json)"
    )
    parser.add_argument(
        "--previous-file", "-p",
        help="Previously focused workspace file (default: $XDG_RUNTIME_DIR/ws-prev.json)"
    )
    parser.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="Print sway commands instead of executing them and leave the mapping file unchanged"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (INFO level)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level, includes verbose)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # sway-ws focus [--number N] [NAME]
    parser_focus = subparsers.add_parser(
        "focus",
        help="Focus a workspace",
        description="Focus a workspace, creating it on its mapped output"
    )
    _add_target_arguments(parser_focus)

    # sway-ws move (--number N | NAME)
    parser_move = subparsers.add_parser(
        "move",
        help="Move the focused container to a workspace",
        description="Move the focused container; a newly created workspace is moved to its mapped output"
    )
    _add_target_arguments(parser_move)

    # sway-ws map OUTPUT:SPEC...
    parser_map = subparsers.add_parser(
        "map",
        help="Set the output-to-workspace mapping",
        description="Map workspaces to outputs. Mapping an output a second time replaces its workspaces."
    )
    parser_map.add_argument(
        "mappings",
        nargs="+",
        metavar="OUTPUT:WORKSPACES",
        help="e.g. VGA-1:1-5, 'Dell Inc. DELL U2415 ABC123:6,7'"
    )

    # sway-ws monitor
    subparsers.add_parser(
        "monitor",
        help="Record the previously focused workspace",
        description="Run in the background and record every workspace that loses focus"
    )

    # sway-ws workspaces-to-outputs [OUTPUT:SPEC...]
    parser_assign = subparsers.add_parser(
        "workspaces-to-outputs",
        help="Move existing workspaces to their mapped outputs",
        description="Apply the given (or stored) mapping to all existing workspaces"
    )
    parser_assign.add_argument(
        "mappings",
        nargs="*",
        metavar="OUTPUT:WORKSPACES",
        help="Mapping to save and apply (default: the stored mapping)"
    )

    # sway-ws previous
    parser_previous = subparsers.add_parser(
        "previous",
        help="Focus the previously focused workspace",
        description="Focus the workspace recorded by 'sway-ws monitor'"
    )
    parser_previous.add_argument(
        "--no-auto-back-and-forth",
        action="store_true",
        help="Do nothing if the workspace is already focused"
    )

    # sway-ws show
    parser_show = subparsers.add_parser(
        "show",
        help="Show the stored mapping",
        description="Display the output-to-workspace mapping"
    )
    parser_show.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format"
    )

    return parser


def cli_main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "move" and args.number is not None and args.name:
        parser.error("move takes either --number or NAME, not both")

    verbose = getattr(args, 'verbose', False)
    debug = getattr(args, 'debug', False)
    setup_logging(verbose=verbose, debug=debug)

    # No command = show help
    if not args.command:
        parser.print_help()
        return 0

    command_handlers = {
        "focus": cmd_focus,
        "move": cmd_move,
        "map": cmd_map,
        "monitor": cmd_monitor,
        "workspaces-to-outputs": cmd_workspaces_to_outputs,
        "previous": cmd_previous,
        "show": cmd_show,
    }

    handler = command_handlers[args.command]
    try:
        return handler(args)
    except WorkspaceError as e:
        logger.debug(f"{args.command} failed: {e.to_dict()}")
        if e.suggestion:
            print_error_with_remediation(e.message, e.suggestion)
        else:
            print_error(e.message)
        return 1


if __name__ == "__main__":
    sys.exit(cli_main())
