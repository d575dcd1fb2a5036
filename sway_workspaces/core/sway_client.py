"""Sway IPC client.

Thin synchronous wrapper around ``i3ipc.Connection`` for:
- Outputs (GET_OUTPUTS)
- Workspaces (GET_WORKSPACES)
- Window tree (GET_TREE)
- Sending commands (RUN_COMMAND)
- Workspace event subscription

In dry-run mode commands are echoed instead of sent; queries still go to
sway so that decisions are made against the real state.
"""

import logging
from typing import Any, Callable, List, Optional

import i3ipc

from ..errors import CommandError, ErrorCode, SwayIPCError

logger = logging.getLogger(__name__)

BOLD_BLUE = "\033[1;34m"
RESET = "\033[0m"


class SwayClient:
    """Sway IPC transport adapter.

    Attributes:
        dry_run: Echo commands instead of executing them
        history: Every command passed to ``command()``, in order
    """

    def __init__(
        self,
        connection: Optional[i3ipc.Connection] = None,
        dry_run: bool = False,
        echo: Callable[[str], None] = print,
    ):
        """Initialize client.

        Args:
            connection: Existing connection (default: opened lazily on first use)
            dry_run: Print commands instead of sending them
            echo: Sink for dry-run output
        """
        self._connection = connection
        self.dry_run = dry_run
        self._echo = echo
        self.history: List[str] = []

    @property
    def connection(self) -> i3ipc.Connection:
        if self._connection is None:
            try:
                logger.debug("Connecting to sway IPC socket")
                self._connection = i3ipc.Connection()
            except Exception as e:
                raise SwayIPCError("connect", str(e), code=ErrorCode.SWAY_NOT_RUNNING) from e
        return self._connection

    def _query(self, name: str, call: Callable[[], Any]) -> Any:
        logger.debug(f"IPC query: {name}")
        try:
            return call()
        except SwayIPCError:
            raise
        except Exception as e:
            logger.error(f"{name} failed: {e}")
            raise SwayIPCError(name, str(e)) from e

    def get_outputs(self) -> List[Any]:
        return self._query("GET_OUTPUTS", lambda: self.connection.get_outputs())

    def get_workspaces(self) -> List[Any]:
        return self._query("GET_WORKSPACES", lambda: self.connection.get_workspaces())

    def get_tree(self) -> Any:
        return self._query("GET_TREE", lambda: self.connection.get_tree())

    def command(self, cmd: str) -> List[Any]:
        """Send a command (RUN_COMMAND).

        Args:
            cmd: Sway command string

        Returns:
            Per-statement replies (empty in dry-run mode)

        Raises:
            SwayIPCError: If the request could not be delivered
            CommandError: If sway reports a statement as failed
        """
        self.history.append(cmd)

        if self.dry_run:
            self._echo(f"SWAY: {BOLD_BLUE}{cmd}{RESET}")
            return []

        logger.debug(f"IPC command: {cmd}")
        replies = self._query("RUN_COMMAND", lambda: self.connection.command(cmd))
        for reply in replies:
            if not reply.success:
                error = getattr(reply, "error", None) or "unknown error"
                logger.error(f"Command failed: {cmd} ({error})")
                raise CommandError(cmd, error)
        return replies

    def subscribe_workspaces(self, handler: Callable[[Any, Any], None]) -> None:
        """Register ``handler(connection, event)`` for workspace events."""
        self.connection.on(i3ipc.Event.WORKSPACE, handler)

    def main(self) -> None:
        """Block dispatching subscribed events until ``main_quit()`` or disconnect."""
        try:
            self.connection.main()
        except SwayIPCError:
            raise
        except Exception as e:
            raise SwayIPCError("event loop", str(e)) from e

    def main_quit(self) -> None:
        if self._connection is not None:
            self._connection.main_quit()
