"""
Workspace monitor daemon.

Subscribes to sway workspace events and records the workspace that lost
focus, so that ``sway-ws previous`` can return to it later.
"""

import logging
import signal
from typing import Any

from ..core.sway_client import SwayClient
from ..errors import PersistenceError, SwayIPCError
from .mapping_store import MappingStore

logger = logging.getLogger(__name__)


class WorkspaceMonitor:
    """Long-running recorder of the previously focused workspace."""

    def __init__(self, client: SwayClient, store: MappingStore):
        self.client = client
        self.store = store
        self._stop_requested = False

    def handle_event(self, connection: Any, event: Any) -> None:
        """Record ``event.old`` if it carries both a name and a number.

        Events without an old workspace (e.g. ``init``) or with a partial
        one are ignored. Write failures are logged and do not stop the
        daemon.
        """
        old = getattr(event, "old", None)
        if old is None:
            return

        name = getattr(old, "name", None)
        num = getattr(old, "num", None)
        if name is None or num is None:
            logger.debug(f"Ignoring workspace event without old name/num ({getattr(event, 'change', '?')})")
            return

        try:
            self.store.record_previous(name, num)
            logger.debug(f"Recorded previous workspace {name} ({num})")
        except PersistenceError as e:
            logger.error(f"Could not record previous workspace: {e.message}")

    def stop(self, *_args: Any) -> None:
        """Signal handler: leave the event loop."""
        logger.info("Stopping workspace monitor")
        self._stop_requested = True
        self.client.main_quit()

    def run(self) -> None:
        """Subscribe to workspace events and block until stopped.

        Raises:
            SwayIPCError: If the subscription ends without a stop request
        """
        self._stop_requested = False
        self.client.subscribe_workspaces(self.handle_event)

        signal.signal(signal.SIGINT, self.stop)
        signal.signal(signal.SIGTERM, self.stop)

        logger.info(f"Monitoring workspace events, recording to {self.store.previous_file}")
        self.client.main()

        if not self._stop_requested:
            raise SwayIPCError("event subscription", "event subscription closed")
