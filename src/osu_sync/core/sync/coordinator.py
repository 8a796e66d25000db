"""Sync coordinator: the single owner of inventories and sync state.

Holds the latest local and remote inventories, the reconciliation snapshot
derived from them, and the SyncOrchestrator fed by that snapshot. Every
inventory change goes through ``_publish()``, which reconciles and publishes
under one lock, so the last writer wins and no two results are ever merged.

A failed host operation leaves the previous inventories and snapshot in place.
"""

import logging
import threading
from typing import Any, Callable, Iterable, Optional, Tuple

from ...models import ReconciliationResult, SongFolder
from ..errors import HostOperationError
from ..host import SyncHost
from .events import EventSubscription, Signal
from .orchestrator import SyncOrchestrator, SyncStatus
from .progress_tracker import ProgressCallback
from .reconciler import reconcile

logger = logging.getLogger(__name__)


class SyncCoordinator:
    """Coordinates reconciliation and the sync orchestrator for one host."""

    def __init__(
        self,
        host: SyncHost,
        progress_callback: Optional[ProgressCallback] = None,
        update_interval: float = 0.5,
        event_sender: Optional[Any] = None,
    ):
        """Initialize sync coordinator.

        Args:
            host: Host platform providing inventories and downloads
            progress_callback: Optional callback for download progress updates
            update_interval: Minimum seconds between progress callbacks
            event_sender: Only accept signals from this sender (default: any)
        """
        self.host = host
        self._lock = threading.Lock()
        self._local: Tuple[SongFolder, ...] = ()
        self._remote: Tuple[SongFolder, ...] = ()
        self._result: ReconciliationResult = reconcile((), ())
        self._subscription: Optional[EventSubscription] = None

        self.orchestrator = SyncOrchestrator(
            request_sync=host.request_sync,
            progress_callback=progress_callback,
            update_interval=update_interval,
            event_sender=event_sender,
        )

    def __enter__(self) -> "SyncCoordinator":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def start(self) -> None:
        """Activate the orchestrator and listen for remote inventory pushes."""
        self.orchestrator.activate()
        if self._subscription is None:
            subscription = EventSubscription()
            subscription.connect(
                Signal.REMOTE_INVENTORY_UPDATED, self._on_remote_inventory_updated
            )
            self._subscription = subscription

    def close(self) -> None:
        """Release every signal listener."""
        if self._subscription is not None:
            subscription = self._subscription
            self._subscription = None
            subscription.close()
        self.orchestrator.close()

    # ------------------------------------------------------------------
    # Snapshot access
    # ------------------------------------------------------------------

    @property
    def local_inventory(self) -> Tuple[SongFolder, ...]:
        """Latest local inventory."""
        return self._local

    @property
    def remote_inventory(self) -> Tuple[SongFolder, ...]:
        """Latest remote inventory."""
        return self._remote

    @property
    def result(self) -> ReconciliationResult:
        """Latest reconciliation snapshot."""
        return self._result

    @property
    def status(self) -> SyncStatus:
        """Orchestrator state snapshot."""
        return self.orchestrator.status

    # ------------------------------------------------------------------
    # Inventory updates
    # ------------------------------------------------------------------

    def refresh_local(self) -> ReconciliationResult:
        """Rescan the local inventory and reconcile.

        Raises:
            HostOperationError: If the host scan failed
        """
        inventory = self._call_host("Local scan", self.host.scan_local_inventory)
        logger.info("Local inventory: %d folders", len(inventory))
        return self._publish(local=inventory)

    def refresh_remote(self) -> ReconciliationResult:
        """Fetch the remote inventory and reconcile.

        Raises:
            HostOperationError: If the host fetch failed
        """
        inventory = self._call_host("Remote fetch", self.host.fetch_remote_inventory)
        logger.info("Remote inventory: %d folders", len(inventory))
        return self._publish(remote=inventory)

    def refresh_all(self) -> ReconciliationResult:
        """Refresh both sides; the local scan runs first."""
        self.refresh_local()
        return self.refresh_remote()

    def update_local(self, inventory: Iterable[SongFolder]) -> ReconciliationResult:
        """Replace the local inventory with an already loaded one."""
        return self._publish(local=inventory)

    def update_remote(self, inventory: Iterable[SongFolder]) -> ReconciliationResult:
        """Replace the remote inventory with an already loaded one."""
        return self._publish(remote=inventory)

    # ------------------------------------------------------------------
    # Operator actions
    # ------------------------------------------------------------------

    def trigger_review(self) -> bool:
        """Show the sync candidates."""
        return self.orchestrator.trigger_review()

    def collapse(self) -> bool:
        """Hide the sync candidates."""
        return self.orchestrator.collapse()

    def trigger_sync(self) -> bool:
        """Request a download of the current candidates.

        Returns:
            True if a download request was issued

        Raises:
            HostOperationError: If the host refused the request
        """
        return self._call_host("Sync request", self.orchestrator.trigger_sync)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _publish(
        self,
        local: Optional[Iterable[SongFolder]] = None,
        remote: Optional[Iterable[SongFolder]] = None,
    ) -> ReconciliationResult:
        """Replace one or both inventories, reconcile and publish."""
        with self._lock:
            new_local = self._local if local is None else tuple(local)
            new_remote = self._remote if remote is None else tuple(remote)

            result = reconcile(new_local, new_remote)

            self._local = new_local
            self._remote = new_remote
            self._result = result
            self.orchestrator.update_candidates(result.sync_candidates)

        return result

    def _call_host(self, operation: str, func: Callable[[], Any]) -> Any:
        try:
            return func()
        except Exception as e:
            logger.error("%s failed: %s", operation, e)
            raise HostOperationError(f"{operation} failed: {e}") from e

    def _on_remote_inventory_updated(self) -> None:
        logger.debug("Remote inventory update announced")
        try:
            self.refresh_remote()
        except HostOperationError:
            logger.warning("Keeping previous remote inventory")
