"""Sync orchestrator: turns the list of songs to sync into a download.

The orchestrator is a small state machine driven by two inputs:

- operator actions: ``trigger_review()``, ``collapse()``, ``trigger_sync()``
- downloader signals: started, progress and finished

    IDLE --trigger_review--> REVIEWING --trigger_sync--> SYNCING
      ^                          |                          |
      +--------collapse----------+                          |
      +-------------------download finished-----------------+

It never blocks: ``trigger_sync()`` hands the candidates to the host and
returns, and the downloader reports back through the event bus.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple

from ...models import ClassifiedFolder, SongFolder
from .events import EventSubscription, Signal
from .progress_tracker import ProgressCallback, ProgressPhase, ProgressTracker

logger = logging.getLogger(__name__)

# Host operation that starts a download of the given folders
RequestSync = Callable[[Sequence[SongFolder]], None]


class SyncStage(str, Enum):
    """States of the sync orchestrator."""

    IDLE = "idle"  # Nothing shown, no sync running
    REVIEWING = "reviewing"  # Candidate list shown, waiting for the operator
    SYNCING = "syncing"  # Download requested, accepting progress


@dataclass(frozen=True)
class SyncStatus:
    """Snapshot of the orchestrator's observable state."""

    stage: SyncStage
    active: bool
    percentage: float
    candidate_count: int

    @property
    def review_visible(self) -> bool:
        """Whether the candidate list is on screen."""
        return self.stage is SyncStage.REVIEWING

    @property
    def locked(self) -> bool:
        """Whether triggering another sync is currently refused."""
        return self.stage is SyncStage.SYNCING

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of the orchestrator state."""
        return {
            "stage": self.stage.value,
            "active": self.active,
            "percentage": self.percentage,
            "candidates": self.candidate_count,
        }


class SyncOrchestrator:
    """Drives a download of sync candidates through review and progress.

    Use as a context manager, or call ``activate()`` and ``close()``, so the
    downloader subscriptions are released deterministically.
    """

    def __init__(
        self,
        request_sync: RequestSync,
        progress_callback: Optional[ProgressCallback] = None,
        update_interval: float = 0.5,
        event_sender: Optional[Any] = None,
    ):
        """Initialize sync orchestrator.

        Args:
            request_sync: Host operation that starts downloading folders
            progress_callback: Optional callback for download progress updates
            update_interval: Minimum seconds between progress callbacks
            event_sender: Only accept downloader signals from this sender
                (default: any sender)
        """
        self._request_sync = request_sync
        self._event_sender = event_sender
        self.progress_tracker = ProgressTracker(
            callback=progress_callback, update_interval=update_interval
        )

        self._stage = SyncStage.IDLE
        self._active = False
        self._percentage = 0.0
        self._candidates: Tuple[ClassifiedFolder, ...] = ()
        self._subscription: Optional[EventSubscription] = None

    def __enter__(self) -> "SyncOrchestrator":
        self.activate()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_subscribed(self) -> bool:
        """Whether the downloader listeners are connected."""
        return self._subscription is not None

    def activate(self) -> None:
        """Subscribe to downloader signals. Subsequent calls do nothing."""
        if self._subscription is not None:
            return

        subscription = EventSubscription()
        try:
            subscription.connect(
                Signal.DOWNLOAD_STARTED, self._on_download_started, self._event_sender
            )
            subscription.connect(
                Signal.DOWNLOAD_PROGRESS,
                self._on_download_progress,
                self._event_sender,
            )
            subscription.connect(
                Signal.DOWNLOAD_FINISHED,
                self._on_download_finished,
                self._event_sender,
            )
        except Exception:
            subscription.close()
            raise

        self._subscription = subscription
        logger.debug("Sync orchestrator activated")

    def close(self) -> None:
        """Disconnect all downloader listeners."""
        if self._subscription is None:
            return

        subscription = self._subscription
        self._subscription = None
        subscription.close()
        logger.debug("Sync orchestrator closed")

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def stage(self) -> SyncStage:
        """Current state."""
        return self._stage

    @property
    def active(self) -> bool:
        """True between the downloader's started and finished signals."""
        return self._active

    @property
    def percentage(self) -> float:
        """Last reported download percentage."""
        return self._percentage

    @property
    def candidates(self) -> Tuple[ClassifiedFolder, ...]:
        """Remote folders that a sync would download."""
        return self._candidates

    @property
    def status(self) -> SyncStatus:
        """Frozen snapshot of the observable state."""
        return SyncStatus(
            stage=self._stage,
            active=self._active,
            percentage=self._percentage,
            candidate_count=len(self._candidates),
        )

    def update_candidates(self, candidates: Iterable[ClassifiedFolder]) -> None:
        """Replace the candidate set with a fresh reconciliation result.

        Args:
            candidates: Remote folders classified Similar or Missing
        """
        self._candidates = tuple(candidates)
        logger.debug("Sync candidates updated: %d folders", len(self._candidates))

    # ------------------------------------------------------------------
    # Operator actions
    # ------------------------------------------------------------------

    def trigger_review(self) -> bool:
        """Show the candidate list.

        Returns:
            True if the orchestrator moved to REVIEWING
        """
        if self._stage is not SyncStage.IDLE:
            logger.debug("Review ignored in stage %s", self._stage.value)
            return False

        self._stage = SyncStage.REVIEWING
        return True

    def collapse(self) -> bool:
        """Hide the candidate list without syncing.

        Returns:
            True if the orchestrator moved back to IDLE
        """
        if self._stage is not SyncStage.REVIEWING:
            logger.debug("Collapse ignored in stage %s", self._stage.value)
            return False

        self._stage = SyncStage.IDLE
        return True

    def trigger_sync(self) -> bool:
        """Request a download of every current candidate.

        The first press from IDLE only opens the review. While a sync runs the
        call is ignored, never queued.

        Returns:
            True if a download request was issued

        Raises:
            Exception: Whatever the host's request operation raised; the
                orchestrator is back in REVIEWING when this happens
        """
        if self._stage is SyncStage.IDLE:
            self.trigger_review()
            return False
        if self._stage is SyncStage.SYNCING:
            logger.debug("Sync already in progress, ignoring trigger")
            return False

        # Only the folders travel to the host, not their match status
        items = tuple(candidate.folder for candidate in self._candidates)

        # Enter SYNCING first: the host may emit signals before returning
        self._stage = SyncStage.SYNCING
        logger.info("Requesting sync of %d folders", len(items))
        try:
            self._request_sync(items)
        except Exception as e:
            logger.error("Sync request failed, returning to review: %s", e)
            self.progress_tracker.error(str(e))
            self._reset_progress()
            self._stage = SyncStage.REVIEWING
            raise

        return True

    # ------------------------------------------------------------------
    # Downloader signals
    # ------------------------------------------------------------------

    def _on_download_started(self) -> None:
        if self._stage is not SyncStage.SYNCING:
            logger.warning("Download started while %s, ignoring", self._stage.value)
            return

        self._active = True
        self.progress_tracker.start(ProgressPhase.DOWNLOADING, 100, "Download started")

    def _on_download_progress(self, percentage: float) -> None:
        if self._stage is not SyncStage.SYNCING:
            logger.warning(
                "Download progress %s while %s, ignoring",
                percentage,
                self._stage.value,
            )
            return

        # Applied as received, no monotonicity check
        self._percentage = percentage
        self.progress_tracker.update(percentage)

    def _on_download_finished(self) -> None:
        if self.progress_tracker.current_phase is ProgressPhase.DOWNLOADING:
            self.progress_tracker.complete("Download finished")

        self._reset_progress()
        self._stage = SyncStage.IDLE
        logger.info("Sync finished")

    def _reset_progress(self) -> None:
        self._active = False
        self._percentage = 0.0
        self.progress_tracker.reset()
