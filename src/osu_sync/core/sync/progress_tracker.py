"""Progress tracking for song downloads.

The orchestrator feeds the downloader's percentage signals into a
ProgressTracker, which hands throttled ProgressUpdates to a display callback.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ProgressPhase(str, Enum):
    """Phases reported to progress callbacks."""

    DOWNLOADING = "downloading"
    ERROR = "error"


@dataclass
class ProgressUpdate:
    """Progress update information."""

    phase: ProgressPhase
    current: float
    total: float
    message: str = ""

    @property
    def percentage(self) -> float:
        """Calculate progress percentage."""
        if self.total == 0:
            return 0.0
        return (self.current / self.total) * 100.0

    @property
    def is_complete(self) -> bool:
        """Check if phase is complete."""
        return self.current >= self.total

    def __str__(self) -> str:
        parts = [
            f"[{self.phase.value}]",
            f"{self.current:g}/{self.total:g}",
            f"({self.percentage:.1f}%)",
        ]
        if self.message:
            parts.append(f"- {self.message}")
        return " ".join(parts)


# Type alias for progress callback function
ProgressCallback = Callable[[ProgressUpdate], None]


class ProgressTracker:
    """Tracks the progress of one download at a time."""

    def __init__(
        self,
        callback: Optional[ProgressCallback] = None,
        update_interval: float = 0.5,
    ):
        """Initialize progress tracker.

        Args:
            callback: Function to call with progress updates
            update_interval: Minimum time between updates (seconds)
        """
        self.callback = callback
        self.update_interval = update_interval
        self._last_update_time = 0.0
        self._current_phase: Optional[ProgressPhase] = None
        self._current: float = 0
        self._total: float = 0

    @property
    def current_phase(self) -> Optional[ProgressPhase]:
        """Phase being tracked, if any."""
        return self._current_phase

    def start(self, phase: ProgressPhase, total: float, message: str = "") -> None:
        """Start tracking a new phase.

        Args:
            phase: Phase being started
            total: Total units of work
            message: Optional descriptive message
        """
        self._current_phase = phase
        self._current = 0
        self._total = total
        self._notify(message)

    def update(self, current: float, message: str = "") -> None:
        """Record progress; callbacks are throttled to update_interval.

        Args:
            current: Units of work done so far
            message: Optional progress message
        """
        self._current = current

        if time.time() - self._last_update_time < self.update_interval:
            return

        self._notify(message)

    def complete(self, message: str = "") -> None:
        """Mark current phase as complete. Always reported."""
        self._current = self._total
        self._notify(message)

    def error(self, message: str) -> None:
        """Report that the current phase failed. Always reported.

        Args:
            message: Error message
        """
        if self._current_phase:
            self._notify(message, phase=ProgressPhase.ERROR)

    def reset(self) -> None:
        """Forget the current phase so the next start begins from scratch."""
        self._current_phase = None
        self._current = 0
        self._total = 0
        self._last_update_time = 0.0

    def _notify(self, message: str = "", phase: Optional[ProgressPhase] = None) -> None:
        if not self.callback:
            return

        self._last_update_time = time.time()
        update = ProgressUpdate(
            phase=phase or self._current_phase or ProgressPhase.DOWNLOADING,
            current=self._current,
            total=self._total,
            message=message,
        )

        try:
            self.callback(update)
        except Exception as e:
            # Callback errors are logged, never raised
            logger.error("Error in progress callback: %s", e)
