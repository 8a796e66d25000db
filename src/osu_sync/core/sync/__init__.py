"""Synchronization module.

Handles reconciliation of inventories, the sync state machine, and the event
bus shared with the downloader.
"""

from .coordinator import SyncCoordinator
from .events import EventSubscription, ListenerInfo, Signal
from .orchestrator import SyncOrchestrator, SyncStage, SyncStatus
from .progress_tracker import (
    ProgressCallback,
    ProgressPhase,
    ProgressTracker,
    ProgressUpdate,
)
from .reconciler import reconcile, sync_candidates

__all__ = [
    # Reconciliation
    "reconcile",
    "sync_candidates",
    # Orchestration
    "SyncCoordinator",
    "SyncOrchestrator",
    "SyncStage",
    "SyncStatus",
    # Events
    "EventSubscription",
    "ListenerInfo",
    "Signal",
    # Progress
    "ProgressCallback",
    "ProgressPhase",
    "ProgressTracker",
    "ProgressUpdate",
]
