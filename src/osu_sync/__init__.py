"""osu! Song Synchronizer.

Compares the osu! songs directory of this machine with a remote inventory,
classifies every song folder, and downloads the ones that are missing or
differ locally.
"""

__version__ = "1.0.0"

from .config import Config
from .core.sync import SyncCoordinator, SyncOrchestrator, reconcile
from .models import ClassifiedFolder, MatchStatus, ReconciliationResult, SongFolder

__all__ = [
    "Config",
    "SongFolder",
    "MatchStatus",
    "ClassifiedFolder",
    "ReconciliationResult",
    "SyncCoordinator",
    "SyncOrchestrator",
    "reconcile",
]
