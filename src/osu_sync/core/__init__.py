"""Core logic of the osu! song synchronizer.

This package is organized by workflow step:
- filesystem: scanning the local songs directory
- remote: reading and writing inventory files
- sync: reconciliation and sync orchestration
- transfer: copying song folders from a remote directory
"""

from .errors import (
    HostOperationError,
    InventoryFormatError,
    OsuSyncError,
    ScanError,
    TransferError,
)
from .host import SyncHost

__all__ = [
    "SyncHost",
    "OsuSyncError",
    "HostOperationError",
    "ScanError",
    "InventoryFormatError",
    "TransferError",
]
