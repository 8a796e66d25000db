"""Operations the synchronizer core needs from its host platform.

The core never touches the filesystem or the network itself. A host supplies
both inventories and accepts download requests; transfer progress comes back
as signals on the event bus (see ``core.sync.events``).
"""

from typing import List, Protocol, Sequence, runtime_checkable

from ..models import SongFolder


@runtime_checkable
class SyncHost(Protocol):
    """Host collaborator used by the SyncCoordinator."""

    def scan_local_inventory(self) -> List[SongFolder]:
        """Return every song folder on this machine. May be slow."""
        ...

    def fetch_remote_inventory(self) -> List[SongFolder]:
        """Return every song folder the peer advertises."""
        ...

    def request_sync(self, items: Sequence[SongFolder]) -> None:
        """Ask the downloader to fetch items. Fire-and-forget."""
        ...
