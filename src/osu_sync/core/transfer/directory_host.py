"""Host platform backed by two directories.

The local side is the osu! songs directory on this machine. The remote side
is either another songs directory, which can also be downloaded from, or an
inventory file exported by the peer, which can only be compared against.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from ...config import Config
from ...models import SongFolder
from ..errors import ScanError, TransferError
from ..filesystem.scanner import CHART_EXTENSION, SongFolderScanner
from ..remote.inventory_file import load_inventory
from .directory_downloader import DirectoryDownloader

logger = logging.getLogger(__name__)


class DirectoryHost:
    """SyncHost implementation over local paths."""

    def __init__(
        self,
        songs_directory: Path,
        remote_source: Path,
        max_workers: int = 4,
        chunk_size: int = 64 * 1024,
        dry_run: bool = False,
        chart_extension: str = CHART_EXTENSION,
    ):
        """Initialize directory host.

        Args:
            songs_directory: Local osu! songs directory
            remote_source: Remote songs directory or inventory JSON file
            max_workers: Scanner threads
            chunk_size: Copy buffer size in bytes
            dry_run: If True, downloads only log what they would copy
            chart_extension: Extension of the files included in checksums
        """
        self.songs_directory = Path(songs_directory)
        self.remote_source = Path(remote_source)
        self.local_scanner = SongFolderScanner(
            self.songs_directory,
            max_workers=max_workers,
            chart_extension=chart_extension,
        )
        self.remote_scanner: Optional[SongFolderScanner] = None
        self.downloader: Optional[DirectoryDownloader] = None

        if self.remote_source.is_dir():
            self.remote_scanner = SongFolderScanner(
                self.remote_source,
                max_workers=max_workers,
                chart_extension=chart_extension,
            )
            self.downloader = DirectoryDownloader(
                remote_root=self.remote_source,
                local_root=self.songs_directory,
                chunk_size=chunk_size,
                dry_run=dry_run,
            )

    @classmethod
    def from_config(
        cls,
        config: Config,
        remote_source: Path,
        songs_directory: Optional[Path] = None,
        dry_run: bool = False,
    ) -> "DirectoryHost":
        """Build a host from application configuration."""
        return cls(
            songs_directory=songs_directory or config.songs_directory,
            remote_source=remote_source,
            max_workers=config.scan_workers,
            chunk_size=config.chunk_size,
            dry_run=dry_run,
            chart_extension=config.chart_extension,
        )

    @property
    def can_download(self) -> bool:
        """Whether the remote side is a directory folders can be copied from."""
        return self.downloader is not None

    def scan_local_inventory(self) -> List[SongFolder]:
        """Scan the local songs directory."""
        return self.local_scanner.scan()

    def fetch_remote_inventory(self) -> List[SongFolder]:
        """Scan the remote directory or load the remote inventory file."""
        if self.remote_scanner is not None:
            return self.remote_scanner.scan()
        if self.remote_source.is_file():
            return load_inventory(self.remote_source)
        raise ScanError(f"Remote source does not exist: {self.remote_source}")

    def request_sync(self, items: Sequence[SongFolder]) -> None:
        """Copy items from the remote directory."""
        if self.downloader is None:
            raise TransferError(
                f"Cannot download from {self.remote_source}: not a songs directory"
            )
        self.downloader.request_sync(items)
