"""Scanner for the local osu! songs directory.

A song folder is a directory named ``"<beatmap set id> <artist> - <title>"``.
Its checksum is a SHA-256 over the bytes of its ``.osu`` chart files only;
audio and background files are not hashed.
"""

import hashlib
import logging
import re
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ...models import SongFolder
from ..errors import ScanError

logger = logging.getLogger(__name__)

SONG_FOLDER_PATTERN = re.compile(r"^([0-9]*) (.+ - .+)$")
CHART_EXTENSION = ".osu"


@dataclass
class ScanStatistics:
    """Statistics from a songs directory scan."""

    folders_found: int = 0
    folders_skipped: int = 0
    charts_hashed: int = 0
    skipped_names: List[str] = dataclass_field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary format.

        Returns:
            Dictionary with statistics and a limited list of skipped entries
        """
        return {
            "folders_found": self.folders_found,
            "folders_skipped": self.folders_skipped,
            "charts_hashed": self.charts_hashed,
            "skipped": self.skipped_names[:10],
        }


def parse_folder_name(folder_name: str) -> Optional[Tuple[int, str]]:
    """Split a song folder name into beatmap set id and display name.

    Args:
        folder_name: Directory name, e.g. ``"1234 Artist - Title"``

    Returns:
        ``(id, name)``, or None if the name is not a song folder name. A
        missing id parses as 0.
    """
    match = SONG_FOLDER_PATTERN.match(folder_name)
    if not match:
        return None
    set_id = int(match.group(1)) if match.group(1) else 0
    return set_id, match.group(2)


def is_song_folder(path: Path) -> bool:
    """Check whether path is a directory named like a song folder."""
    return path.is_dir() and parse_folder_name(path.name) is not None


def compute_checksum(
    folder: Path, extension: str = CHART_EXTENSION, chunk_size: int = 4096
) -> Tuple[str, int]:
    """Hash the chart files of a song folder.

    Files are hashed in name order so the checksum does not depend on the
    order the filesystem lists them in.

    Args:
        folder: Song folder to hash
        extension: Extension of the files that take part in the hash
        chunk_size: Read size in bytes

    Returns:
        Upper-case hex digest and the number of files hashed
    """
    sha256_hash = hashlib.sha256()
    charts = sorted(
        (p for p in folder.iterdir() if p.is_file() and p.name.endswith(extension)),
        key=lambda p: p.name,
    )
    for chart in charts:
        with open(chart, "rb") as f:
            for byte_block in iter(lambda: f.read(chunk_size), b""):
                sha256_hash.update(byte_block)
    return sha256_hash.hexdigest().upper(), len(charts)


class SongFolderScanner:
    """Builds the local inventory from an osu! songs directory."""

    def __init__(
        self,
        songs_directory: Path,
        max_workers: int = 4,
        chart_extension: str = CHART_EXTENSION,
    ) -> None:
        """Initialize songs directory scanner.

        Args:
            songs_directory: The osu! ``Songs`` directory
            max_workers: Threads used to hash folders
            chart_extension: Extension of the files included in checksums
        """
        self.songs_directory = Path(songs_directory)
        self.max_workers = max_workers
        self.chart_extension = chart_extension
        self._stats = ScanStatistics()
        self._stats_lock = threading.Lock()

    def scan(self) -> List[SongFolder]:
        """Read every song folder in the songs directory.

        Returns:
            Song folders sorted by directory name

        Raises:
            ScanError: If the directory does not exist or a folder cannot be read
        """
        if not self.songs_directory.is_dir():
            raise ScanError(f"Songs directory does not exist: {self.songs_directory}")

        self._stats = ScanStatistics()
        folder_paths = self._find_song_folders()
        logger.info(
            "Reading %d song folders from %s", len(folder_paths), self.songs_directory
        )

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            songs = list(executor.map(self.read_folder, folder_paths))

        self._stats.folders_found = len(songs)
        self._log_scan_summary()
        return songs

    def read_folder(self, path: Path) -> SongFolder:
        """Build a SongFolder from one directory.

        Args:
            path: Song folder directory

        Returns:
            SongFolder with id, name, checksum and path

        Raises:
            ScanError: If the folder name is invalid or its files are unreadable
        """
        parsed = parse_folder_name(path.name)
        if parsed is None or not path.is_dir():
            raise ScanError(f"Not a valid song folder: {path}")

        set_id, name = parsed
        try:
            checksum, chart_count = compute_checksum(path, self.chart_extension)
        except OSError as e:
            raise ScanError(f"Failed to read song folder {path}: {e}") from e

        with self._stats_lock:
            self._stats.charts_hashed += chart_count
        return SongFolder(id=set_id, name=name, checksum=checksum, path=path)

    def get_statistics(self) -> ScanStatistics:
        """Statistics of the most recent scan."""
        return self._stats

    def _find_song_folders(self) -> List[Path]:
        folder_paths = []
        for entry in sorted(self.songs_directory.iterdir(), key=lambda p: p.name):
            if is_song_folder(entry):
                folder_paths.append(entry)
            else:
                self._stats.folders_skipped += 1
                self._stats.skipped_names.append(entry.name)
                logger.debug("Skipping non-song entry: %s", entry.name)
        return folder_paths

    def _log_scan_summary(self) -> None:
        logger.info(
            "Scan complete: %d folders, %d charts hashed, %d entries skipped",
            self._stats.folders_found,
            self._stats.charts_hashed,
            self._stats.folders_skipped,
        )
