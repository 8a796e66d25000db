"""Filesystem module.

Handles scanning the local osu! songs directory.
"""

from .scanner import (
    ScanStatistics,
    SongFolderScanner,
    compute_checksum,
    is_song_folder,
    parse_folder_name,
)

__all__ = [
    "SongFolderScanner",
    "ScanStatistics",
    "compute_checksum",
    "is_song_folder",
    "parse_folder_name",
]
