"""Transfer module.

Copies song folders from a remote songs directory and provides the
directory-backed host platform.
"""

from .directory_downloader import DirectoryDownloader, TransferResult
from .directory_host import DirectoryHost

__all__ = [
    "DirectoryDownloader",
    "DirectoryHost",
    "TransferResult",
]
