"""Downloader that copies song folders from a remote songs directory.

Used when the peer's songs directory is reachable as a path (network share,
second drive, another osu! install). Progress is reported on the event bus
exactly like a network transfer would: started, integer percentages of bytes
copied, finished.
"""

import logging
import os
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence, Tuple

from ...models import SongFolder
from ..errors import TransferError
from ..sync.events import (
    ID_DOWNLOADER,
    emit_download_finished,
    emit_download_progress,
    emit_download_started,
)

logger = logging.getLogger(__name__)


@dataclass
class TransferResult:
    """Result of copying a batch of song folders."""

    folders_copied: int = 0
    files_copied: int = 0
    bytes_copied: int = 0
    dry_run: bool = False
    destinations: List[Path] = dataclass_field(default_factory=list)

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        return {
            "folders_copied": self.folders_copied,
            "files_copied": self.files_copied,
            "bytes_copied": self.bytes_copied,
            "dry_run": self.dry_run,
        }


class DirectoryDownloader:
    """Copies requested song folders from remote_root into local_root."""

    def __init__(
        self,
        remote_root: Path,
        local_root: Path,
        chunk_size: int = 64 * 1024,
        dry_run: bool = False,
        event_sender: Any = ID_DOWNLOADER,
    ):
        """Initialize directory downloader.

        Args:
            remote_root: Songs directory of the peer
            local_root: Local songs directory receiving the folders
            chunk_size: Copy buffer size in bytes
            dry_run: If True, log what would be copied without writing
            event_sender: Sender used for download signals
        """
        self.remote_root = Path(remote_root)
        self.local_root = Path(local_root)
        self.chunk_size = chunk_size
        self.dry_run = dry_run
        self.event_sender = event_sender
        self.last_result = TransferResult(dry_run=dry_run)

    def request_sync(self, items: Sequence[SongFolder]) -> None:
        """Host entry point: download items, reporting on the event bus."""
        self.download(items)

    def download(self, items: Sequence[SongFolder]) -> TransferResult:
        """Copy every requested folder.

        Signals are emitted only once all folders were resolved, so a request
        naming unknown folders fails without touching any listener.

        Args:
            items: Folders to fetch from the remote side

        Returns:
            TransferResult with copy statistics

        Raises:
            TransferError: If a folder is unknown remotely or copying fails
        """
        sources = self._resolve_sources(items)
        plan = self._plan_copies(sources)
        total_bytes = sum(size for _, _, size in plan)

        result = TransferResult(dry_run=self.dry_run)
        result.destinations = [self.local_root / source.name for source in sources]

        logger.info(
            "Downloading %d folders (%d files, %d bytes)%s",
            len(sources),
            len(plan),
            total_bytes,
            " [DRY RUN]" if self.dry_run else "",
        )
        emit_download_started(sender=self.event_sender)

        progress = 0

        def on_chunk(size: int) -> None:
            nonlocal progress
            result.bytes_copied += size
            progress = self._report_progress(progress, result.bytes_copied, total_bytes)

        for source_file, target_file, size in plan:
            if self.dry_run:
                logger.info("[DRY RUN] Would copy %s -> %s", source_file, target_file)
                result.bytes_copied += size
            else:
                self._copy_file(source_file, target_file, on_chunk)
            result.files_copied += 1
            progress = self._report_progress(progress, result.bytes_copied, total_bytes)

        if progress < 100:
            emit_download_progress(100, sender=self.event_sender)

        result.folders_copied = len(sources)
        self.last_result = result
        emit_download_finished(sender=self.event_sender)
        logger.info("Download complete: %s", result.get_summary())
        return result

    def _resolve_sources(self, items: Sequence[SongFolder]) -> List[Path]:
        sources = []
        unknown = []
        for item in items:
            if item.path is not None and item.path.is_dir():
                sources.append(item.path)
                continue

            candidate = self.remote_root / item.folder_name
            if candidate.is_dir():
                sources.append(candidate)
            else:
                unknown.append(item.folder_name)

        if unknown:
            raise TransferError(
                f"{len(unknown)} folders not found in {self.remote_root}: "
                + ", ".join(unknown[:5])
            )
        return sources

    def _plan_copies(self, sources: Sequence[Path]) -> List[Tuple[Path, Path, int]]:
        plan = []
        for source in sources:
            target_folder = self.local_root / source.name
            for source_file in sorted(source.rglob("*")):
                if not source_file.is_file():
                    continue
                relative = source_file.relative_to(source)
                plan.append(
                    (source_file, target_folder / relative, source_file.stat().st_size)
                )
        return plan

    def _copy_file(
        self, source_file: Path, target_file: Path, on_chunk: Callable[[int], None]
    ) -> None:
        """Copy one file in chunks, replacing the target only once complete.

        Chunks go to a ``.part`` file next to the target, which is renamed over
        the target after the last chunk. A failed copy leaves the previous
        target untouched and removes the partial file.
        """
        partial = target_file.with_name(target_file.name + ".part")
        try:
            target_file.parent.mkdir(parents=True, exist_ok=True)
            with open(source_file, "rb") as src, open(partial, "wb") as dst:
                for chunk in iter(lambda: src.read(self.chunk_size), b""):
                    dst.write(chunk)
                    on_chunk(len(chunk))
            os.replace(partial, target_file)
        except OSError as e:
            raise TransferError(f"Failed to copy {source_file}: {e}") from e
        finally:
            partial.unlink(missing_ok=True)

    def _report_progress(self, progress: int, copied: int, total: int) -> int:
        """Emit a progress signal when the integer percentage grows."""
        if total == 0:
            return progress
        new_progress = 100 * copied // total
        if new_progress > progress:
            emit_download_progress(new_progress, sender=self.event_sender)
            return new_progress
        return progress
