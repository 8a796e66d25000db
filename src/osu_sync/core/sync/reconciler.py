"""Reconciliation of local and remote song inventories.

Compares the two inventories and tags every folder on both sides with a
MatchStatus:

- Direct: the other side has the same (id, name) with the same checksum
- Similar: the other side has the same (id, name) but a different checksum
- Missing: the other side has no folder with that (id, name)
- None: one side is empty, so nothing could be compared

Matching is a linear scan of the remote side for every local folder.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ...models import ClassifiedFolder, MatchStatus, ReconciliationResult, SongFolder

logger = logging.getLogger(__name__)


def reconcile(
    local: Iterable[SongFolder], remote: Iterable[SongFolder]
) -> ReconciliationResult:
    """Classify both inventories against each other.

    Args:
        local: Folders found on this machine
        remote: Folders advertised by the peer

    Returns:
        ReconciliationResult with one classified tuple per side, each in the
        order of its input
    """
    local_items = tuple(local)
    remote_items = tuple(remote)

    default_status = (
        MatchStatus.NONE if not local_items or not remote_items else MatchStatus.MISSING
    )
    local_status: List[MatchStatus] = [default_status] * len(local_items)
    remote_status: List[MatchStatus] = [default_status] * len(remote_items)

    for local_index, song in enumerate(local_items):
        remote_index = _find_counterpart(song, remote_items)
        if remote_index is None:
            continue

        counterpart = remote_items[remote_index]
        status = (
            MatchStatus.DIRECT
            if song.checksum == counterpart.checksum
            else MatchStatus.SIMILAR
        )
        local_status[local_index] = status
        remote_status[remote_index] = status

    result = ReconciliationResult(
        local=_classify(local_items, local_status),
        remote=_classify(remote_items, remote_status),
    )
    logger.debug(
        "Reconciled %d local / %d remote folders: %d to sync",
        len(local_items),
        len(remote_items),
        len(result.sync_candidates),
    )
    return result


def sync_candidates(
    remote_classified: Iterable[ClassifiedFolder],
) -> Tuple[ClassifiedFolder, ...]:
    """Select remote folders that are Similar or Missing.

    Args:
        remote_classified: Remote side of a reconciliation

    Returns:
        Candidates in remote order
    """
    return tuple(item for item in remote_classified if item.status.needs_sync)


def _find_counterpart(
    song: SongFolder, candidates: Sequence[SongFolder]
) -> Optional[int]:
    """Index of the first folder in candidates sharing song's identity."""
    for index, candidate in enumerate(candidates):
        if song.matches(candidate):
            return index
    return None


def _classify(
    folders: Sequence[SongFolder], statuses: Sequence[MatchStatus]
) -> Tuple[ClassifiedFolder, ...]:
    return tuple(
        ClassifiedFolder(folder=folder, status=status)
        for folder, status in zip(folders, statuses)
    )
