"""Exceptions raised by the osu! song synchronizer."""


class OsuSyncError(Exception):
    """Base exception for synchronizer failures."""


class HostOperationError(OsuSyncError):
    """A host operation (scan, fetch, transfer request) failed."""


class ScanError(OsuSyncError):
    """The songs directory or one of its folders could not be read."""


class InventoryFormatError(OsuSyncError):
    """An inventory file is not a valid list of song folders."""


class TransferError(OsuSyncError):
    """Requested folders could not be copied from the remote side."""
