"""Event bus between the synchronizer core and its host collaborators.

The host downloader announces transfer progress through PyDispatcher signals
and the core subscribes to them. Subscriptions are tracked in an
EventSubscription so that whoever owns them can release every listener at
once, on every exit path.
"""

import logging
from enum import IntEnum
from typing import Any, Callable, List, Optional

from pydispatch import dispatcher
from pydispatch.errors import DispatcherKeyError

logger = logging.getLogger(__name__)

ID_DOWNLOADER = "downloader"
ID_REMOTE_PEER = "remote-peer"


class Signal(IntEnum):
    """Signals exchanged with the host platform."""

    DOWNLOAD_STARTED = 1
    DOWNLOAD_PROGRESS = 2
    """Carries ``percentage`` (0-100)"""
    DOWNLOAD_FINISHED = 3
    REMOTE_INVENTORY_UPDATED = 10
    """The peer pushed a new inventory; the remote side should be refetched"""


class ListenerInfo:
    """One receiver connected to one signal."""

    def __init__(self, signal: Signal, receiver: Callable, sender: Any = None):
        self.signal: Signal = signal
        self.receiver: Callable = receiver
        self.sender: Any = sender if sender is not None else dispatcher.Any

    def __repr__(self) -> str:
        return f"ListenerInfo(signal={self.signal.name}, sender={self.sender})"


class EventSubscription:
    """Scoped handle over a group of signal listeners.

    Listeners are held strongly so they live exactly as long as the
    subscription; ``close()`` (or leaving the ``with`` block) disconnects them
    all.
    """

    def __init__(self) -> None:
        self._listeners: List[ListenerInfo] = []

    def __enter__(self) -> "EventSubscription":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._listeners)

    @property
    def is_active(self) -> bool:
        """Whether any listener is still connected."""
        return bool(self._listeners)

    def connect(
        self, signal: Signal, receiver: Callable, sender: Optional[Any] = None
    ) -> ListenerInfo:
        """Connect receiver to signal and remember it for teardown.

        Args:
            signal: Signal to listen for
            receiver: Callable invoked with the signal's named arguments
            sender: Only accept signals from this sender (default: any)

        Returns:
            The ListenerInfo that was registered
        """
        listener_info = ListenerInfo(signal, receiver, sender)
        logger.debug(
            "CONNECTING: signal=%s sender=%s", signal.name, listener_info.sender
        )
        dispatcher.connect(
            receiver, signal=signal, sender=listener_info.sender, weak=False
        )
        self._listeners.append(listener_info)
        return listener_info

    def close(self) -> None:
        """Disconnect every listener. Safe to call more than once."""
        listeners = self._listeners
        self._listeners = []

        for listener_info in listeners:
            _disconnect(listener_info)


def _disconnect(listener_info: ListenerInfo) -> None:
    logger.debug(
        "DISCONNECTING: signal=%s sender=%s",
        listener_info.signal.name,
        listener_info.sender,
    )
    try:
        dispatcher.disconnect(
            listener_info.receiver,
            signal=listener_info.signal,
            sender=listener_info.sender,
            weak=False,
        )
    except DispatcherKeyError:
        # Already gone, e.g. the receiver was disconnected elsewhere
        logger.debug("Listener was not connected: %s", listener_info)


def emit_download_started(sender: Any = ID_DOWNLOADER) -> None:
    """Announce that the downloader began writing files."""
    dispatcher.send(signal=Signal.DOWNLOAD_STARTED, sender=sender)


def emit_download_progress(percentage: float, sender: Any = ID_DOWNLOADER) -> None:
    """Announce download progress as a percentage (0-100)."""
    dispatcher.send(
        signal=Signal.DOWNLOAD_PROGRESS, sender=sender, percentage=percentage
    )


def emit_download_finished(sender: Any = ID_DOWNLOADER) -> None:
    """Announce that the download completed."""
    dispatcher.send(signal=Signal.DOWNLOAD_FINISHED, sender=sender)


def emit_remote_inventory_updated(sender: Any = ID_REMOTE_PEER) -> None:
    """Announce that a new remote inventory is available."""
    dispatcher.send(signal=Signal.REMOTE_INVENTORY_UPDATED, sender=sender)
