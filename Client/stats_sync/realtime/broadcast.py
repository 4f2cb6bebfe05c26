"""
Process-local Broadcast

Same-process publish/subscribe for ``gameCompleted``, for producers that do
not go through the real-time channel.
"""

from typing import Any, Optional

from blinker import Namespace, Signal

from .notifier import GameCompletedNotifier

_signals = Namespace()

game_completed = _signals.signal('gameCompleted', doc='A game just completed in this process.')


def publish_game_completed(payload: Any = None, sender: Optional[Any] = None):
    """Announce a completed game to every in-process listener."""
    return game_completed.send(sender, payload=payload)


class BroadcastAdapter:
    """Feeds broadcast ``gameCompleted`` signals into the notifier."""

    source = 'broadcast'

    def __init__(self, notifier: GameCompletedNotifier, signal: Signal = game_completed):
        self.notifier = notifier
        self.signal = signal
        self.subscribed = False

    def _handle(self, sender, payload: Any = None, **kwargs):
        self.notifier.notify(self.source, payload)

    def subscribe(self):
        if self.subscribed:
            return
        # strong reference: the adapter, not the signal, decides when to let go
        self.signal.connect(self._handle, weak=False)
        self.subscribed = True

    def unsubscribe(self):
        if not self.subscribed:
            return
        self.signal.disconnect(self._handle)
        self.subscribed = False
