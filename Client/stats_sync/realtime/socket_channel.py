"""
Socket Channel Adapter

Subscribes the notifier to the game server's real-time channel. The channel
is a connected ``socketio.Client`` (or anything with the same ``on`` method);
its connection lifecycle is owned elsewhere.
"""

from typing import Any, Optional

from .notifier import GameCompletedNotifier


class SocketChannelAdapter:
    """Feeds ``gameCompleted`` socket events into the notifier."""

    source = 'socket'

    def __init__(self,
                 notifier: GameCompletedNotifier,
                 channel: Optional[Any] = None,
                 event: str = 'gameCompleted',
                 namespace: str = '/'):
        self.notifier = notifier
        self.channel = channel
        self.event = event
        self.namespace = namespace
        self.subscribed = False

    def _handle(self, *args):
        payload = args[0] if args else None
        self.notifier.notify(self.source, payload)

    def subscribe(self):
        if self.subscribed or self.channel is None:
            return
        self.channel.on(self.event, self._handle, namespace=self.namespace)
        self.subscribed = True

    def unsubscribe(self):
        """Remove our handler only, leaving other listeners on the channel alone."""
        if not self.subscribed:
            return
        self.subscribed = False

        # socketio.Client keeps handlers as {namespace: {event: handler}}
        registry = getattr(self.channel, 'handlers', None)
        if isinstance(registry, dict):
            handlers = registry.get(self.namespace, {})
            if handlers.get(self.event) == self._handle:
                del handlers[self.event]
        else:
            self.channel.off(self.event, self._handle, namespace=self.namespace)

    def rebind(self, channel: Optional[Any]):
        """
        Move the subscription to another channel object (reconnect or new
        identity). The old channel no longer reaches the notifier.
        """
        was_subscribed = self.subscribed
        self.unsubscribe()
        self.channel = channel
        if was_subscribed:
            self.subscribe()
