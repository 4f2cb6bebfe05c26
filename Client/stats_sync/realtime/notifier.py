"""
Game Completed Notifier

Single internal "a game just completed" signal. Every event source is an
adapter that feeds this port.
"""

from typing import Any, Callable

from ..utils.sync_logger import sync_logger


class GameCompletedNotifier:
    """Forwards game-completed notifications from any adapter to one handler."""

    def __init__(self, handler: Callable[[str], Any]):
        self.handler = handler

    def notify(self, source: str, payload: Any = None):
        """
        Report a completed game.

        Args:
            source: Adapter name ('socket', 'broadcast')
            payload: Opaque event payload; only its arrival matters
        """
        sync_logger.logger.debug(f"Game completed event via {source}: {payload!r}")
        return self.handler(source)
