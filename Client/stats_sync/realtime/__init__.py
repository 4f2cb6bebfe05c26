"""
Real-time Package

Adapters that turn "game completed" events into reconciliation requests.
"""

from .notifier import GameCompletedNotifier
from .socket_channel import SocketChannelAdapter
from .broadcast import BroadcastAdapter, game_completed, publish_game_completed

__all__ = [
    'GameCompletedNotifier', 'SocketChannelAdapter', 'BroadcastAdapter',
    'game_completed', 'publish_game_completed'
]
