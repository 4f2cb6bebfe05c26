"""
Data Models Package

Contains all data models and schemas used throughout the client.
"""

from .stats import (
    AchievementTier, CachedStats, SnapshotSource, StatsSnapshot, SyncState, VisualHint
)
from .user import SyncContext

__all__ = [
    'AchievementTier', 'CachedStats', 'SnapshotSource', 'StatsSnapshot',
    'SyncState', 'VisualHint', 'SyncContext'
]
