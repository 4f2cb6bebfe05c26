"""
Services Package

Contains the cache store, remote fetcher, reconciler and sync lifecycle.
"""

from .errors import StatsSyncError, RemoteUnavailable, RemoteRejected, MalformedCachePayload
from .cache_store import LocalCacheStore, stats_key
from .stats_fetcher import RemoteStatsFetcher
from .achievements import tier_of, TIERS
from .reconciler import StatsReconciler, compute_win_rate
from .poll_scheduler import PollScheduler
from .sync_service import StatsSyncService, get_sync_service, initialize_sync_service

__all__ = [
    'StatsSyncError', 'RemoteUnavailable', 'RemoteRejected', 'MalformedCachePayload',
    'LocalCacheStore', 'stats_key',
    'RemoteStatsFetcher',
    'tier_of', 'TIERS',
    'StatsReconciler', 'compute_win_rate',
    'PollScheduler',
    'StatsSyncService', 'get_sync_service', 'initialize_sync_service'
]
