"""
Bingo Stats Sync Client Package

Keeps a locally cached view of a player's Bingo statistics in step with the
game server, refreshing on real-time game completions and on a poll, and
falling back to the local cache when the server cannot be reached.
"""

from typing import Any, Callable, Optional

import requests

from .config import Config


def create_sync_service(config_class=Config,
                        on_snapshot: Optional[Callable] = None,
                        channel: Optional[Any] = None,
                        session: Optional[requests.Session] = None,
                        user_id: Optional[str] = None):
    """
    Factory for wiring a sync service from configuration.

    Args:
        config_class: Configuration class to use
        on_snapshot: Presentation callback receiving each snapshot
        channel: Connected ``socketio.Client``, if real-time events are wanted
        session: requests session for the stats API
        user_id: User identity; read from the credential's claims if omitted

    Returns:
        StatsSyncService, not yet started
    """
    from .models.user import SyncContext
    from .services.cache_store import LocalCacheStore
    from .services.reconciler import StatsReconciler
    from .services.stats_fetcher import RemoteStatsFetcher
    from .services.sync_service import initialize_sync_service

    cache_store = LocalCacheStore(config_class.CACHE_FILE, config_class.CREDENTIAL_KEY)
    fetcher = RemoteStatsFetcher(
        config_class.API_BASE_URL,
        endpoint=config_class.STATS_ENDPOINT,
        timeout=config_class.REQUEST_TIMEOUT_SECONDS,
        session=session
    )
    reconciler = StatsReconciler(fetcher, cache_store)
    identity = user_id or config_class.USER_ID

    # credential is re-read every cycle so a refreshed token is picked up
    def context_provider():
        return SyncContext.from_token(cache_store.get_credential(), identity)

    return initialize_sync_service(
        reconciler,
        context_provider,
        on_snapshot=on_snapshot,
        channel=channel,
        poll_interval=config_class.POLL_INTERVAL_SECONDS,
        discard_stale=config_class.DISCARD_STALE_RESULTS,
        event_name=config_class.GAME_COMPLETED_EVENT
    )
