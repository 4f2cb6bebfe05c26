"""
Stats Reconciler

Merges the remote response, the local cache and default values into one
canonical StatsSnapshot.
"""

from typing import Any, Dict, Optional

from ..config.achievement_settings import DEFAULT_TIER
from ..models.stats import COUNTER_FIELDS, CachedStats, SnapshotSource, StatsSnapshot
from ..models.user import SyncContext
from ..utils.helpers import to_amount, to_count, to_percentage
from ..utils.sync_logger import sync_logger
from .cache_store import LocalCacheStore
from .errors import MalformedCachePayload, RemoteRejected, RemoteUnavailable
from .stats_fetcher import RemoteStatsFetcher


def compute_win_rate(games_won: int, games_played: int) -> float:
    """Win percentage with one decimal; 0.0 when no games were played."""
    if games_played <= 0:
        return 0.0
    return to_percentage(games_won / games_played * 100)


class StatsReconciler:
    """
    Produces a StatsSnapshot for a user. ``reconcile`` never raises.

    The remote API is authoritative whenever it answers with a body. Any
    failure, or an empty body, falls back to the user's cached counters and
    finally to zeros. Only the remote path can report a tier above
    the default one.
    """

    def __init__(self, fetcher: RemoteStatsFetcher, cache_store: LocalCacheStore):
        self.fetcher = fetcher
        self.cache_store = cache_store

    def close(self):
        """Release the fetcher's HTTP session."""
        self.fetcher.close()

    def reconcile(self, context: SyncContext) -> StatsSnapshot:
        """
        Build a fresh snapshot for ``context.user_id``.

        Args:
            context: User identity and bearer credential

        Returns:
            StatsSnapshot, always structurally valid
        """
        try:
            body = self.fetcher.fetch(context.credential)
        except RemoteUnavailable as e:
            return self._fallback(context, 'remote_unavailable', e)
        except RemoteRejected as e:
            return self._fallback(context, 'remote_rejected', e, status_code=e.status_code)
        except Exception as e:
            sync_logger.log_error(context.user_id, e, 'fetch_remote_stats')
            return self._fallback(context, 'remote_error', e)

        if body is None:
            return self._fallback(context, 'empty_body')

        snapshot = self.from_remote(body)
        sync_logger.log_sync_event(
            context.user_id, 'remote_applied',
            fields_present=sorted(k for k in body if body.get(k)),
            games_won=snapshot.games_won
        )
        return snapshot

    @staticmethod
    def from_remote(body: Dict[str, Any]) -> StatsSnapshot:
        """
        Read a remote body. Each missing or falsy field defaults on its own,
        so a partial body is still used.
        """
        counters = {attr: to_count(body.get(wire)) for wire, attr in COUNTER_FIELDS.items()}
        level = body.get('achievementLevel')

        return StatsSnapshot(
            average_lines_per_game=to_amount(body.get('averageLinesPerGame')),
            win_rate=to_percentage(body.get('winRate')),
            achievement_level=level if level and isinstance(level, str) else DEFAULT_TIER,
            source=SnapshotSource.REMOTE,
            **counters
        )

    @staticmethod
    def from_cached(cached: Optional[CachedStats]) -> StatsSnapshot:
        """Derive a snapshot from cached counters, or zeros when there are none."""
        if cached is None:
            return StatsSnapshot(source=SnapshotSource.DEFAULT)

        return StatsSnapshot(
            games_played=cached.games_played,
            games_won=cached.games_won,
            games_lost=cached.games_lost,
            games_drawn=cached.games_drawn,
            total_lines_completed=cached.total_lines_completed,
            average_lines_per_game=cached.average_lines_per_game,
            win_rate=compute_win_rate(cached.games_won, cached.games_played),
            achievement_level=DEFAULT_TIER,
            source=SnapshotSource.CACHE
        )

    def _fallback(self, context: SyncContext, reason: str, error: Optional[Exception] = None, **kwargs) -> StatsSnapshot:
        sync_logger.log_fallback(context.user_id, reason, error, **kwargs)

        cached = None
        try:
            if context.user_id:
                cached = self.cache_store.load_cached_stats(context.user_id)
            else:
                sync_logger.logger.warning("No user identity known; skipping the local cache lookup")
        except MalformedCachePayload as e:
            sync_logger.log_error(context.user_id, e, 'load_cached_stats')
        except OSError as e:
            sync_logger.log_error(context.user_id, e, 'load_cached_stats', cache_file=str(self.cache_store.path))

        snapshot = self.from_cached(cached)
        sync_logger.log_sync_event(context.user_id, 'fallback_applied', source=snapshot.source.value)
        return snapshot
