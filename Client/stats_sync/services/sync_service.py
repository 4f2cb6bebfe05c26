"""
Stats Sync Service

Owns the sync lifecycle: subscribes to game-completed events, runs the poll
scheduler, launches reconciliation cycles and hands snapshots to the
presentation callback.
"""

import itertools
import threading
from typing import Any, Callable, Optional

from blinker import Signal

from ..models.stats import StatsSnapshot, SyncState
from ..models.user import SyncContext
from ..realtime.broadcast import BroadcastAdapter, game_completed
from ..realtime.notifier import GameCompletedNotifier
from ..realtime.socket_channel import SocketChannelAdapter
from ..utils.decorators import require_running
from ..utils.sync_logger import sync_logger
from .poll_scheduler import PollScheduler
from .reconciler import StatsReconciler


def spawn_thread(target: Callable, *args):
    """Run ``target`` on its own daemon thread."""
    thread = threading.Thread(target=target, args=args, name='stats-reconcile', daemon=True)
    thread.start()
    return thread


class StatsSyncService:
    """
    Keeps a user's statistics snapshot current.

    This class handles:
    - Subscribing to socket and broadcast ``gameCompleted`` events
    - Polling every ``poll_interval`` seconds
    - One independent reconciliation per trigger, never queued or merged
    - Dropping results that finish after a newer one, or after ``stop``
    """

    def __init__(self,
                 reconciler: StatsReconciler,
                 context_provider: Callable[[], SyncContext],
                 on_snapshot: Optional[Callable[[StatsSnapshot], Any]] = None,
                 channel: Optional[Any] = None,
                 poll_interval: float = 30,
                 discard_stale: bool = True,
                 event_name: str = 'gameCompleted',
                 broadcast_signal: Signal = game_completed,
                 spawn: Callable = spawn_thread):
        """
        Initialize the sync service.

        Args:
            reconciler: Produces snapshots
            context_provider: Returns the current identity and credential; called once per cycle
            on_snapshot: Presentation callback receiving each delivered snapshot
            channel: Connected real-time channel (``socketio.Client``), optional
            poll_interval: Seconds between safety-net polls
            discard_stale: Drop completions older than the last delivered one
            event_name: Real-time channel event name
            broadcast_signal: In-process signal to listen on
            spawn: Runs ``target(*args)`` for each cycle; defaults to a daemon thread
        """
        self.reconciler = reconciler
        self.context_provider = context_provider
        self.on_snapshot = on_snapshot
        self.discard_stale = discard_stale
        self.spawn = spawn

        self.notifier = GameCompletedNotifier(self.refresh)
        self.socket_adapter = SocketChannelAdapter(self.notifier, channel, event=event_name)
        self.broadcast_adapter = BroadcastAdapter(self.notifier, broadcast_signal)
        self.scheduler = PollScheduler(poll_interval, lambda: self.refresh('poll'))

        self.running = False
        self._lock = threading.RLock()
        self._delivery_lock = threading.RLock()
        self._sequence = itertools.count(1)
        self._in_flight = 0
        self._last_delivered = 0
        self._latest: Optional[StatsSnapshot] = None

    @property
    def state(self) -> SyncState:
        with self._lock:
            if not self.running:
                return SyncState.STOPPED
            return SyncState.RECONCILING if self._in_flight else SyncState.IDLE

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._in_flight

    @property
    def latest_snapshot(self) -> Optional[StatsSnapshot]:
        with self._lock:
            return self._latest

    def start(self):
        """Subscribe to events, start polling and run the first reconciliation."""
        with self._lock:
            if self.running:
                return
            self.running = True

        self.socket_adapter.subscribe()
        self.broadcast_adapter.subscribe()
        self.scheduler.start()
        sync_logger.logger.info("Stats sync started")
        self.refresh('start')

    def stop(self):
        """
        Unsubscribe and cancel polling. Cycles already running finish, but
        their snapshots are not delivered.
        """
        with self._lock:
            if not self.running:
                return
            self.running = False

        self.socket_adapter.unsubscribe()
        self.broadcast_adapter.unsubscribe()
        self.scheduler.stop()
        sync_logger.logger.info("Stats sync stopped")

    def close(self):
        """Stop syncing and release the HTTP session."""
        self.stop()
        self.reconciler.close()

    def rebind_channel(self, channel: Optional[Any]):
        """Switch to a new real-time channel without leaking the old handler."""
        self.socket_adapter.rebind(channel)

    @require_running
    def refresh(self, source: str = 'manual') -> int:
        """
        Launch one reconciliation cycle.

        Args:
            source: What triggered the cycle, for logging

        Returns:
            int: Sequence number of the launched cycle (None while stopped)
        """
        with self._lock:
            cycle = next(self._sequence)
            self._in_flight += 1

        sync_logger.log_trigger(source, cycle)
        try:
            self.spawn(self._run_cycle, cycle, source)
        except Exception:
            with self._lock:
                self._in_flight -= 1
            raise
        return cycle

    def _run_cycle(self, cycle: int, source: str):
        context = None
        try:
            context = self.context_provider()
            snapshot = self.reconciler.reconcile(context)
            self._deliver(cycle, snapshot, context)
        except Exception as e:
            sync_logger.log_error(context.user_id if context else None, e, 'reconcile_cycle',
                                  cycle=cycle, source=source)
        finally:
            with self._lock:
                self._in_flight -= 1

    def _deliver(self, cycle: int, snapshot: StatsSnapshot, context: SyncContext) -> bool:
        # _delivery_lock serializes presenter calls; _lock is only held for the bookkeeping
        with self._delivery_lock:
            with self._lock:
                if not self.running:
                    sync_logger.log_sync_event(context.user_id, 'discarded_after_stop', cycle=cycle)
                    return False

                if self.discard_stale and cycle < self._last_delivered:
                    sync_logger.log_sync_event(context.user_id, 'stale_discarded',
                                               cycle=cycle, newer_cycle=self._last_delivered)
                    return False

                self._last_delivered = max(self._last_delivered, cycle)
                self._latest = snapshot

            sync_logger.log_sync_event(context.user_id, 'snapshot_delivered',
                                       cycle=cycle, source=snapshot.source.value)
            if self.on_snapshot:
                self.on_snapshot(snapshot)
            return True


# Global service instance
_sync_service = None


def get_sync_service() -> Optional[StatsSyncService]:
    """Get the global sync service instance."""
    return _sync_service


def initialize_sync_service(*args, **kwargs) -> StatsSyncService:
    """Initialize the global sync service instance."""
    global _sync_service
    _sync_service = StatsSyncService(*args, **kwargs)
    return _sync_service
