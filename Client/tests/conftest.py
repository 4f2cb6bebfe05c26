"""Shared fixtures for the stats sync tests."""

import os
import tempfile

# Keep log files out of the working tree; must run before stats_sync is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='stats-sync-logs-'))

import pytest
from unittest.mock import MagicMock

from stats_sync.models.user import SyncContext
from stats_sync.services.cache_store import LocalCacheStore
from stats_sync.services.reconciler import StatsReconciler
from stats_sync.services.stats_fetcher import RemoteStatsFetcher


class RecordingSpawn:
    """Collects reconciliation cycles instead of starting threads."""

    def __init__(self):
        self.calls = []

    def __call__(self, target, *args):
        self.calls.append((target, args))

    def run(self, index):
        target, args = self.calls[index]
        return target(*args)

    def run_all(self):
        for target, args in self.calls:
            target(*args)


class FakeChannel:
    """Real-time channel with the on/off surface of a socket client."""

    def __init__(self):
        self.listeners = {}

    def on(self, event, handler, namespace=None):
        self.listeners[event] = handler

    def off(self, event, handler, namespace=None):
        if self.listeners.get(event) == handler:
            del self.listeners[event]

    def deliver(self, event, data=None):
        handler = self.listeners.get(event)
        if handler:
            handler(data)


@pytest.fixture
def store(tmp_path):
    return LocalCacheStore(str(tmp_path / 'local_storage.json'))


@pytest.fixture
def context():
    return SyncContext(user_id='user-1', credential='token-abc')


@pytest.fixture
def fetcher():
    return MagicMock(spec=RemoteStatsFetcher)


@pytest.fixture
def reconciler(fetcher, store):
    return StatsReconciler(fetcher, store)


@pytest.fixture
def spawn():
    return RecordingSpawn()


@pytest.fixture
def channel_factory():
    return FakeChannel


@pytest.fixture
def channel(channel_factory):
    return channel_factory()
