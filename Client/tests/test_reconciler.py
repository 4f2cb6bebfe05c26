"""Tests for stats_sync.services.reconciler."""

import itertools
import logging

import pytest

from stats_sync.models.stats import CachedStats, SnapshotSource, StatsSnapshot
from stats_sync.models.user import SyncContext
from stats_sync.services.cache_store import stats_key
from stats_sync.services.errors import RemoteRejected, RemoteUnavailable
from stats_sync.services.reconciler import compute_win_rate

REMOTE_OUTCOMES = {
    'full_body': {'gamesPlayed': 12, 'gamesWon': 7, 'gamesLost': 4, 'gamesDrawn': 1,
                  'totalLinesCompleted': 40, 'averageLinesPerGame': 3.3,
                  'winRate': 58.3, 'achievementLevel': 'Bingo Player'},
    'empty_body': None,
    'unavailable': RemoteUnavailable('connection refused'),
    'rejected': RemoteRejected(401),
}

CACHE_STATES = ['present', 'absent', 'corrupt']


def _arrange(fetcher, store, outcome, cache_state):
    result = REMOTE_OUTCOMES[outcome]
    if isinstance(result, Exception):
        fetcher.fetch.side_effect = result
    else:
        fetcher.fetch.return_value = result

    if cache_state == 'present':
        store.save_cached_stats('user-1', CachedStats(games_played=20, games_won=5, games_lost=15))
    elif cache_state == 'corrupt':
        store.set_item(stats_key('user-1'), '{not json')


class TestTotalFunction:
    """reconcile returns a valid snapshot for every remote/cache combination."""

    @pytest.mark.parametrize('outcome,cache_state', list(itertools.product(REMOTE_OUTCOMES, CACHE_STATES)))
    def test_snapshot_is_structurally_valid(self, reconciler, fetcher, store, context, outcome, cache_state):
        _arrange(fetcher, store, outcome, cache_state)

        snapshot = reconciler.reconcile(context)

        assert isinstance(snapshot, StatsSnapshot)
        for field in ('games_played', 'games_won', 'games_lost', 'games_drawn', 'total_lines_completed'):
            value = getattr(snapshot, field)
            assert isinstance(value, int) and value >= 0
        assert isinstance(snapshot.average_lines_per_game, float)
        assert 0.0 <= snapshot.win_rate <= 100.0
        assert isinstance(snapshot.achievement_level, str) and snapshot.achievement_level

    def test_unexpected_fetch_error_still_yields_snapshot(self, reconciler, fetcher, store, context):
        fetcher.fetch.side_effect = KeyError('boom')
        store.save_cached_stats('user-1', CachedStats(games_played=4, games_won=1))

        snapshot = reconciler.reconcile(context)

        assert snapshot.source == SnapshotSource.CACHE
        assert snapshot.games_won == 1


class TestRemotePath:

    def test_remote_value_wins_over_cache(self, reconciler, fetcher, store, context):
        store.save_cached_stats('user-1', CachedStats(games_played=99, games_won=50))
        fetcher.fetch.return_value = {'gamesWon': 7, 'gamesPlayed': 10}

        snapshot = reconciler.reconcile(context)

        assert snapshot.games_won == 7
        assert snapshot.games_played == 10
        assert snapshot.source == SnapshotSource.REMOTE

    def test_partial_body_defaults_each_field(self, reconciler, fetcher, context):
        fetcher.fetch.return_value = {'gamesWon': 3}

        snapshot = reconciler.reconcile(context)

        assert snapshot.games_won == 3
        assert snapshot.games_played == 0
        assert snapshot.games_lost == 0
        assert snapshot.win_rate == 0
        assert snapshot.achievement_level == 'Bingo Rookie'

    def test_remote_tier_is_trusted(self, reconciler, fetcher, context):
        fetcher.fetch.return_value = {'gamesWon': 1, 'achievementLevel': 'Bingo Master'}

        assert reconciler.reconcile(context).achievement_level == 'Bingo Master'

    def test_remote_win_rate_is_not_recomputed(self, reconciler, fetcher, context):
        fetcher.fetch.return_value = {'gamesPlayed': 10, 'gamesWon': 5, 'winRate': '33.33'}

        assert reconciler.reconcile(context).win_rate == 33.3

    def test_empty_object_body_uses_remote_path(self, reconciler, fetcher, store, context):
        store.save_cached_stats('user-1', CachedStats(games_played=8, games_won=2))
        fetcher.fetch.return_value = {}

        snapshot = reconciler.reconcile(context)

        assert snapshot.source == SnapshotSource.REMOTE
        assert snapshot.games_played == 0

    def test_garbage_values_become_zero(self, reconciler, fetcher, context):
        fetcher.fetch.return_value = {'gamesPlayed': 'many', 'gamesWon': -4, 'winRate': 250,
                                      'averageLinesPerGame': float('nan'), 'achievementLevel': 5}

        snapshot = reconciler.reconcile(context)

        assert snapshot.games_played == 0
        assert snapshot.games_won == 0
        assert snapshot.win_rate == 100.0
        assert snapshot.average_lines_per_game == 0.0
        assert snapshot.achievement_level == 'Bingo Rookie'

    def test_credential_is_passed_to_fetcher(self, reconciler, fetcher, context):
        fetcher.fetch.return_value = {}
        reconciler.reconcile(context)
        fetcher.fetch.assert_called_once_with('token-abc')


class TestFallbackPath:

    def test_win_rate_from_cache(self, reconciler, fetcher, store, context):
        store.save_cached_stats('user-1', CachedStats(games_played=20, games_won=5))
        fetcher.fetch.side_effect = RemoteUnavailable('offline')

        snapshot = reconciler.reconcile(context)

        assert snapshot.win_rate == 25.0
        assert snapshot.win_rate_text == '25.0'
        assert snapshot.source == SnapshotSource.CACHE

    def test_fallback_tier_is_always_rookie(self, reconciler, fetcher, store, context):
        store.save_cached_stats('user-1', CachedStats(games_played=200, games_won=150))
        fetcher.fetch.side_effect = RemoteRejected(401)

        assert reconciler.reconcile(context).achievement_level == 'Bingo Rookie'

    def test_empty_body_falls_back_to_cache(self, reconciler, fetcher, store, context):
        store.save_cached_stats('user-1', CachedStats(games_played=3, games_won=1, total_lines_completed=9))
        fetcher.fetch.return_value = None

        snapshot = reconciler.reconcile(context)

        assert snapshot.total_lines_completed == 9
        assert snapshot.win_rate == 33.3

    def test_no_cache_gives_zeros(self, reconciler, fetcher, context):
        fetcher.fetch.side_effect = RemoteUnavailable('offline')

        snapshot = reconciler.reconcile(context)

        assert snapshot == StatsSnapshot(source=SnapshotSource.DEFAULT)
        assert snapshot.win_rate_text == '0.0'

    def test_corrupt_cache_counts_as_missing(self, reconciler, fetcher, store, context):
        store.set_item(stats_key('user-1'), '[1, 2')
        fetcher.fetch.side_effect = RemoteUnavailable('offline')

        assert reconciler.reconcile(context).source == SnapshotSource.DEFAULT

    def test_cache_of_other_user_is_ignored(self, reconciler, fetcher, store, context):
        store.save_cached_stats('someone-else', CachedStats(games_played=5, games_won=5))
        fetcher.fetch.side_effect = RemoteUnavailable('offline')

        assert reconciler.reconcile(context).games_won == 0

    def test_more_wins_than_games_does_not_crash(self, reconciler, fetcher, store, context):
        store.save_cached_stats('user-1', CachedStats(games_played=2, games_won=5))
        fetcher.fetch.side_effect = RemoteUnavailable('offline')

        assert reconciler.reconcile(context).win_rate == 100.0

    def test_fallback_reason_is_logged(self, reconciler, fetcher, context, caplog):
        fetcher.fetch.side_effect = RemoteRejected(401)

        with caplog.at_level(logging.WARNING, logger='bingo_stats_sync'):
            reconciler.reconcile(context)

        assert '"FALLBACK"' in caplog.text
        assert 'remote_rejected' in caplog.text
        assert '"status_code": 401' in caplog.text


class TestUnknownIdentity:
    """An opaque credential with no configured user still reconciles."""

    def test_remote_path_runs_without_identity(self, reconciler, fetcher):
        fetcher.fetch.return_value = {'gamesWon': 7}

        snapshot = reconciler.reconcile(SyncContext(credential='opaque-token'))

        fetcher.fetch.assert_called_once_with('opaque-token')
        assert snapshot.games_won == 7
        assert snapshot.source == SnapshotSource.REMOTE

    def test_fallback_without_identity_gives_zeros(self, reconciler, fetcher, store):
        store.save_cached_stats('None', CachedStats(games_played=4, games_won=4))
        fetcher.fetch.side_effect = RemoteUnavailable('offline')

        snapshot = reconciler.reconcile(SyncContext(credential='opaque-token'))

        assert snapshot == StatsSnapshot(source=SnapshotSource.DEFAULT)


class TestComputeWinRate:

    def test_no_games(self):
        assert compute_win_rate(0, 0) == 0.0

    def test_rounds_to_one_decimal(self):
        assert compute_win_rate(2, 3) == 66.7

    @pytest.mark.parametrize('won,played,expected', [
        (1, 16, 6.3),
        (5, 16, 31.3),
        (1, 80, 1.3),
        (3, 16, 18.8),
    ])
    def test_ties_round_up(self, won, played, expected):
        assert compute_win_rate(won, played) == expected

    def test_cached_tie_is_shown_rounded_up(self, reconciler, fetcher, store, context):
        store.save_cached_stats('user-1', CachedStats(games_played=16, games_won=1))
        fetcher.fetch.side_effect = RemoteUnavailable('offline')

        assert reconciler.reconcile(context).win_rate_text == '6.3'
