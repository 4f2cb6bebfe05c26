"""
Bingo Stats Sync Client - Main Entry Point

Starts the stats sync service with a console presenter, connects the
real-time channel when one is configured, and runs until interrupted.
"""

import threading

import socketio
from socketio.exceptions import ConnectionError as ChannelConnectionError

from stats_sync import create_sync_service
from stats_sync.config import Config, validate_tier_table_integrity
from stats_sync.models.stats import StatsSnapshot
from stats_sync.services.achievements import tier_of
from stats_sync.utils.sync_logger import sync_logger


def print_snapshot(snapshot: StatsSnapshot):
    """Console presenter. The displayed tier is derived from games won."""
    achievement = tier_of(snapshot.games_won)
    print("=" * 50)
    print(f"{achievement.visual_hint.icon} {achievement.level}  (reported: {snapshot.achievement_level}, source: {snapshot.source.value})")
    print(f"Games played: {snapshot.games_played}   Won: {snapshot.games_won}   "
          f"Lost: {snapshot.games_lost}   Drawn: {snapshot.games_drawn}")
    print(f"Win rate: {snapshot.win_rate_text}%")
    print(f"Lines completed: {snapshot.total_lines_completed}   "
          f"Average per game: {snapshot.average_lines_per_game:.1f}")


def connect_channel(url: str):
    """Connect the real-time channel, or return None if it cannot be reached."""
    client = socketio.Client(reconnection=True, logger=False, engineio_logger=False)
    try:
        client.connect(url)
    except ChannelConnectionError as e:
        print(f"✗ Real-time channel unavailable ({e}); relying on polling")
        sync_logger.logger.warning(f"Socket connection to {url} failed: {e}")
        return None
    print(f"✓ Real-time channel connected to {url}")
    return client


def main():
    """Main function to wire the sync service and keep it running."""
    channel = None
    service = None
    try:
        validate_tier_table_integrity()

        if Config.SOCKET_URL:
            channel = connect_channel(Config.SOCKET_URL)
        else:
            print("✗ SOCKET_URL not configured; relying on polling")

        if not Config.USER_ID:
            print("✗ USER_ID not configured; reading it from the access token (cache fallback needs it)")

        service = create_sync_service(Config, on_snapshot=print_snapshot, channel=channel)
        service.start()

        sync_logger.logger.info("Stats sync client starting")
        print(f"\nSyncing stats from {Config.API_BASE_URL} every {Config.POLL_INTERVAL_SECONDS:g}s")
        print("Press Ctrl-C to stop")

        threading.Event().wait()

    except KeyboardInterrupt:
        print("\nStats sync client shutting down...")
        sync_logger.logger.info("Stats sync client shutting down (KeyboardInterrupt)")
    finally:
        if service:
            service.close()
        if channel:
            channel.disconnect()


if __name__ == '__main__':
    main()
