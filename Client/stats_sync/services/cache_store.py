"""
Local Cache Store

Persistent key/value store backing the client's last-known statistics and
the credential slot. Values are strings, the whole store is one JSON file.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional

from ..models.stats import CachedStats
from ..utils.sync_logger import sync_logger

STATS_KEY_PREFIX = 'bingoStats_'


def stats_key(user_id: str) -> str:
    """Cache key holding a user's statistics."""
    return f"{STATS_KEY_PREFIX}{user_id}"


class LocalCacheStore:
    """
    JSON-file key/value store.

    The stats entries are written by game-play code outside this package;
    the sync client only reads them. Reads go to disk every time so external
    writes are picked up without reloading.
    """

    def __init__(self, path: str, credential_key: str = 'accessToken'):
        self.path = Path(path)
        self.credential_key = credential_key
        self._write_lock = threading.Lock()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except ValueError as e:
            sync_logger.logger.warning(f"Local cache file {self.path} is unreadable, treating as empty: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix='.cache-', suffix='.json')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def get_item(self, key: str) -> Optional[str]:
        """
        Read a raw value.

        Args:
            key: Store key

        Returns:
            The stored string, or None if absent
        """
        value = self._read_all().get(key)
        if value is None:
            return None
        # Tolerate entries written as JSON values rather than strings
        return value if isinstance(value, str) else json.dumps(value)

    def set_item(self, key: str, value: str) -> None:
        with self._write_lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def remove_item(self, key: str) -> bool:
        with self._write_lock:
            data = self._read_all()
            if key not in data:
                return False
            del data[key]
            self._write_all(data)
            return True

    def get_credential(self) -> Optional[str]:
        """Read the bearer token left by the auth collaborator."""
        return self.get_item(self.credential_key) or None

    def load_cached_stats(self, user_id: str) -> Optional[CachedStats]:
        """
        Load a user's cached statistics.

        Args:
            user_id: User identity

        Returns:
            CachedStats, or None if the user has no entry

        Raises:
            MalformedCachePayload: If the entry exists but cannot be decoded
        """
        payload = self.get_item(stats_key(user_id))
        if payload is None:
            return None
        return CachedStats.from_payload(payload)

    def save_cached_stats(self, user_id: str, stats: CachedStats) -> None:
        """Write a user's statistics (used by game-play code and tests)."""
        self.set_item(stats_key(user_id), stats.to_payload())
