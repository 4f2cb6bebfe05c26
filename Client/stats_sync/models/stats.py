"""
Statistics Data Models

Contains the statistics snapshot, the cached subset and achievement tier types.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from ..config.achievement_settings import DEFAULT_TIER
from ..utils.helpers import to_count, to_amount

# Wire name -> attribute name for the raw counters shared by both payloads
COUNTER_FIELDS = {
    'gamesPlayed': 'games_played',
    'gamesWon': 'games_won',
    'gamesLost': 'games_lost',
    'gamesDrawn': 'games_drawn',
    'totalLinesCompleted': 'total_lines_completed',
}


class SyncState(Enum):
    """Lifecycle state of the sync service."""
    IDLE = "IDLE"
    RECONCILING = "RECONCILING"
    STOPPED = "STOPPED"


class SnapshotSource(Enum):
    """Where a snapshot's numbers came from."""
    REMOTE = "remote"
    CACHE = "cache"
    DEFAULT = "default"


@dataclass(frozen=True)
class VisualHint:
    """Display hint attached to an achievement tier."""
    color: str
    icon: str


@dataclass(frozen=True)
class AchievementTier:
    """Achievement tier reached at a number of games won."""
    level: str
    threshold: int
    visual_hint: VisualHint


@dataclass(frozen=True)
class CachedStats:
    """Raw counters persisted in the local cache. No derived fields."""
    games_played: int = 0
    games_won: int = 0
    games_lost: int = 0
    games_drawn: int = 0
    total_lines_completed: int = 0
    average_lines_per_game: float = 0.0

    @classmethod
    def from_payload(cls, payload: str) -> 'CachedStats':
        """
        Parse a JSON-encoded cache entry.

        Args:
            payload: JSON text as stored under ``bingoStats_<userId>``

        Returns:
            CachedStats with missing or unusable fields set to 0

        Raises:
            MalformedCachePayload: If the text is not a JSON object
        """
        from ..services.errors import MalformedCachePayload

        try:
            data = json.loads(payload)
        except (TypeError, ValueError) as e:
            raise MalformedCachePayload(f"Cached stats are not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedCachePayload(f"Cached stats must be a JSON object, got {type(data).__name__}")

        counters = {attr: to_count(data.get(wire)) for wire, attr in COUNTER_FIELDS.items()}
        return cls(average_lines_per_game=to_amount(data.get('averageLinesPerGame')), **counters)

    def to_payload(self) -> str:
        """Encode as the JSON stored in the local cache."""
        data = {wire: getattr(self, attr) for wire, attr in COUNTER_FIELDS.items()}
        data['averageLinesPerGame'] = self.average_lines_per_game
        return json.dumps(data)


@dataclass(frozen=True)
class StatsSnapshot:
    """Canonical statistics view handed to the presentation layer."""
    games_played: int = 0
    games_won: int = 0
    games_lost: int = 0
    games_drawn: int = 0
    total_lines_completed: int = 0
    average_lines_per_game: float = 0.0
    win_rate: float = 0.0
    achievement_level: str = DEFAULT_TIER
    source: SnapshotSource = SnapshotSource.DEFAULT

    @property
    def win_rate_text(self) -> str:
        return f"{self.win_rate:.1f}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the remote API's field names."""
        data = {wire: getattr(self, attr) for wire, attr in COUNTER_FIELDS.items()}
        data.update({
            'averageLinesPerGame': self.average_lines_per_game,
            'winRate': self.win_rate,
            'achievementLevel': self.achievement_level,
        })
        return data
