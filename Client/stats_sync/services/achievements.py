"""
Achievement Tiers

Derives a player's achievement tier from games won.
"""

from typing import Any, List

from ..config.achievement_settings import ACHIEVEMENT_TIERS
from ..models.stats import AchievementTier, VisualHint
from ..utils.helpers import to_count

TIERS: List[AchievementTier] = [
    AchievementTier(level=level, threshold=threshold, visual_hint=VisualHint(color=color, icon=icon))
    for threshold, level, color, icon in ACHIEVEMENT_TIERS
]


def tier_of(games_won: Any) -> AchievementTier:
    """
    Returns the highest tier whose threshold ``games_won`` meets.

    Args:
        games_won: Number of games won; unusable values count as 0

    Returns:
        AchievementTier
    """
    wins = to_count(games_won)
    for tier in TIERS:
        if wins >= tier.threshold:
            return tier
    return TIERS[-1]
