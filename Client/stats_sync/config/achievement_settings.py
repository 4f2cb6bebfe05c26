"""
Achievement Configuration Constants Module

Defines the achievement tier table used to rank players by games won.
Tiers are listed from the highest threshold down; the first tier whose
threshold is met wins.
"""

from typing import Final, List, Tuple

DEFAULT_TIER: Final[str] = 'Bingo Rookie'
"""
Tier reported whenever no better tier is known.
Type: Final[str] - Immutable to prevent accidental modification
"""

# (threshold, level, color, icon), strictly descending by threshold
ACHIEVEMENT_TIERS: Final[List[Tuple[int, str, str, str]]] = [
    (100, 'Bingo Master', 'purple', '👑'),
    (50, 'Bingo Expert', 'blue', '🏆'),
    (25, 'Bingo Pro', 'green', '🥇'),
    (10, 'Bingo Player', 'yellow', '🥈'),
    (0, DEFAULT_TIER, 'gray', '🥉'),
]


def validate_tier_table_integrity() -> bool:
    """
    Validates the achievement tier table.

    Returns:
        bool: True if the table is well formed

    Raises:
        ValueError: If thresholds are not strictly descending, the table does
            not end at a zero threshold, or tier names repeat
    """
    if not ACHIEVEMENT_TIERS:
        raise ValueError("Achievement tier table is empty")

    thresholds = [tier[0] for tier in ACHIEVEMENT_TIERS]
    if any(upper <= lower for upper, lower in zip(thresholds, thresholds[1:])):
        raise ValueError(f"Tier thresholds must be strictly descending: {thresholds}")

    if thresholds[-1] != 0:
        raise ValueError("Lowest tier must start at 0 games won")

    levels = [tier[1] for tier in ACHIEVEMENT_TIERS]
    if len(levels) != len(set(levels)):
        duplicates = [level for level in levels if levels.count(level) > 1]
        raise ValueError(f"Duplicate tier names found: {duplicates}")

    if levels[-1] != DEFAULT_TIER:
        raise ValueError(f"Lowest tier must be {DEFAULT_TIER!r}")

    return True


if __name__ == "__main__":

    try:
        validate_tier_table_integrity()
        print(" Achievement tier validation passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
