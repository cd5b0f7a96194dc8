"""
EcoCoin levels.

Maps a coin balance to a named level and the progress towards the next one.

Dependencies: None (pure domain layer)
System role: Level badges on profile and dashboard
"""

from dataclasses import dataclass
from enum import Enum

from ecocycle.core.impact import clamp


class Level(str, Enum):
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"


# Ascending by threshold
LEVEL_THRESHOLDS: tuple[tuple[Level, int], ...] = (
    (Level.BRONZE, 0),
    (Level.SILVER, 200),
    (Level.GOLD, 600),
    (Level.PLATINUM, 1200),
)


@dataclass(frozen=True)
class LevelProgress:
    """
    Level reached for a coin balance.

    Attributes:
        level: Highest level whose threshold the balance reaches
        next_level: Following level (the top level points at itself)
        next_at: Coin threshold of next_level
        progress: Fraction of the way to next_level, in [0, 1]
    """

    level: Level
    next_level: Level
    next_at: int
    progress: float


def get_level_by_coins(coins: int) -> LevelProgress:
    current_index = 0
    for index, (_, min_coins) in enumerate(LEVEL_THRESHOLDS):
        if coins >= min_coins:
            current_index = index

    current, current_min = LEVEL_THRESHOLDS[current_index]
    nxt, next_min = LEVEL_THRESHOLDS[min(current_index + 1, len(LEVEL_THRESHOLDS) - 1)]
    denom = max(1, next_min - current_min)
    progress = clamp((coins - current_min) / denom, 0.0, 1.0)
    return LevelProgress(level=current, next_level=nxt, next_at=next_min, progress=progress)
