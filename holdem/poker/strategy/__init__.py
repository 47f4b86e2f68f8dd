"""Preflop ranges and AI personalities."""

from holdem.poker.strategy.personality import (
    AI_PERSONALITIES,
    AIPersonality,
    default_personalities,
    get_personality,
    personality_for_seat,
)
from holdem.poker.strategy.ranges import (
    DEFAULT_RANGE_REGISTRY,
    PREDEFINED_RANGES,
    AIRange,
    RangeEntry,
    RangeRegistry,
    hand_notation,
)

__all__ = [
    "AI_PERSONALITIES",
    "AIPersonality",
    "AIRange",
    "DEFAULT_RANGE_REGISTRY",
    "PREDEFINED_RANGES",
    "RangeEntry",
    "RangeRegistry",
    "default_personalities",
    "get_personality",
    "hand_notation",
    "personality_for_seat",
]
