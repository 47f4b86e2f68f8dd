"""
AI opponent personalities.

A personality is four traits in [0, 1] plus an optional preflop range:

- aggressiveness: how often strong hands bet or raise
- bluff_frequency: how often weak hands bet anyway
- fold_threshold: how readily the player gives up (higher folds more)
- raise_bias: how far above the minimum raises are sized
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional

from holdem.config.poker import POKER_DEFAULT_PERSONALITIES
from holdem.exceptions import ConfigurationError
from holdem.poker.strategy.ranges import AIRange, default_range_name

_TRAITS = ("aggressiveness", "bluff_frequency", "fold_threshold", "raise_bias")


@dataclass(frozen=True)
class AIPersonality:
    """Behavioural profile of an AI opponent."""

    name: str
    aggressiveness: float = 0.5
    bluff_frequency: float = 0.2
    fold_threshold: float = 0.5
    raise_bias: float = 0.4
    preflop_range: Optional[str] = None  # Name of a registered range
    custom_range: Optional[AIRange] = None  # Takes precedence over preflop_range

    def __post_init__(self):
        for trait in _TRAITS:
            value = getattr(self, trait)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{self.name}: {trait}={value} must be within [0, 1]")

    @property
    def suggested_range(self) -> str:
        """Predefined range that matches this personality's fold threshold."""
        return default_range_name(self.fold_threshold)

    def with_range(self, ai_range: Optional[AIRange]) -> "AIPersonality":
        return replace(self, custom_range=ai_range)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "aggressiveness": self.aggressiveness,
            "bluff_frequency": self.bluff_frequency,
            "fold_threshold": self.fold_threshold,
            "raise_bias": self.raise_bias,
            "preflop_range": self.preflop_range,
            "suggested_range": self.suggested_range,
            "custom_range": self.custom_range.name if self.custom_range else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AIPersonality":
        custom = data.get("custom_range")
        return cls(
            name=data.get("name", "Custom"),
            aggressiveness=float(data.get("aggressiveness", 0.5)),
            bluff_frequency=float(data.get("bluff_frequency", 0.2)),
            fold_threshold=float(data.get("fold_threshold", 0.5)),
            raise_bias=float(data.get("raise_bias", 0.4)),
            preflop_range=data.get("preflop_range"),
            custom_range=AIRange.from_dict(custom) if isinstance(custom, Mapping) else None,
        )


AI_PERSONALITIES: Dict[str, AIPersonality] = {
    "TIGHT_PASSIVE": AIPersonality(
        name="Tight Passive",
        aggressiveness=0.2,
        bluff_frequency=0.1,
        fold_threshold=0.7,
        raise_bias=0.2,
        preflop_range="tight",
    ),
    "LOOSE_AGGRESSIVE": AIPersonality(
        name="Loose Aggressive",
        aggressiveness=0.8,
        bluff_frequency=0.4,
        fold_threshold=0.3,
        raise_bias=0.7,
        preflop_range="loose",
    ),
    "BALANCED": AIPersonality(
        name="Balanced",
        aggressiveness=0.5,
        bluff_frequency=0.2,
        fold_threshold=0.5,
        raise_bias=0.4,
        preflop_range="standard",
    ),
    "CALLING_STATION": AIPersonality(
        name="Calling Station",
        aggressiveness=0.3,
        bluff_frequency=0.05,
        fold_threshold=0.2,
        raise_bias=0.1,
        preflop_range="loose",
    ),
}


def get_personality(key: str) -> AIPersonality:
    """Look up a preset by key (``"BALANCED"``) or display name (``"Balanced"``)."""
    normalized = key.strip().upper().replace(" ", "_")
    if normalized not in AI_PERSONALITIES:
        raise ConfigurationError(f"Unknown AI personality: {key}")
    return AI_PERSONALITIES[normalized]


def default_personalities() -> List[AIPersonality]:
    return [AI_PERSONALITIES[key] for key in POKER_DEFAULT_PERSONALITIES]


def personality_for_seat(
    ai_index: int, personalities: Optional[List[AIPersonality]] = None
) -> AIPersonality:
    """Personality for the ``ai_index``-th AI seat; the last one repeats."""
    pool = personalities or default_personalities()
    return pool[min(ai_index, len(pool) - 1)]
