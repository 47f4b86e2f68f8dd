"""Per-table game settings.

A ``GameSettings`` instance is handed to ``initialize_game`` and
``start_new_hand``. It carries the game type, the stakes, the optional
tournament blind schedule and the AI personality assignments.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from holdem.config.poker import (
    POKER_DEFAULT_ANTE,
    POKER_DEFAULT_BIG_BLIND,
    POKER_DEFAULT_SMALL_BLIND,
    POKER_DEFAULT_STARTING_STACK,
)
from holdem.exceptions import ConfigurationError

if TYPE_CHECKING:
    from holdem.poker.strategy.personality import AIPersonality


class GameType(str, Enum):
    """Kind of game being played at a table."""

    CASH = "cash"
    TOURNAMENT = "tournament"


@dataclass(frozen=True)
class Blinds:
    """Forced bets for a single hand."""

    small_blind: int
    big_blind: int
    ante: int = 0

    def to_dict(self) -> dict:
        return {"small_blind": self.small_blind, "big_blind": self.big_blind, "ante": self.ante}


@dataclass(frozen=True)
class BlindLevel:
    """One step of a tournament blind schedule.

    Levels advance by hands played rather than wall-clock time so that a
    seeded session replays identically.
    """

    level: int
    small_blind: int
    big_blind: int
    ante: int = 0
    hands_per_level: int = 10

    @property
    def blinds(self) -> Blinds:
        return Blinds(self.small_blind, self.big_blind, self.ante)


TOURNAMENT_BLIND_LEVELS: Tuple[BlindLevel, ...] = (
    BlindLevel(1, 10, 20, 0, 10),
    BlindLevel(2, 15, 30, 0, 10),
    BlindLevel(3, 25, 50, 0, 10),
    BlindLevel(4, 50, 100, 10, 15),
    BlindLevel(5, 75, 150, 15, 15),
)


@dataclass
class GameSettings:
    """Settings shared by every hand played at a table."""

    game_type: GameType = GameType.CASH
    starting_stack: int = POKER_DEFAULT_STARTING_STACK
    small_blind: int = POKER_DEFAULT_SMALL_BLIND
    big_blind: int = POKER_DEFAULT_BIG_BLIND
    ante: int = POKER_DEFAULT_ANTE
    blind_levels: List[BlindLevel] = field(default_factory=list)
    ai_personalities: Optional[List["AIPersonality"]] = None
    has_human: bool = True  # Seat 0 is a human player

    @classmethod
    def tournament(cls, **overrides) -> "GameSettings":
        """Settings for a tournament using the preset blind schedule."""
        overrides.setdefault("blind_levels", list(TOURNAMENT_BLIND_LEVELS))
        first = overrides["blind_levels"][0] if overrides["blind_levels"] else None
        if first is not None:
            overrides.setdefault("small_blind", first.small_blind)
            overrides.setdefault("big_blind", first.big_blind)
            overrides.setdefault("ante", first.ante)
        return cls(game_type=GameType.TOURNAMENT, **overrides)

    def validate(self) -> "GameSettings":
        """Check the settings, raising ConfigurationError on the first problem."""
        if self.starting_stack <= 0:
            raise ConfigurationError(f"starting_stack must be positive, got {self.starting_stack}")
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ConfigurationError("Blinds must be positive")
        if self.small_blind > self.big_blind:
            raise ConfigurationError(
                f"Small blind {self.small_blind} exceeds big blind {self.big_blind}"
            )
        if self.ante < 0:
            raise ConfigurationError(f"ante must not be negative, got {self.ante}")
        if self.game_type == GameType.TOURNAMENT and not self.blind_levels:
            raise ConfigurationError("Tournament settings need at least one blind level")
        for level in self.blind_levels:
            if level.small_blind <= 0 or level.big_blind < level.small_blind:
                raise ConfigurationError(f"Invalid blinds in level {level.level}")
            if level.ante < 0 or level.hands_per_level <= 0:
                raise ConfigurationError(f"Invalid ante or length in level {level.level}")
        return self

    def level_for_hand(self, hand_number: int) -> Optional[BlindLevel]:
        """Blind level in force for a 1-based hand number (None for cash games)."""
        if self.game_type != GameType.TOURNAMENT or not self.blind_levels:
            return None
        hands_left = max(hand_number, 1)
        for level in self.blind_levels:
            if hands_left <= level.hands_per_level:
                return level
            hands_left -= level.hands_per_level
        # Past the end of the schedule the last level stays in force
        return self.blind_levels[-1]

    def blinds_for_hand(self, hand_number: int) -> Blinds:
        level = self.level_for_hand(hand_number)
        if level is not None:
            return level.blinds
        return Blinds(self.small_blind, self.big_blind, self.ante)
