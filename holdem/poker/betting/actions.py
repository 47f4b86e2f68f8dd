"""
Betting actions and rounds for Texas Hold'em poker.

This module defines the hand phases, the possible player actions and the
record kept for every chip-moving event of a hand.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class GamePhase(IntEnum):
    """Phases of a hand, in the order they are played."""

    PREFLOP = 0
    FLOP = 1
    TURN = 2
    RIVER = 3
    SHOWDOWN = 4
    HAND_COMPLETE = 5

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def is_betting(self) -> bool:
        return self <= GamePhase.RIVER


class PlayerAction(str, Enum):
    """Possible betting actions."""

    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"
    ALL_IN = "all-in"

    @classmethod
    def parse(cls, text: str) -> "PlayerAction":
        """Parse an action name, accepting ``all_in``/``allin`` for ``all-in``."""
        normalized = text.strip().lower().replace("_", "-")
        if normalized == "allin":
            normalized = "all-in"
        return cls(normalized)


# Forced bets appear in action records next to player actions
SMALL_BLIND = "small_blind"
BIG_BLIND = "big_blind"
ANTE = "ante"


@dataclass(frozen=True)
class ActionRecord:
    """One chip-moving event of a hand.

    ``action`` is a ``PlayerAction`` value or one of the forced-bet names.
    ``amount`` is the number of chips the player put in with this event.
    """

    player_id: str
    phase: GamePhase
    action: str
    amount: int = 0

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "phase": self.phase.label,
            "action": self.action,
            "amount": self.amount,
        }
