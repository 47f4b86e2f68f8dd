"""
Betting actions, the betting round state machine and AI decisions.

Only the action vocabulary is imported here; ``betting_round`` and
``decision`` depend on the table state and are imported from their modules.
"""

from holdem.poker.betting.actions import (
    ANTE,
    BIG_BLIND,
    SMALL_BLIND,
    ActionRecord,
    GamePhase,
    PlayerAction,
)

__all__ = [
    "ANTE",
    "BIG_BLIND",
    "SMALL_BLIND",
    "ActionRecord",
    "GamePhase",
    "PlayerAction",
]
