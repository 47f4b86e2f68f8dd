"""
Texas Hold'em rules engine.

The usual entry points are ``initialize_game``, ``start_new_hand``,
``apply_action`` and ``get_legal_actions``; everything else is exported for
front ends and tests that need the pieces.
"""

from holdem.poker.core import (
    Card,
    Deck,
    GameState,
    HandEvaluation,
    HandRank,
    Player,
    Position,
    parse_card,
    parse_cards,
)
from holdem.poker.betting import GamePhase, PlayerAction
from holdem.poker.evaluation import evaluate_cards, evaluate_hand, find_winners
from holdem.poker.pots import SidePot, compute_side_pots
from holdem.poker.strategy import AIPersonality, AIRange, RangeEntry, RangeRegistry
from holdem.poker.betting.decision import AIDecision, decide_action
from holdem.poker.game import (
    ai_decision,
    apply_action,
    get_legal_actions,
    initialize_game,
    play_ai_turn,
    start_new_hand,
)
from holdem.poker.history import HandHistory, SessionStats, create_hand_history

__all__ = [
    "AIDecision",
    "AIPersonality",
    "AIRange",
    "Card",
    "Deck",
    "GamePhase",
    "GameState",
    "HandEvaluation",
    "HandHistory",
    "HandRank",
    "Player",
    "PlayerAction",
    "Position",
    "RangeEntry",
    "RangeRegistry",
    "SessionStats",
    "SidePot",
    "ai_decision",
    "apply_action",
    "compute_side_pots",
    "create_hand_history",
    "decide_action",
    "evaluate_cards",
    "evaluate_hand",
    "find_winners",
    "get_legal_actions",
    "initialize_game",
    "parse_card",
    "parse_cards",
    "play_ai_turn",
    "start_new_hand",
]
