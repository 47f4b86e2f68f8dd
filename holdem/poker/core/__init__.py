"""
Core poker components for Texas Hold'em.

This package contains the fundamental building blocks: cards, hand
evaluations and the table state.
"""

from holdem.poker.core.cards import Card, Deck, Rank, Suit, get_card, parse_card, parse_cards
from holdem.poker.core.game_state import NO_SEAT, BettingRound, GameState, Player, Position
from holdem.poker.core.hand import HandEvaluation, HandRank, compare_hands

__all__ = [
    # Cards
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "get_card",
    "parse_card",
    "parse_cards",
    # Hands
    "HandEvaluation",
    "HandRank",
    "compare_hands",
    # Table state
    "BettingRound",
    "GameState",
    "NO_SEAT",
    "Player",
    "Position",
]
