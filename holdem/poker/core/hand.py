"""
Poker hand representation and ranking for Texas Hold'em.

This module defines the ten hand tiers and the evaluation result used for
showdowns, pot distribution and UI highlighting.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Tuple

from holdem.poker.core.cards import Card


class HandRank(IntEnum):
    """Poker hand rankings from weakest to strongest."""

    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    @property
    def label(self) -> str:
        return _RANK_LABELS[self]


_RANK_LABELS = {
    HandRank.HIGH_CARD: "High Card",
    HandRank.PAIR: "Pair",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.THREE_OF_KIND: "Three of a Kind",
    HandRank.STRAIGHT: "Straight",
    HandRank.FLUSH: "Flush",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FOUR_OF_KIND: "Four of a Kind",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.ROYAL_FLUSH: "Royal Flush",
}


@dataclass(frozen=True)
class HandEvaluation:
    """The best five-card hand a player holds.

    ``cards`` is the best five (fewer when fewer were evaluated), ordered by
    rank group then value. ``winning_cards`` is the subset that makes the
    tier (the quads, both pairs, the top card for high card, ...).
    ``primary_ranks`` and ``kickers`` together form the tie-break key.
    """

    rank: HandRank
    description: str
    cards: Tuple[Card, ...] = ()
    winning_cards: Tuple[Card, ...] = ()
    primary_ranks: Tuple[int, ...] = ()
    kickers: Tuple[int, ...] = field(default=())

    @property
    def category(self) -> str:
        return self.rank.label

    @property
    def key(self) -> Tuple[int, ...]:
        """Comparison key: tier first, then ranks grouped by multiplicity."""
        return (int(self.rank),) + self.primary_ranks + self.kickers

    @property
    def rank_values(self) -> List[int]:
        """Rank values of the best cards, sorted descending."""
        return sorted((int(card.rank) for card in self.cards), reverse=True)

    def compare(self, other: "HandEvaluation") -> int:
        """Return 1 if this hand wins, -1 if it loses and 0 on a tie."""
        if self.key == other.key:
            return 0
        return 1 if self.key > other.key else -1

    def beats(self, other: "HandEvaluation") -> bool:
        """Check if this hand beats another hand, including kicker comparison."""
        return self.compare(other) > 0

    def ties(self, other: "HandEvaluation") -> bool:
        """Check if this hand ties with another hand."""
        return self.compare(other) == 0

    def to_dict(self) -> dict:
        return {
            "rank": self.rank.name,
            "tier": int(self.rank),
            "category": self.category,
            "description": self.description,
            "cards": [card.code for card in self.cards],
            "winning_cards": [card.code for card in self.winning_cards],
        }

    def __str__(self) -> str:
        return self.description


def compare_hands(first: HandEvaluation, second: HandEvaluation) -> int:
    """Three-way comparison of two evaluations (1, 0 or -1)."""
    return first.compare(second)
