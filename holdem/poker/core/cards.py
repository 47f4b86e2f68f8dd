"""
Card and deck classes for Texas Hold'em.

This module provides the 52-card domain, short-code parsing ("As", "Td",
"10h") and a seedable deck that deals front to back.
"""

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional, Union


class Suit(IntEnum):
    """Card suits."""

    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


class Rank(IntEnum):
    """Card ranks (2-14, where 14 is Ace)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


RANK_CHARS = {
    2: "2",
    3: "3",
    4: "4",
    5: "5",
    6: "6",
    7: "7",
    8: "8",
    9: "9",
    10: "T",
    11: "J",
    12: "Q",
    13: "K",
    14: "A",
}
SUIT_CHARS = {0: "c", 1: "d", 2: "h", 3: "s"}
SUIT_SYMBOLS = {0: "♣", 1: "♦", 2: "♥", 3: "♠"}

_RANK_LOOKUP = {char: rank for rank, char in RANK_CHARS.items()}
_RANK_LOOKUP["10"] = 10
_SUIT_LOOKUP = {char: suit for suit, char in SUIT_CHARS.items()}
_SUIT_LOOKUP.update({symbol: suit for suit, symbol in SUIT_SYMBOLS.items()})


@dataclass(frozen=True)
class Card:
    """Represents a single playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{RANK_CHARS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    def __lt__(self, other: "Card") -> bool:
        return self.rank < other.rank

    @property
    def code(self) -> str:
        """Two-character ASCII code, e.g. ``"As"`` or ``"Td"``."""
        return f"{RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]}"


# All 52 cards, built once and shared
_CARD_CACHE: dict = {(r, s): Card(Rank(r), Suit(s)) for r in range(2, 15) for s in range(4)}


def get_card(rank: int, suit: int) -> Card:
    """Get a pre-cached Card object for the given rank and suit integers."""
    return _CARD_CACHE[(rank, suit)]


def parse_card(text: str) -> Card:
    """Parse a short card code such as ``"As"``, ``"td"``, ``"10h"`` or ``"Q♠"``."""
    code = text.strip()
    if len(code) < 2:
        raise ValueError(f"Invalid card code: {text!r}")
    rank_part, suit_part = code[:-1].upper(), code[-1].lower()
    if rank_part not in _RANK_LOOKUP or suit_part not in _SUIT_LOOKUP:
        raise ValueError(f"Invalid card code: {text!r}")
    return get_card(_RANK_LOOKUP[rank_part], _SUIT_LOOKUP[suit_part])


def parse_cards(cards: Union[str, Iterable[str]]) -> List[Card]:
    """Parse several cards from a whitespace separated string or an iterable of codes."""
    if isinstance(cards, str):
        cards = cards.split()
    return [parse_card(code) for code in cards]


class Deck:
    """52-card deck for Texas Hold'em.

    Shuffling uses the Fisher-Yates shuffle of the supplied ``random.Random``
    so a seeded RNG always produces the same deal.
    """

    _TEMPLATE_DECK: List[Card] = list(_CARD_CACHE.values())

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize and shuffle a standard 52-card deck."""
        self._rng = rng if rng is not None else random.Random()
        self.cards: List[Card] = []
        self.reset()

    def reset(self):
        """Reset and shuffle the deck."""
        self.cards = self._TEMPLATE_DECK.copy()
        self._rng.shuffle(self.cards)

    def deal(self, count: int = 1) -> List[Card]:
        """Deal cards from the front of the deck."""
        if count > len(self.cards):
            raise ValueError("Not enough cards in deck")
        dealt = self.cards[:count]
        self.cards = self.cards[count:]
        return dealt

    def deal_one(self) -> Card:
        """Deal a single card."""
        return self.deal(1)[0]

    def burn(self) -> None:
        """Discard the top card."""
        self.deal(1)

    def __len__(self) -> int:
        return len(self.cards)
