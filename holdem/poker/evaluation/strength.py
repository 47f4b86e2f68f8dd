"""
Coarse hand strength, pot odds and pot geometry.

The strength score here is deliberately cheap: the AI uses it postflop in
place of a full evaluation. Pot odds and geometry helpers feed the trainer's
statistics panel.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Sequence

from holdem.config.poker import (
    POKER_HIGH_CARD_WEIGHT,
    POKER_PAIR_BONUS,
    POKER_TRIPS_BONUS,
    POKER_TWO_PAIR_BONUS,
)
from holdem.poker.core.cards import Card

if TYPE_CHECKING:
    from holdem.poker.core.game_state import GameState


def simple_hand_strength(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> float:
    """Score a hand in [0, 1] from its top rank and paired hole cards.

    Only pairs that use at least one hole card count, so a paired board does
    not make every player look strong.
    """
    cards = list(hole_cards) + list(community_cards)
    if not cards:
        return 0.0

    top_rank = max(int(card.rank) for card in cards)
    strength = top_rank / 14 * POKER_HIGH_CARD_WEIGHT

    counts: Dict[int, int] = {}
    for card in cards:
        counts[int(card.rank)] = counts.get(int(card.rank), 0) + 1

    hole_ranks = {int(card.rank) for card in hole_cards}
    made = sorted((counts[rank] for rank in hole_ranks if counts[rank] >= 2), reverse=True)
    if made and made[0] >= 3:
        strength += POKER_TRIPS_BONUS
    elif len(made) >= 2:
        strength += POKER_TWO_PAIR_BONUS
    elif made:
        board_pairs = sum(
            1 for rank, count in counts.items() if count >= 2 and rank not in hole_ranks
        )
        strength += POKER_TWO_PAIR_BONUS if board_pairs else POKER_PAIR_BONUS

    return min(strength, 1.0)


@dataclass(frozen=True)
class PotOdds:
    """Price of a call relative to the pot."""

    percentage: float  # Equity needed to break even, 0-100
    ratio: str  # e.g. "3.0:1"
    break_even: float  # Same as percentage, kept for display code

    def to_dict(self) -> dict:
        return {"percentage": self.percentage, "ratio": self.ratio, "break_even": self.break_even}


def calculate_pot_odds(pot: float, to_call: float) -> PotOdds:
    """Pot odds for calling ``to_call`` into ``pot``."""
    if to_call <= 0:
        return PotOdds(percentage=0.0, ratio="0:1", break_even=0.0)
    percentage = to_call / (pot + to_call) * 100
    ratio = f"{pot / to_call:.1f}:1"
    return PotOdds(percentage=percentage, ratio=ratio, break_even=percentage)


def break_even_fold_percentage(pot: float, bet: float) -> float:
    """How often a bet must win the pot immediately to profit."""
    if bet <= 0:
        return 0.0
    return bet / (pot + bet) * 100


def current_pot(state: "GameState") -> int:
    """Settled pot plus every bet still in front of the players."""
    return state.pot + sum(player.current_bet for player in state.players)


def effective_stack(state: "GameState") -> int:
    """Smallest remaining stack among players still contesting the pot."""
    stacks = [p.chips for p in state.players if not p.folded and not p.eliminated]
    return min(stacks) if stacks else 0


def stack_to_pot_ratio(stack: float, pot: float) -> float:
    """Stack-to-pot ratio; infinite when there is a stack but no pot."""
    if pot <= 0:
        return math.inf if stack > 0 else 0.0
    return stack / pot


def bet_size_percentage(bet: float, pot: float) -> float:
    """Bet size as a percentage of the pot."""
    if pot <= 0:
        return 0.0
    return bet / pot * 100
