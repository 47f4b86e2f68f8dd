"""Hand evaluation and strength statistics."""

from holdem.poker.evaluation.hand_evaluator import evaluate_cards, evaluate_hand, find_winners
from holdem.poker.evaluation.strength import (
    PotOdds,
    bet_size_percentage,
    break_even_fold_percentage,
    calculate_pot_odds,
    current_pot,
    effective_stack,
    simple_hand_strength,
    stack_to_pot_ratio,
)

__all__ = [
    "PotOdds",
    "bet_size_percentage",
    "break_even_fold_percentage",
    "calculate_pot_odds",
    "current_pot",
    "effective_stack",
    "evaluate_cards",
    "evaluate_hand",
    "find_winners",
    "simple_hand_strength",
    "stack_to_pot_ratio",
]
