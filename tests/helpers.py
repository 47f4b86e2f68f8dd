"""Shared helpers for the Hold'em trainer tests."""

import random
from typing import List

from holdem.poker.core.cards import Card, parse_cards
from holdem.poker.core.game_state import GameState
from holdem.poker.game import play_ai_turn


class FixedRng:
    """Stand-in for random.Random whose rolls always return the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


def cards(text: str) -> List[Card]:
    """Shorthand: cards("As Kd") -> [A♠, K♦]."""
    return parse_cards(text)


def chips_in_play(state: GameState) -> int:
    """Every chip at the table: stacks, bets in front of players and the pot."""
    return state.pot + sum(p.chips + p.current_bet for p in state.players)


def assert_chips_accounted(state: GameState) -> None:
    assert state.pot + sum(p.current_bet for p in state.players) == state.total_committed


def play_hand(state: GameState, rng: random.Random, max_actions: int = 500) -> GameState:
    """Let the AI play every seat until the hand is over, checking chip accounting."""
    for _ in range(max_actions):
        if state.is_hand_over:
            return state
        play_ai_turn(state, rng)
        if not state.is_hand_over:
            assert_chips_accounted(state)
    raise AssertionError(f"Hand {state.hand_number} did not finish in {max_actions} actions")
