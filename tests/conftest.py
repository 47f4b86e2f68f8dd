"""Pytest configuration and fixtures for the Hold'em trainer tests."""

import random

import pytest

from holdem.config.game_settings import GameSettings
from holdem.poker.core.game_state import Player
from tests.helpers import cards


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def ai_settings():
    """Cash game settings with AI players in every seat."""
    return GameSettings(has_human=False)


@pytest.fixture
def make_player():
    """Factory for players with a chosen stack and contribution."""

    def _make(seat: int, chips: int = 1000, total_bet: int = 0, folded: bool = False, hole=None):
        player = Player(
            player_id=f"player{seat + 1}",
            name=f"Player {seat + 1}",
            seat=seat,
            chips=chips,
            total_bet=total_bet,
            folded=folded,
        )
        if hole:
            player.hole_cards = cards(hole)
        return player

    return _make
