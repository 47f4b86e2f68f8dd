"""Tests for AI opponent decisions."""

import logging
import math
import random

import pytest

from holdem.config.game_settings import GameSettings
from holdem.exceptions import IllegalActionError
from holdem.poker.betting.actions import PlayerAction
from holdem.poker.betting.decision import (
    TableContext,
    check_hand_against_range,
    decide_action,
)
from holdem.poker.core.game_state import NO_SEAT, Player
from holdem.poker.game import ai_decision, get_legal_actions, initialize_game
from holdem.poker.strategy.personality import AI_PERSONALITIES, AIPersonality
from holdem.poker.strategy.ranges import AIRange, RangeEntry, RangeRegistry
from tests.helpers import FixedRng, cards

FACING_BET = frozenset(
    {PlayerAction.FOLD, PlayerAction.CALL, PlayerAction.RAISE, PlayerAction.ALL_IN}
)
UNOPENED = frozenset({PlayerAction.CHECK, PlayerAction.BET, PlayerAction.ALL_IN})
PREFLOP = TableContext(big_blind=50, pot=75, highest_bet=50, to_call=50)


def _ai(hole: str, personality: str = "BALANCED", **overrides) -> Player:
    player = Player(
        player_id="player2",
        name="Player 2",
        seat=1,
        chips=1000,
        personality=AI_PERSONALITIES[personality],
    )
    player.hole_cards = cards(hole)
    for key, value in overrides.items():
        setattr(player, key, value)
    return player


class TestPreflop:
    def test_loose_aggressive_raises_aces(self):
        player = _ai("As Ah", "LOOSE_AGGRESSIVE")
        decision = decide_action(player, PREFLOP, FACING_BET, 100, 1000, FixedRng(0.5))
        assert decision.action == PlayerAction.RAISE
        assert decision.amount == math.floor(100 * (1 + 0.7))

    def test_raise_is_clamped_to_stack(self):
        player = _ai("As Ah", "LOOSE_AGGRESSIVE")
        decision = decide_action(player, PREFLOP, FACING_BET, 100, 120, FixedRng(0.5))
        assert decision.amount == 120

    def test_unopened_pot_bets_from_big_blinds(self):
        player = _ai("As Ah", "BALANCED")
        context = TableContext(big_blind=50, pot=100)
        decision = decide_action(player, context, UNOPENED, 50, 1000, FixedRng(0.5))
        assert decision.action == PlayerAction.BET
        assert decision.amount == 125  # 50 * (2.0 + 0.5)

    def test_tight_player_folds_trash(self):
        player = _ai("7c 2d", "TIGHT_PASSIVE")
        decision = decide_action(player, PREFLOP, FACING_BET, 100, 1000, FixedRng(0.0))
        assert decision.action == PlayerAction.FOLD

    def test_trash_checks_when_free(self):
        player = _ai("7c 2d", "TIGHT_PASSIVE")
        context = TableContext(big_blind=50, pot=150)
        decision = decide_action(player, context, UNOPENED, 50, 1000, FixedRng(0.0))
        assert decision.action == PlayerAction.CHECK

    def test_range_call_hand_calls(self):
        player = _ai("6c 6d", "BALANCED")
        decision = decide_action(player, PREFLOP, FACING_BET, 100, 1000, FixedRng(0.0))
        assert decision.action == PlayerAction.CALL

    def test_missed_frequency_roll_folds(self):
        player = _ai("2c 2d", "BALANCED")
        decision = decide_action(player, PREFLOP, FACING_BET, 100, 1000, FixedRng(0.99))
        assert decision.action == PlayerAction.FOLD

    def test_malformed_custom_range_falls_back_to_tiers(self, caplog):
        bad = AIRange(name="broken", entries=(RangeEntry("AXs", 1.0, "raise"),))
        personality = AI_PERSONALITIES["BALANCED"].with_range(bad)
        player = _ai("As Ah")
        player.personality = personality
        with caplog.at_level(logging.WARNING, logger="holdem.poker.betting.decision"):
            decision = decide_action(player, PREFLOP, FACING_BET, 100, 1000, FixedRng(0.5))
        assert decision.action == PlayerAction.RAISE
        assert "broken" in caplog.text

    def test_custom_range_takes_precedence(self):
        only_72 = AIRange(name="only72", entries=(RangeEntry("72o", 1.0, "raise"),))
        player = _ai("7c 2d", "TIGHT_PASSIVE")
        player.personality = player.personality.with_range(only_72)
        decision = decide_action(player, PREFLOP, FACING_BET, 100, 1000, FixedRng(0.0))
        assert decision.action == PlayerAction.RAISE

    def test_named_range_from_registry(self):
        registry = RangeRegistry()
        registry.register(AIRange(name="nines", entries=(RangeEntry("99", 1.0, "call"),)))
        personality = AIPersonality(name="Nines", preflop_range="nines")
        play, action = check_hand_against_range("99", personality, FixedRng(0.0), registry)
        assert (play, action) == (True, "call")

    def test_fold_action_is_never_played(self):
        folder = AIRange(name="folder", entries=(RangeEntry("AA", 1.0, "fold"),))
        personality = AI_PERSONALITIES["BALANCED"].with_range(folder)
        assert check_hand_against_range("AA", personality, FixedRng(0.0)) == (False, "fold")

    def test_tight_personality_scales_frequency_down(self):
        # tight range lists 99 at 0.7; a tight-passive player plays it at 0.49
        personality = AI_PERSONALITIES["TIGHT_PASSIVE"]
        assert check_hand_against_range("99", personality, FixedRng(0.45))[0] is True
        assert check_hand_against_range("99", personality, FixedRng(0.5))[0] is False

    def test_loose_personality_scales_frequency_up(self):
        # 0.5 * 1.3 = 0.65 for a fold threshold below 0.4
        half = AIRange(name="half", entries=(RangeEntry("99", 0.5, "call"),))
        personality = AIPersonality(name="Loose", fold_threshold=0.2).with_range(half)
        assert check_hand_against_range("99", personality, FixedRng(0.64))[0] is True
        assert check_hand_against_range("99", personality, FixedRng(0.66))[0] is False

    def test_loose_scaling_is_capped_at_always(self):
        often = AIRange(name="often", entries=(RangeEntry("AA", 0.9, "raise"),))
        personality = AIPersonality(name="Loose", fold_threshold=0.2).with_range(often)
        assert check_hand_against_range("AA", personality, FixedRng(0.999)) == (True, "raise")

    def test_middle_fold_threshold_keeps_listed_frequency(self):
        half = AIRange(name="half", entries=(RangeEntry("99", 0.5, "call"),))
        personality = AIPersonality(name="Even", fold_threshold=0.5).with_range(half)
        assert check_hand_against_range("99", personality, FixedRng(0.49))[0] is True
        assert check_hand_against_range("99", personality, FixedRng(0.51))[0] is False


class TestPostflop:
    BOARD = cards("Ad 8c 3h")

    def test_strong_hand_bets(self):
        player = _ai("As Ah", "BALANCED")
        context = TableContext(big_blind=50, pot=300, community_cards=tuple(self.BOARD))
        decision = decide_action(player, context, UNOPENED, 50, 1000, FixedRng(0.0))
        assert decision.action == PlayerAction.BET
        assert decision.amount == 75  # 50 * (1.0 + 0.5)

    def test_strong_hand_raises_a_bet(self):
        player = _ai("As Ah", "BALANCED")
        context = TableContext(
            big_blind=50, pot=400, highest_bet=100, to_call=100, community_cards=tuple(self.BOARD)
        )
        decision = decide_action(player, context, FACING_BET, 200, 1000, FixedRng(0.0))
        assert decision.action == PlayerAction.RAISE
        assert decision.amount == math.floor(200 * (1 + 0.4))

    def test_weak_hand_gives_up_on_high_roll(self):
        player = _ai("7c 2d", "BALANCED")
        context = TableContext(
            big_blind=50,
            pot=300,
            highest_bet=100,
            to_call=100,
            community_cards=tuple(cards("Qh Jd 9s")),
        )
        decision = decide_action(player, context, FACING_BET, 200, 1000, FixedRng(0.99))
        assert decision.action == PlayerAction.FOLD

    def test_weak_hand_bluffs_on_low_roll(self):
        player = _ai("7c 2d", "BALANCED")
        context = TableContext(big_blind=50, pot=300, community_cards=tuple(cards("Qh Jd 9s")))
        decision = decide_action(player, context, UNOPENED, 50, 1000, FixedRng(0.0))
        assert decision.action == PlayerAction.BET
        assert decision.amount == 100

    def test_medium_hand_calls(self):
        player = _ai("8s 7d", "BALANCED")
        context = TableContext(
            big_blind=50, pot=300, highest_bet=100, to_call=100, community_cards=tuple(self.BOARD)
        )
        decision = decide_action(player, context, FACING_BET, 200, 1000, FixedRng(0.5))
        assert decision.action == PlayerAction.CALL


class TestDecisionContract:
    def test_no_legal_actions_raises(self):
        with pytest.raises(IllegalActionError):
            decide_action(_ai("As Ah"), PREFLOP, frozenset(), 100, 1000, FixedRng(0.5))

    def test_decision_is_always_legal(self):
        """Only all-in is left: every personality and hand must pick it."""
        rng = random.Random(7)
        for key in AI_PERSONALITIES:
            for hole in ("As Ah", "7c 2d", "9h 8h"):
                decision = decide_action(
                    _ai(hole, key), PREFLOP, frozenset({PlayerAction.ALL_IN}), 100, 1000, rng
                )
                assert decision.action == PlayerAction.ALL_IN

    def test_ai_decision_on_live_table(self, seeded_rng):
        state = initialize_game(3, previous_dealer_index=0, rng=seeded_rng)
        decision = ai_decision(state, random.Random(1))
        assert decision.action in get_legal_actions(state, state.current_player.player_id)

    def test_ai_decision_refuses_human_seat(self, seeded_rng):
        state = initialize_game(2, rng=seeded_rng)
        state.betting_round.current_player = 0
        with pytest.raises(IllegalActionError):
            ai_decision(state, seeded_rng)

    def test_ai_decision_after_hand_over(self, seeded_rng):
        settings = GameSettings(has_human=False)
        state = initialize_game(3, previous_dealer_index=0, settings=settings, rng=seeded_rng)
        state.players[1].folded = True
        state.players[2].folded = True
        state.betting_round.current_player = NO_SEAT
        with pytest.raises(IllegalActionError):
            ai_decision(state, seeded_rng)
