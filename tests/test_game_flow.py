"""Tests for seating, dealing and hand-to-hand flow."""

import random

import pytest

from holdem.config.game_settings import GameSettings
from holdem.exceptions import ConfigurationError
from holdem.poker.betting.actions import ANTE, BIG_BLIND, SMALL_BLIND, GamePhase
from holdem.poker.game import (
    apply_action,
    get_legal_actions,
    initialize_game,
    start_new_hand,
)
from holdem.poker.strategy.personality import AI_PERSONALITIES
from tests.helpers import chips_in_play, play_hand


def fold_out(state):
    while not state.is_hand_over:
        apply_action(state, "fold")
    return state


class TestInitializeGame:
    def test_seats_human_and_ai_players(self, seeded_rng):
        state = initialize_game(6, rng=seeded_rng)
        human = state.players[0]
        assert human.is_human
        assert human.name == "You"
        assert human.personality is None
        assert [p.player_id for p in state.players] == [f"player{i}" for i in range(1, 7)]
        assert [p.personality for p in state.players[1:]] == [
            AI_PERSONALITIES["TIGHT_PASSIVE"],
            AI_PERSONALITIES["LOOSE_AGGRESSIVE"],
            AI_PERSONALITIES["BALANCED"],
            AI_PERSONALITIES["CALLING_STATION"],
            AI_PERSONALITIES["CALLING_STATION"],
        ]

    def test_ai_only_table(self, seeded_rng, ai_settings):
        state = initialize_game(3, settings=ai_settings, rng=seeded_rng)
        assert not any(p.is_human for p in state.players)
        assert state.players[0].personality == AI_PERSONALITIES["TIGHT_PASSIVE"]

    def test_custom_personalities(self, seeded_rng):
        settings = GameSettings(ai_personalities=[AI_PERSONALITIES["BALANCED"]])
        state = initialize_game(4, settings=settings, rng=seeded_rng)
        assert all(p.personality == AI_PERSONALITIES["BALANCED"] for p in state.players[1:])

    @pytest.mark.parametrize("count", [0, 1, 10])
    def test_player_count_out_of_range(self, count):
        with pytest.raises(ConfigurationError):
            initialize_game(count)

    def test_invalid_settings(self):
        with pytest.raises(ConfigurationError):
            initialize_game(3, settings=GameSettings(small_blind=100, big_blind=50))

    @pytest.mark.parametrize(
        "count,previous,dealer", [(4, None, 3), (4, 3, 0), (4, 1, 2), (4, 5, 2), (2, None, 1)]
    )
    def test_dealer_placement(self, count, previous, dealer, seeded_rng):
        state = initialize_game(count, previous_dealer_index=previous, rng=seeded_rng)
        assert state.dealer_index == dealer

    def test_hole_cards_are_unique(self, seeded_rng):
        state = initialize_game(9, rng=seeded_rng)
        dealt = [card for p in state.players for card in p.hole_cards]
        assert all(len(p.hole_cards) == 2 for p in state.players)
        assert len(set(dealt)) == 18
        assert len(state.deck) == 52 - 18
        assert state.community_cards == []

    def test_forced_bets_are_recorded(self, seeded_rng):
        state = initialize_game(4, settings=GameSettings(ante=10), rng=seeded_rng)
        assert state.pot == 40
        assert sum(1 for a in state.action_log if a.action == ANTE) == 4
        blinds = [(a.player_id, a.action, a.amount) for a in state.action_log if a.action != ANTE]
        assert blinds == [("player1", SMALL_BLIND, 25), ("player2", BIG_BLIND, 50)]
        assert chips_in_play(state) == 4000

    def test_first_hand_state(self, seeded_rng):
        state = initialize_game(6, rng=seeded_rng)
        assert state.hand_number == 1
        assert state.phase == GamePhase.PREFLOP
        assert state.message == "Hand #1: Player 6 has the button"
        # Under the gun acts first: two seats after the big blind at seat 1
        assert state.current_player.player_id == "player3"


class TestStartNewHand:
    def test_button_moves_and_stacks_carry_over(self, seeded_rng):
        state = fold_out(initialize_game(3, previous_dealer_index=0, rng=seeded_rng))
        chips = [p.chips for p in state.players]

        next_state = start_new_hand(state)
        assert next_state is not state
        assert next_state.hand_number == 2
        assert next_state.dealer_index == 2
        assert next_state.pot == 0
        assert next_state.community_cards == []
        assert all(not p.folded for p in next_state.players)
        assert sum(p.chips + p.current_bet for p in next_state.players) == sum(chips)

    def test_broke_players_are_eliminated(self, seeded_rng):
        state = fold_out(initialize_game(4, previous_dealer_index=0, rng=seeded_rng))
        state.players[2].chips = 0

        next_state = start_new_hand(state)
        busted = next_state.players[2]
        assert busted.eliminated
        assert busted.hole_cards == []
        assert 2 not in (
            next_state.dealer_index,
            next_state.small_blind_index,
            next_state.big_blind_index,
        )

    def test_game_over_with_one_player_left(self, seeded_rng):
        state = fold_out(initialize_game(3, rng=seeded_rng))
        for player in state.players[1:]:
            player.chips = 0
        state.players[0].chips = 3000

        final = start_new_hand(state)
        assert final.game_over
        assert final.phase == GamePhase.HAND_COMPLETE
        assert final.message == "Game over: You wins with 3000 chips"
        assert all(get_legal_actions(final, p.player_id) == set() for p in final.players)

    def test_all_in_blinds_run_straight_to_showdown(self, seeded_rng):
        state = fold_out(initialize_game(2, rng=seeded_rng))
        for player in state.players:
            player.chips = 20

        next_state = start_new_hand(state)
        assert next_state.phase == GamePhase.SHOWDOWN
        assert len(next_state.community_cards) == 5
        assert next_state.final_pot == 40
        assert sum(p.chips for p in next_state.players) == 40

    def test_tournament_blinds_rise(self, seeded_rng):
        settings = GameSettings.tournament(has_human=False)
        state = initialize_game(3, settings=settings, rng=seeded_rng)
        assert (state.blinds.small_blind, state.blinds.big_blind) == (10, 20)

        state = fold_out(state)
        state.hand_number = 10
        next_state = start_new_hand(state)
        assert next_state.hand_number == 11
        assert (next_state.blinds.small_blind, next_state.blinds.big_blind) == (15, 30)
        assert next_state.betting_round.min_raise == 30


class TestAISession:
    def _play_session(self, seed, hands=40):
        settings = GameSettings(has_human=False)
        rng = random.Random(seed)
        state = initialize_game(6, settings=settings, rng=rng)
        boards = []
        for _ in range(hands):
            play_hand(state, rng)
            assert state.pot == 0
            assert chips_in_play(state) == 6000
            boards.append(tuple(card.code for card in state.community_cards))
            state = start_new_hand(state, rng=rng)
            if state.game_over:
                break
        return state, boards

    def test_chips_are_conserved(self):
        state, boards = self._play_session(seed=42)
        assert boards
        assert sum(p.chips for p in state.players) == 6000

    def test_seeded_sessions_replay_identically(self):
        first, first_boards = self._play_session(seed=7, hands=15)
        second, second_boards = self._play_session(seed=7, hands=15)
        assert first_boards == second_boards
        assert [p.chips for p in first.players] == [p.chips for p in second.players]
