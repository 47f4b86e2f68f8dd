"""Tests for seat roles, blinds and seat rotation."""

import pytest

from holdem.poker.core.game_state import NO_SEAT, Position
from holdem.poker.table import (
    assign_positions,
    blind_seats,
    next_active_seat,
    next_dealer_seat,
    position_for_offset,
    position_name,
    post_antes,
    post_blinds,
)


@pytest.fixture
def table(make_player):
    def _table(count, chips=1000):
        return [make_player(seat, chips=chips) for seat in range(count)]

    return _table


class TestPositionNames:
    def test_six_handed_names(self):
        assert [position_name(i, 6) for i in range(6)] == ["BTN", "SB", "BB", "UTG", "HJ", "CO"]

    def test_heads_up_names(self):
        assert [position_name(i, 2) for i in range(2)] == ["BTN", "BB"]

    def test_nine_handed_names(self):
        assert position_name(5, 9) == "UTG+2"
        assert position_name(8, 9) == "CO"

    @pytest.mark.parametrize("count", [1, 10])
    def test_invalid_table_size(self, count):
        with pytest.raises(ValueError):
            position_name(0, count)

    def test_position_roles(self):
        assert position_for_offset(0, 6) == Position.DEALER
        assert position_for_offset(1, 6) == Position.SMALL_BLIND
        assert position_for_offset(2, 6) == Position.BIG_BLIND
        assert position_for_offset(3, 9) == Position.EARLY
        assert position_for_offset(5, 9) == Position.MIDDLE
        assert position_for_offset(8, 9) == Position.LATE

    def test_heads_up_dealer_is_small_blind(self):
        assert position_for_offset(0, 2) == Position.SMALL_BLIND
        assert position_for_offset(1, 2) == Position.BIG_BLIND


def test_assign_positions_relative_to_dealer(table):
    players = assign_positions(table(3), dealer_index=1)
    assert players[1].position == Position.DEALER
    assert players[2].position == Position.SMALL_BLIND
    assert players[0].position == Position.BIG_BLIND
    assert [p.position_name for p in players] == ["BB", "BTN", "SB"]


def test_eliminated_players_get_no_position(table):
    players = table(4)
    players[2].eliminated = True
    assign_positions(players, dealer_index=1)
    assert players[2].position is None
    assert players[3].position == Position.SMALL_BLIND
    assert players[0].position == Position.BIG_BLIND


class TestBlindSeats:
    def test_three_handed(self, table):
        assert blind_seats(table(3), dealer_index=1) == (2, 0)

    def test_heads_up_dealer_posts_small_blind(self, table):
        assert blind_seats(table(2), dealer_index=1) == (1, 0)

    def test_skips_eliminated_seats(self, table):
        players = table(4)
        players[2].eliminated = True
        assert blind_seats(players, dealer_index=1) == (3, 0)

    def test_not_enough_players(self, table):
        players = table(2)
        players[0].eliminated = True
        assert blind_seats(players, dealer_index=0) == (NO_SEAT, NO_SEAT)


class TestRotation:
    def test_next_dealer_skips_eliminated(self, table):
        players = table(4)
        players[2].eliminated = True
        assert next_dealer_seat(players, 1) == 3
        assert next_dealer_seat(players, 3) == 0

    def test_next_active_skips_folded_and_all_in(self, table):
        players = table(4)
        players[1].folded = True
        players[2].all_in = True
        assert next_active_seat(players, 0) == 3
        assert next_active_seat(players, 3) == 0

    def test_no_active_seat(self, table):
        players = table(2)
        for player in players:
            player.folded = True
        assert next_active_seat(players, 0) == NO_SEAT


class TestForcedBets:
    def test_blinds_stay_in_front_of_players(self, table):
        players = table(3)
        posted = post_blinds(players, 2, 0, 25, 50)
        assert posted == 75
        assert players[2].current_bet == 25 and players[2].chips == 975
        assert players[0].current_bet == 50 and players[0].total_bet == 50
        # Posting is not acting: the big blind keeps its option
        assert players[0].last_action is None

    def test_short_stack_posts_all_in(self, table):
        players = table(2)
        players[0].chips = 30
        post_blinds(players, 1, 0, 25, 50)
        assert players[0].current_bet == 30
        assert players[0].all_in

    def test_antes_are_dead_money(self, table):
        players = table(3)
        players[1].chips = 5
        collected = post_antes(players, 10)
        assert collected == 25
        assert [p.total_bet for p in players] == [10, 5, 10]
        assert all(p.current_bet == 0 for p in players)
        assert players[1].all_in
