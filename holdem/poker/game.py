"""
Game service: the operations a trainer front end drives.

``initialize_game`` seats a table and deals the first hand,
``start_new_hand`` carries stacks into a fresh hand, and ``apply_action`` /
``get_legal_actions`` (re-exported from the betting round) move a hand
forward. A table with fewer than two players holding chips produces a
terminal state with ``game_over`` set instead of raising.
"""

import logging
import random
from typing import List, Optional

from holdem.config.game_settings import GameSettings
from holdem.config.poker import (
    POKER_HOLE_CARDS,
    POKER_HUMAN_NAME,
    POKER_HUMAN_SEAT,
    POKER_MAX_PLAYERS,
    POKER_MIN_PLAYERS,
)
from holdem.exceptions import ConfigurationError, IllegalActionError
from holdem.poker.betting.actions import ANTE, BIG_BLIND, SMALL_BLIND, GamePhase
from holdem.poker.betting.betting_round import (
    apply_action,
    bet_bounds,
    get_legal_actions,
    is_betting_round_complete,
    legal_actions_for,
    lone_actor_owes,
    settle_round,
)
from holdem.poker.betting.decision import AIDecision, TableContext, decide_action
from holdem.poker.core.cards import Deck
from holdem.poker.core.game_state import NO_SEAT, BettingRound, GameState, Player
from holdem.poker.strategy.personality import personality_for_seat
from holdem.poker.strategy.ranges import RangeRegistry
from holdem.poker.table import (
    assign_positions,
    blind_seats,
    next_active_seat,
    next_dealer_seat,
    post_antes,
    post_blinds,
    seated_order,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ai_decision",
    "apply_action",
    "get_legal_actions",
    "initialize_game",
    "play_ai_turn",
    "start_new_hand",
]


def _create_players(player_count: int, settings: GameSettings) -> List[Player]:
    players = []
    for seat in range(player_count):
        is_human = settings.has_human and seat == POKER_HUMAN_SEAT
        ai_index = seat - 1 if settings.has_human else seat
        players.append(
            Player(
                player_id=f"player{seat + 1}",
                name=POKER_HUMAN_NAME if is_human else f"Player {seat + 1}",
                seat=seat,
                chips=settings.starting_stack,
                is_human=is_human,
                personality=(
                    None if is_human else personality_for_seat(ai_index, settings.ai_personalities)
                ),
            )
        )
    return players


def _carry_over(player: Player) -> Player:
    """Fresh per-hand copy of a player keeping identity, stack and elimination."""
    return Player(
        player_id=player.player_id,
        name=player.name,
        seat=player.seat,
        chips=player.chips,
        is_human=player.is_human,
        personality=player.personality,
        eliminated=player.eliminated or player.chips <= 0,
    )


def initialize_game(
    player_count: int,
    previous_dealer_index: Optional[int] = None,
    settings: Optional[GameSettings] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Seat a new table and deal its first hand.

    Args:
        player_count: Number of seats (2-9)
        previous_dealer_index: Dealer of the previous session; the button moves
            one seat on from it. Defaults to the last seat holding the button.
        settings: Stakes, game type and AI personalities
        rng: Random source for shuffles

    Raises:
        ConfigurationError: If the player count or the settings are invalid
    """
    settings = (settings or GameSettings()).validate()
    if not POKER_MIN_PLAYERS <= player_count <= POKER_MAX_PLAYERS:
        raise ConfigurationError(
            f"player_count must be between {POKER_MIN_PLAYERS} and {POKER_MAX_PLAYERS}, "
            f"got {player_count}"
        )
    rng = rng if rng is not None else random.Random()

    players = _create_players(player_count, settings)
    if previous_dealer_index is None:
        dealer_index = player_count - 1
    else:
        dealer_index = (previous_dealer_index + 1) % player_count

    logger.info(
        f"New {settings.game_type.value} table: {player_count} players, "
        f"{settings.starting_stack} chips each"
    )
    return _deal_hand(players, dealer_index, settings, rng, hand_number=1)


def start_new_hand(
    state: GameState,
    settings: Optional[GameSettings] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Start the next hand from a finished one.

    Players without chips are eliminated, the button moves to the next seated
    player and a new deck is dealt. Returns a new ``GameState``.
    """
    settings = settings or state.settings
    rng = rng or state.rng or random.Random()
    players = [_carry_over(p) for p in state.players]

    seated = [p for p in players if not p.eliminated]
    if len(seated) < POKER_MIN_PLAYERS:
        return _game_over_state(state, players, settings, rng)

    dealer_index = next_dealer_seat(players, state.dealer_index)
    return _deal_hand(players, dealer_index, settings, rng, hand_number=state.hand_number + 1)


def _game_over_state(
    previous: GameState, players: List[Player], settings: GameSettings, rng: random.Random
) -> GameState:
    state = GameState(
        players=players,
        deck=Deck(rng),
        blinds=previous.blinds,
        settings=settings,
        dealer_index=previous.dealer_index,
        hand_number=previous.hand_number,
        betting_round=BettingRound(phase=GamePhase.HAND_COMPLETE),
        game_over=True,
        rng=rng,
    )
    survivors = [p for p in players if not p.eliminated]
    if survivors:
        state.message = f"Game over: {survivors[0].name} wins with {survivors[0].chips} chips"
    else:
        state.message = "Game over"
    logger.info(state.message)
    return state


def _deal_hand(
    players: List[Player],
    dealer_index: int,
    settings: GameSettings,
    rng: random.Random,
    hand_number: int,
) -> GameState:
    blinds = settings.blinds_for_hand(hand_number)
    state = GameState(
        players=players,
        deck=Deck(rng),
        blinds=blinds,
        settings=settings,
        dealer_index=dealer_index,
        hand_number=hand_number,
        betting_round=BettingRound(phase=GamePhase.PREFLOP, min_raise=blinds.big_blind),
        rng=rng,
    )
    assign_positions(players, dealer_index)

    if blinds.ante > 0:
        before = {p.player_id: p.total_bet for p in players}
        state.pot += post_antes(players, blinds.ante)
        for player in players:
            paid = player.total_bet - before[player.player_id]
            if paid:
                state.record(player, ANTE, paid)

    small_blind, big_blind = blind_seats(players, dealer_index)
    state.small_blind_index, state.big_blind_index = small_blind, big_blind
    sb_before = players[small_blind].current_bet
    bb_before = players[big_blind].current_bet
    post_blinds(players, small_blind, big_blind, blinds.small_blind, blinds.big_blind)
    state.record(players[small_blind], SMALL_BLIND, players[small_blind].current_bet - sb_before)
    state.record(players[big_blind], BIG_BLIND, players[big_blind].current_bet - bb_before)

    # Deal one card at a time starting left of the button
    deal_order = seated_order(players, dealer_index)
    deal_order = deal_order[1:] + deal_order[:1]
    for _ in range(POKER_HOLE_CARDS):
        for player in deal_order:
            player.hole_cards.append(state.deck.deal_one())

    state.betting_round.current_player = next_active_seat(players, big_blind)
    state.message = f"Hand #{hand_number}: {players[dealer_index].name} has the button"
    logger.info(
        f"Hand {hand_number} dealt: button {players[dealer_index].name}, "
        f"blinds {blinds.small_blind}/{blinds.big_blind}"
        + (f" ante {blinds.ante}" if blinds.ante else "")
    )

    # Forced bets alone can leave nobody able to bet (short stacks all-in)
    if state.betting_round.current_player == NO_SEAT or (
        is_betting_round_complete(players) and not lone_actor_owes(players)
    ):
        settle_round(state)
    return state


def ai_decision(
    state: GameState, rng: random.Random, ranges: Optional[RangeRegistry] = None
) -> AIDecision:
    """Decide, without applying, what the current AI player does."""
    player = state.current_player
    if player is None:
        raise IllegalActionError("No player is due to act")
    if player.is_human:
        raise IllegalActionError(f"{player.name} is not an AI player")
    legal = legal_actions_for(state, player)
    min_bet, max_bet = bet_bounds(state, player)
    context = TableContext.from_state(state, player)
    return decide_action(player, context, legal, min_bet, max_bet, rng, ranges)


def play_ai_turn(
    state: GameState, rng: random.Random, ranges: Optional[RangeRegistry] = None
) -> AIDecision:
    """Decide and apply the current AI player's action."""
    decision = ai_decision(state, rng, ranges)
    apply_action(state, decision.action, decision.amount)
    return decision
