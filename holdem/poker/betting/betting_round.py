"""
Betting round state machine.

``apply_action`` is the only way a hand moves forward. It validates the
action against the acting player's legal set, applies it, and then runs
every transition the action triggers before returning: sweeping bets into
the pot, dealing the next street, running the board out when nobody can bet
any more, and paying the showdown.
"""

import logging
from typing import Optional, Set, Tuple, Union

from holdem.config.poker import POKER_BURN_CARDS
from holdem.exceptions import IllegalActionError
from holdem.poker.betting.actions import GamePhase, PlayerAction
from holdem.poker.core.game_state import NO_SEAT, GameState, Player
from holdem.poker.evaluation.hand_evaluator import evaluate_hand, find_winners
from holdem.poker.pots import settle_pots
from holdem.poker.table import next_active_seat

logger = logging.getLogger(__name__)

# Community cards revealed when entering each street
_STREET_CARDS = {GamePhase.FLOP: 3, GamePhase.TURN: 1, GamePhase.RIVER: 1}


def legal_actions_for(state: GameState, player: Player) -> Set[PlayerAction]:
    """Actions the betting rules allow ``player``, ignoring whose turn it is."""
    if not player.can_act:
        return set()
    to_call = state.amount_to_call(player)
    min_raise = state.betting_round.min_raise
    actions: Set[PlayerAction] = set()
    if to_call > 0:
        actions.add(PlayerAction.FOLD)
        if player.chips > 0:
            actions.add(PlayerAction.CALL)
        if player.chips >= to_call + min_raise:
            actions.add(PlayerAction.RAISE)
    else:
        actions.add(PlayerAction.CHECK)
        if player.chips >= min_raise:
            actions.add(PlayerAction.BET)
    if player.chips > 0:
        actions.add(PlayerAction.ALL_IN)
    return actions


def get_legal_actions(state: GameState, player_id: str) -> Set[PlayerAction]:
    """Legal actions for ``player_id``; empty unless it is that player's turn."""
    if state.game_over or state.is_hand_over:
        return set()
    player = state.current_player
    if player is None or player.player_id != player_id:
        return set()
    return legal_actions_for(state, player)


def bet_bounds(state: GameState, player: Player) -> Tuple[int, int]:
    """Smallest and largest street total ``player`` may bet or raise to."""
    return state.highest_bet + state.betting_round.min_raise, player.current_bet + player.chips


def is_betting_round_complete(players) -> bool:
    """Whether the current street's betting is over.

    Players who can still act must all have acted this street and matched
    the highest bet. With at most one such player the street is over; the
    engine separately gives a lone player who still owes chips the chance
    to respond (see ``lone_actor_owes``).
    """
    active = [p for p in players if p.can_act]
    if len(active) <= 1:
        return True
    highest = max((p.current_bet for p in players if not p.eliminated), default=0)
    return all(p.last_action is not None and p.current_bet >= highest for p in active)


def lone_actor_owes(players) -> bool:
    """True when exactly one player can act and is short of the highest bet."""
    active = [p for p in players if p.can_act]
    if len(active) != 1:
        return False
    highest = max((p.current_bet for p in players if not p.eliminated), default=0)
    return active[0].current_bet < highest


def _coerce_action(action: Union[PlayerAction, str]) -> PlayerAction:
    if isinstance(action, PlayerAction):
        return action
    try:
        return PlayerAction.parse(action)
    except ValueError as e:
        raise IllegalActionError(f"Unknown action: {action!r}") from e


def apply_action(
    state: GameState, action: Union[PlayerAction, str], amount: Optional[int] = None
) -> GameState:
    """
    Apply the current player's action and every transition it triggers.

    Args:
        state: Table state, mutated in place
        action: The action to take
        amount: For bet/raise, the street total to bet to (defaults to the minimum)

    Returns:
        The same state object

    Raises:
        IllegalActionError: If the action is not legal for the current player
            or the bet size is out of bounds. Nothing is mutated in that case.
    """
    action = _coerce_action(action)
    player = state.current_player
    if state.game_over or player is None:
        raise IllegalActionError(f"No player is due to act (phase {state.phase.label})")

    legal = legal_actions_for(state, player)
    if action not in legal:
        raise IllegalActionError(
            f"{player.name} cannot {action.value}; legal actions: "
            f"{sorted(a.value for a in legal)}"
        )

    target = None
    if action in (PlayerAction.BET, PlayerAction.RAISE):
        min_total, max_total = bet_bounds(state, player)
        target = min_total if amount is None else int(amount)
        if not min_total <= target <= max_total:
            raise IllegalActionError(
                f"{player.name} cannot {action.value} to {target}; "
                f"allowed range is {min_total}-{max_total}"
            )

    previous_high = state.highest_bet
    paid = 0
    if action == PlayerAction.FOLD:
        player.folded = True
    elif action == PlayerAction.CALL:
        paid = player.commit(state.amount_to_call(player))
    elif action in (PlayerAction.BET, PlayerAction.RAISE):
        paid = player.commit(target - player.current_bet)
        _register_raise(state, player, previous_high)
    elif action == PlayerAction.ALL_IN:
        paid = player.commit(player.chips)
        if player.current_bet > previous_high:
            _register_raise(state, player, previous_high)

    player.last_action = action
    state.record(player, action.value, paid)
    state.message = _describe(player, action, paid)
    logger.debug(f"Hand {state.hand_number} {state.phase.label}: {state.message}")

    _advance(state)
    return state


def _describe(player: Player, action: PlayerAction, paid: int) -> str:
    if action == PlayerAction.FOLD:
        return f"{player.name} folds"
    if action == PlayerAction.CHECK:
        return f"{player.name} checks"
    if action == PlayerAction.CALL:
        return f"{player.name} calls {paid}"
    if action == PlayerAction.ALL_IN:
        return f"{player.name} is all-in for {player.current_bet}"
    verb = "bets" if action == PlayerAction.BET else "raises to"
    return f"{player.name} {verb} {player.current_bet}"


def _register_raise(state: GameState, player: Player, previous_high: int) -> None:
    """Track the aggressor; only a full-sized raise changes the minimum raise."""
    increment = player.current_bet - previous_high
    if increment >= state.betting_round.min_raise:
        state.betting_round.min_raise = increment
    state.betting_round.last_aggressor = player.seat


def _advance(state: GameState) -> None:
    contenders = state.players_in_hand()
    if len(contenders) == 1:
        _award_uncontested(state, contenders[0])
        return

    if is_betting_round_complete(state.players) and not lone_actor_owes(state.players):
        settle_round(state)
        return

    next_seat = next_active_seat(state.players, state.betting_round.current_player)
    if next_seat == NO_SEAT:
        settle_round(state)
        return
    state.betting_round.current_player = next_seat


def collect_bets(state: GameState) -> int:
    """Sweep every current-street bet into the settled pot."""
    swept = 0
    for player in state.players:
        swept += player.current_bet
        player.current_bet = 0
    state.pot += swept
    return swept


def settle_round(state: GameState) -> None:
    """Close the current street and move on to the next one or the showdown.

    When fewer than two players can still bet, the remaining streets are
    dealt without betting.
    """
    state.betting_round.completed = True
    collect_bets(state)

    while True:
        if state.phase >= GamePhase.RIVER:
            _showdown(state)
            return

        state.phase = GamePhase(state.phase + 1)
        for _ in range(POKER_BURN_CARDS):
            state.deck.burn()
        state.community_cards.extend(state.deck.deal(_STREET_CARDS[state.phase]))
        for player in state.players:
            player.last_action = None
        state.betting_round.min_raise = state.blinds.big_blind
        state.betting_round.last_aggressor = None
        state.betting_round.completed = False
        logger.debug(
            f"Hand {state.hand_number}: {state.phase.label} "
            f"{' '.join(c.code for c in state.community_cards)} (pot {state.pot})"
        )

        if sum(1 for p in state.players if p.can_act) >= 2:
            state.betting_round.current_player = next_active_seat(state.players, state.dealer_index)
            return
        state.betting_round.current_player = NO_SEAT


def _finish(state: GameState, payouts, winners, phase: GamePhase) -> None:
    state.final_pot = state.pot
    for player in state.players:
        player.chips += payouts.get(player.player_id, 0)
    state.payouts = dict(payouts)
    state.winners = list(winners)
    state.pot = 0
    state.phase = phase
    state.betting_round.current_player = NO_SEAT
    state.betting_round.completed = True


def _award_uncontested(state: GameState, winner: Player) -> None:
    collect_bets(state)
    amount = state.pot
    _finish(state, {winner.player_id: amount}, [winner.player_id], GamePhase.HAND_COMPLETE)
    state.message = f"{winner.name} wins {amount}"
    logger.info(f"Hand {state.hand_number}: {winner.name} wins {amount} uncontested")


def _showdown(state: GameState) -> None:
    contenders = state.players_in_hand()
    state.evaluations = {
        p.player_id: evaluate_hand(p.hole_cards, state.community_cards) for p in contenders
    }
    pots, payouts = settle_pots(state.players, state.evaluations)
    state.side_pots = pots

    winners = []
    for pot in pots:
        if len(pot.eligible_player_ids) < 2:
            continue
        for player_id in find_winners({pid: state.evaluations[pid] for pid in pot.eligible_player_ids}):
            if player_id not in winners:
                winners.append(player_id)

    _finish(state, payouts, winners, GamePhase.SHOWDOWN)

    names = {p.player_id: p.name for p in state.players}
    best = state.evaluations[winners[0]].description if winners else ""
    if len(winners) == 1:
        state.message = f"{names[winners[0]]} wins {payouts.get(winners[0], 0)} with {best}"
    else:
        state.message = f"Split pot between {', '.join(names[w] for w in winners)} with {best}"
    logger.info(f"Hand {state.hand_number} showdown: {state.message}")
