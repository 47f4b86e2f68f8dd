"""
Seat roles, forced bets and seat rotation.

Seats keep their index for the whole session. Eliminated players stay in the
seat list but are skipped by every rotation and receive no position.
"""

import logging
from typing import Dict, List, Optional, Tuple

from holdem.config.poker import POKER_MAX_PLAYERS, POKER_MIN_PLAYERS
from holdem.poker.core.game_state import NO_SEAT, Player, Position

logger = logging.getLogger(__name__)

# Table-size-aware seat names, indexed by offset from the button
POSITION_NAMES: Dict[int, Tuple[str, ...]] = {
    2: ("BTN", "BB"),
    3: ("BTN", "SB", "BB"),
    4: ("BTN", "SB", "BB", "CO"),
    5: ("BTN", "SB", "BB", "UTG", "CO"),
    6: ("BTN", "SB", "BB", "UTG", "HJ", "CO"),
    7: ("BTN", "SB", "BB", "UTG", "MP", "HJ", "CO"),
    8: ("BTN", "SB", "BB", "UTG", "UTG+1", "MP", "HJ", "CO"),
    9: ("BTN", "SB", "BB", "UTG", "UTG+1", "UTG+2", "MP", "HJ", "CO"),
}


def position_for_offset(offset: int, seated_count: int) -> Position:
    """Seat role for a player ``offset`` seats after the dealer."""
    if seated_count == 2:
        return Position.SMALL_BLIND if offset == 0 else Position.BIG_BLIND
    if offset == 0:
        return Position.DEALER
    if offset == 1:
        return Position.SMALL_BLIND
    if offset == 2:
        return Position.BIG_BLIND
    if offset <= 4:
        return Position.EARLY
    if offset <= 6:
        return Position.MIDDLE
    return Position.LATE


def position_name(offset: int, seated_count: int) -> str:
    """Short seat name (BTN, SB, BB, UTG, ...) for 2-9 seated players."""
    if not POKER_MIN_PLAYERS <= seated_count <= POKER_MAX_PLAYERS:
        raise ValueError(
            f"Invalid player count {seated_count}. Must be between "
            f"{POKER_MIN_PLAYERS} and {POKER_MAX_PLAYERS}."
        )
    return POSITION_NAMES[seated_count][offset % seated_count]


def seated_order(players: List[Player], dealer_index: int) -> List[Player]:
    """Non-eliminated players starting with the dealer, clockwise."""
    count = len(players)
    rotated = [players[(dealer_index + i) % count] for i in range(count)]
    return [p for p in rotated if not p.eliminated]


def assign_positions(players: List[Player], dealer_index: int) -> List[Player]:
    """Label every seated player by their offset from the dealer."""
    seated = seated_order(players, dealer_index)
    for player in players:
        if player.eliminated:
            player.position = None
            player.position_name = ""
    for offset, player in enumerate(seated):
        player.position = position_for_offset(offset, len(seated))
        if len(seated) >= POKER_MIN_PLAYERS:
            player.position_name = position_name(offset, len(seated))
    return players


def _next_seat(players: List[Player], from_index: int, qualifies) -> int:
    count = len(players)
    for step in range(1, count + 1):
        index = (from_index + step) % count
        if qualifies(players[index]):
            return index
    return NO_SEAT


def next_dealer_seat(players: List[Player], dealer_index: int) -> int:
    """Next non-eliminated seat clockwise from the current dealer."""
    return _next_seat(players, dealer_index, lambda p: not p.eliminated)


def next_active_seat(players: List[Player], from_index: int) -> int:
    """Next seat clockwise whose player can still act (not folded, all-in or eliminated)."""
    return _next_seat(players, from_index, lambda p: p.can_act)


def blind_seats(players: List[Player], dealer_index: int) -> Tuple[int, int]:
    """Small and big blind seats; heads-up the dealer posts the small blind."""
    seated = [p for p in players if not p.eliminated]
    if len(seated) < POKER_MIN_PLAYERS:
        return NO_SEAT, NO_SEAT
    if len(seated) == 2:
        small_blind = dealer_index
    else:
        small_blind = next_dealer_seat(players, dealer_index)
    big_blind = next_dealer_seat(players, small_blind)
    return small_blind, big_blind


def _post(player: Optional[Player], amount: int) -> int:
    if player is None or player.eliminated or amount <= 0:
        return 0
    return player.commit(amount)


def post_blinds(
    players: List[Player],
    small_blind_index: int,
    big_blind_index: int,
    small_blind: int,
    big_blind: int,
) -> int:
    """Post both blinds, returning the chips actually posted.

    A short stack posts whatever it has and is marked all-in. Blinds stay in
    front of the players as current bets until the street ends. Posting a
    blind is not an action, so ``last_action`` is left untouched and the big
    blind keeps its option.
    """
    sb_player = players[small_blind_index] if small_blind_index != NO_SEAT else None
    bb_player = players[big_blind_index] if big_blind_index != NO_SEAT else None
    posted = _post(sb_player, small_blind) + _post(bb_player, big_blind)
    logger.debug(f"Blinds posted: {posted} (nominal {small_blind}/{big_blind})")
    return posted


def post_antes(players: List[Player], ante: int) -> int:
    """Collect an ante from every seated player, returning the total.

    Antes are dead money: they count towards ``total_bet`` but not towards
    the current street bet, so the caller adds the total to the settled pot.
    """
    if ante <= 0:
        return 0
    collected = 0
    for player in players:
        if player.eliminated:
            continue
        paid = min(ante, player.chips)
        player.chips -= paid
        player.total_bet += paid
        if player.chips == 0:
            player.all_in = True
        collected += paid
    return collected
