"""
Main pot and side pot accounting.

Pots are built from each player's cumulative contribution this hand
(``Player.total_bet``). Every distinct contribution level of a player still
in the hand closes a layer; the first layer is the main pot and each later
layer is a side pot open only to the players who reached it.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Tuple

from holdem.poker.core.game_state import Player
from holdem.poker.core.hand import HandEvaluation
from holdem.poker.evaluation.hand_evaluator import find_winners

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SidePot:
    """A pot layer and the players who may win it, in seat order."""

    amount: int
    eligible_player_ids: List[str] = field(default_factory=list)
    threshold: int = 0  # Contribution level that closes this layer

    def to_dict(self) -> dict:
        return {
            "amount": self.amount,
            "eligible_player_ids": list(self.eligible_player_ids),
            "threshold": self.threshold,
        }


def build_pots(players: List[Player]) -> List[SidePot]:
    """Layer the contributions of non-folded players into pots, main pot first."""
    contenders = [p for p in players if p.in_hand]
    pots: List[SidePot] = []
    previous = 0
    for level in sorted({p.total_bet for p in contenders}):
        if level <= previous:
            continue
        eligible = [p.player_id for p in contenders if p.total_bet >= level]
        pots.append(SidePot((level - previous) * len(eligible), eligible, level))
        previous = level
    return pots


def compute_side_pots(players: List[Player]) -> Tuple[int, List[SidePot]]:
    """Split non-folded contributions into the main pot amount and the side pots."""
    pots = build_pots(players)
    if not pots:
        return 0, []
    return pots[0].amount, pots[1:]


def add_dead_money(pots: List[SidePot], players: List[Player]) -> List[SidePot]:
    """Add folded players' contributions to the layers they reached.

    Chips above the highest layer go to the last pot so that every committed
    chip is paid out.
    """
    if not pots:
        return pots
    extra = [0] * len(pots)
    for player in players:
        if not player.folded or player.total_bet <= 0:
            continue
        previous = 0
        for i, pot in enumerate(pots):
            portion = min(player.total_bet, pot.threshold) - previous
            if portion <= 0:
                break
            extra[i] += portion
            previous = pot.threshold
        overflow = player.total_bet - pots[-1].threshold
        if overflow > 0:
            extra[-1] += overflow
    return [replace(pot, amount=pot.amount + add) for pot, add in zip(pots, extra)]


def distribute(pots: List[SidePot], evaluations: Mapping[str, HandEvaluation]) -> Dict[str, int]:
    """Pay every pot to the best eligible hand(s).

    Tied winners split evenly; leftover chips go one at a time to the tied
    winners in the pot's seat order, so the same tie always pays the same way.

    Raises:
        ValueError: If a contested pot has an eligible player without an evaluation
    """
    payouts: Dict[str, int] = {}
    for pot in pots:
        if pot.amount <= 0 or not pot.eligible_player_ids:
            continue
        if len(pot.eligible_player_ids) == 1:
            winners = list(pot.eligible_player_ids)
        else:
            missing = [pid for pid in pot.eligible_player_ids if pid not in evaluations]
            if missing:
                raise ValueError(f"No hand evaluation for eligible players: {missing}")
            winners = find_winners({pid: evaluations[pid] for pid in pot.eligible_player_ids})

        share, remainder = divmod(pot.amount, len(winners))
        for i, player_id in enumerate(winners):
            payouts[player_id] = payouts.get(player_id, 0) + share + (1 if i < remainder else 0)
        if len(winners) > 1:
            logger.debug(f"Pot of {pot.amount} split between {winners} (odd chips: {remainder})")
    return payouts


def settle_pots(
    players: List[Player], evaluations: Mapping[str, HandEvaluation]
) -> Tuple[List[SidePot], Dict[str, int]]:
    """Build the final pots (dead money included) and distribute them."""
    pots = add_dead_money(build_pots(players), players)
    return pots, distribute(pots, evaluations)
