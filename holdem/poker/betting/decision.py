"""
Betting decision logic for AI opponents.

Preflop, the AI looks its hand up in a range table and plays it with the
table's frequency, adjusted for its personality. Hands missing from the
range (or when no range applies) go through a fixed tier table. After the
flop it uses a cheap strength score and its personality thresholds. This is
a randomized heuristic: there is no lookahead and no opponent modelling.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, AbstractSet, Optional, Tuple

from holdem.config.poker import (
    POKER_BLUFF_BET_BB_MULTIPLIER,
    POKER_BLUFF_HAND_THRESHOLD,
    POKER_LOOSE_FOLD_THRESHOLD,
    POKER_LOOSE_FREQUENCY_SCALE,
    POKER_LOOSE_TIER_MAX_FOLD_THRESHOLD,
    POKER_LOOSE_TIER_PLAY_PROBABILITY,
    POKER_MEDIUM_TIER_FOLD_WEIGHT,
    POKER_RANGE_BET_BB_BASE,
    POKER_STRONG_HAND_THRESHOLD,
    POKER_STRONG_TIER_FOLD_WEIGHT,
    POKER_TIGHT_FOLD_THRESHOLD,
    POKER_TIGHT_FREQUENCY_SCALE,
    POKER_VALUE_BET_BB_BASE,
    POKER_WEAK_HAND_THRESHOLD,
)
from holdem.exceptions import IllegalActionError, MalformedRangeError
from holdem.poker.betting.actions import PlayerAction
from holdem.poker.core.cards import Card
from holdem.poker.core.game_state import Player
from holdem.poker.evaluation.strength import current_pot, simple_hand_strength
from holdem.poker.strategy.personality import AI_PERSONALITIES, AIPersonality
from holdem.poker.strategy.ranges import DEFAULT_RANGE_REGISTRY, RangeRegistry, hand_notation

if TYPE_CHECKING:
    from holdem.poker.core.game_state import GameState

logger = logging.getLogger(__name__)

PREMIUM_HANDS = frozenset({"AA", "KK", "QQ", "JJ", "AKs", "AKo"})
STRONG_HANDS = frozenset({"TT", "99", "AQs", "AQo", "AJs", "KQs", "ATs"})
MEDIUM_HANDS = frozenset({"88", "77", "66", "AJo", "KQo", "KJs", "QJs", "JTs", "A9s", "KTs"})
LOOSE_HANDS = frozenset(
    {"55", "44", "33", "22", "A8s", "A7s", "A6s", "A5s", "K9s", "Q9s", "J9s", "T9s", "98s"}
)

# Preference order when a decision has to fall back to a passive action
_PASSIVE_ORDER = (PlayerAction.CHECK, PlayerAction.CALL, PlayerAction.FOLD, PlayerAction.ALL_IN)


@dataclass(frozen=True)
class TableContext:
    """What an AI can see of the table when it decides."""

    big_blind: int
    pot: int = 0  # Settled pot plus bets in front of players
    highest_bet: int = 0
    to_call: int = 0
    community_cards: Tuple[Card, ...] = ()

    @classmethod
    def from_state(cls, state: "GameState", player: Player) -> "TableContext":
        return cls(
            big_blind=state.blinds.big_blind,
            pot=current_pot(state),
            highest_bet=state.highest_bet,
            to_call=state.amount_to_call(player),
            community_cards=tuple(state.community_cards),
        )


@dataclass(frozen=True)
class AIDecision:
    """An action and, for bets and raises, the street total to bet to."""

    action: PlayerAction
    amount: Optional[int] = None


def _size(amount: float, min_bet: int, max_bet: int) -> int:
    """Floor a bet size and clamp it into [min_bet, max_bet]."""
    return max(min_bet, min(int(math.floor(amount)), max_bet))


def _passive(legal_actions: AbstractSet[PlayerAction]) -> AIDecision:
    for action in _PASSIVE_ORDER:
        if action in legal_actions:
            return AIDecision(action)
    raise IllegalActionError("No legal action available")


def _check_or_fold(legal_actions: AbstractSet[PlayerAction]) -> AIDecision:
    if PlayerAction.CHECK in legal_actions:
        return AIDecision(PlayerAction.CHECK)
    if PlayerAction.FOLD in legal_actions:
        return AIDecision(PlayerAction.FOLD)
    return _passive(legal_actions)


def _adjusted_frequency(frequency: float, personality: AIPersonality) -> float:
    if personality.fold_threshold > POKER_TIGHT_FOLD_THRESHOLD:
        frequency *= POKER_TIGHT_FREQUENCY_SCALE
    if personality.fold_threshold < POKER_LOOSE_FOLD_THRESHOLD:
        frequency = min(1.0, frequency * POKER_LOOSE_FREQUENCY_SCALE)
    return frequency


def _tier_check(notation: str, personality: AIPersonality, rng: random.Random) -> Tuple[bool, str]:
    """Fixed premium/strong/medium/loose table used when no range entry applies."""
    if notation in PREMIUM_HANDS:
        return True, "raise"
    if notation in STRONG_HANDS:
        play = rng.random() < 1 - personality.fold_threshold * POKER_STRONG_TIER_FOLD_WEIGHT
        return play, "raise" if rng.random() < personality.raise_bias else "call"
    if notation in MEDIUM_HANDS:
        return rng.random() < 1 - personality.fold_threshold * POKER_MEDIUM_TIER_FOLD_WEIGHT, "call"
    if personality.fold_threshold < POKER_LOOSE_TIER_MAX_FOLD_THRESHOLD and notation in LOOSE_HANDS:
        return rng.random() < POKER_LOOSE_TIER_PLAY_PROBABILITY, "call"
    return False, "fold"


def check_hand_against_range(
    notation: str,
    personality: AIPersonality,
    rng: random.Random,
    ranges: Optional[RangeRegistry] = None,
) -> Tuple[bool, str]:
    """Roll whether to play a starting hand and return (play, recommended action)."""
    registry = ranges or DEFAULT_RANGE_REGISTRY
    ai_range = personality.custom_range or registry.get(personality.preflop_range)

    entry = None
    if ai_range is not None:
        try:
            entry = ai_range.lookup(notation)
        except MalformedRangeError as e:
            logger.warning(f"{personality.name}: ignoring range {ai_range.name!r}: {e}")

    if entry is None:
        return _tier_check(notation, personality, rng)

    frequency = _adjusted_frequency(entry.frequency, personality)
    return rng.random() < frequency and entry.action != "fold", entry.action


def _range_decision(
    player: Player,
    personality: AIPersonality,
    context: TableContext,
    legal_actions: AbstractSet[PlayerAction],
    min_bet: int,
    max_bet: int,
    rng: random.Random,
    ranges: Optional[RangeRegistry],
) -> Optional[AIDecision]:
    notation = hand_notation(player.hole_cards)
    if notation is None:
        return None

    play, recommended = check_hand_against_range(notation, personality, rng, ranges)
    if not play:
        return _check_or_fold(legal_actions)

    if recommended == "raise":
        if PlayerAction.RAISE in legal_actions:
            return AIDecision(
                PlayerAction.RAISE, _size(min_bet * (1 + personality.raise_bias), min_bet, max_bet)
            )
        if PlayerAction.BET in legal_actions:
            bet = context.big_blind * (POKER_RANGE_BET_BB_BASE + personality.aggressiveness)
            return AIDecision(PlayerAction.BET, _size(bet, min_bet, max_bet))

    if PlayerAction.CALL in legal_actions:
        return AIDecision(PlayerAction.CALL)
    if PlayerAction.CHECK in legal_actions:
        return AIDecision(PlayerAction.CHECK)
    return None


def _postflop_decision(
    player: Player,
    personality: AIPersonality,
    context: TableContext,
    legal_actions: AbstractSet[PlayerAction],
    min_bet: int,
    max_bet: int,
    rng: random.Random,
) -> AIDecision:
    strength = simple_hand_strength(player.hole_cards, context.community_cards)
    roll = rng.random()

    if strength < POKER_WEAK_HAND_THRESHOLD and roll > 1 - personality.fold_threshold:
        return _check_or_fold(legal_actions)

    if strength > POKER_STRONG_HAND_THRESHOLD and roll < personality.aggressiveness:
        if PlayerAction.RAISE in legal_actions:
            return AIDecision(
                PlayerAction.RAISE, _size(min_bet * (1 + personality.raise_bias), min_bet, max_bet)
            )
        if PlayerAction.BET in legal_actions:
            bet = context.big_blind * (POKER_VALUE_BET_BB_BASE + personality.aggressiveness)
            return AIDecision(PlayerAction.BET, _size(bet, min_bet, max_bet))

    if (
        roll < personality.bluff_frequency
        and strength < POKER_BLUFF_HAND_THRESHOLD
        and PlayerAction.BET in legal_actions
    ):
        bluff = context.big_blind * POKER_BLUFF_BET_BB_MULTIPLIER
        return AIDecision(PlayerAction.BET, _size(bluff, min_bet, max_bet))

    return _passive(legal_actions)


def decide_action(
    player: Player,
    context: TableContext,
    legal_actions: AbstractSet[PlayerAction],
    min_bet: int,
    max_bet: int,
    rng: random.Random,
    ranges: Optional[RangeRegistry] = None,
) -> AIDecision:
    """
    Choose an action for an AI player.

    Args:
        player: The acting player (hole cards and personality are read)
        context: Visible table state
        legal_actions: Actions the engine currently allows this player
        min_bet: Smallest legal street total for a bet or raise
        max_bet: Largest street total the player can reach (all chips)
        rng: Random source for every roll
        ranges: Range registry to resolve named ranges (defaults to the built-ins)

    Returns:
        An AIDecision whose action is always in ``legal_actions``

    Raises:
        IllegalActionError: If ``legal_actions`` is empty
    """
    if not legal_actions:
        raise IllegalActionError(f"{player.name} has no legal actions")

    personality = player.personality or AI_PERSONALITIES["BALANCED"]

    decision = None
    if len(player.hole_cards) == 2 and not context.community_cards:
        decision = _range_decision(
            player, personality, context, legal_actions, min_bet, max_bet, rng, ranges
        )
    if decision is None:
        decision = _postflop_decision(
            player, personality, context, legal_actions, min_bet, max_bet, rng
        )

    if decision.action not in legal_actions:
        decision = _passive(legal_actions)
    logger.debug(
        f"{player.name} ({personality.name}) decides {decision.action.value}"
        + (f" to {decision.amount}" if decision.amount is not None else "")
    )
    return decision
