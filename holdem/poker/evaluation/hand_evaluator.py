"""
Poker hand evaluation for Texas Hold'em.

This module finds the best 5-card hand out of up to seven cards. Five cards
are classified directly; six or seven cards are handled by trying every
5-card subset and keeping the strongest one.
"""

from functools import lru_cache
from itertools import combinations
from typing import Dict, List, Sequence, Tuple

from holdem.poker.core.cards import Card
from holdem.poker.core.hand import HandEvaluation, HandRank

# Pre-computed rank names for fast lookup (index 0-14, only 2-14 valid)
_RANK_NAMES = (
    "",
    "",
    "Two",
    "Three",
    "Four",
    "Five",
    "Six",
    "Seven",
    "Eight",
    "Nine",
    "Ten",
    "Jack",
    "Queen",
    "King",
    "Ace",
)
_PLURAL_NAMES = {6: "Sixes"}

WHEEL_RANKS = frozenset({14, 2, 3, 4, 5})


def _rank_name(rank: int) -> str:
    """Get the name of a rank."""
    return _RANK_NAMES[rank] if 2 <= rank <= 14 else str(rank)


def _plural(rank: int) -> str:
    return _PLURAL_NAMES.get(rank, f"{_rank_name(rank)}s")


def _classify_five(
    ranks: List[int], suits: List[int]
) -> Tuple[HandRank, str, List[int], List[int], int]:
    """Core 5-card classification.

    Args:
        ranks: List of 5 card ranks (integers 2-14), sorted descending
        suits: List of 5 card suits (integers 0-3), in same order as ranks

    Returns:
        Tuple of (rank, description, primary_ranks, kickers, straight_high).
        ``straight_high`` is 0 unless the hand is a straight of some kind.
    """
    rank_count: Dict[int, int] = {}
    for r in ranks:
        rank_count[r] = rank_count.get(r, 0) + 1

    # Sort by (count desc, rank desc)
    groups = sorted(rank_count.items(), key=lambda x: (x[1], x[0]), reverse=True)

    is_flush = len(set(suits)) == 1

    # Straight detection, the wheel plays as a five-high straight
    straight_high = 0
    if len(rank_count) == 5:
        if ranks[0] - ranks[4] == 4:
            straight_high = ranks[0]
        elif set(ranks) == WHEEL_RANKS:
            straight_high = 5

    if straight_high and is_flush:
        if straight_high == 14:
            return (HandRank.ROYAL_FLUSH, "Royal Flush", [14], [], straight_high)
        return (
            HandRank.STRAIGHT_FLUSH,
            f"Straight Flush, {_rank_name(straight_high)} high",
            [straight_high],
            [],
            straight_high,
        )

    if groups[0][1] == 4:
        quad_rank, kicker = groups[0][0], groups[1][0]
        return (HandRank.FOUR_OF_KIND, f"Four {_plural(quad_rank)}", [quad_rank], [kicker], 0)

    if groups[0][1] == 3 and groups[1][1] == 2:
        trips_rank, pair_rank = groups[0][0], groups[1][0]
        return (
            HandRank.FULL_HOUSE,
            f"Full House, {_plural(trips_rank)} over {_plural(pair_rank)}",
            [trips_rank, pair_rank],
            [],
            0,
        )

    if is_flush:
        return (HandRank.FLUSH, f"Flush, {_rank_name(ranks[0])} high", [], list(ranks), 0)

    if straight_high:
        return (
            HandRank.STRAIGHT,
            f"Straight, {_rank_name(straight_high)} high",
            [straight_high],
            [],
            straight_high,
        )

    if groups[0][1] == 3:
        trips_rank = groups[0][0]
        kickers = [rank for rank, _ in groups[1:]]
        return (HandRank.THREE_OF_KIND, f"Three {_plural(trips_rank)}", [trips_rank], kickers, 0)

    if groups[0][1] == 2 and groups[1][1] == 2:
        high_pair, low_pair = groups[0][0], groups[1][0]
        return (
            HandRank.TWO_PAIR,
            f"Two Pair, {_plural(high_pair)} and {_plural(low_pair)}",
            [high_pair, low_pair],
            [groups[2][0]],
            0,
        )

    if groups[0][1] == 2:
        pair_rank = groups[0][0]
        kickers = [rank for rank, _ in groups[1:]]
        return (HandRank.PAIR, f"Pair of {_plural(pair_rank)}", [pair_rank], kickers, 0)

    return (HandRank.HIGH_CARD, f"High Card {_rank_name(ranks[0])}", [], list(ranks), 0)


def _order_cards(cards: Sequence[Card], primary_ranks: List[int], straight_high: int) -> List[Card]:
    """Order cards for display: made ranks first, the wheel's ace last."""
    if straight_high == 5:
        return sorted(cards, key=lambda c: 1 if c.rank == 14 else int(c.rank), reverse=True)
    position = {rank: i for i, rank in enumerate(primary_ranks)}
    return sorted(
        cards,
        key=lambda c: (-position.get(int(c.rank), len(position)), int(c.rank), int(c.suit)),
        reverse=True,
    )


def _winning_cards(
    rank: HandRank, ordered: List[Card], primary_ranks: List[int]
) -> Tuple[Card, ...]:
    """The exact cards that make the tier."""
    if rank in (HandRank.FOUR_OF_KIND, HandRank.THREE_OF_KIND, HandRank.TWO_PAIR, HandRank.PAIR):
        return tuple(card for card in ordered if int(card.rank) in primary_ranks)
    if rank == HandRank.HIGH_CARD:
        return tuple(ordered[:1])
    return tuple(ordered)


@lru_cache(maxsize=8192)
def _evaluate_five_cached(five_cards: Tuple[Card, ...]) -> HandEvaluation:
    """Cached evaluation of exactly five cards sorted by rank descending."""
    ranks = [int(c.rank) for c in five_cards]
    suits = [int(c.suit) for c in five_cards]

    rank, description, primary_ranks, kickers, straight_high = _classify_five(ranks, suits)
    ordered = _order_cards(five_cards, primary_ranks, straight_high)
    return HandEvaluation(
        rank=rank,
        description=description,
        cards=tuple(ordered),
        winning_cards=_winning_cards(rank, ordered, primary_ranks),
        primary_ranks=tuple(primary_ranks),
        kickers=tuple(kickers),
    )


def _sort_key(card: Card) -> Tuple[int, int]:
    return (int(card.rank), int(card.suit))


def _evaluate_partial(cards: List[Card]) -> HandEvaluation:
    """High-card evaluation for fewer than five cards (UI previews)."""
    ordered = sorted(cards, key=_sort_key, reverse=True)
    if not ordered:
        return HandEvaluation(rank=HandRank.HIGH_CARD, description="No Cards")
    return HandEvaluation(
        rank=HandRank.HIGH_CARD,
        description=f"High Card {_rank_name(int(ordered[0].rank))}",
        cards=tuple(ordered),
        winning_cards=(ordered[0],),
        primary_ranks=(),
        kickers=tuple(int(c.rank) for c in ordered),
    )


def evaluate_cards(cards: Sequence[Card]) -> HandEvaluation:
    """
    Evaluate the best 5-card hand out of the given cards.

    Args:
        cards: Any number of distinct cards, normally 5 to 7

    Returns:
        HandEvaluation with tier, best five cards and the cards that make it

    Raises:
        ValueError: If the same card appears twice
    """
    card_list = list(cards)
    if len(set(card_list)) != len(card_list):
        raise ValueError(f"Duplicate cards in hand: {[str(c) for c in card_list]}")

    if len(card_list) < 5:
        return _evaluate_partial(card_list)

    ordered = sorted(card_list, key=_sort_key, reverse=True)
    if len(ordered) == 5:
        return _evaluate_five_cached(tuple(ordered))

    best = None
    # combinations() keeps the descending order of its input
    for five in combinations(ordered, 5):
        candidate = _evaluate_five_cached(five)
        if best is None or candidate.beats(best):
            best = candidate
    return best


def evaluate_hand(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> HandEvaluation:
    """Evaluate a player's best hand from hole cards plus the board."""
    return evaluate_cards(list(hole_cards) + list(community_cards))


def find_winners(evaluations: Dict[str, HandEvaluation]) -> List[str]:
    """Ids of every player holding the best hand, in input order."""
    best = None
    winners: List[str] = []
    for player_id, evaluation in evaluations.items():
        if best is None or evaluation.beats(best):
            best = evaluation
            winners = [player_id]
        elif evaluation.ties(best):
            winners.append(player_id)
    return winners
