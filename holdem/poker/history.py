"""
Hand history and session statistics.

A ``HandHistory`` is a frozen summary of a finished hand; ``SessionStats``
accumulates histories from the point of view of one player (normally the
human seat).
"""

import time
import uuid
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, Optional, Tuple

from holdem.config.poker import POKER_MAX_HAND_HISTORY
from holdem.poker.betting.actions import ActionRecord
from holdem.poker.core.cards import Card
from holdem.poker.core.game_state import GameState
from holdem.poker.core.hand import HandEvaluation

__all__ = [
    "ActionRecord",
    "HandHistory",
    "PlayerHandRecord",
    "SessionStats",
    "WinnerRecord",
    "create_hand_history",
    "format_duration",
]


@dataclass(frozen=True)
class PlayerHandRecord:
    """One player's part in a finished hand."""

    player_id: str
    name: str
    hole_cards: Tuple[Card, ...]
    evaluation: Optional[HandEvaluation]  # None for players who folded
    final_chips: int
    amount_won: int = 0
    actions: Tuple[ActionRecord, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "hole_cards": [card.code for card in self.hole_cards],
            "evaluation": self.evaluation.to_dict() if self.evaluation else None,
            "final_chips": self.final_chips,
            "amount_won": self.amount_won,
            "actions": [record.to_dict() for record in self.actions],
        }


@dataclass(frozen=True)
class WinnerRecord:
    player_id: str
    name: str
    hole_cards: Tuple[Card, ...]
    evaluation: Optional[HandEvaluation]  # None when everyone else folded
    amount_won: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "hole_cards": [card.code for card in self.hole_cards],
            "evaluation": self.evaluation.to_dict() if self.evaluation else None,
            "amount_won": self.amount_won,
        }


@dataclass(frozen=True)
class HandHistory:
    """Summary of a finished hand."""

    hand_number: int
    community_cards: Tuple[Card, ...]
    final_pot: int
    winner: Optional[WinnerRecord]  # None on a split pot
    winners: Tuple[str, ...]
    players: Tuple[PlayerHandRecord, ...]
    timestamp: float

    @property
    def is_split(self) -> bool:
        return len(self.winners) > 1

    def player(self, player_id: str) -> Optional[PlayerHandRecord]:
        for record in self.players:
            if record.player_id == player_id:
                return record
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hand_number": self.hand_number,
            "community_cards": [card.code for card in self.community_cards],
            "final_pot": self.final_pot,
            "winner": self.winner.to_dict() if self.winner else None,
            "winners": list(self.winners),
            "players": [record.to_dict() for record in self.players],
            "timestamp": self.timestamp,
        }


def create_hand_history(state: GameState) -> HandHistory:
    """Build the history record of a finished hand.

    Raises:
        ValueError: If the hand is still in progress
    """
    if not state.is_hand_over:
        raise ValueError(f"Hand {state.hand_number} is still in progress ({state.phase.label})")

    records = tuple(
        PlayerHandRecord(
            player_id=p.player_id,
            name=p.name,
            hole_cards=tuple(p.hole_cards),
            evaluation=state.evaluations.get(p.player_id),
            final_chips=p.chips,
            amount_won=state.payouts.get(p.player_id, 0),
            actions=tuple(p.actions),
        )
        for p in state.players
        if not p.eliminated or p.actions
    )

    winner = None
    if len(state.winners) == 1:
        player = state.get_player(state.winners[0])
        winner = WinnerRecord(
            player_id=player.player_id,
            name=player.name,
            hole_cards=tuple(player.hole_cards),
            evaluation=state.evaluations.get(player.player_id),
            amount_won=state.payouts.get(player.player_id, 0),
        )

    return HandHistory(
        hand_number=state.hand_number,
        community_cards=tuple(state.community_cards),
        final_pot=state.final_pot,
        winner=winner,
        winners=tuple(state.winners),
        players=records,
        timestamp=time.time(),
    )


def format_duration(seconds: float) -> str:
    """Render a duration as ``"1h 5m"`` or ``"12m"``."""
    minutes = int(seconds // 60)
    hours, remaining = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {remaining}m"
    return f"{minutes}m"


@dataclass
class SessionStats:
    """Running totals for one player across a session.

    Totals cover every recorded hand; ``history`` keeps only the most recent
    ``max_history`` hands (None keeps them all).
    """

    session_id: str = field(default_factory=lambda: f"session_{uuid.uuid4().hex[:12]}")
    start_time: float = field(default_factory=time.time)
    hands_played: int = 0
    hands_won: int = 0
    total_winnings: int = 0
    biggest_pot: int = 0
    player_id: Optional[str] = None  # Default player for record_hand
    max_history: Optional[int] = POKER_MAX_HAND_HISTORY
    history: Deque[HandHistory] = field(init=False, repr=False)

    def __post_init__(self):
        self.history = deque(maxlen=self.max_history)

    def record_hand(self, hand: HandHistory, player_id: Optional[str] = None) -> None:
        """Fold a finished hand into the totals.

        A hand counts as won when the player is among its winners, split pots
        included; ``total_winnings`` adds up the chips the player was paid.
        """
        player_id = player_id or self.player_id
        if player_id is None:
            raise ValueError("record_hand needs a player_id")
        self.hands_played += 1
        self.history.append(hand)
        if player_id in hand.winners:
            self.hands_won += 1
            record = hand.player(player_id)
            self.total_winnings += record.amount_won if record else 0
        self.biggest_pot = max(self.biggest_pot, hand.final_pot)

    @property
    def win_rate(self) -> float:
        """Percentage of hands won, 0 before the first hand."""
        if self.hands_played == 0:
            return 0.0
        return self.hands_won / self.hands_played * 100

    def duration_seconds(self, now: Optional[float] = None) -> float:
        return (now if now is not None else time.time()) - self.start_time

    def to_dict(self, include_history: bool = False) -> Dict[str, Any]:
        duration = self.duration_seconds()
        data = {
            "session_id": self.session_id,
            "player_id": self.player_id,
            "start_time": self.start_time,
            "hands_played": self.hands_played,
            "hands_won": self.hands_won,
            "total_winnings": self.total_winnings,
            "biggest_pot": self.biggest_pot,
            "win_rate": round(self.win_rate, 2),
            "duration_seconds": round(duration, 3),
            "duration": format_duration(duration),
        }
        if include_history:
            data["history"] = [hand.to_dict() for hand in self.history]
        return data
