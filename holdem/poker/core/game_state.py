"""
Poker game state tracking for Texas Hold'em.

This module contains the table snapshot mutated by the betting state
machine: the players, the board, the settled pot and the betting round.

Chip accounting: ``Player.current_bet`` holds chips bet on the current
street, ``Player.total_bet`` everything committed this hand, and
``GameState.pot`` only settled chips. Bets are swept into the pot when a
street ends, so ``pot + sum(current_bet) == sum(total_bet)`` holds for the
whole hand.
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from holdem.config.game_settings import Blinds, GameSettings
from holdem.poker.betting.actions import ActionRecord, GamePhase, PlayerAction
from holdem.poker.core.cards import Card, Deck
from holdem.poker.core.hand import HandEvaluation

if TYPE_CHECKING:
    from holdem.poker.pots import SidePot
    from holdem.poker.strategy.personality import AIPersonality

NO_SEAT = -1  # Returned by seat rotations when no seat qualifies


class Position(str, Enum):
    """Seat role relative to the dealer button."""

    DEALER = "dealer"
    SMALL_BLIND = "small_blind"
    BIG_BLIND = "big_blind"
    EARLY = "early"
    MIDDLE = "middle"
    LATE = "late"


@dataclass
class Player:
    """Represents the state of a player at the table."""

    player_id: str
    name: str
    seat: int
    chips: int
    is_human: bool = False
    personality: Optional["AIPersonality"] = None
    hole_cards: List[Card] = field(default_factory=list)
    current_bet: int = 0
    total_bet: int = 0
    folded: bool = False
    all_in: bool = False
    eliminated: bool = False
    position: Optional[Position] = None
    position_name: str = ""
    last_action: Optional[PlayerAction] = None
    actions: List[ActionRecord] = field(default_factory=list)

    @property
    def can_act(self) -> bool:
        """Still able to take betting actions this hand."""
        return not (self.folded or self.all_in or self.eliminated)

    @property
    def in_hand(self) -> bool:
        """Still contesting the pot (all-in players included)."""
        return not (self.folded or self.eliminated)

    def commit(self, amount: int) -> int:
        """Move up to ``amount`` chips from the stack into the current bet."""
        paid = min(amount, self.chips)
        self.chips -= paid
        self.current_bet += paid
        self.total_bet += paid
        if self.chips == 0:
            self.all_in = True
        return paid

    def to_dict(self, show_cards: bool = True) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "seat": self.seat,
            "chips": self.chips,
            "current_bet": self.current_bet,
            "total_bet": self.total_bet,
            "folded": self.folded,
            "all_in": self.all_in,
            "eliminated": self.eliminated,
            "is_human": self.is_human,
            "position": self.position.value if self.position else None,
            "position_name": self.position_name,
            "last_action": self.last_action.value if self.last_action else None,
            "personality": self.personality.to_dict() if self.personality else None,
            "hole_cards": (
                [card.code for card in self.hole_cards]
                if show_cards
                else ["??"] * len(self.hole_cards)
            ),
        }


@dataclass
class BettingRound:
    """Progress of the current street."""

    phase: GamePhase = GamePhase.PREFLOP
    current_player: int = NO_SEAT
    last_aggressor: Optional[int] = None
    min_raise: int = 0  # Minimum legal raise increment
    completed: bool = False


@dataclass
class GameState:
    """Full table snapshot for one hand."""

    players: List[Player]
    deck: Deck
    blinds: Blinds
    settings: GameSettings
    dealer_index: int
    small_blind_index: int = NO_SEAT
    big_blind_index: int = NO_SEAT
    hand_number: int = 0
    community_cards: List[Card] = field(default_factory=list)
    pot: int = 0
    betting_round: BettingRound = field(default_factory=BettingRound)
    side_pots: List["SidePot"] = field(default_factory=list)
    evaluations: Dict[str, HandEvaluation] = field(default_factory=dict)
    payouts: Dict[str, int] = field(default_factory=dict)
    winners: List[str] = field(default_factory=list)
    final_pot: int = 0
    game_over: bool = False
    message: str = ""
    action_log: List[ActionRecord] = field(default_factory=list)
    rng: Optional[random.Random] = field(default=None, repr=False)  # Shared with the deck

    @property
    def phase(self) -> GamePhase:
        return self.betting_round.phase

    @phase.setter
    def phase(self, value: GamePhase) -> None:
        self.betting_round.phase = value

    @property
    def is_hand_over(self) -> bool:
        return self.phase in (GamePhase.SHOWDOWN, GamePhase.HAND_COMPLETE)

    @property
    def current_player(self) -> Optional[Player]:
        index = self.betting_round.current_player
        if self.is_hand_over or index == NO_SEAT:
            return None
        return self.players[index]

    @property
    def highest_bet(self) -> int:
        return max((p.current_bet for p in self.players if not p.eliminated), default=0)

    @property
    def total_committed(self) -> int:
        return sum(p.total_bet for p in self.players)

    def amount_to_call(self, player: Player) -> int:
        return max(self.highest_bet - player.current_bet, 0)

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def players_in_hand(self) -> List[Player]:
        return [p for p in self.players if p.in_hand]

    def record(self, player: Player, action: str, amount: int = 0) -> ActionRecord:
        """Append an action record to the player and the table log."""
        entry = ActionRecord(player.player_id, self.phase, action, amount)
        player.actions.append(entry)
        self.action_log.append(entry)
        return entry

    def to_dict(self, viewer_id: Optional[str] = None) -> Dict[str, Any]:
        """Serializable view of the table.

        With a viewer, other players' hole cards stay hidden unless they
        reached the showdown.
        """
        showdown = self.phase == GamePhase.SHOWDOWN
        current = self.current_player
        return {
            "hand_number": self.hand_number,
            "phase": self.phase.label,
            "pot": self.pot,
            "community_cards": [card.code for card in self.community_cards],
            "blinds": self.blinds.to_dict(),
            "game_type": self.settings.game_type.value,
            "dealer_index": self.dealer_index,
            "small_blind_index": self.small_blind_index,
            "big_blind_index": self.big_blind_index,
            "current_player": current.player_id if current else None,
            "highest_bet": self.highest_bet,
            "min_raise": self.betting_round.min_raise,
            "last_aggressor": self.betting_round.last_aggressor,
            "players": [
                p.to_dict(
                    show_cards=viewer_id is None
                    or p.player_id == viewer_id
                    or (showdown and p.in_hand)
                )
                for p in self.players
            ],
            "side_pots": [pot.to_dict() for pot in self.side_pots],
            "payouts": dict(self.payouts),
            "winners": list(self.winners),
            "evaluations": (
                {pid: ev.to_dict() for pid, ev in self.evaluations.items()}
                if self.phase == GamePhase.SHOWDOWN
                else {}
            ),
            "game_over": self.game_over,
            "message": self.message,
        }
