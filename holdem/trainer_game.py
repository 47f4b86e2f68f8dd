"""Interactive trainer table: one human seat against AI opponents.

Wraps the pure game service with the bookkeeping a front end needs: a
seeded random source, the AI turn loop, hand histories and session
statistics. Every public method returns a JSON-ready dict with a
``success`` flag; rule violations come back as ``{"success": False,
"error": ...}`` instead of raising.
"""

import logging
import math
import random
import threading
from typing import Any, Dict, List, Optional

from holdem.config.game_settings import GameSettings
from holdem.config.poker import POKER_MAX_HAND_HISTORY
from holdem.exceptions import IllegalActionError
from holdem.poker.betting.actions import PlayerAction
from holdem.poker.betting.betting_round import bet_bounds
from holdem.poker.core.game_state import GameState
from holdem.poker.evaluation.strength import (
    bet_size_percentage,
    calculate_pot_odds,
    current_pot,
    effective_stack,
    simple_hand_strength,
    stack_to_pot_ratio,
)
from holdem.poker.game import (
    apply_action,
    get_legal_actions,
    initialize_game,
    play_ai_turn,
    start_new_hand,
)
from holdem.poker.history import HandHistory, SessionStats, create_hand_history
from holdem.poker.strategy.ranges import RangeRegistry

logger = logging.getLogger(__name__)

# Action order used when listing legal actions
_ACTION_ORDER = list(PlayerAction)


def _sorted_actions(actions) -> List[str]:
    return [a.value for a in sorted(actions, key=_ACTION_ORDER.index)]


class TrainerGame:
    """A table with one optional human player and AI opponents."""

    # Hard stop for the AI loop; a hand never needs anywhere near this many actions
    MAX_AI_ACTIONS = 500

    def __init__(
        self,
        table_id: str,
        player_count: int,
        settings: Optional[GameSettings] = None,
        seed: Optional[int] = None,
        ranges: Optional[RangeRegistry] = None,
        previous_dealer_index: Optional[int] = None,
        max_history: Optional[int] = POKER_MAX_HAND_HISTORY,
    ):
        """Seat the table and deal the first hand.

        Args:
            table_id: Unique identifier for this table
            player_count: Number of seats (2-9)
            settings: Stakes and AI setup (defaults to a cash game)
            seed: Seed for shuffles and AI rolls; None for an unseeded game
            ranges: Range registry used to resolve AI preflop ranges
            previous_dealer_index: Seat that held the button before this table
            max_history: Finished hands kept for /history (None keeps them all)
        """
        self.table_id = table_id
        self.seed = seed
        self.settings = settings or GameSettings()
        self.ranges = ranges
        self.rng = random.Random(seed)
        self._lock = threading.RLock()

        self.state: GameState = initialize_game(
            player_count,
            previous_dealer_index=previous_dealer_index,
            settings=self.settings,
            rng=self.rng,
        )
        self.session = SessionStats(
            player_id=self.human_id or self.state.players[0].player_id,
            max_history=max_history,
        )
        self._recorded_hand = 0
        self._record_if_finished()

    @property
    def human_id(self) -> Optional[str]:
        for player in self.state.players:
            if player.is_human:
                return player.player_id
        return None

    @property
    def histories(self) -> List[HandHistory]:
        """Most recent finished hands, oldest first."""
        return list(self.session.history)

    @property
    def session_over(self) -> bool:
        return self.state.game_over

    def _record_if_finished(self) -> None:
        """Store the history of a hand once, as soon as it ends."""
        state = self.state
        if not state.is_hand_over or state.game_over or self._recorded_hand == state.hand_number:
            return
        history = create_hand_history(state)
        self.session.record_hand(history)
        self._recorded_hand = state.hand_number
        logger.info(f"Table {self.table_id}: hand {state.hand_number} finished: {state.message}")

    def legal_actions(self, player_id: str) -> Dict[str, Any]:
        """Legal actions and bet bounds for ``player_id`` (empty when not their turn)."""
        with self._lock:
            actions = get_legal_actions(self.state, player_id)
            result: Dict[str, Any] = {"player_id": player_id, "actions": _sorted_actions(actions)}
            if actions & {PlayerAction.BET, PlayerAction.RAISE}:
                player = self.state.get_player(player_id)
                min_total, max_total = bet_bounds(self.state, player)
                result["min_amount"] = min_total
                result["max_amount"] = max_total
            if actions:
                result["to_call"] = self.state.amount_to_call(self.state.get_player(player_id))
            return result

    def handle_action(
        self, player_id: str, action: str, amount: Optional[int] = None
    ) -> Dict[str, Any]:
        """Apply an action for ``player_id``.

        Returns:
            Dictionary with success status, an error message on failure and the state
        """
        with self._lock:
            if self.state.game_over:
                return {"success": False, "error": "Game is over"}
            if self.state.is_hand_over:
                return {"success": False, "error": "Hand is over - start a new hand"}

            current = self.state.current_player
            if current is None or current.player_id != player_id:
                waiting = current.name if current else "nobody"
                return {"success": False, "error": f"Not your turn! Waiting for {waiting}"}

            try:
                apply_action(self.state, action, amount)
            except IllegalActionError as e:
                logger.warning(f"Table {self.table_id}: rejected {action!r} from {player_id}: {e}")
                return {"success": False, "error": str(e)}

            self._record_if_finished()
            return {"success": True, "state": self.get_state()}

    def _play_ai_action(self) -> Dict[str, Any]:
        player = self.state.current_player
        decision = play_ai_turn(self.state, self.rng, self.ranges)
        self._record_if_finished()
        return {
            "player_id": player.player_id,
            "name": player.name,
            "action": decision.action.value,
            "amount": decision.amount,
        }

    def process_single_ai_turn(self) -> Dict[str, Any]:
        """Play one AI player's turn if one is due.

        Returns:
            Dictionary with success status, whether an action was taken, and the state
        """
        with self._lock:
            if self.state.game_over or self.state.is_hand_over:
                return {
                    "success": True,
                    "action_taken": False,
                    "reason": "hand_over",
                    "state": self.get_state(),
                }

            current = self.state.current_player
            if current is not None and current.is_human:
                return {
                    "success": True,
                    "action_taken": False,
                    "reason": "human_turn",
                    "state": self.get_state(),
                }

            taken = self._play_ai_action()
            return {
                "success": True,
                "action_taken": True,
                "action": taken,
                "state": self.get_state(),
            }

    def run_ai_until_human(self) -> Dict[str, Any]:
        """Play AI turns until the human must act or the hand ends."""
        with self._lock:
            taken = []
            while not self.state.is_hand_over:
                current = self.state.current_player
                if current is None or current.is_human:
                    break
                if len(taken) >= self.MAX_AI_ACTIONS:
                    logger.error(
                        f"Table {self.table_id}: AI loop exceeded {self.MAX_AI_ACTIONS} actions "
                        f"in hand {self.state.hand_number} ({self.state.phase.label})"
                    )
                    break
                taken.append(self._play_ai_action())
            return {"success": True, "actions": taken, "state": self.get_state()}

    def start_new_hand(self) -> Dict[str, Any]:
        with self._lock:
            if self.state.game_over:
                return {"success": False, "error": "Session is over - fewer than two players have chips"}
            if not self.state.is_hand_over:
                return {"success": False, "error": "Current hand is not over yet"}

            self.state = start_new_hand(self.state, self.settings, self.rng)
            self._record_if_finished()
            return {"success": True, "state": self.get_state()}

    def _statistics(self, viewer_id: Optional[str]) -> Dict[str, Any]:
        """Pot odds and pot geometry from the viewer's seat."""
        state = self.state
        pot = current_pot(state)
        stats: Dict[str, Any] = {
            "pot": pot,
            "effective_stack": effective_stack(state),
        }
        spr = stack_to_pot_ratio(stats["effective_stack"], pot)
        stats["stack_to_pot_ratio"] = None if math.isinf(spr) else round(spr, 2)

        viewer = state.get_player(viewer_id) if viewer_id else None
        if viewer is not None and viewer.in_hand:
            to_call = state.amount_to_call(viewer)
            stats["to_call"] = to_call
            stats["pot_odds"] = calculate_pot_odds(pot, to_call).to_dict()
            stats["call_size_percentage"] = round(bet_size_percentage(to_call, pot), 2)
            stats["hand_strength"] = round(
                simple_hand_strength(viewer.hole_cards, state.community_cards), 3
            )
        return stats

    def get_state(self, viewer_id: Optional[str] = None) -> Dict[str, Any]:
        """Table state as seen by ``viewer_id`` (the human seat by default)."""
        with self._lock:
            viewer = viewer_id or self.human_id
            current = self.state.current_player
            data = self.state.to_dict(viewer_id=viewer)
            data.update(
                {
                    "table_id": self.table_id,
                    "is_your_turn": bool(current and viewer and current.player_id == viewer),
                    "hand_over": self.state.is_hand_over,
                    "session_over": self.session_over,
                    "hands_played": self.session.hands_played,
                    "legal_actions": (
                        _sorted_actions(get_legal_actions(self.state, viewer)) if viewer else []
                    ),
                    "statistics": self._statistics(viewer),
                }
            )
            return data

    def get_history(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [hand.to_dict() for hand in self.histories]

    def get_session(self) -> Dict[str, Any]:
        with self._lock:
            return self.session.to_dict()

    def summary(self) -> Dict[str, Any]:
        """Short description used when listing tables."""
        with self._lock:
            return {
                "table_id": self.table_id,
                "players": len(self.state.players),
                "hand_number": self.state.hand_number,
                "phase": self.state.phase.label,
                "game_type": self.settings.game_type.value,
                "session_over": self.session_over,
            }
