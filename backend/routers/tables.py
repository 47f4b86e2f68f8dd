"""Trainer table API endpoints.

Endpoints:
    POST   /api/tables                        - Open a table and deal the first hand
    GET    /api/tables                        - List open tables
    GET    /api/tables/{table_id}             - Table state (hole cards hidden from the viewer)
    GET    /api/tables/{table_id}/legal-actions - Legal actions for a player
    POST   /api/tables/{table_id}/actions     - Apply a player's action
    POST   /api/tables/{table_id}/ai-turn     - Play a single AI turn
    POST   /api/tables/{table_id}/ai-turns    - Play AI turns until the human must act
    POST   /api/tables/{table_id}/new-hand    - Deal the next hand
    GET    /api/tables/{table_id}/history     - Finished hand histories
    GET    /api/tables/{table_id}/session     - Session statistics
    DELETE /api/tables/{table_id}             - Close a table
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from backend.models import ActionRequest, CreateTableRequest
from backend.table_registry import TableRegistry
from holdem.exceptions import HoldemError
from holdem.trainer_game import TrainerGame

logger = logging.getLogger(__name__)


def _not_found(table_id: str) -> JSONResponse:
    return JSONResponse({"error": f"Table not found: {table_id}"}, status_code=404)


def _result(result: Dict[str, Any]) -> JSONResponse:
    """Turn a TrainerGame result dict into a response (400 when unsuccessful)."""
    if not result.get("success"):
        return JSONResponse({"error": result.get("error", "Request failed")}, status_code=400)
    return JSONResponse(result)


def _auto_play(game: TrainerGame, enabled: bool, result: Dict[str, Any]) -> Dict[str, Any]:
    if not enabled or not result.get("success"):
        return result
    played = game.run_ai_until_human()
    return {"success": True, "actions": played["actions"], "state": played["state"]}


def setup_router(table_registry: TableRegistry) -> APIRouter:
    """Create the tables router bound to ``table_registry``."""
    router = APIRouter(prefix="/api/tables", tags=["tables"])

    @router.post("")
    async def create_table(request: CreateTableRequest):
        """Open a new table."""
        try:
            settings = request.settings.to_settings() if request.settings else None
            game = table_registry.create_table(
                request.player_count,
                settings=settings,
                seed=request.seed,
                previous_dealer_index=request.previous_dealer_index,
            )
        except HoldemError as e:
            logger.warning(f"Rejected table creation: {e}")
            return JSONResponse({"error": str(e)}, status_code=400)

        result = _auto_play(game, request.auto_play, {"success": True, "state": game.get_state()})
        result["table_id"] = game.table_id
        return JSONResponse(result, status_code=201)

    @router.get("")
    async def list_tables():
        tables = table_registry.list_tables()
        return JSONResponse({"tables": tables, "count": len(tables)})

    @router.get("/{table_id}")
    async def get_table(table_id: str, viewer: Optional[str] = None):
        """Current table state as seen by ``viewer`` (the human seat by default)."""
        game = table_registry.get_table(table_id)
        if game is None:
            return _not_found(table_id)
        return JSONResponse(game.get_state(viewer_id=viewer))

    @router.get("/{table_id}/legal-actions")
    async def get_legal_actions(table_id: str, player_id: Optional[str] = None):
        game = table_registry.get_table(table_id)
        if game is None:
            return _not_found(table_id)
        player_id = player_id or game.human_id
        if player_id is None:
            return JSONResponse({"error": "player_id is required"}, status_code=400)
        return JSONResponse(game.legal_actions(player_id))

    @router.post("/{table_id}/actions")
    async def apply_action(table_id: str, request: ActionRequest):
        """Apply an action, then let the AI players respond."""
        game = table_registry.get_table(table_id)
        if game is None:
            return _not_found(table_id)
        result = game.handle_action(request.player_id, request.action, request.amount)
        return _result(_auto_play(game, request.auto_play, result))

    @router.post("/{table_id}/ai-turn")
    async def play_ai_turn(table_id: str):
        game = table_registry.get_table(table_id)
        if game is None:
            return _not_found(table_id)
        try:
            return _result(game.process_single_ai_turn())
        except HoldemError as e:
            return JSONResponse({"error": str(e)}, status_code=400)

    @router.post("/{table_id}/ai-turns")
    async def play_ai_turns(table_id: str):
        game = table_registry.get_table(table_id)
        if game is None:
            return _not_found(table_id)
        try:
            return _result(game.run_ai_until_human())
        except HoldemError as e:
            return JSONResponse({"error": str(e)}, status_code=400)

    @router.post("/{table_id}/new-hand")
    async def new_hand(table_id: str, auto_play: bool = True):
        """Deal the next hand once the current one is over."""
        game = table_registry.get_table(table_id)
        if game is None:
            return _not_found(table_id)
        return _result(_auto_play(game, auto_play, game.start_new_hand()))

    @router.get("/{table_id}/history")
    async def get_history(table_id: str):
        game = table_registry.get_table(table_id)
        if game is None:
            return _not_found(table_id)
        history = game.get_history()
        return JSONResponse({"hands": history, "count": len(history)})

    @router.get("/{table_id}/session")
    async def get_session(table_id: str):
        game = table_registry.get_table(table_id)
        if game is None:
            return _not_found(table_id)
        return JSONResponse(game.get_session())

    @router.delete("/{table_id}")
    async def delete_table(table_id: str):
        if not table_registry.remove_table(table_id):
            return _not_found(table_id)
        return JSONResponse({"success": True, "table_id": table_id})

    return router
