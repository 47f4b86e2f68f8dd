"""Table registry for managing concurrently open trainer tables.

This module provides the TableRegistry class which owns every
``TrainerGame`` served by the API. Tables are identified by a UUID and can
be created, listed, accessed and removed.
"""

import logging
import threading
import uuid
from typing import Any, Dict, List, Optional

from holdem.config.game_settings import GameSettings
from holdem.config.server import MAX_TABLES
from holdem.exceptions import ConfigurationError, TableNotFoundError
from holdem.poker.strategy.ranges import RangeRegistry
from holdem.trainer_game import TrainerGame

logger = logging.getLogger(__name__)


class TableRegistry:
    """Registry of open trainer tables."""

    def __init__(self, range_registry: Optional[RangeRegistry] = None, max_tables: int = MAX_TABLES):
        """Initialize the table registry.

        Args:
            range_registry: Ranges used by the AI players at every table
            max_tables: Maximum number of tables open at once
        """
        self._tables: Dict[str, TrainerGame] = {}
        self._lock = threading.Lock()
        self.range_registry = range_registry
        self.max_tables = max_tables

    @property
    def table_count(self) -> int:
        return len(self._tables)

    def create_table(
        self,
        player_count: int,
        settings: Optional[GameSettings] = None,
        seed: Optional[int] = None,
        previous_dealer_index: Optional[int] = None,
    ) -> TrainerGame:
        """Open a new table and deal its first hand.

        Raises:
            ConfigurationError: If the settings are invalid or the registry is full
        """
        with self._lock:
            if len(self._tables) >= self.max_tables:
                raise ConfigurationError(f"Table limit reached ({self.max_tables})")
            table_id = str(uuid.uuid4())
            game = TrainerGame(
                table_id,
                player_count,
                settings=settings,
                seed=seed,
                ranges=self.range_registry,
                previous_dealer_index=previous_dealer_index,
            )
            self._tables[table_id] = game

        logger.info(f"Created table {table_id[:8]} with {player_count} players (seed={seed})")
        return game

    def get_table(self, table_id: str) -> Optional[TrainerGame]:
        return self._tables.get(table_id)

    def require_table(self, table_id: str) -> TrainerGame:
        """Like ``get_table`` but raises TableNotFoundError for unknown ids."""
        game = self._tables.get(table_id)
        if game is None:
            raise TableNotFoundError(f"Table not found: {table_id}")
        return game

    def list_tables(self) -> List[Dict[str, Any]]:
        return [game.summary() for game in list(self._tables.values())]

    def remove_table(self, table_id: str) -> bool:
        """Close a table. Returns False if it did not exist."""
        with self._lock:
            removed = self._tables.pop(table_id, None)
        if removed is None:
            return False
        logger.info(f"Removed table {table_id[:8]}")
        return True

    def __contains__(self, table_id: str) -> bool:
        return table_id in self._tables

    def __len__(self) -> int:
        return len(self._tables)
