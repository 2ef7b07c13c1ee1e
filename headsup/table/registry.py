"""
Single-writer tables for running games.

The engine functions are pure and do not serialize access. Two actions applied
to the same stale state would both "succeed" and corrupt the game, so every
read-apply-write cycle for a game goes through its ``GameTable`` lock.

This module provides:
- GameTable: One game's current state behind a lock
- TableRegistry: Creates and looks up tables by game id
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence
import logging
import threading
import uuid

from headsup.core.betting import ActionResult, execute_player_action, get_legal_actions
from headsup.core.game import create_game, deal_new_hand, start_new_hand
from headsup.core.rules import TableRules
from headsup.core.showdown import Evaluator
from headsup.core.state import GameState
from headsup.table.schemas import GameStateSchema


logger = logging.getLogger(__name__)


class GameTable:
    """
    One game's state with serialized updates.

    Usage:
        table = GameTable(create_game("g1", ("Alice", "Bob")))
        table.deal()
        result = table.act(player_id, "raise", 60)
    """

    def __init__(self, state: GameState, evaluator: Optional[Evaluator] = None):
        self._state = state
        self._evaluator = evaluator
        self._lock = threading.Lock()

    @property
    def game_id(self) -> str:
        return self._state.game_id

    @property
    def state(self) -> GameState:
        """Latest committed state."""
        with self._lock:
            return self._state

    def deal(self, seed: Optional[int] = None) -> GameState:
        """Deal a hand on a freshly created game."""
        with self._lock:
            self._state = deal_new_hand(self._state, seed=seed)
            return self._state

    def new_hand(self, seed: Optional[int] = None) -> GameState:
        """
        Start the next hand.

        Raises:
            HandNotCompleteError: If the current hand is still running.
            InsufficientChipsError: If a player cannot cover the big blind.
        """
        with self._lock:
            self._state = start_new_hand(self._state, seed=seed)
            return self._state

    def act(self, player_id: str, action: str, amount: Optional[int] = None) -> ActionResult:
        """Apply an action; the stored state only changes when it succeeds."""
        with self._lock:
            result = execute_player_action(
                self._state, player_id, action, amount, evaluator=self._evaluator
            )
            if result.success:
                self._state = result.game_state
            return result

    def legal_actions(self, player_id: str) -> List[Dict]:
        with self._lock:
            return get_legal_actions(self._state, player_id)

    def snapshot(self, for_player_id: Optional[str] = None) -> GameStateSchema:
        """JSON-ready view of the current state."""
        return GameStateSchema.from_state(self.state, for_player_id)


class TableRegistry:
    """
    Tables keyed by game id.

    Construct one and pass it to whatever needs it; there is no global
    instance.

    Usage:
        registry = TableRegistry()
        table = registry.create_table(("Alice", "Bob"))
        same = registry.get(table.game_id)
        registry.remove(table.game_id)
    """

    def __init__(
        self,
        rules: Optional[TableRules] = None,
        evaluator: Optional[Evaluator] = None,
    ):
        self.rules = rules or TableRules()
        self._evaluator = evaluator
        self._tables: Dict[str, GameTable] = {}
        self._lock = threading.Lock()

    def create_table(
        self,
        player_names: Sequence[str],
        game_id: Optional[str] = None,
    ) -> GameTable:
        """
        Create a game and register its table.

        Raises:
            ValueError: If ``game_id`` is already registered.
        """
        game_id = game_id or str(uuid.uuid4())
        with self._lock:
            if game_id in self._tables:
                raise ValueError(f"Game {game_id} already exists")
            table = GameTable(
                create_game(game_id, player_names, rules=self.rules),
                evaluator=self._evaluator,
            )
            self._tables[game_id] = table

        logger.info(f"Registered table {game_id}")
        return table

    def get(self, game_id: str) -> GameTable:
        """
        Look up a table.

        Raises:
            KeyError: If no table has this id.
        """
        with self._lock:
            try:
                return self._tables[game_id]
            except KeyError:
                raise KeyError(f"Game {game_id} not found") from None

    def remove(self, game_id: str) -> bool:
        """Drop a table. Returns False if it did not exist."""
        with self._lock:
            removed = self._tables.pop(game_id, None) is not None
        if removed:
            logger.info(f"Removed table {game_id}")
        return removed

    def game_ids(self) -> List[str]:
        with self._lock:
            return list(self._tables)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)

    def __contains__(self, game_id: str) -> bool:
        with self._lock:
            return game_id in self._tables
