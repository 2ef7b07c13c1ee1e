"""
Table layer: serialized access to running games and JSON-ready snapshots.
"""

from headsup.table.registry import GameTable, TableRegistry
from headsup.table.schemas import (
    ActionRequest, ActionResultSchema, CardSchema, GameStateSchema, PlayerSchema,
)

__all__ = [
    "GameTable",
    "TableRegistry",
    "ActionRequest",
    "ActionResultSchema",
    "CardSchema",
    "GameStateSchema",
    "PlayerSchema",
]
