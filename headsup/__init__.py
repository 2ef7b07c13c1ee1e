"""
Heads-up Hold'em - Two-player Texas Hold'em Engine

- Pure Python betting/phase state machine over immutable game states
- Deterministic, seeded deck shuffling
- Pluggable hand evaluator (a default one is included)
- Lock-guarded tables and pydantic snapshots for callers

Usage:
    from headsup import create_game, deal_new_hand, execute_player_action
    from headsup.table import TableRegistry
"""

__version__ = "0.1.0"

from headsup.core.card import (
    Card, create_deck, shuffle_deck, draw_cards, validate_deck, card_to_string, string_to_card,
)
from headsup.core.state import GameState
from headsup.core.betting import ActionResult, execute_player_action
from headsup.core.showdown import determine_winner
from headsup.core.game import create_game, deal_new_hand, start_new_hand
from headsup.core.hand import evaluate_hand

__all__ = [
    "Card",
    "create_deck",
    "shuffle_deck",
    "draw_cards",
    "validate_deck",
    "card_to_string",
    "string_to_card",
    "GameState",
    "ActionResult",
    "execute_player_action",
    "determine_winner",
    "create_game",
    "deal_new_hand",
    "start_new_hand",
    "evaluate_hand",
    "__version__",
]
