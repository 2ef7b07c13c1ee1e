"""
Heads-up Core - Pure Python Texas Hold'em Game Logic

This module contains all game logic without any network dependencies.
"""

from headsup.core.card import (
    Card, Rank, Suit, create_deck, shuffle_deck, draw_cards, validate_deck,
    card_to_string, string_to_card,
)
from headsup.core.errors import (
    ActionError, HeadsUpError, InvalidCountError, InvalidCardStringError,
    HandNotCompleteError, InsufficientChipsError,
)
from headsup.core.player import Player
from headsup.core.rules import GamePhase, ActionType, OddChipPolicy, TableRules
from headsup.core.state import GameState, validate_game_state
from headsup.core.hand import HandEvaluation, HandRank, evaluate_hand
from headsup.core.showdown import determine_winner
from headsup.core.betting import ActionResult, execute_player_action, get_legal_actions
from headsup.core.game import create_game, deal_new_hand, start_new_hand

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "create_deck",
    "shuffle_deck",
    "draw_cards",
    "validate_deck",
    "card_to_string",
    "string_to_card",
    "ActionError",
    "HeadsUpError",
    "InvalidCountError",
    "InvalidCardStringError",
    "HandNotCompleteError",
    "InsufficientChipsError",
    "Player",
    "GamePhase",
    "ActionType",
    "OddChipPolicy",
    "TableRules",
    "GameState",
    "validate_game_state",
    "HandEvaluation",
    "HandRank",
    "evaluate_hand",
    "determine_winner",
    "ActionResult",
    "execute_player_action",
    "get_legal_actions",
    "create_game",
    "deal_new_hand",
    "start_new_hand",
]
