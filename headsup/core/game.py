"""
Heads-up Game Lifecycle.

This module creates games and deals hands:
- New game creation with two seated players
- Dealing: shuffling, hole cards, dealer rotation and blind posting
- Starting the next hand once the current one is complete

Usage:
    state = create_game("table-1", ("Alice", "Bob"))
    state = deal_new_hand(state)

    while state.is_hand_running:
        player = state.active_player
        result = execute_player_action(state, player.id, "call")
        state = result.game_state

    state = start_new_hand(state)
"""

from __future__ import annotations
from typing import Optional, Sequence
from dataclasses import replace
import logging
import time
import uuid

from headsup.core.card import create_deck, shuffle_deck, draw_cards
from headsup.core.errors import HandNotCompleteError, InsufficientChipsError
from headsup.core.player import Player
from headsup.core.rules import (
    GamePhase, TableRules, NUM_PLAYERS, HOLE_CARDS,
    get_blind_positions, next_dealer_index,
)
from headsup.core.state import GameState


logger = logging.getLogger(__name__)


def create_game(
    game_id: str,
    player_names: Sequence[str],
    rules: Optional[TableRules] = None,
) -> GameState:
    """
    Create a new heads-up game.

    Args:
        game_id: Identifier for the game
        player_names: Exactly two display names
        rules: Stakes and house rules, defaults to 10/20 blinds and 1000 chips

    Returns:
        A waiting game with nothing dealt
    """
    if len(player_names) != NUM_PLAYERS:
        raise ValueError(f"Heads-up needs exactly {NUM_PLAYERS} players, got {len(player_names)}")

    rules = rules or TableRules()
    players = tuple(
        Player(id=str(uuid.uuid4()), name=name, chips=rules.starting_chips)
        for name in player_names
    )

    logger.info(f"Created game {game_id}: {players[0].name} vs {players[1].name}")

    return GameState(
        game_id=game_id,
        players=players,
        deck=create_deck(),
        rules=rules,
    )


def deal_new_hand(state: GameState, seed: Optional[int] = None) -> GameState:
    """
    Deal a new hand.

    Shuffles a fresh deck, moves the dealer button, deals hole cards and posts
    the blinds. The dealer is the small blind and acts first preflop.

    Args:
        state: Current game state
        seed: Shuffle seed; defaults to the current time in milliseconds

    Returns:
        State in the preflop phase
    """
    if seed is None:
        seed = int(time.time() * 1000)

    rules = state.rules
    deck = shuffle_deck(create_deck(), seed)
    dealer = next_dealer_index(state.dealer_index, state.hand_number)
    sb_pos, bb_pos = get_blind_positions(dealer)

    players = [p.reset_for_new_hand() for p in state.players]

    # Deal hole cards, dealer first
    hole_cards, deck = draw_cards(deck, HOLE_CARDS * NUM_PLAYERS)
    for offset in range(NUM_PLAYERS):
        pos = (dealer + offset) % NUM_PLAYERS
        cards = hole_cards[offset * HOLE_CARDS:(offset + 1) * HOLE_CARDS]
        players[pos] = replace(players[pos], hole_cards=cards)

    players[sb_pos], sb_amount = players[sb_pos].bet(rules.small_blind)
    players[bb_pos], bb_amount = players[bb_pos].bet(rules.big_blind)
    logger.debug(f"Blinds posted: SB={sb_amount} BB={bb_amount}")

    active = sb_pos if players[sb_pos].can_act else bb_pos
    hand_number = state.hand_number + 1

    logger.info(
        f"Starting hand #{hand_number} in game {state.game_id} "
        f"(dealer: {players[dealer].name}, seed: {seed})"
    )

    return replace(
        state,
        players=tuple(players),
        community_cards=(),
        pot=sb_amount + bb_amount,
        current_bet=max(sb_amount, bb_amount),
        active_player_index=active,
        phase=GamePhase.PREFLOP,
        winner=None,
        winner_reason=None,
        deck=deck,
        players_acted=tuple(False for _ in players),
        hand_number=hand_number,
        dealer_index=dealer,
    )


def start_new_hand(state: GameState, seed: Optional[int] = None) -> GameState:
    """
    Start the next hand after the current one is complete.

    Raises:
        HandNotCompleteError: If the current hand is still running.
        InsufficientChipsError: If a player cannot cover the big blind.
    """
    if state.phase != GamePhase.COMPLETE:
        logger.error(f"Cannot start new hand in game {state.game_id}: phase is {state.phase.value}")
        raise HandNotCompleteError("Cannot start new hand: current hand is not complete")

    if any(p.chips < state.rules.big_blind for p in state.players):
        logger.error(f"Cannot start new hand in game {state.game_id}: a player is out of chips")
        raise InsufficientChipsError("Not enough players have chips to continue")

    reset = replace(
        state,
        players=tuple(p.reset_for_new_hand() for p in state.players),
        community_cards=(),
        pot=0,
        current_bet=0,
        active_player_index=-1,
        winner=None,
        winner_reason=None,
        players_acted=tuple(False for _ in state.players),
    )
    return deal_new_hand(reset, seed=seed)
