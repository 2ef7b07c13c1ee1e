"""
Betting Round Processor - Heads-up State Machine.

This module applies player actions to a ``GameState``:
- Validation of whose turn it is and what they may do
- Fold, call and raise (raise amounts are "raise to", not "raise by")
- Betting round completion and phase advance (flop, turn, river, showdown)
- Running out the board when no more betting is possible

Every function returns a new state. Rejected actions come back as an
``ActionResult`` holding the untouched input state.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, replace
import logging

from headsup.core.card import draw_cards
from headsup.core.errors import ActionError, action_error_message
from headsup.core.rules import (
    GamePhase, ActionType, BETTING_PHASES, NEXT_PHASE,
    REASON_OPPONENT_FOLDED, calculate_min_raise, cards_for_next_street,
)
from headsup.core.showdown import Evaluator, award_pot, determine_winner
from headsup.core.state import GameState


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResult:
    """Result of a player action."""
    success: bool
    game_state: GameState
    error: Optional[str] = None
    code: Optional[ActionError] = None


def execute_player_action(
    state: GameState,
    player_id: str,
    action: Union[ActionType, str],
    amount: Optional[int] = None,
    evaluator: Optional[Evaluator] = None,
) -> ActionResult:
    """
    Process a player action.

    Args:
        state: Current game state
        player_id: Id of the acting player
        action: FOLD, CALL or RAISE (enum or its string value)
        amount: Total bet to raise to (RAISE only)
        evaluator: Hand evaluator used if the action reaches showdown

    Returns:
        ActionResult with the new state, or the unchanged state and an error
    """
    index = state.player_index(player_id)
    if index is None:
        return _reject(state, ActionError.PLAYER_NOT_FOUND)

    if state.phase in (GamePhase.COMPLETE, GamePhase.SHOWDOWN):
        return _reject(state, ActionError.HAND_COMPLETE)
    if state.phase == GamePhase.WAITING:
        return _reject(state, ActionError.HAND_NOT_DEALT)

    if state.active_player_index != index:
        return _reject(state, ActionError.NOT_YOUR_TURN)

    if state.players[index].folded:
        return _reject(state, ActionError.ALREADY_FOLDED)

    action_type = _parse_action(action)
    if action_type is None:
        return _reject(state, ActionError.INVALID_ACTION, action=action)

    if action_type == ActionType.FOLD:
        result = ActionResult(True, _execute_fold(state, index))
    elif action_type == ActionType.CALL:
        result = ActionResult(True, _execute_call(state, index, evaluator))
    else:
        result = _execute_raise(state, index, amount, evaluator)

    if result.success:
        logger.debug(
            f"Game {state.game_id}: {state.players[index].name} {action_type.value} "
            f"(amount={amount}), phase now {result.game_state.phase.value}"
        )
    return result


def _reject(state: GameState, code: ActionError, **details: Any) -> ActionResult:
    message = action_error_message(code, **details)
    logger.warning(f"Game {state.game_id}: action rejected ({code.value}: {message})")
    return ActionResult(False, state, message, code)


def _parse_action(action: Union[ActionType, str]) -> Optional[ActionType]:
    if isinstance(action, ActionType):
        return action
    if isinstance(action, str):
        try:
            return ActionType(action.strip().lower())
        except ValueError:
            return None
    return None


def _execute_fold(state: GameState, index: int) -> GameState:
    """Fold; the opponent takes the pot if they are still in."""
    state = state.with_player(index, state.players[index].fold()).with_acted(index)

    opponent = 1 - index
    if not state.players[opponent].folded:
        return award_pot(state, opponent, REASON_OPPONENT_FOLDED)

    return replace(state, active_player_index=get_next_active_player(state, index))


def _execute_call(state: GameState, index: int, evaluator: Optional[Evaluator]) -> GameState:
    """Match the table bet, or go all-in for less."""
    player = state.players[index]
    chips_to_call = max(0, state.current_bet - player.current_bet)

    if chips_to_call >= player.chips:
        player, paid = player.bet(player.chips)
        player = replace(player, all_in=True)
    else:
        player, paid = player.bet(chips_to_call)

    state = replace(state.with_player(index, player), pot=state.pot + paid).with_acted(index)

    if check_betting_round_complete(state):
        state = advance_phase(state, evaluator)
        return auto_advance_if_all_in(state, evaluator)

    return replace(state, active_player_index=get_next_active_player(state, index))


def _execute_raise(
    state: GameState,
    index: int,
    amount: Optional[int],
    evaluator: Optional[Evaluator],
) -> ActionResult:
    """Raise to ``amount`` (a street total), capped at the player's stack."""
    if amount is None:
        return _reject(state, ActionError.AMOUNT_REQUIRED)
    if isinstance(amount, bool) or not isinstance(amount, int):
        return _reject(state, ActionError.INVALID_AMOUNT)
    if amount <= 0:
        return _reject(state, ActionError.AMOUNT_MUST_BE_POSITIVE)
    if amount <= state.current_bet:
        return _reject(state, ActionError.RAISE_TOO_LOW)

    player = state.players[index]
    chips_needed = amount - player.current_bet
    final_amount = amount

    # Not enough chips: the raise becomes an all-in
    if chips_needed > player.chips:
        final_amount = player.current_bet + player.chips
        chips_needed = player.chips

    is_all_in = chips_needed == player.chips
    is_actual_raise = final_amount > state.current_bet

    if is_actual_raise:
        min_raise = calculate_min_raise(state.current_bet, state.rules.big_blind)
        if final_amount < min_raise and not is_all_in:
            return _reject(state, ActionError.MINIMUM_RAISE_NOT_MET, minimum=min_raise)

    player, paid = player.bet(chips_needed)
    if is_all_in:
        player = replace(player, all_in=True)

    table_bet = state.current_bet
    if is_actual_raise:
        table_bet = max(table_bet, player.current_bet)

    state = replace(
        state.with_player(index, player),
        pot=state.pot + paid,
        current_bet=table_bet,
    ).with_acted(index)

    # A real raise gives the opponent another decision
    if is_actual_raise:
        state = state.with_acted(1 - index, False)

    state = replace(state, active_player_index=get_next_active_player(state, index))
    return ActionResult(True, auto_advance_if_all_in(state, evaluator))


def check_betting_round_complete(state: GameState) -> bool:
    """
    Check if the current betting round is complete.

    Preflop both blinds must have acted (or folded, or be all-in). On later
    streets every remaining player must have acted or be all-in. In both cases
    every remaining player who still has chips must have matched the bet.
    """
    live = [(i, p) for i, p in enumerate(state.players) if not p.folded]
    if len(live) <= 1:
        return True

    all_matched = all(
        p.current_bet == state.current_bet for _, p in live if not p.all_in
    )

    if state.phase == GamePhase.PREFLOP:
        blinds_acted = all(
            state.players_acted[i] or state.players[i].folded or state.players[i].all_in
            for i in (state.small_blind_index, state.big_blind_index)
        )
        return blinds_acted and all_matched

    everyone_acted = all(state.players_acted[i] or p.all_in for i, p in live)
    return everyone_acted and all_matched


def get_next_active_player(state: GameState, current_index: int) -> int:
    """
    Find the next player, wrapping around, who is neither folded nor all-in.

    Returns ``current_index`` when no such player exists.
    """
    num_players = len(state.players)
    for offset in range(1, num_players + 1):
        pos = (current_index + offset) % num_players
        if state.players[pos].can_act:
            return pos
    return current_index


def advance_phase(state: GameState, evaluator: Optional[Evaluator] = None) -> GameState:
    """
    End the current betting round and move to the next phase.

    Clears street bets and acted flags, deals the next street, or resolves
    the showdown after the river.
    """
    state = replace(
        state,
        players=tuple(p.reset_for_new_round() for p in state.players),
        current_bet=0,
        players_acted=tuple(False for _ in state.players),
    )

    if state.phase == GamePhase.RIVER:
        state = replace(state, phase=GamePhase.SHOWDOWN)
        return determine_winner(state, evaluator)

    if state.phase == GamePhase.SHOWDOWN:
        return replace(state, phase=GamePhase.COMPLETE, active_player_index=-1)

    if state.phase in BETTING_PHASES:
        drawn, remaining = draw_cards(state.deck, cards_for_next_street(state.phase))
        state = replace(
            state,
            community_cards=state.community_cards + drawn,
            deck=remaining,
            phase=NEXT_PHASE[state.phase],
        )
        logger.debug(
            f"Game {state.game_id}: {state.phase.value} "
            f"[{' '.join(str(c) for c in state.community_cards)}]"
        )

    return replace(state, active_player_index=_first_to_act_postflop(state))


def _first_to_act_postflop(state: GameState) -> int:
    """Big blind acts first after the flop, else the small blind."""
    if state.players[state.big_blind_index].can_act:
        return state.big_blind_index
    if state.players[state.small_blind_index].can_act:
        return state.small_blind_index
    return state.active_player_index


def auto_advance_if_all_in(state: GameState, evaluator: Optional[Evaluator] = None) -> GameState:
    """
    Run out the board when no more betting is possible.

    That is the case when every remaining player is all-in, or when only
    one of them can still act and already matches the bet.
    """
    while state.phase in BETTING_PHASES and _betting_closed(state):
        logger.debug(f"Game {state.game_id}: no more betting, dealing next street")
        state = advance_phase(state, evaluator)
    return state


def _betting_closed(state: GameState) -> bool:
    live = [p for p in state.players if not p.folded]
    if len(live) < 2:
        return False

    can_act = [p for p in live if not p.all_in]
    if not can_act:
        return True
    return len(can_act) == 1 and can_act[0].current_bet >= state.current_bet


def get_legal_actions(state: GameState, player_id: str) -> List[Dict[str, Any]]:
    """
    Get legal actions for a player.

    Returns:
        List of action dicts with type and constraints; empty when it is not
        the player's turn
    """
    index = state.player_index(player_id)
    if index is None or not state.is_hand_running or state.active_player_index != index:
        return []

    player = state.players[index]
    if not player.can_act:
        return []

    chips_to_call = max(0, state.current_bet - player.current_bet)
    actions: List[Dict[str, Any]] = [
        {"type": ActionType.FOLD.value},
        {"type": ActionType.CALL.value, "amount": min(chips_to_call, player.chips)},
    ]

    max_raise = player.current_bet + player.chips
    if max_raise > state.current_bet:
        min_raise = calculate_min_raise(state.current_bet, state.rules.big_blind)
        actions.append({
            "type": ActionType.RAISE.value,
            "min": min(min_raise, max_raise),
            "max": max_raise,
        })

    return actions
