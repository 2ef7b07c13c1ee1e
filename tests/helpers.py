"""
Shared helpers for building and driving game states in tests.
"""

from dataclasses import replace
from types import SimpleNamespace

from headsup.core.betting import execute_player_action
from headsup.core.card import create_deck, string_to_card
from headsup.core.game import create_game
from headsup.core.rules import GamePhase


def act(state, index, action, amount=None, **kwargs):
    """Apply an action for the player at ``index`` and require success."""
    result = execute_player_action(state, state.players[index].id, action, amount, **kwargs)
    assert result.success, result.error
    return result.game_state


def act_active(state, action, amount=None, **kwargs):
    """Apply an action for whoever is to act."""
    return act(state, state.active_player_index, action, amount, **kwargs)


def rigged_state(hole0, hole1, board, pot=200, phase=GamePhase.RIVER, rules=None):
    """
    Build a mid-hand state with chosen cards.

    Player 0 is the dealer (small blind); player 1 is first to act. Chips are
    set so that the table stays balanced.
    """
    state = create_game("rigged", ("Alice", "Bob"), rules=rules)
    cards0 = tuple(string_to_card(s) for s in hole0)
    cards1 = tuple(string_to_card(s) for s in hole1)
    community = tuple(string_to_card(s) for s in board)
    used = set(cards0) | set(cards1) | set(community)
    deck = tuple(c for c in create_deck() if c not in used)

    start = state.rules.starting_chips
    players = (
        replace(state.players[0], hole_cards=cards0, chips=start - pot // 2),
        replace(state.players[1], hole_cards=cards1, chips=start - (pot - pot // 2)),
    )

    return replace(
        state,
        players=players,
        community_cards=community,
        deck=deck,
        pot=pot,
        phase=phase,
        hand_number=1,
        dealer_index=0,
        active_player_index=1,
    )


def rigged_evaluator(strengths):
    """
    Evaluator that ranks by hole cards.

    Args:
        strengths: Mapping of hole-card string pairs to strengths, e.g.
            {("Ah", "As"): 1}. Unknown hands raise ValueError.
    """
    def evaluate(cards):
        for hole, strength in strengths.items():
            if set(hole) <= set(cards):
                return SimpleNamespace(hand_strength=strength)
        raise ValueError(f"Cannot evaluate {cards}")

    return evaluate


def hole_strings(player):
    return tuple(str(c) for c in player.hole_cards)
