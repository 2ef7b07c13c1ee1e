"""
Showdown resolution and pot settlement.

Hands are ranked by an injected evaluator: any callable that takes 5-7 card
strings and returns an object with an integer ``hand_strength`` where lower
is better. The default is ``headsup.core.hand.evaluate_hand``.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Sequence
from dataclasses import replace
import logging

from headsup.core.card import cards_to_strings
from headsup.core.errors import GameStateError
from headsup.core.hand import evaluate_hand
from headsup.core.rules import (
    GamePhase, OddChipPolicy, NUM_PLAYERS, TOTAL_COMMUNITY_CARDS,
    REASON_OPPONENT_FOLDED, REASON_BEST_HAND, REASON_SPLIT_POT, REASON_NO_VALID_HANDS,
)
from headsup.core.state import GameState


logger = logging.getLogger(__name__)

Evaluator = Callable[[Sequence[str]], Any]


def determine_winner(state: GameState, evaluator: Optional[Evaluator] = None) -> GameState:
    """
    Settle the pot and finish the hand.

    A lone remaining player takes the pot. Otherwise every remaining player's
    hole cards plus the board are evaluated; the lowest strength wins and
    equal strengths split the pot. A player whose hand cannot be evaluated is
    left out of contention.

    Args:
        state: State at showdown (or with one player left)
        evaluator: Hand evaluator, defaults to the built-in one

    Returns:
        The completed state with the pot paid out

    Raises:
        GameStateError: If two players are still in and the board has fewer
            than five cards.
    """
    evaluator = evaluator or evaluate_hand
    live = [i for i, p in enumerate(state.players) if not p.folded]

    if len(live) == 1:
        return award_pot(state, live[0], REASON_OPPONENT_FOLDED)

    if len(state.community_cards) < TOTAL_COMMUNITY_CARDS:
        logger.error(
            f"Cannot show down in game {state.game_id}: "
            f"{len(state.community_cards)} community cards dealt"
        )
        raise GameStateError("Cannot determine winner: board is not complete")

    strengths: Dict[int, int] = {}
    for i in live:
        player = state.players[i]
        cards = cards_to_strings(player.hole_cards + state.community_cards)
        try:
            strengths[i] = evaluator(cards).hand_strength
        except Exception as e:
            logger.warning(f"Error evaluating hand for player {player.name}: {e}")

    if not strengths:
        logger.warning(f"No hand could be evaluated in game {state.game_id}, splitting pot")
        return split_pot(state, live, REASON_NO_VALID_HANDS)

    best = min(strengths.values())
    winners = [i for i in live if strengths.get(i) == best]

    if len(winners) == 1:
        return award_pot(state, winners[0], REASON_BEST_HAND)
    return split_pot(state, winners, REASON_SPLIT_POT)


def award_pot(state: GameState, winner_index: int, reason: str) -> GameState:
    """Give the whole pot to one player and finish the hand."""
    return _settle(state, {winner_index: state.pot}, winner_index, reason)


def split_pot(state: GameState, winners: List[int], reason: str) -> GameState:
    """
    Divide the pot evenly between ``winners`` and finish the hand.

    The remainder of an odd pot follows the table's odd-chip policy:
    discarded, or handed out one chip at a time starting left of the dealer.
    """
    share, remainder = divmod(state.pot, len(winners))
    payouts = {i: share for i in winners}
    discarded = 0

    if remainder:
        if state.rules.odd_chip_policy == OddChipPolicy.DEALER_LEFT:
            for offset in range(1, NUM_PLAYERS + 1):
                pos = (state.dealer_index + offset) % NUM_PLAYERS
                if pos in payouts and remainder:
                    payouts[pos] += 1
                    remainder -= 1
        else:
            discarded = remainder
            logger.info(f"Odd chip ({discarded}) from split pot discarded in game {state.game_id}")

    return _settle(state, payouts, None, reason, discarded)


def _settle(
    state: GameState,
    payouts: Dict[int, int],
    winner: Optional[int],
    reason: str,
    discarded: int = 0,
) -> GameState:
    """Pay out, clear all bets and mark the hand complete."""
    players = tuple(
        replace(p, chips=p.chips + payouts.get(i, 0), current_bet=0)
        for i, p in enumerate(state.players)
    )

    for i, amount in payouts.items():
        logger.info(
            f"Hand #{state.hand_number}: {state.players[i].name} wins ${amount} ({reason})"
        )

    return replace(
        state,
        players=players,
        pot=0,
        current_bet=0,
        active_player_index=-1,
        phase=GamePhase.COMPLETE,
        winner=winner,
        winner_reason=reason,
        odd_chips_discarded=state.odd_chips_discarded + discarded,
    )
