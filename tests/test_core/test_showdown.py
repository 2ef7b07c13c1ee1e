"""
Tests for showdown resolution and pot splitting.
"""

from dataclasses import replace

import pytest
from headsup.core.errors import GameStateError
from headsup.core.hand import evaluate_hand
from headsup.core.rules import (
    GamePhase, OddChipPolicy, TableRules,
    REASON_BEST_HAND, REASON_SPLIT_POT, REASON_OPPONENT_FOLDED, REASON_NO_VALID_HANDS,
)
from headsup.core.showdown import determine_winner, award_pot, split_pot
from headsup.core.state import validate_game_state
from tests.helpers import act, rigged_state, rigged_evaluator


BOARD = ("2d", "7c", "9d", "Jc", "4h")
ROYAL_BOARD = ("Ah", "Kh", "Qh", "Jh", "10h")


def showdown(state, **kwargs):
    return determine_winner(replace(state, phase=GamePhase.SHOWDOWN), **kwargs)


class TestDetermineWinner:
    """Tests for picking the winner at showdown."""

    def test_best_hand_wins(self):
        """Pocket aces beat pocket kings."""
        state = rigged_state(("Ah", "As"), ("Kh", "Ks"), BOARD, pot=200)
        result = showdown(state)

        assert result.phase == GamePhase.COMPLETE
        assert result.winner == 0
        assert result.winner_reason == REASON_BEST_HAND
        assert [p.chips for p in result.players] == [1100, 900]
        assert result.pot == 0
        assert result.active_player_index == -1
        assert validate_game_state(result) == []

    def test_second_player_wins(self):
        state = rigged_state(("3h", "8s"), ("Kh", "Ks"), BOARD, pot=200)
        result = showdown(state)
        assert result.winner == 1
        assert [p.chips for p in result.players] == [900, 1100]

    def test_board_plays_for_both(self):
        """A royal flush on the board splits the pot."""
        state = rigged_state(("2c", "3d"), ("4c", "5d"), ROYAL_BOARD, pot=200)
        result = showdown(state)
        assert result.winner is None
        assert result.winner_reason == REASON_SPLIT_POT
        assert [p.chips for p in result.players] == [1000, 1000]
        assert result.odd_chips_discarded == 0

    def test_lone_player_wins_without_evaluation(self):
        """With one player left the evaluator is never called."""
        state = rigged_state(("Ah", "As"), ("Kh", "Ks"), BOARD, pot=200)
        state = state.with_player(0, state.players[0].fold())

        def explode(cards):
            raise AssertionError("evaluator should not run")

        result = determine_winner(state, evaluator=explode)
        assert result.winner == 1
        assert result.winner_reason == REASON_OPPONENT_FOLDED

    def test_custom_evaluator(self):
        """Any evaluator with a hand_strength attribute can rank hands."""
        state = rigged_state(("Ah", "As"), ("Kh", "Ks"), BOARD, pot=200)
        evaluator = rigged_evaluator({("Ah", "As"): 50, ("Kh", "Ks"): 10})
        result = showdown(state, evaluator=evaluator)
        assert result.winner == 1

    def test_incomplete_board_rejected(self, dealt_game):
        """Two live players cannot show down before the river is dealt."""
        calls = []

        def record(cards):
            calls.append(len(cards))
            return evaluate_hand(cards)

        with pytest.raises(GameStateError, match="board is not complete"):
            determine_winner(dealt_game, evaluator=record)
        assert calls == []

    def test_incomplete_board_after_fold(self, dealt_game):
        """A fold needs no board."""
        state = dealt_game.with_player(1, dealt_game.players[1].fold())
        result = determine_winner(state)
        assert result.winner == 0
        assert result.winner_reason == REASON_OPPONENT_FOLDED

    def test_evaluator_gets_seven_strings(self):
        seen = []

        def record(cards):
            seen.append(list(cards))
            return evaluate_hand(cards)

        state = rigged_state(("Ah", "As"), ("Kh", "Ks"), BOARD, pot=200)
        showdown(state, evaluator=record)
        assert seen == [
            ["Ah", "As", *BOARD],
            ["Kh", "Ks", *BOARD],
        ]

    def test_evaluator_failure_is_isolated(self):
        """A hand that cannot be evaluated loses to one that can."""
        state = rigged_state(("Ah", "As"), ("Kh", "Ks"), BOARD, pot=200)
        evaluator = rigged_evaluator({("Kh", "Ks"): 99})
        result = showdown(state, evaluator=evaluator)
        assert result.winner == 1
        assert result.winner_reason == REASON_BEST_HAND

    def test_all_evaluations_fail(self):
        state = rigged_state(("Ah", "As"), ("Kh", "Ks"), BOARD, pot=200)
        result = showdown(state, evaluator=rigged_evaluator({}))
        assert result.winner is None
        assert result.winner_reason == REASON_NO_VALID_HANDS
        assert [p.chips for p in result.players] == [1000, 1000]

    def test_input_state_unchanged(self):
        state = rigged_state(("Ah", "As"), ("Kh", "Ks"), BOARD, pot=200)
        showdown(state)
        assert state.pot == 200
        assert state.phase == GamePhase.RIVER


class TestSplitPot:
    """Tests for dividing pots."""

    def test_odd_chip_discarded(self):
        state = rigged_state(("2c", "3d"), ("4c", "5d"), ROYAL_BOARD, pot=201)
        result = showdown(state)
        assert [p.chips for p in result.players] == [1000, 999]
        assert result.odd_chips_discarded == 1
        assert validate_game_state(result) == []

    def test_odd_chip_to_dealer_left(self):
        """With the dealer in seat 0 the odd chip goes to seat 1."""
        rules = TableRules(odd_chip_policy=OddChipPolicy.DEALER_LEFT)
        state = rigged_state(("2c", "3d"), ("4c", "5d"), ROYAL_BOARD, pot=201, rules=rules)
        result = showdown(state)
        assert [p.chips for p in result.players] == [1000, 1000]
        assert result.odd_chips_discarded == 0

    def test_odd_chip_follows_dealer(self):
        rules = TableRules(odd_chip_policy=OddChipPolicy.DEALER_LEFT)
        state = rigged_state(("2c", "3d"), ("4c", "5d"), ROYAL_BOARD, pot=201, rules=rules)
        state = replace(state, dealer_index=1)
        result = showdown(state)
        assert [p.chips for p in result.players] == [1001, 999]

    def test_discards_accumulate(self):
        state = rigged_state(("2c", "3d"), ("4c", "5d"), ROYAL_BOARD, pot=201)
        state = replace(state, odd_chips_discarded=3)
        assert split_pot(state, [0, 1], REASON_SPLIT_POT).odd_chips_discarded == 4

    def test_award_pot_clears_bets(self):
        state = rigged_state(("Ah", "As"), ("Kh", "Ks"), BOARD, pot=200)
        state = state.with_player(0, replace(state.players[0], current_bet=40))
        result = award_pot(state, 0, REASON_BEST_HAND)
        assert result.players[0].current_bet == 0
        assert result.players[0].chips == 1100
        assert result.current_bet == 0


class TestShowdownThroughActions:
    """Tests for reaching showdown by betting."""

    def test_river_checks_reach_showdown(self):
        state = rigged_state(("Ah", "As"), ("Kh", "Ks"), BOARD, pot=200)
        state = act(state, 1, "call")
        state = act(state, 0, "call")
        assert state.phase == GamePhase.COMPLETE
        assert state.winner == 0
        assert [p.chips for p in state.players] == [1100, 900]

    def test_river_bet_called(self):
        state = rigged_state(("Ah", "As"), ("Kh", "Ks"), BOARD, pot=200)
        state = act(state, 1, "raise", 100)
        state = act(state, 0, "call")
        assert state.winner == 0
        assert [p.chips for p in state.players] == [1200, 800]
        assert validate_game_state(state) == []

    def test_evaluator_passed_through_actions(self):
        state = rigged_state(("Ah", "As"), ("Kh", "Ks"), BOARD, pot=200)
        evaluator = rigged_evaluator({("Ah", "As"): 5, ("Kh", "Ks"): 1})
        state = act(state, 1, "call", evaluator=evaluator)
        state = act(state, 0, "call", evaluator=evaluator)
        assert state.winner == 1
