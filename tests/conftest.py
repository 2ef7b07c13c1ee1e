"""
Pytest configuration and shared fixtures for heads-up engine tests.
"""

import pytest
from headsup.core.card import create_deck
from headsup.core.game import create_game, deal_new_hand
from tests.helpers import act


@pytest.fixture
def deck():
    """Create a fresh unshuffled deck."""
    return create_deck()


@pytest.fixture
def new_game():
    """Create a waiting heads-up game."""
    return create_game("g1", ("Alice", "Bob"))


@pytest.fixture
def dealt_game(new_game):
    """Deal hand #1 with a fixed seed."""
    return deal_new_hand(new_game, seed=42)


@pytest.fixture
def flop_game(dealt_game):
    """Limp preflop: small blind calls, big blind checks."""
    state = act(dealt_game, 0, "call")
    return act(state, 1, "call")
