"""
Heads-up Texas Hold'em Rules and Constants.

Key rules:

1. The dealer posts the small blind, the other player posts the big blind.
   Preflop: Dealer (small blind) acts first. Postflop: Big blind acts first.

2. Raise amounts are the total bet for the street ("raise to 60"), never the
   increment ("raise by 60").

3. Minimum raise: double the current bet, or the big blind when nothing has
   been bet yet. A player who cannot afford the minimum may still go all-in
   for less.

4. Split pots are divided with floor division. What happens to an odd chip is
   decided by the table's ``OddChipPolicy``.
"""

from enum import Enum
from dataclasses import dataclass


class GamePhase(str, Enum):
    """Phases of a heads-up hand."""
    WAITING = "waiting"      # Game created, nothing dealt yet
    PREFLOP = "preflop"      # After hole cards dealt, before flop
    FLOP = "flop"            # After 3 community cards
    TURN = "turn"            # After 4th community card
    RIVER = "river"          # After 5th community card
    SHOWDOWN = "showdown"    # Determine winner
    COMPLETE = "complete"    # Hand is over


BETTING_PHASES = (GamePhase.PREFLOP, GamePhase.FLOP, GamePhase.TURN, GamePhase.RIVER)


class ActionType(str, Enum):
    """Possible player actions."""
    FOLD = "fold"
    CALL = "call"
    RAISE = "raise"


class OddChipPolicy(str, Enum):
    """What to do with the chip left over when a split pot is odd."""
    DISCARD = "discard"          # Nobody receives it
    DEALER_LEFT = "dealer_left"  # First winner left of the dealer receives it


# Default game settings
SMALL_BLIND = 10
BIG_BLIND = 20
STARTING_CHIPS = 1000
NUM_PLAYERS = 2

# Cards per phase
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Winner reasons
REASON_OPPONENT_FOLDED = "opponent folded"
REASON_BEST_HAND = "best hand"
REASON_SPLIT_POT = "split pot"
REASON_NO_VALID_HANDS = "no valid hands"


@dataclass(frozen=True)
class TableRules:
    """Stakes and house rules for one table."""
    small_blind: int = SMALL_BLIND
    big_blind: int = BIG_BLIND
    starting_chips: int = STARTING_CHIPS
    odd_chip_policy: OddChipPolicy = OddChipPolicy.DISCARD

    def __post_init__(self) -> None:
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ValueError("Blinds must be positive")
        if self.small_blind > self.big_blind:
            raise ValueError("Small blind cannot exceed big blind")
        if self.starting_chips < self.big_blind:
            raise ValueError("Starting chips must cover the big blind")

    @property
    def total_chips(self) -> int:
        """Chips in play at the table."""
        return self.starting_chips * NUM_PLAYERS


def get_blind_positions(dealer_index: int) -> tuple:
    """
    Calculate small blind and big blind positions.

    Heads-up: the dealer posts the small blind.

    Returns:
        Tuple of (small_blind_index, big_blind_index)
    """
    return dealer_index, (dealer_index + 1) % NUM_PLAYERS


def next_dealer_index(dealer_index: int, hand_number: int) -> int:
    """Dealer for the upcoming hand: seat 0 first, then alternate."""
    if hand_number == 0:
        return 0
    return (dealer_index + 1) % NUM_PLAYERS


def calculate_min_raise(current_bet: int, big_blind: int) -> int:
    """
    Calculate the minimum total a raise must reach.

    Args:
        current_bet: Current highest bet in the round
        big_blind: Big blind amount

    Returns:
        Double the current bet, or the big blind if nothing is bet yet
    """
    return current_bet * 2 if current_bet > 0 else big_blind


def cards_for_next_street(phase: GamePhase) -> int:
    """Number of community cards dealt when leaving ``phase``."""
    if phase == GamePhase.PREFLOP:
        return FLOP_CARDS
    if phase == GamePhase.FLOP:
        return TURN_CARDS
    if phase == GamePhase.TURN:
        return RIVER_CARDS
    return 0


NEXT_PHASE = {
    GamePhase.PREFLOP: GamePhase.FLOP,
    GamePhase.FLOP: GamePhase.TURN,
    GamePhase.TURN: GamePhase.RIVER,
    GamePhase.RIVER: GamePhase.SHOWDOWN,
    GamePhase.SHOWDOWN: GamePhase.COMPLETE,
}
