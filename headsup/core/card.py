"""
Card and Deck utilities for heads-up Texas Hold'em.

Cards are immutable values made of a suit and a rank. A deck is a plain tuple
of cards, and every operation here returns a new deck instead of changing the
one passed in, so a deck can live inside an immutable game state.

Shuffling is deterministic: the same deck and seed always produce the same
order, which makes every dealt hand reproducible.
"""

from __future__ import annotations
from typing import Iterable, List, NamedTuple, Sequence, Tuple
from dataclasses import dataclass
from enum import Enum

from headsup.core.errors import InvalidCardStringError, InvalidCountError


class Suit(str, Enum):
    """Card suits, in canonical deck order."""
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"


class Rank(str, Enum):
    """Card ranks from 2 (lowest) to Ace (highest)."""
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def numeric_value(self) -> int:
        """Numeric value from 2 to 14 (J=11, Q=12, K=13, A=14)."""
        return RANK_VALUES[self]


RANK_VALUES = {rank: value for value, rank in enumerate(Rank, start=2)}

SUIT_CHARS = {
    Suit.HEARTS: "h",
    Suit.DIAMONDS: "d",
    Suit.CLUBS: "c",
    Suit.SPADES: "s",
}

SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

# Reverse mappings
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
STRING_TO_RANK = {rank.value: rank for rank in Rank}

DECK_SIZE = 52

# Linear congruential generator constants (Numerical Recipes)
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2 ** 32


@dataclass(frozen=True)
class Card:
    """
    A playing card.

    Cards can be created from:
    - Suit and Rank enums: Card(Suit.SPADES, Rank.ACE)
    - String notation: Card.from_string("As") or Card.from_string("10h")
    """
    suit: Suit
    rank: Rank

    @property
    def value(self) -> int:
        """Numeric rank value (2-14)."""
        return self.rank.numeric_value

    @classmethod
    def from_string(cls, s: str) -> Card:
        return string_to_card(s)

    def __str__(self) -> str:
        return card_to_string(self)

    @property
    def pretty_str(self) -> str:
        """Display string like 'A♠'."""
        return f"{self.rank.value}{SUIT_SYMBOLS[self.suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self.suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"


Deck = Tuple[Card, ...]


class DrawResult(NamedTuple):
    """Cards taken from the top of a deck and what is left of it."""
    drawn: Deck
    remaining: Deck


class SeededRandom:
    """
    Linear congruential generator.

    Produces floats in [0, 1) from ``state = (a * state + c) mod 2^32``.
    Identical seeds always produce identical sequences.
    """

    def __init__(self, seed: int):
        self._state = seed % LCG_MODULUS

    def next(self) -> float:
        self._state = (LCG_MULTIPLIER * self._state + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS


def create_deck() -> Deck:
    """Create a standard 52-card deck, suit-major and rank-minor."""
    return tuple(Card(suit, rank) for suit in Suit for rank in Rank)


def shuffle_deck(deck: Sequence[Card], seed: int) -> Deck:
    """
    Fisher-Yates shuffle driven by a seeded generator.

    Args:
        deck: Cards to shuffle (left untouched)
        seed: Integer seed; the same seed always gives the same order

    Returns:
        A new, shuffled deck
    """
    shuffled = list(deck)
    random = SeededRandom(seed)

    for i in range(len(shuffled) - 1, 0, -1):
        j = int(random.next() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]

    return tuple(shuffled)


def draw_cards(deck: Sequence[Card], count: int) -> DrawResult:
    """
    Draw cards from the top of a deck.

    Raises:
        InvalidCountError: If count is below 1 or exceeds the deck size.
    """
    if count < 1 or count > len(deck):
        raise InvalidCountError(
            f"Invalid count: {count}. Must be between 1 and {len(deck)}"
        )

    cards = tuple(deck)
    return DrawResult(drawn=cards[:count], remaining=cards[count:])


def validate_deck(deck: Iterable[Card]) -> bool:
    """Check that a deck holds exactly 52 distinct cards."""
    cards = list(deck)
    if len(cards) != DECK_SIZE:
        return False
    return len({(card.suit, card.rank) for card in cards}) == DECK_SIZE


def card_to_string(card: Card) -> str:
    """Convert a card to its short form, e.g. 'Ah' or '10s'."""
    return f"{card.rank.value}{SUIT_CHARS[card.suit]}"


def string_to_card(card_string: str) -> Card:
    """
    Parse a short card string such as 'Ah', 'Kd' or '10s'.

    Raises:
        InvalidCardStringError: If the rank or the suit letter is unknown.
    """
    if not isinstance(card_string, str) or len(card_string) < 2:
        raise InvalidCardStringError(f"Invalid card string: {card_string!r}")

    rank = STRING_TO_RANK.get(card_string[:-1])
    suit = CHAR_TO_SUIT.get(card_string[-1])
    if rank is None or suit is None:
        raise InvalidCardStringError(f"Invalid card string: {card_string!r}")

    return Card(suit, rank)


def cards_to_strings(cards: Iterable[Card]) -> List[str]:
    """Convert several cards to short strings."""
    return [card_to_string(card) for card in cards]


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse space-separated cards, e.g. "As Kh 10d".

    Returns:
        List of Card objects
    """
    return [string_to_card(s) for s in cards_str.split()]
