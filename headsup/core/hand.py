"""
Default Hand Evaluator for Texas Hold'em.

The betting engine only needs a callable that turns 5-7 card strings into an
object with a ``hand_strength``; this module provides one. Any other evaluator
with the same contract can be passed to the engine instead.

Strength is a single integer where lower = better hand:
0 is a royal flush, high-card hands have the largest values.

Hand Rankings (best to worst):
1. Royal Flush: A♠ K♠ Q♠ J♠ 10♠
2. Straight Flush: 5 consecutive cards of same suit
3. Four of a Kind: 4 cards of same rank
4. Full House: 3 of a kind + pair
5. Flush: 5 cards of same suit
6. Straight: 5 consecutive cards
7. Three of a Kind: 3 cards of same rank
8. Two Pair: 2 different pairs
9. One Pair: 2 cards of same rank
10. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel).
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass
from itertools import combinations
from enum import IntEnum
from collections import Counter

from headsup.core.card import Card, string_to_card, card_to_string

ACE = 14
FIVE = 5


class HandRank(IntEnum):
    """Hand rankings from best (highest value) to worst (lowest value)."""
    ROYAL_FLUSH = 10
    STRAIGHT_FLUSH = 9
    FOUR_OF_A_KIND = 8
    FULL_HOUSE = 7
    FLUSH = 6
    STRAIGHT = 5
    THREE_OF_A_KIND = 4
    TWO_PAIR = 3
    ONE_PAIR = 2
    HIGH_CARD = 1


HAND_RANK_NAMES = {
    HandRank.ROYAL_FLUSH: "Royal Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.HIGH_CARD: "High Card",
}

VALUE_NAMES = {
    2: "Two", 3: "Three", 4: "Four", 5: "Five", 6: "Six", 7: "Seven",
    8: "Eight", 9: "Nine", 10: "Ten", 11: "Jack", 12: "Queen", 13: "King",
    14: "Ace",
}

# Final strength = (10 - hand_rank) * RANK_MULTIPLIER + kicker_value
# Royal Flush (10) -> 0, High Card (1) -> 9*M + kickers
RANK_MULTIPLIER = 1000000


@dataclass(frozen=True)
class HandEvaluation:
    """Result of evaluating a hand."""
    hand_strength: int
    hand_rank: HandRank
    hand_rank_name: str
    description: str
    cards: Tuple[str, ...]  # Best five cards, ordered by contribution


def evaluate_hand(card_strings: Sequence[str]) -> HandEvaluation:
    """
    Evaluate a poker hand of 5-7 cards.

    Args:
        card_strings: Short card strings such as ["Ah", "10s", ...]

    Returns:
        HandEvaluation for the best five-card combination

    Raises:
        ValueError: If not 5-7 cards are given, a card repeats, or a string
            cannot be parsed
    """
    if len(card_strings) < 5 or len(card_strings) > 7:
        raise ValueError(f"Need 5-7 cards, got {len(card_strings)}")

    cards = [string_to_card(s) for s in card_strings]
    if len(set(cards)) != len(cards):
        raise ValueError("Duplicate cards in hand")

    best: Optional[Tuple[int, HandRank, List[Card]]] = None
    for combo in combinations(cards, 5):
        result = _evaluate_5_cards(list(combo))
        if best is None or result[0] < best[0]:
            best = result

    strength, hand_type, best_cards = best
    return HandEvaluation(
        hand_strength=strength,
        hand_rank=hand_type,
        hand_rank_name=HAND_RANK_NAMES[hand_type],
        description=_describe(hand_type, best_cards),
        cards=tuple(card_to_string(c) for c in best_cards),
    )


def compare_hands(cards1: Sequence[str], cards2: Sequence[str]) -> int:
    """
    Compare two hands.

    Returns:
        -1 if cards1 wins, 1 if cards2 wins, 0 if tie
    """
    strength1 = evaluate_hand(cards1).hand_strength
    strength2 = evaluate_hand(cards2).hand_strength

    if strength1 < strength2:
        return -1
    if strength1 > strength2:
        return 1
    return 0


def _evaluate_5_cards(cards: List[Card]) -> Tuple[int, HandRank, List[Card]]:
    """Evaluate exactly 5 cards."""
    sorted_cards = sorted(cards, key=lambda c: c.value, reverse=True)
    values = [c.value for c in sorted_cards]

    is_flush = len({c.suit for c in sorted_cards}) == 1
    is_straight, straight_high = _check_straight(values)

    value_counts = Counter(values)
    counts = sorted(value_counts.values(), reverse=True)

    if is_straight and is_flush:
        if straight_high == ACE:
            return _calculate_strength(HandRank.ROYAL_FLUSH, [ACE]), HandRank.ROYAL_FLUSH, sorted_cards
        strength = _calculate_strength(HandRank.STRAIGHT_FLUSH, [straight_high])
        return strength, HandRank.STRAIGHT_FLUSH, _order_straight(sorted_cards, straight_high)

    if counts == [4, 1]:
        return _grouped(HandRank.FOUR_OF_A_KIND, sorted_cards, value_counts)

    if counts == [3, 2]:
        return _grouped(HandRank.FULL_HOUSE, sorted_cards, value_counts)

    if is_flush:
        return _calculate_strength(HandRank.FLUSH, values), HandRank.FLUSH, sorted_cards

    if is_straight:
        strength = _calculate_strength(HandRank.STRAIGHT, [straight_high])
        return strength, HandRank.STRAIGHT, _order_straight(sorted_cards, straight_high)

    if counts == [3, 1, 1]:
        return _grouped(HandRank.THREE_OF_A_KIND, sorted_cards, value_counts)

    if counts == [2, 2, 1]:
        return _grouped(HandRank.TWO_PAIR, sorted_cards, value_counts)

    if counts == [2, 1, 1, 1]:
        return _grouped(HandRank.ONE_PAIR, sorted_cards, value_counts)

    return _calculate_strength(HandRank.HIGH_CARD, values), HandRank.HIGH_CARD, sorted_cards


def _grouped(hand_type: HandRank, cards: List[Card], value_counts: Counter):
    """Strength for hands ranked by groups of equal cards, then kickers."""
    ordered = sorted(cards, key=lambda c: (value_counts[c.value], c.value), reverse=True)
    # One entry per distinct value, biggest group first
    kickers = []
    for card in ordered:
        if card.value not in kickers:
            kickers.append(card.value)
    return _calculate_strength(hand_type, kickers), hand_type, ordered


def _check_straight(values: List[int]) -> Tuple[bool, Optional[int]]:
    """
    Check if five values form a straight.

    Returns:
        Tuple of (is_straight, high_card_value)
    """
    unique = sorted(set(values), reverse=True)
    if len(unique) != 5:
        return False, None

    if unique[0] - unique[4] == 4:
        return True, unique[0]

    # Wheel (A-2-3-4-5)
    if unique == [ACE, 5, 4, 3, 2]:
        return True, FIVE

    return False, None


def _order_straight(cards: List[Card], straight_high: int) -> List[Card]:
    """Put the ace last in a wheel (5-4-3-2-A)."""
    if straight_high != FIVE:
        return cards
    return [c for c in cards if c.value != ACE] + [c for c in cards if c.value == ACE]


def _calculate_strength(hand_type: HandRank, kicker_values: List[int]) -> int:
    """
    Calculate the absolute strength for a hand type and kickers.

    Formula: (10 - hand_type) * RANK_MULTIPLIER + kicker_value, where each
    kicker position is weighted by powers of 13 and inverted so that
    an ace contributes 0.
    """
    base = (10 - int(hand_type)) * RANK_MULTIPLIER

    kicker_value = 0
    for i, value in enumerate(kicker_values):
        inverted = ACE - value
        kicker_value += inverted * (13 ** (len(kicker_values) - 1 - i))

    return base + kicker_value


def _describe(hand_type: HandRank, best_cards: List[Card]) -> str:
    """Human-readable description of the best five cards."""
    counts = Counter(c.value for c in best_cards)
    by_group = sorted(counts, key=lambda v: (counts[v], v), reverse=True)
    high = max(c.value for c in best_cards)

    if hand_type == HandRank.ROYAL_FLUSH:
        return "Royal Flush"
    if hand_type in (HandRank.STRAIGHT_FLUSH, HandRank.STRAIGHT):
        if ACE in counts and 2 in counts:
            high = FIVE
        return f"{HAND_RANK_NAMES[hand_type]}, {VALUE_NAMES[high]} high"
    if hand_type == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(by_group[0])}"
    if hand_type == HandRank.FULL_HOUSE:
        return f"Full House, {_plural(by_group[0])} full of {_plural(by_group[1])}"
    if hand_type == HandRank.FLUSH:
        return f"Flush, {VALUE_NAMES[high]} high"
    if hand_type == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(by_group[0])}"
    if hand_type == HandRank.TWO_PAIR:
        return f"Two Pair, {_plural(by_group[0])} and {_plural(by_group[1])}"
    if hand_type == HandRank.ONE_PAIR:
        return f"Pair of {_plural(by_group[0])}"
    return f"High Card, {VALUE_NAMES[high]}"


def _plural(value: int) -> str:
    name = VALUE_NAMES[value]
    return f"{name}es" if name == "Six" else f"{name}s"
