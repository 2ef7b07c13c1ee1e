"""
Tests for the default hand evaluator.
"""

import pytest
from headsup.core.errors import InvalidCardStringError
from headsup.core.hand import evaluate_hand, compare_hands, HandEvaluation, HandRank


def hand(text):
    return text.split()


class TestHandRanking:
    """Tests for hand ranking."""

    def test_royal_flush(self):
        """Royal flush is the best possible hand with strength 0."""
        result = evaluate_hand(hand("Ah Kh Qh Jh 10h"))
        assert result.hand_rank == HandRank.ROYAL_FLUSH
        assert result.hand_strength == 0
        assert result.description == "Royal Flush"

    def test_straight_flush(self):
        result = evaluate_hand(hand("9h 8h 7h 6h 5h"))
        assert result.hand_rank == HandRank.STRAIGHT_FLUSH
        assert result.description == "Straight Flush, Nine high"

    def test_four_of_a_kind(self):
        result = evaluate_hand(hand("As Ah Ad Ac Ks"))
        assert result.hand_rank == HandRank.FOUR_OF_A_KIND
        assert result.description == "Four of a Kind, Aces"

    def test_full_house(self):
        result = evaluate_hand(hand("Kh Kd Ks 2c 2d"))
        assert result.hand_rank == HandRank.FULL_HOUSE
        assert result.description == "Full House, Kings full of Twos"

    def test_flush(self):
        result = evaluate_hand(hand("As Ks Js 9s 2s"))
        assert result.hand_rank == HandRank.FLUSH
        assert result.description == "Flush, Ace high"

    def test_straight(self):
        result = evaluate_hand(hand("As Kh Qd Jc 10s"))
        assert result.hand_rank == HandRank.STRAIGHT
        assert result.description == "Straight, Ace high"

    def test_wheel_straight(self):
        """A-2-3-4-5 is a five-high straight with the ace played low."""
        result = evaluate_hand(hand("Ah 2d 3c 4s 5h"))
        assert result.hand_rank == HandRank.STRAIGHT
        assert result.description == "Straight, Five high"
        assert result.cards == ("5h", "4s", "3c", "2d", "Ah")

    def test_three_of_a_kind(self):
        result = evaluate_hand(hand("7h 7d 7s Kc 2d"))
        assert result.hand_rank == HandRank.THREE_OF_A_KIND
        assert result.description == "Three of a Kind, Sevens"

    def test_two_pair(self):
        result = evaluate_hand(hand("Jh Jd 4s 4c Ad"))
        assert result.hand_rank == HandRank.TWO_PAIR
        assert result.description == "Two Pair, Jacks and Fours"

    def test_one_pair(self):
        result = evaluate_hand(hand("6h 6d Ah Kc 9s"))
        assert result.hand_rank == HandRank.ONE_PAIR
        assert result.description == "Pair of Sixes"

    def test_high_card(self):
        result = evaluate_hand(hand("Ah Jd 9c 6s 3h"))
        assert result.hand_rank == HandRank.HIGH_CARD
        assert result.description == "High Card, Ace"
        assert result.hand_rank_name == "High Card"

    def test_result_type(self):
        result = evaluate_hand(hand("Ah Jd 9c 6s 3h"))
        assert isinstance(result, HandEvaluation)
        assert len(result.cards) == 5


class TestHandStrength:
    """Tests for strength ordering (lower is better)."""

    def test_rank_order(self):
        """Each category beats every category below it."""
        hands = [
            "Ah Kh Qh Jh 10h",
            "9h 8h 7h 6h 5h",
            "As Ah Ad Ac Ks",
            "Kh Kd Ks 2c 2d",
            "As Ks Js 9s 2s",
            "As Kh Qd Jc 10s",
            "7h 7d 7s Kc 2d",
            "Jh Jd 4s 4c Ad",
            "6h 6d Ah Kc 9s",
            "Ah Jd 9c 6s 3h",
        ]
        strengths = [evaluate_hand(hand(h)).hand_strength for h in hands]
        assert strengths == sorted(strengths)
        assert len(set(strengths)) == len(strengths)

    def test_kicker_decides(self):
        """Same pair, better kicker wins."""
        assert compare_hands(hand("As Ad Kc 7h 3d"), hand("Ah Ac Qs 7d 3c")) == -1
        assert compare_hands(hand("Ah Ac Qs 7d 3c"), hand("As Ad Kc 7h 3d")) == 1

    def test_identical_values_tie(self):
        assert compare_hands(hand("As Kd Qc Jh 9s"), hand("Ad Kc Qh Js 9d")) == 0

    def test_wheel_is_lowest_straight(self):
        assert compare_hands(hand("6c 5h 4d 3s 2c"), hand("Ah 2d 3c 4s 5h")) == -1

    def test_higher_pair_wins(self):
        assert compare_hands(hand("Kh Kd 2c 3s 7h"), hand("Qh Qd Ac Ks 7d")) == -1


class TestSevenCardHands:
    """Tests for picking the best five of six or seven cards."""

    def test_best_five_of_seven(self):
        result = evaluate_hand(hand("Ah Kh Qh Jh 10h 2c 3d"))
        assert result.hand_rank == HandRank.ROYAL_FLUSH
        assert set(result.cards) == {"Ah", "Kh", "Qh", "Jh", "10h"}

    def test_six_cards(self):
        result = evaluate_hand(hand("Kh Kd Ks 2c 2d 9h"))
        assert result.hand_rank == HandRank.FULL_HOUSE

    def test_order_does_not_matter(self):
        cards = hand("Ah As Kd 7c 7h 2s 9d")
        assert (
            evaluate_hand(cards).hand_strength
            == evaluate_hand(list(reversed(cards))).hand_strength
        )

    def test_hole_cards_play_with_board(self):
        """Pocket aces on a dry board make one pair of aces."""
        result = evaluate_hand(hand("Ah As 2d 7c 9d Jc 4h"))
        assert result.hand_rank == HandRank.ONE_PAIR
        assert result.description == "Pair of Aces"


class TestEvaluatorErrors:
    """Tests for malformed input."""

    @pytest.mark.parametrize("cards", ["Ah Kh Qh Jh", "Ah Kh Qh Jh 10h 9h 8h 7h", ""])
    def test_wrong_card_count(self, cards):
        with pytest.raises(ValueError):
            evaluate_hand(hand(cards))

    def test_duplicate_cards(self):
        with pytest.raises(ValueError, match="Duplicate"):
            evaluate_hand(hand("Ah Ah Qh Jh 10h"))

    def test_bad_card_string(self):
        with pytest.raises(InvalidCardStringError):
            evaluate_hand(hand("Ah Kh Qh Jh Th"))
