"""
Player record for heads-up Texas Hold'em.

Tracks a seat's chips, hole cards, the amount committed on the current street
and whether the player folded or is all-in. Players are immutable; every
change returns a new ``Player``.
"""

from __future__ import annotations
from typing import Tuple
from dataclasses import dataclass, replace

from headsup.core.card import Card


@dataclass(frozen=True)
class Player:
    """
    A player at the table.

    Attributes:
        id: Unique identifier, stable for the lifetime of the game
        name: Display name
        chips: Chips behind (not yet committed)
        hole_cards: The player's private cards (0 or 2)
        current_bet: Chips committed on the current street
        folded: Has folded this hand
        all_in: Has committed every chip this hand
    """
    id: str
    name: str
    chips: int
    hole_cards: Tuple[Card, ...] = ()
    current_bet: int = 0
    folded: bool = False
    all_in: bool = False

    @property
    def can_act(self) -> bool:
        """Check if player can still take an action this hand."""
        return not self.folded and not self.all_in

    @property
    def is_in_hand(self) -> bool:
        """Check if player is still contesting the pot."""
        return not self.folded

    def reset_for_new_hand(self) -> Player:
        """Clear cards, bets and flags for a new hand."""
        return replace(self, hole_cards=(), current_bet=0, folded=False, all_in=False)

    def reset_for_new_round(self) -> Player:
        """Clear the street bet (flop, turn, river)."""
        return replace(self, current_bet=0)

    def bet(self, amount: int) -> Tuple[Player, int]:
        """
        Commit chips to the current street.

        Args:
            amount: Chips to add; capped at the player's stack

        Returns:
            Tuple of (updated player, chips actually committed)
        """
        actual = max(0, min(amount, self.chips))
        chips = self.chips - actual
        updated = replace(
            self,
            chips=chips,
            current_bet=self.current_bet + actual,
            all_in=self.all_in or chips == 0,
        )
        return updated, actual

    def fold(self) -> Player:
        return replace(self, folded=True)

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"Player {self.name} [{cards_str}] ${self.chips}"
