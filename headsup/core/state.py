"""
Game state for one heads-up table.

``GameState`` is an immutable value. Engine operations never modify the state
they receive; they build a new one with ``dataclasses.replace``. That makes
"a rejected action leaves the state untouched" hold by construction.
"""

from __future__ import annotations
from typing import List, Optional, Tuple
from dataclasses import dataclass, field, replace
from collections import Counter

from headsup.core.card import Card, DECK_SIZE
from headsup.core.player import Player
from headsup.core.rules import (
    GamePhase, TableRules, BETTING_PHASES, NUM_PLAYERS, get_blind_positions,
)


@dataclass(frozen=True)
class GameState:
    """
    Everything needed to continue a heads-up game.

    Attributes:
        game_id: Identifier assigned by the caller
        players: Exactly two players
        community_cards: Board cards (0, 3, 4 or 5)
        pot: All chips committed this hand, current street included
        current_bet: Bet to match on the current street
        active_player_index: Player to act, -1 when nobody is to act
        phase: Current phase of the hand
        winner: Index of the winning player, None for split pots
        winner_reason: Why the hand ended the way it did
        deck: Remaining undealt cards
        players_acted: Per-player "acted this street" flags
        hand_number: Hands dealt so far
        dealer_index: Dealer (small blind) for the current hand
        rules: Stakes and house rules
        odd_chips_discarded: Chips removed by odd split pots so far
    """
    game_id: str
    players: Tuple[Player, ...]
    community_cards: Tuple[Card, ...] = ()
    pot: int = 0
    current_bet: int = 0
    active_player_index: int = -1
    phase: GamePhase = GamePhase.WAITING
    winner: Optional[int] = None
    winner_reason: Optional[str] = None
    deck: Tuple[Card, ...] = ()
    players_acted: Tuple[bool, ...] = (False, False)
    hand_number: int = 0
    dealer_index: int = 0
    rules: TableRules = field(default_factory=TableRules)
    odd_chips_discarded: int = 0

    @property
    def small_blind_index(self) -> int:
        return get_blind_positions(self.dealer_index)[0]

    @property
    def big_blind_index(self) -> int:
        return get_blind_positions(self.dealer_index)[1]

    @property
    def is_hand_running(self) -> bool:
        """Check if a hand is currently in progress."""
        return self.phase in BETTING_PHASES

    @property
    def active_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if not self.is_hand_running or self.active_player_index < 0:
            return None
        return self.players[self.active_player_index]

    def player_index(self, player_id: str) -> Optional[int]:
        """Index of the player with ``player_id``, or None."""
        for i, player in enumerate(self.players):
            if player.id == player_id:
                return i
        return None

    def with_player(self, index: int, player: Player) -> GameState:
        """Return a copy with the player at ``index`` replaced."""
        players = list(self.players)
        players[index] = player
        return replace(self, players=tuple(players))

    def with_acted(self, index: int, acted: bool = True) -> GameState:
        """Return a copy with one acted flag set."""
        flags = list(self.players_acted)
        flags[index] = acted
        return replace(self, players_acted=tuple(flags))

    def chips_in_play(self) -> int:
        """Chips behind plus the pot plus chips lost to odd splits."""
        return sum(p.chips for p in self.players) + self.pot + self.odd_chips_discarded


def validate_game_state(state: GameState) -> List[str]:
    """
    Check a state against the table invariants.

    Returns:
        A list of human-readable issues; empty when the state is valid.
    """
    issues: List[str] = []

    if len(state.players) != NUM_PLAYERS:
        issues.append(f"Expected {NUM_PLAYERS} players, found {len(state.players)}")
        return issues

    if not all(p.id and p.name for p in state.players):
        issues.append("Players missing required id or name")
    if len({p.id for p in state.players}) != len(state.players):
        issues.append("Player ids are not unique")

    if any(p.chips < 0 or p.current_bet < 0 for p in state.players):
        issues.append("Negative chips or bet on a player")
    if state.pot < 0 or state.current_bet < 0:
        issues.append("Negative pot or current bet")

    expected_chips = state.rules.total_chips
    if state.chips_in_play() != expected_chips:
        issues.append(
            f"Chip count is {state.chips_in_play()}, expected {expected_chips}"
        )

    if state.phase != GamePhase.WAITING:
        all_cards = list(state.deck) + list(state.community_cards)
        for player in state.players:
            all_cards.extend(player.hole_cards)
        if len(all_cards) != DECK_SIZE:
            issues.append(f"Card count is {len(all_cards)}, expected {DECK_SIZE}")
        duplicates = [c for c, n in Counter(all_cards).items() if n > 1]
        if duplicates:
            issues.append(f"Duplicate cards: {', '.join(str(c) for c in duplicates)}")

    if state.is_hand_running:
        can_act = [i for i, p in enumerate(state.players) if p.can_act]
        if can_act and state.active_player_index not in can_act:
            issues.append(
                f"Active player {state.active_player_index} cannot act"
            )

    if state.dealer_index not in (0, 1):
        issues.append(f"Invalid dealer index {state.dealer_index}")

    return issues
