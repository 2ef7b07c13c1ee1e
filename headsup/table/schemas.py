"""
Pydantic schemas for game state snapshots.

Collaborators (HTTP handlers, broadcasters, storage) receive these instead of
the engine's own dataclasses. ``model_dump()`` gives JSON-ready data.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from headsup.core.betting import ActionResult
from headsup.core.card import Card, card_to_string
from headsup.core.player import Player
from headsup.core.rules import GamePhase, REASON_OPPONENT_FOLDED
from headsup.core.state import GameState


class CardSchema(BaseModel):
    """Card representation."""
    suit: str
    rank: str
    value: int = Field(ge=2, le=14)
    text: str

    @classmethod
    def from_card(cls, card: Card) -> "CardSchema":
        return cls(
            suit=card.suit.value,
            rank=card.rank.value,
            value=card.value,
            text=card_to_string(card),
        )


class PlayerSchema(BaseModel):
    """Player information; hole cards are None when hidden from the viewer."""
    id: str
    name: str
    chips: int = Field(ge=0)
    current_bet: int = Field(ge=0)
    folded: bool
    all_in: bool
    hole_cards: Optional[List[CardSchema]] = None

    @classmethod
    def from_player(cls, player: Player, show_cards: bool) -> "PlayerSchema":
        cards = None
        if show_cards:
            cards = [CardSchema.from_card(c) for c in player.hole_cards]
        return cls(
            id=player.id,
            name=player.name,
            chips=player.chips,
            current_bet=player.current_bet,
            folded=player.folded,
            all_in=player.all_in,
            hole_cards=cards,
        )


class GameStateSchema(BaseModel):
    """Complete game state as seen by one viewer."""
    game_id: str
    players: List[PlayerSchema]
    community_cards: List[CardSchema] = []
    pot: int = Field(ge=0)
    current_bet: int = Field(ge=0)
    active_player_index: int = Field(ge=-1, le=1)
    phase: str
    winner: Optional[int] = None
    winner_reason: Optional[str] = None
    deck_size: int = Field(ge=0, le=52)
    players_acted: List[bool]
    hand_number: int = Field(ge=0)
    dealer_index: int = Field(ge=0, le=1)

    @classmethod
    def from_state(
        cls,
        state: GameState,
        for_player_id: Optional[str] = None,
    ) -> "GameStateSchema":
        """
        Build a snapshot of ``state``.

        Args:
            state: Game state to describe
            for_player_id: Viewer. Their own hole cards are always shown; the
                opponent's only after a showdown. Without a viewer every hand
                is shown.
        """
        showdown = (
            state.phase == GamePhase.COMPLETE
            and state.winner_reason is not None
            and state.winner_reason != REASON_OPPONENT_FOLDED
        )
        players = [
            PlayerSchema.from_player(
                p,
                show_cards=for_player_id is None or p.id == for_player_id or showdown,
            )
            for p in state.players
        ]

        return cls(
            game_id=state.game_id,
            players=players,
            community_cards=[CardSchema.from_card(c) for c in state.community_cards],
            pot=state.pot,
            current_bet=state.current_bet,
            active_player_index=state.active_player_index,
            phase=state.phase.value,
            winner=state.winner,
            winner_reason=state.winner_reason,
            deck_size=len(state.deck),
            players_acted=list(state.players_acted),
            hand_number=state.hand_number,
            dealer_index=state.dealer_index,
        )


class ActionRequest(BaseModel):
    """Request to take a game action."""
    player_id: str
    action: str = Field(..., description="Action type: fold, call, raise")
    amount: Optional[int] = Field(default=None, description="Total to raise to")


class ActionResultSchema(BaseModel):
    """Result of an action."""
    success: bool
    error: Optional[str] = None
    code: Optional[str] = None
    game_state: GameStateSchema

    @classmethod
    def from_result(
        cls,
        result: ActionResult,
        for_player_id: Optional[str] = None,
    ) -> "ActionResultSchema":
        return cls(
            success=result.success,
            error=result.error,
            code=result.code.value if result.code else None,
            game_state=GameStateSchema.from_state(result.game_state, for_player_id),
        )
