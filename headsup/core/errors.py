"""
Exceptions and action error codes.

Two tiers of failure exist:

1. Player input the engine rejects (wrong turn, bad raise, ...). These are
   never raised; they come back as an ``ActionResult`` carrying an
   ``ActionError`` code and a short message safe to show to players.
2. Collaborator bugs (malformed card strings, impossible draws, starting a
   hand at the wrong time). These raise one of the exceptions below.
"""

from enum import Enum


class HeadsUpError(Exception):
    """Base class for all engine exceptions."""


class InvalidCountError(HeadsUpError, ValueError):
    """A draw asked for fewer than one card or more than the deck holds."""


class InvalidCardStringError(HeadsUpError, ValueError):
    """A card string could not be parsed."""


class GameStateError(HeadsUpError, RuntimeError):
    """An operation was called while its precondition did not hold."""


class HandNotCompleteError(GameStateError):
    """A new hand was requested before the current one finished."""


class InsufficientChipsError(GameStateError):
    """A player cannot cover the big blind for the next hand."""


class ActionError(str, Enum):
    """Reasons a player action can be rejected."""
    PLAYER_NOT_FOUND = "PlayerNotFound"
    HAND_COMPLETE = "HandComplete"
    HAND_NOT_DEALT = "HandNotDealt"
    NOT_YOUR_TURN = "NotYourTurn"
    ALREADY_FOLDED = "AlreadyFolded"
    AMOUNT_REQUIRED = "AmountRequired"
    AMOUNT_MUST_BE_POSITIVE = "AmountMustBePositive"
    RAISE_TOO_LOW = "RaiseTooLow"
    INVALID_AMOUNT = "InvalidAmount"
    MINIMUM_RAISE_NOT_MET = "MinimumRaiseNotMet"
    INVALID_ACTION = "InvalidAction"


ACTION_ERROR_MESSAGES = {
    ActionError.PLAYER_NOT_FOUND: "Player not found",
    ActionError.HAND_COMPLETE: "Hand is complete",
    ActionError.HAND_NOT_DEALT: "Hand has not been dealt",
    ActionError.NOT_YOUR_TURN: "Not your turn",
    ActionError.ALREADY_FOLDED: "Player already folded",
    ActionError.AMOUNT_REQUIRED: "Raise amount required",
    ActionError.INVALID_AMOUNT: "Raise amount must be a whole number of chips",
    ActionError.AMOUNT_MUST_BE_POSITIVE: "Raise amount must be positive",
    ActionError.RAISE_TOO_LOW: "Raise must be higher than current bet",
    ActionError.MINIMUM_RAISE_NOT_MET: "Minimum raise is to ${minimum}",
    ActionError.INVALID_ACTION: "Invalid action: {action}",
}


def action_error_message(code: ActionError, **details) -> str:
    """Render the player-facing message for an error code."""
    return ACTION_ERROR_MESSAGES[code].format(**details)
