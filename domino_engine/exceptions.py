"""
Custom exception hierarchy for the domino engine.

Rule violations are reported to callers as ``MoveResult`` failures carrying a
``MoveError`` kind. The typed exceptions below exist so the same failures can
be raised where a caller prefers exceptions (``MoveResult.unwrap``) and for
errors outside the rules themselves (bad input, stale snapshots).
"""

from enum import Enum
from typing import Dict, Optional, Type


class MoveError(Enum):
    """Kinds of rejected moves."""

    NOT_YOUR_TURN = "not_your_turn"
    TILE_NOT_IN_HAND = "tile_not_in_hand"
    NO_VALID_CONNECTION = "no_valid_connection"
    SIDE_NOT_AVAILABLE = "side_not_available"
    GAME_ENDED = "game_ended"
    MUST_PLAY = "must_play"


class DominoError(Exception):
    """Base exception for all game-related errors."""


class InvalidMoveError(DominoError):
    """Action is not legal in the current state.

    Subclasses pin ``kind``; the base class carries one only when given.
    """

    kind: Optional[MoveError] = None

    def __init__(self, message: str = "", kind: Optional[MoveError] = None):
        super().__init__(message or self.__class__.__doc__)
        if kind is not None:
            self.kind = kind


class NotYourTurnError(InvalidMoveError):
    """It is another player's turn."""

    kind = MoveError.NOT_YOUR_TURN


class TileNotInHandError(InvalidMoveError):
    """The player does not hold this tile."""

    kind = MoveError.TILE_NOT_IN_HAND


class NoValidConnectionError(InvalidMoveError):
    """The tile does not connect to either open end."""

    kind = MoveError.NO_VALID_CONNECTION


class SideNotAvailableError(InvalidMoveError):
    """The tile cannot be placed on the requested side."""

    kind = MoveError.SIDE_NOT_AVAILABLE


class GameEndedError(InvalidMoveError):
    """The match is over."""

    kind = MoveError.GAME_ENDED


class MustPlayError(InvalidMoveError):
    """Passing is not allowed while a playable tile is held."""

    kind = MoveError.MUST_PLAY


class ValidationError(DominoError):
    """Input validation failed."""


class GameNotFoundError(DominoError):
    """Match does not exist."""


class StaleStateError(DominoError):
    """A state was computed against an outdated match version."""


_ERROR_TYPES: Dict[MoveError, Type[InvalidMoveError]] = {
    MoveError.NOT_YOUR_TURN: NotYourTurnError,
    MoveError.TILE_NOT_IN_HAND: TileNotInHandError,
    MoveError.NO_VALID_CONNECTION: NoValidConnectionError,
    MoveError.SIDE_NOT_AVAILABLE: SideNotAvailableError,
    MoveError.GAME_ENDED: GameEndedError,
    MoveError.MUST_PLAY: MustPlayError,
}


def error_for(kind: MoveError, message: str = "") -> InvalidMoveError:
    """Build the typed exception matching a move error kind."""
    return _ERROR_TYPES[kind](message)
