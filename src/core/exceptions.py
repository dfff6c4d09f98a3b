"""
Custom exceptions used across layers.

The rules engine itself never raises: its predicates simply answer False.
The Game (domain orchestration) and the Service raise these, and the API layer translates them into responses.
"""


class GameError(Exception):
    """Top-level exception for anything that went wrong while handling a game."""


class GameStateError(GameError):
    """The game is not in a state where the requested action makes sense (not started, already finished, full, ...)"""


class NotYourTurnError(GameError):
    """A player tried to act while it is the opponent's turn."""


class IllegalMoveError(GameError):
    """Pawn move rejected by the rules engine."""


class IllegalWallError(GameError):
    """Wall placement rejected by the rules engine."""


class NoWallsRemainingError(IllegalWallError):
    """Player used up all their walls."""


class InvalidRequestError(GameError):
    """Request data could not be interpreted."""


class RepositoryError(GameError):
    """Record could not be found / stored."""
