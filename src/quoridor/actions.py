"""
The two things a player can do on their turn.

Modelled as two separate (frozen) dataclasses instead of one object with a 'type' string,
so consumers can dispatch with a `match` statement on the class.
"""

from dataclasses import dataclass

from src.core.exceptions import InvalidRequestError
from src.quoridor.position import Position
from src.quoridor.walls import NOTATION_TO_ORIENTATION, Wall


@dataclass(frozen=True)
class PawnMove:
    to: Position


@dataclass(frozen=True)
class WallPlacement:
    wall: Wall


Action = PawnMove | WallPlacement


def action_to_notation(action: Action) -> str:
    """
    Notation used for the move history
    ---

    * pawn move: the destination cell, ex. "e2"
    * wall: anchor cell + orientation letter, ex. "e4h" or "b1v"
    """
    match action:
        case PawnMove(to=to):
            return to.to_algebraic()
        case WallPlacement(wall=wall):
            return wall.to_notation()


def action_from_notation(notation: str) -> Action:
    if len(notation) < 2 or not notation[0].isalpha():
        raise InvalidRequestError(f"Cannot interpret {notation!r} as a move or wall.")

    if notation[-1].lower() in NOTATION_TO_ORIENTATION:
        return WallPlacement(Wall.from_notation(notation))

    if not notation[1:].isdigit():
        raise InvalidRequestError(f"Cannot interpret {notation!r} as a move or wall.")
    return PawnMove(Position.from_algebraic(notation))
