"""
Walls: definition of a wall placement request and the double-cell model used to store it on the board.

A wall always blocks two cell borders. Horizontal walls are anchored in the gap *above* row `y` (between row y-1 and row y)
and cover columns x and x+1. Vertical walls are anchored in the gap *left of* column `x` (between column x-1 and column x)
and cover rows y and y+1.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Orientation
from src.quoridor.position import BOARD_SIZE, Position

# Anchor ranges (inclusive). NOTE: asymmetric on purpose, the gaps sit on the *upper*/*left* side of the anchor cell.
HORIZONTAL_X_RANGE = (0, BOARD_SIZE - 2)
HORIZONTAL_Y_RANGE = (1, BOARD_SIZE - 1)
VERTICAL_X_RANGE = (1, BOARD_SIZE - 1)
VERTICAL_Y_RANGE = (0, BOARD_SIZE - 2)

ORIENTATION_TO_NOTATION: dict[Orientation, str] = {
    Orientation.HORIZONTAL: "h",
    Orientation.VERTICAL: "v",
}
NOTATION_TO_ORIENTATION: dict[str, Orientation] = {
    value: key for key, value in ORIENTATION_TO_NOTATION.items()
}


@dataclass(frozen=True)
class Wall:
    x: int
    y: int
    orientation: Orientation

    @classmethod
    def from_notation(cls, notation: str) -> Wall:
        """
        Anchor cell in algebraic notation + orientation letter
        ---

        examples:
        * "e4h": horizontal wall anchored at (4, 3)
        * "b1v": vertical wall anchored at (1, 0)
        """
        orientation_char = notation[-1].lower()
        if orientation_char not in NOTATION_TO_ORIENTATION:
            raise InvalidRequestError(f"Cannot interpret {notation!r} as a wall.")
        if len(notation) < 3 or not notation[1:-1].isdigit():
            raise InvalidRequestError(f"Cannot interpret {notation!r} as a wall.")
        anchor = Position.from_algebraic(notation[:-1])
        wall = cls(anchor.x, anchor.y, NOTATION_TO_ORIENTATION[orientation_char])
        if not wall.is_within_bounds():
            raise InvalidRequestError(f"Wall {notation!r} does not fit on the board.")
        return wall

    def to_notation(self) -> str:
        anchor = Position(self.x, self.y).to_algebraic()
        return f"{anchor}{ORIENTATION_TO_NOTATION[self.orientation]}"

    @property
    def is_horizontal(self) -> bool:
        return self.orientation == Orientation.HORIZONTAL

    def is_within_bounds(self) -> bool:
        if self.is_horizontal:
            x_range, y_range = HORIZONTAL_X_RANGE, HORIZONTAL_Y_RANGE
        else:
            x_range, y_range = VERTICAL_X_RANGE, VERTICAL_Y_RANGE
        return (x_range[0] <= self.x <= x_range[1]) and (
            y_range[0] <= self.y <= y_range[1]
        )

    def cells(self) -> tuple[tuple[int, int], tuple[int, int]]:
        """The two grid cells (in the grid of its own orientation) this wall occupies."""
        if self.is_horizontal:
            return (self.x, self.y), (self.x + 1, self.y)
        return (self.x, self.y), (self.x, self.y + 1)


def all_candidate_walls() -> list[Wall]:
    """Every anchor that passes the bounds check: 8x8 horizontal + 8x8 vertical."""
    horizontal = [
        Wall(x, y, Orientation.HORIZONTAL)
        for x in range(HORIZONTAL_X_RANGE[0], HORIZONTAL_X_RANGE[1] + 1)
        for y in range(HORIZONTAL_Y_RANGE[0], HORIZONTAL_Y_RANGE[1] + 1)
    ]
    vertical = [
        Wall(x, y, Orientation.VERTICAL)
        for x in range(VERTICAL_X_RANGE[0], VERTICAL_X_RANGE[1] + 1)
        for y in range(VERTICAL_Y_RANGE[0], VERTICAL_Y_RANGE[1] + 1)
    ]
    return horizontal + vertical
