"""
A cell on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import InvalidRequestError

# Quoridor board is 9x9. Cells are indexed 0..8 in both directions.
BOARD_SIZE = 9

# orthogonal steps: up, down, right, left
DIRECTIONS: tuple[tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    @classmethod
    def from_algebraic(cls, cell: str) -> Position:
        """Algebraic notation: 'a1' - 'i9' get converted to (0,0) - (8,8). Anything off the board is rejected."""
        if len(cell) < 2 or not cell[0].isalpha() or not cell[1:].isdigit():
            raise InvalidRequestError(f"Cannot interpret {cell!r} as a cell.")
        position = cls(ord(cell[0].lower()) - ord("a"), int(cell[1:]) - 1)
        if not position.is_within_bounds():
            raise InvalidRequestError(f"Cell {cell!r} is not on the board.")
        return position

    def to_algebraic(self) -> str:
        return f"{chr(self.x + ord('a'))}{self.y + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_SIZE) and (0 <= self.y < BOARD_SIZE)

    def step(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy)

    def neighbours(self) -> list[Position]:
        """Orthogonally adjacent cells that are still on the board (walls are not taken into account)"""
        return [
            neighbour
            for neighbour in (self.step(dx, dy) for dx, dy in DIRECTIONS)
            if neighbour.is_within_bounds()
        ]

    def is_adjacent(self, other: Position) -> bool:
        return abs(self.x - other.x) + abs(self.y - other.y) == 1
