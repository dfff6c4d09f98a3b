"""The Game board stores the walls. Legality of anything happening on it is decided in rules.py"""

from dataclasses import dataclass, field
from typing import Iterable, Self

from src.quoridor.position import BOARD_SIZE, Position
from src.quoridor.walls import Wall

WallGrid = list[list[bool]]


def _empty_grid() -> WallGrid:
    # NOTE: 9x9 for both orientations. The walls anchored at the last column (horizontal) / last row (vertical)
    # put their second backing cell in index 8, so both grids need the full size.
    return [[False] * BOARD_SIZE for _ in range(BOARD_SIZE)]


@dataclass
class Board:
    horizontal_walls: WallGrid = field(default_factory=_empty_grid)
    vertical_walls: WallGrid = field(default_factory=_empty_grid)
    # anchors in placement order. Two walls side by side fill 4 cells, so the grids alone cannot tell the anchors apart
    placed_walls: list[Wall] = field(default_factory=list)

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def from_walls(cls, walls: Iterable[Wall]) -> Self:
        """Convenience method to set up a board with walls already in place (no validation!)"""
        board = cls()
        for wall in walls:
            board.place_wall(wall)
        return board

    def copy(self) -> Self:
        """Structural copy: the search / validation logic mutates the copy and leaves this board untouched."""
        return type(self)(
            horizontal_walls=[column[:] for column in self.horizontal_walls],
            vertical_walls=[column[:] for column in self.vertical_walls],
            placed_walls=self.placed_walls[:],
        )

    def place_wall(self, wall: Wall) -> None:
        """Set both backing cells of the wall. Caller is responsible for checking legality first."""
        grid = self._grid(wall)
        for x, y in wall.cells():
            grid[x][y] = True
        self.placed_walls.append(wall)

    def is_occupied_by_wall(self, wall: Wall) -> bool:
        """Would the new wall overlap (one of the cells of) an existing one?"""
        return any(self._cell(self._grid(wall), x, y) for x, y in wall.cells())

    def has_horizontal(self, x: int, y: int) -> bool:
        return self._cell(self.horizontal_walls, x, y)

    def has_vertical(self, x: int, y: int) -> bool:
        return self._cell(self.vertical_walls, x, y)

    def is_wall_between(self, pos1: Position, pos2: Position) -> bool:
        """
        Is there a wall segment separating two orthogonally adjacent cells?

        * same column: the horizontal wall in the gap above the lower-indexed row.
        * same row: the vertical wall in the gap left of the higher-indexed column.

        NOTE: only meaningful for adjacent cells.
        """
        if pos1.x == pos2.x:
            return self.has_horizontal(pos1.x, min(pos1.y, pos2.y) + 1)
        if pos1.y == pos2.y:
            return self.has_vertical(min(pos1.x, pos2.x) + 1, pos1.y)
        return False

    def walls(self) -> list[Wall]:
        return self.placed_walls[:]

    def _grid(self, wall: Wall) -> WallGrid:
        return self.horizontal_walls if wall.is_horizontal else self.vertical_walls

    @staticmethod
    def _cell(grid: WallGrid, x: int, y: int) -> bool:
        """Out of range lookups mean: no wall there."""
        if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
            return False
        return grid[x][y]
