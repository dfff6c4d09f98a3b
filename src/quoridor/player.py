"""A pawn and the walls it has left to place."""

from dataclasses import dataclass
from typing import Self

from src.quoridor.position import BOARD_SIZE, Position

WALLS_PER_PLAYER = 10
PLAYER_IDS: tuple[int, int] = (0, 1)

STARTING_POSITIONS: dict[int, Position] = {
    0: Position(BOARD_SIZE // 2, 0),
    1: Position(BOARD_SIZE // 2, BOARD_SIZE - 1),
}

# Each player races to the row their opponent starts on.
GOAL_ROWS: dict[int, int] = {
    0: BOARD_SIZE - 1,
    1: 0,
}


def goal_row(player_id: int) -> int:
    return GOAL_ROWS[player_id]


def opponent_of(player_id: int) -> int:
    return 1 - player_id


@dataclass
class Player:
    id: int
    position: Position
    walls_remaining: int = WALLS_PER_PLAYER

    @classmethod
    def starting(cls, player_id: int) -> Self:
        return cls(player_id, STARTING_POSITIONS[player_id])

    @property
    def goal_row(self) -> int:
        return goal_row(self.id)

    def copy(self) -> Self:
        # Position is immutable, so a shallow copy is already independent
        return type(self)(self.id, self.position, self.walls_remaining)
