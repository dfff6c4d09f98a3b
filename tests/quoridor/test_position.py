"""Unit tests for src/quoridor/position.py"""

import pytest

from src.core.exceptions import InvalidRequestError
from src.quoridor.position import BOARD_SIZE, Position


@pytest.mark.parametrize(
    "cell, expected",
    [
        ("a1", Position(0, 0)),
        ("e1", Position(4, 0)),
        ("e9", Position(4, 8)),
        ("i9", Position(8, 8)),
        ("C4", Position(2, 3)),
    ],
)
def test_from_algebraic(cell: str, expected: Position) -> None:
    assert Position.from_algebraic(cell) == expected


@pytest.mark.parametrize("cell", ["", "e", "4e", "e-1", "a0", "e10", "j1", "z9"])
def test_from_invalid_algebraic(cell: str) -> None:
    with pytest.raises(InvalidRequestError):
        Position.from_algebraic(cell)


def test_algebraic_notation_of_every_cell() -> None:
    """Every cell of the board converts to notation and back."""
    for x in range(BOARD_SIZE):
        for y in range(BOARD_SIZE):
            position = Position(x, y)
            assert Position.from_algebraic(position.to_algebraic()) == position


@pytest.mark.parametrize(
    "position, expected",
    [
        (Position(0, 0), True),
        (Position(8, 8), True),
        (Position(-1, 4), False),
        (Position(4, 9), False),
        (Position(9, 0), False),
    ],
)
def test_is_within_bounds(position: Position, expected: bool) -> None:
    assert position.is_within_bounds() is expected


def test_neighbours_in_the_corner() -> None:
    """Cells off the board are left out."""
    assert set(Position(0, 0).neighbours()) == {Position(1, 0), Position(0, 1)}


def test_neighbours_in_the_middle() -> None:
    assert set(Position(4, 4).neighbours()) == {
        Position(4, 5),
        Position(4, 3),
        Position(5, 4),
        Position(3, 4),
    }


def test_is_adjacent() -> None:
    center = Position(4, 4)
    assert center.is_adjacent(Position(4, 5))
    assert center.is_adjacent(Position(3, 4))
    assert not center.is_adjacent(Position(5, 5))  # diagonal
    assert not center.is_adjacent(Position(4, 6))
    assert not center.is_adjacent(center)


def test_position_is_immutable() -> None:
    with pytest.raises(AttributeError):
        Position(1, 1).x = 2  # type: ignore[misc]
