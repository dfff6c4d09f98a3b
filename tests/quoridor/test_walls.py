"""Unit tests for src/quoridor/walls.py"""

import pytest

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Orientation
from src.quoridor.walls import Wall, all_candidate_walls

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


@pytest.mark.parametrize(
    "wall, expected",
    [
        (Wall(0, 1, H), True),
        (Wall(7, 8, H), True),
        (Wall(7, 1, H), True),
        (Wall(8, 1, H), False),  # second cell would stick out to the right
        (Wall(0, 0, H), False),  # there is no gap above the first row
        (Wall(-1, 4, H), False),
        (Wall(1, 0, V), True),
        (Wall(8, 7, V), True),
        (Wall(0, 0, V), False),  # there is no gap left of the first column
        (Wall(4, 8, V), False),  # second cell would stick out at the top
        (Wall(9, 3, V), False),
    ],
)
def test_is_within_bounds(wall: Wall, expected: bool) -> None:
    assert wall.is_within_bounds() is expected


def test_cells() -> None:
    """Horizontal walls extend to the right, vertical walls extend upwards."""
    assert Wall(3, 4, H).cells() == ((3, 4), (4, 4))
    assert Wall(3, 4, V).cells() == ((3, 4), (3, 5))


@pytest.mark.parametrize(
    "notation, expected",
    [
        ("e4h", Wall(4, 3, H)),
        ("b1v", Wall(1, 0, V)),
        ("h9h", Wall(7, 8, H)),
        ("i8V", Wall(8, 7, V)),
    ],
)
def test_from_notation(notation: str, expected: Wall) -> None:
    assert Wall.from_notation(notation) == expected
    assert Wall.from_notation(notation).to_notation() == notation.lower()


@pytest.mark.parametrize(
    "notation",
    [
        "e4",
        "e4x",
        "ex4h",
        "eh",
        "a0h",  # anchor off the board
        "j3v",  # anchor off the board
        "a1h",  # no gap above the first row
        "i5h",  # sticks out to the right
        "a5v",  # no gap left of the first column
        "e9v",  # sticks out at the top
    ],
)
def test_from_invalid_notation(notation: str) -> None:
    with pytest.raises(InvalidRequestError):
        Wall.from_notation(notation)


def test_all_candidate_walls() -> None:
    """8 x 8 anchors per orientation, all of them within bounds and all distinct."""
    candidates = all_candidate_walls()
    assert len(candidates) == 128
    assert len(set(candidates)) == 128
    assert sum(wall.is_horizontal for wall in candidates) == 64
    assert all(wall.is_within_bounds() for wall in candidates)
