"""Unit tests for src/api/models.py"""

import pytest

from src.api.models import (
    CreateGameRequest,
    GameResponse,
    JoinGameRequest,
    MoveRequest,
    PositionModel,
    RoomRequest,
    WallModel,
    WallRequest,
)
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Difficulty, Orientation, Status
from src.quoridor.position import Position
from src.quoridor.walls import Wall


# -- Validation - room codes / players --
def test_room_code_is_normalized() -> None:
    request = RoomRequest(room_code="  ab12cd ")
    assert request.room_code == "AB12CD"


@pytest.mark.parametrize("room_code", ["", "   ", "AB-12", "../etc"])
def test_invalid_room_code(room_code: str) -> None:
    with pytest.raises(InvalidRequestError):
        RoomRequest(room_code=room_code)


@pytest.mark.parametrize("player_id", [-1, 2, 5])
def test_invalid_player_id(player_id: int) -> None:
    with pytest.raises(InvalidRequestError):
        MoveRequest(
            room_code="ABC123",
            player_id=player_id,
            position=PositionModel(x=4, y=1),
        )


def test_player_name_is_stripped() -> None:
    request = JoinGameRequest(room_code="ABC123", player_name="  Bob ")
    assert request.player_name == "Bob"


@pytest.mark.parametrize("player_name", ["", "   "])
def test_empty_player_name(player_name: str) -> None:
    with pytest.raises(InvalidRequestError):
        CreateGameRequest(player_name=player_name)


def test_ai_difficulty_is_optional() -> None:
    assert CreateGameRequest(player_name="Alice").ai_difficulty is None
    request = CreateGameRequest(player_name="Alice", ai_difficulty="hard")
    assert request.ai_difficulty == Difficulty.HARD


# -- Wire format --
def test_requests_accept_camel_case() -> None:
    """Browser clients send camelCase field names."""
    request = WallRequest.model_validate(
        {
            "roomCode": "abc123",
            "playerId": 1,
            "wall": {"x": 4, "y": 3, "orientation": "vertical"},
        }
    )
    assert request.room_code == "ABC123"
    assert request.player_id == 1
    assert request.wall.to_domain() == Wall(4, 3, Orientation.VERTICAL)


def test_off_board_position_is_accepted() -> None:
    """Coordinates are not range checked here: the rules engine rejects them as an illegal move."""
    request = MoveRequest(
        room_code="ABC123", player_id=0, position=PositionModel(x=12, y=-3)
    )
    assert request.position.to_domain() == Position(12, -3)


def test_response_is_dumped_in_camel_case() -> None:
    response = GameResponse(
        room_code="ABC123",
        players=[],
        current_player=0,
        status=Status.PLAYING,
        walls=[WallModel.from_domain(Wall(4, 3, Orientation.HORIZONTAL))],
        move_history=["e4h"],
    )
    payload = response.model_dump(mode="json", by_alias=True)
    assert payload["roomCode"] == "ABC123"
    assert payload["currentPlayer"] == 0
    assert payload["moveHistory"] == ["e4h"]
    assert payload["walls"] == [{"x": 4, "y": 3, "orientation": "horizontal"}]
    assert payload["status"] == "playing"
    assert payload["winner"] is None
