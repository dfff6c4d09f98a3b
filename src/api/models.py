"""
Requests and Response models

Field names go over the wire in camelCase (`roomCode`, `playerId`, ...): that is what the browser clients send and expect.
In Python the snake_case names can be used as well.
"""

from typing import Optional, Self

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Difficulty, Orientation, Status
from src.quoridor.position import Position
from src.quoridor.walls import Wall

PlayerSeat = str
PlayerName = str


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- SHARED PARTS ---
class PositionModel(WireModel):
    # NOTE: no range validation. Off-board coordinates are simply an illegal move for the rules engine.
    x: int
    y: int

    @classmethod
    def from_domain(cls, position: Position) -> Self:
        return cls(x=position.x, y=position.y)

    def to_domain(self) -> Position:
        return Position(self.x, self.y)


class WallModel(WireModel):
    x: int
    y: int
    orientation: Orientation

    @classmethod
    def from_domain(cls, wall: Wall) -> Self:
        return cls(x=wall.x, y=wall.y, orientation=wall.orientation)

    def to_domain(self) -> Wall:
        return Wall(self.x, self.y, self.orientation)


def _validate_room_code(value: str) -> str:
    room_code = value.strip().upper()
    if not room_code.isalnum():
        raise InvalidRequestError(f"Cannot interpret {value!r} as a room code.")
    return room_code


def _validate_player_id(value: int) -> int:
    if value not in (0, 1):
        raise InvalidRequestError(f"Player id must be 0 or 1, got {value!r}.")
    return value


class RoomRequest(WireModel):
    """Any request that only needs to know which room it is about."""

    room_code: str

    @field_validator("room_code")
    @classmethod
    def validate_room_code(cls, value: str) -> str:
        return _validate_room_code(value)


class PlayerRequest(RoomRequest):
    player_id: int

    @field_validator("player_id")
    @classmethod
    def validate_player_id(cls, value: int) -> int:
        return _validate_player_id(value)


# --- REQUEST MODELS ---
class CreateGameRequest(WireModel):
    player_name: str
    ai_difficulty: Optional[Difficulty] = None

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise InvalidRequestError("Player name cannot be empty.")
        return name


class JoinGameRequest(RoomRequest):
    player_name: str

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise InvalidRequestError("Player name cannot be empty.")
        return name


class GetGameRequest(RoomRequest):
    pass


class DeleteGameRequest(RoomRequest):
    pass


class LegalMovesRequest(PlayerRequest):
    pass


class MoveRequest(PlayerRequest):
    position: PositionModel


class WallRequest(PlayerRequest):
    wall: WallModel


# --- RESPONSE MODELS ---
class PlayerState(WireModel):
    player_id: int
    name: Optional[PlayerName]
    position: PositionModel
    walls_remaining: int
    goal_row: int


class GameResponse(WireModel):
    room_code: str
    players: list[PlayerState]
    current_player: int
    status: Status
    walls: list[WallModel]
    move_history: list[str]
    winner: Optional[int] = None
    ai_difficulty: Optional[Difficulty] = None


class LegalMovesResponse(WireModel):
    room_code: str
    player_id: int
    legal_moves: list[PositionModel]


class LegalWallsResponse(WireModel):
    room_code: str
    player_id: int
    walls_remaining: int
    legal_walls: list[WallModel]


class RoomSummary(WireModel):
    room_code: str
    players: dict[PlayerSeat, PlayerName]
    status: Status
