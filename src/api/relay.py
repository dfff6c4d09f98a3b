"""
Real-time relay: mirrors a room's game state to every browser connected to that room.

One `asyncio.Lock` per room: mutations of the same game never interleave, regardless of whether they
come in over the WebSocket or the REST routes. The service calls themselves (database + AI search) run in
the threadpool, so a slow AI turn in one room does not hold up the sockets of the others.
A room is forgotten as soon as it has no sockets and no call in flight.

Inbound message types (JSON, camelCase fields):

* `room:join`     {playerName}
* `game:start`
* `game:move`     {playerId, position: {x, y}}
* `game:wall`     {playerId, wall: {x, y, orientation}}
* `game:pause` / `game:resume` / `game:undo`
* `game:state`    (just ask for the current state)

Accepted mutations are broadcast to the whole room, rejections only go back to the sender as `{"type": "error"}`.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from fastapi import WebSocket
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ValidationError

from src.api.models import (
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    MoveRequest,
    RoomRequest,
    WallRequest,
)
from src.core.exceptions import GameError
from src.core.shared_types import Status
from src.services.quoridor_service import QuoridorService

logger = logging.getLogger(__name__)

T = TypeVar("T")
Message = dict[str, Any]
Handler = Callable[[QuoridorService, Message], GameResponse]


def _request(model: type[BaseModel], room_code: str, message: Message) -> Any:
    """Build the request model from the message. The room is always the one the socket is connected to."""
    payload = {
        key: value
        for key, value in message.items()
        if key not in ("type", "roomCode", "room_code")
    }
    payload["roomCode"] = room_code
    return model.model_validate(payload)


# event type of the broadcast that follows an accepted message
BROADCAST_EVENTS: dict[str, str] = {
    "room:join": "room:playerJoined",
    "game:start": "game:started",
    "game:move": "game:moveUpdate",
    "game:wall": "game:moveUpdate",
    "game:pause": "game:paused",
    "game:resume": "game:resumed",
    "game:undo": "game:moveUpdate",
}


def _handlers(room_code: str) -> dict[str, Handler]:
    return {
        "room:join": lambda service, msg: service.join_game(
            _request(JoinGameRequest, room_code, msg)
        ),
        "game:start": lambda service, msg: service.start_game(
            _request(RoomRequest, room_code, msg)
        ),
        "game:move": lambda service, msg: service.make_move(
            _request(MoveRequest, room_code, msg)
        ),
        "game:wall": lambda service, msg: service.place_wall(
            _request(WallRequest, room_code, msg)
        ),
        "game:pause": lambda service, msg: service.pause_game(
            _request(RoomRequest, room_code, msg)
        ),
        "game:resume": lambda service, msg: service.resume_game(
            _request(RoomRequest, room_code, msg)
        ),
        "game:undo": lambda service, msg: service.undo(
            _request(RoomRequest, room_code, msg)
        ),
        "game:state": lambda service, msg: service.get_game_state(
            _request(GetGameRequest, room_code, msg)
        ),
    }


def state_payload(state: GameResponse) -> Message:
    return state.model_dump(mode="json", by_alias=True)


@dataclass
class Room:
    sockets: set[WebSocket] = field(default_factory=set)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    # service calls waiting for / holding the lock
    pending: int = 0


class Relay:
    """Keeps track of the sockets per room. Nothing in here survives a restart (nor should it)."""

    def __init__(self) -> None:
        self.rooms: dict[str, Room] = {}

    async def run(self, room_code: str, func: Callable[..., T], *args: Any) -> T:
        """Run a blocking service call for the room: one at a time per room, off the event loop."""
        room = self.rooms.setdefault(room_code, Room())
        room.pending += 1
        try:
            async with room.lock:
                return await run_in_threadpool(func, *args)
        finally:
            room.pending -= 1
            self._drop_if_idle(room_code)

    def _drop_if_idle(self, room_code: str) -> None:
        room = self.rooms.get(room_code)
        if room is not None and not room.sockets and room.pending == 0:
            del self.rooms[room_code]

    def connection_count(self, room_code: str) -> int:
        room = self.rooms.get(room_code)
        return len(room.sockets) if room else 0

    async def connect(self, room_code: str, ws: WebSocket) -> None:
        await ws.accept()
        self.rooms.setdefault(room_code, Room()).sockets.add(ws)
        logger.info("Socket connected to room %s (%s connected)", room_code, self.connection_count(room_code))

    async def disconnect(self, room_code: str, ws: WebSocket) -> None:
        room = self.rooms.get(room_code)
        if room is None:
            return
        room.sockets.discard(ws)
        logger.info("Socket left room %s (%s connected)", room_code, len(room.sockets))
        if not room.sockets:
            self._drop_if_idle(room_code)
            return
        await self.broadcast(room_code, {"type": "room:playerLeft"})

    async def broadcast(self, room_code: str, message: Message) -> None:
        room = self.rooms.get(room_code)
        if room is None:
            return
        dead: list[WebSocket] = []
        for ws in list(room.sockets):
            try:
                await ws.send_json(message)
            except (RuntimeError, ConnectionError) as exc:
                logger.warning("Dropping socket in room %s: %s", room_code, exc)
                dead.append(ws)
        for ws in dead:
            room.sockets.discard(ws)

    async def broadcast_state(self, room_code: str, event: str, state: GameResponse) -> None:
        """Send the new state, plus the end of game notice if this update finished the game."""
        await self.broadcast(room_code, {"type": event, "gameState": state_payload(state)})
        if state.status == Status.FINISHED:
            await self.broadcast(
                room_code,
                {"type": "game:ended", "winner": state.winner, "gameState": state_payload(state)},
            )

    async def handle(
        self, room_code: str, ws: WebSocket, message: Message, service: QuoridorService
    ) -> None:
        """Dispatch one inbound message."""
        message_type = message.get("type")
        handler = _handlers(room_code).get(str(message_type))
        if handler is None:
            await ws.send_json({"type": "error", "error": f"Unknown message type: {message_type!r}"})
            return

        try:
            state = await self.run(room_code, handler, service, message)
        except (GameError, ValidationError) as exc:
            logger.info("Rejected %s in room %s: %s", message_type, room_code, exc)
            await ws.send_json({"type": "error", "error": str(exc), "request": message_type})
            return

        if message_type == "game:state":
            await ws.send_json({"type": "game:state", "gameState": state_payload(state)})
            return
        await self.broadcast_state(room_code, BROADCAST_EVENTS[message_type], state)
