"""
FastAPI application: REST routes + the WebSocket relay.

Run with: uvicorn src.api.app:app
"""

import json
import logging

from fastapi import Depends, FastAPI, Query, Request, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    LegalWallsResponse,
    MoveRequest,
    RoomRequest,
    RoomSummary,
    WallRequest,
)
from src.api.relay import Relay, state_payload
from src.core import config
from src.core.exceptions import (
    GameError,
    GameStateError,
    NotYourTurnError,
    RepositoryError,
)
from src.core.logging_config import configure_logging
from src.db.database import get_db
from src.db.sql_repository import SQLGameRepository
from src.services.quoridor_service import QuoridorService

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Quoridor",
    description="Rules engine, AI opponent and real-time relay for two-player Quoridor",
    version="1.0.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

relay = Relay()

# Most specific first: the first match decides the status code.
ERROR_STATUS_CODES: list[tuple[type[GameError], int]] = [
    (RepositoryError, 404),
    (NotYourTurnError, 403),
    (GameStateError, 409),
    (GameError, 400),
]


def status_code_for(exc: GameError) -> int:
    return next(code for error_type, code in ERROR_STATUS_CODES if isinstance(exc, error_type))


@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_code_for(exc),
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


def get_service(db: Session = Depends(get_db)) -> QuoridorService:
    return QuoridorService(SQLGameRepository(db))


# --- GAMES ---
@app.post("/games", response_model=GameResponse)
async def create_game(
    request: CreateGameRequest, service: QuoridorService = Depends(get_service)
) -> GameResponse:
    return service.create_new_game(request)


@app.get("/games/{room_code}", response_model=GameResponse)
async def get_game(room_code: str, service: QuoridorService = Depends(get_service)) -> GameResponse:
    return service.get_game_state(GetGameRequest(room_code=room_code))


@app.delete("/games/{room_code}", status_code=204)
async def delete_game(room_code: str, service: QuoridorService = Depends(get_service)) -> None:
    request = DeleteGameRequest(room_code=room_code)
    await relay.run(request.room_code, service.delete_game, request)


@app.get("/games/{room_code}/legal-moves", response_model=LegalMovesResponse)
async def legal_moves(
    room_code: str,
    player_id: int = Query(alias="playerId"),
    service: QuoridorService = Depends(get_service),
) -> LegalMovesResponse:
    return service.legal_moves(LegalMovesRequest(room_code=room_code, player_id=player_id))


@app.get("/games/{room_code}/legal-walls", response_model=LegalWallsResponse)
async def legal_walls(
    room_code: str,
    player_id: int = Query(alias="playerId"),
    service: QuoridorService = Depends(get_service),
) -> LegalWallsResponse:
    return service.legal_walls(LegalMovesRequest(room_code=room_code, player_id=player_id))


# Mutations go through the relay: one at a time per room, and the sockets of the room get notified.
@app.post("/games/join", response_model=GameResponse)
async def join_game(
    request: JoinGameRequest, service: QuoridorService = Depends(get_service)
) -> GameResponse:
    state = await relay.run(request.room_code, service.join_game, request)
    await relay.broadcast_state(request.room_code, "room:playerJoined", state)
    return state


@app.post("/games/start", response_model=GameResponse)
async def start_game(
    request: RoomRequest, service: QuoridorService = Depends(get_service)
) -> GameResponse:
    state = await relay.run(request.room_code, service.start_game, request)
    await relay.broadcast_state(request.room_code, "game:started", state)
    return state


@app.post("/games/move", response_model=GameResponse)
async def make_move(
    request: MoveRequest, service: QuoridorService = Depends(get_service)
) -> GameResponse:
    state = await relay.run(request.room_code, service.make_move, request)
    await relay.broadcast_state(request.room_code, "game:moveUpdate", state)
    return state


@app.post("/games/wall", response_model=GameResponse)
async def place_wall(
    request: WallRequest, service: QuoridorService = Depends(get_service)
) -> GameResponse:
    state = await relay.run(request.room_code, service.place_wall, request)
    await relay.broadcast_state(request.room_code, "game:moveUpdate", state)
    return state


@app.post("/games/pause", response_model=GameResponse)
async def pause_game(
    request: RoomRequest, service: QuoridorService = Depends(get_service)
) -> GameResponse:
    state = await relay.run(request.room_code, service.pause_game, request)
    await relay.broadcast_state(request.room_code, "game:paused", state)
    return state


@app.post("/games/resume", response_model=GameResponse)
async def resume_game(
    request: RoomRequest, service: QuoridorService = Depends(get_service)
) -> GameResponse:
    state = await relay.run(request.room_code, service.resume_game, request)
    await relay.broadcast_state(request.room_code, "game:resumed", state)
    return state


@app.post("/games/undo", response_model=GameResponse)
async def undo(
    request: RoomRequest, service: QuoridorService = Depends(get_service)
) -> GameResponse:
    state = await relay.run(request.room_code, service.undo, request)
    await relay.broadcast_state(request.room_code, "game:moveUpdate", state)
    return state


# --- ROOMS / HEALTH ---
@app.get("/rooms", response_model=list[RoomSummary])
async def open_rooms(service: QuoridorService = Depends(get_service)) -> list[RoomSummary]:
    return service.list_open_games()


@app.get("/health")
async def health() -> dict[str, object]:
    return {"status": "healthy", "rooms": len(relay.rooms)}


# --- RELAY ---
@app.websocket("/ws/{room_code}")
async def relay_endpoint(
    ws: WebSocket, room_code: str, service: QuoridorService = Depends(get_service)
) -> None:
    room_code = room_code.strip().upper()
    try:
        state = service.get_game_state(GetGameRequest(room_code=room_code))
    except GameError as exc:
        await ws.accept()
        await ws.send_json({"type": "error", "error": str(exc)})
        await ws.close()
        return

    await relay.connect(room_code, ws)
    await ws.send_json({"type": "game:state", "gameState": state_payload(state)})
    try:
        while True:
            try:
                message = json.loads(await ws.receive_text())
            except json.JSONDecodeError:
                await ws.send_json({"type": "error", "error": "Messages must be valid JSON."})
                continue
            if not isinstance(message, dict):
                await ws.send_json({"type": "error", "error": "Messages must be JSON objects."})
                continue
            await relay.handle(room_code, ws, message, service)
    except WebSocketDisconnect:
        await relay.disconnect(room_code, ws)
