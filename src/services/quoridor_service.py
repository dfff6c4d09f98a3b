"""Orchestration of communication from API router / relay to business logic and persistence layers (and the reverse direction)."""

import logging
import random
from typing import Optional

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
    PlayerState,
    PositionModel,
    RoomRequest,
    RoomSummary,
    WallModel,
    WallRequest,
)
from src.core import config
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Status
from src.db.repository import GameRepository
from src.quoridor import ai
from src.quoridor.game import Game

logger = logging.getLogger(__name__)

AI_SEAT = 1


class QuoridorService:
    """Orchestration of layers for a quoridor game."""

    def __init__(
        self,
        repository: GameRepository,
        rng: Optional[random.Random] = None,
        ai_depth: int = config.AI_DEPTH,
    ) -> None:
        self.repo = repository
        self.rng = rng or random.Random()
        self.ai_depth = ai_depth

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game (against another player, or against the AI)."""

        new_game = Game.new_game(
            player=request.player_name, ai_difficulty=request.ai_difficulty
        )
        stored_game, room_code = self.repo.create_game(new_game.to_model())
        logger.info(
            "Created room %s for %s (ai: %s)",
            room_code,
            request.player_name,
            request.ai_difficulty,
        )
        return self._create_game_response(room_code, Game.from_model(stored_game))

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game."""
        game = self._load_game(request.room_code)
        seat = game.register_player(request.player_name)
        self._store(request.room_code, game)
        logger.info(
            "%s joined room %s as player %s", request.player_name, request.room_code, seat
        )
        return self._create_game_response(request.room_code, game)

    def start_game(self, request: RoomRequest) -> GameResponse:
        game = self._load_game(request.room_code)
        game.start()
        self._store(request.room_code, game)
        return self._create_game_response(request.room_code, game)

    def pause_game(self, request: RoomRequest) -> GameResponse:
        game = self._load_game(request.room_code)
        game.pause()
        self._store(request.room_code, game)
        return self._create_game_response(request.room_code, game)

    def resume_game(self, request: RoomRequest) -> GameResponse:
        game = self._load_game(request.room_code)
        game.resume()
        self._store(request.room_code, game)
        return self._create_game_response(request.room_code, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used by clients that poll instead of listening on the relay.
        """
        game = self._load_game(request.room_code)
        return self._create_game_response(request.room_code, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Cells to highlight for the player to move."""
        game = self._load_game(request.room_code)
        moves = game.legal_moves(request.player_id)
        return LegalMovesResponse(
            room_code=request.room_code,
            player_id=request.player_id,
            legal_moves=[PositionModel.from_domain(position) for position in moves],
        )

    def legal_walls(self, request: LegalMovesRequest) -> LegalWallsResponse:
        game = self._load_game(request.room_code)
        walls = game.legal_walls(request.player_id)
        return LegalWallsResponse(
            room_code=request.room_code,
            player_id=request.player_id,
            walls_remaining=game.players[request.player_id].walls_remaining,
            legal_walls=[WallModel.from_domain(wall) for wall in walls],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Move attempt. Against the AI, the AI answers within the same request."""
        game = self._load_game(request.room_code)
        game.make_move(request.player_id, request.position.to_domain())
        self._play_ai_turn(game)
        self._store(request.room_code, game)
        self._log_if_finished(request.room_code, game)
        return self._create_game_response(request.room_code, game)

    def place_wall(self, request: WallRequest) -> GameResponse:
        game = self._load_game(request.room_code)
        game.place_wall(request.player_id, request.wall.to_domain())
        self._play_ai_turn(game)
        self._store(request.room_code, game)
        self._log_if_finished(request.room_code, game)
        return self._create_game_response(request.room_code, game)

    def undo(self, request: RoomRequest) -> GameResponse:
        """Take back the last action. Against the AI, take back the AI's answer as well so it is the human's turn again."""
        game = self._load_game(request.room_code)
        game.undo()
        if game.is_ai_turn() and game.history:
            game.undo()
        self._store(request.room_code, game)
        return self._create_game_response(request.room_code, game)

    def list_open_games(self) -> list[RoomSummary]:
        """Rooms still waiting for a second player."""
        return [
            RoomSummary(
                room_code=room_code,
                players=model.registered_players,
                status=Status(model.status),
            )
            for room_code, model in self.repo.list_games(status=Status.WAITING)
            if len(model.registered_players) < 2
        ]

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.room_code) is None:
            raise RepositoryError(f"Game with room code {request.room_code!r} not found.")
        logger.info("Deleted room %s", request.room_code)

    # -- Internal helpers --
    def _play_ai_turn(self, game: Game) -> None:
        if not game.is_ai_turn() or game.ai_difficulty is None:
            return
        action = ai.choose_action(
            game, AI_SEAT, game.ai_difficulty, rng=self.rng, depth=self.ai_depth
        )
        game.apply(AI_SEAT, action)

    def _create_game_response(self, room_code: str, game: Game) -> GameResponse:
        """Convert the Game into a GameResponse (for game with given room code.)"""
        model = game.to_model()
        return GameResponse(
            room_code=room_code,
            players=[
                PlayerState(
                    player_id=player.id,
                    name=game.names.get(player.id),
                    position=PositionModel.from_domain(player.position),
                    walls_remaining=player.walls_remaining,
                    goal_row=player.goal_row,
                )
                for player in game.players
            ],
            current_player=game.current_player,
            status=game.status,
            walls=[WallModel.from_domain(wall) for wall in game.board.walls()],
            move_history=model.history,
            winner=game.winner,
            ai_difficulty=game.ai_difficulty,
        )

    def _load_game(self, room_code: str) -> Game:
        return Game.from_model(self._fetch_game(room_code))

    def _store(self, room_code: str, game: Game) -> None:
        if self.repo.update_game(room_code, game.to_model()) is None:
            raise RepositoryError(f"Game with room code {room_code!r} not found.")

    def _fetch_game(self, room_code: str) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(room_code)
        if game_model is None:
            raise RepositoryError(f"Game with room code {room_code!r} not found.")
        return game_model

    def _log_if_finished(self, room_code: str, game: Game) -> None:
        if game.status == Status.FINISHED:
            logger.info("Room %s finished, winner: player %s", room_code, game.winner)
