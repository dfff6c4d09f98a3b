"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns one game's state (board, pawns, turn, status, history) and is responsible for orchestrating
a turn: check status and turn order, ask the rules engine for legality, apply, update the status.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    IllegalWallError,
    InvalidRequestError,
    NoWallsRemainingError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import Difficulty, Status
from src.quoridor import rules
from src.quoridor.actions import (
    Action,
    PawnMove,
    WallPlacement,
    action_from_notation,
    action_to_notation,
)
from src.quoridor.board import Board
from src.quoridor.player import PLAYER_IDS, Player, opponent_of
from src.quoridor.position import Position
from src.quoridor.walls import Wall

logger = logging.getLogger(__name__)


def ai_player_name(difficulty: Difficulty) -> str:
    return f"AI ({difficulty})"


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    players: list[Player]
    current_player: int
    status: Status
    history: list[Action] = field(default_factory=list)
    names: dict[int, str] = field(default_factory=dict)
    ai_difficulty: Optional[Difficulty] = None

    @classmethod
    def new_game(
        cls, player: str, ai_difficulty: Optional[Difficulty] = None
    ) -> Self:
        """
        Start a new game with the requesting player on seat 0 (moves first, starts on row 1)

        Against the AI, the second seat is taken right away and the game starts immediately.
        """
        game = cls(
            board=Board.empty(),
            players=[Player.starting(player_id) for player_id in PLAYER_IDS],
            current_player=0,
            status=Status.WAITING,
            names={0: player},
            ai_difficulty=ai_difficulty,
        )
        if ai_difficulty is not None:
            game.names[1] = ai_player_name(ai_difficulty)
            game.start()
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in Status.__members__.values():
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(Status)}"
            )
        if model.current_player not in PLAYER_IDS:
            raise GameStateError(f"Invalid player to move: {model.current_player!r}")

        # create the Game and replay the history to rebuild the board and the pawns
        game = cls(
            board=Board.empty(),
            players=[Player.starting(player_id) for player_id in PLAYER_IDS],
            current_player=0,
            status=Status(model.status),
            names={int(seat): name for seat, name in model.registered_players.items()},
            ai_difficulty=(
                Difficulty(model.ai_difficulty) if model.ai_difficulty else None
            ),
        )
        for notation in model.history:
            try:
                action = action_from_notation(notation)
            except InvalidRequestError as exc:
                raise GameStateError(f"Corrupted history entry: {notation!r}") from exc
            game._apply_unchecked(game.current_player, action)
            game.current_player = opponent_of(game.current_player)
        game.current_player = model.current_player
        return game

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            history=[action_to_notation(action) for action in self.history],
            registered_players={str(seat): name for seat, name in self.names.items()},
            current_player=self.current_player,
            status=str(self.status),
            ai_difficulty=str(self.ai_difficulty) if self.ai_difficulty else None,
        )

    @property
    def winner(self) -> Optional[int]:
        """Only defined once the game is finished"""
        if self.status != Status.FINISHED:
            return None
        return next(
            (
                player_id
                for player_id in PLAYER_IDS
                if rules.check_win_condition(self.players, player_id)
            ),
            None,
        )

    @property
    def is_full(self) -> bool:
        return all(player_id in self.names for player_id in PLAYER_IDS)

    def is_ai_turn(self) -> bool:
        return (
            self.ai_difficulty is not None
            and self.status == Status.PLAYING
            and self.current_player == 1
        )

    # --- LIFECYCLE ---
    def register_player(self, player: str) -> int:
        """Registering the 2nd player to an open game. Returns the seat (player id) given to them."""
        if self.status != Status.WAITING or self.is_full:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )
        if player in self.names.values():
            raise GameStateError(f"Player {player!r} already joined this game.")

        seat = next(player_id for player_id in PLAYER_IDS if player_id not in self.names)
        self.names[seat] = player
        return seat

    def start(self) -> None:
        if self.status != Status.WAITING:
            raise GameStateError(f"Cannot start game. status: {self.status}")
        if not self.is_full:
            raise GameStateError("Cannot start game. Waiting for a second player.")
        self._change_status(Status.PLAYING)

    def pause(self) -> None:
        if self.status != Status.PLAYING:
            raise GameStateError(f"Cannot pause game. status: {self.status}")
        self._change_status(Status.PAUSED)

    def resume(self) -> None:
        if self.status != Status.PAUSED:
            raise GameStateError(f"Cannot resume game. status: {self.status}")
        self._change_status(Status.PLAYING)

    # --- QUERIES ---
    def legal_moves(self, player_id: int) -> list[Position]:
        """Cells the player can move their pawn to (sorted to make the output stable)."""
        self._assert_in_progress()
        self._assert_your_turn(player_id)
        return sorted(
            rules.legal_moves(self.board, self.players, player_id),
            key=lambda position: (position.x, position.y),
        )

    def legal_walls(self, player_id: int) -> list[Wall]:
        """Walls the player may place. Empty if the player is out of walls."""
        self._assert_in_progress()
        self._assert_your_turn(player_id)
        if self.players[player_id].walls_remaining <= 0:
            return []
        return sorted(
            rules.legal_wall_placements(self.board, self.players, player_id),
            key=lambda wall: (wall.orientation, wall.x, wall.y),
        )

    # --- ACTIONS ---
    def apply(self, player_id: int, action: Action) -> None:
        match action:
            case PawnMove(to=to):
                self.make_move(player_id, to)
            case WallPlacement(wall=wall):
                self.place_wall(player_id, wall)

    def make_move(self, player_id: int, to: Position) -> None:
        """
        Attempt to move the pawn
        -----

        1. game must be in progress and it must be your turn
        2. the rules engine must accept the destination
        3. update the pawn + history
        4. either the game is won, or the turn passes to the opponent
        """
        self._assert_in_progress()
        self._assert_your_turn(player_id)

        from_pos = self.players[player_id].position
        if not rules.is_legal_move(self.board, self.players, player_id, from_pos, to):
            raise IllegalMoveError(
                f"Move not allowed: {from_pos.to_algebraic()} -> {to.to_algebraic()}"
            )

        self._apply_unchecked(player_id, PawnMove(to))
        self._end_turn(player_id)

    def place_wall(self, player_id: int, wall: Wall) -> None:
        """Attempt to place a wall. Same flow as moving the pawn, but a wall can never win the game."""
        self._assert_in_progress()
        self._assert_your_turn(player_id)

        if self.players[player_id].walls_remaining <= 0:
            raise NoWallsRemainingError("No walls remaining!")

        if not rules.is_legal_wall_placement(self.board, self.players, wall):
            raise IllegalWallError(f"Wall placement not allowed: {wall.to_notation()}")

        self._apply_unchecked(player_id, WallPlacement(wall))
        self._end_turn(player_id)

    def undo(self) -> None:
        """
        Take back the last action.

        The history is the source of truth: replay everything but the last action on a fresh board.
        """
        if self.status != Status.PLAYING:
            raise GameStateError(f"Cannot undo. Game is not in progress. status: {self.status}")
        if not self.history:
            raise GameStateError("No moves to undo!")

        remaining = self.history[:-1]
        self.board = Board.empty()
        self.players = [Player.starting(player_id) for player_id in PLAYER_IDS]
        self.history = []
        self.current_player = 0
        for action in remaining:
            self._apply_unchecked(self.current_player, action)
            self.current_player = opponent_of(self.current_player)

    # --- SIMULATION (used by the AI search) ---
    def copy(self) -> Self:
        """Independent copy: structural copies of the board and pawns, history list copied."""
        return type(self)(
            board=self.board.copy(),
            players=[player.copy() for player in self.players],
            current_player=self.current_player,
            status=self.status,
            history=self.history[:],
            names=dict(self.names),
            ai_difficulty=self.ai_difficulty,
        )

    def simulate(self, action: Action) -> Self:
        """
        A copy of the game with the action applied by the player to move. NO legality checks:
        the caller only feeds actions it got from the rules engine.
        """
        simulated = self.copy()
        player_id = simulated.current_player
        simulated._apply_unchecked(player_id, action)
        simulated._end_turn(player_id)
        return simulated

    # -- PRIVATE HELPERS ---
    def _apply_unchecked(self, player_id: int, action: Action) -> None:
        player = self.players[player_id]
        match action:
            case PawnMove(to=to):
                player.position = to
            case WallPlacement(wall=wall):
                rules.apply_wall_placement(self.board, wall)
                player.walls_remaining -= 1
        self.history.append(action)

    def _end_turn(self, player_id: int) -> None:
        """The game is won by the player who just moved, or the turn passes to the opponent"""
        if rules.check_win_condition(self.players, player_id):
            self._change_status(Status.FINISHED)
            return
        self.current_player = opponent_of(player_id)

    def _assert_in_progress(self) -> None:
        if self.status != Status.PLAYING:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_your_turn(self, player_id: int) -> None:
        """You must wait for your turn before calculating legal moves / making a move."""
        if player_id != self.current_player:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {self.current_player} to make a move first."
            )

    def _change_status(self, new_status: Status) -> None:
        logger.debug("Game status %s -> %s", self.status, new_status)
        self.status = new_status
