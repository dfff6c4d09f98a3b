"""Unit tests for src/quoridor/game.py"""

import pytest

from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    IllegalWallError,
    NoWallsRemainingError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import Difficulty, Orientation, Status
from src.quoridor import rules
from src.quoridor.actions import PawnMove, WallPlacement
from src.quoridor.game import Game, ai_player_name
from src.quoridor.position import Position
from src.quoridor.walls import Wall

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


@pytest.fixture
def game() -> Game:
    """Two registered players, game started, player 0 to move."""
    game = Game.new_game("Alice")
    game.register_player("Bob")
    game.start()
    return game


def play(game: Game, *notations: str) -> None:
    """Alternate moves in algebraic notation, starting with the player to move."""
    for notation in notations:
        game.make_move(game.current_player, Position.from_algebraic(notation))


# --- LIFECYCLE ---
def test_new_game() -> None:
    game = Game.new_game("Alice")
    assert game.status == Status.WAITING
    assert game.current_player == 0
    assert game.names == {0: "Alice"}
    assert [player.position for player in game.players] == [Position(4, 0), Position(4, 8)]
    assert [player.walls_remaining for player in game.players] == [10, 10]
    assert game.board.walls() == []
    assert game.history == []


def test_new_game_against_ai_starts_right_away() -> None:
    game = Game.new_game("Alice", ai_difficulty=Difficulty.HARD)
    assert game.status == Status.PLAYING
    assert game.names == {0: "Alice", 1: ai_player_name(Difficulty.HARD)}
    assert not game.is_ai_turn()

    game.make_move(0, Position(4, 1))
    assert game.is_ai_turn()


def test_register_second_player() -> None:
    game = Game.new_game("Alice")
    assert game.register_player("Bob") == 1
    assert game.is_full


def test_register_same_name_twice() -> None:
    game = Game.new_game("Alice")
    with pytest.raises(GameStateError):
        game.register_player("Alice")


def test_register_in_full_game(game: Game) -> None:
    with pytest.raises(GameStateError):
        game.register_player("Carol")


def test_cannot_start_without_second_player() -> None:
    game = Game.new_game("Alice")
    with pytest.raises(GameStateError):
        game.start()


def test_cannot_start_twice(game: Game) -> None:
    with pytest.raises(GameStateError):
        game.start()


def test_pause_and_resume(game: Game) -> None:
    game.pause()
    assert game.status == Status.PAUSED
    with pytest.raises(GameStateError):
        game.make_move(0, Position(4, 1))
    with pytest.raises(GameStateError):
        game.pause()

    game.resume()
    assert game.status == Status.PLAYING
    with pytest.raises(GameStateError):
        game.resume()


def test_cannot_play_before_start() -> None:
    game = Game.new_game("Alice")
    with pytest.raises(GameStateError):
        game.make_move(0, Position(4, 1))
    with pytest.raises(GameStateError):
        game.legal_moves(0)


# --- MOVES ---
def test_first_move(game: Game) -> None:
    assert game.legal_moves(0) == [Position(3, 0), Position(4, 1), Position(5, 0)]

    game.make_move(0, Position(4, 1))
    assert game.players[0].position == Position(4, 1)
    assert game.current_player == 1
    assert not rules.check_win_condition(game.players, 0)
    assert game.history == [PawnMove(Position(4, 1))]


def test_not_your_turn(game: Game) -> None:
    with pytest.raises(NotYourTurnError):
        game.make_move(1, Position(4, 7))
    with pytest.raises(NotYourTurnError):
        game.legal_moves(1)
    with pytest.raises(NotYourTurnError):
        game.place_wall(1, Wall(0, 1, H))


def test_illegal_move(game: Game) -> None:
    with pytest.raises(IllegalMoveError):
        game.make_move(0, Position(4, 2))
    # nothing changed
    assert game.players[0].position == Position(4, 0)
    assert game.current_player == 0
    assert game.history == []


def test_win(game: Game) -> None:
    """Player 0 walks straight up column e, player 1 steps aside and shuffles along the last row."""
    play(game, "e2", "d9", "e3", "c9", "e4", "b9", "e5", "a9", "e6", "b9", "e7", "c9", "e8", "b9")
    assert game.current_player == 0
    game.make_move(0, Position(4, 8))

    assert game.status == Status.FINISHED
    assert game.winner == 0
    # the turn does not pass on after the winning move
    assert game.current_player == 0
    with pytest.raises(GameStateError):
        game.make_move(0, Position(3, 7))
    with pytest.raises(GameStateError):
        game.make_move(1, Position(2, 8))


def test_no_winner_while_playing(game: Game) -> None:
    assert game.winner is None


# --- WALLS ---
def test_place_wall(game: Game) -> None:
    wall = Wall(4, 7, H)
    game.place_wall(0, wall)
    assert game.board.walls() == [wall]
    assert game.players[0].walls_remaining == 9
    assert game.current_player == 1
    assert game.history == [WallPlacement(wall)]


def test_illegal_wall(game: Game) -> None:
    game.place_wall(0, Wall(4, 7, H))
    with pytest.raises(IllegalWallError):
        game.place_wall(1, Wall(4, 7, H))
    with pytest.raises(IllegalWallError):
        game.place_wall(1, Wall(8, 1, H))
    assert game.players[1].walls_remaining == 10
    assert game.current_player == 1


def test_no_walls_remaining(game: Game) -> None:
    game.players[0].walls_remaining = 0
    with pytest.raises(NoWallsRemainingError):
        game.place_wall(0, Wall(0, 1, H))
    assert game.legal_walls(0) == []


def test_legal_walls(game: Game) -> None:
    walls = game.legal_walls(0)
    assert len(walls) == 128
    game.place_wall(0, Wall(4, 4, H))
    walls = game.legal_walls(1)
    assert Wall(4, 4, H) not in walls
    assert Wall(5, 4, H) not in walls  # overlap
    assert Wall(5, 3, V) not in walls  # crossing
    assert Wall(6, 4, H) in walls


# --- UNDO ---
def test_undo(game: Game) -> None:
    game.make_move(0, Position(4, 1))
    game.place_wall(1, Wall(4, 2, H))

    game.undo()
    assert game.board.walls() == []
    assert game.players[1].walls_remaining == 10
    assert game.players[0].position == Position(4, 1)
    assert game.current_player == 1

    game.undo()
    assert game.players[0].position == Position(4, 0)
    assert game.current_player == 0
    assert game.history == []


def test_undo_without_history(game: Game) -> None:
    with pytest.raises(GameStateError):
        game.undo()


# --- MODEL CONVERSION ---
def test_model_round_trip(game: Game) -> None:
    game.make_move(0, Position(4, 1))
    game.place_wall(1, Wall(4, 2, H))
    game.make_move(0, Position(3, 1))

    model = game.to_model()
    assert model == GameModel(
        history=["e2", "e3h", "d2"],
        registered_players={"0": "Alice", "1": "Bob"},
        current_player=1,
        status="playing",
        ai_difficulty=None,
    )

    rebuilt = Game.from_model(model)
    assert rebuilt.players == game.players
    assert rebuilt.board.walls() == game.board.walls()
    assert rebuilt.board.horizontal_walls == game.board.horizontal_walls
    assert rebuilt.current_player == game.current_player
    assert rebuilt.status == game.status
    assert rebuilt.names == game.names
    assert rebuilt.history == game.history


def test_from_model_with_ai() -> None:
    model = Game.new_game("Alice", ai_difficulty=Difficulty.EASY).to_model()
    assert model.ai_difficulty == "easy"
    assert Game.from_model(model).ai_difficulty == Difficulty.EASY


@pytest.mark.parametrize(
    "status, current_player",
    [("ongoing", 0), ("playing", 2)],
)
def test_from_invalid_model(status: str, current_player: int) -> None:
    model = GameModel(
        history=[],
        registered_players={"0": "Alice"},
        current_player=current_player,
        status=status,
    )
    with pytest.raises(GameStateError):
        Game.from_model(model)


@pytest.mark.parametrize("entry", ["a0h", "i5h", "e10", "z1", "e4x"])
def test_from_model_with_corrupted_history(entry: str) -> None:
    """An entry that does not fit on the board must not end up on (the wrong side of) the grids."""
    model = GameModel(
        history=["e2", entry],
        registered_players={"0": "Alice", "1": "Bob"},
        current_player=0,
        status="playing",
    )
    with pytest.raises(GameStateError):
        Game.from_model(model)


# --- SIMULATION ---
def test_copy_is_independent(game: Game) -> None:
    copied = game.copy()
    copied.make_move(0, Position(4, 1))
    copied.place_wall(1, Wall(0, 1, H))

    assert game.players[0].position == Position(4, 0)
    assert game.players[1].walls_remaining == 10
    assert game.board.walls() == []
    assert game.history == []
    assert game.current_player == 0


def test_simulate(game: Game) -> None:
    simulated = game.simulate(PawnMove(Position(4, 1)))
    assert simulated.players[0].position == Position(4, 1)
    assert simulated.current_player == 1
    assert game.players[0].position == Position(4, 0)
    assert game.current_player == 0
