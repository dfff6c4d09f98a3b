"""
Computer opponent.

The AI only consumes the rules engine: it asks for legal moves / walls, and explores hypothetical lines
on copies of the game (`Game.simulate`). The game it is handed is never modified.

* easy: mostly walks forward with some noise, occasionally drops a random wall
* medium: one-ply heuristic on shortest path lengths (follow the shortest path, block when the opponent is about to win)
* hard: depth-limited minimax with alpha-beta pruning
"""

import logging
import math
import random
from typing import Optional

from src.core import config
from src.core.exceptions import GameStateError
from src.core.shared_types import Difficulty, Status
from src.quoridor import rules
from src.quoridor.actions import Action, PawnMove, WallPlacement
from src.quoridor.board import Board
from src.quoridor.game import Game
from src.quoridor.player import goal_row, opponent_of
from src.quoridor.position import BOARD_SIZE, Position
from src.quoridor.walls import Wall, all_candidate_walls

logger = logging.getLogger(__name__)

WIN_SCORE = 1000.0
EASY_WALL_PROBABILITY = 0.3
# medium: react when the opponent is this close to their goal row
DANGER_DISTANCE = 3
# hard: only walls this close (manhattan, anchor to pawn) to the opponent are searched
WALL_SEARCH_RADIUS = 2
MAX_WALL_CANDIDATES = 8
# Sealing a pawn in is illegal, but the search still needs a number for 'no path'
NO_PATH_DISTANCE = BOARD_SIZE * BOARD_SIZE


def choose_action(
    game: Game,
    player_id: int,
    difficulty: Difficulty = Difficulty.MEDIUM,
    rng: Optional[random.Random] = None,
    depth: int = config.AI_DEPTH,
) -> Action:
    """Pick the action for `player_id`. The game must be in progress and it must be their turn."""
    if game.status != Status.PLAYING or game.current_player != player_id:
        raise GameStateError("AI can only act on its own turn in a game in progress.")

    rng = rng or random.Random()
    match difficulty:
        case Difficulty.EASY:
            action = _easy_action(game, player_id, rng)
        case Difficulty.MEDIUM:
            action = _medium_action(game, player_id)
        case Difficulty.HARD:
            action = _hard_action(game, player_id, depth)

    logger.debug("AI (%s) for player %s chose %s", difficulty, player_id, action)
    return action


# --- HEURISTICS ---
def distance_to_goal(board: Board, position: Position, player_id: int) -> int:
    distance = rules.shortest_path_length(board, position, player_id)
    return NO_PATH_DISTANCE if distance is None else distance


def evaluate(game: Game, player_id: int) -> float:
    """
    Score of the position from the point of view of `player_id`. Higher is better.
    ---

    * won / lost: +/- WIN_SCORE
    * difference in shortest path length (weight 10)
    * difference in walls left (weight 2)
    * forward progress and staying near the center column
    """
    opponent_id = opponent_of(player_id)
    if rules.check_win_condition(game.players, player_id):
        return WIN_SCORE
    if rules.check_win_condition(game.players, opponent_id):
        return -WIN_SCORE

    player = game.players[player_id]
    opponent = game.players[opponent_id]
    player_distance = distance_to_goal(game.board, player.position, player_id)
    opponent_distance = distance_to_goal(game.board, opponent.position, opponent_id)

    score = (opponent_distance - player_distance) * 10.0
    score += (player.walls_remaining - opponent.walls_remaining) * 2.0
    score += _positional_score(player.position, player_id)
    score -= _positional_score(opponent.position, opponent_id)
    return score


def _positional_score(position: Position, player_id: int) -> float:
    center = BOARD_SIZE // 2
    progress = abs(position.y - goal_row(opponent_of(player_id)))
    return progress * 2.0 - abs(position.x - center) * 0.5


def _move_score(from_pos: Position, to_pos: Position, player_id: int) -> float:
    """How much closer to the goal row (as the crow flies) + slight preference for the center"""
    target_row = goal_row(player_id)
    score = (abs(from_pos.y - target_row) - abs(to_pos.y - target_row)) * 10.0
    score -= abs(to_pos.x - BOARD_SIZE // 2) * 0.5
    if to_pos.x in (0, BOARD_SIZE - 1):
        score -= 1.0
    return score


def _wall_score(game: Game, player_id: int, wall: Wall) -> float:
    """Hurts the opponent more than it hurts us, and is placed close to the opponent."""
    opponent_id = opponent_of(player_id)
    player_pos = game.players[player_id].position
    opponent_pos = game.players[opponent_id].position

    after = game.board.copy()
    rules.apply_wall_placement(after, wall)

    opponent_delta = distance_to_goal(
        after, opponent_pos, opponent_id
    ) - distance_to_goal(game.board, opponent_pos, opponent_id)
    player_delta = distance_to_goal(after, player_pos, player_id) - distance_to_goal(
        game.board, player_pos, player_id
    )

    score = opponent_delta * 5.0 - player_delta * 3.0
    score -= (abs(wall.x - opponent_pos.x) + abs(wall.y - opponent_pos.y)) * 0.5
    return score


# --- CANDIDATES ---
def _legal_moves(game: Game, player_id: int) -> list[Position]:
    return sorted(
        rules.legal_moves(game.board, game.players, player_id),
        key=lambda position: (position.x, position.y),
    )


def _nearby_legal_walls(game: Game, player_id: int) -> list[Wall]:
    """Legal walls close to the opponent's pawn. Searching all ~128 walls on every node is far too slow."""
    if game.players[player_id].walls_remaining <= 0:
        return []
    opponent_pos = game.players[opponent_of(player_id)].position
    return [
        wall
        for wall in all_candidate_walls()
        if abs(wall.x - opponent_pos.x) + abs(wall.y - opponent_pos.y)
        <= WALL_SEARCH_RADIUS
        and rules.is_legal_wall_placement(game.board, game.players, wall)
    ]


def _candidate_actions(game: Game) -> list[Action]:
    """Pawn moves first (cheap, and usually the best) followed by the most promising walls."""
    player_id = game.current_player
    moves: list[Action] = [PawnMove(to) for to in _legal_moves(game, player_id)]
    walls = sorted(
        _nearby_legal_walls(game, player_id),
        key=lambda wall: _wall_score(game, player_id, wall),
        reverse=True,
    )
    return moves + [WallPlacement(wall) for wall in walls[:MAX_WALL_CANDIDATES]]


# --- DIFFICULTY LEVELS ---
def _easy_action(game: Game, player_id: int, rng: random.Random) -> Action:
    player = game.players[player_id]
    if player.walls_remaining > 0 and rng.random() < EASY_WALL_PROBABILITY:
        walls = sorted(
            rules.legal_wall_placements(game.board, game.players, player_id),
            key=lambda wall: (wall.orientation, wall.x, wall.y),
        )
        if walls:
            return WallPlacement(rng.choice(walls))

    moves = _legal_moves(game, player_id)
    if not moves:
        return _fallback_wall(game, player_id)
    best = max(
        moves,
        key=lambda to: _move_score(player.position, to, player_id) + rng.uniform(-1, 1),
    )
    return PawnMove(best)


def _medium_action(game: Game, player_id: int) -> Action:
    player = game.players[player_id]
    opponent_id = opponent_of(player_id)
    player_distance = distance_to_goal(game.board, player.position, player_id)
    opponent_distance = distance_to_goal(
        game.board, game.players[opponent_id].position, opponent_id
    )

    walls = _nearby_legal_walls(game, player_id)

    # Block: the opponent is close and ahead of us
    if opponent_distance <= DANGER_DISTANCE and opponent_distance < player_distance:
        blocking = _best_blocking_wall(game, player_id, walls)
        if blocking is not None:
            return WallPlacement(blocking)

    moves = _legal_moves(game, player_id)
    if not moves:
        return _fallback_wall(game, player_id)
    # follow the shortest path, ties broken by heading straight for the goal row
    best_move = max(
        moves,
        key=lambda to: (
            -distance_to_goal(game.board, to, player_id),
            _move_score(player.position, to, player_id),
        ),
    )

    # Rush: we are close and not behind
    if player_distance <= DANGER_DISTANCE and player_distance <= opponent_distance:
        return PawnMove(best_move)

    best_move_score = _move_score(player.position, best_move, player_id)
    if walls:
        best_wall = max(walls, key=lambda wall: _wall_score(game, player_id, wall))
        if _wall_score(game, player_id, best_wall) > best_move_score + 1:
            return WallPlacement(best_wall)
    return PawnMove(best_move)


def _best_blocking_wall(
    game: Game, player_id: int, walls: list[Wall]
) -> Optional[Wall]:
    """The wall that lengthens the opponent's shortest path the most (None if no wall lengthens it)"""
    opponent_id = opponent_of(player_id)
    opponent_pos = game.players[opponent_id].position
    current = distance_to_goal(game.board, opponent_pos, opponent_id)

    best_wall: Optional[Wall] = None
    best_increase = 0
    for wall in walls:
        after = game.board.copy()
        rules.apply_wall_placement(after, wall)
        increase = distance_to_goal(after, opponent_pos, opponent_id) - current
        if increase > best_increase:
            best_increase = increase
            best_wall = wall
    return best_wall


def _hard_action(game: Game, player_id: int, depth: int) -> Action:
    _, action = _minimax(game, max(depth, 1), -math.inf, math.inf, player_id)
    if action is None:
        return _fallback_wall(game, player_id)
    return action


def _minimax(
    game: Game, depth: int, alpha: float, beta: float, player_id: int
) -> tuple[float, Optional[Action]]:
    """
    Alpha-beta search. `player_id` is the player we are choosing for (the maximizing side);
    whose turn it is in the searched position is read from the game itself.
    """
    if depth == 0 or game.status == Status.FINISHED:
        return evaluate(game, player_id), None

    maximizing = game.current_player == player_id
    best_score = -math.inf if maximizing else math.inf
    best_action: Optional[Action] = None

    for action in _candidate_actions(game):
        score, _ = _minimax(game.simulate(action), depth - 1, alpha, beta, player_id)
        if maximizing:
            if score > best_score:
                best_score, best_action = score, action
            alpha = max(alpha, score)
        else:
            if score < best_score:
                best_score, best_action = score, action
            beta = min(beta, score)
        if beta <= alpha:
            break

    if best_action is None:
        # nothing to do in this position: judge it as it stands
        return evaluate(game, player_id), None
    return best_score, best_action


def _fallback_wall(game: Game, player_id: int) -> Action:
    """Pawn is stuck (boxed in by walls and the opponent): any legal wall will do."""
    if game.players[player_id].walls_remaining > 0:
        walls = rules.legal_wall_placements(game.board, game.players, player_id)
        if walls:
            return WallPlacement(min(walls, key=lambda wall: (wall.orientation, wall.x, wall.y)))
    raise GameStateError(f"Player {player_id} has no legal action.")
