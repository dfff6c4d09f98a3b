"""
The rules engine: legality of pawn moves and wall placements, and the reachability checks backing them.
---

Every function in here is a pure predicate / query over an explicit board + the two players,
except `apply_wall_placement` which is the one (unvalidated) mutation.

Illegal input (out of bounds, occupied, blocked, ...) is answered with False rather than an exception.
Turning that into an error message is the job of the Game / Service layers.
"""

from collections import deque
from typing import Optional, Sequence

from src.quoridor.board import Board
from src.quoridor.player import Player, goal_row, opponent_of
from src.quoridor.position import BOARD_SIZE, Position
from src.quoridor.walls import Wall, all_candidate_walls

Players = Sequence[Player]


# --- PAWN MOVES ---
def is_legal_move(
    board: Board,
    players: Players,
    moving_player_id: int,
    from_pos: Position,
    to_pos: Position,
) -> bool:
    """
    Can the pawn standing on `from_pos` move to `to_pos`?
    ---

    1. Destination must be on the board and not occupied by either pawn.
    2. Orthogonal step: no wall in between.
    3. Straight jump (two cells in a line): the opponent stands in the middle, and no wall on either half of the jump.
    4. Diagonal jump: only as a fallback when the straight jump over an adjacent opponent is not available
       (off the board, occupied, or walled off). The destination must be next to the opponent, and no wall may block
       the way to the opponent or from the opponent to the destination.
    5. Anything else is illegal.
    """
    if not to_pos.is_within_bounds():
        return False
    if _is_occupied(players, to_pos):
        return False

    opponent_pos = players[opponent_of(moving_player_id)].position
    dx = abs(to_pos.x - from_pos.x)
    dy = abs(to_pos.y - from_pos.y)

    if dx + dy == 1:
        return not board.is_wall_between(from_pos, to_pos)

    if (dx, dy) in ((2, 0), (0, 2)):
        mid = Position((from_pos.x + to_pos.x) // 2, (from_pos.y + to_pos.y) // 2)
        if mid != opponent_pos:
            return False
        return not board.is_wall_between(
            from_pos, mid
        ) and not board.is_wall_between(mid, to_pos)

    if (dx, dy) == (1, 1):
        return _is_legal_diagonal_jump(board, players, from_pos, to_pos, opponent_pos)

    return False


def legal_moves(board: Board, players: Players, player_id: int) -> set[Position]:
    """Board has only 81 cells: brute force all of them instead of generating moves per direction."""
    from_pos = players[player_id].position
    return {
        Position(x, y)
        for x in range(BOARD_SIZE)
        for y in range(BOARD_SIZE)
        if is_legal_move(board, players, player_id, from_pos, Position(x, y))
    }


def _is_legal_diagonal_jump(
    board: Board,
    players: Players,
    from_pos: Position,
    to_pos: Position,
    opponent_pos: Position,
) -> bool:
    """Diagonal jumps are only a fallback for a straight jump that is not possible."""
    if not from_pos.is_adjacent(opponent_pos):
        return False
    # the destination sits beside the opponent (the diagonal cell 'behind' the mover does not count)
    if not opponent_pos.is_adjacent(to_pos):
        return False

    if _is_straight_jump_available(board, players, from_pos, opponent_pos):
        return False

    return not board.is_wall_between(
        from_pos, opponent_pos
    ) and not board.is_wall_between(opponent_pos, to_pos)


def _is_straight_jump_available(
    board: Board, players: Players, from_pos: Position, opponent_pos: Position
) -> bool:
    landing = opponent_pos.step(opponent_pos.x - from_pos.x, opponent_pos.y - from_pos.y)
    return (
        landing.is_within_bounds()
        and not _is_occupied(players, landing)
        and not board.is_wall_between(opponent_pos, landing)
    )


def _is_occupied(players: Players, position: Position) -> bool:
    return any(player.position == position for player in players)


# --- WALLS ---
def is_legal_wall_placement(board: Board, players: Players, wall: Wall) -> bool:
    """
    Can this wall be placed?
    ---

    1. Anchor within bounds (horizontal: x 0..7, y 1..8 / vertical: x 1..8, y 0..7)
    2. None of its two cells is taken already (overlap)
    3. It does not cross a wall of the other orientation in its middle point (intersection)
    4. Both players can still reach their goal row with the wall in place (path rule)

    NOTE: the path rule is tested on a copy of the board. The board passed in is never modified.
    """
    if not wall.is_within_bounds():
        return False

    if board.is_occupied_by_wall(wall):
        return False

    if _is_crossing(board, wall):
        return False

    scratch_board = board.copy()
    apply_wall_placement(scratch_board, wall)
    return all(
        has_path_to_goal(scratch_board, player.position, player.id)
        for player in players
    )


def apply_wall_placement(board: Board, wall: Wall) -> None:
    """Mutates the board. No validation: the AI search needs to simulate placements it already knows are legal."""
    board.place_wall(wall)


def legal_wall_placements(board: Board, players: Players, player_id: int) -> set[Wall]:
    """
    All legal walls on this board.

    NOTE: validation already checks both players' paths, so the result does not depend on `player_id`.
    Whether the player has any walls left to place is up to the caller.
    """
    del player_id
    return {
        wall
        for wall in all_candidate_walls()
        if is_legal_wall_placement(board, players, wall)
    }


def _is_crossing(board: Board, wall: Wall) -> bool:
    """A horizontal and a vertical wall may not cross each other at their shared middle point."""
    x, y = wall.x, wall.y
    if wall.is_horizontal:
        if 0 < y < BOARD_SIZE - 1:
            return board.has_vertical(x + 1, y - 1) and board.has_vertical(x + 1, y)
        return False

    if 0 < x < BOARD_SIZE - 1:
        return board.has_horizontal(x - 1, y + 1) and board.has_horizontal(x, y + 1)
    return False


# --- REACHABILITY ---
def has_path_to_goal(board: Board, position: Position, player_id: int) -> bool:
    """Breadth-first search: is any cell on the goal row reachable without crossing a wall? (pawns do not block)"""
    return shortest_path_length(board, position, player_id) is not None


def shortest_path_length(
    board: Board, position: Position, player_id: int
) -> Optional[int]:
    """Number of orthogonal steps to the nearest goal row cell. None if the goal row cannot be reached at all."""
    target_row = goal_row(player_id)
    visited: set[Position] = {position}
    queue: deque[tuple[Position, int]] = deque([(position, 0)])

    while queue:
        current, distance = queue.popleft()
        if current.y == target_row:
            return distance

        for neighbour in current.neighbours():
            if neighbour in visited or board.is_wall_between(current, neighbour):
                continue
            visited.add(neighbour)
            queue.append((neighbour, distance + 1))

    return None


# --- WIN CONDITION ---
def check_win_condition(players: Players, player_id: int) -> bool:
    return players[player_id].position.y == goal_row(player_id)
