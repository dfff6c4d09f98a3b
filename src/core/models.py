"""
Contract for the Service layer.

Domain level data model of information representing a Game.

"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GameModel:
    """Quoridor specific data + game handling info (players, etc.)

    The board itself is not stored: it is fully determined by the history, so the Game rebuilds it by replaying.
    """

    history: list[str]
    registered_players: dict[str, str]
    current_player: int
    status: str
    ai_difficulty: Optional[str] = None
