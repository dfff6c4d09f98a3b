"""Protocol repository (in-memory SQLite by default, any SQLAlchemy URL can be configured)"""

from typing import Protocol

from src.core.models import GameModel


class GameRepository(Protocol):
    """Persistence layer orchestration. Games are identified by their room code."""

    def get_game(self, room_code: str) -> GameModel | None:
        """Get game by room code, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, str]:
        """Store new game and return the stored data + newly created room code."""
        ...

    def update_game(self, room_code: str, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        ...

    def delete_game(self, room_code: str) -> GameModel | None:
        """Remove a game's record."""
        ...

    def list_games(self, status: str | None = None) -> list[tuple[str, GameModel]]:
        """All games (optionally only those with the given status), oldest first."""
        ...
