"""Implementation of (Game)Repository using SQLAlchemy"""

import secrets
import string

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core import config
from src.core.models import GameModel
from src.db.schema import DBGame

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_room_code(length: int = config.ROOM_CODE_LENGTH) -> str:
    """Short code players can share to join the same room, ex. 'K3Q9ZA'"""
    return "".join(secrets.choice(ROOM_CODE_ALPHABET) for _ in range(length))


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, room_code: str) -> GameModel | None:
        """Get game by room code, if record exists."""
        game_db = self._fetch_game(room_code)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, str]:
        """Store new game and return the stored data + newly created room code."""

        room_code = self._new_room_code()
        game_db = DBGame(
            room_code=room_code,
            history=game.history,
            registered_players=game.registered_players,
            current_player=game.current_player,
            status=game.status,
            ai_difficulty=game.ai_difficulty,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), room_code

    def update_game(self, room_code: str, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        game_db = self._fetch_game(room_code)
        if not game_db:
            return None
        # NOTE assign new containers: SQLAlchemy does not track in-place changes of JSON columns
        game_db.history = list(game.history)
        game_db.registered_players = dict(game.registered_players)
        game_db.current_player = game.current_player
        game_db.status = game.status
        game_db.ai_difficulty = game.ai_difficulty
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, room_code: str) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(room_code)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def list_games(self, status: str | None = None) -> list[tuple[str, GameModel]]:
        query = select(DBGame).order_by(DBGame.created_at)
        if status is not None:
            query = query.where(DBGame.status == status)
        return [
            (game_db.room_code, self._to_model(game_db))
            for game_db in self.db.scalars(query)
        ]

    def _fetch_game(self, room_code: str) -> DBGame | None:
        # populate_existing: another session (relay socket / request) may have updated the record since we last read it
        query = (
            select(DBGame)
            .where(DBGame.room_code == room_code)
            .execution_options(populate_existing=True)
        )
        return self.db.scalar(query)

    def _new_room_code(self) -> str:
        """Draw codes until one is not in use yet (36^6 options, so collisions are rare)"""
        while True:
            room_code = generate_room_code()
            if self._fetch_game(room_code) is None:
                return room_code

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            history=list(game_db.history),
            registered_players=dict(game_db.registered_players),
            current_player=game_db.current_player,
            status=game_db.status,
            ai_difficulty=game_db.ai_difficulty,
        )
