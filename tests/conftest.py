"""
Pytest will auto-discover / import this file called 'conftest.py'.
Fixtures shared by the test modules of multiple layers: test database sessions and player setups.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.database import _engine_kwargs
from src.db.schema import Base
from src.quoridor.player import Player
from src.quoridor.position import Position

# Same in-memory setup as the default app configuration, but a separate engine.
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make tests independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def other_session(db_session_repo: Session) -> Generator[Session, None, None]:
    """A second session on the same tables. Mocks a REST request and a relay socket working on the same room."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_players() -> Callable[..., list[Player]]:
    """Call the inner function with the positions of player 0 and player 1"""

    def _make_players(
        position_0: Position, position_1: Position, walls: int = 10
    ) -> list[Player]:
        return [Player(0, position_0, walls), Player(1, position_1, walls)]

    return _make_players
