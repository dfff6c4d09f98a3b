"""Generate database session"""

from typing import Generator

from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core import config
from src.db.schema import Base


def _engine_kwargs(url: str) -> dict:
    """An in-memory SQLite database only lives as long as its connection: share one connection across sessions/threads."""
    if url.startswith("sqlite") and ":memory:" in url:
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {}


engine = create_engine(
    config.DATABASE_URL, echo=config.DATABASE_ECHO, **_engine_kwargs(config.DATABASE_URL)
)
SessionLocal = sessionmaker(bind=engine)

# Ensure all tables are created
Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
