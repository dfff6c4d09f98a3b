"""
Runtime configuration.

Everything can be overridden through environment variables, the defaults are fine for local development and tests.
"""

import os

# Non-goal: game state does not need to survive a restart. In-memory SQLite is the default room store.
DATABASE_URL = os.getenv("QUORIDOR_DATABASE_URL", "sqlite:///:memory:")
DATABASE_ECHO = os.getenv("QUORIDOR_DATABASE_ECHO", "0").lower() in {"1", "true", "yes"}

LOG_LEVEL = os.getenv("QUORIDOR_LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = os.getenv("QUORIDOR_CORS_ORIGINS", "*").split(",")

# Search depth of the 'hard' AI. Every ply multiplies the work by (moves + sampled walls).
AI_DEPTH = int(os.getenv("QUORIDOR_AI_DEPTH", "2"))

ROOM_CODE_LENGTH = int(os.getenv("QUORIDOR_ROOM_CODE_LENGTH", "6"))
