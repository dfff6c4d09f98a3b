"""Logging setup shared by the entrypoints (API app / scripts)."""

import logging

from src.core import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
