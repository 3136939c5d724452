"""Logging setup shared by the API and the scripts."""

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from ``settings.LOG_LEVEL`` (or *level*)."""
    logging.basicConfig(level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
                        format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", )
