"""
Database initialization.

Creates all tables.  Use Alembic migrations for existing databases.
"""

import logging

from sqlmodel import SQLModel

from app.core.logging import configure_logging
from app.db.session import engine

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create all SQLModel tables."""

    # Import all models so SQLModel.metadata has them
    import app.db.base  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables created successfully")


if __name__ == "__main__":
    configure_logging()
    init_db()
