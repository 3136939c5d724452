"""Database repositories."""

from app.db.repositories.training_log import TrainingLogRepository
from app.db.repositories.sparring_session import SparringSessionRepository

__all__ = [
    "TrainingLogRepository",
    "SparringSessionRepository",
]
