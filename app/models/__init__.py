"""SQLModel database models."""

from app.models.training_log import TrainingLog
from app.models.sparring_session import SparringSession

__all__ = [
    "TrainingLog",
    "SparringSession",
]
