"""Business logic services."""

from app.services.training_log_service import TrainingLogService
from app.services.sparring_session_service import SparringSessionService
from app.services.statistics_service import StatisticsService

__all__ = [
    "TrainingLogService",
    "SparringSessionService",
    "StatisticsService",
]
