"""
Statistics service.

Loads a user's most recent training logs with their sessions, turns them
into immutable snapshot records, and hands the snapshot to
:func:`~app.scoring.statistics.compute_statistics`.

The repository fetch is not filtered by window or type: narrowing
happens once, inside the aggregator, on the snapshot it is given.
"""

import datetime
import logging
from typing import Optional

from pydantic import ValidationError
from sqlmodel import Session

from app.db.repositories.sparring_session import SparringSessionRepository
from app.db.repositories.training_log import TrainingLogRepository
from app.models.sparring_session import SparringSession
from app.models.training_log import TrainingLog
from app.schemas.statistics import StatisticsSummary, TimeWindow, TrainingTypeFilter
from app.schemas.training_log import TrainingLogRecord
from app.scoring.statistics import StatisticsConfig, compute_statistics

logger = logging.getLogger(__name__)


class StatisticsService:
    """Service for the statistics screen."""

    def __init__(self, session: Session, max_logs: int = 100, config: Optional[StatisticsConfig] = None, ):
        self.log_repository = TrainingLogRepository(session)
        self.session_repository = SparringSessionRepository(session)
        self.max_logs = max_logs
        self.config = config

    def get_statistics(self, user_id: str, window: TimeWindow, type_filter: TrainingTypeFilter,
                       now: Optional[datetime.datetime] = None, ) -> StatisticsSummary:
        records = self.load_snapshot(user_id)
        return compute_statistics(records, window, type_filter, now=now, config=self.config)

    def load_snapshot(self, user_id: str) -> list[TrainingLogRecord]:
        logs = self.log_repository.get_recent_by_user(user_id, limit=self.max_logs)
        grouped = self.session_repository.get_by_training_logs([log.id for log in logs])

        records: list[TrainingLogRecord] = []
        for log in logs:
            record = self._to_record(log, grouped.get(log.id, []))
            if record is not None:
                records.append(record)
        return records

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _to_record(log: TrainingLog, sessions: list[SparringSession]) -> Optional[TrainingLogRecord]:
        # Malformed sessions are dropped one by one inside TrainingLogRecord.
        try:
            return TrainingLogRecord(id=log.id, date=log.date, duration_minutes=log.duration_minutes or 0,
                                     type=log.type, sessions=sessions, )
        except ValidationError:
            logger.warning("Skipping malformed training log %s", log.id)
            return None
