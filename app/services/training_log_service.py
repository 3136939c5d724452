"""
Training log service.

Creates, edits and deletes training logs together with the sparring
sessions they own.

- Updating a log with a ``sessions`` list replaces all of its sessions,
  numbered ``1..n`` in the order given.
- Deleting a log deletes its sessions first, so statistics never see an
  orphaned session.
"""

import datetime
import logging

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.sparring_session import SparringSessionRepository
from app.db.repositories.training_log import TrainingLogRepository
from app.models.sparring_session import SparringSession
from app.models.training_log import TrainingLog
from app.schemas.training_log import SessionCreate, TrainingLogCreate, TrainingLogResponse, TrainingLogUpdate
from app.services.sparring_session_service import build_session, session_to_response

logger = logging.getLogger(__name__)


class TrainingLogService:
    """Service for training log business logic."""

    def __init__(self, session: Session):
        self.repository = TrainingLogRepository(session)
        self.session_repository = SparringSessionRepository(session)

    def create(self, user_id: str, data: TrainingLogCreate) -> TrainingLogResponse:
        entry = TrainingLog(user_id=user_id, date=data.date, duration_minutes=data.duration_minutes,
                            type=data.type.value, notes=data.notes, reflection=data.reflection,
                            tournament_name=data.tournament_name, weight_class=data.weight_class,
                            location=data.location,
                            competition_style=data.competition_style.value if data.competition_style else None, )
        entry = self.repository.create(entry)
        sessions = self._create_sessions(entry.id, data.sessions)
        return self._to_response(entry, sessions)

    def get_by_id(self, user_id: str, log_id: int) -> TrainingLogResponse:
        entry = self._get_owned_entry(user_id, log_id)
        return self._to_response(entry, self.session_repository.get_by_training_log(log_id))

    def list_recent(self, user_id: str, skip: int = 0, limit: int = 100, ) -> list[TrainingLogResponse]:
        entries = self.repository.get_recent_by_user(user_id, skip=skip, limit=limit)
        grouped = self.session_repository.get_by_training_logs([e.id for e in entries])
        return [self._to_response(e, grouped.get(e.id, [])) for e in entries]

    def update(self, user_id: str, log_id: int, data: TrainingLogUpdate, ) -> TrainingLogResponse:
        entry = self._get_owned_entry(user_id, log_id)

        if data.date is not None:
            entry.date = data.date
        if data.duration_minutes is not None:
            entry.duration_minutes = data.duration_minutes
        if data.type is not None:
            entry.type = data.type.value
        if data.notes is not None:
            entry.notes = data.notes
        if data.reflection is not None:
            entry.reflection = data.reflection
        if data.tournament_name is not None:
            entry.tournament_name = data.tournament_name
        if data.weight_class is not None:
            entry.weight_class = data.weight_class
        if data.location is not None:
            entry.location = data.location
        if data.competition_style is not None:
            entry.competition_style = data.competition_style.value

        entry.updated_at = datetime.datetime.utcnow()
        entry = self.repository.update(entry)

        if data.sessions is not None:
            removed = self.session_repository.delete_all_for_training_log(log_id)
            logger.debug("Replacing %d session(s) of training log %d", removed, log_id)
            sessions = self._create_sessions(log_id, data.sessions)
        else:
            sessions = self.session_repository.get_by_training_log(log_id)

        return self._to_response(entry, sessions)

    def delete(self, user_id: str, log_id: int) -> None:
        self._get_owned_entry(user_id, log_id)
        self.session_repository.delete_all_for_training_log(log_id)
        self.repository.delete(log_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _create_sessions(self, log_id: int, items: list[SessionCreate]) -> list[SparringSession]:
        if not items:
            return []
        rows = [build_session(log_id, number, item) for number, item in enumerate(items, start=1)]
        return self.session_repository.create_many(rows)

    def _get_owned_entry(self, user_id: str, log_id: int) -> TrainingLog:
        entry = self.repository.get_by_id(log_id)
        if not entry or entry.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Training log not found", )
        return entry

    @staticmethod
    def _to_response(entry: TrainingLog, sessions: list[SparringSession]) -> TrainingLogResponse:
        return TrainingLogResponse(id=entry.id, user_id=entry.user_id, date=entry.date,
                                   duration_minutes=entry.duration_minutes, type=entry.type, notes=entry.notes,
                                   reflection=entry.reflection, tournament_name=entry.tournament_name,
                                   weight_class=entry.weight_class, location=entry.location,
                                   competition_style=entry.competition_style, sparring_rounds=len(sessions),
                                   sessions=[session_to_response(s) for s in sessions],
                                   created_at=entry.created_at, updated_at=entry.updated_at, )
